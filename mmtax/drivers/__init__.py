"""Drivers for the external programs mmtax relies on"""

from mmtax.drivers.mmseqs2 import MMseqs2, StepResult
