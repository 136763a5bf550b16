# -*- coding: utf-8
# pylint: disable=line-too-long
"""Utility functions, re-exported from their submodules for `import mmtax.utils as utils`"""

from mmtax.utils.commandline import (
    format_cmdline,
    quote_cmdline,
    run_command,
    get_command_output_from_shell,
)
from mmtax.utils.system import is_program_exists

__copyright__ = "Copyleft 2024-2026, The mmtax developers"
__credits__ = []
__license__ = "GPL 3.0"
