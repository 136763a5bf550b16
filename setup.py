import os
import re
import glob

from setuptools import setup, find_packages

# mmtax programs
scripts = glob.glob("bin/mmtax-*")

with open(os.path.join(os.path.dirname(os.path.abspath(__file__)), 'mmtax', '__init__.py')) as f:
    version = re.search(r"^mmtax_version\s*=\s*['\"]([^'\"]+)['\"]", f.read(), re.M).group(1)

setup(
    name="mmtax",
    version=version,
    description="Taxonomic assignment of assembled contigs with MMseqs2",
    license="GPL 3.0",
    packages=find_packages(),
    scripts=scripts,
    python_requires=">=3.10",
    install_requires=[
        "colored",
        "rich-argparse",
        "tabulate",
    ],
    extras_require={
        "test": ["pytest"],
    },
)
