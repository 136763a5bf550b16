# -*- coding: utf-8
# pylint: disable=line-too-long

"""Global settings, the arguments dictionary, and version reporting."""

mmtax_version = '1.2.0'

major_python_version_required = 3
minor_python_version_required = 10

import sys
import platform

# make sure mmtax runs in the right Python environment:
if not (sys.version_info.major == major_python_version_required and sys.version_info.minor >= minor_python_version_required):
    sys.stderr.write("\n========================================================\n"
                     "SOMETHING BAD HAPPENED AND IT NEEDS YOUR ATTENTION\n"
                     "========================================================\n"
                     "The environment in which you're running mmtax has a Python \n"
                     "version that is not compatible with the Python version \n"
                     "requirement of mmtax. Here is a summary: \n\n"
                     f"    mmtax version you have ...............: {mmtax_version}\n"
                     f"    Python version you have ..............: {platform.python_version()}\n"
                     f"    Python version mmtax wants ...........: {major_python_version_required}.{minor_python_version_required}.*\n\n")
    sys.exit(1)

import copy

from tabulate import tabulate

import mmtax.constants as constants


# very handy global settings depending on sys.argv content
DEBUG = '--debug' in sys.argv
QUIET = '--quiet' in sys.argv
NO_PROGRESS = '--no-progress' in sys.argv


def TABULATE(table, header, numalign="right", max_width=0):
    """Encoding-safe `tabulate` that writes to stderr along with every other terminal output"""

    tablefmt = "fancy_grid" if sys.stderr.encoding and sys.stderr.encoding.upper() == "UTF-8" else "grid"
    table = tabulate(table, headers=header, tablefmt=tablefmt, numalign=numalign)

    if max_width:
        # let's don't print everything if things need to be cut.
        prefix = " // "
        lines_in_table = table.split('\n')
        if len(lines_in_table[0]) + len(prefix) + 2 > max_width:
            table = '\n'.join([l[:max_width - len(prefix)] + prefix + l[-2:] for l in lines_in_table])

    sys.stderr.write(table + '\n')


# a comprehensive arguments dictionary that provides easy access from various programs that interface mmtax modules:
D = {
    'contigs-fasta': (
            ['-c', '--contigs-fasta'],
            {'metavar': 'FASTA',
             'required': True,
             'help': "Path to the contigs FASTA file from your de novo assembly (e.g., `contigs.fasta` from SPAdes "
                     "or `final.contigs.fa` from MEGAHIT)."}
                ),
    'mmseqs-db': (
            ['-d', '--mmseqs-db'],
            {'metavar': 'DB_PATH',
             'required': True,
             'help': "Path to an MMseqs2 sequence-taxonomy database (for instance, one you have set up with "
                     "`mmseqs databases UniRef90 ...`)."}
                ),
    'output-dir': (
            ['-o', '--output-dir'],
            {'metavar': 'DIR_PATH',
             'required': True,
             'type': str,
             'help': "Directory path for output files. It will be created if it does not exist, and it is OK if "
                     "it already does."}
                ),
    'num-threads': (
            ['-t', '--num-threads'],
            {'metavar': 'NUM_THREADS',
             'default': constants.default_num_threads,
             'help': "Number of threads MMseqs2 should use. It is a good idea to not exceed the number of CPUs / "
                     "cores on your system."}
                ),
    'max-memory': (
            ['-m', '--max-memory'],
            {'metavar': 'GB',
             'default': constants.default_max_memory_gb,
             'help': "Maximum amount of memory in gigabytes MMseqs2 is allowed to use during taxonomy assignment. "
                     "MMseqs2 will split the target database to stay within this limit."}
                ),
    'sensitivity': (
            ['-s', '--sensitivity'],
            {'metavar': 'FLOAT',
             'default': constants.default_sensitivity,
             'help': "MMseqs2 search sensitivity (`-s`). Lower is faster, higher is more sensitive. 1.0 is the "
                     "fastest, 7.5 is the most sensitive."}
                ),
}


# two functions that works with the dictionary above.
def A(param_id, exclude_param=None):
    if exclude_param:
        return [p for p in D[param_id][0] if p != exclude_param]
    else:
        return D[param_id][0]

def K(param_id, params_dict={}):
    kwargs = copy.deepcopy(D[param_id][1])
    for key in params_dict:
        kwargs[key] = params_dict[key]

    return kwargs


__version__ = mmtax_version


def print_version(run=None):
    from mmtax.terminal import Run

    run = run or Run()
    run.info("mmtax", "v%s" % __version__, mc='green')
    run.info("Python", platform.python_version(), mc='cyan', nl_after=1)
