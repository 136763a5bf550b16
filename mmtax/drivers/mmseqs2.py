"""Interface to mmseqs2"""

import os

from dataclasses import dataclass, field

import mmtax
import mmtax.utils as utils
import mmtax.terminal as terminal
import mmtax.constants as constants

from mmtax.errors import ConfigError

__copyright__ = "Copyleft 2024-2026, The mmtax developers"
__credits__ = []
__license__ = "GPL 3.0"
__version__ = mmtax.__version__


@dataclass
class StepResult:
    """What happened when a single MMseqs2 subcommand was run.

    Attributes
    ----------
    name : str
        Name of the step, one of the keys of `constants.pipeline_steps`.

    cmdline : list of str
        The command line that was run.

    return_code : int
        Exit code of the program.

    log_file_path : str
        Where the stdout/stderr of the program went.

    output_path : str
        The main output the step was supposed to produce.
    """

    name: str
    cmdline: list = field(default_factory=list)
    return_code: int = 0
    log_file_path: str = None
    output_path: str = None

    @property
    def failed(self):
        return self.return_code != 0


class MMseqs2:
    """ Driver for the MMseqs2 subcommands of the contig taxonomy pipeline

    Every `run_*` method runs exactly one MMseqs2 subcommand, sends its output to its own log
    file in `log_dir`, and returns a `StepResult`. None of them raise if the program exits
    with a non-zero code: it is the caller's job to look at the result and decide.

    Parameters
    ==========
    log_dir : str
        Directory for the log files of individual subcommands
    program_name : str, 'mmseqs'
        The program name that gives access to MMseqs2 functionality
    num_threads : int, 28
        Number of threads for subcommands that can use them
    max_memory : int, 112
        Memory limit in gigabytes for `mmseqs taxonomy`
    sensitivity : float, 3
        Sensitivity (`-s`) for `mmseqs taxonomy`
    skip_sanity_check : bool, False
        Do not look for the program on the PATH during initialization
    """

    def __init__(
        self,
        log_dir,
        program_name=constants.default_mmseqs_program_name,
        num_threads=constants.default_num_threads,
        max_memory=constants.default_max_memory_gb,
        sensitivity=constants.default_sensitivity,
        run=None,
        progress=None,
        skip_sanity_check=False):

        self.log_dir = log_dir
        self.program_name = program_name
        self.tested_versions = constants.mmseqs_tested_versions
        self.installed_version = None

        self.num_threads = num_threads
        self.max_memory = max_memory
        self.sensitivity = sensitivity

        self.run = run or terminal.Run()
        self.progress = progress or terminal.Progress()

        if not skip_sanity_check:
            self.sanity_check()


    def sanity_check(self):
        utils.is_program_exists(self.program_name)

        if not isinstance(self.num_threads, int) or self.num_threads < 1:
            raise ConfigError("The number of threads must be a positive integer. `%s` is not it :/" % str(self.num_threads))

        if not isinstance(self.max_memory, int) or self.max_memory < 1:
            raise ConfigError("The memory limit must be a positive integer number of gigabytes. `%s` is not it :/" % str(self.max_memory))

        if self.sensitivity <= 0:
            raise ConfigError("Sensitivity must be a positive number. `%s` is not it :/" % str(self.sensitivity))


    def check_programs(self, quiet=False):
        """Finds out the version of MMseqs2 installed on the system, and warns if it is not a tested one"""

        utils.is_program_exists(self.program_name)

        output, ret_code = utils.get_command_output_from_shell([self.program_name, 'version'])

        lines = output.decode('utf-8', errors='replace').strip().split('\n') if output else []
        if ret_code or not lines or not lines[0].strip():
            version_found = 'Unknown'
            self.run.warning("mmtax failed to learn the version of %s installed on this system :/ It will "
                             "continue as if nothing happened." % self.program_name)
        else:
            version_found = lines[0].strip()
            if not quiet:
                self.run.info("%s version found" % self.program_name, version_found, mc='green', nl_after=1)

        if version_found != 'Unknown' and version_found not in self.tested_versions:
            self.run.warning(
                "The version of %s installed on your system ('%s') "
                "is not one of those that this driver was tested with. "
                "mmtax will continue to try to run everything as if this didn't happen. "
                "If you see an unexpected error, please consider installing one of these versions "
                "of MMseqs2 from %s: '%s'" % (self.program_name, version_found, constants.mmseqs_releases_url,
                                              ', '.join(self.tested_versions)))

        self.installed_version = version_found

        return version_found


    def get_log_file_path(self, step_name):
        return os.path.join(self.log_dir, constants.pipeline_steps[step_name][0])


    def run_step(self, step_name, cmd_line, output_path, progress_msg):
        log_file_path = self.get_log_file_path(step_name)

        self.progress.new('MMseqs2 %s' % step_name)
        self.progress.update(progress_msg)
        try:
            ret_val = utils.run_command(cmd_line, log_file_path)
        finally:
            self.progress.end()

        return StepResult(name=step_name,
                          cmdline=utils.format_cmdline(cmd_line),
                          return_code=ret_val,
                          log_file_path=log_file_path,
                          output_path=output_path)


    def run_createdb(self, fasta_file_path, seq_db_path):
        """ Runs createdb subcommand, creating a seqDB from contigs

        Parameters
        ==========
        fasta_file_path: str
            FASTA file input is transformed into a database
        seq_db_path: str
            Path prefix of the output database (MMseqs2 creates a set of files that start with it)

        Returns
        =======
        result: StepResult
        """

        self.run.info_single("Creating MMseqs2 database from contigs...", nl_before=1)
        self.run.info('[MMseqs2 createdb] Input FASTA file path', fasta_file_path)
        self.run.info('[MMseqs2 createdb] Output sequence database', seq_db_path)
        self.run.info('[MMseqs2 createdb] Log file path', self.get_log_file_path('createdb'))

        cmd_line = [self.program_name,
                    'createdb',
                    fasta_file_path,
                    seq_db_path]

        return self.run_step('createdb', cmd_line, seq_db_path, 'Creating sequence database from FASTA input...')


    def run_taxonomy(self, query_db_path, target_db_path, result_db_path, tmp_dir):
        """ Runs taxonomy subcommand, assigning an LCA to each query sequence

        Parameters
        ==========
        query_db_path: str
            mmseqs database of contigs
        target_db_path: str
            mmseqs sequence-taxonomy database to search against
        result_db_path: str
            Path prefix for the LCA result database
        tmp_dir: str
            Scratch directory MMseqs2 can use as it pleases

        Returns
        =======
        result: StepResult
        """

        max_memory = '%dG' % self.max_memory
        sensitivity = '%g' % self.sensitivity

        self.run.info_single("Running taxonomy assignment...", nl_before=1)
        self.run.info('[MMseqs2 taxonomy] Query database', query_db_path)
        self.run.info('[MMseqs2 taxonomy] Target database', target_db_path)
        self.run.info('[MMseqs2 taxonomy] Output LCA database', result_db_path)
        self.run.info('[MMseqs2 taxonomy] Sensitivity', sensitivity)
        self.run.info('[MMseqs2 taxonomy] Number of threads', self.num_threads)
        self.run.info('[MMseqs2 taxonomy] Max memory', max_memory)
        self.run.info('[MMseqs2 taxonomy] Log file path', self.get_log_file_path('taxonomy'))

        cmd_line = [self.program_name,
                    'taxonomy',
                    query_db_path,
                    target_db_path,
                    result_db_path,
                    tmp_dir,
                    '-s', sensitivity,
                    '--threads', self.num_threads,
                    '--max-memory', max_memory]

        return self.run_step('taxonomy', cmd_line, result_db_path, 'Assigning taxonomy to contigs (this may take a while)...')


    def run_createtsv(self, query_db_path, result_db_path, tsv_file_path):
        """ Runs createtsv subcommand, turning the LCA result database into a TAB-delimited file

        Parameters
        ==========
        query_db_path: str
            mmseqs database of contigs
        result_db_path: str
            mmseqs LCA result database
        tsv_file_path: str
            Output file with one line per contig: name, taxid, rank, taxon name

        Returns
        =======
        result: StepResult
        """

        self.run.info_single("Creating TSV output...", nl_before=1)
        self.run.info('[MMseqs2 createtsv] Output TSV file', tsv_file_path)
        self.run.info('[MMseqs2 createtsv] Log file path', self.get_log_file_path('createtsv'))

        cmd_line = [self.program_name,
                    'createtsv',
                    query_db_path,
                    result_db_path,
                    tsv_file_path]

        return self.run_step('createtsv', cmd_line, tsv_file_path, 'Exporting LCA results as TSV...')


    def run_taxonomyreport(self, target_db_path, result_db_path, report_file_path, krona=False):
        """ Runs taxonomyreport subcommand

        Parameters
        ==========
        target_db_path: str
            The sequence-taxonomy database `run_taxonomy` searched against
        result_db_path: str
            mmseqs LCA result database
        report_file_path: str
            Output report
        krona: bool, False
            Generate an interactive Krona HTML report (`--report-mode 1`) instead of the
            Kraken-style plain-text report Pavian can read

        Returns
        =======
        result: StepResult
        """

        step_name = 'krona_report' if krona else 'report'

        self.run.info('[MMseqs2 taxonomyreport] %s report' % ('Krona' if krona else 'Pavian'), report_file_path)

        cmd_line = [self.program_name,
                    'taxonomyreport',
                    target_db_path,
                    result_db_path,
                    report_file_path]

        if krona:
            cmd_line.extend(['--report-mode', constants.REPORT_MODE_KRONA])

        return self.run_step(step_name, cmd_line, report_file_path, 'Creating %s report...' % ('Krona' if krona else 'Pavian'))
