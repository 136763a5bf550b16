# -*- coding: utf-8
# pylint: disable=line-too-long
"""Taxonomy of assembled contigs with MMseqs2.

The pipeline here runs `mmseqs createdb`, `mmseqs taxonomy`, `mmseqs createtsv`, summarizes
the LCA labels in the resulting table, and finishes with two `mmseqs taxonomyreport` runs,
one for Pavian and one for Krona. Steps run one after the other, and the first one that fails
stops everything. The scratch directory MMseqs2 uses is removed no matter how the run ends.
"""

import os

from dataclasses import dataclass

import mmtax
import mmtax.terminal as terminal
import mmtax.constants as constants
import mmtax.filesnpaths as filesnpaths
import mmtax.taxonomyops as taxonomyops

from mmtax.drivers.mmseqs2 import MMseqs2
from mmtax.errors import ConfigError, CommandError, FilesNPathsError
from mmtax.utils.system import is_program_exists

__copyright__ = "Copyleft 2024-2026, The mmtax developers"
__credits__ = []
__license__ = "GPL 3.0"
__version__ = mmtax.__version__


run = terminal.Run()
progress = terminal.Progress()
P = terminal.pluralize


@dataclass(frozen=True)
class RunConfig:
    """Everything a single run needs to know. Built once, never changed."""

    contigs_fasta: str
    mmseqs_db: str
    output_dir: str
    num_threads: int = constants.default_num_threads
    max_memory: int = constants.default_max_memory_gb
    sensitivity: float = constants.default_sensitivity
    program_name: str = constants.default_mmseqs_program_name

    @classmethod
    def from_args(cls, args):
        A = lambda x, default=None: args.__dict__[x] if x in args.__dict__ and args.__dict__[x] is not None else default

        config = cls(contigs_fasta=A('contigs_fasta'),
                     mmseqs_db=A('mmseqs_db'),
                     output_dir=A('output_dir'),
                     num_threads=A('num_threads', constants.default_num_threads),
                     max_memory=A('max_memory', constants.default_max_memory_gb),
                     sensitivity=A('sensitivity', constants.default_sensitivity),
                     program_name=A('program_name', constants.default_mmseqs_program_name))

        for param in ['contigs_fasta', 'mmseqs_db', 'output_dir']:
            if not getattr(config, param):
                raise ConfigError(f"Required arguments missing: mmtax needs a value for `{param.replace('_', '-')}`.")

        return config


    @property
    def logs_dir(self):
        return os.path.join(self.output_dir, constants.LOGS_DIR_NAME)

    @property
    def tmp_dir(self):
        return os.path.join(self.output_dir, constants.TMP_DIR_NAME)

    @property
    def contigs_db_path(self):
        return os.path.join(self.output_dir, constants.CONTIGS_DB_NAME)

    @property
    def lca_result_db_path(self):
        return os.path.join(self.output_dir, constants.LCA_RESULT_DB_NAME)

    @property
    def lca_tsv_path(self):
        return os.path.join(self.output_dir, constants.LCA_TSV_FILE_NAME)

    @property
    def lca_counts_path(self):
        return os.path.join(self.output_dir, constants.LCA_COUNTS_FILE_NAME)

    @property
    def pavian_report_path(self):
        return os.path.join(self.output_dir, constants.PAVIAN_REPORT_FILE_NAME)

    @property
    def krona_report_path(self):
        return os.path.join(self.output_dir, constants.KRONA_REPORT_FILE_NAME)


class ContigTaxonomy:
    """Runs the contig taxonomy pipeline for a single `RunConfig`.

    Parameters
    ==========
    config : RunConfig
        Paths and parameters for this run
    run, progress : terminal.Run, terminal.Progress
        Terminal output
    """

    def __init__(self, config, run=run, progress=progress):
        self.config = config
        self.run = run
        self.progress = progress

        self.driver = None
        self.step_results = []
        self.timer = None


    def sanity_check(self):
        """Make sure everything is in place before anything is created or run."""

        is_program_exists(self.config.program_name)

        filesnpaths.is_regular_file(self.config.contigs_fasta)

        if not filesnpaths.is_dir_exists(self.config.mmseqs_db, dont_raise=True):
            raise FilesNPathsError(f"MMseqs database directory not found: '{self.config.mmseqs_db}'")

        filesnpaths.check_output_directory(self.config.output_dir)

        self.run.info_single("MMseqs2 installation found.", mc='green')

        self.driver = MMseqs2(self.config.logs_dir,
                              program_name=self.config.program_name,
                              num_threads=self.config.num_threads,
                              max_memory=self.config.max_memory,
                              sensitivity=self.config.sensitivity,
                              run=self.run,
                              progress=self.progress)

        self.driver.check_programs()


    def prepare_output_directories(self):
        self.run.info_single("Creating output directory structure...", nl_before=1)

        for dir_path in [self.config.output_dir, self.config.logs_dir]:
            filesnpaths.gen_output_directory(dir_path, progress=self.progress)

        self.run.info_single("Directories created successfully.", mc='green')


    def check_step_result(self, result):
        """Stop everything if a step did not go well"""

        self.step_results.append(result)
        self.timer.make_checkpoint(result.name)

        if result.failed:
            raise CommandError(f"{constants.pipeline_steps[result.name][1]}. MMseqs2 exited with code "
                               f"{result.return_code}. Please look at the log file at '{result.log_file_path}' "
                               f"to see what went wrong.")

        return result


    def summarize_hits(self):
        taxonomyops.summarize_lca_tsv(self.config.lca_tsv_path, self.config.lca_counts_path, run=self.run)
        self.timer.make_checkpoint('summary')


    def process(self):
        self.run.info_single("Starting taxonomic assignment pipeline using MMseqs2...", mc='green', nl_after=1)

        self.timer = terminal.Timer()

        self.run.info('contigs_fasta', self.config.contigs_fasta)
        self.run.info('mmseqs_db', self.config.mmseqs_db)
        self.run.info('output_dir', self.config.output_dir)
        self.run.info('num_threads', self.config.num_threads)
        self.run.info('max_memory', self.config.max_memory)
        self.run.info('sensitivity', self.config.sensitivity, nl_after=1)

        self.sanity_check()
        self.prepare_output_directories()

        c = self.config
        with filesnpaths.ScratchDirectory(c.tmp_dir, run=self.run) as tmp_dir:
            self.check_step_result(self.driver.run_createdb(c.contigs_fasta, c.contigs_db_path))
            self.check_step_result(self.driver.run_taxonomy(c.contigs_db_path, c.mmseqs_db, c.lca_result_db_path, tmp_dir))
            self.check_step_result(self.driver.run_createtsv(c.contigs_db_path, c.lca_result_db_path, c.lca_tsv_path))

            self.summarize_hits()

            self.run.info_single("Creating taxonomy reports...", nl_before=1)
            self.check_step_result(self.driver.run_taxonomyreport(c.mmseqs_db, c.lca_result_db_path, c.pavian_report_path))
            self.check_step_result(self.driver.run_taxonomyreport(c.mmseqs_db, c.lca_result_db_path, c.krona_report_path, krona=True))

        self.report()

        return self.step_results


    def report(self):
        c = self.config

        self.timer.gen_report('Step timings', run=self.run)

        num_contigs = filesnpaths.get_num_lines_in_file(c.lca_tsv_path)
        self.run.info_single(f"Pipeline completed successfully in {self.timer.time_elapsed()} "
                             f"for {P('contig', num_contigs)}!", mc='green', nl_after=1)

        self.run.info('Output files are in', c.output_dir)
        self.run.info('Taxonomy assignments', c.lca_tsv_path)
        self.run.info('Contig hit summary', c.lca_counts_path)
        self.run.info('Pavian report', c.pavian_report_path)
        self.run.info('Krona report', c.krona_report_path)
        self.run.info('Logs are in', c.logs_dir, nl_after=1)
