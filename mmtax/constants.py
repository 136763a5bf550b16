# -*- coding: utf-8
# pylint: disable=line-too-long
"""Constants."""

__copyright__ = "Copyleft 2024-2026, The mmtax developers"
__credits__ = []
__license__ = "GPL 3.0"


# default run parameters. these are the values the original lab pipeline was
# tuned for on a 28-core node with 128G of RAM.
default_num_threads = 28
default_max_memory_gb = 112
default_sensitivity = 3

default_mmseqs_program_name = 'mmseqs'

# the MMseqs2 releases the driver was tested with, in the form `mmseqs version`
# reports them for release builds (source builds report a commit hash).
mmseqs_tested_versions = ['13.45111', '14.7e284', '15.6f452', '16.747c6', '17.b804f']
mmseqs_releases_url = 'https://github.com/soedinglab/MMseqs2/releases'

# everything is relative to the output directory
LOGS_DIR_NAME = 'logs'
TMP_DIR_NAME = 'tmp'

CONTIGS_DB_NAME = 'contig'
LCA_RESULT_DB_NAME = 'lca_result'
LCA_TSV_FILE_NAME = 'lca.tsv'
LCA_COUNTS_FILE_NAME = 'contigs_lca.tsv'
PAVIAN_REPORT_FILE_NAME = 'report.txt'
KRONA_REPORT_FILE_NAME = 'report_krona.html'

# `taxonomyreport --report-mode` values
REPORT_MODE_KRONA = 1

# the column in the output of `mmseqs createtsv` for a taxonomy result
# that holds the taxon name (0-based): query, taxid, rank, name, [lineage]
LCA_TSV_TAXON_NAME_COLUMN = 3

# step name -> (log file name, message to show when it fails)
pipeline_steps = {
    'createdb':     ('createdb.log', 'Failed to create MMseqs2 database'),
    'taxonomy':     ('taxonomy.log', 'Taxonomy assignment failed'),
    'createtsv':    ('createtsv.log', 'TSV creation failed'),
    'report':       ('report.log', 'Report creation failed'),
    'krona_report': ('krona_report.log', 'Krona report creation failed'),
}

pretty_names = {
    'contigs_fasta': 'Contigs FASTA',
    'mmseqs_db': 'MMseqs2 database',
    'output_dir': 'Output directory',
    'num_threads': 'Number of threads',
    'max_memory': 'Max memory (GB)',
    'sensitivity': 'Sensitivity',
    'program_name': 'MMseqs2 program',
}


def get_pretty_name(key):
    if key in pretty_names:
        return pretty_names[key]
    else:
        return key
