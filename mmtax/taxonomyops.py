# -*- coding: utf-8
# pylint: disable=line-too-long
"""Summaries of MMseqs2 LCA assignments.

The functions here work on the output of `mmseqs createtsv` for a taxonomy result
database, where each line describes a single contig:

    contig_name <TAB> taxid <TAB> rank <TAB> taxon_name [<TAB> lineage]
"""

import mmtax
import mmtax.terminal as terminal
import mmtax.constants as constants
import mmtax.filesnpaths as filesnpaths

from collections import Counter

from mmtax.errors import FilesNPathsError

__copyright__ = "Copyleft 2024-2026, The mmtax developers"
__credits__ = []
__license__ = "GPL 3.0"


run = terminal.Run()
pp = terminal.pretty_print
printable = lambda label: label.encode('utf-8', errors='surrogateescape').decode('utf-8', errors='replace')


def count_lca_labels(lca_tsv_path, column=constants.LCA_TSV_TAXON_NAME_COLUMN):
    """Count how many contigs ended up with each taxon name.

    Lines without a single TAB count as a whole, lines with TABs but not enough columns
    count towards the empty label (this is what `cut -f4` would do). Bytes that are not
    valid UTF-8 are kept as they are, and written back unchanged by `store_lca_counts`.

    Returns
    =======
    counts : collections.Counter
        taxon name -> number of contigs
    """

    filesnpaths.is_regular_file(lca_tsv_path)

    counts = Counter()

    try:
        with open(lca_tsv_path, 'r', encoding='utf-8', errors='surrogateescape') as lca_tsv:
            for line in lca_tsv:
                line = line.rstrip('\n')
                if '\t' not in line:
                    counts[line] += 1
                    continue

                fields = line.split('\t')
                counts[fields[column] if len(fields) > column else ''] += 1
    except OSError as e:
        raise FilesNPathsError(f"Hit analysis failed: mmtax could not read the LCA table at '{lca_tsv_path}' ({e}).")

    return counts


def sort_lca_counts(counts):
    """Most frequent label first. Labels with the same count are in ascending alphabetical order."""

    return sorted(counts.items(), key=lambda item: (-item[1], item[0]))


def store_lca_counts(counts, output_file_path):
    """Write `count<TAB>label` lines, sorted with `sort_lca_counts`"""

    filesnpaths.is_output_file_writable(output_file_path)

    try:
        with open(output_file_path, 'w', encoding='utf-8', errors='surrogateescape') as output:
            for label, count in sort_lca_counts(counts):
                output.write('%d\t%s\n' % (count, label))
    except OSError as e:
        raise FilesNPathsError(f"Hit analysis failed: mmtax could not write to '{output_file_path}' ({e}).")

    return output_file_path


def summarize_lca_tsv(lca_tsv_path, output_file_path, run=run, num_top_labels=10):
    """Count LCA labels in `lca_tsv_path`, store the counts, and show the most common ones."""

    run.info_single("Analyzing contig hits...", nl_before=1)

    counts = count_lca_labels(lca_tsv_path)
    store_lca_counts(counts, output_file_path)

    num_contigs = sum(counts.values())
    run.info('Contigs with an LCA assignment', num_contigs)
    run.info('Distinct LCA labels', len(counts))
    run.info('Contig hit summary', output_file_path)

    if num_contigs and num_top_labels and run.verbose:
        table = [[printable(label) or '(empty)', pp(count), '%.2f%%' % (count * 100 / num_contigs)] for label, count in sort_lca_counts(counts)[:num_top_labels]]
        run.warning(None, header='MOST FREQUENT LCA LABELS', lc='yellow', nl_before=1)
        mmtax.TABULATE(table, ['taxon', 'contigs', 'percent'])

    return counts
