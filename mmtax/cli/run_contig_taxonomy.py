#!/usr/bin/env python
# -*- coding: utf-8

import sys

import mmtax
import mmtax.terminal as terminal

from mmtax.argparse import ArgumentParser, positive_int, positive_float
from mmtax.contigtaxonomy import RunConfig, ContigTaxonomy
from mmtax.errors import MMTaxError

__copyright__ = "Copyleft 2024-2026, The mmtax developers"
__credits__ = []
__license__ = "GPL 3.0"
__version__ = mmtax.__version__
__description__ = ("Assign taxonomy to contigs from a de novo assembly with MMseqs2. This program "
                   "creates an MMseqs2 database from your contigs, runs `mmseqs taxonomy` against a "
                   "sequence-taxonomy database, exports the LCA of each contig as a TAB-delimited file, "
                   "counts how many contigs ended up with each taxon, and generates a Pavian and a "
                   "Krona report.")


@terminal.time_program
def main(argv=None):
    args = get_args(argv)

    try:
        config = RunConfig.from_args(args)
        ContigTaxonomy(config).process()
    except MMTaxError as e:
        sys.stderr.write(str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        sys.stderr.write("\nInterrupted. Bye.\n")
        sys.exit(1)


def get_args(argv=None):
    parser = ArgumentParser(description=__description__, prog='mmtax-run-contig-taxonomy')

    groupA = parser.add_argument_group('INPUT', "Your contigs, and the MMseqs2 database to classify them against.")
    groupA.add_argument(*mmtax.A('contigs-fasta'), **mmtax.K('contigs-fasta'))
    groupA.add_argument(*mmtax.A('mmseqs-db'), **mmtax.K('mmseqs-db'))

    groupB = parser.add_argument_group('OUTPUT', "Where everything goes. Logs for each MMseqs2 step will be "
                                       "in a `logs` directory in it.")
    groupB.add_argument(*mmtax.A('output-dir'), **mmtax.K('output-dir'))

    groupC = parser.add_argument_group('PERFORMANCE', "Knobs that are passed on to MMseqs2.")
    groupC.add_argument(*mmtax.A('num-threads'), **mmtax.K('num-threads', {'type': positive_int}))
    groupC.add_argument(*mmtax.A('max-memory'), **mmtax.K('max-memory', {'type': positive_int}))
    groupC.add_argument(*mmtax.A('sensitivity'), **mmtax.K('sensitivity', {'type': positive_float}))

    return parser.get_args(parser, argv)


if __name__ == '__main__':
    main()
