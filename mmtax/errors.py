# -*- coding: utf-8
# pylint: disable=line-too-long

"""Exceptions"""

import re
import sys
import textwrap
import traceback

import mmtax
from mmtax.ttycolors import color_text

__copyright__ = "Copyleft 2024-2026, The mmtax developers"
__credits__ = []
__license__ = "GPL 3.0"


def remove_spaces(text):
    """Collapses runs of spaces that multi-line string literals leave behind"""

    return re.sub(" {2,}", " ", text) if text else ""


class MMTaxError(Exception, object):
    def __init__(self, e=None):
        Exception.__init__(self)
        return

    def __str__(self):
        max_len = max([len(l) for l in textwrap.fill(textwrap.dedent(self.e), 80).split('\n')])
        error_lines = ['%s%s' % (l, ' ' * (max_len - len(l))) for l in textwrap.fill(textwrap.dedent(self.e), 80).split('\n')]

        error_message = ['%s: %s' % (color_text(self.error_type, 'red'), error_lines[0])]
        for error_line in error_lines[1:]:
            error_message.append('%s%s' % (' ' * (len(self.error_type) + 2), error_line))

        if mmtax.DEBUG:
            exc_type, exc_value, exc_traceback = sys.exc_info()

            sep = color_text('=' * 80, 'red')

            sys.stderr.write(color_text('\nTraceback for debugging\n', 'red'))
            sys.stderr.write(sep + '\n')
            traceback.print_tb(exc_traceback, limit=100, file=sys.stderr)
            sys.stderr.write(sep + '\n')

        return '\n\n' + '\n'.join(error_message) + '\n\n'


    def clear_text(self):
        return self.e


class CommandError(MMTaxError):
    """Use this when a command (e.g., something run with utils.run_command) fails."""

    def __init__(self, e=None):
        self.e = remove_spaces(e)
        self.error_type = 'Command Error'
        MMTaxError.__init__(self)


class ConfigError(MMTaxError):
    def __init__(self, e=None):
        self.e = remove_spaces(e)
        self.error_type = 'Config Error'
        MMTaxError.__init__(self)


class TerminalError(MMTaxError):
    def __init__(self, e=None):
        self.e = remove_spaces(e)
        self.error_type = 'Terminal Error'
        MMTaxError.__init__(self)


class FilesNPathsError(MMTaxError):
    def __init__(self, e=None):
        self.e = remove_spaces(e)
        self.error_type = 'File/Path Error'
        MMTaxError.__init__(self)
