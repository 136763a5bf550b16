# -*- coding: utf-8
# pylint: disable=line-too-long
"""Everything mmtax says goes through here: Run for messages, Progress for the status line, Timer for step timings.

All of it is written to stderr, so nothing mmtax prints is mixed with what a program
may want to pipe elsewhere.
"""

import os
import sys
import time
import shutil
import datetime
import textwrap

from colored import fore, back, style

import mmtax
import mmtax.constants as constants

from mmtax.errors import TerminalError, remove_spaces
from mmtax.ttycolors import color_text as c

__copyright__ = "Copyleft 2024-2026, The mmtax developers"
__credits__ = []
__license__ = "GPL 3.0"


def pluralize(word, number, sfp="s"):
    """Pluralize a word for a given number of things.

    >>> pluralize('contig', 1)
    '1 contig'
    >>> pluralize('contig', 12000)
    '12,000 contigs'
    """

    return f"{pretty_print(number)} {word}{sfp if number != 1 else ''}"


class Progress:
    """A single status line that keeps updating itself while an MMseqs2 step is running.

    It is only shown on a terminal, and never with `--quiet` or `--no-progress`.
    """

    def __init__(self, verbose=True):
        self.pid = None
        self.msg = None
        self.verbose = verbose and sys.stderr.isatty() and not (mmtax.NO_PROGRESS or mmtax.QUIET)


    def new(self, pid):
        if self.pid:
            raise TerminalError(f"Progress '{self.pid}' must end before '{pid}' can start.")

        self.pid = f'{get_date()} {pid}'


    def update(self, msg):
        if not self.pid:
            raise TerminalError(f"Progress got an update ('{msg}') before it was started with `new`.")

        self.msg = msg

        if not self.verbose:
            return

        line = f'\r[{self.pid}] {msg}'
        width = get_terminal_width()
        line = line[:width - 6] + ' (...)' if len(line) > width else line.ljust(width)

        self.clear()
        sys.stderr.write(back.CYAN + fore.BLACK + line + style.RESET)
        sys.stderr.flush()


    def clear(self):
        if not self.verbose:
            return

        sys.stderr.write('\r' + ' ' * get_terminal_width() + '\r')
        sys.stderr.flush()


    def reset(self):
        self.clear()


    def end(self):
        self.pid = None
        self.msg = None
        self.clear()


class Run:
    """Messages for humans.

    Parameters
    ==========
    verbose : bool, True
        Say nothing if False (`--quiet` has the same effect globally)
    width : int, 45
        Width of the dotted label column of `info`
    """

    def __init__(self, verbose=True, width=45):
        self.verbose = verbose and not mmtax.QUIET
        self.width = width

        self.single_line_prefixes = {0: '',
                                     1: '* '}


    def write(self, line):
        if self.verbose:
            sys.stderr.write(line)


    def info(self, key, value, nl_before=0, nl_after=0, lc='cyan', mc='yellow'):
        """Prints `key ........: value`, wrapping long values so they stay aligned with the dots"""

        if isinstance(value, bool) or value is None:
            value = str(value)
        elif isinstance(value, int):
            value = pretty_print(value)
        else:
            value = remove_spaces(str(value))

        label = constants.get_pretty_name(key)

        value_lines = textwrap.wrap(value, width=max(get_terminal_width() - self.width - 3, 20),
                                    break_long_words=False, break_on_hyphens=False) or [value]
        value = ('\n' + ' ' * (self.width + 3)).join(value_lines)

        self.write('%s%s %s: %s\n%s' % ('\n' * nl_before, c(label, lc), '.' * (self.width - len(label)),
                                         c(value, mc), '\n' * nl_after))


    def info_single(self, message, mc='yellow', nl_before=0, nl_after=0, level=1):
        if level not in self.single_line_prefixes:
            raise TerminalError(f"`info_single` does not know what to do with level {level} :/")

        prefix = self.single_line_prefixes[level]
        message = textwrap.fill(remove_spaces(str(message)), 80, subsequent_indent=' ' * len(prefix))

        self.write('\n' * nl_before + c(f'{prefix}{message}\n', mc) + '\n' * nl_after)


    def warning(self, message, header='WARNING', lc='red', nl_before=0, nl_after=0):
        """A header, a line under it, and the message (if there is one)"""

        text = '%s\n%s\n%s\n' % ('\n' * nl_before, header, '=' * (self.width + 2))

        if message:
            text += '%s\n\n%s' % (textwrap.fill(remove_spaces(str(message)), 80), '\n' * nl_after)

        self.write(c(text, lc))


class Timer:
    """Named checkpoints, in the order they were made, to report how long each step took.

    Examples
    ========

    >>> t = Timer()
    >>> <run mmseqs createdb>
    >>> t.make_checkpoint('createdb')
    >>> <run mmseqs taxonomy>
    >>> t.make_checkpoint('taxonomy')
    >>> t.gen_report('Step timings')
    """

    def __init__(self):
        self.timer_start = self.timestamp()
        self.checkpoints = {}


    def timestamp(self):
        return datetime.datetime.now()


    def make_checkpoint(self, checkpoint_key):
        if checkpoint_key in self.checkpoints:
            raise TerminalError(f"Timer already has a checkpoint called '{checkpoint_key}'.")

        self.checkpoints[checkpoint_key] = self.timestamp()

        return self.checkpoints[checkpoint_key]


    def gen_report(self, title='Time Report', run=None):
        run = run or Run()

        run.warning(None, header=title, lc='yellow', nl_before=1)

        previous = self.timer_start
        for checkpoint_key, checkpoint in self.checkpoints.items():
            run.info(str(checkpoint_key), '+%s' % self.format_time(checkpoint - previous))
            previous = checkpoint

        run.info('Total elapsed', '=%s' % self.format_time(previous - self.timer_start), nl_after=1)


    def time_elapsed(self):
        return self.format_time(self.timestamp() - self.timer_start)


    def format_time(self, timedelta):
        """The two largest units that are not zero, e.g. `41s`, `3m07s`, `2h05m` or `1d04h`"""

        seconds = int(timedelta.total_seconds())

        units = []
        for name, size in [('d', 86400), ('h', 3600), ('m', 60), ('s', 1)]:
            value, seconds = divmod(seconds, size)
            if value or units:
                units.append((name, value))

        if not units:
            return '0s'

        first, *rest = units
        return '%d%s' % (first[1], first[0]) + ''.join(['%02d%s' % (v, n) for n, v in rest[:1]])


class TimeCode(object):
    """Reports how long a block of code took, and whether it ended well.

    A clean `sys.exit(0)` counts as ending well. Nothing is reported for blocks that
    are done within `suppress_first` seconds.
    """

    def __init__(self, success_msg='Code finished after ', failure_msg='Code encountered error after ', run=None, suppress_first=0):
        self.run = run or Run()
        self.run.single_line_prefixes = {0: '✓ ', 1: '✖ '}

        self.s_msg, self.f_msg = success_msg, failure_msg
        self.suppress_first = suppress_first


    def __enter__(self):
        self.timer = Timer()
        return self


    def __exit__(self, exception_type, exception_value, traceback):
        self.time = self.timer.timestamp() - self.timer.timer_start

        if self.time <= datetime.timedelta(seconds=self.suppress_first):
            return

        failed = not (exception_type is None or (exception_type is SystemExit and not exception_value.code))

        msg, color = (self.f_msg, 'red') if failed else (self.s_msg, 'green')
        self.run.info_single(msg + self.timer.format_time(self.time), nl_before=1, mc=color, level=int(failed))


def time_program(program_method):
    """Decorates the `main` of an mmtax program to report how long it ran (if it ran longer than 3 seconds)."""

    import inspect
    program_name = os.path.basename(inspect.getfile(program_method))

    def wrapper(*args, **kwargs):
        with TimeCode(success_msg=f'{program_name} took ',
                      failure_msg=f'{program_name} encountered an error after ',
                      suppress_first=3):
            return program_method(*args, **kwargs)
    return wrapper


def pretty_print(n):
    """Thousands separators for integers, everything else as is"""

    return f'{n:,}' if isinstance(n, int) and not isinstance(n, bool) else n


def get_date():
    return time.strftime("%d %b %y %H:%M:%S", time.localtime())


def get_terminal_width():
    return max(shutil.get_terminal_size((120, 25)).columns, 60)
