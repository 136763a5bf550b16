# -*- coding: utf-8
# pylint: disable=line-too-long
"""Overloading Python argparse for mmtax purposes"""

import sys
import argparse
import textwrap

from colored import fg, attr
from rich_argparse import RichHelpFormatter

import mmtax


__copyright__ = "Copyleft 2024-2026, The mmtax developers"
__credits__ = []
__license__ = "GPL 3.0"


atty = sys.stderr.isatty()


def positive_int(value):
    try:
        value = int(value)
    except (TypeError, ValueError):
        raise argparse.ArgumentTypeError(f"'{value}' is not an integer")

    if value <= 0:
        raise argparse.ArgumentTypeError(f"'{value}' is not a positive integer")

    return value


def positive_float(value):
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise argparse.ArgumentTypeError(f"'{value}' is not a number")

    if not value > 0:
        raise argparse.ArgumentTypeError(f"'{value}' is not a positive number")

    return value


class ArgumentParser(argparse.ArgumentParser):
    def __init__(self, description="No description :/", epilog=None, prog=None):
        super().__init__(prog=prog)

        self.description = description
        self.epilog = epilog or self.get_mmtax_epilogue()

        self.mmtax_allowed_ad_hoc_flags = ['--version', '--debug', '--quiet', '--no-progress']


    def get_mmtax_epilogue(self):
        """Function that formats the additional message that appears at the end of help."""

        if atty:
            return f'''🍻 {attr('bold')}Exit codes:{attr('reset')}\n\n   {fg('cyan')}0{attr('reset')} on success, {fg('cyan')}1{attr('reset')} for anything else.'''
        else:
            return '''🍻 Exit codes:\n\n   0 on success, 1 for anything else.'''


    def format_help(self):
        """Individual formatting of sections in the help text.

        When we use the same formatter for all, we either would lose the
        explicit spacing in the epilog, or lose the formatting in other
        sections. In this function we change the formatters, render
        different sections differently, and then concatenate everything
        into a single output.
        """

        RichHelpFormatter.styles["argparse.text"] = "italic"
        RichHelpFormatter.group_name_formatter = str.upper

        # we get our formatters here, fill them up down below, and finally render them at the end.
        if atty:
            usage_formatter = RichHelpFormatter(self.prog)
        else:
            usage_formatter = argparse.ArgumentDefaultsHelpFormatter(self.prog)

        description_formatter = argparse.RawDescriptionHelpFormatter(self.prog)
        epilog_formatter = argparse.RawDescriptionHelpFormatter(prog=self.prog)
        separator_formatter = argparse.RawDescriptionHelpFormatter(prog=self.prog)

        # usage
        usage_formatter.add_usage(self.usage, self._actions, self._mutually_exclusive_groups)

        # positionals, optionals and user-defined groups
        for action_group in self._action_groups:
            section_header = action_group.title

            usage_formatter.start_section(section_header)
            usage_formatter.add_text(action_group.description)
            usage_formatter.add_arguments(action_group._group_actions)
            usage_formatter.end_section()

        # separator
        separator_formatter.add_text('━' * 80 + '\n')

        # description
        if atty:
            description_text = [attr('bold') + '🔥 Program description:' + attr('reset'), '']
        else:
            description_text = ['🔥 Program description:', '']

        description_text.extend([textwrap.indent(l, '   ') for l in textwrap.wrap(" ".join(textwrap.dedent(self.description).split()), width=77)])
        description_formatter.add_text('\n'.join(description_text))

        # epilog
        epilog_formatter.add_text(self.epilog)

        # determine help from format above
        help_text = '\n'.join([usage_formatter.format_help().replace(":\n", "\n") if atty else usage_formatter.format_help(),
                               separator_formatter.format_help(),
                               description_formatter.format_help(),
                               epilog_formatter.format_help(),
                               separator_formatter.format_help()]) + '\n'

        return help_text


    def error(self, message):
        """Usage errors go to stderr along with the usage, and the exit code is 1 (not argparse's 2)"""

        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


    def get_args(self, parser, argv=None):
        """A helper function to parse args mmtax way.

        This function allows us to make sure some ad hoc parameters, such as `--debug`,
        can be used with any mmtax program spontaneously even if they are not explicitly
        defined as an accepted argument, yet flags (or parameters) mmtax does not expect
        to see can still be sorted out.
        """

        argv = sys.argv[1:] if argv is None else argv

        if '--version' in argv:
            mmtax.print_version()
            sys.exit(0)

        args, unknown = parser.parse_known_args(argv)

        # if there are any args in the unknown that we do not expect to find
        # we we will make argparse complain about those.
        unexpected = [f for f in unknown if f not in self.mmtax_allowed_ad_hoc_flags]
        if len(unexpected):
            parser.error("unrecognized arguments: %s" % ' '.join(unexpected))

        return args
