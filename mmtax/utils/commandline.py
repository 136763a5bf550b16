import os
import subprocess

import mmtax
import mmtax.filesnpaths as filesnpaths

from mmtax.errors import ConfigError, CommandError
from mmtax.terminal import Run, Progress, get_date


def format_cmdline(cmdline):
    """Takes a cmdline for `run_command`, and makes it beautiful."""
    if not cmdline or (not isinstance(cmdline, str) and not isinstance(cmdline, list)):
        raise ConfigError("You made utils/commandline::format_cmdline upset. The parameter you sent to run kinda sucks. It should be string "
                          "or list type. Note that the parameter `shell` for subprocess.call in this `run_command` function "
                          "is always False, therefore if you send a string type, it will be split into a list prior to being "
                          "sent to subprocess.")

    if isinstance(cmdline, str):
        cmdline = [str(x) for x in cmdline.split(' ')]
    else:
        cmdline = [str(x) for x in cmdline]

    return cmdline


def quote_cmdline(cmdline):
    return ' '.join([('"%s"' % x) if ' ' in x else x for x in format_cmdline(cmdline)])


def run_command(cmdline, log_file_path, first_line_of_log_is_cmdline=True, remove_log_file_if_exists=True):
    """ Uses subprocess.call to run your `cmdline`

    Parameters
    ==========
    cmdline : str or list
        The command to be run, e.g. "echo hello" or ["echo", "hello"]
    log_file_path : str or Path-like
        All stdout and stderr from the command is sent to this filepath

    Returns
    =======
    ret_val : int
        The exit code of the program. A program that exits with a code > 0 does NOT raise
        an exception here, it is up to the caller to decide what a non-zero exit code means.

    Raises CommandError if the program was killed by a signal (ret_val < 0), or if it could not
    be started at all (OSError).
    """
    cmdline = format_cmdline(cmdline)

    if mmtax.DEBUG:
        Progress().reset()
        Run().info("[DEBUG] `run_command` is running", quote_cmdline(cmdline), \
                   nl_before=1, nl_after=1, mc='red', lc='yellow')

    filesnpaths.is_output_file_writable(log_file_path)

    if remove_log_file_if_exists and os.path.exists(log_file_path):
        os.remove(log_file_path)

    try:
        if first_line_of_log_is_cmdline:
            with open(log_file_path, "a") as log_file: log_file.write('# DATE: %s\n# CMD LINE: %s\n' % (get_date(), quote_cmdline(cmdline)))

        with open(log_file_path, 'a') as log_file:
            ret_val = subprocess.call(cmdline, shell=False, stdout=log_file, stderr=subprocess.STDOUT)
    except OSError as e:
        raise CommandError("The command failed for the following reason: '%s' ('%s')" % (e, quote_cmdline(cmdline)))

    # This can happen in POSIX due to signal termination (e.g., SIGKILL).
    if ret_val < 0:
        raise CommandError("Command was terminated by signal %d. What command, you say? This: '%s'. You may find "
                           "more clues in the log file at '%s'." % (-ret_val, quote_cmdline(cmdline), log_file_path))

    return ret_val


def get_command_output_from_shell(cmd_line):
    """Runs `cmd_line` and returns its combined stdout/stderr as bytes, and its return code"""

    ret_code = 0

    try:
        out_bytes = subprocess.check_output(format_cmdline(cmd_line), stderr=subprocess.STDOUT)
    except subprocess.CalledProcessError as e:
        out_bytes = e.output
        ret_code = e.returncode
    except OSError as e:
        out_bytes = str(e).encode('utf-8')
        ret_code = -1

    return out_bytes, ret_code

