# -*- coding: utf-8
# pylint: disable=line-too-long
"""File/Path operations"""

import os
import shutil

from mmtax.terminal import Run
from mmtax.terminal import Progress
from mmtax.errors import FilesNPathsError


__copyright__ = "Copyleft 2024-2026, The mmtax developers"
__credits__ = []
__license__ = "GPL 3.0"


def is_file_exists(file_path, dont_raise=False):
    if not file_path:
        raise FilesNPathsError("No input file is declared...")
    if not os.path.exists(os.path.abspath(file_path)):
        if dont_raise:
            return False
        else:
            raise FilesNPathsError("No such file: '%s' :/" % file_path)
    return True


def is_regular_file(file_path, dont_raise=False):
    """Make sure `file_path` is there, and it is a file (not a directory, not a broken link)"""

    is_file_exists(file_path, dont_raise=dont_raise)

    if not os.path.isfile(file_path):
        if dont_raise:
            return False
        else:
            raise FilesNPathsError(f"The path '{file_path}' exists, but it is not a regular file. Was it a "
                                   f"directory by any chance?")

    if not os.access(file_path, os.R_OK):
        if dont_raise:
            return False
        else:
            raise FilesNPathsError(f"You do not have read access to the file at '{file_path}' :/")

    return True


def is_dir_exists(dir_path, dont_raise=False):
    if not dir_path:
        raise FilesNPathsError("No input directory is declared...")
    if not os.path.isdir(os.path.abspath(dir_path)):
        if dont_raise:
            return False
        else:
            raise FilesNPathsError("No such directory: '%s' :/" % dir_path)
    return True


def is_output_file_writable(file_path, ok_if_exists=True):
    if not file_path:
        raise FilesNPathsError("No output file is declared...")
    if os.path.isdir(file_path):
        raise FilesNPathsError(f"The path you have provided for your output file ('{os.path.abspath(file_path)}') "
                               f"already is used by a directory :/")
    if not os.access(os.path.dirname(os.path.abspath(file_path)), os.W_OK):
        raise FilesNPathsError(f"It seems you are not authorized to create an output file at '{file_path}'.")
    if os.path.exists(file_path) and not os.access(file_path, os.W_OK):
        raise FilesNPathsError(f"You do not have write access to the file at '{file_path}' :/")
    if os.path.exists(file_path) and not ok_if_exists:
        raise FilesNPathsError(f"The output file '{file_path}' already exists.")

    return True


def is_output_dir_writable(dir_path):
    if not dir_path:
        raise FilesNPathsError("No output directory path is declared...")
    if not os.path.isdir(dir_path):
        raise FilesNPathsError("'%s' is not a directory..." % dir_path)
    if not os.access(os.path.abspath(dir_path), os.W_OK):
        raise FilesNPathsError("You do not have permission to generate files in '%s'" % dir_path)
    return True


def check_output_directory(output_directory):
    """Make sure an output directory can be used (or created) without actually creating it.

    An existing directory is fine as long as we can write into it. A path that does not
    exist yet is fine as long as its closest existing ancestor is a writable directory.
    """

    if not output_directory:
        raise FilesNPathsError("Sorry. You must declare an output directory path.")

    output_directory = os.path.abspath(output_directory)

    if os.path.exists(output_directory):
        if not os.path.isdir(output_directory):
            raise FilesNPathsError(f"The output directory path '{output_directory}' is already used by "
                                   f"something that is not a directory :/")

        is_output_dir_writable(output_directory)
        return output_directory

    ancestor = os.path.dirname(output_directory)
    while not os.path.exists(ancestor):
        ancestor = os.path.dirname(ancestor)

    if not os.path.isdir(ancestor) or not os.access(ancestor, os.W_OK):
        raise FilesNPathsError(f"The output directory '{output_directory}' does not exist, and you do not "
                               f"have permission to create it under '{ancestor}'.")

    return output_directory


def gen_output_directory(output_directory, progress=Progress(verbose=False)):
    if not output_directory:
        raise FilesNPathsError("Someone called `gen_output_directory` function without an output "
                               "directory name :( An embarrassing moment for everyone involved.")

    if not os.path.exists(output_directory):
        try:
            os.makedirs(output_directory)
        except OSError as e:
            progress.end()
            raise FilesNPathsError("Output directory does not exist (attempt to create one failed as well): '%s' (%s)" % \
                                                            (output_directory, e))
    if not os.path.isdir(output_directory):
        progress.end()
        raise FilesNPathsError("The output directory path '%s' is used by a file :/" % output_directory)

    if not os.access(output_directory, os.W_OK):
        progress.end()
        raise FilesNPathsError("You do not have write permission for the output directory: '%s'" % output_directory)

    return output_directory


def remove_directory(dir_path):
    """Remove a directory and everything in it, quietly doing nothing if it is not there"""

    if not os.path.exists(dir_path):
        return False

    try:
        shutil.rmtree(dir_path)
    except OSError as e:
        raise FilesNPathsError(f"Something went wrong while removing the directory '{dir_path}': {e}")

    return True


class ScratchDirectory(object):
    """Holds a scratch directory for a block of code, and removes it when the block is done.

    The directory is created on enter (it is OK if it already exists) and it is removed with
    everything in it on exit, whether the block finished, raised, or was interrupted.

    Parameters
    ==========
    dir_path : str
        Where the scratch directory should be

    Examples
    ========

    >>> with ScratchDirectory('output/tmp') as tmp_dir:
    >>>     utils.run_command(['mmseqs', 'taxonomy', ..., tmp_dir], log_file_path)
    """

    def __init__(self, dir_path, run=Run()):
        self.dir_path = dir_path
        self.run = run

        self.released = False


    def __enter__(self):
        gen_output_directory(self.dir_path)
        return self.dir_path


    def __exit__(self, exc_type, exc_value, traceback):
        if exc_type is None:
            self.release()
            return

        # the block already failed, and that is the error the user needs to see
        try:
            self.release()
        except FilesNPathsError as e:
            self.run.warning(f"mmtax could not remove the scratch directory '{self.dir_path}' after the "
                             f"failure above, so you may want to remove it yourself ({e.clear_text()}).")


    def release(self):
        if self.released:
            return

        self.released = True

        self.run.info_single("Cleaning up temporary files...", nl_before=1)
        remove_directory(self.dir_path)


def get_num_lines_in_file(file_path):
    if os.stat(file_path).st_size == 0:
        return 0

    def blocks(files, size=65536):
        while True:
            b = files.read(size)
            if not b: break
            yield b

    with open(file_path, "r") as f:
        return sum(bl.count("\n") for bl in blocks(f))
