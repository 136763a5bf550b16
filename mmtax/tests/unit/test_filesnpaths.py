# -*- coding: utf-8
# pylint: disable=line-too-long
"""
Unit tests for file and directory checks, and the scratch directory context manager.
"""

import os
import shutil
import tempfile
import unittest

from unittest import mock

import mmtax
import mmtax.terminal as terminal
import mmtax.filesnpaths as filesnpaths

from mmtax.errors import CommandError, FilesNPathsError

__copyright__ = "Copyleft 2024-2026, The mmtax developers"
__credits__ = []
__license__ = "GPL 3.0"
__version__ = mmtax.__version__


class FileChecksTestCase(unittest.TestCase):
    def setUp(self):
        self.tmp_dir = tempfile.mkdtemp()
        self.file_path = os.path.join(self.tmp_dir, 'contigs.fa')
        with open(self.file_path, 'w') as f:
            f.write('>contig_1\nACGT\n')

    def tearDown(self):
        shutil.rmtree(self.tmp_dir)

    def test_regular_file(self):
        self.assertTrue(filesnpaths.is_regular_file(self.file_path))

    def test_directory_is_not_a_regular_file(self):
        self.assertRaises(FilesNPathsError, filesnpaths.is_regular_file, self.tmp_dir)

    def test_missing_file(self):
        self.assertRaises(FilesNPathsError, filesnpaths.is_regular_file, os.path.join(self.tmp_dir, 'nope.fa'))
        self.assertFalse(filesnpaths.is_regular_file(os.path.join(self.tmp_dir, 'nope.fa'), dont_raise=True))

    def test_dir_exists(self):
        self.assertTrue(filesnpaths.is_dir_exists(self.tmp_dir))
        self.assertRaises(FilesNPathsError, filesnpaths.is_dir_exists, self.file_path)

    def test_check_output_directory(self):
        # existing directories and paths that can be created are both fine
        self.assertEqual(filesnpaths.check_output_directory(self.tmp_dir), os.path.abspath(self.tmp_dir))
        new_dir = os.path.join(self.tmp_dir, 'a', 'b')
        self.assertEqual(filesnpaths.check_output_directory(new_dir), os.path.abspath(new_dir))
        self.assertFalse(os.path.exists(new_dir))

    def test_check_output_directory_used_by_a_file(self):
        self.assertRaises(FilesNPathsError, filesnpaths.check_output_directory, self.file_path)
        self.assertRaises(FilesNPathsError, filesnpaths.check_output_directory, os.path.join(self.file_path, 'out'))

    def test_gen_output_directory_is_idempotent(self):
        out_dir = os.path.join(self.tmp_dir, 'out', 'logs')
        filesnpaths.gen_output_directory(out_dir)
        filesnpaths.gen_output_directory(out_dir)
        self.assertTrue(os.path.isdir(out_dir))

    def test_gen_output_directory_on_a_file(self):
        self.assertRaises(FilesNPathsError, filesnpaths.gen_output_directory, self.file_path)

    def test_num_lines_in_file(self):
        self.assertEqual(filesnpaths.get_num_lines_in_file(self.file_path), 2)


class ScratchDirectoryTestCase(unittest.TestCase):
    def setUp(self):
        self.tmp_dir = tempfile.mkdtemp()
        self.scratch_dir = os.path.join(self.tmp_dir, 'tmp')
        self.run = terminal.Run(verbose=False)

    def tearDown(self):
        shutil.rmtree(self.tmp_dir)

    def test_created_and_removed(self):
        with filesnpaths.ScratchDirectory(self.scratch_dir, run=self.run) as scratch_dir:
            self.assertTrue(os.path.isdir(scratch_dir))
            os.makedirs(os.path.join(scratch_dir, 'deep', 'inside'))
            with open(os.path.join(scratch_dir, 'deep', 'file'), 'w') as f:
                f.write('junk')

        self.assertFalse(os.path.exists(self.scratch_dir))

    def test_removed_when_block_raises(self):
        with self.assertRaises(RuntimeError):
            with filesnpaths.ScratchDirectory(self.scratch_dir, run=self.run):
                raise RuntimeError("something went wrong in the middle")

        self.assertFalse(os.path.exists(self.scratch_dir))

    def test_removed_when_interrupted(self):
        with self.assertRaises(KeyboardInterrupt):
            with filesnpaths.ScratchDirectory(self.scratch_dir, run=self.run):
                raise KeyboardInterrupt()

        self.assertFalse(os.path.exists(self.scratch_dir))

    def test_already_removed_is_fine(self):
        with filesnpaths.ScratchDirectory(self.scratch_dir, run=self.run) as scratch_dir:
            shutil.rmtree(scratch_dir)

        self.assertFalse(os.path.exists(self.scratch_dir))

    def test_existing_directory_is_reused(self):
        os.makedirs(self.scratch_dir)

        with filesnpaths.ScratchDirectory(self.scratch_dir, run=self.run) as scratch_dir:
            self.assertEqual(scratch_dir, self.scratch_dir)

        self.assertFalse(os.path.exists(self.scratch_dir))

    def test_cleanup_failure_does_not_hide_the_block_error(self):
        with mock.patch('mmtax.filesnpaths.shutil.rmtree', side_effect=OSError('busy')), \
             mock.patch.object(self.run, 'warning') as warning:
            with self.assertRaises(CommandError) as e:
                with filesnpaths.ScratchDirectory(self.scratch_dir, run=self.run):
                    raise CommandError("Taxonomy assignment failed")

        self.assertIn('Taxonomy assignment failed', e.exception.clear_text())
        self.assertEqual(warning.call_count, 1)
        self.assertIn('busy', warning.call_args[0][0])

    def test_cleanup_failure_after_success_raises(self):
        with mock.patch('mmtax.filesnpaths.shutil.rmtree', side_effect=OSError('busy')):
            with self.assertRaises(FilesNPathsError):
                with filesnpaths.ScratchDirectory(self.scratch_dir, run=self.run):
                    pass

    def test_released_only_once(self):
        scratch = filesnpaths.ScratchDirectory(self.scratch_dir, run=self.run)
        with scratch:
            pass

        # someone else puts something there after we are done. it is not ours to remove anymore.
        os.makedirs(self.scratch_dir)
        scratch.release()

        self.assertTrue(scratch.released)
        self.assertTrue(os.path.isdir(self.scratch_dir))

    def test_remove_directory(self):
        self.assertFalse(filesnpaths.remove_directory(self.scratch_dir))
        os.makedirs(self.scratch_dir)
        self.assertTrue(filesnpaths.remove_directory(self.scratch_dir))
        self.assertFalse(os.path.exists(self.scratch_dir))


if __name__ == '__main__':
    unittest.main()
