"""Tests for the PID lock around patch runs."""

import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

import pytest

from cctweak.errors import PatchLockError
from cctweak.lock import PatchLock, lock_holder


@pytest.mark.unit
class TestPatchLock(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.pid_file = Path(self._tmp.name) / "cctweak.pid"

    def tearDown(self):
        self._tmp.cleanup()

    def test_acquire_and_release(self):
        with PatchLock(self.pid_file):
            self.assertEqual(self.pid_file.read_text().strip(), str(os.getpid()))
            self.assertEqual(lock_holder(self.pid_file), os.getpid())
        self.assertFalse(self.pid_file.exists())

    def test_stale_lock_reclaimed(self):
        self.pid_file.write_text("999999999")
        with patch("cctweak.lock.os.kill", side_effect=ProcessLookupError):
            self.assertIsNone(lock_holder(self.pid_file))
        self.assertFalse(self.pid_file.exists())

    def test_garbage_lock_reclaimed(self):
        self.pid_file.write_text("not a pid")
        with PatchLock(self.pid_file):
            pass
        self.assertFalse(self.pid_file.exists())

    def test_live_lock_raises(self):
        self.pid_file.write_text("4242")
        with patch("cctweak.lock.os.kill", return_value=None):
            with self.assertRaises(PatchLockError) as ctx:
                PatchLock(self.pid_file).acquire()
        self.assertEqual(ctx.exception.pid, 4242)
        self.assertEqual(self.pid_file.read_text(), "4242")

    def test_nested_acquire_in_same_process(self):
        with PatchLock(self.pid_file):
            with PatchLock(self.pid_file):
                pass
            self.assertTrue(self.pid_file.exists())
        self.assertFalse(self.pid_file.exists())
