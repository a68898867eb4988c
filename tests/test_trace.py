"""Tests for the before/after diff tracer."""

import logging
import os
import unittest
from unittest.mock import patch

import pytest

from cctweak.bundle import AppliedEdit
from cctweak.trace import DiffTracer, is_debug


def _record(tracer, before, start, old_end, new):
    after = before[:start] + new + before[old_end:]
    edit = AppliedEdit("demo", start, old_end, before[start:old_end], new)
    return tracer.record(before, after, edit)


@pytest.mark.unit
class TestDiffTracer(unittest.TestCase):
    def test_plain_markers_and_context(self):
        tracer = DiffTracer(enabled=False, context_chars=4, color=False)
        entry = _record(tracer, "0123456789OLD0123456789", 10, 13, "NEW!")

        self.assertEqual(entry.old_line, "6789[OLD]0123")
        self.assertEqual(entry.new_line, "6789[NEW!]0123")
        self.assertIn("--- Diff (demo) ---", entry.render())

    def test_context_clamped_at_buffer_edges(self):
        tracer = DiffTracer(enabled=False, context_chars=10, color=False)
        entry = _record(tracer, "ab", 0, 2, "xyz")
        self.assertEqual(entry.old_line, "[ab]")
        self.assertEqual(entry.new_line, "[xyz]")

    def test_colored_markers(self):
        tracer = DiffTracer(enabled=False, context_chars=0)
        entry = _record(tracer, "abc", 1, 2, "X")
        self.assertEqual(entry.new_line, "\x1b[32mX\x1b[0m")

    def test_logs_only_when_enabled(self):
        with self.assertLogs("cctweak.trace", level=logging.DEBUG) as logs:
            _record(DiffTracer(enabled=True, color=False), "abc", 0, 1, "Z")
        self.assertTrue(any("[Z]" in line for line in logs.output))

        quiet = DiffTracer(enabled=False)
        with patch("cctweak.trace.logger") as logger:
            _record(quiet, "abc", 0, 1, "Z")
        logger.debug.assert_not_called()
        self.assertEqual(len(quiet.entries), 1)

    def test_clear(self):
        tracer = DiffTracer(enabled=False)
        _record(tracer, "abc", 0, 1, "Z")
        tracer.clear()
        self.assertEqual(tracer.entries, [])

    def test_debug_env(self):
        with patch.dict(os.environ, {"CCTWEAK_DEBUG": "1"}):
            self.assertTrue(is_debug())
            self.assertTrue(DiffTracer().enabled)
        with patch.dict(os.environ, {"CCTWEAK_DEBUG": "0"}):
            self.assertFalse(is_debug())
