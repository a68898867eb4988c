"""Tests for figlet banner rendering."""

import unittest

import pytest

from cctweak.ascii_art import render_figlet
from cctweak.errors import SerializationError


@pytest.mark.unit
class TestRenderFiglet(unittest.TestCase):
    def test_renders_multiline_art(self):
        art = render_figlet("Hi", "standard")
        self.assertGreater(len(art.splitlines()), 1)
        self.assertFalse(art.endswith("\n"))

    def test_display_font_name_is_normalized(self):
        self.assertEqual(render_figlet("Hi", "Standard"), render_figlet("Hi", "standard"))

    def test_unknown_font_raises(self):
        with self.assertRaises(SerializationError):
            render_figlet("Hi", "No Such Font At All")
