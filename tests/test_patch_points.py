"""Tests for the customization point registry."""

import unittest

import pytest

from cctweak.defaults import default_settings
from cctweak.models import LaunchTextConfig
from cctweak.patches import (
    DEFAULT_POINTS,
    GROUP_ORDER,
    GROUP_THINKING_VERBS,
    inspect_bundle,
    points_for_group,
    resolve_launch_text,
)

from bundle_fixture import BROKEN_THEME_BUNDLE, STOCK_BUNDLE


@pytest.mark.unit
class TestPatchPoints(unittest.TestCase):
    def test_every_point_found_in_stock_bundle(self):
        found = inspect_bundle(STOCK_BUNDLE)
        self.assertEqual(list(found), [p.name for p in DEFAULT_POINTS])
        self.assertTrue(all(found.values()))

    def test_broken_bundle_reports_missing_point(self):
        found = inspect_bundle(BROKEN_THEME_BUNDLE)
        self.assertFalse(found["themes"])
        self.assertTrue(found["spinnerGlyphs"])

    def test_points_grouped_in_order(self):
        groups = [p.group for p in DEFAULT_POINTS]
        self.assertEqual(sorted(groups, key=GROUP_ORDER.index), groups)
        self.assertEqual(
            [p.name for p in points_for_group(GROUP_THINKING_VERBS)],
            ["thinkingVerbs", "thinkingFormat"],
        )

    def test_resolve_launch_text(self):
        render = lambda text, font: f"{font}:{text}"
        self.assertEqual(
            resolve_launch_text(LaunchTextConfig(method="custom", custom_text="A"), render),
            "A",
        )
        self.assertEqual(
            resolve_launch_text(LaunchTextConfig(figlet_text="B", figlet_font="Slant"), render),
            "Slant:B",
        )
        self.assertEqual(resolve_launch_text(LaunchTextConfig(), render), "")

    def test_welcome_only_for_custom_text(self):
        welcome = next(p for p in DEFAULT_POINTS if p.name == "welcomeMessage")
        settings = default_settings()
        self.assertFalse(welcome.enabled(settings))

        settings.launch_text = LaunchTextConfig(method="custom", custom_text="Hi")
        self.assertTrue(welcome.enabled(settings))

        settings.launch_text = LaunchTextConfig(method="custom", custom_text="")
        self.assertFalse(welcome.enabled(settings))
