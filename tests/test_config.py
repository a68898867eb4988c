"""Tests for settings persistence and legacy migration."""

import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

import pytest

from cctweak.config import ConfigStore, config_dir, config_file
from cctweak.defaults import builtin_themes
from cctweak.errors import ConfigError


@pytest.mark.unit
class TestConfigStore(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self._tmp.name)
        self.store = ConfigStore(self.dir / "config.json")

    def tearDown(self):
        self._tmp.cleanup()

    def _write(self, data):
        self.store.path.write_text(json.dumps(data), encoding="utf-8")

    def test_missing_file_gives_defaults(self):
        config = self.store.load()
        self.assertEqual(config.cc_version, "")
        self.assertFalse(config.changes_applied)
        self.assertEqual(len(config.settings.themes), len(builtin_themes()))
        self.assertEqual(config.settings.thinking_verbs.format, "{}…")

    def test_save_uses_camel_case_and_stamps_time(self):
        config = self.store.load()
        config.cc_version = "1.0.0"
        saved = self.store.save(config)

        raw = json.loads(self.store.path.read_text(encoding="utf-8"))
        self.assertEqual(raw["ccVersion"], "1.0.0")
        self.assertIn("thinkingVerbs", raw["settings"])
        self.assertIn("updateInterval", raw["settings"]["thinkingStyle"])
        self.assertTrue(saved.last_modified)
        self.assertEqual(raw["lastModified"], saved.last_modified)

    def test_round_trip(self):
        config = self.store.load()
        config.settings.thinking_style.update_interval = 42
        self.store.save(config)
        self.assertEqual(self.store.load().settings.thinking_style.update_interval, 42)

    def test_punctuation_migrates_to_format(self):
        self._write(
            {
                "ccVersion": "0.9.0",
                "settings": {"thinkingVerbs": {"punctuation": "...", "verbs": ["Going"]}},
            }
        )
        verbs = self.store.load().settings.thinking_verbs
        self.assertEqual(verbs.format, "{}...")
        self.assertEqual(verbs.verbs, ["Going"])

    def test_builtin_theme_colors_filled(self):
        dark = builtin_themes()[0]
        self._write(
            {
                "settings": {
                    "themes": [
                        {"name": dark.name, "id": dark.id, "colors": {"claude": "red"}},
                        {"name": "Mine", "id": "mine", "colors": {"claude": "blue"}},
                    ]
                }
            }
        )
        themes = self.store.load().settings.themes
        self.assertEqual(themes[0].colors["claude"], "red")
        self.assertEqual(set(themes[0].colors), set(dark.colors))
        self.assertEqual(themes[1].colors, {"claude": "blue"})

    def test_missing_sections_filled_from_defaults(self):
        self._write({"ccVersion": "1.0.0", "settings": {}})
        config = self.store.load()
        self.assertEqual(config.cc_version, "1.0.0")
        self.assertTrue(config.settings.thinking_style.phases)

    def test_invalid_json_raises(self):
        self.store.path.write_text("{not json", encoding="utf-8")
        with self.assertRaises(ConfigError):
            self.store.load()

    def test_invalid_settings_raise(self):
        self._write({"settings": {"thinkingStyle": {"phases": ["*"], "updateInterval": 0}}})
        with self.assertRaises(ConfigError):
            self.store.load()

    def test_set_changes_applied(self):
        self.assertTrue(self.store.set_changes_applied(True).changes_applied)
        self.assertTrue(self.store.load().changes_applied)

    def test_save_settings_clears_changes_applied(self):
        config = self.store.set_changes_applied(True)
        self.assertFalse(self.store.save_settings(config).changes_applied)

    def test_config_dir_env_override(self):
        with patch.dict(os.environ, {"CCTWEAK_CONFIG_DIR": str(self.dir)}):
            self.assertEqual(config_dir(), self.dir)
            self.assertEqual(config_file(), self.dir / "config.json")
