"""Tests for installation discovery."""

import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

import pytest

from cctweak.config import ConfigStore
from cctweak.installation import (
    default_search_paths,
    extract_version,
    find_installation,
    probe,
)

from bundle_fixture import STOCK_BUNDLE, write_installation


@pytest.mark.unit
class TestFindInstallation(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def test_probe_reads_version_from_package_json(self):
        cli_path, package_json_path = write_installation(self.root / "pkg", version="2.3.4")
        info = probe(self.root / "pkg")
        self.assertEqual(info.cli_path, cli_path)
        self.assertEqual(info.package_json_path, package_json_path)
        self.assertEqual(info.version, "2.3.4")

    def test_probe_requires_both_files(self):
        (self.root / "only-cli").mkdir()
        (self.root / "only-cli" / "cli.js").write_text("x", encoding="utf-8")
        self.assertIsNone(probe(self.root / "only-cli"))
        self.assertIsNone(probe(self.root / "nothing-here"))

    def test_search_order(self):
        write_installation(self.root / "a", version="1.0.0")
        write_installation(self.root / "b", version="2.0.0")
        info = find_installation(search_paths=[self.root / "missing", self.root / "b", self.root / "a"])
        self.assertEqual(info.version, "2.0.0")

    def test_configured_directory_searched_first(self):
        write_installation(self.root / "a", version="1.0.0")
        write_installation(self.root / "custom", version="9.9.9")
        config = ConfigStore(self.root / "config.json").load()
        config.cc_installation_dir = str(self.root / "custom")

        info = find_installation(config, search_paths=[self.root / "a"])
        self.assertEqual(info.version, "9.9.9")

    def test_not_found(self):
        self.assertIsNone(find_installation(search_paths=[self.root / "missing"]))

    def test_n_prefix_in_default_paths(self):
        with patch.dict(os.environ, {"N_PREFIX": str(self.root)}), patch(
            "cctweak.installation.shutil.which", return_value=None
        ):
            paths = default_search_paths()
        self.assertIn(
            self.root / "lib" / "node_modules" / "@anthropic-ai" / "claude-code", paths
        )


@pytest.mark.unit
class TestExtractVersion(unittest.TestCase):
    def test_most_common_version_wins(self):
        content = 'VERSION:"1.2.3" VERSION:"1.2.3" VERSION:"0.0.1"'
        self.assertEqual(extract_version(content), "1.2.3")

    def test_fixture_version(self):
        self.assertEqual(extract_version(STOCK_BUNDLE), "1.0.0")

    def test_no_version(self):
        self.assertIsNone(extract_version("nothing"))
