"""Tests for the theme locators and writers."""

import unittest

import pytest

from cctweak.bundle import apply_edits
from cctweak.defaults import builtin_themes
from cctweak.errors import LocationNotFoundError
from cctweak.models import Theme
from cctweak.patches._scan import ScanError, find_block_end
from cctweak.patches.themes import (
    locate_theme_names,
    locate_theme_options,
    locate_theme_switch,
    locate_themes,
    render_theme_switch,
    theme_edits,
)

from bundle_fixture import (
    BROKEN_THEME_BUNDLE,
    STOCK_BUNDLE,
    THEME_NAMES,
    THEME_OPTIONS,
    THEME_SWITCH,
)


def _custom_themes():
    return [
        Theme(id="dark", name="Dark mode", colors={"claude": "rgb(1,2,3)"}),
        Theme(id="ocean", name="Ocean", colors={"claude": "#0077be", "text": "white"}),
    ]


@pytest.mark.unit
class TestThemeLocators(unittest.TestCase):
    def test_locates_switch_with_variable(self):
        span = locate_theme_switch(STOCK_BUNDLE)
        self.assertIsNotNone(span)
        self.assertEqual(span.text(STOCK_BUNDLE), THEME_SWITCH[len("function gT(A){") : -1])
        self.assertEqual(span.identifier, "A")

    def test_locates_options_and_names(self):
        options = locate_theme_options(STOCK_BUNDLE)
        names = locate_theme_names(STOCK_BUNDLE)
        self.assertEqual(options.text(STOCK_BUNDLE), THEME_OPTIONS)
        self.assertEqual(names.text(STOCK_BUNDLE), THEME_NAMES[len("function nT(){") : -1])

    def test_switch_without_builtin_case_ignored(self):
        content = 'switch(k){case"foo":return 1;case"bar":return 2}'
        self.assertIsNone(locate_theme_switch(content))

    def test_options_without_builtin_theme_ignored(self):
        content = '[{label:"Small",value:"sm"},{label:"Large",value:"lg"}]'
        self.assertIsNone(locate_theme_options(content))

    def test_switch_with_braces_inside_strings(self):
        content = 'switch(t){case"dark":return{x:"}"};default:return`${"{"}`}rest'
        span = locate_theme_switch(content)
        self.assertEqual(span.text(content), content[: -len("rest")])

    def test_all_or_nothing(self):
        self.assertIsNotNone(locate_themes(STOCK_BUNDLE))
        self.assertIsNone(locate_themes(BROKEN_THEME_BUNDLE))

    def test_unterminated_block_raises_scan_error(self):
        with self.assertRaises(ScanError):
            find_block_end('{"never closed', 0)


@pytest.mark.unit
class TestThemeWriters(unittest.TestCase):
    def test_rendered_switch_has_default_from_first_theme(self):
        rendered = render_theme_switch("A", _custom_themes())
        self.assertTrue(rendered.startswith('switch(A){case"dark":return{"claude":"rgb(1,2,3)"};'))
        self.assertTrue(rendered.endswith('default:return{"claude":"rgb(1,2,3)"}}'))

    def test_rewrites_all_three_sites(self):
        edits = theme_edits(STOCK_BUNDLE, _custom_themes())
        self.assertEqual(len(edits), 3)
        result, _ = apply_edits(STOCK_BUNDLE, edits, "themes")

        self.assertIn('case"ocean":return{"claude":"#0077be","text":"white"};', result)
        self.assertIn(
            '[{"label":"Dark mode","value":"dark"},{"label":"Ocean","value":"ocean"}]',
            result,
        )
        self.assertIn('return{"dark":"Dark mode","ocean":"Ocean"}', result)
        self.assertNotIn("return Lc", result)

    def test_written_themes_can_be_located_again(self):
        themes = builtin_themes()
        result, _ = apply_edits(STOCK_BUNDLE, theme_edits(STOCK_BUNDLE, themes), "themes")
        location = locate_themes(result)
        self.assertIsNotNone(location)

        again, _ = apply_edits(result, theme_edits(result, themes, location), "themes")
        self.assertEqual(again, result)

    def test_empty_theme_list_is_a_no_op(self):
        self.assertEqual(theme_edits(STOCK_BUNDLE, []), [])

    def test_missing_site_raises_not_found(self):
        with self.assertRaises(LocationNotFoundError):
            theme_edits(BROKEN_THEME_BUNDLE, _custom_themes())
