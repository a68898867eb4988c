"""Theme table: colour dispatch, picker options and display-name map.

The host keeps three cooperating pieces of theme data::

    switch(A){case"light":return L1;case"dark":return D1;...}
    [{label:"Dark mode",value:"dark"},{label:"Light mode",value:"light"},...]
    return{dark:"Dark mode",light:"Light mode",...}

All three must be found or the theme point is abandoned; a partial theme
table would leave the picker and the dispatcher disagreeing.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from ..bundle import Edit, LocationSpan, js_literal
from ..defaults import BUILTIN_THEME_IDS
from ..errors import LocationNotFoundError
from ..models import Theme
from ._scan import ScanError, find_block_end

logger = logging.getLogger(__name__)

POINT = "themes"

# Upper bound on the size of the dispatch block, generous enough for a
# rewritten switch carrying many custom themes.
MAX_SWITCH_CHARS = 200_000

_STR = r'"(?:[^"\\]|\\.)*"'

SWITCH_HEAD_RE = re.compile(r"switch\s*\(([^(){};]+)\)\s*\{")
_CASE_BUILTIN_RE = re.compile(
    r"case\s*[\"'](?:"
    + "|".join(re.escape(theme_id) for theme_id in BUILTIN_THEME_IDS)
    + r")[\"']\s*:"
)
OPTIONS_RE = re.compile(
    r'\[(?:\{"?label"?:' + _STR + r',"?value"?:' + _STR + r"\},?)+\]"
)
_OPTION_ENTRY_RE = re.compile(
    r'\{"?label"?:(' + _STR + r'),"?value"?:(' + _STR + r")\}"
)
NAMES_RE = re.compile(r"return\{(?:(?:" + _STR + r"|[\w$]+):" + _STR + r",?)+\}")
_NAME_ENTRY_RE = re.compile(r"(" + _STR + r"|[\w$]+):(" + _STR + r")")


@dataclass(frozen=True)
class ThemeLocation:
    switch: LocationSpan
    options: LocationSpan
    names: LocationSpan

    @property
    def variable(self) -> str:
        return self.switch.identifier or ""

    def spans(self) -> Tuple[LocationSpan, LocationSpan, LocationSpan]:
        return (self.switch, self.options, self.names)


def _decode(literal: str) -> str:
    """Decode a quoted JS string, or return a bare identifier unchanged."""
    if not literal.startswith('"'):
        return literal
    try:
        return json.loads(literal)
    except ValueError:
        return literal[1:-1]


def _looks_builtin(ids: Iterable[str], labels: Iterable[str]) -> bool:
    if any(theme_id in BUILTIN_THEME_IDS for theme_id in ids):
        return True
    return any(label.startswith(("Dark", "Light")) for label in labels)


def locate_theme_switch(content: str) -> Optional[LocationSpan]:
    """Find the ``switch`` that maps a theme id to its colour object."""
    for match in SWITCH_HEAD_RE.finditer(content):
        open_index = match.end() - 1
        body_head = content[match.end() : match.end() + 16]
        if not re.match(r"\s*case\s*[\"']", body_head):
            continue
        try:
            close_index = find_block_end(content, open_index, limit=MAX_SWITCH_CHARS)
        except ScanError:
            continue
        body = content[match.end() : close_index]
        if not _CASE_BUILTIN_RE.search(body):
            continue
        return LocationSpan(
            match.start(), close_index + 1, identifier=match.group(1).strip()
        )
    return None


def locate_theme_options(content: str) -> Optional[LocationSpan]:
    """Find the ``[{label, value}, ...]`` list backing the theme picker."""
    for match in OPTIONS_RE.finditer(content):
        entries = _OPTION_ENTRY_RE.findall(match.group(0))
        labels = [_decode(label) for label, _ in entries]
        ids = [_decode(value) for _, value in entries]
        if _looks_builtin(ids, labels):
            return LocationSpan(match.start(), match.end())
    return None


def locate_theme_names(content: str) -> Optional[LocationSpan]:
    """Find the ``return{id:"Display name", ...}`` map."""
    for match in NAMES_RE.finditer(content):
        entries = _NAME_ENTRY_RE.findall(match.group(0)[len("return") :])
        ids = [_decode(key) for key, _ in entries]
        labels = [_decode(value) for _, value in entries]
        if _looks_builtin(ids, labels):
            return LocationSpan(match.start(), match.end())
    return None


def locate_themes(content: str) -> Optional[ThemeLocation]:
    switch = locate_theme_switch(content)
    if switch is None:
        logger.warning("patch: themes: failed to find theme dispatch switch")
        return None
    options = locate_theme_options(content)
    if options is None:
        logger.warning("patch: themes: failed to find theme options array")
        return None
    names = locate_theme_names(content)
    if names is None:
        logger.warning("patch: themes: failed to find theme name map")
        return None
    return ThemeLocation(switch=switch, options=options, names=names)


def render_theme_switch(variable: str, themes: Sequence[Theme]) -> str:
    cases = "".join(
        f"case{js_literal(theme.id)}:return{js_literal(theme.colors)};"
        for theme in themes
    )
    return f"switch({variable}){{{cases}default:return{js_literal(themes[0].colors)}}}"


def render_theme_options(themes: Sequence[Theme]) -> str:
    return js_literal([{"label": theme.name, "value": theme.id} for theme in themes])


def render_theme_names(themes: Sequence[Theme]) -> str:
    return "return" + js_literal({theme.id: theme.name for theme in themes})


def theme_edits(
    content: str,
    themes: Sequence[Theme],
    location: Optional[ThemeLocation] = None,
) -> List[Edit]:
    """Edits rewriting all three theme sites, or none at all.

    Raises:
        LocationNotFoundError: If any of the three sites is missing.
    """
    if location is None:
        location = locate_themes(content)
    if location is None:
        raise LocationNotFoundError(POINT)
    if not themes:
        return []
    return [
        Edit(location.switch, render_theme_switch(location.variable, themes)),
        Edit(location.options, render_theme_options(themes)),
        Edit(location.names, render_theme_names(themes)),
    ]
