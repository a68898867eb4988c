"""Spinner glyphs, frame interval, glyph box width and mirroring."""

from __future__ import annotations

import json
import logging
import re
from typing import List, Optional, Pattern

from ..bundle import Edit, LocationSpan, js_literal
from ..errors import LocationNotFoundError

logger = logging.getLogger(__name__)

GLYPHS_POINT = "spinnerGlyphs"
INTERVAL_POINT = "spinnerInterval"
WIDTH_POINT = "spinnerWidth"
MIRROR_POINT = "spinnerMirror"

GLYPH_ALPHABET = "·✢*✳✶✻✽"

INTERVAL_RE = re.compile(
    r"[\w$]+\(\(\)=>\{if\(![\w$]+\)\{[\w$]+\(\d+\);return\}"
    r"[\w$]+\(\([^)]+\)=>[^)]+\+1\)\},(\d+)\)"
)
WIDTH_RE = re.compile(r'\{flexWrap:"wrap",height:1,width:(\d+)\}')
MIRRORED_RE = re.compile(
    r"=\s*\[\.\.\.([\w$]+),\s*\.\.\.?\[\.\.\.\1\]\.reverse\(\)\]"
)


def glyph_array_pattern(alphabet: str = GLYPH_ALPHABET) -> Pattern[str]:
    """Array literals of two or more single glyphs drawn from ``alphabet``."""
    glyph = '"[' + "".join(re.escape(ch) for ch in alphabet) + ']"'
    return re.compile(r"\[" + glyph + r",\s*(?:" + glyph + r",?\s*)+\]")


def locate_spinner_glyphs(
    content: str, alphabet: str = GLYPH_ALPHABET
) -> List[LocationSpan]:
    """Every glyph array; bundlers may inline the same literal more than once."""
    return [
        LocationSpan(match.start(), match.end())
        for match in glyph_array_pattern(alphabet).finditer(content)
    ]


def spinner_glyph_edits(
    content: str,
    phases: List[str],
    locations: Optional[List[LocationSpan]] = None,
) -> List[Edit]:
    if locations is None:
        locations = locate_spinner_glyphs(content)
    if not locations:
        logger.warning("patch: spinner glyphs: failed to find any glyph array")
        raise LocationNotFoundError(GLYPHS_POINT)
    literal = js_literal(list(phases))
    return [Edit(span, literal) for span in locations]


def read_spinner_glyphs(content: str, span: LocationSpan) -> List[str]:
    return json.loads(span.text(content))


def locate_spinner_interval(content: str) -> Optional[LocationSpan]:
    """Span of the millisecond argument of the frame-advance callback."""
    match = INTERVAL_RE.search(content)
    if match is None:
        logger.warning("patch: spinner interval: failed to find match")
        return None
    return LocationSpan(match.start(1), match.end(1))


def spinner_interval_edits(
    content: str, interval_ms: int, location: Optional[LocationSpan] = None
) -> List[Edit]:
    if location is None:
        location = locate_spinner_interval(content)
    if location is None:
        raise LocationNotFoundError(INTERVAL_POINT)
    return [Edit(location, str(int(interval_ms)))]


def _display_length(phase: str) -> int:
    # Measured in UTF-16 code units, as the host's JavaScript sees the string.
    return len(phase.encode("utf-16-le")) // 2


def spinner_width(phases: List[str]) -> int:
    """Box width that fits the widest phase plus one column of padding."""
    return max(_display_length(phase) for phase in phases) + 1



def locate_spinner_width(content: str) -> Optional[LocationSpan]:
    match = WIDTH_RE.search(content)
    if match is None:
        logger.warning("patch: spinner width: failed to find match")
        return None
    return LocationSpan(match.start(), match.end())


def spinner_width_edits(
    content: str, width: int, location: Optional[LocationSpan] = None
) -> List[Edit]:
    if location is None:
        location = locate_spinner_width(content)
    if location is None:
        raise LocationNotFoundError(WIDTH_POINT)
    return [Edit(location, f'{{flexWrap:"wrap",height:1,width:{int(width)}}}')]


def locate_spinner_mirror(
    content: str, identifier: Optional[str] = None
) -> Optional[LocationSpan]:
    """Find ``=[...X,...[...X].reverse()]``, capturing ``X``.

    The unmirrored ``=[...X]`` shape is far too common to search for blindly,
    so it is only matched when ``identifier`` names ``X``.
    """
    match = MIRRORED_RE.search(content)
    if match is not None:
        return LocationSpan(match.start(), match.end(), identifier=match.group(1))
    if identifier:
        match = re.search(r"=\[\.\.\.(" + re.escape(identifier) + r")\]", content)
        if match is not None:
            return LocationSpan(match.start(), match.end(), identifier=identifier)
    logger.warning("patch: spinner mirror: failed to find match")
    return None


def render_mirror(identifier: str, mirror: bool) -> str:
    if mirror:
        return f"=[...{identifier},...[...{identifier}].reverse()]"
    return f"=[...{identifier}]"


def spinner_mirror_edits(
    content: str, mirror: bool, location: Optional[LocationSpan] = None
) -> List[Edit]:
    if location is None:
        location = locate_spinner_mirror(content)
    if location is None or not location.identifier:
        raise LocationNotFoundError(MIRROR_POINT)
    return [Edit(location, render_mirror(location.identifier, mirror))]
