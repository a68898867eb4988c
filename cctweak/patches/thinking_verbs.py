"""Thinking verbs: the verb table, the function serving it, and the format.

The host picks spinner verbs through a zero-argument function that asks an
experiment flag for an alternative list and falls back to a built-in table::

    kW8={words:["Actualizing","Baking",...]}
    function Qx(){return Zf("some_flag",kW8).words}

Both are rewritten so the function always returns the (new) table.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..bundle import Edit, LocationSpan, js_literal
from ..errors import LocationNotFoundError
from ..models import FORMAT_PLACEHOLDER

logger = logging.getLogger(__name__)

VERBS_POINT = "thinkingVerbs"
FORMAT_POINT = "thinkingFormat"

_STR = r'"(?:[^"\\]|\\.)*"'

VERBS_TABLE_RE = re.compile(
    r'(?<![\w$])([\w$]+)=\{words:\[(?:"[^"{}()]+ing",)*"[^"{}()]+ing"\]\}'
)
# Stock form returns flag(...,TABLE).words; the rewritten form returns TABLE.words.
DISPATCH_RE = re.compile(
    r"function ([\w$]+)\(\)\{return "
    r'(?:[\w$]+\("[^"]+",([\w$]+)\)|([\w$]+))\.words\}'
)

FORMAT_ANCHOR_RE = re.compile(
    r"spinnerTip:[\w$]+,(?:[\w$]+:[\w$]+,)*overrideMessage:[\w$]+,"
)
FORMAT_WINDOW = 400
# Rewritten templates may run past the window; only their start must be in it.
MAX_TEMPLATE_CHARS = 4096
# =L?L.activeForm+"…":(Z||R)+"…"
STOCK_FORMAT_RE = re.compile(r'=([\w$]+)\?([^={}?]+?)\+"…":(.+?)\+"…"')
# =L?`${L.activeForm}…`:`${(Z||R)}…`
TEMPLATE_FORMAT_RE = re.compile(
    r"=([\w$]+)\?`((?:[^`\\]|\\.)*)`:`((?:[^`\\]|\\.)*)`"
)

STOCK_FORMAT = FORMAT_PLACEHOLDER + "…"


@dataclass(frozen=True)
class VerbsLocation:
    table: LocationSpan
    dispatch: LocationSpan

    @property
    def table_variable(self) -> str:
        return self.table.identifier or ""

    @property
    def function_name(self) -> str:
        return self.dispatch.identifier or ""


@dataclass(frozen=True)
class FormatLocation:
    span: LocationSpan
    condition: str
    active_verb: str
    fallback_verb: str
    current_format: str


def _locate_dispatch(content: str) -> Tuple[Optional[LocationSpan], Optional[str]]:
    match = DISPATCH_RE.search(content)
    if match is None:
        return None, None
    table_variable = match.group(2) or match.group(3)
    return LocationSpan(match.start(), match.end(), identifier=match.group(1)), table_variable


def _locate_table(content: str, variable: Optional[str]) -> Optional[LocationSpan]:
    match = VERBS_TABLE_RE.search(content)
    if match is None and variable:
        # Verbs that do not end in "ing" only match once the table is named.
        match = re.search(
            r"(?<![\w$])("
            + re.escape(variable)
            + r")=\{words:\[(?:"
            + _STR
            + r",)*"
            + _STR
            + r"\]\}",
            content,
        )
    if match is None:
        return None
    return LocationSpan(match.start(), match.end(), identifier=match.group(1))


def locate_thinking_verbs(content: str) -> Optional[VerbsLocation]:
    dispatch, variable = _locate_dispatch(content)
    if dispatch is None:
        logger.warning("patch: thinking verbs: failed to find verb function")
        return None
    table = _locate_table(content, variable)
    if table is None:
        logger.warning("patch: thinking verbs: failed to find verb table")
        return None
    return VerbsLocation(table=table, dispatch=dispatch)


def thinking_verbs_edits(
    content: str, verbs: List[str], location: Optional[VerbsLocation] = None
) -> List[Edit]:
    if location is None:
        location = locate_thinking_verbs(content)
    if location is None:
        raise LocationNotFoundError(VERBS_POINT)
    table = location.table_variable
    return [
        Edit(location.table, f"{table}={{words:{js_literal(list(verbs))}}}"),
        Edit(
            location.dispatch,
            f"function {location.function_name}(){{return {table}.words}}",
        ),
    ]


def read_thinking_verbs(content: str, location: VerbsLocation) -> List[str]:
    """Decode the verb list currently held by the located table."""
    text = location.table.text(content)
    return json.loads(text[text.index("[") : text.rindex("]") + 1])


def escape_template(text: str) -> str:
    """Escape ``text`` for embedding inside a JS template literal."""
    return text.replace("\\", "\\\\").replace("`", "\\`").replace("${", "\\${")


def _unescape_template(text: str) -> str:
    out = []
    i = 0
    while i < len(text):
        if text[i] == "\\" and i + 1 < len(text):
            out.append(text[i + 1])
            i += 2
            continue
        out.append(text[i])
        i += 1
    return "".join(out)


def _split_template(template: str) -> Tuple[List[str], List[str]]:
    """Split a template body into literal chunks and ``${...}`` expressions."""
    literals: List[str] = []
    expressions: List[str] = []
    chunk_start = 0
    i = 0
    while i < len(template):
        ch = template[i]
        if ch == "\\":
            i += 2
            continue
        if ch == "$" and template[i + 1 : i + 2] == "{":
            end = template.find("}", i + 2)
            if end == -1:
                break
            literals.append(template[chunk_start:i])
            expressions.append(template[i + 2 : end])
            i = chunk_start = end + 1
            continue
        i += 1
    literals.append(template[chunk_start:])
    return literals, expressions


def render_format(format: str, verb: str) -> str:
    """Template literal showing ``verb`` through the user's ``format``."""
    escaped = escape_template(format)
    return "`" + escaped.replace(FORMAT_PLACEHOLDER, "${" + verb + "}") + "`"


def locate_thinking_format(content: str) -> Optional[FormatLocation]:
    anchor = FORMAT_ANCHOR_RE.search(content)
    if anchor is None:
        logger.warning("patch: thinking format: failed to find anchor")
        return None
    window_end = anchor.start() + FORMAT_WINDOW

    match = STOCK_FORMAT_RE.search(content, anchor.start(), window_end)
    if match is not None:
        return FormatLocation(
            span=LocationSpan(match.start(), match.end()),
            condition=match.group(1),
            active_verb=match.group(2),
            fallback_verb=match.group(3),
            current_format=STOCK_FORMAT,
        )

    match = TEMPLATE_FORMAT_RE.search(
        content, anchor.start(), window_end + MAX_TEMPLATE_CHARS
    )
    if match is not None and match.start() < window_end:
        first_literals, first_exprs = _split_template(match.group(2))
        _, second_exprs = _split_template(match.group(3))
        if first_exprs and second_exprs:
            current = FORMAT_PLACEHOLDER.join(
                _unescape_template(chunk) for chunk in first_literals
            )
            return FormatLocation(
                span=LocationSpan(match.start(), match.end()),
                condition=match.group(1),
                active_verb=first_exprs[0],
                fallback_verb=second_exprs[0],
                current_format=current,
            )

    logger.warning("patch: thinking format: failed to find format expression")
    return None


def thinking_format_edits(
    content: str, format: str, location: Optional[FormatLocation] = None
) -> List[Edit]:
    if location is None:
        location = locate_thinking_format(content)
    if location is None:
        raise LocationNotFoundError(FORMAT_POINT)
    new_content = (
        f"={location.condition}?"
        f"{render_format(format, location.active_verb)}:"
        f"{render_format(format, location.fallback_verb)}"
    )
    return [Edit(location.span, new_content)]
