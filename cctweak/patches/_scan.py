"""Shallow JS scanning: skip string/template literals and match braces.

This is not a parser.  It knows just enough about quotes, template literals
and comments to find the ``}`` that closes a block in minified code.  Regex
literals are not recognised; callers bound the scan with ``limit`` and treat
a failure as "not found".
"""

from __future__ import annotations

from typing import Optional

from ..errors import CctweakError


class ScanError(CctweakError):
    """Raised when a literal or block is unterminated within the scan limit."""


def skip_string(content: str, start: int, quote: str, stop: int) -> int:
    """Return the index just past the string literal opened at ``start``."""
    i = start + 1
    while i < stop:
        ch = content[i]
        if ch == "\\":
            i += 2
            continue
        if ch == quote:
            return i + 1
        i += 1
    raise ScanError("unterminated string literal")


def skip_template_literal(content: str, start: int, stop: int) -> int:
    """Return the index just past the template literal opened at ``start``."""
    i = start + 1
    while i < stop:
        ch = content[i]
        if ch == "\\":
            i += 2
            continue
        if ch == "`":
            return i + 1
        if ch == "$" and i + 1 < stop and content[i + 1] == "{":
            i = _match_brace(content, i + 2, stop) + 1
            continue
        i += 1
    raise ScanError("unterminated template literal")


def _match_brace(content: str, start: int, stop: int) -> int:
    depth = 1
    i = start
    while i < stop:
        ch = content[i]

        if ch == "\\":
            i += 2
            continue

        if ch in ("'", '"'):
            i = skip_string(content, i, ch, stop)
            continue

        if ch == "`":
            i = skip_template_literal(content, i, stop)
            continue

        if ch == "/" and i + 1 < stop:
            nxt = content[i + 1]
            if nxt == "/":
                end = content.find("\n", i + 2, stop)
                i = stop if end == -1 else end
                continue
            if nxt == "*":
                end = content.find("*/", i + 2, stop)
                if end == -1:
                    raise ScanError("unterminated block comment")
                i = end + 2
                continue

        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i
        i += 1

    raise ScanError("unterminated block")


def find_block_end(content: str, open_index: int, limit: Optional[int] = None) -> int:
    """Index of the ``}`` closing the ``{`` at ``open_index``.

    Raises:
        ScanError: If no closing brace is found within ``limit`` characters.
    """
    if content[open_index : open_index + 1] != "{":
        raise ScanError(f"expected '{{' at offset {open_index}")
    stop = len(content) if limit is None else min(len(content), open_index + limit)
    return _match_brace(content, open_index + 1, stop)
