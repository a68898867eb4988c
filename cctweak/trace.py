"""Before/after context around each bundle edit, for debugging patch runs."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import List, Optional

from .bundle import AppliedEdit

logger = logging.getLogger(__name__)

CONTEXT_CHARS = 20

_RED = "\x1b[31m"
_GREEN = "\x1b[32m"
_RESET = "\x1b[0m"


def is_debug() -> bool:
    return os.environ.get("CCTWEAK_DEBUG", "").lower() in ("1", "true", "yes")


@dataclass(frozen=True)
class TraceEntry:
    point: str
    old_line: str
    new_line: str

    def render(self) -> str:
        return (
            f"--- Diff ({self.point}) ---\n"
            f"OLD: {self.old_line}\n"
            f"NEW: {self.new_line}\n"
            f"--- End Diff ---"
        )


class DiffTracer:
    """Collects a short coloured excerpt around every applied edit.

    Entries are always kept in memory; they are written to the log only when
    ``enabled`` (defaults to the ``CCTWEAK_DEBUG`` environment variable).
    """

    def __init__(
        self,
        enabled: Optional[bool] = None,
        context_chars: int = CONTEXT_CHARS,
        color: bool = True,
    ) -> None:
        self.enabled = is_debug() if enabled is None else enabled
        self.context_chars = context_chars
        self.color = color
        self.entries: List[TraceEntry] = []

    def _mark(self, text: str, color: str) -> str:
        if not self.color:
            return f"[{text}]"
        return f"{color}{text}{_RESET}"

    def record(self, before: str, after: str, edit: AppliedEdit) -> TraceEntry:
        start = edit.start
        ctx_start = max(0, start - self.context_chars)
        old_end = edit.old_end
        new_end = start + len(edit.new_content)

        old_line = (
            before[ctx_start:start]
            + self._mark(before[start:old_end], _RED)
            + before[old_end : min(len(before), old_end + self.context_chars)]
        )
        new_line = (
            after[ctx_start:start]
            + self._mark(after[start:new_end], _GREEN)
            + after[new_end : min(len(after), new_end + self.context_chars)]
        )

        entry = TraceEntry(point=edit.point, old_line=old_line, new_line=new_line)
        self.entries.append(entry)
        if self.enabled:
            logger.debug("\n" + entry.render())
        return entry

    def clear(self) -> None:
        self.entries = []
