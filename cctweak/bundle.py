"""In-memory bundle editing primitives.

Every customization point turns its located spans into :class:`Edit` objects
computed against one buffer state.  :func:`apply_edits` then splices them in
strictly descending start order, so no edit ever sees an offset shifted by
another edit of the same pass.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, List, Optional, Sequence, Tuple

from .errors import InvalidEditError, OverlappingEditsError

if TYPE_CHECKING:
    from .trace import DiffTracer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LocationSpan:
    """Half-open ``[start, end)`` range of the current buffer.

    ``identifier`` carries a name captured by the locator (a variable the
    writer needs to reference, for example).
    """

    start: int
    end: int
    identifier: Optional[str] = None

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"invalid span [{self.start}, {self.end})")

    def __len__(self) -> int:
        return self.end - self.start

    def overlaps(self, other: "LocationSpan") -> bool:
        return self.start < other.end and other.start < self.end

    def text(self, content: str) -> str:
        return content[self.start : self.end]


@dataclass(frozen=True)
class Edit:
    span: LocationSpan
    new_content: str


@dataclass(frozen=True)
class AppliedEdit:
    """An edit after splicing; ``inserted`` is its range in the new buffer."""

    point: str
    start: int
    old_end: int
    old_content: str
    new_content: str

    @property
    def inserted(self) -> Tuple[int, int]:
        return (self.start, self.start + len(self.new_content))


def js_literal(value: Any) -> str:
    """Serialize ``value`` as compact JSON, which is also a valid JS literal."""
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def splice(content: str, span: LocationSpan, new_content: str) -> str:
    if span.end > len(content):
        raise InvalidEditError(
            f"span [{span.start}, {span.end}) exceeds buffer length {len(content)}"
        )
    return content[: span.start] + new_content + content[span.end :]


def check_non_overlapping(spans: Sequence[LocationSpan]) -> None:
    ordered = sorted(spans, key=lambda s: (s.start, s.end))
    for previous, current in zip(ordered, ordered[1:]):
        if previous.overlaps(current) or (
            previous.start == current.start and previous.end == current.end
        ):
            raise OverlappingEditsError(
                f"edits overlap: [{previous.start}, {previous.end}) and "
                f"[{current.start}, {current.end})"
            )


def apply_edits(
    content: str,
    edits: Sequence[Edit],
    point: str,
    tracer: Optional["DiffTracer"] = None,
) -> Tuple[str, List[AppliedEdit]]:
    """Splice ``edits`` into ``content`` in descending start order.

    All spans must refer to ``content`` as given.  Overlap is checked before
    anything is spliced, so a rejected pass leaves no partial result.
    """
    check_non_overlapping([edit.span for edit in edits])
    for edit in edits:
        if edit.span.end > len(content):
            raise InvalidEditError(
                f"{point}: span [{edit.span.start}, {edit.span.end}) exceeds "
                f"buffer length {len(content)}"
            )

    applied: List[AppliedEdit] = []
    for edit in sorted(edits, key=lambda e: e.span.start, reverse=True):
        before = content
        content = splice(content, edit.span, edit.new_content)
        record = AppliedEdit(
            point=point,
            start=edit.span.start,
            old_end=edit.span.end,
            old_content=edit.span.text(before),
            new_content=edit.new_content,
        )
        applied.append(record)
        if tracer is not None:
            tracer.record(before, content, record)

    logger.debug(f"{point}: applied {len(applied)} edit(s)")
    return content, applied
