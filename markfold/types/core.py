"""
Core types for folding-range computation.

These are the foundational data structures shared by the collectors,
the merger, the limiter and the embedded-language providers.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from lsprotocol import types as lsp


class FoldingRangeKind(StrEnum):
    """Closed set of range kinds.

    TAG covers every structural block: markup elements as well as
    code blocks reported by embedded-language providers.
    """

    TAG = "tag"
    COMMENT = "comment"
    REGION = "region"


_LSP_KINDS: dict[FoldingRangeKind, lsp.FoldingRangeKind | None] = {
    FoldingRangeKind.TAG: None,
    FoldingRangeKind.COMMENT: lsp.FoldingRangeKind.Comment,
    FoldingRangeKind.REGION: lsp.FoldingRangeKind.Region,
}


@dataclass(frozen=True)
class LineRange:
    """Represents a range of lines in a source file."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0:
            raise ValueError("start must be non-negative")
        if self.end < self.start:
            raise ValueError("end must be >= start")

    @property
    def line_count(self) -> int:
        """Number of lines in this range."""
        return self.end - self.start + 1

    def contains(self, line: int) -> bool:
        """Check if a line number is within this range (inclusive)."""
        return self.start <= line <= self.end


@dataclass(frozen=True)
class FoldingRange:
    """A collapsible span of lines, 0-based and inclusive."""

    start_line: int
    end_line: int
    kind: FoldingRangeKind = FoldingRangeKind.TAG

    def __post_init__(self) -> None:
        if self.start_line < 0:
            raise ValueError("start_line must be non-negative")
        if self.end_line <= self.start_line:
            raise ValueError("end_line must be > start_line")

    def contains(self, other: FoldingRange) -> bool:
        """True if ``other`` lies within this range (bounds inclusive)."""
        return self.start_line <= other.start_line and other.end_line <= self.end_line

    def is_disjoint(self, other: FoldingRange) -> bool:
        return self.end_line < other.start_line or other.end_line < self.start_line

    def crosses(self, other: FoldingRange) -> bool:
        """True if the two ranges partially overlap without nesting."""
        return not (
            self.is_disjoint(other) or self.contains(other) or other.contains(self)
        )

    def shifted(self, offset: int) -> FoldingRange:
        """Return a copy moved down by ``offset`` lines."""
        return FoldingRange(self.start_line + offset, self.end_line + offset, self.kind)

    @property
    def span(self) -> tuple[int, int]:
        return (self.start_line, self.end_line)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "start_line": self.start_line,
            "end_line": self.end_line,
            "kind": str(self.kind),
        }

    def to_lsp(self) -> lsp.FoldingRange:
        """Convert to an LSP FoldingRange. Tag ranges carry no kind."""
        return lsp.FoldingRange(
            start_line=self.start_line,
            end_line=self.end_line,
            kind=_LSP_KINDS[self.kind],
        )


@dataclass(frozen=True)
class LanguageRegion:
    """Lines of the host document written in an embedded language."""

    start_line: int
    end_line: int
    language_id: str

    def __post_init__(self) -> None:
        if self.start_line < 0:
            raise ValueError("start_line must be non-negative")
        if self.end_line < self.start_line:
            raise ValueError("end_line must be >= start_line")

    @property
    def line_range(self) -> LineRange:
        return LineRange(start=self.start_line, end=self.end_line)
