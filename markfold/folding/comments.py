"""Comment and region-marker ranges.

A comment whose body starts with ``#region`` opens a region and one
starting with ``#endregion`` closes the most recent open region. Region
starts live on their own stack, independent from tag nesting. Any other
comment spanning several lines folds as a COMMENT range.
"""

from __future__ import annotations

from collections.abc import Iterable

from markfold.constants import REGION_END_PATTERN, REGION_START_PATTERN
from markfold.markup.scanner import MarkupToken, TokenKind
from markfold.types import FoldingRange, FoldingRangeKind


class RegionStack:
    """Explicit stack of region start lines.

    Shared by the markup comment collector and the embedded providers,
    which apply the same marker rules to their own comment syntax.
    """

    def __init__(self) -> None:
        self._starts: list[int] = []

    def feed(self, body: str, start_line: int, end_line: int) -> FoldingRange | None:
        """Process one comment body (delimiters already stripped).

        Returns:
            The range produced by this comment, if any.
        """
        if REGION_START_PATTERN.match(body):
            self._starts.append(start_line)
            return None

        if REGION_END_PATTERN.match(body):
            if not self._starts:
                return None
            region_start = self._starts.pop()
            if end_line > region_start:
                return FoldingRange(region_start, end_line, FoldingRangeKind.REGION)
            return None

        if end_line > start_line:
            return FoldingRange(start_line, end_line, FoldingRangeKind.COMMENT)
        return None

    def __len__(self) -> int:
        return len(self._starts)


class CommentRegionCollector:
    """Emits COMMENT and REGION ranges from markup comment tokens."""

    def collect(self, tokens: Iterable[MarkupToken]) -> list[FoldingRange]:
        ranges: list[FoldingRange] = []
        regions = RegionStack()

        for token in tokens:
            if token.kind != TokenKind.COMMENT:
                continue
            folding_range = regions.feed(token.text, token.start_line, token.end_line)
            if folding_range is not None:
                ranges.append(folding_range)

        return ranges
