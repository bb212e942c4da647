"""Merging candidate ranges into one non-crossing hierarchy.

Candidates from every source are processed in document order: ascending
start line, longer range first on ties. A candidate is accepted only if
it is disjoint from or nested with every range accepted so far. A
candidate that crosses an accepted range is dropped whole, never
trimmed, so whichever range starts first wins regardless of its source.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from markfold.types import FoldingRange


def candidate_order(folding_range: FoldingRange) -> tuple[int, int]:
    """Sort key: start ascending, then end descending (outer first)."""
    return (folding_range.start_line, -folding_range.end_line)


def output_order(folding_range: FoldingRange) -> tuple[int, int]:
    """Sort key for results: start ascending, then end ascending."""
    return (folding_range.start_line, folding_range.end_line)


@dataclass
class MergeResult:
    """Accepted ranges in candidate order, plus rejection bookkeeping."""

    accepted: list[FoldingRange] = field(default_factory=list)
    rejected: list[FoldingRange] = field(default_factory=list)
    duplicates: int = 0


class RangeMerger:
    """Builds a laminar family from unordered candidates.

    Because candidates arrive sorted by start line, every accepted range
    that could still contain the candidate is on an explicit stack of
    open ancestors. A candidate crosses an accepted range exactly when it
    starts inside an open ancestor but ends beyond it.
    """

    def merge(self, candidates: Iterable[FoldingRange]) -> MergeResult:
        result = MergeResult()
        seen: set[tuple[int, int]] = set()
        open_ranges: list[FoldingRange] = []

        for candidate in sorted(candidates, key=candidate_order):
            if candidate.span in seen:
                result.duplicates += 1
                continue

            # Ancestors that end before the candidate starts are closed
            while open_ranges and open_ranges[-1].end_line < candidate.start_line:
                open_ranges.pop()

            if open_ranges and not open_ranges[-1].contains(candidate):
                result.rejected.append(candidate)
                continue

            seen.add(candidate.span)
            result.accepted.append(candidate)
            open_ranges.append(candidate)

        return result
