"""Limiting the number of ranges by whole nesting levels.

Depth is the number of accepted ranges that strictly contain a range.
With a limit, the deepest level d is chosen such that all ranges of
depth <= d fit; levels are never split. The top level is always kept
in full, even when it alone exceeds the limit.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence

from markfold.folding.merger import candidate_order
from markfold.types import FoldingRange


def compute_depths(ranges: Sequence[FoldingRange]) -> dict[FoldingRange, int]:
    """Depth of every range in a laminar family.

    Ranges must be pairwise disjoint or nested and free of duplicates.
    """
    depths: dict[FoldingRange, int] = {}
    ancestors: list[FoldingRange] = []
    for folding_range in sorted(ranges, key=candidate_order):
        while ancestors and ancestors[-1].end_line < folding_range.start_line:
            ancestors.pop()
        depths[folding_range] = len(ancestors)
        ancestors.append(folding_range)
    return depths


class LimitEnforcer:
    """Prunes a range forest to at most ``limit`` ranges, level by level."""

    def enforce(
        self,
        ranges: Sequence[FoldingRange],
        limit: int | None,
    ) -> list[FoldingRange]:
        """Apply the limit.

        Args:
            ranges: Accepted, laminar ranges.
            limit: Maximum count; None keeps everything, <= 0 keeps nothing.

        Returns:
            The kept ranges, in the input order.
        """
        if limit is None:
            return list(ranges)
        if limit <= 0:
            return []

        depths = compute_depths(ranges)
        max_depth = self.max_depth_within(Counter(depths.values()), limit)
        return [r for r in ranges if depths[r] <= max_depth]

    @staticmethod
    def max_depth_within(per_level: Counter[int], limit: int) -> int:
        """Deepest level whose cumulative count stays within ``limit``.

        Level 0 is always included.
        """
        if not per_level:
            return 0
        total = 0
        max_depth = 0
        for depth in range(max(per_level) + 1):
            total += per_level[depth]
            if total > limit:
                break
            max_depth = depth
        return max_depth
