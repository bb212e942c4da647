"""Limit enforcer tests: whole-level truncation."""

from collections import Counter

import pytest

from markfold.folding import LimitEnforcer, compute_depths
from markfold.types import FoldingRange

# Depth profile {0: 1, 1: 1, 2: 4, 3: 2}
FOREST = [
    FoldingRange(0, 19),
    FoldingRange(1, 18),
    FoldingRange(2, 3),
    FoldingRange(5, 11),
    FoldingRange(6, 7),
    FoldingRange(9, 10),
    FoldingRange(13, 14),
    FoldingRange(16, 17),
]

DEPTH_0_1 = [(0, 19), (1, 18)]
DEPTH_0_2 = [(0, 19), (1, 18), (2, 3), (5, 11), (13, 14), (16, 17)]


def limited(limit):
    return [r.span for r in LimitEnforcer().enforce(FOREST, limit)]


class TestComputeDepths:
    def test_depth_profile(self):
        depths = compute_depths(FOREST)
        assert Counter(depths.values()) == Counter({0: 1, 1: 1, 2: 4, 3: 2})
        assert depths[FoldingRange(6, 7)] == 3
        assert depths[FoldingRange(13, 14)] == 2

    def test_siblings_share_depth(self):
        depths = compute_depths([FoldingRange(0, 1), FoldingRange(3, 4), FoldingRange(6, 9)])
        assert set(depths.values()) == {0}

    def test_same_start_nested(self):
        depths = compute_depths([FoldingRange(2, 4), FoldingRange(2, 9)])
        assert depths[FoldingRange(2, 9)] == 0
        assert depths[FoldingRange(2, 4)] == 1


class TestLimitEnforcer:
    def test_no_limit_returns_everything(self):
        assert limited(None) == [r.span for r in FOREST]

    def test_limit_equal_to_total(self):
        assert limited(8) == [r.span for r in FOREST]

    @pytest.mark.parametrize("limit", [6, 7])
    def test_whole_level_dropped(self, limit):
        """One level-3 range would fit under 7, but levels are never split."""
        assert limited(limit) == DEPTH_0_2

    @pytest.mark.parametrize("limit", [2, 3, 4, 5])
    def test_two_levels(self, limit):
        assert limited(limit) == DEPTH_0_1

    def test_limit_one(self):
        assert limited(1) == [(0, 19)]

    def test_top_level_always_kept(self):
        roots = [FoldingRange(i * 3, i * 3 + 1) for i in range(5)]
        assert LimitEnforcer().enforce(roots, 2) == roots

    @pytest.mark.parametrize("limit", [0, -3])
    def test_non_positive_limit_is_empty(self, limit):
        assert LimitEnforcer().enforce(FOREST, limit) == []

    def test_empty_forest(self):
        assert LimitEnforcer().enforce([], 5) == []

    def test_max_depth_within(self):
        per_level = Counter({0: 1, 1: 1, 2: 4, 3: 2})
        assert LimitEnforcer.max_depth_within(per_level, 8) == 3
        assert LimitEnforcer.max_depth_within(per_level, 7) == 2
        assert LimitEnforcer.max_depth_within(per_level, 1) == 0
        assert LimitEnforcer.max_depth_within(Counter(), 3) == 0
