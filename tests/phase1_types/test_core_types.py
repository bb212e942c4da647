"""
Phase 1 Tests: Core Types

These tests verify the range dataclasses:
- Validation on construction
- Containment, disjointness and crossing
- Serialization to dict and LSP types
"""

import pytest
from dataclasses import asdict

from lsprotocol import types as lsp

from markfold.types import FoldingRange, FoldingRangeKind, LanguageRegion, LineRange


class TestLineRange:
    """Tests for LineRange dataclass."""

    def test_creation(self):
        """LineRange can be created with start and end."""
        range_ = LineRange(start=10, end=20)
        assert range_.start == 10
        assert range_.end == 20

    def test_serialization(self):
        """LineRange serializes to dict."""
        range_ = LineRange(start=1, end=5)
        assert asdict(range_) == {"start": 1, "end": 5}

    def test_contains(self):
        """LineRange.contains checks if line is within range."""
        range_ = LineRange(start=10, end=20)
        assert range_.contains(15) is True
        assert range_.contains(10) is True
        assert range_.contains(20) is True
        assert range_.contains(9) is False
        assert range_.contains(21) is False

    def test_line_count(self):
        """LineRange.line_count returns the number of lines."""
        assert LineRange(start=10, end=20).line_count == 11
        assert LineRange(start=3, end=3).line_count == 1

    def test_validation_start_negative(self):
        with pytest.raises(ValueError, match="start must be non-negative"):
            LineRange(start=-1, end=10)

    def test_validation_end_before_start(self):
        with pytest.raises(ValueError, match="end must be >= start"):
            LineRange(start=20, end=10)


class TestFoldingRange:
    """Tests for FoldingRange dataclass."""

    def test_default_kind_is_tag(self):
        assert FoldingRange(0, 1).kind == FoldingRangeKind.TAG

    def test_single_line_rejected(self):
        """A range must cover at least two lines."""
        with pytest.raises(ValueError, match="end_line must be > start_line"):
            FoldingRange(4, 4)

    def test_negative_start_rejected(self):
        with pytest.raises(ValueError, match="start_line must be non-negative"):
            FoldingRange(-1, 3)

    def test_contains_is_inclusive(self):
        outer = FoldingRange(0, 10)
        assert outer.contains(FoldingRange(0, 10))
        assert outer.contains(FoldingRange(0, 5))
        assert outer.contains(FoldingRange(5, 10))
        assert not outer.contains(FoldingRange(5, 11))

    def test_disjoint(self):
        assert FoldingRange(0, 3).is_disjoint(FoldingRange(4, 6))
        assert FoldingRange(4, 6).is_disjoint(FoldingRange(0, 3))
        # Sharing a line is not disjoint
        assert not FoldingRange(0, 3).is_disjoint(FoldingRange(3, 6))

    def test_crosses(self):
        assert FoldingRange(0, 3).crosses(FoldingRange(1, 5))
        assert FoldingRange(1, 5).crosses(FoldingRange(0, 3))
        assert FoldingRange(0, 3).crosses(FoldingRange(3, 6))
        assert not FoldingRange(0, 5).crosses(FoldingRange(1, 3))
        assert not FoldingRange(0, 1).crosses(FoldingRange(2, 3))

    def test_shifted_preserves_kind(self):
        moved = FoldingRange(1, 2, FoldingRangeKind.REGION).shifted(10)
        assert moved == FoldingRange(11, 12, FoldingRangeKind.REGION)

    def test_hashable_and_equal_by_value(self):
        assert {FoldingRange(0, 2), FoldingRange(0, 2)} == {FoldingRange(0, 2)}

    def test_to_dict(self):
        assert FoldingRange(2, 7, FoldingRangeKind.COMMENT).to_dict() == {
            "start_line": 2,
            "end_line": 7,
            "kind": "comment",
        }

    def test_to_lsp_kinds(self):
        """Tag ranges carry no LSP kind; comments and regions do."""
        assert FoldingRange(0, 1).to_lsp().kind is None
        assert FoldingRange(0, 1, FoldingRangeKind.COMMENT).to_lsp().kind == lsp.FoldingRangeKind.Comment
        assert FoldingRange(0, 1, FoldingRangeKind.REGION).to_lsp().kind == lsp.FoldingRangeKind.Region

    def test_to_lsp_lines(self):
        converted = FoldingRange(3, 9).to_lsp()
        assert isinstance(converted, lsp.FoldingRange)
        assert (converted.start_line, converted.end_line) == (3, 9)


class TestLanguageRegion:
    """Tests for LanguageRegion dataclass."""

    def test_single_line_region_allowed(self):
        region = LanguageRegion(3, 3, "javascript")
        assert region.line_range == LineRange(3, 3)

    def test_end_before_start_rejected(self):
        with pytest.raises(ValueError, match="end_line must be >= start_line"):
            LanguageRegion(5, 4, "css")
