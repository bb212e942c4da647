"""Folding-range computation pipeline.

Collectors run independently and emit unordered candidates; the merger
imposes a non-crossing hierarchy and the limiter applies the count
constraint:

    tags + comments/regions + embedded  ->  merge  ->  limit

Usage:
    from markfold.folding import FoldingEngine
    engine = FoldingEngine()
    ranges = engine.compute(text, limit=5000)
"""

from markfold.folding.cancellation import CancellationToken
from markfold.folding.protocols import FoldingProvider, ProviderTable
from markfold.folding.tags import TagRangeCollector
from markfold.folding.comments import CommentRegionCollector, RegionStack
from markfold.folding.embedded import EmbeddedRangeAggregator, EmbeddedRanges
from markfold.folding.merger import MergeResult, RangeMerger
from markfold.folding.limiter import LimitEnforcer, compute_depths
from markfold.folding.engine import FoldingEngine, FoldingResult

__all__ = [
    "CancellationToken",
    "CommentRegionCollector",
    "EmbeddedRangeAggregator",
    "EmbeddedRanges",
    "FoldingEngine",
    "FoldingProvider",
    "FoldingResult",
    "LimitEnforcer",
    "MergeResult",
    "ProviderTable",
    "RangeMerger",
    "RegionStack",
    "TagRangeCollector",
    "compute_depths",
]
