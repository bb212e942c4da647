"""
Markfold - Folding-range computation for markup documents.

Derives the line ranges a reader can collapse in an HTML-like document:
- Tag nesting matched with an explicit stack
- Comment blocks and #region/#endregion markers
- Embedded <script>/<style> content folded by tree-sitter grammars
- Merging into one non-crossing hierarchy, truncated by whole nesting levels

Usage:
    from markfold import FoldingEngine
    engine = FoldingEngine()
    ranges = engine.compute(text, limit=5000)
"""

__version__ = "0.1.0"

from markfold.config import FoldingSettings
from markfold.folding import CancellationToken, FoldingEngine, FoldingResult
from markfold.types import FoldingRange, FoldingRangeKind, LanguageRegion, LineRange

__all__ = [
    "CancellationToken",
    "FoldingEngine",
    "FoldingRange",
    "FoldingRangeKind",
    "FoldingResult",
    "FoldingSettings",
    "LanguageRegion",
    "LineRange",
]
