"""Markup tokenizing and embedded-language partitioning.

Components:
- MarkupScanner: Regex-driven tokenizer for tags and comments
- LanguagePartitioner: Finds <script>/<style> content regions

Usage:
    from markfold.markup import LanguagePartitioner, MarkupScanner

    tokens = MarkupScanner().tokenize(text)
    regions = LanguagePartitioner().partition(tokens, line_count)
"""

from .scanner import MarkupScanner, MarkupToken, TokenKind
from .partitioner import LanguagePartitioner, language_for_element

__all__ = [
    "LanguagePartitioner",
    "MarkupScanner",
    "MarkupToken",
    "TokenKind",
    "language_for_element",
]
