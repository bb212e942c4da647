"""Embedded-language partitioning.

Classifies which lines of a markup document hold ``<script>`` or
``<style>`` content. Regions are line-granular: a region covers the
lines strictly between the line holding the opening tag's ``>`` and the
line holding the closing tag.
"""

from __future__ import annotations

from collections.abc import Iterable

from markfold.config import FoldingSettings
from markfold.constants import (
    CSS,
    JAVASCRIPT,
    JAVASCRIPT_MIME_TYPES,
    RAW_TEXT_ELEMENTS,
)
from markfold.markup.scanner import MarkupToken, TokenKind
from markfold.types import LanguageRegion


def language_for_element(token: MarkupToken) -> str | None:
    """Map an opening script/style tag to the language of its content.

    Returns:
        Language id, or None if the content is not a supported language.
    """
    if token.name == "style":
        return CSS
    if token.name == "script":
        script_type = token.attributes.get("type", "").strip().lower()
        if script_type in JAVASCRIPT_MIME_TYPES:
            return JAVASCRIPT
    return None


class LanguagePartitioner:
    """Derives disjoint, ordered LanguageRegions from a token stream.

    Usage:
        partitioner = LanguagePartitioner()
        regions = partitioner.partition(tokens, line_count)
    """

    def __init__(self, settings: FoldingSettings | None = None) -> None:
        self._settings = settings or FoldingSettings()

    def partition(
        self,
        tokens: Iterable[MarkupToken],
        line_count: int,
    ) -> list[LanguageRegion]:
        """Find embedded-language regions.

        Args:
            tokens: Scanner output in document order.
            line_count: Number of lines in the document.

        Returns:
            Regions sorted by start line; never overlapping.
        """
        regions: list[LanguageRegion] = []
        pending: tuple[MarkupToken, str | None] | None = None

        for token in tokens:
            if pending is not None:
                opener, language = pending
                if token.kind == TokenKind.CLOSE_TAG and token.name == opener.name:
                    self._add_region(regions, language, opener.end_line + 1, token.start_line - 1)
                    pending = None
                continue

            if (
                token.kind == TokenKind.OPEN_TAG
                and token.name in RAW_TEXT_ELEMENTS
                and not token.self_closing
            ):
                pending = (token, language_for_element(token))

        if pending is not None:
            # Unclosed element: content runs to the last line
            opener, language = pending
            self._add_region(regions, language, opener.end_line + 1, line_count - 1)

        return regions

    def _add_region(
        self,
        regions: list[LanguageRegion],
        language: str | None,
        start_line: int,
        end_line: int,
    ) -> None:
        if language is None or not self._settings.is_language_enabled(language):
            return
        if end_line < start_line:
            return
        if regions and regions[-1].end_line >= start_line:
            return
        regions.append(LanguageRegion(start_line, end_line, language))
