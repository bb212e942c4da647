"""Embedded-language folding using tree-sitter grammars.

Parses the text of one embedded region and reports:
- TAG ranges for multi-line block nodes (statement blocks, objects, rule
  bodies, ...), from the opening line to the line of the closing bracket
- COMMENT ranges for multi-line comments
- REGION ranges for ``#region`` / ``#endregion`` marker comments, with
  the same stack rules as markup comments

The syntax tree is walked with an explicit stack, so deeply nested code
never hits the interpreter's recursion limit.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

from loguru import logger

from markfold.constants import CSS, JAVASCRIPT
from markfold.folding.comments import RegionStack
from markfold.types import FoldingRange, FoldingRangeKind, LineRange, ProviderError
from markfold.types.errors import ErrorCode, ErrorContext
from markfold.utils.logger import get_correlation_id

if TYPE_CHECKING:
    from tree_sitter import Language, Node


# Node types folded as blocks, per grammar
BLOCK_NODE_TYPES: dict[str, frozenset[str]] = {
    JAVASCRIPT: frozenset(
        {
            "statement_block",
            "class_body",
            "switch_body",
            "object",
            "object_pattern",
            "array",
            "array_pattern",
            "named_imports",
            "template_string",
        }
    ),
    CSS: frozenset(
        {
            "block",
            "keyframe_block_list",
        }
    ),
}

COMMENT_NODE_TYPES: frozenset[str] = frozenset({"comment", "js_comment"})


def strip_comment_delimiters(text: str) -> str:
    """Body of a ``//`` or ``/* */`` comment."""
    if text.startswith("//"):
        return text[2:]
    if text.startswith("/*"):
        body = text[2:]
        return body[:-2] if body.endswith("*/") else body
    return text


class TreeSitterFoldingProvider:
    """Folding provider for one tree-sitter language.

    Instances are callables matching the FoldingProvider protocol, so they
    can be registered directly in the engine's provider table.

    Usage:
        provider = TreeSitterFoldingProvider("javascript")
        ranges = provider("function f() {\\n}", LineRange(0, 1))
    """

    def __init__(
        self,
        language: str,
        block_types: frozenset[str] | None = None,
    ) -> None:
        self._language_name = language
        self._block_types = (
            block_types if block_types is not None else BLOCK_NODE_TYPES.get(language, frozenset())
        )
        self._language: Language | None = None
        self._lock = threading.Lock()

    @property
    def language(self) -> str:
        return self._language_name

    def __call__(self, text: str, line_range: LineRange) -> list[FoldingRange]:
        """Fold one region's text.

        Args:
            text: The region's lines joined with newlines.
            line_range: Where the region sits in the host document.

        Returns:
            Ranges relative to the first line of ``text``.
        """
        from tree_sitter import Parser

        # Parser instances are not shared between threads
        parser = Parser(self._get_language())
        tree = parser.parse(text.encode("utf-8"))
        ranges = self._collect(tree.root_node)
        logger.bind(correlation_id=get_correlation_id()).debug(
            f"{self._language_name}: {len(ranges)} ranges for lines "
            f"{line_range.start}-{line_range.end}"
        )
        return ranges

    def _get_language(self) -> Language:
        """Load the grammar once, on first use."""
        if self._language is not None:
            return self._language
        with self._lock:
            if self._language is None:
                try:
                    import tree_sitter_language_pack as tslp

                    self._language = tslp.get_language(self._language_name)
                    logger.bind(correlation_id=get_correlation_id()).debug(
                        f"Initialized tree-sitter grammar for {self._language_name}"
                    )
                except Exception as e:
                    raise ProviderError(
                        f"tree-sitter grammar unavailable for {self._language_name}: {e}",
                        language=self._language_name,
                        context=ErrorContext(operation="load_grammar", component="tree_sitter"),
                        original_error=e,
                        code=ErrorCode.TREE_SITTER_FAILED,
                    ) from e
        return self._language

    def _collect(self, root: Node) -> list[FoldingRange]:
        ranges: list[FoldingRange] = []
        regions = RegionStack()

        # Pre-order walk; children pushed in reverse to keep document order
        stack = list(reversed(root.children))
        while stack:
            node = stack.pop()
            start_line = node.start_point[0]
            end_line = node.end_point[0]

            if node.type in COMMENT_NODE_TYPES:
                body = strip_comment_delimiters(node.text.decode("utf-8", errors="replace"))
                folding_range = regions.feed(body, start_line, end_line)
                if folding_range is not None:
                    ranges.append(folding_range)
                continue

            if node.type in self._block_types and end_line > start_line:
                ranges.append(FoldingRange(start_line, end_line, FoldingRangeKind.TAG))

            stack.extend(reversed(node.children))

        return ranges
