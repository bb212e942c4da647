"""Tag nesting ranges.

Opening tags are pushed on an explicit stack and matched by name against
closing tags. A closer pops its opener together with everything opened
after it; those inner openers are unmatched and produce nothing.
"""

from __future__ import annotations

from collections.abc import Iterable

from markfold.markup.scanner import MarkupToken, TokenKind
from markfold.types import FoldingRange, FoldingRangeKind


class TagRangeCollector:
    """Emits a TAG range for every matched, multi-line element.

    The range runs from the opener's line to the line before the closer,
    so the closing tag stays visible when the range is folded.
    """

    def collect(self, tokens: Iterable[MarkupToken]) -> list[FoldingRange]:
        ranges: list[FoldingRange] = []
        stack: list[tuple[str, int]] = []

        for token in tokens:
            if token.kind == TokenKind.OPEN_TAG:
                if token.self_closing:
                    # Complete on its own; folds only its wrapped attribute lines
                    last_line = token.end_line - 1
                    if last_line > token.start_line:
                        ranges.append(
                            FoldingRange(token.start_line, last_line, FoldingRangeKind.TAG)
                        )
                else:
                    stack.append((token.name, token.start_line))

            elif token.kind == TokenKind.CLOSE_TAG:
                index = _find_opener(stack, token.name)
                if index < 0:
                    continue
                _, open_line = stack[index]
                del stack[index:]
                last_line = token.start_line - 1
                if last_line > open_line:
                    ranges.append(FoldingRange(open_line, last_line, FoldingRangeKind.TAG))

        # Anything left on the stack was never closed
        return ranges


def _find_opener(stack: list[tuple[str, int]], name: str) -> int:
    """Index of the topmost stack entry named ``name``, or -1."""
    for index in range(len(stack) - 1, -1, -1):
        if stack[index][0] == name:
            return index
    return -1
