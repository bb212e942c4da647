"""Regex-driven markup tokenizer.

Turns document text into the three token kinds the folding collectors
consume: opening tags, closing tags and comments, each carrying 0-based
line positions. Everything else (text, doctype, processing instructions)
is skipped.

Content of ``<script>`` and ``<style>`` elements is raw text: no tokens
are produced for it, so a ``<`` inside JavaScript never opens a tag.
"""

from __future__ import annotations

import bisect
import re
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Iterator

from markfold.constants import RAW_TEXT_ELEMENTS, VOID_ELEMENTS


class TokenKind(StrEnum):
    """Token kinds produced by the scanner."""

    OPEN_TAG = "open_tag"
    CLOSE_TAG = "close_tag"
    COMMENT = "comment"


@dataclass(frozen=True)
class MarkupToken:
    """A scanned tag or comment.

    For OPEN_TAG, ``end_line`` is the line of the terminating ``>`` or
    ``/>``. For COMMENT, ``text`` is the body between the delimiters.
    """

    kind: TokenKind
    start_line: int
    end_line: int
    name: str = ""
    text: str = ""
    self_closing: bool = False
    attributes: dict[str, str] = field(default_factory=dict, compare=False)

    @property
    def spans_lines(self) -> bool:
        return self.end_line > self.start_line


_COMMENT_OPEN = "<!--"
_COMMENT_CLOSE = "-->"

_OPEN_TAG_RE = re.compile(r"<([A-Za-z][^\s/>]*)")
_CLOSE_TAG_RE = re.compile(r"</([A-Za-z][^\s/>]*)[^>]*>?")
_ATTRIBUTE_RE = re.compile(
    r"""([^\s"'<>/=]+)(?:\s*=\s*("[^"]*"|'[^']*'|[^\s>]+))?"""
)
_WHITESPACE_RE = re.compile(r"\s+")


class MarkupScanner:
    """Tokenizer for HTML-like markup.

    Usage:
        scanner = MarkupScanner()
        for token in scanner.scan(text):
            print(token.kind, token.name, token.start_line)
    """

    def __init__(
        self,
        void_elements: frozenset[str] = VOID_ELEMENTS,
        raw_text_elements: frozenset[str] = RAW_TEXT_ELEMENTS,
    ) -> None:
        self._void_elements = void_elements
        self._raw_text_elements = raw_text_elements
        self._raw_text_end: dict[str, re.Pattern[str]] = {}

    def tokenize(self, text: str) -> list[MarkupToken]:
        """Scan the whole document into a list of tokens."""
        return list(self.scan(text))

    def scan(self, text: str) -> Iterator[MarkupToken]:
        """Yield tokens in document order.

        Args:
            text: Full document text.

        Yields:
            MarkupToken for every tag and comment found.
        """
        line_starts = _line_starts(text)

        def line_at(offset: int) -> int:
            return bisect.bisect_right(line_starts, offset) - 1

        length = len(text)
        pos = 0
        while pos < length:
            lt = text.find("<", pos)
            if lt < 0:
                break

            if text.startswith(_COMMENT_OPEN, lt):
                body_start = lt + len(_COMMENT_OPEN)
                close = text.find(_COMMENT_CLOSE, body_start)
                if close < 0:
                    # Unterminated comment runs to end of input
                    body, end = text[body_start:], length
                else:
                    body, end = text[body_start:close], close + len(_COMMENT_CLOSE)
                yield MarkupToken(
                    kind=TokenKind.COMMENT,
                    start_line=line_at(lt),
                    end_line=line_at(max(end - 1, lt)),
                    text=body,
                )
                pos = end
                continue

            if text.startswith("</", lt):
                match = _CLOSE_TAG_RE.match(text, lt)
                if match:
                    yield MarkupToken(
                        kind=TokenKind.CLOSE_TAG,
                        start_line=line_at(lt),
                        end_line=line_at(max(match.end() - 1, lt)),
                        name=match.group(1).lower(),
                    )
                    pos = match.end()
                else:
                    pos = lt + 2
                continue

            if text.startswith("<!", lt) or text.startswith("<?", lt):
                close = text.find(">", lt)
                pos = length if close < 0 else close + 1
                continue

            match = _OPEN_TAG_RE.match(text, lt)
            if not match:
                pos = lt + 1
                continue

            name = match.group(1).lower()
            attributes, end, explicit_close = self._scan_attributes(text, match.end())
            yield MarkupToken(
                kind=TokenKind.OPEN_TAG,
                start_line=line_at(lt),
                end_line=line_at(max(end - 1, lt)),
                name=name,
                self_closing=explicit_close or name in self._void_elements,
                attributes=attributes,
            )
            pos = end

            if name in self._raw_text_elements and not explicit_close:
                raw_end = self._raw_text_end_pattern(name).search(text, pos)
                pos = length if raw_end is None else raw_end.start()

    def _scan_attributes(self, text: str, pos: int) -> tuple[dict[str, str], int, bool]:
        """Read attributes up to the end of an opening tag.

        Returns:
            Tuple of (attributes, offset after the tag, explicit ``/>``).
        """
        attributes: dict[str, str] = {}
        length = len(text)
        while pos < length:
            ws = _WHITESPACE_RE.match(text, pos)
            if ws:
                pos = ws.end()
                if pos >= length:
                    break
            char = text[pos]
            if char == ">":
                return attributes, pos + 1, False
            if text.startswith("/>", pos):
                return attributes, pos + 2, True
            if char == "<":
                # Unterminated tag; the next tag starts here
                return attributes, pos, False
            attr = _ATTRIBUTE_RE.match(text, pos)
            if attr is None:
                pos += 1
                continue
            value = attr.group(2) or ""
            if value[:1] in ("'", '"'):
                value = value[1:-1]
            attributes[attr.group(1).lower()] = value
            pos = attr.end()
        return attributes, length, False

    def _raw_text_end_pattern(self, name: str) -> re.Pattern[str]:
        pattern = self._raw_text_end.get(name)
        if pattern is None:
            pattern = re.compile(rf"</{re.escape(name)}(?=[\s/>]|$)", re.IGNORECASE)
            self._raw_text_end[name] = pattern
        return pattern


def _line_starts(text: str) -> list[int]:
    """Offsets at which each line begins."""
    starts = [0]
    index = text.find("\n")
    while index >= 0:
        starts.append(index + 1)
        index = text.find("\n", index + 1)
    return starts
