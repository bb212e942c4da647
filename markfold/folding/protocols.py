"""Provider protocol for embedded-language folding.

An embedded language is folded by a plain callable looked up by
language id. Any function or object with a matching ``__call__`` can be
registered; no base class is involved.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol, runtime_checkable

from markfold.types import FoldingRange, LineRange


@runtime_checkable
class FoldingProvider(Protocol):
    """Computes folding ranges for one embedded region.

    ``text`` holds only the region's lines. Returned ranges are relative
    to the first of those lines; ``line_range`` tells the provider where
    the text sits in the host document.
    """

    def __call__(self, text: str, line_range: LineRange) -> list[FoldingRange]:
        ...


ProviderTable = Mapping[str, FoldingProvider]
