"""Folding engine that sequences the collectors, merger and limiter.

The FoldingEngine is the single entry point for folding computation:

- Tags: matched by TagRangeCollector
- Comments and #region markers: CommentRegionCollector
- <script>/<style> content: EmbeddedRangeAggregator, delegating to the
  provider registered for each embedded language
- All candidates: RangeMerger imposes a non-crossing hierarchy
- Optional count constraint: LimitEnforcer drops whole nesting levels

Every call works on a fresh snapshot of the text; nothing about a
document is retained between calls.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from markfold.config import FoldingSettings
from markfold.folding.cancellation import CancellationToken
from markfold.folding.comments import CommentRegionCollector
from markfold.folding.embedded import EmbeddedRangeAggregator
from markfold.folding.limiter import LimitEnforcer
from markfold.folding.merger import RangeMerger, output_order
from markfold.folding.protocols import FoldingProvider
from markfold.folding.tags import TagRangeCollector
from markfold.markup import LanguagePartitioner, MarkupScanner
from markfold.types import FoldingRange, LanguageRegion, ValidationError
from markfold.types.errors import ErrorContext
from markfold.utils.logger import (
    generate_request_id,
    is_debug_enabled,
    logger,
    with_correlation_id,
)


@dataclass
class FoldingResult:
    """Ranges of one computation plus diagnostics about how they were built."""

    ranges: list[FoldingRange] = field(default_factory=list)
    errors: list[dict[str, Any]] = field(default_factory=list)
    candidate_count: int = 0
    rejected_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "ranges": [r.to_dict() for r in self.ranges],
            "errors": self.errors,
            "candidate_count": self.candidate_count,
            "rejected_count": self.rejected_count,
        }


class FoldingEngine:
    """Computes folding ranges for markup documents.

    Usage:
        engine = FoldingEngine()
        ranges = engine.compute(text)
        ranges = engine.compute_lines(["<div>", "text", "</div>"], limit=100)

    Embedded languages are folded through a capability table mapping a
    language id to a provider callable. By default the tree-sitter
    providers for ``javascript`` and ``css`` are registered.
    """

    def __init__(
        self,
        settings: FoldingSettings | None = None,
        providers: Mapping[str, FoldingProvider] | None = None,
        scanner: MarkupScanner | None = None,
        partitioner: LanguagePartitioner | None = None,
    ) -> None:
        self._settings = settings or FoldingSettings()
        if providers is not None:
            self._providers = dict(providers)
        else:
            from markfold.providers import default_providers

            self._providers = default_providers()
        self._scanner = scanner or MarkupScanner()
        self._partitioner = partitioner or LanguagePartitioner(self._settings)
        self._tags = TagRangeCollector()
        self._comments = CommentRegionCollector()
        self._merger = RangeMerger()
        self._limiter = LimitEnforcer()

    @property
    def settings(self) -> FoldingSettings:
        return self._settings

    @property
    def providers(self) -> dict[str, FoldingProvider]:
        """Registered providers keyed by language id."""
        return dict(self._providers)

    def register_provider(self, language_id: str, provider: FoldingProvider) -> None:
        """Add or replace the provider for an embedded language.

        Raises:
            ValidationError: If ``provider`` is not callable.
        """
        if not callable(provider):
            raise ValidationError(
                f"Folding provider for {language_id!r} must be callable, "
                f"got {type(provider).__name__}",
                context=ErrorContext(
                    operation="register_provider",
                    language=language_id,
                    component="engine",
                ),
            )
        self._providers[language_id] = provider

    # ================================================================
    # Entry points
    # ================================================================

    def compute(
        self,
        text: str,
        limit: int | None = None,
        cancellation: CancellationToken | None = None,
    ) -> list[FoldingRange] | None:
        """Compute the folding ranges of a document.

        Args:
            text: Full document text.
            limit: Maximum range count; overrides ``settings.range_limit``.
            cancellation: Token polled between embedded providers.

        Returns:
            Ranges sorted by start line, then end line, or
            None if the computation was cancelled.
        """
        result = self.compute_detailed(text, limit=limit, cancellation=cancellation)
        return None if result is None else result.ranges

    def compute_lines(
        self,
        lines: Sequence[str],
        limit: int | None = None,
        cancellation: CancellationToken | None = None,
    ) -> list[FoldingRange] | None:
        """Like compute(), for a document given as a list of lines."""
        return self.compute("\n".join(lines), limit=limit, cancellation=cancellation)

    def compute_detailed(
        self,
        text: str,
        limit: int | None = None,
        cancellation: CancellationToken | None = None,
        regions: Sequence[LanguageRegion] | None = None,
    ) -> FoldingResult | None:
        """Compute ranges and report candidate and failure statistics.

        Args:
            text: Full document text.
            limit: Maximum range count; overrides ``settings.range_limit``.
            cancellation: Token polled between embedded providers.
            regions: Pre-computed embedded regions; partitioned from the
                markup when omitted.

        Returns:
            FoldingResult, or None if cancelled.
        """
        if limit is None:
            limit = self._settings.range_limit

        with with_correlation_id(generate_request_id(), operation="folding") as ctx:
            log = logger.bind(correlation_id=ctx.correlation_id)

            lines = text.split("\n")
            tokens = self._scanner.tokenize(text)
            if regions is None:
                regions = self._partitioner.partition(tokens, len(lines))

            candidates = self._tags.collect(tokens)
            candidates.extend(self._comments.collect(tokens))

            aggregator = EmbeddedRangeAggregator(
                self._providers,
                max_workers=self._settings.max_workers,
            )
            embedded = aggregator.collect(lines, regions, cancellation)
            if embedded.cancelled or (cancellation is not None and cancellation.is_cancelled):
                log.debug("Folding cancelled, discarding partial results")
                return None
            candidates.extend(embedded.ranges)

            merged = self._merger.merge(candidates)
            if is_debug_enabled():
                for rejected in merged.rejected:
                    log.debug(f"Rejected crossing range {rejected.span} ({rejected.kind})")

            kept = self._limiter.enforce(merged.accepted, limit)
            kept.sort(key=output_order)

            log.debug(
                f"Folding: {len(candidates)} candidates, {len(merged.accepted)} accepted, "
                f"{len(merged.rejected)} rejected, {len(kept)} returned "
                f"({len(regions)} embedded regions, {ctx.elapsed_ms:.1f}ms)"
            )

            return FoldingResult(
                ranges=kept,
                errors=[error.to_dict() for error in embedded.errors],
                candidate_count=len(candidates),
                rejected_count=len(merged.rejected),
            )
