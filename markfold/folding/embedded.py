"""Embedded-language range aggregation.

Each LanguageRegion is handed to the provider registered for its
language, with only that region's lines as input. Results come back
relative to the region and are shifted into document coordinates.

A provider that raises, or returns anything but FoldingRange items, is
isolated: its region contributes nothing and the failure is recorded as
a ProviderError. Providers have no ordering
dependency, so with ``max_workers > 1`` they run on a thread pool; the
output is collected in region order either way.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from contextvars import copy_context
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from loguru import logger

from markfold.folding.cancellation import CancellationToken
from markfold.folding.protocols import FoldingProvider
from markfold.types import FoldingRange, LanguageRegion, ProviderError
from markfold.types.errors import ErrorContext
from markfold.utils.logger import get_correlation_id

if TYPE_CHECKING:
    from loguru import Logger


@dataclass
class EmbeddedRanges:
    """Output of one aggregation run."""

    ranges: list[FoldingRange] = field(default_factory=list)
    errors: list[ProviderError] = field(default_factory=list)
    cancelled: bool = False


class EmbeddedRangeAggregator:
    """Dispatches embedded regions to their folding providers.

    Usage:
        aggregator = EmbeddedRangeAggregator({"javascript": provider})
        result = aggregator.collect(lines, regions)
    """

    def __init__(
        self,
        providers: Mapping[str, FoldingProvider],
        max_workers: int = 1,
    ) -> None:
        self._providers = providers
        self._max_workers = max_workers

    def collect(
        self,
        lines: Sequence[str],
        regions: Sequence[LanguageRegion],
        cancellation: CancellationToken | None = None,
    ) -> EmbeddedRanges:
        """Fold every region that has a provider.

        Args:
            lines: Document lines (without line terminators).
            regions: Disjoint embedded-language regions.
            cancellation: Checked before each provider invocation.

        Returns:
            Ranges in document coordinates plus isolated failures. When
            cancelled, ``cancelled`` is set and no ranges are returned.
        """
        log = logger.bind(correlation_id=get_correlation_id())
        jobs: list[tuple[LanguageRegion, FoldingProvider]] = []
        for region in regions:
            provider = self._providers.get(region.language_id)
            if provider is None:
                log.debug(f"No folding provider for {region.language_id}, skipping")
                continue
            jobs.append((region, provider))
        if not jobs:
            return EmbeddedRanges()

        if self._max_workers > 1 and len(jobs) > 1:
            outcomes = self._run_parallel(lines, jobs, cancellation)
        else:
            outcomes = self._run_sequential(lines, jobs, cancellation)
        if outcomes is None:
            return EmbeddedRanges(cancelled=True)

        result = EmbeddedRanges()
        for ranges, error in outcomes:
            result.ranges.extend(ranges)
            if error is not None:
                result.errors.append(error)
        return result

    def _run_sequential(
        self,
        lines: Sequence[str],
        jobs: list[tuple[LanguageRegion, FoldingProvider]],
        cancellation: CancellationToken | None,
    ) -> list[tuple[list[FoldingRange], ProviderError | None]] | None:
        outcomes = []
        for region, provider in jobs:
            if cancellation is not None and cancellation.is_cancelled:
                return None
            outcomes.append(_fold_region(lines, region, provider))
        return outcomes

    def _run_parallel(
        self,
        lines: Sequence[str],
        jobs: list[tuple[LanguageRegion, FoldingProvider]],
        cancellation: CancellationToken | None,
    ) -> list[tuple[list[FoldingRange], ProviderError | None]] | None:
        def run(job: tuple[LanguageRegion, FoldingProvider]):
            if cancellation is not None and cancellation.is_cancelled:
                return None
            region, provider = job
            return _fold_region(lines, region, provider)

        # Each job runs in a copy of the caller's context to keep its correlation id
        with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
            futures = [executor.submit(copy_context().run, run, job) for job in jobs]
            outcomes = [future.result() for future in futures]

        if any(outcome is None for outcome in outcomes):
            return None
        return outcomes


def _fold_region(
    lines: Sequence[str],
    region: LanguageRegion,
    provider: FoldingProvider,
) -> tuple[list[FoldingRange], ProviderError | None]:
    """Invoke one provider and shift its ranges into document lines.

    Anything that goes wrong, whether the provider raises or returns
    something other than a list of FoldingRange, discards the region.
    """
    log = logger.bind(correlation_id=get_correlation_id())
    text = "\n".join(lines[region.start_line : region.end_line + 1])
    try:
        ranges = _shift_into_region(provider(text, region.line_range), region, log)
    except Exception as e:
        log.opt(exception=e).warning(
            f"Folding provider for {region.language_id} failed on lines "
            f"{region.start_line}-{region.end_line}"
        )
        if isinstance(e, ProviderError):
            return [], e
        error = ProviderError(
            f"{type(e).__name__}: {e}",
            language=region.language_id,
            context=ErrorContext(
                operation="fold_embedded",
                additional_info={
                    "start_line": region.start_line,
                    "end_line": region.end_line,
                },
            ),
            original_error=e,
        )
        return [], error
    return ranges, None


def _shift_into_region(
    relative: Iterable[FoldingRange],
    region: LanguageRegion,
    log: Logger,
) -> list[FoldingRange]:
    if relative is None:
        raise TypeError("provider returned None instead of a list of FoldingRange")

    last_relative_line = region.end_line - region.start_line
    ranges = []
    for folding_range in relative:
        if not isinstance(folding_range, FoldingRange):
            raise TypeError(
                f"provider returned {type(folding_range).__name__}, expected FoldingRange"
            )
        if folding_range.end_line > last_relative_line:
            log.debug(
                f"Dropping {region.language_id} range {folding_range.span} "
                f"outside its region of {last_relative_line + 1} lines"
            )
            continue
        ranges.append(folding_range.shifted(region.start_line))
    return ranges
