"""Batch search across symbols: fetch, analyze, filter, rank.

Symbols are processed strictly one after another. The provider call is the
only await point, so progress callbacks observe indices 0..N without gaps and
a failure on one symbol never touches results already collected.
"""

from __future__ import annotations

import asyncio
import datetime as dt
import logging
from collections.abc import Sequence
from typing import Protocol

from option_scanner.data.providers import MarketDataProvider, MarketSnapshot
from option_scanner.errors import InvalidInputError, MarketDataError
from option_scanner.scanner.analyzer import OptionAnalyzer
from option_scanner.scanner.filters import SearchFilters
from option_scanner.scanner.ranking import sort_by_edge
from option_scanner.scanner.records import AnalyzedOption

logger = logging.getLogger(__name__)


class ProgressCallback(Protocol):
    def __call__(self, current: int, total: int, label: str) -> None: ...


class CancellationToken(Protocol):
    """Anything with `is_set()`, e.g. `threading.Event` or `asyncio.Event`."""

    def is_set(self) -> bool: ...


class OptionSearch:
    """Run the metrics pipeline over many symbols and rank the survivors."""

    def __init__(
        self,
        provider: MarketDataProvider,
        analyzer: OptionAnalyzer | None = None,
    ) -> None:
        self.provider = provider
        self.analyzer = analyzer if analyzer is not None else OptionAnalyzer()

    async def _fetch_one(self, symbol: str) -> MarketSnapshot | None:
        try:
            response = await self.provider.fetch({symbol})
        except MarketDataError as exc:
            logger.warning("Skipping %s: %s", symbol, exc)
            return None
        except Exception as exc:  # transport errors from arbitrary providers
            logger.warning("Skipping %s: provider failed (%s: %s)", symbol, type(exc).__name__, exc)
            return None

        snapshot = response.get(symbol)
        if snapshot is None:
            logger.debug("No market data for %s", symbol)
        return snapshot

    def _analyze_snapshot(
        self,
        symbol: str,
        snapshot: MarketSnapshot,
        filters: SearchFilters,
        now: dt.datetime,
    ) -> list[AnalyzedOption]:
        kept: list[AnalyzedOption] = []
        for contract in snapshot.contracts:
            try:
                analyzed = self.analyzer.analyze(
                    contract, snapshot.price, ticker=symbol, now=now
                )
            except InvalidInputError as exc:
                logger.warning("Excluding contract: %s", exc)
                continue
            if filters.accepts(analyzed):
                kept.append(analyzed)

        logger.info(
            "%s: %d/%d contracts passed filters",
            symbol,
            len(kept),
            len(snapshot.contracts),
        )
        return kept

    async def search(
        self,
        symbols: Sequence[str],
        filters: SearchFilters | None = None,
        on_progress: ProgressCallback | None = None,
        cancel: CancellationToken | None = None,
    ) -> list[AnalyzedOption]:
        """Return filtered results for `symbols`, highest edge first.

        Unknown symbols and provider failures are skipped. If `cancel` is set
        at a symbol boundary the loop stops and the results gathered so far
        are returned (without the final completion progress call).
        """
        filters = filters if filters is not None else SearchFilters()
        total = len(symbols)
        results: list[AnalyzedOption] = []

        for index, symbol in enumerate(symbols):
            if cancel is not None and cancel.is_set():
                logger.info("Search cancelled after %d/%d symbols", index, total)
                return sort_by_edge(results)

            snapshot = await self._fetch_one(symbol)
            if snapshot is not None:
                now = self.analyzer.clock.now()
                results.extend(self._analyze_snapshot(symbol, snapshot, filters, now))

            if on_progress is not None:
                on_progress(index, total, symbol)

        if on_progress is not None:
            on_progress(total, total, "")

        logger.info("Search finished: %d opportunities across %d symbols", len(results), total)
        return sort_by_edge(results)


def run_search(
    symbols: Sequence[str],
    provider: MarketDataProvider,
    *,
    analyzer: OptionAnalyzer | None = None,
    filters: SearchFilters | None = None,
    on_progress: ProgressCallback | None = None,
    cancel: CancellationToken | None = None,
) -> list[AnalyzedOption]:
    """Blocking convenience wrapper around `OptionSearch.search`."""
    search = OptionSearch(provider, analyzer)
    return asyncio.run(
        search.search(symbols, filters=filters, on_progress=on_progress, cancel=cancel)
    )
