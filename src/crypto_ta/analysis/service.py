"""Analysis service: fetches market data and runs the core per symbol.

The service is the calling layer around the pure core:
1. Serve a fresh cached report if one exists (TTL per symbol)
2. Fetch candles, ticker and the optional market context concurrently
3. Build the combined TechnicalReport
4. Cache and log the outcome

Graceful degradation: order book, funding rate, open interest and the
long/short ratio are optional. A failure fetching any of them is logged
and the report is built without that piece of context. Candles and
ticker are required.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Iterable
from dataclasses import dataclass, field
from typing import TypeVar

from crypto_ta.analysis.cache import AnalysisCache
from crypto_ta.analysis.report import TechnicalReport, build_report
from crypto_ta.analysis.source import MarketDataSource
from crypto_ta.config import AppSettings
from crypto_ta.exceptions import MarketDataUnavailableError
from crypto_ta.logging import get_logger, symbol_context

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass
class AnalysisBatch:
    """Outcome of a multi-symbol run: reports for successes, error text for failures."""

    reports: dict[str, TechnicalReport] = field(default_factory=dict)
    failures: dict[str, str] = field(default_factory=dict)


class AnalysisService:
    """Produces technical reports for symbols from a market data source.

    Args:
        source: Market data provider.
        settings: Application settings. Defaults to ``AppSettings()``.
        cache: Result cache. Defaults to a cache with
            ``settings.analysis.cache_ttl_seconds`` expiry.
    """

    def __init__(
        self,
        source: MarketDataSource,
        settings: AppSettings | None = None,
        cache: AnalysisCache[TechnicalReport] | None = None,
    ) -> None:
        self._source = source
        self._settings = settings or AppSettings()
        if cache is None:
            cache = AnalysisCache(ttl_seconds=self._settings.analysis.cache_ttl_seconds)
        self._cache: AnalysisCache[TechnicalReport] = cache

    async def analyze(self, symbol: str, use_cache: bool = True) -> TechnicalReport:
        """Return the technical report for one symbol.

        Raises:
            MarketDataUnavailableError: If the source returns no candles.
            InvalidInputError: If the source returns malformed data.
        """
        with symbol_context(symbol):
            if use_cache:
                cached = await self._cache.get(symbol)
                if cached is not None:
                    logger.debug("analysis_cache_hit")
                    return cached

            cfg = self._settings.analysis
            (
                candles,
                ticker,
                order_book,
                funding_rate,
                open_interest,
                long_short_ratio,
            ) = await asyncio.gather(
                self._source.fetch_candles(symbol, cfg.kline_interval, cfg.kline_limit),
                self._source.fetch_ticker(symbol),
                self._optional("order_book", self._source.fetch_order_book(symbol, cfg.order_book_depth)),
                self._optional("funding_rate", self._source.fetch_funding_rate(symbol)),
                self._optional("open_interest", self._source.fetch_open_interest(symbol)),
                self._optional("long_short_ratio", self._source.fetch_long_short_ratio(symbol)),
            )
            if not candles:
                raise MarketDataUnavailableError(f"no candles returned for {symbol}")

            report = build_report(
                symbol,
                candles,
                ticker,
                order_book=order_book,
                funding_rate=funding_rate,
                open_interest=open_interest,
                long_short_ratio=long_short_ratio,
                settings=self._settings,
            )
            await self._cache.put(symbol, report)

            logger.info(
                "analysis_complete",
                candles=len(candles),
                buy=report.signals.buy,
                sell=report.signals.sell,
                neutral=report.signals.neutral,
                patterns=len(report.patterns),
                trend=report.trend.trend.value,
                funding_signal=(
                    report.funding_strategy.signal.value if report.funding_strategy else None
                ),
            )
            return report

    async def analyze_many(self, symbols: Iterable[str]) -> AnalysisBatch:
        """Analyze several symbols concurrently.

        A failure for one symbol is logged and recorded in
        ``AnalysisBatch.failures``; the remaining symbols are unaffected.
        """
        unique = list(dict.fromkeys(symbols))
        results = await asyncio.gather(
            *(self.analyze(symbol) for symbol in unique),
            return_exceptions=True,
        )

        batch = AnalysisBatch()
        for symbol, result in zip(unique, results):
            if isinstance(result, asyncio.CancelledError):
                raise result
            if isinstance(result, BaseException):
                logger.warning(
                    "analysis_failed",
                    symbol=symbol,
                    error=str(result),
                    error_type=type(result).__name__,
                )
                batch.failures[symbol] = str(result)
            else:
                batch.reports[symbol] = result
        return batch

    async def invalidate(self, symbol: str | None = None) -> None:
        """Drop cached reports so the next call recomputes."""
        await self._cache.invalidate(symbol)

    async def _optional(self, name: str, call: Awaitable[T]) -> T | None:
        """Await an optional fetch, degrading to None on failure."""
        try:
            return await call
        except Exception as e:
            logger.debug("optional_market_data_unavailable", field=name, error=str(e))
            return None
