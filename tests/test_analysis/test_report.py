"""Tests for build_report and the TechnicalReport container."""

import json
from decimal import Decimal

import pytest

from crypto_ta.analysis import TechnicalReport, build_report
from crypto_ta.exceptions import InvalidCandleError, InvalidInputError
from crypto_ta.funding import FundingSignal
from crypto_ta.models import LongShortRatio, OrderBook, OrderBookLevel, Ticker
from crypto_ta.patterns import PatternType

NOW_MS = 1_700_000_000_000


@pytest.fixture
def ticker() -> Ticker:
    return Ticker(
        symbol="BTCUSDT",
        last_price=Decimal("124"),
        next_funding_time_ms=NOW_MS + 30 * 60_000,
        volume_24h=Decimal("1500000"),
    )


class TestBuildReport:
    """Tests for combined report assembly."""

    def test_runs_every_component(self, rising_candles, ticker: Ticker) -> None:
        report = build_report("BTCUSDT", rising_candles, ticker, now_ms=NOW_MS)

        assert report.symbol == "BTCUSDT"
        assert report.candle_count == 25
        assert report.indicators.rsi == Decimal("100")
        assert report.indicators.macd is None
        assert report.indicators.atr == Decimal("2")
        assert report.signals.evaluated == 3
        assert report.trend.method == "ema_crossover"
        assert report.recommendations[1].startswith("EMA crossover heuristic")
        assert report.bundle is not None
        assert len(report.bundle) == 25

    def test_funding_strategy_only_with_rate(self, rising_candles, ticker: Ticker) -> None:
        without = build_report("BTCUSDT", rising_candles, ticker, now_ms=NOW_MS)
        with_rate = build_report(
            "BTCUSDT",
            rising_candles,
            ticker,
            order_book=OrderBook(
                bids=(OrderBookLevel(Decimal("123.9"), Decimal("10")),),
                asks=(OrderBookLevel(Decimal("124.1"), Decimal("1")),),
            ),
            funding_rate=Decimal("0.0008"),
            open_interest=Decimal("2500000"),
            now_ms=NOW_MS,
        )

        assert without.funding_strategy is None
        assert with_rate.funding_strategy is not None
        assert with_rate.funding_strategy.signal is FundingSignal.LONG
        assert with_rate.funding_strategy.confidence == Decimal("100")

    def test_levels_from_bands_and_averages(self, rising_candles, ticker: Ticker) -> None:
        report = build_report("BTCUSDT", rising_candles, ticker, now_ms=NOW_MS)
        sources = {lvl.source for lvl in report.levels.support + report.levels.resistance}

        assert {"Bollinger lower band", "Bollinger upper band", "SMA", "EMA"} == sources

    def test_empty_candles_rejected(self, ticker: Ticker) -> None:
        with pytest.raises(InvalidCandleError):
            build_report("BTCUSDT", [], ticker)

    def test_non_positive_price_rejected(self, rising_candles) -> None:
        ticker = Ticker(symbol="BTCUSDT", last_price=Decimal("0"))
        with pytest.raises(InvalidInputError, match="last_price"):
            build_report("BTCUSDT", rising_candles, ticker)


class TestTechnicalReport:
    """Tests for the report container helpers."""

    def test_recent_patterns(self, make_candle, ticker: Ticker) -> None:
        candles = [
            make_candle(0, "104", "104.5", "102.5", "103"),
            make_candle(1, "103", "103.5", "101.5", "102"),
            make_candle(2, "100", "101.5", "95", "101"),
        ]
        for i in range(3, 10):
            candles.append(make_candle(i, "101", "101.2", "100.8", "101"))
        report = build_report("BTCUSDT", candles, ticker, now_ms=NOW_MS)

        assert any(p.pattern is PatternType.HAMMER for p in report.patterns)
        assert all(p.index >= 5 for p in report.recent_patterns(lookback=5))
        assert not any(p.pattern is PatternType.HAMMER for p in report.recent_patterns(5))

    def test_to_dict_is_json_ready(self, rising_candles, ticker: Ticker) -> None:
        report = build_report(
            "BTCUSDT",
            rising_candles,
            ticker,
            funding_rate=Decimal("0.0008"),
            now_ms=NOW_MS,
        )
        data = report.to_dict()

        assert "bundle" not in data
        assert data["ticker"]["last_price"] == "124"
        assert data["trend"]["trend"] == report.trend.trend.value
        assert data["funding_strategy"]["signal"] == "LONG"
        assert data["indicators"]["macd"] is None
        assert data["funding_rate"] == "0.0008"
        json.dumps(data)

    def test_stamped_with_generation_time(self, rising_candles, ticker: Ticker) -> None:
        report = build_report("BTCUSDT", rising_candles, ticker, now_ms=NOW_MS)
        assert report.generated_at_ms == NOW_MS

    def test_long_short_ratio_carried_into_dict(self, rising_candles, ticker: Ticker) -> None:
        ratio = LongShortRatio(buy_ratio=Decimal("0.55"), sell_ratio=Decimal("0.45"))
        report = build_report(
            "BTCUSDT", rising_candles, ticker, long_short_ratio=ratio, now_ms=NOW_MS
        )
        data = report.to_dict()

        assert report.long_short_ratio == ratio
        assert data["long_short_ratio"] == {"buy_ratio": "0.55", "sell_ratio": "0.45"}
        assert data["generated_at_ms"] == NOW_MS

    def test_negative_long_short_ratio_rejected(self, rising_candles, ticker: Ticker) -> None:
        ratio = LongShortRatio(buy_ratio=Decimal("-0.1"), sell_ratio=Decimal("0.4"))
        with pytest.raises(InvalidInputError, match="buy_ratio"):
            build_report("BTCUSDT", rising_candles, ticker, long_short_ratio=ratio)

    def test_report_is_plain_dataclass(self, rising_candles, ticker: Ticker) -> None:
        report = build_report("BTCUSDT", rising_candles, ticker, now_ms=NOW_MS)
        assert isinstance(report, TechnicalReport)
