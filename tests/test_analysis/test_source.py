"""Tests for kline and order book payload parsing."""

from decimal import Decimal

import pytest

from crypto_ta.analysis import (
    MarketDataSource,
    candles_from_rows,
    long_short_ratio_from_payload,
    order_book_from_payload,
)
from crypto_ta.exceptions import InvalidInputError


class TestCandlesFromRows:
    """Tests for kline row conversion."""

    def test_converts_and_sorts_oldest_first(self) -> None:
        rows = [
            ["1700000060000", "101", "102", "100", "101.5", "12.5"],
            ["1700000000000", "100", "101", "99", "101", "10"],
        ]
        candles = candles_from_rows(rows)

        assert [c.timestamp_ms for c in candles] == [1_700_000_000_000, 1_700_000_060_000]
        assert candles[1].close == Decimal("101.5")
        assert candles[1].volume == Decimal("12.5")

    def test_duplicate_timestamp_keeps_last_row(self) -> None:
        rows = [
            [1700000000000, "100", "101", "99", "100.5", "10"],
            [1700000000000, "100", "101.5", "99", "101", "14"],
        ]
        candles = candles_from_rows(rows)

        assert len(candles) == 1
        assert candles[0].close == Decimal("101")

    def test_extra_fields_ignored(self) -> None:
        rows = [[1700000000000, "100", "101", "99", "100", "10", "1000000"]]
        assert len(candles_from_rows(rows)) == 1

    def test_short_row_rejected(self) -> None:
        with pytest.raises(InvalidInputError, match="6 fields"):
            candles_from_rows([[1700000000000, "100", "101"]])

    def test_bad_number_rejected(self) -> None:
        with pytest.raises(InvalidInputError, match="close"):
            candles_from_rows([[1700000000000, "100", "101", "99", "abc", "10"]])

    def test_bad_timestamp_rejected(self) -> None:
        with pytest.raises(InvalidInputError, match="timestamp"):
            candles_from_rows([["soon", "100", "101", "99", "100", "10"]])


class TestOrderBookFromPayload:
    """Tests for order book payload conversion."""

    def test_pair_levels(self) -> None:
        book = order_book_from_payload(
            {"bids": [["49999", "1.5"], ["49998", "2"]], "asks": [["50001", "0.5"]]}
        )

        assert book.bid_volume == Decimal("3.5")
        assert book.ask_volume == Decimal("0.5")
        assert book.bids[0].price == Decimal("49999")

    def test_mapping_levels(self) -> None:
        book = order_book_from_payload({"bids": [{"price": "10", "size": "4"}], "asks": []})

        assert book.bids[0].size == Decimal("4")
        assert book.asks == ()

    def test_missing_sides_are_empty(self) -> None:
        book = order_book_from_payload({})

        assert book.bid_volume == Decimal("0")
        assert book.ask_volume == Decimal("0")

    def test_unrecognised_level_rejected(self) -> None:
        with pytest.raises(InvalidInputError, match="order book level"):
            order_book_from_payload({"bids": ["49999"]})


class TestLongShortRatio:
    """Tests for long/short account ratio parsing and the source default."""

    def test_parses_exchange_entry(self) -> None:
        ratio = long_short_ratio_from_payload(
            {"symbol": "BTCUSDT", "buyRatio": "0.6", "sellRatio": "0.4", "timestamp": "1"}
        )

        assert ratio.buy_ratio == Decimal("0.6")
        assert ratio.sell_ratio == Decimal("0.4")
        assert ratio.ratio == Decimal("1.5")

    def test_no_shorts_has_no_ratio(self) -> None:
        ratio = long_short_ratio_from_payload({"buyRatio": "1", "sellRatio": "0"})
        assert ratio.ratio is None

    def test_missing_field_rejected(self) -> None:
        with pytest.raises(InvalidInputError, match="sellRatio"):
            long_short_ratio_from_payload({"buyRatio": "0.5"})

    @pytest.mark.asyncio
    async def test_source_default_is_none(self) -> None:
        class MinimalSource(MarketDataSource):
            async def fetch_candles(self, symbol, interval, limit):
                return []

            async def fetch_ticker(self, symbol):
                raise NotImplementedError

            async def fetch_order_book(self, symbol, depth):
                raise NotImplementedError

            async def fetch_funding_rate(self, symbol):
                return None

            async def fetch_open_interest(self, symbol):
                return None

        assert await MinimalSource().fetch_long_short_ratio("BTCUSDT") is None
