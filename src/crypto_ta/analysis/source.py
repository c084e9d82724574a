"""Abstract market data source and payload parsing helpers.

The analysis service depends only on this interface. Concrete REST or
WebSocket clients live outside this package and hand over plain models.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from decimal import Decimal, InvalidOperation

from crypto_ta.exceptions import InvalidInputError
from crypto_ta.models import Candle, LongShortRatio, OrderBook, OrderBookLevel, Ticker


class MarketDataSource(ABC):
    """Abstract base class for market data providers."""

    @abstractmethod
    async def fetch_candles(self, symbol: str, interval: str, limit: int) -> list[Candle]:
        """Fetch the most recent ``limit`` candles, oldest first."""
        ...

    @abstractmethod
    async def fetch_ticker(self, symbol: str) -> Ticker:
        """Fetch last price, next funding time and 24h statistics."""
        ...

    @abstractmethod
    async def fetch_order_book(self, symbol: str, depth: int) -> OrderBook:
        """Fetch an order book snapshot with up to ``depth`` levels per side."""
        ...

    @abstractmethod
    async def fetch_funding_rate(self, symbol: str) -> Decimal | None:
        """Fetch the current funding rate as a raw fraction, None if not a perpetual."""
        ...

    @abstractmethod
    async def fetch_open_interest(self, symbol: str) -> Decimal | None:
        """Fetch open interest, None if unavailable."""
        ...

    async def fetch_long_short_ratio(self, symbol: str) -> LongShortRatio | None:
        """Fetch the account long/short split. Sources without it keep this default."""
        return None


def _to_decimal(raw: object, name: str) -> Decimal:
    try:
        return Decimal(str(raw))
    except (InvalidOperation, ValueError) as e:
        raise InvalidInputError(f"invalid {name}: {raw!r}") from e


def candles_from_rows(rows: Iterable[list]) -> list[Candle]:
    """Convert ``[timestamp_ms, open, high, low, close, volume]`` rows to candles.

    Exchanges often return klines newest-first and may repeat the still-open
    candle across pages, so rows are sorted by timestamp and a repeated
    timestamp keeps the last row seen.

    Raises:
        InvalidInputError: If a row is short or holds a non-numeric value.
    """
    by_ts: dict[int, Candle] = {}
    for row in rows:
        if len(row) < 6:
            raise InvalidInputError(f"kline row needs 6 fields, got {len(row)}")
        try:
            ts = int(row[0])
        except (TypeError, ValueError) as e:
            raise InvalidInputError(f"invalid timestamp: {row[0]!r}") from e
        by_ts[ts] = Candle(
            timestamp_ms=ts,
            open=_to_decimal(row[1], "open"),
            high=_to_decimal(row[2], "high"),
            low=_to_decimal(row[3], "low"),
            close=_to_decimal(row[4], "close"),
            volume=_to_decimal(row[5], "volume"),
        )
    return [by_ts[ts] for ts in sorted(by_ts)]


def _parse_level(raw: object) -> OrderBookLevel:
    if isinstance(raw, Mapping):
        return OrderBookLevel(
            price=_to_decimal(raw.get("price"), "price"),
            size=_to_decimal(raw.get("size"), "size"),
        )
    if isinstance(raw, (list, tuple)) and len(raw) >= 2:
        return OrderBookLevel(price=_to_decimal(raw[0], "price"), size=_to_decimal(raw[1], "size"))
    raise InvalidInputError(f"unrecognised order book level: {raw!r}")


def order_book_from_payload(payload: Mapping) -> OrderBook:
    """Build an OrderBook from ``{"bids": [...], "asks": [...]}``.

    Levels may be ``[price, size]`` pairs or ``{"price": ..., "size": ...}``
    mappings. Missing sides become empty.
    """
    return OrderBook(
        bids=tuple(_parse_level(level) for level in payload.get("bids") or ()),
        asks=tuple(_parse_level(level) for level in payload.get("asks") or ()),
    )


def long_short_ratio_from_payload(payload: Mapping) -> LongShortRatio:
    """Build a LongShortRatio from ``{"buyRatio": ..., "sellRatio": ...}``.

    Raises:
        InvalidInputError: If either ratio is missing or non-numeric.
    """
    return LongShortRatio(
        buy_ratio=_to_decimal(payload.get("buyRatio"), "buyRatio"),
        sell_ratio=_to_decimal(payload.get("sellRatio"), "sellRatio"),
    )
