"""Shared market data models for the technical analysis core.

CRITICAL: All prices, volumes and rates use Decimal. Never use float.
"""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class Candle:
    """A single OHLCV candle.

    Candle series are ordered oldest-first with strictly increasing
    ``timestamp_ms``. The core never mutates a candle.
    """

    timestamp_ms: int
    open: Decimal
    high: Decimal
    low: Decimal
    close: Decimal
    volume: Decimal

    @property
    def body(self) -> Decimal:
        """Absolute distance between open and close."""
        return abs(self.close - self.open)

    @property
    def range(self) -> Decimal:
        """High-low range of the candle."""
        return self.high - self.low

    @property
    def upper_shadow(self) -> Decimal:
        return self.high - max(self.open, self.close)

    @property
    def lower_shadow(self) -> Decimal:
        return min(self.open, self.close) - self.low

    @property
    def is_bullish(self) -> bool:
        return self.close > self.open

    @property
    def is_bearish(self) -> bool:
        return self.close < self.open


@dataclass(frozen=True)
class OrderBookLevel:
    """One price level of an order book side."""

    price: Decimal
    size: Decimal


@dataclass(frozen=True)
class OrderBook:
    """Order book snapshot (bids best-first, asks best-first)."""

    bids: tuple[OrderBookLevel, ...] = ()
    asks: tuple[OrderBookLevel, ...] = ()

    @property
    def bid_volume(self) -> Decimal:
        return sum((level.size for level in self.bids), Decimal("0"))

    @property
    def ask_volume(self) -> Decimal:
        return sum((level.size for level in self.asks), Decimal("0"))


@dataclass(frozen=True)
class Ticker:
    """Latest ticker facts for a perpetual contract."""

    symbol: str
    last_price: Decimal
    next_funding_time_ms: int = 0  # Unix milliseconds, 0 = unknown
    price_change_percent: Decimal = Decimal("0")
    high_24h: Decimal = Decimal("0")
    low_24h: Decimal = Decimal("0")
    volume_24h: Decimal = Decimal("0")


@dataclass(frozen=True)
class LongShortRatio:
    """Share of accounts long (buy) versus short (sell), each in [0, 1]."""

    buy_ratio: Decimal
    sell_ratio: Decimal

    @property
    def ratio(self) -> Decimal | None:
        """buy/sell, None when nobody is short."""
        if self.sell_ratio == 0:
            return None
        return self.buy_ratio / self.sell_ratio
