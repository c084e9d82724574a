"""Boundary validation for candle series, prices and order books.

Every public entry point of the core validates its input here before any
computation, so indicator code can assume well-formed candles.
"""

from collections.abc import Sequence
from decimal import Decimal

from crypto_ta.exceptions import InvalidCandleError, InvalidInputError
from crypto_ta.models import Candle, OrderBook


def validate_candle(candle: Candle, index: int | None = None) -> None:
    """Check the OHLC invariants of a single candle.

    Raises:
        InvalidCandleError: If any field is not finite, volume is negative,
            or high/low do not bound the open and close.
    """
    for name in ("open", "high", "low", "close", "volume"):
        value = getattr(candle, name)
        if not isinstance(value, Decimal) or not value.is_finite():
            raise InvalidCandleError(f"{name} must be a finite Decimal, got {value!r}", index)

    if candle.volume < 0:
        raise InvalidCandleError(f"negative volume {candle.volume}", index)
    if candle.high < candle.low:
        raise InvalidCandleError(f"high {candle.high} below low {candle.low}", index)
    if candle.low > min(candle.open, candle.close):
        raise InvalidCandleError(f"low {candle.low} above open/close", index)
    if candle.high < max(candle.open, candle.close):
        raise InvalidCandleError(f"high {candle.high} below open/close", index)


def validate_candles(candles: Sequence[Candle]) -> None:
    """Validate a candle series: per-candle invariants and strictly increasing timestamps.

    An empty series is valid; every indicator then returns an empty series.

    Raises:
        InvalidCandleError: On the first offending candle.
    """
    previous_ts: int | None = None
    for i, candle in enumerate(candles):
        validate_candle(candle, i)
        if previous_ts is not None and candle.timestamp_ms <= previous_ts:
            raise InvalidCandleError(
                f"timestamp {candle.timestamp_ms} not after previous {previous_ts}", i
            )
        previous_ts = candle.timestamp_ms


def validate_price(value: Decimal, name: str = "price") -> None:
    """Require a finite, strictly positive Decimal price."""
    if not isinstance(value, Decimal) or not value.is_finite() or value <= 0:
        raise InvalidInputError(f"{name} must be a positive Decimal, got {value!r}")


def validate_order_book(order_book: OrderBook) -> None:
    """Require non-negative sizes and positive prices on every level."""
    for side_name, levels in (("bids", order_book.bids), ("asks", order_book.asks)):
        for level in levels:
            if level.price <= 0 or level.size < 0:
                raise InvalidInputError(
                    f"malformed {side_name} level price={level.price} size={level.size}"
                )


def validate_non_negative(value: Decimal, name: str) -> None:
    """Require a finite Decimal that is zero or greater."""
    if not isinstance(value, Decimal) or not value.is_finite() or value < 0:
        raise InvalidInputError(f"{name} must be a non-negative Decimal, got {value!r}")


def validate_finite(value: Decimal, name: str) -> None:
    """Require a finite Decimal of any sign."""
    if not isinstance(value, Decimal) or not value.is_finite():
        raise InvalidInputError(f"{name} must be a finite Decimal, got {value!r}")
