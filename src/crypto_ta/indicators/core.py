"""Shared building blocks for indicator computations.

Every helper operates on value series aligned with a candle series, where
``None`` marks a position that is not yet computable. Helpers never mutate
their inputs; each call allocates a fresh output list.

CRITICAL: All computations use Decimal. Never use float.
"""

from collections.abc import Sequence
from decimal import Context, Decimal

from crypto_ta.models import Candle

#: Precision limit for derived values (12 decimal places).
#: Keeps recurrences such as EMA from growing arbitrarily long representations.
QUANTUM = Decimal("0.000000000001")
_PLACES = 12

ZERO = Decimal("0")
ONE = Decimal("1")
TWO = Decimal("2")
THREE = Decimal("3")
HUNDRED = Decimal("100")

Series = list[Decimal | None]


def quantize(value: Decimal) -> Decimal:
    """Round a derived value to the library-wide 12 decimal places.

    The rounding context widens with the integer part, so magnitudes such as
    1e16 units of volume keep all 12 places instead of overflowing the
    default 28-digit precision.
    """
    precision = max(28, value.adjusted() + 1 + _PLACES + 1)
    return value.quantize(QUANTUM, context=Context(prec=precision))


def require_period(period: int, minimum: int = 1) -> None:
    """Reject nonsensical window lengths before computing anything."""
    if period < minimum:
        raise ValueError(f"period must be >= {minimum}, got {period}")


def closes(candles: Sequence[Candle]) -> list[Decimal]:
    return [c.close for c in candles]


def typical_price(candle: Candle) -> Decimal:
    """Typical price: (high + low + close) / 3."""
    return (candle.high + candle.low + candle.close) / THREE


def true_range(candle: Candle, prev_close: Decimal) -> Decimal:
    """Largest of high-low, |high - prev close| and |low - prev close|."""
    return max(
        candle.high - candle.low,
        abs(candle.high - prev_close),
        abs(candle.low - prev_close),
    )


def rolling_mean(values: Sequence[Decimal | None], period: int) -> Series:
    """Trailing arithmetic mean over ``period`` values.

    A position is defined only when all ``period`` values of its window are
    defined, so leading gaps in ``values`` propagate as ``None``.

    Args:
        values: Value series, possibly with leading ``None`` entries.
        period: Window length.

    Returns:
        Series of the same length as ``values``.
    """
    require_period(period)
    out: Series = [None] * len(values)
    divisor = Decimal(period)
    for i in range(period - 1, len(values)):
        window = values[i - period + 1 : i + 1]
        if any(v is None for v in window):
            continue
        out[i] = quantize(sum(window, ZERO) / divisor)
    return out


def exponential_average(values: Sequence[Decimal | None], period: int) -> Series:
    """Exponential moving average seeded with a simple average.

    The first output value sits at the end of the first window of ``period``
    consecutive defined inputs and equals their simple mean. From there on:

        k = 2 / (period + 1)
        EMA_t = value_t * k + EMA_{t-1} * (1 - k)

    A ``None`` after the seed resets the recurrence, which then re-seeds on
    the next full window.
    """
    require_period(period)
    out: Series = [None] * len(values)
    k = TWO / (Decimal(period) + ONE)
    one_minus_k = ONE - k
    divisor = Decimal(period)

    previous: Decimal | None = None
    run = 0  # consecutive defined values seen so far
    for i, value in enumerate(values):
        if value is None:
            previous = None
            run = 0
            continue
        run += 1
        if previous is None:
            if run < period:
                continue
            window = values[i - period + 1 : i + 1]
            previous = quantize(sum(window, ZERO) / divisor)  # type: ignore[arg-type]
        else:
            previous = quantize(value * k + previous * one_minus_k)
        out[i] = previous
    return out


def rolling_extremes(
    candles: Sequence[Candle], period: int, end: int
) -> tuple[Decimal, Decimal]:
    """Return (highest high, lowest low) over the window ending at ``end``."""
    window = candles[end - period + 1 : end + 1]
    return max(c.high for c in window), min(c.low for c in window)


def last_defined(series: Sequence[Decimal | None]) -> Decimal | None:
    """Most recent defined value of a series, or None if nothing is defined."""
    for value in reversed(series):
        if value is not None:
            return value
    return None
