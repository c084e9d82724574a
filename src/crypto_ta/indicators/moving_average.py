"""Simple and exponential moving averages of close prices."""

from collections.abc import Sequence

from crypto_ta.indicators.core import Series, closes, exponential_average, rolling_mean
from crypto_ta.models import Candle


def sma(candles: Sequence[Candle], period: int = 20) -> Series:
    """Simple moving average of close. First defined at index ``period - 1``."""
    return rolling_mean(closes(candles), period)


def ema(candles: Sequence[Candle], period: int = 20) -> Series:
    """Exponential moving average of close, seeded with SMA(period).

    The value at index ``period - 1`` equals ``sma(candles, period)`` at the
    same index; afterwards ``EMA[i] = close[i] * k + EMA[i-1] * (1 - k)``
    with ``k = 2 / (period + 1)``.
    """
    return exponential_average(closes(candles), period)
