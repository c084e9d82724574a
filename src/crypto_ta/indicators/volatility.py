"""Volatility indicators: Bollinger Bands and Average True Range.

CRITICAL: All computations use Decimal. Never use float.
"""

from collections.abc import Sequence
from decimal import Decimal

from crypto_ta.indicators.core import (
    ZERO,
    Series,
    closes,
    quantize,
    require_period,
    true_range,
)
from crypto_ta.indicators.models import BollingerPoint
from crypto_ta.models import Candle


def bollinger_bands(
    candles: Sequence[Candle], period: int = 20, multiplier: Decimal = Decimal("2")
) -> list[BollingerPoint]:
    """Bollinger Bands: SMA middle band +/- ``multiplier`` population std-devs.

    All three bands are first defined at index ``period - 1``. Since the
    standard deviation is never negative, upper >= middle >= lower holds at
    every defined index.
    """
    require_period(period)
    prices = closes(candles)
    divisor = Decimal(period)
    points: list[BollingerPoint] = []
    for i in range(len(prices)):
        if i < period - 1:
            points.append(BollingerPoint())
            continue
        window = prices[i - period + 1 : i + 1]
        mean = sum(window, ZERO) / divisor
        variance = sum(((p - mean) ** 2 for p in window), ZERO) / divisor
        width = multiplier * variance.sqrt()
        points.append(
            BollingerPoint(
                upper=quantize(mean + width),
                middle=quantize(mean),
                lower=quantize(mean - width),
            )
        )
    return points


def atr(candles: Sequence[Candle], period: int = 14) -> Series:
    """Average True Range as the simple mean of the trailing ``period`` true ranges.

    True range needs the previous close, so the first defined index is ``period``.
    """
    require_period(period)
    ranges: list[Decimal] = [ZERO] * len(candles)
    for i in range(1, len(candles)):
        ranges[i] = true_range(candles[i], candles[i - 1].close)

    divisor = Decimal(period)
    out: Series = [None] * len(candles)
    for i in range(period, len(candles)):
        out[i] = quantize(sum(ranges[i - period + 1 : i + 1], ZERO) / divisor)
    return out
