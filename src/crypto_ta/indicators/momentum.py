"""Momentum oscillators: RSI, MACD, Stochastic, Williams %R, CCI and MFI.

Degenerate windows fall back to fixed values instead of dividing by zero:

- RSI = 100 when the average loss is zero.
- Stochastic %K = 50 and Williams %R = -50 when the high-low range is zero.
- CCI = 0 when the mean absolute deviation is zero.
- MFI = 100 when the negative money flow is zero.

CRITICAL: All computations use Decimal. Never use float.
"""

from collections.abc import Sequence
from decimal import Decimal

from crypto_ta.indicators.core import (
    HUNDRED,
    ONE,
    ZERO,
    Series,
    closes,
    exponential_average,
    quantize,
    require_period,
    rolling_extremes,
    rolling_mean,
    typical_price,
)
from crypto_ta.indicators.models import MACDPoint, StochasticPoint
from crypto_ta.models import Candle

_CCI_CONSTANT = Decimal("0.015")
_STOCHASTIC_FLAT = Decimal("50")
_WILLIAMS_FLAT = Decimal("-50")


def _ratio_index(positive: Decimal, negative: Decimal) -> Decimal:
    """Shared RSI/MFI shape: 100 - 100 / (1 + positive / negative)."""
    if negative == ZERO:
        return quantize(HUNDRED)
    return quantize(HUNDRED - HUNDRED / (ONE + positive / negative))


def rsi(candles: Sequence[Candle], period: int = 14) -> Series:
    """Relative Strength Index over simple-averaged gains and losses.

    The value at index ``i`` uses the ``period`` close-to-close deltas ending
    at ``i``, so the first defined index is ``period``.
    """
    require_period(period)
    prices = closes(candles)
    out: Series = [None] * len(prices)
    for i in range(period, len(prices)):
        gain = ZERO
        loss = ZERO
        for j in range(i - period + 1, i + 1):
            change = prices[j] - prices[j - 1]
            if change > 0:
                gain += change
            elif change < 0:
                loss -= change
        # Averages share the divisor, so the ratio of sums equals RS.
        out[i] = _ratio_index(gain, loss)
    return out


def macd(
    candles: Sequence[Candle], fast: int = 12, slow: int = 26, signal: int = 9
) -> list[MACDPoint]:
    """Moving Average Convergence/Divergence.

    MACD line = EMA(fast) - EMA(slow), defined from index ``slow - 1``.
    The signal line is EMA(signal) over the aligned MACD line, so it first
    appears at ``slow + signal - 2``. Histogram = MACD - signal.
    """
    if fast >= slow:
        raise ValueError(f"fast period {fast} must be shorter than slow period {slow}")
    prices = closes(candles)
    fast_ema = exponential_average(prices, fast)
    slow_ema = exponential_average(prices, slow)

    line: Series = [
        quantize(f - s) if f is not None and s is not None else None
        for f, s in zip(fast_ema, slow_ema)
    ]
    signal_line = exponential_average(line, signal)

    points: list[MACDPoint] = []
    for m, s in zip(line, signal_line):
        histogram = quantize(m - s) if m is not None and s is not None else None
        points.append(MACDPoint(macd=m, signal=s, histogram=histogram))
    return points


def stochastic(
    candles: Sequence[Candle], period: int = 14, signal_period: int = 3
) -> list[StochasticPoint]:
    """Stochastic oscillator %K with its %D signal line.

    %K = (close - lowest low) / (highest high - lowest low) * 100 over the
    trailing ``period`` candles. %D is the SMA(``signal_period``) of %K and
    needs a full window of defined %K values.
    """
    require_period(period)
    k_line: Series = [None] * len(candles)
    for i in range(period - 1, len(candles)):
        highest, lowest = rolling_extremes(candles, period, i)
        spread = highest - lowest
        if spread == ZERO:
            k_line[i] = quantize(_STOCHASTIC_FLAT)
        else:
            k_line[i] = quantize((candles[i].close - lowest) / spread * HUNDRED)

    d_line = rolling_mean(k_line, signal_period)
    return [StochasticPoint(k=k, d=d) for k, d in zip(k_line, d_line)]


def williams_r(candles: Sequence[Candle], period: int = 14) -> Series:
    """Williams %R: (highest high - close) / (highest high - lowest low) * -100."""
    require_period(period)
    out: Series = [None] * len(candles)
    for i in range(period - 1, len(candles)):
        highest, lowest = rolling_extremes(candles, period, i)
        spread = highest - lowest
        if spread == ZERO:
            out[i] = quantize(_WILLIAMS_FLAT)
        else:
            out[i] = quantize((highest - candles[i].close) / spread * -HUNDRED)
    return out


def cci(candles: Sequence[Candle], period: int = 20) -> Series:
    """Commodity Channel Index over typical price.

    CCI = (TP - SMA(TP)) / (0.015 * mean absolute deviation); 0 when the
    mean deviation is zero (e.g. a flat series).
    """
    require_period(period)
    prices = [typical_price(c) for c in candles]
    divisor = Decimal(period)
    out: Series = [None] * len(prices)
    for i in range(period - 1, len(prices)):
        window = prices[i - period + 1 : i + 1]
        mean = sum(window, ZERO) / divisor
        deviation = sum((abs(p - mean) for p in window), ZERO) / divisor
        if deviation == ZERO:
            out[i] = quantize(ZERO)
        else:
            out[i] = quantize((prices[i] - mean) / (_CCI_CONSTANT * deviation))
    return out


def mfi(candles: Sequence[Candle], period: int = 14) -> Series:
    """Money Flow Index.

    Each candle after the first contributes a signed raw money flow
    (typical price * volume), positive when typical price rose and negative
    when it fell. The index over the trailing ``period`` flows has the same
    shape as RSI; first defined index is ``period``.
    """
    require_period(period)
    flows: list[Decimal] = [ZERO] * len(candles)
    prev_tp: Decimal | None = None
    for i, candle in enumerate(candles):
        tp = typical_price(candle)
        if prev_tp is not None:
            if tp > prev_tp:
                flows[i] = tp * candle.volume
            elif tp < prev_tp:
                flows[i] = -tp * candle.volume
        prev_tp = tp

    out: Series = [None] * len(candles)
    for i in range(period, len(candles)):
        window = flows[i - period + 1 : i + 1]
        positive = sum((f for f in window if f > 0), ZERO)
        negative = -sum((f for f in window if f < 0), ZERO)
        out[i] = _ratio_index(positive, negative)
    return out
