"""Trend indicators: directional movement (ADX/DX), Parabolic SAR and Ichimoku.

CRITICAL: All computations use Decimal. Never use float.
"""

from collections.abc import Sequence
from decimal import Decimal

from crypto_ta.indicators.core import (
    HUNDRED,
    TWO,
    ZERO,
    Series,
    quantize,
    require_period,
    rolling_extremes,
    true_range,
)
from crypto_ta.indicators.models import IchimokuPoint
from crypto_ta.models import Candle


def _directional_index(plus_dm: Decimal, minus_dm: Decimal, tr: Decimal) -> Decimal:
    """DX from summed +DM, -DM and true range of one window.

    The sums share the window divisor, so they stand in for averages.
    Zero true range or zero combined DI yields 0.
    """
    if tr == ZERO:
        return ZERO
    plus_di = plus_dm / tr * HUNDRED
    minus_di = minus_dm / tr * HUNDRED
    total = plus_di + minus_di
    if total == ZERO:
        return ZERO
    return abs(plus_di - minus_di) / total * HUNDRED


def adx(candles: Sequence[Candle], period: int = 14, smoothed: bool = False) -> Series:
    """Directional movement strength.

    By default this reports the DX approximation: +DI and -DI from simple
    averages of +DM, -DM and true range over the trailing ``period`` moves,
    combined as ``|+DI - -DI| / (+DI + -DI) * 100``. The first value is at
    index ``period``.

    With ``smoothed=True`` the DX series gets Wilder's second smoothing pass
    (canonical ADX): the first value is the mean of ``period`` DX values at
    index ``2 * period - 1``, then ``ADX = (prev * (period - 1) + DX) / period``.
    """
    require_period(period)
    n = len(candles)
    plus_dm: list[Decimal] = [ZERO] * n
    minus_dm: list[Decimal] = [ZERO] * n
    ranges: list[Decimal] = [ZERO] * n
    for i in range(1, n):
        up_move = candles[i].high - candles[i - 1].high
        down_move = candles[i - 1].low - candles[i].low
        if up_move > down_move and up_move > 0:
            plus_dm[i] = up_move
        if down_move > up_move and down_move > 0:
            minus_dm[i] = down_move
        ranges[i] = true_range(candles[i], candles[i - 1].close)

    dx: Series = [None] * n
    for i in range(period, n):
        start = i - period + 1
        dx[i] = quantize(
            _directional_index(
                sum(plus_dm[start : i + 1], ZERO),
                sum(minus_dm[start : i + 1], ZERO),
                sum(ranges[start : i + 1], ZERO),
            )
        )

    if not smoothed:
        return dx

    divisor = Decimal(period)
    out: Series = [None] * n
    first = 2 * period - 1
    previous: Decimal | None = None
    for i in range(first, n):
        if previous is None:
            previous = quantize(sum(dx[i - period + 1 : i + 1], ZERO) / divisor)  # type: ignore[arg-type]
        else:
            previous = quantize((previous * (divisor - 1) + dx[i]) / divisor)  # type: ignore[operator]
        out[i] = previous
    return out


def parabolic_sar(
    candles: Sequence[Candle],
    step: Decimal = Decimal("0.02"),
    maximum: Decimal = Decimal("0.2"),
) -> Series:
    """Parabolic Stop And Reverse.

    Starts in the long regime with SAR at the first low and the extreme
    point at the first high. Each candle the SAR moves toward the extreme
    point by the acceleration factor, which grows by ``step`` (capped at
    ``maximum``) whenever a new extreme is made. In the long regime the SAR
    may not rise above the prior two lows (prior two highs when short). A
    breach of the SAR flips the regime: the SAR jumps to the old extreme
    point and the acceleration factor resets.
    """
    n = len(candles)
    out: Series = [None] * n
    if n == 0:
        return out

    is_long = True
    af = step
    extreme = candles[0].high
    sar = candles[0].low
    out[0] = quantize(sar)

    for i in range(1, n):
        high = candles[i].high
        low = candles[i].low
        sar = sar + af * (extreme - sar)
        prior = candles[max(i - 2, 0) : i]

        if is_long:
            sar = min(sar, *(c.low for c in prior))
            if low < sar:
                is_long = False
                sar = extreme
                extreme = low
                af = step
            elif high > extreme:
                extreme = high
                af = min(af + step, maximum)
        else:
            sar = max(sar, *(c.high for c in prior))
            if high > sar:
                is_long = True
                sar = extreme
                extreme = high
                af = step
            elif low < extreme:
                extreme = low
                af = min(af + step, maximum)

        sar = quantize(sar)
        out[i] = sar
    return out


def ichimoku(
    candles: Sequence[Candle],
    conversion: int = 9,
    base: int = 26,
    span_b: int = 52,
    lag: int = 26,
) -> list[IchimokuPoint]:
    """Ichimoku Kinko Hyo lines, all computed trailing (no forward shift).

    - conversion (Tenkan-sen): midpoint of the ``conversion``-period high/low.
    - base (Kijun-sen): midpoint of the ``base``-period high/low.
    - span_a: midpoint of conversion and base.
    - span_b: midpoint of the ``span_b``-period high/low.
    - lagging (Chikou): the close ``lag`` candles earlier.

    No field is defined before index ``span_b - 1``, so at least ``span_b``
    candles are needed for any value.
    """
    for p in (conversion, base, span_b):
        require_period(p)
    warmup = max(conversion, base, span_b) - 1

    def midpoint(period: int, end: int) -> Decimal:
        highest, lowest = rolling_extremes(candles, period, end)
        return quantize((highest + lowest) / TWO)

    points: list[IchimokuPoint] = []
    for i in range(len(candles)):
        if i < warmup:
            points.append(IchimokuPoint())
            continue
        tenkan = midpoint(conversion, i)
        kijun = midpoint(base, i)
        points.append(
            IchimokuPoint(
                conversion=tenkan,
                base=kijun,
                span_a=quantize((tenkan + kijun) / TWO),
                span_b=midpoint(span_b, i),
                lagging=candles[i - lag].close if i >= lag else None,
            )
        )
    return points
