"""Volume-based indicators: OBV, volume delta and VWAP."""

from collections.abc import Sequence

from crypto_ta.indicators.core import ZERO, Series, quantize, typical_price
from crypto_ta.models import Candle


def obv(candles: Sequence[Candle]) -> Series:
    """On-Balance Volume, starting at 0 on the first candle.

    Adds the candle volume on a higher close, subtracts it on a lower close
    and carries the previous value on an unchanged close.
    """
    out: Series = []
    running = ZERO
    for i, candle in enumerate(candles):
        if i > 0:
            prev_close = candles[i - 1].close
            if candle.close > prev_close:
                running += candle.volume
            elif candle.close < prev_close:
                running -= candle.volume
        out.append(running)
    return out


def volume_delta(candles: Sequence[Candle]) -> Series:
    """Signed volume per candle by close-over-close direction (0 when unchanged)."""
    out: Series = []
    for i, candle in enumerate(candles):
        if i == 0 or candle.close == candles[i - 1].close:
            out.append(ZERO)
        elif candle.close > candles[i - 1].close:
            out.append(candle.volume)
        else:
            out.append(-candle.volume)
    return out


def vwap(candles: Sequence[Candle]) -> Series:
    """Volume-weighted average price, cumulative from the first supplied candle.

    Not session-reset. ``None`` while cumulative volume is still zero.
    """
    out: Series = []
    cumulative_pv = ZERO
    cumulative_volume = ZERO
    for candle in candles:
        cumulative_pv += typical_price(candle) * candle.volume
        cumulative_volume += candle.volume
        if cumulative_volume == ZERO:
            out.append(None)
        else:
            out.append(quantize(cumulative_pv / cumulative_volume))
    return out
