"""EMA crossover trend heuristic.

A deterministic next-period price estimate built from a short/long EMA
spread, scaled by relative volume:

    trend_direction = +1 if EMA(short) > EMA(long) else -1
    volume_ratio = last_volume / SMA(volume, 10)
    change_factor = (EMA(short) - EMA(long)) / EMA(long)
    predicted = last_close * (1 + change_factor * 0.1 * trend_direction
                                * min(volume_ratio, 2))

``change_factor`` and ``trend_direction`` always share a sign, so the
estimate never falls below the last close.

CRITICAL: All computations use Decimal. Never use float.
"""

from collections.abc import Sequence
from decimal import Decimal

from crypto_ta.config import TrendHeuristicSettings
from crypto_ta.exceptions import InvalidCandleError
from crypto_ta.heuristics.models import TrendEstimate, TrendLabel, TrendStrength
from crypto_ta.indicators.core import (
    HUNDRED,
    ONE,
    ZERO,
    closes,
    exponential_average,
    quantize,
    rolling_mean,
)
from crypto_ta.models import Candle
from crypto_ta.validation import validate_candles


def predict_next_close(
    candles: Sequence[Candle], settings: TrendHeuristicSettings | None = None
) -> Decimal:
    """Return the heuristic next-period close.

    Series shorter than ``min_candles`` (or than any averaging window, so
    that every average is defined) return the last close unchanged. With
    default settings that means 10 to 19 candles fall back as well, since
    EMA(20) is not yet defined there.
    """
    s = settings or TrendHeuristicSettings()
    last_close = candles[-1].close
    required = max(s.min_candles, s.short_ema_period, s.long_ema_period, s.volume_sma_period)
    if len(candles) < required:
        return last_close

    prices = closes(candles)
    long_ema = exponential_average(prices, s.long_ema_period)[-1]
    short_ema = exponential_average(prices, s.short_ema_period)[-1]
    volume_avg = rolling_mean([c.volume for c in candles], s.volume_sma_period)[-1]
    if long_ema is None or short_ema is None or volume_avg is None:
        return last_close

    trend_direction = ONE if short_ema > long_ema else -ONE
    volume_ratio = candles[-1].volume / volume_avg if volume_avg != ZERO else ZERO
    change_factor = (short_ema - long_ema) / long_ema if long_ema != ZERO else ZERO

    return quantize(
        last_close
        * (ONE + change_factor * s.damping * trend_direction * min(volume_ratio, s.max_volume_ratio))
    )


def classify_estimate(
    last_close: Decimal,
    predicted: Decimal,
    settings: TrendHeuristicSettings | None = None,
) -> TrendEstimate:
    """Label a predicted price relative to the last close.

    Beyond +/-2% the trend is bullish/bearish with medium strength, beyond
    +/-5% strong; otherwise neutral and weak. Confidence is
    ``min(|change %| * 10, 90)``.
    """
    s = settings or TrendHeuristicSettings()
    change_pct = (predicted - last_close) / last_close * HUNDRED if last_close != ZERO else ZERO

    if change_pct > s.trend_threshold_pct:
        trend = TrendLabel.BULLISH
    elif change_pct < -s.trend_threshold_pct:
        trend = TrendLabel.BEARISH
    else:
        trend = TrendLabel.NEUTRAL

    magnitude = abs(change_pct)
    if magnitude > s.strong_threshold_pct:
        strength = TrendStrength.STRONG
    elif magnitude > s.trend_threshold_pct:
        strength = TrendStrength.MEDIUM
    else:
        strength = TrendStrength.WEAK

    return TrendEstimate(
        predicted_price=predicted,
        trend=trend,
        strength=strength,
        price_change_percent=quantize(change_pct),
        confidence=quantize(min(magnitude * s.confidence_multiplier, s.max_confidence)),
    )


def estimate_trend(
    candles: Sequence[Candle], settings: TrendHeuristicSettings | None = None
) -> TrendEstimate:
    """Estimate the next-period price and label the implied trend.

    Raises:
        InvalidCandleError: If the series is empty or malformed.
    """
    validate_candles(candles)
    if not candles:
        raise InvalidCandleError("cannot estimate a trend from an empty candle series")
    predicted = predict_next_close(candles, settings)
    return classify_estimate(candles[-1].close, predicted, settings)
