"""Signal aggregation over the latest indicator readings.

Each indicator votes independently and every vote counts once; no indicator
is weighted above another. Indicators without a defined latest reading are
skipped entirely, so ``tally.evaluated`` equals the number of indicators
that actually had data.

CRITICAL: All comparisons use Decimal. Never use float.
"""

from decimal import Decimal

from crypto_ta.config import SignalSettings
from crypto_ta.indicators.core import last_defined
from crypto_ta.indicators.models import IndicatorBundle
from crypto_ta.signals.models import SignalTally, Vote


def _rsi_vote(value: Decimal, s: SignalSettings) -> tuple[Vote, str]:
    if value < s.rsi_oversold:
        return Vote.BUY, f"RSI {value:.2f}: oversold (buy)"
    if value > s.rsi_overbought:
        return Vote.SELL, f"RSI {value:.2f}: overbought (sell)"
    return Vote.NEUTRAL, f"RSI {value:.2f}: neutral zone"


def aggregate_signals(
    bundle: IndicatorBundle,
    current_price: Decimal,
    settings: SignalSettings | None = None,
) -> SignalTally:
    """Turn the latest RSI, MACD, Bollinger and Stochastic readings into votes.

    Policy:
        - RSI below oversold -> buy, above overbought -> sell, else neutral.
        - MACD line above signal line -> buy, otherwise sell (no neutral zone).
        - Price below the lower band -> buy, above the upper band -> sell,
          else neutral.
        - %K and %D both below oversold -> buy, both above overbought -> sell,
          else neutral.

    Args:
        bundle: Indicator series computed from the candle series.
        current_price: Latest traded price.
        settings: Vote thresholds. Defaults to ``SignalSettings()``.

    Returns:
        SignalTally built fresh for this call.
    """
    s = settings or SignalSettings()
    tally = SignalTally()

    rsi_value = last_defined(bundle.rsi)
    if rsi_value is not None:
        tally.record(*_rsi_vote(rsi_value, s))

    macd_point = bundle.latest_macd()
    if macd_point is not None:
        if macd_point.macd > macd_point.signal:  # type: ignore[operator]
            tally.record(Vote.BUY, "MACD: line above signal (bullish crossover)")
        else:
            tally.record(Vote.SELL, "MACD: line at or below signal (bearish crossover)")

    bands = bundle.latest_bollinger()
    if bands is not None:
        if current_price < bands.lower:  # type: ignore[operator]
            tally.record(Vote.BUY, "Bollinger: price below lower band (buy)")
        elif current_price > bands.upper:  # type: ignore[operator]
            tally.record(Vote.SELL, "Bollinger: price above upper band (sell)")
        else:
            tally.record(Vote.NEUTRAL, "Bollinger: price inside the bands")

    stoch = bundle.latest_stochastic()
    if stoch is not None:
        k, d = stoch.k, stoch.d
        if k < s.stochastic_oversold and d < s.stochastic_oversold:  # type: ignore[operator]
            tally.record(Vote.BUY, "Stochastic: oversold (buy)")
        elif k > s.stochastic_overbought and d > s.stochastic_overbought:  # type: ignore[operator]
            tally.record(Vote.SELL, "Stochastic: overbought (sell)")
        else:
            tally.record(Vote.NEUTRAL, "Stochastic: neutral zone")

    return tally
