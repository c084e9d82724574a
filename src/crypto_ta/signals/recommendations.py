"""Human-readable recommendations and support/resistance levels.

Consumes the signal tally, trend estimate and indicator bundle. This is
where a buy/sell tie is finally reported as "mixed".
"""

from decimal import Decimal

from crypto_ta.config import SignalSettings
from crypto_ta.heuristics.models import TrendEstimate, TrendLabel
from crypto_ta.indicators.core import last_defined
from crypto_ta.indicators.models import IndicatorBundle
from crypto_ta.signals.models import PriceLevel, SignalTally, SupportResistance


def signal_verdict(tally: SignalTally) -> str:
    """Majority verdict of a tally: "buy", "sell" or "mixed" on a tie."""
    if tally.buy > tally.sell:
        return "buy"
    if tally.sell > tally.buy:
        return "sell"
    return "mixed"


def generate_recommendations(
    tally: SignalTally,
    trend: TrendEstimate,
    bundle: IndicatorBundle,
    current_price: Decimal,
    settings: SignalSettings | None = None,
) -> list[str]:
    """Summarize the assessment as an ordered list of recommendation lines."""
    s = settings or SignalSettings()
    lines: list[str] = []

    verdict = signal_verdict(tally)
    if verdict == "buy":
        lines.append("Buy signals dominate")
    elif verdict == "sell":
        lines.append("Sell signals dominate")
    else:
        lines.append("Mixed signals - caution advised")

    if trend.trend is TrendLabel.BULLISH:
        lines.append(f"EMA crossover heuristic points up ({trend.strength.value})")
    elif trend.trend is TrendLabel.BEARISH:
        lines.append(f"EMA crossover heuristic points down ({trend.strength.value})")
    else:
        lines.append("EMA crossover heuristic points sideways")

    rsi_value = last_defined(bundle.rsi)
    if rsi_value is not None:
        if rsi_value < s.rsi_oversold:
            lines.append("RSI oversold - rebound possible")
        elif rsi_value > s.rsi_overbought:
            lines.append("RSI overbought - pullback possible")

    macd_point = bundle.latest_macd()
    if macd_point is not None and macd_point.histogram is not None:
        if macd_point.macd > macd_point.signal and macd_point.histogram > 0:  # type: ignore[operator]
            lines.append("MACD shows bullish momentum")
        elif macd_point.macd < macd_point.signal and macd_point.histogram < 0:  # type: ignore[operator]
            lines.append("MACD shows bearish momentum")

    bands = bundle.latest_bollinger()
    if bands is not None:
        if current_price < bands.lower:  # type: ignore[operator]
            lines.append("Price below lower Bollinger band - rebound possible")
        elif current_price > bands.upper:  # type: ignore[operator]
            lines.append("Price above upper Bollinger band - pullback possible")

    return lines


def support_resistance(bundle: IndicatorBundle, current_price: Decimal) -> SupportResistance:
    """Derive support/resistance levels from the latest bands and moving averages.

    Bollinger lower/upper bands are strong support/resistance. SMA and EMA
    are medium support when price trades above them, resistance otherwise.
    """
    levels = SupportResistance()

    bands = bundle.latest_bollinger()
    if bands is not None:
        levels.support.append(PriceLevel(bands.lower, "Bollinger lower band", "strong"))  # type: ignore[arg-type]
        levels.resistance.append(PriceLevel(bands.upper, "Bollinger upper band", "strong"))  # type: ignore[arg-type]

    for source, series in (("SMA", bundle.sma), ("EMA", bundle.ema)):
        value = last_defined(series)
        if value is None:
            continue
        level = PriceLevel(value, source, "medium")
        if current_price > value:
            levels.support.append(level)
        else:
            levels.resistance.append(level)

    return levels
