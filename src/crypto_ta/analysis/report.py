"""Assembly of the combined technical assessment for one instrument.

``build_report`` runs every core component over one set of inputs. The
result is a plain data structure; rendering it (chat message, HTML page)
is left to consumers.
"""

from collections.abc import Sequence
from dataclasses import asdict, dataclass, field, fields, is_dataclass
from decimal import Decimal
from enum import Enum
from typing import Any

from crypto_ta.config import AppSettings
from crypto_ta.funding.models import FundingStrategyResult
from crypto_ta.funding.strategy import evaluate_funding_strategy
from crypto_ta.funding.timing import now_ms as current_ms
from crypto_ta.heuristics.ema_crossover import estimate_trend
from crypto_ta.heuristics.models import TrendEstimate
from crypto_ta.indicators.bundle import compute_indicators
from crypto_ta.indicators.core import last_defined
from crypto_ta.indicators.models import (
    BollingerPoint,
    IndicatorBundle,
    MACDPoint,
    StochasticPoint,
)
from crypto_ta.models import Candle, LongShortRatio, OrderBook, Ticker
from crypto_ta.patterns.classifier import detect_patterns
from crypto_ta.patterns.models import PatternEvent
from crypto_ta.signals.aggregator import aggregate_signals
from crypto_ta.signals.models import SignalTally, SupportResistance
from crypto_ta.signals.recommendations import generate_recommendations, support_resistance
from crypto_ta.validation import validate_non_negative, validate_price


@dataclass(frozen=True)
class IndicatorSnapshot:
    """Latest defined reading of the headline indicators."""

    rsi: Decimal | None
    macd: MACDPoint | None
    bollinger: BollingerPoint | None
    stochastic: StochasticPoint | None
    atr: Decimal | None
    vwap: Decimal | None

    @classmethod
    def from_bundle(cls, bundle: IndicatorBundle) -> "IndicatorSnapshot":
        return cls(
            rsi=last_defined(bundle.rsi),
            macd=bundle.latest_macd(),
            bollinger=bundle.latest_bollinger(),
            stochastic=bundle.latest_stochastic(),
            atr=last_defined(bundle.atr),
            vwap=last_defined(bundle.vwap),
        )


@dataclass
class TechnicalReport:
    """Combined technical assessment of one instrument."""

    symbol: str
    ticker: Ticker
    candle_count: int
    indicators: IndicatorSnapshot
    signals: SignalTally
    patterns: list[PatternEvent]
    trend: TrendEstimate
    recommendations: list[str]
    levels: SupportResistance
    generated_at_ms: int  # Unix milliseconds
    funding_rate: Decimal | None = None
    open_interest: Decimal | None = None
    funding_strategy: FundingStrategyResult | None = None
    long_short_ratio: LongShortRatio | None = None
    bundle: IndicatorBundle | None = field(default=None, repr=False, compare=False)

    def recent_patterns(self, lookback: int = 5) -> list[PatternEvent]:
        """Patterns found on the last ``lookback`` candles."""
        cutoff = self.candle_count - lookback
        return [p for p in self.patterns if p.index >= cutoff]

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready representation: Decimals as strings, enums as values.

        The full indicator bundle is omitted; only the snapshot is kept.
        """
        data = {f.name: getattr(self, f.name) for f in fields(self) if f.name != "bundle"}
        return {key: _jsonable(value) for key, value in data.items()}


def _jsonable(value: Any) -> Any:
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, Enum):
        return value.value
    if is_dataclass(value) and not isinstance(value, type):
        return {key: _jsonable(v) for key, v in asdict(value).items()}
    if isinstance(value, dict):
        return {key: _jsonable(v) for key, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value


def build_report(
    symbol: str,
    candles: Sequence[Candle],
    ticker: Ticker,
    order_book: OrderBook | None = None,
    funding_rate: Decimal | None = None,
    open_interest: Decimal | None = None,
    long_short_ratio: LongShortRatio | None = None,
    settings: AppSettings | None = None,
    now_ms: int | None = None,
) -> TechnicalReport:
    """Run indicators, patterns, signals, trend and funding heuristics for one symbol.

    The funding strategy is evaluated only when a funding rate is known;
    order book and open interest are optional refinements. ``long_short_ratio``
    is carried through as market context only. ``now_ms`` stamps the report
    and anchors the time-to-funding calculation.

    Raises:
        InvalidCandleError: If ``candles`` is empty or malformed.
        InvalidInputError: If the ticker price or order book is malformed.
    """
    s = settings or AppSettings()
    price = ticker.last_price
    validate_price(price, "last_price")
    if long_short_ratio is not None:
        validate_non_negative(long_short_ratio.buy_ratio, "buy_ratio")
        validate_non_negative(long_short_ratio.sell_ratio, "sell_ratio")
    generated_at_ms = now_ms if now_ms is not None else current_ms()

    bundle = compute_indicators(candles, s.indicator)
    tally = aggregate_signals(bundle, price, s.signal)
    patterns = detect_patterns(candles)
    trend = estimate_trend(candles, s.trend)

    funding_strategy = None
    if funding_rate is not None:
        funding_strategy = evaluate_funding_strategy(
            funding_rate,
            ticker.next_funding_time_ms,
            price,
            order_book,
            open_interest,
            settings=s.funding,
            now_ms=generated_at_ms,
        )

    return TechnicalReport(
        symbol=symbol,
        ticker=ticker,
        candle_count=len(candles),
        indicators=IndicatorSnapshot.from_bundle(bundle),
        signals=tally,
        patterns=patterns,
        trend=trend,
        recommendations=generate_recommendations(tally, trend, bundle, price, s.signal),
        levels=support_resistance(bundle, price),
        generated_at_ms=generated_at_ms,
        funding_rate=funding_rate,
        open_interest=open_interest,
        funding_strategy=funding_strategy,
        long_short_ratio=long_short_ratio,
        bundle=bundle,
    )
