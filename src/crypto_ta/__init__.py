"""Technical analysis core for OHLCV candle series.

Entry points:
    compute_indicators -- all indicator series for a candle series
    detect_patterns -- candlestick pattern events
    aggregate_signals -- buy/sell/neutral tally from the latest readings
    evaluate_funding_strategy -- funding-rate entry heuristic
    estimate_trend -- deterministic EMA crossover trend estimate
"""

from crypto_ta.exceptions import (
    AnalysisError,
    InvalidCandleError,
    InvalidInputError,
    MarketDataUnavailableError,
)
from crypto_ta.funding import FundingStrategyResult, evaluate_funding_strategy
from crypto_ta.heuristics import TrendEstimate, estimate_trend
from crypto_ta.indicators import IndicatorBundle, compute_indicators
from crypto_ta.models import Candle, LongShortRatio, OrderBook, OrderBookLevel, Ticker
from crypto_ta.patterns import PatternEvent, detect_patterns
from crypto_ta.signals import SignalTally, aggregate_signals

__all__ = [
    "AnalysisError",
    "Candle",
    "FundingStrategyResult",
    "IndicatorBundle",
    "InvalidCandleError",
    "InvalidInputError",
    "LongShortRatio",
    "MarketDataUnavailableError",
    "OrderBook",
    "OrderBookLevel",
    "PatternEvent",
    "SignalTally",
    "Ticker",
    "TrendEstimate",
    "aggregate_signals",
    "compute_indicators",
    "detect_patterns",
    "estimate_trend",
    "evaluate_funding_strategy",
]
