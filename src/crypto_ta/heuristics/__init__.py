"""Deterministic trend heuristics (no learned models)."""

from crypto_ta.heuristics.ema_crossover import (
    classify_estimate,
    estimate_trend,
    predict_next_close,
)
from crypto_ta.heuristics.models import TrendEstimate, TrendLabel, TrendStrength

__all__ = [
    "TrendEstimate",
    "TrendLabel",
    "TrendStrength",
    "classify_estimate",
    "estimate_trend",
    "predict_next_close",
]
