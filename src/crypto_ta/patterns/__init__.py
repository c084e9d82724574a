"""Candlestick pattern classifier."""

from crypto_ta.patterns.classifier import (
    detect_patterns,
    is_bearish_engulfing,
    is_bullish_engulfing,
    is_doji,
    is_evening_star,
    is_hammer,
    is_morning_star,
    is_shooting_star,
    is_three_black_crows,
    is_three_white_soldiers,
)
from crypto_ta.patterns.models import PatternBias, PatternEvent, PatternStrength, PatternType

__all__ = [
    "PatternBias",
    "PatternEvent",
    "PatternStrength",
    "PatternType",
    "detect_patterns",
    "is_bearish_engulfing",
    "is_bullish_engulfing",
    "is_doji",
    "is_evening_star",
    "is_hammer",
    "is_morning_star",
    "is_shooting_star",
    "is_three_black_crows",
    "is_three_white_soldiers",
]
