"""Candlestick pattern data models."""

from dataclasses import dataclass
from enum import Enum


class PatternType(str, Enum):
    """Closed set of recognised candlestick patterns."""

    HAMMER = "Hammer"
    SHOOTING_STAR = "Shooting Star"
    DOJI = "Doji"
    BULLISH_ENGULFING = "Bullish Engulfing"
    BEARISH_ENGULFING = "Bearish Engulfing"
    MORNING_STAR = "Morning Star"
    EVENING_STAR = "Evening Star"
    THREE_WHITE_SOLDIERS = "Three White Soldiers"
    THREE_BLACK_CROWS = "Three Black Crows"


class PatternBias(str, Enum):
    """Directional bias implied by a pattern."""

    BULLISH = "BULLISH"
    BEARISH = "BEARISH"
    NEUTRAL = "NEUTRAL"


class PatternStrength(str, Enum):
    WEAK = "WEAK"
    STRONG = "STRONG"
    VERY_STRONG = "VERY_STRONG"


@dataclass(frozen=True)
class PatternEvent:
    """A pattern detected at one candle (``index`` into the candle series)."""

    index: int
    pattern: PatternType
    bias: PatternBias
    strength: PatternStrength
