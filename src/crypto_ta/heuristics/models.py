"""Trend heuristic data models."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Literal


class TrendLabel(str, Enum):
    BULLISH = "bullish"
    BEARISH = "bearish"
    NEUTRAL = "neutral"


class TrendStrength(str, Enum):
    WEAK = "weak"
    MEDIUM = "medium"
    STRONG = "strong"


@dataclass(frozen=True)
class TrendEstimate:
    """Next-period price estimate from a deterministic heuristic.

    ``method`` names the heuristic that produced the estimate. There is no
    learned model behind it.
    """

    predicted_price: Decimal
    trend: TrendLabel
    strength: TrendStrength
    price_change_percent: Decimal
    confidence: Decimal  # 0-90
    method: Literal["ema_crossover"] = "ema_crossover"
