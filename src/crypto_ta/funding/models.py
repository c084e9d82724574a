"""Funding strategy data models.

CRITICAL: All prices and rates use Decimal. Never use float.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum


class FundingSignal(str, Enum):
    LONG = "LONG"
    SHORT = "SHORT"
    NEUTRAL = "NEUTRAL"


class FundingStrength(str, Enum):
    WEAK = "WEAK"
    MEDIUM = "MEDIUM"
    STRONG = "STRONG"


@dataclass
class FundingStrategyResult:
    """Directional call derived from the funding rate, with entry levels and sizing.

    ``entry_price``, ``stop_loss`` and ``take_profit`` are None exactly when
    the signal is NEUTRAL.
    """

    signal: FundingSignal
    strength: FundingStrength
    confidence: Decimal  # 0-100
    entry_price: Decimal | None
    stop_loss: Decimal | None
    take_profit: Decimal | None
    leverage: Decimal  # >= 1
    position_size: Decimal  # percent of capital, 0-10
    details: list[str] = field(default_factory=list)
