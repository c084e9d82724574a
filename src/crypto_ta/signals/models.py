"""Signal aggregation data models."""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum


class Vote(str, Enum):
    BUY = "buy"
    SELL = "sell"
    NEUTRAL = "neutral"


@dataclass
class SignalTally:
    """Additive buy/sell/neutral votes with one rationale line per evaluated indicator.

    Ties between buy and sell are left unresolved; callers report them as mixed.
    """

    buy: int = 0
    sell: int = 0
    neutral: int = 0
    rationale: list[str] = field(default_factory=list)

    @property
    def evaluated(self) -> int:
        """Number of indicators that cast a vote."""
        return self.buy + self.sell + self.neutral

    def record(self, vote: Vote, reason: str) -> None:
        if vote is Vote.BUY:
            self.buy += 1
        elif vote is Vote.SELL:
            self.sell += 1
        else:
            self.neutral += 1
        self.rationale.append(reason)


@dataclass(frozen=True)
class PriceLevel:
    """A support or resistance level and the indicator it came from."""

    level: Decimal
    source: str
    strength: str  # "strong" | "medium"


@dataclass
class SupportResistance:
    support: list[PriceLevel] = field(default_factory=list)
    resistance: list[PriceLevel] = field(default_factory=list)
