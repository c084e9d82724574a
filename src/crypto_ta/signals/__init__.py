"""Signal aggregation and recommendation layer.

Turns the latest indicator readings into additive buy/sell/neutral votes and
derives human-readable recommendations and support/resistance levels.
"""

from crypto_ta.signals.aggregator import aggregate_signals
from crypto_ta.signals.models import PriceLevel, SignalTally, SupportResistance, Vote
from crypto_ta.signals.recommendations import (
    generate_recommendations,
    signal_verdict,
    support_resistance,
)

__all__ = [
    "PriceLevel",
    "SignalTally",
    "SupportResistance",
    "Vote",
    "aggregate_signals",
    "generate_recommendations",
    "signal_verdict",
    "support_resistance",
]
