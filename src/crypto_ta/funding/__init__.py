"""Funding-rate entry strategy evaluator."""

from crypto_ta.funding.models import FundingSignal, FundingStrategyResult, FundingStrength
from crypto_ta.funding.strategy import classify_funding, evaluate_funding_strategy
from crypto_ta.funding.timing import describe_time_to_funding, format_compact_number

__all__ = [
    "FundingSignal",
    "FundingStrategyResult",
    "FundingStrength",
    "classify_funding",
    "describe_time_to_funding",
    "evaluate_funding_strategy",
    "format_compact_number",
]
