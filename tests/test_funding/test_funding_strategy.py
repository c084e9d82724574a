"""Tests for the funding-rate entry heuristic.

All rates are raw fractions (0.0001 = 0.01%). A fixed ``now_ms`` keeps the
near-funding bonus deterministic.
"""

from decimal import Decimal

import pytest

from crypto_ta.config import FundingStrategySettings
from crypto_ta.exceptions import InvalidInputError
from crypto_ta.funding import (
    FundingSignal,
    FundingStrength,
    classify_funding,
    evaluate_funding_strategy,
)
from crypto_ta.models import OrderBook, OrderBookLevel

NOW_MS = 1_700_000_000_000
MINUTE_MS = 60_000
PRICE = Decimal("50000")


def _book(bid_size: str, ask_size: str) -> OrderBook:
    return OrderBook(
        bids=(OrderBookLevel(Decimal("49999"), Decimal(bid_size)),),
        asks=(OrderBookLevel(Decimal("50001"), Decimal(ask_size)),),
    )


def _evaluate(rate: str, minutes_away: int = 240, order_book=None, open_interest=None):
    return evaluate_funding_strategy(
        Decimal(rate),
        NOW_MS + minutes_away * MINUTE_MS,
        PRICE,
        order_book,
        open_interest,
        now_ms=NOW_MS,
    )


class TestClassifyFunding:
    """Tests for direction/strength classification."""

    @pytest.mark.parametrize(
        ("rate", "signal", "strength"),
        [
            ("0.0008", FundingSignal.LONG, FundingStrength.STRONG),
            ("0.0003", FundingSignal.LONG, FundingStrength.MEDIUM),
            ("0.0005", FundingSignal.LONG, FundingStrength.MEDIUM),
            ("0.0001", FundingSignal.NEUTRAL, FundingStrength.WEAK),
            ("0", FundingSignal.NEUTRAL, FundingStrength.WEAK),
            ("-0.0001", FundingSignal.NEUTRAL, FundingStrength.WEAK),
            ("-0.0002", FundingSignal.SHORT, FundingStrength.MEDIUM),
            ("-0.0009", FundingSignal.SHORT, FundingStrength.STRONG),
        ],
    )
    def test_thresholds(self, rate: str, signal: FundingSignal, strength: FundingStrength) -> None:
        assert classify_funding(Decimal(rate)) == (signal, strength)


class TestEvaluateFundingStrategy:
    """Tests for confidence, levels and sizing."""

    def test_strong_long_near_funding(self) -> None:
        """0.0008 with funding 30 minutes away: base 80 plus the +10 near-funding bonus."""
        result = _evaluate("0.0008", minutes_away=30)

        assert result.signal is FundingSignal.LONG
        assert result.strength is FundingStrength.STRONG
        assert result.confidence == Decimal("90")
        assert "Funding imminent - confidence raised" in result.details

    def test_long_levels_and_sizing(self) -> None:
        result = _evaluate("0.0008", minutes_away=30)

        assert result.entry_price == Decimal("50050")
        assert result.stop_loss == Decimal("49750")
        assert result.take_profit == Decimal("50400")
        assert result.leverage == Decimal("20")
        assert result.position_size == Decimal("9")

    def test_short_levels_and_sizing(self) -> None:
        result = _evaluate("-0.0003")

        assert result.signal is FundingSignal.SHORT
        assert result.strength is FundingStrength.MEDIUM
        assert result.confidence == Decimal("30")
        assert result.entry_price == Decimal("49950")
        assert result.stop_loss == Decimal("50250")
        assert result.take_profit == Decimal("49850")
        assert result.leverage == Decimal("15")
        assert result.position_size == Decimal("3")

    def test_neutral_has_no_levels(self) -> None:
        result = _evaluate("0.0001")

        assert result.signal is FundingSignal.NEUTRAL
        assert result.entry_price is None
        assert result.stop_loss is None
        assert result.take_profit is None
        assert result.leverage == Decimal("1")
        assert result.position_size == Decimal("0")
        assert "Neutral funding - no clear bias" in result.details

    def test_far_funding_gets_no_bonus(self) -> None:
        assert _evaluate("0.0003", minutes_away=61).confidence == Decimal("30")
        assert _evaluate("0.0003", minutes_away=59).confidence == Decimal("40")

    def test_passed_funding_gets_no_bonus(self) -> None:
        result = _evaluate("0.0003", minutes_away=-5)

        assert result.confidence == Decimal("30")
        assert "Time to funding: funding already passed" in result.details

    def test_order_book_bonus_long(self) -> None:
        result = _evaluate("0.0003", order_book=_book("130", "100"))

        assert result.confidence == Decimal("45")
        assert "Order book dominated by bids" in result.details

    def test_order_book_against_direction_no_bonus(self) -> None:
        assert _evaluate("0.0003", order_book=_book("100", "130")).confidence == Decimal("30")
        assert _evaluate("0.0003", order_book=_book("115", "100")).confidence == Decimal("30")

    def test_order_book_bonus_short(self) -> None:
        result = _evaluate("-0.0003", order_book=_book("100", "150"))
        assert result.confidence == Decimal("45")

    def test_confidence_capped_at_100(self) -> None:
        result = _evaluate("0.002", minutes_away=10, order_book=_book("500", "100"))

        assert result.confidence == Decimal("100")
        assert result.position_size == Decimal("10")

    def test_base_confidence_capped_at_90(self) -> None:
        assert _evaluate("0.005").confidence == Decimal("90")

    def test_details_include_rate_and_open_interest(self) -> None:
        result = _evaluate("0.0008", minutes_away=30, open_interest=Decimal("1500000"))

        assert result.details[0] == "Funding rate: 0.0800%"
        assert result.details[1] == "Time to funding: less than 1 hour (30 min)"
        assert "Open interest: 1.50M" in result.details

    def test_custom_settings(self) -> None:
        settings = FundingStrategySettings(signal_threshold=Decimal("0.001"))
        result = evaluate_funding_strategy(
            Decimal("0.0008"), NOW_MS, PRICE, None, None, settings=settings, now_ms=NOW_MS
        )
        assert result.signal is FundingSignal.NEUTRAL


class TestEvaluateFundingValidation:
    """Malformed inputs are rejected before evaluation."""

    def test_non_positive_price(self) -> None:
        with pytest.raises(InvalidInputError, match="current_price"):
            evaluate_funding_strategy(Decimal("0.0008"), NOW_MS, Decimal("0"), None, None)

    def test_non_finite_rate(self) -> None:
        with pytest.raises(InvalidInputError, match="funding_rate"):
            evaluate_funding_strategy(Decimal("NaN"), NOW_MS, PRICE, None, None)

    def test_negative_open_interest(self) -> None:
        with pytest.raises(InvalidInputError, match="open_interest"):
            evaluate_funding_strategy(Decimal("0.0008"), NOW_MS, PRICE, None, Decimal("-1"))

    def test_malformed_order_book(self) -> None:
        with pytest.raises(InvalidInputError, match="bids"):
            evaluate_funding_strategy(
                Decimal("0.0008"), NOW_MS, PRICE, _book("-1", "100"), None
            )
