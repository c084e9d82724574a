"""Funding-rate entry heuristic ("enter ahead of funding").

Derives a directional call from the sign and size of the perpetual funding
rate, boosts confidence when funding is imminent or the order book leans the
same way, and proposes entry, stop and target levels with leverage and
position sizing.

UNITS: ``funding_rate`` is a raw per-period fraction (0.0001 = 0.01%).
Every threshold and scale constant in ``FundingStrategySettings`` is
expressed in that unit, e.g. leverage = min(|rate| * 50000, 20).

CRITICAL: All computations use Decimal. Never use float.
"""

from decimal import Decimal

from crypto_ta.config import FundingStrategySettings
from crypto_ta.funding.models import FundingSignal, FundingStrategyResult, FundingStrength
from crypto_ta.funding.timing import describe_time_to_funding, format_compact_number, ms_until
from crypto_ta.indicators.core import HUNDRED, ONE, ZERO, quantize
from crypto_ta.models import OrderBook
from crypto_ta.validation import (
    validate_finite,
    validate_non_negative,
    validate_order_book,
    validate_price,
)


def classify_funding(
    funding_rate: Decimal, settings: FundingStrategySettings | None = None
) -> tuple[FundingSignal, FundingStrength]:
    """Map a funding rate to a direction and strength.

    Rates within ``[-signal_threshold, +signal_threshold]`` are NEUTRAL (WEAK).
    Otherwise the strength is STRONG beyond ``strong_threshold``, else MEDIUM.
    """
    s = settings or FundingStrategySettings()
    if funding_rate > s.signal_threshold:
        signal = FundingSignal.LONG
    elif funding_rate < -s.signal_threshold:
        signal = FundingSignal.SHORT
    else:
        return FundingSignal.NEUTRAL, FundingStrength.WEAK

    strength = FundingStrength.STRONG if abs(funding_rate) > s.strong_threshold else FundingStrength.MEDIUM
    return signal, strength


def evaluate_funding_strategy(
    funding_rate: Decimal,
    next_funding_time_ms: int,
    current_price: Decimal,
    order_book: OrderBook | None,
    open_interest: Decimal | None,
    settings: FundingStrategySettings | None = None,
    now_ms: int | None = None,
) -> FundingStrategyResult:
    """Evaluate the funding entry heuristic.

    Policy:
        1. Direction/strength from ``classify_funding``.
        2. Base confidence = min(|rate| * 100000, 90).
        3. +10 when funding is less than one hour away (and not yet passed).
        4. +15 when bid volume exceeds ask volume by more than 20% on a LONG,
           or ask volume exceeds bid volume by more than 20% on a SHORT.
        5. Directional calls get entry = price * (1 +/- 0.001),
           stop = price * (1 -/+ 0.005), target = price * (1 +/- |rate| * 10),
           leverage = min(|rate| * 50000, 20) and
           position size = min(confidence / 10, 10).
    Confidence is capped at 100.

    Args:
        funding_rate: Current funding rate as a raw fraction.
        next_funding_time_ms: Next funding timestamp, Unix milliseconds.
        current_price: Latest traded price.
        order_book: Order book snapshot, or None when unavailable.
        open_interest: Open interest, or None when unavailable.
        settings: Thresholds and scale constants.
        now_ms: Clock override for deterministic evaluation.

    Returns:
        FundingStrategyResult computed fresh for this call.

    Raises:
        InvalidInputError: On a non-positive price, negative open interest or
            malformed order book levels.
    """
    s = settings or FundingStrategySettings()
    validate_finite(funding_rate, "funding_rate")
    validate_price(current_price, "current_price")
    if order_book is not None:
        validate_order_book(order_book)
    if open_interest is not None:
        validate_non_negative(open_interest, "open_interest")

    details: list[str] = [
        f"Funding rate: {funding_rate * HUNDRED:.4f}%",
        f"Time to funding: {describe_time_to_funding(next_funding_time_ms, now_ms)}",
    ]

    signal, strength = classify_funding(funding_rate, s)
    magnitude = abs(funding_rate)
    confidence = min(magnitude * s.confidence_scale, s.max_base_confidence)

    if signal is FundingSignal.LONG:
        details.append("Positive funding - LONG bias")
    elif signal is FundingSignal.SHORT:
        details.append("Negative funding - SHORT bias")
    else:
        details.append("Neutral funding - no clear bias")

    remaining = ms_until(next_funding_time_ms, now_ms)
    if 0 <= remaining < s.near_funding_seconds * 1000:
        confidence += s.near_funding_bonus
        details.append("Funding imminent - confidence raised")

    if order_book is not None:
        bids, asks = order_book.bid_volume, order_book.ask_volume
        if signal is FundingSignal.LONG and bids > asks * s.order_book_imbalance_ratio:
            confidence += s.order_book_bonus
            details.append("Order book dominated by bids")
        elif signal is FundingSignal.SHORT and asks > bids * s.order_book_imbalance_ratio:
            confidence += s.order_book_bonus
            details.append("Order book dominated by asks")

    if open_interest is not None:
        details.append(f"Open interest: {format_compact_number(open_interest)}")

    confidence = quantize(min(confidence, s.max_confidence))

    if signal is FundingSignal.NEUTRAL:
        return FundingStrategyResult(
            signal=signal,
            strength=strength,
            confidence=confidence,
            entry_price=None,
            stop_loss=None,
            take_profit=None,
            leverage=ONE,
            position_size=ZERO,
            details=details,
        )

    direction = ONE if signal is FundingSignal.LONG else -ONE
    entry = current_price * (ONE + direction * s.entry_offset)
    stop = current_price * (ONE - direction * s.stop_offset)
    target = current_price * (ONE + direction * magnitude * s.target_multiplier)
    leverage = max(min(magnitude * s.leverage_scale, s.max_leverage), ONE)
    position_size = min(confidence / Decimal("10"), s.max_position_size)

    details.append(
        f"Entry {entry:.4f}, stop {stop:.4f}, target {target:.4f}, leverage {leverage:.1f}x"
    )

    return FundingStrategyResult(
        signal=signal,
        strength=strength,
        confidence=confidence,
        entry_price=quantize(entry),
        stop_loss=quantize(stop),
        take_profit=quantize(target),
        leverage=quantize(leverage),
        position_size=quantize(position_size),
        details=details,
    )
