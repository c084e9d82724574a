"""Rule-based candlestick pattern classifier.

Scans a candle series from index 2 onward and evaluates every geometric
predicate independently at each index. Several patterns may fire on the
same candle; each produces its own event.

Events are ordered by ascending index, then by the evaluation order of
``_RULES``.
"""

from collections.abc import Callable, Sequence
from decimal import Decimal

from crypto_ta.models import Candle
from crypto_ta.patterns.models import (
    PatternBias,
    PatternEvent,
    PatternStrength,
    PatternType,
)
from crypto_ta.validation import validate_candles

#: Doji: body at most 10% of the high-low range.
_DOJI_BODY_RATIO = Decimal("0.1")
#: Star patterns: middle body under 30% of the first candle's body.
_STAR_BODY_RATIO = Decimal("0.3")
#: Soldiers/crows: close within the outer 40% of the candle's range.
_OUTER_RANGE_RATIO = Decimal("0.4")
_TWO = Decimal("2")


def is_hammer(candle: Candle) -> bool:
    """Long lower shadow (> 2x body) with an upper shadow shorter than the body."""
    return candle.lower_shadow > _TWO * candle.body and candle.upper_shadow < candle.body


def is_shooting_star(candle: Candle) -> bool:
    """Long upper shadow (> 2x body) with a lower shadow shorter than the body."""
    return candle.upper_shadow > _TWO * candle.body and candle.lower_shadow < candle.body


def is_doji(candle: Candle) -> bool:
    return candle.body <= candle.range * _DOJI_BODY_RATIO


def is_bullish_engulfing(prev: Candle, current: Candle) -> bool:
    """Bearish candle followed by a bullish body that engulfs it."""
    return (
        prev.is_bearish
        and current.is_bullish
        and current.open < prev.close
        and current.close > prev.open
    )


def is_bearish_engulfing(prev: Candle, current: Candle) -> bool:
    """Bullish candle followed by a bearish body that engulfs it."""
    return (
        prev.is_bullish
        and current.is_bearish
        and current.open > prev.close
        and current.close < prev.open
    )


def _body_midpoint(candle: Candle) -> Decimal:
    return (candle.open + candle.close) / _TWO


def is_morning_star(first: Candle, middle: Candle, last: Candle) -> bool:
    """Bearish candle, small middle body, then a bullish close above the first body's midpoint."""
    return (
        first.is_bearish
        and middle.body < first.body * _STAR_BODY_RATIO
        and last.is_bullish
        and last.close > _body_midpoint(first)
    )


def is_evening_star(first: Candle, middle: Candle, last: Candle) -> bool:
    """Bullish candle, small middle body, then a bearish close below the first body's midpoint."""
    return (
        first.is_bullish
        and middle.body < first.body * _STAR_BODY_RATIO
        and last.is_bearish
        and last.close < _body_midpoint(first)
    )


def _closes_near_high(candle: Candle) -> bool:
    return candle.close >= candle.high - candle.range * _OUTER_RANGE_RATIO


def _closes_near_low(candle: Candle) -> bool:
    return candle.close <= candle.low + candle.range * _OUTER_RANGE_RATIO


def is_three_white_soldiers(first: Candle, middle: Candle, last: Candle) -> bool:
    """Three bullish candles closing near their highs, each opening above the prior open."""
    trio = (first, middle, last)
    return (
        all(c.is_bullish and _closes_near_high(c) for c in trio)
        and middle.open > first.open
        and last.open > middle.open
    )


def is_three_black_crows(first: Candle, middle: Candle, last: Candle) -> bool:
    """Three bearish candles closing near their lows, each opening below the prior open."""
    trio = (first, middle, last)
    return (
        all(c.is_bearish and _closes_near_low(c) for c in trio)
        and middle.open < first.open
        and last.open < middle.open
    )


_Rule = tuple[
    PatternType,
    PatternBias,
    PatternStrength,
    Callable[[Candle, Candle, Candle], bool],
]

_RULES: tuple[_Rule, ...] = (
    (PatternType.HAMMER, PatternBias.BULLISH, PatternStrength.STRONG,
     lambda a, b, c: is_hammer(c)),
    (PatternType.SHOOTING_STAR, PatternBias.BEARISH, PatternStrength.STRONG,
     lambda a, b, c: is_shooting_star(c)),
    (PatternType.DOJI, PatternBias.NEUTRAL, PatternStrength.WEAK,
     lambda a, b, c: is_doji(c)),
    (PatternType.BULLISH_ENGULFING, PatternBias.BULLISH, PatternStrength.STRONG,
     lambda a, b, c: is_bullish_engulfing(b, c)),
    (PatternType.BEARISH_ENGULFING, PatternBias.BEARISH, PatternStrength.STRONG,
     lambda a, b, c: is_bearish_engulfing(b, c)),
    (PatternType.MORNING_STAR, PatternBias.BULLISH, PatternStrength.VERY_STRONG,
     is_morning_star),
    (PatternType.EVENING_STAR, PatternBias.BEARISH, PatternStrength.VERY_STRONG,
     is_evening_star),
    (PatternType.THREE_WHITE_SOLDIERS, PatternBias.BULLISH, PatternStrength.VERY_STRONG,
     is_three_white_soldiers),
    (PatternType.THREE_BLACK_CROWS, PatternBias.BEARISH, PatternStrength.VERY_STRONG,
     is_three_black_crows),
)


def detect_patterns(candles: Sequence[Candle]) -> list[PatternEvent]:
    """Detect candlestick patterns across a candle series.

    Indices 0 and 1 are never reported, since the three-candle rules need two
    prior candles and all rules share one scan window.

    Raises:
        InvalidCandleError: If the series violates candle invariants.
    """
    validate_candles(candles)
    events: list[PatternEvent] = []
    for i in range(2, len(candles)):
        first, middle, last = candles[i - 2], candles[i - 1], candles[i]
        for pattern, bias, strength, rule in _RULES:
            if rule(first, middle, last):
                events.append(PatternEvent(i, pattern, bias, strength))
    return events
