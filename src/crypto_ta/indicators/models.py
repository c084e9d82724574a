"""Indicator result models.

Multi-field indicators produce one point record per candle. Each field is
``None`` until enough history exists to compute it.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from decimal import Decimal
from typing import TypeVar

from crypto_ta.indicators.core import Series

_P = TypeVar("_P")


@dataclass(frozen=True)
class MACDPoint:
    macd: Decimal | None = None
    signal: Decimal | None = None
    histogram: Decimal | None = None


@dataclass(frozen=True)
class BollingerPoint:
    upper: Decimal | None = None
    middle: Decimal | None = None
    lower: Decimal | None = None


@dataclass(frozen=True)
class StochasticPoint:
    k: Decimal | None = None
    d: Decimal | None = None


@dataclass(frozen=True)
class IchimokuPoint:
    conversion: Decimal | None = None
    base: Decimal | None = None
    span_a: Decimal | None = None
    span_b: Decimal | None = None
    lagging: Decimal | None = None


def last_complete(
    points: Sequence[_P], is_complete: Callable[[_P], bool]
) -> _P | None:
    """Most recent point satisfying ``is_complete``, or None."""
    for point in reversed(points):
        if is_complete(point):
            return point
    return None


@dataclass(frozen=True)
class IndicatorBundle:
    """All indicator series computed from one candle series.

    Every series is aligned 1:1 with the candle series it was computed from.
    """

    sma: Series
    ema: Series
    rsi: Series
    macd: list[MACDPoint]
    bollinger: list[BollingerPoint]
    stochastic: list[StochasticPoint]
    atr: Series
    williams_r: Series
    cci: Series
    mfi: Series
    obv: Series
    adx: Series
    parabolic_sar: Series
    ichimoku: list[IchimokuPoint]
    volume_delta: Series
    vwap: Series

    def __len__(self) -> int:
        return len(self.sma)

    def latest_macd(self) -> MACDPoint | None:
        """Latest point with both MACD line and signal line defined."""
        return last_complete(self.macd, lambda p: p.macd is not None and p.signal is not None)

    def latest_bollinger(self) -> BollingerPoint | None:
        return last_complete(
            self.bollinger, lambda p: p.upper is not None and p.lower is not None
        )

    def latest_stochastic(self) -> StochasticPoint | None:
        """Latest point with both %K and %D defined."""
        return last_complete(self.stochastic, lambda p: p.k is not None and p.d is not None)
