"""Indicator library.

Pure, trailing (non-look-ahead) indicator functions over candle series.
Each returns a series aligned 1:1 with its input, with ``None`` wherever
history is insufficient.
"""

from crypto_ta.indicators.bundle import compute_indicators
from crypto_ta.indicators.core import last_defined
from crypto_ta.indicators.models import (
    BollingerPoint,
    IchimokuPoint,
    IndicatorBundle,
    MACDPoint,
    StochasticPoint,
)
from crypto_ta.indicators.momentum import cci, macd, mfi, rsi, stochastic, williams_r
from crypto_ta.indicators.moving_average import ema, sma
from crypto_ta.indicators.trend import adx, ichimoku, parabolic_sar
from crypto_ta.indicators.volatility import atr, bollinger_bands
from crypto_ta.indicators.volume import obv, volume_delta, vwap

__all__ = [
    "BollingerPoint",
    "IchimokuPoint",
    "IndicatorBundle",
    "MACDPoint",
    "StochasticPoint",
    "adx",
    "atr",
    "bollinger_bands",
    "cci",
    "compute_indicators",
    "ema",
    "ichimoku",
    "last_defined",
    "macd",
    "mfi",
    "obv",
    "parabolic_sar",
    "rsi",
    "sma",
    "stochastic",
    "volume_delta",
    "vwap",
    "williams_r",
]
