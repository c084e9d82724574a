"""Batch computation of every indicator series from one candle series."""

from collections.abc import Sequence

from crypto_ta.config import IndicatorSettings
from crypto_ta.indicators.models import IndicatorBundle
from crypto_ta.indicators.momentum import cci, macd, mfi, rsi, stochastic, williams_r
from crypto_ta.indicators.moving_average import ema, sma
from crypto_ta.indicators.trend import adx, ichimoku, parabolic_sar
from crypto_ta.indicators.volatility import atr, bollinger_bands
from crypto_ta.indicators.volume import obv, volume_delta, vwap
from crypto_ta.logging import get_logger
from crypto_ta.models import Candle
from crypto_ta.validation import validate_candles

logger = get_logger(__name__)


def compute_indicators(
    candles: Sequence[Candle], params: IndicatorSettings | None = None
) -> IndicatorBundle:
    """Validate a candle series and compute all indicator series from it.

    Series shorter than an indicator's window are not an error: the affected
    positions hold ``None``.

    Args:
        candles: Candle series, oldest first.
        params: Periods and multipliers. Defaults to ``IndicatorSettings()``.

    Returns:
        IndicatorBundle with every series aligned to ``candles``.

    Raises:
        InvalidCandleError: If the series violates candle invariants.
    """
    validate_candles(candles)
    p = params or IndicatorSettings()

    bundle = IndicatorBundle(
        sma=sma(candles, p.sma_period),
        ema=ema(candles, p.ema_period),
        rsi=rsi(candles, p.rsi_period),
        macd=macd(candles, p.macd_fast, p.macd_slow, p.macd_signal),
        bollinger=bollinger_bands(candles, p.bollinger_period, p.bollinger_multiplier),
        stochastic=stochastic(candles, p.stochastic_period, p.stochastic_signal_period),
        atr=atr(candles, p.atr_period),
        williams_r=williams_r(candles, p.williams_r_period),
        cci=cci(candles, p.cci_period),
        mfi=mfi(candles, p.mfi_period),
        obv=obv(candles),
        adx=adx(candles, p.adx_period, smoothed=p.adx_smoothed),
        parabolic_sar=parabolic_sar(candles, p.sar_step, p.sar_maximum),
        ichimoku=ichimoku(
            candles,
            p.ichimoku_conversion,
            p.ichimoku_base,
            p.ichimoku_span_b,
            p.ichimoku_lag,
        ),
        volume_delta=volume_delta(candles),
        vwap=vwap(candles),
    )

    logger.debug("indicators_computed", candles=len(candles), adx_smoothed=p.adx_smoothed)
    return bundle
