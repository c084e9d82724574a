"""Configuration system using pydantic-settings with environment variable loading."""

from decimal import Decimal
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class IndicatorSettings(BaseSettings):
    """Periods and multipliers for the indicator library.

    Passed to ``compute_indicators`` as its parameter set. Defaults are the
    conventional textbook periods.
    """

    model_config = SettingsConfigDict(env_prefix="INDICATOR_")

    sma_period: int = 20
    ema_period: int = 20
    rsi_period: int = 14
    macd_fast: int = 12
    macd_slow: int = 26
    macd_signal: int = 9
    bollinger_period: int = 20
    bollinger_multiplier: Decimal = Decimal("2")
    stochastic_period: int = 14
    stochastic_signal_period: int = 3
    atr_period: int = 14
    williams_r_period: int = 14
    cci_period: int = 20
    mfi_period: int = 14
    adx_period: int = 14
    adx_smoothed: bool = False  # False = single-pass DX approximation
    sar_step: Decimal = Decimal("0.02")
    sar_maximum: Decimal = Decimal("0.2")
    ichimoku_conversion: int = 9
    ichimoku_base: int = 26
    ichimoku_span_b: int = 52
    ichimoku_lag: int = 26


class SignalSettings(BaseSettings):
    """Vote thresholds for the signal aggregator."""

    model_config = SettingsConfigDict(env_prefix="SIGNAL_")

    rsi_oversold: Decimal = Decimal("30")
    rsi_overbought: Decimal = Decimal("70")
    stochastic_oversold: Decimal = Decimal("20")
    stochastic_overbought: Decimal = Decimal("80")


class TrendHeuristicSettings(BaseSettings):
    """EMA crossover trend heuristic parameters."""

    model_config = SettingsConfigDict(env_prefix="TREND_")

    short_ema_period: int = 5
    long_ema_period: int = 20
    volume_sma_period: int = 10
    min_candles: int = 10
    damping: Decimal = Decimal("0.1")  # Scales the EMA spread into a price move
    max_volume_ratio: Decimal = Decimal("2")
    trend_threshold_pct: Decimal = Decimal("2")  # bullish/bearish beyond +/-2%
    strong_threshold_pct: Decimal = Decimal("5")  # strong beyond +/-5%
    confidence_multiplier: Decimal = Decimal("10")
    max_confidence: Decimal = Decimal("90")


class FundingStrategySettings(BaseSettings):
    """Funding-rate entry heuristic parameters.

    All rates are raw per-period fractions (0.0001 = 0.01%).
    """

    model_config = SettingsConfigDict(env_prefix="FUNDING_")

    signal_threshold: Decimal = Decimal("0.0001")
    strong_threshold: Decimal = Decimal("0.0005")
    confidence_scale: Decimal = Decimal("100000")
    max_base_confidence: Decimal = Decimal("90")
    near_funding_seconds: int = 3600
    near_funding_bonus: Decimal = Decimal("10")
    order_book_imbalance_ratio: Decimal = Decimal("1.2")
    order_book_bonus: Decimal = Decimal("15")
    max_confidence: Decimal = Decimal("100")
    entry_offset: Decimal = Decimal("0.001")  # 0.1% beyond current price
    stop_offset: Decimal = Decimal("0.005")  # 0.5% against the position
    target_multiplier: Decimal = Decimal("10")
    leverage_scale: Decimal = Decimal("50000")
    max_leverage: Decimal = Decimal("20")
    max_position_size: Decimal = Decimal("10")  # percent of capital


class AnalysisSettings(BaseSettings):
    """Calling-layer settings: data fetch sizes and result caching."""

    model_config = SettingsConfigDict(env_prefix="ANALYSIS_")

    kline_interval: str = "1"
    kline_limit: int = 200
    order_book_depth: int = 25
    cache_ttl_seconds: float = 300.0  # 5 minutes per symbol


class AppSettings(BaseSettings):
    """Root application settings, composing all sub-settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    log_level: str = "INFO"
    log_format: Literal["console", "json"] = "console"
    indicator: IndicatorSettings = IndicatorSettings()
    signal: SignalSettings = SignalSettings()
    trend: TrendHeuristicSettings = TrendHeuristicSettings()
    funding: FundingStrategySettings = FundingStrategySettings()
    analysis: AnalysisSettings = AnalysisSettings()
