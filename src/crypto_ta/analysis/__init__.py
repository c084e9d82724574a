"""Calling layer: market data boundary, result cache, report assembly and service."""

from crypto_ta.analysis.cache import AnalysisCache
from crypto_ta.analysis.report import IndicatorSnapshot, TechnicalReport, build_report
from crypto_ta.analysis.service import AnalysisBatch, AnalysisService
from crypto_ta.analysis.source import (
    MarketDataSource,
    candles_from_rows,
    long_short_ratio_from_payload,
    order_book_from_payload,
)

__all__ = [
    "AnalysisBatch",
    "AnalysisCache",
    "AnalysisService",
    "IndicatorSnapshot",
    "MarketDataSource",
    "TechnicalReport",
    "build_report",
    "candles_from_rows",
    "long_short_ratio_from_payload",
    "order_book_from_payload",
]
