"""Custom exceptions for the technical analysis core.

Insufficient history is never an error: affected positions simply hold
``None``. Only malformed input is rejected.
"""


class AnalysisError(Exception):
    """Base exception for all analysis errors."""


class InvalidInputError(AnalysisError):
    """Raised when a scalar input or order book is malformed."""


class InvalidCandleError(InvalidInputError):
    """Raised when a candle violates OHLC invariants or timestamp ordering."""

    def __init__(self, message: str, index: int | None = None) -> None:
        super().__init__(message if index is None else f"candle {index}: {message}")
        self.index = index


class MarketDataUnavailableError(AnalysisError):
    """Raised when a market data source cannot supply the candles to analyze."""
