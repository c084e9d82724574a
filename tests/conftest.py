"""Shared test fixtures for the technical analysis core."""

from collections.abc import Callable, Sequence
from decimal import Decimal

import pytest

from crypto_ta.config import AppSettings
from crypto_ta.models import Candle

MINUTE_MS = 60_000


def _candle(
    index: int,
    open_: Decimal | str,
    high: Decimal | str,
    low: Decimal | str,
    close: Decimal | str,
    volume: Decimal | str = "100",
) -> Candle:
    return Candle(
        timestamp_ms=1_700_000_000_000 + index * MINUTE_MS,
        open=Decimal(str(open_)),
        high=Decimal(str(high)),
        low=Decimal(str(low)),
        close=Decimal(str(close)),
        volume=Decimal(str(volume)),
    )


@pytest.fixture
def make_candle() -> Callable[..., Candle]:
    """Factory for a single candle at minute ``index``."""
    return _candle


@pytest.fixture
def series_from_closes() -> Callable[..., list[Candle]]:
    """Factory building a candle series from closes.

    Each candle opens at the previous close (the first opens at its own
    close) and its high/low extend ``spread`` beyond the body.
    """

    def build(
        closes: Sequence[Decimal | str | int],
        spread: Decimal | str = "0",
        volume: Decimal | str = "100",
    ) -> list[Candle]:
        pad = Decimal(str(spread))
        candles: list[Candle] = []
        previous: Decimal | None = None
        for i, raw in enumerate(closes):
            close = Decimal(str(raw))
            open_ = previous if previous is not None else close
            candles.append(
                _candle(
                    i,
                    open_,
                    max(open_, close) + pad,
                    min(open_, close) - pad,
                    close,
                    volume,
                )
            )
            previous = close
        return candles

    return build


@pytest.fixture
def rising_candles(series_from_closes) -> list[Candle]:
    """25 candles with closes strictly increasing by 1 from 100."""
    return series_from_closes(range(100, 125), spread="0.5")


@pytest.fixture
def flat_candles() -> list[Candle]:
    """52 identical candles (O=H=L=C=100, volume 10)."""
    return [_candle(i, "100", "100", "100", "100", "10") for i in range(52)]


@pytest.fixture
def mock_settings() -> AppSettings:
    """Return AppSettings with test defaults."""
    return AppSettings(log_level="DEBUG")
