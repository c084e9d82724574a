"""Tests for the per-symbol TTL result cache."""

import pytest

from crypto_ta.analysis import AnalysisCache


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> AnalysisCache[str]:
    return AnalysisCache(ttl_seconds=300.0, clock=clock)


class TestAnalysisCache:
    """Tests for freshness, eviction and invalidation."""

    @pytest.mark.asyncio
    async def test_miss_returns_none(self, cache: AnalysisCache[str]) -> None:
        assert await cache.get("BTCUSDT") is None

    @pytest.mark.asyncio
    async def test_fresh_entry_returned(self, cache: AnalysisCache[str], clock: FakeClock) -> None:
        await cache.put("BTCUSDT", "report")
        clock.now += 299

        assert await cache.get("BTCUSDT") == "report"

    @pytest.mark.asyncio
    async def test_expired_entry_evicted(self, cache: AnalysisCache[str], clock: FakeClock) -> None:
        await cache.put("BTCUSDT", "report")
        clock.now += 300

        assert await cache.get("BTCUSDT") is None
        assert len(cache) == 0

    @pytest.mark.asyncio
    async def test_put_refreshes_timestamp(
        self, cache: AnalysisCache[str], clock: FakeClock
    ) -> None:
        await cache.put("BTCUSDT", "old")
        clock.now += 200
        await cache.put("BTCUSDT", "new")
        clock.now += 200

        assert await cache.get("BTCUSDT") == "new"

    @pytest.mark.asyncio
    async def test_symbols_are_independent(self, cache: AnalysisCache[str]) -> None:
        await cache.put("BTCUSDT", "btc")
        await cache.put("ETHUSDT", "eth")

        assert await cache.get("BTCUSDT") == "btc"
        assert await cache.get("ETHUSDT") == "eth"
        assert len(cache) == 2

    @pytest.mark.asyncio
    async def test_invalidate_one_symbol(self, cache: AnalysisCache[str]) -> None:
        await cache.put("BTCUSDT", "btc")
        await cache.put("ETHUSDT", "eth")
        await cache.invalidate("BTCUSDT")

        assert await cache.get("BTCUSDT") is None
        assert await cache.get("ETHUSDT") == "eth"

    @pytest.mark.asyncio
    async def test_invalidate_all(self, cache: AnalysisCache[str]) -> None:
        await cache.put("BTCUSDT", "btc")
        await cache.put("ETHUSDT", "eth")
        await cache.invalidate()

        assert len(cache) == 0
