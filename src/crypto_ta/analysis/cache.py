"""Per-symbol analysis result cache with a fixed time-to-live.

Lives in the calling layer; the core computations never consult it.
Uses asyncio.Lock for safe concurrent reads/writes from multiple coroutines.
"""

import asyncio
import time
from collections.abc import Callable
from typing import Generic, TypeVar

T = TypeVar("T")


class AnalysisCache(Generic[T]):
    """Expiring symbol -> result map.

    Entries older than ``ttl_seconds`` are treated as missing and evicted
    on access.

    Args:
        ttl_seconds: Entry lifetime. Default 5 minutes.
        clock: Monotonic time source in seconds; injectable for tests.
    """

    def __init__(
        self,
        ttl_seconds: float = 300.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[str, tuple[T, float]] = {}
        self._lock = asyncio.Lock()

    async def get(self, symbol: str) -> T | None:
        """Return the cached result for ``symbol`` if still fresh, else None."""
        async with self._lock:
            entry = self._entries.get(symbol)
            if entry is None:
                return None
            value, stored_at = entry
            if self._clock() - stored_at >= self._ttl:
                del self._entries[symbol]
                return None
            return value

    async def put(self, symbol: str, value: T) -> None:
        async with self._lock:
            self._entries[symbol] = (value, self._clock())

    async def invalidate(self, symbol: str | None = None) -> None:
        """Drop one symbol, or every entry when ``symbol`` is None."""
        async with self._lock:
            if symbol is None:
                self._entries.clear()
            else:
                self._entries.pop(symbol, None)

    def __len__(self) -> int:
        return len(self._entries)
