"""Funding schedule and number formatting helpers."""

import time
from decimal import Decimal

_MS_PER_MINUTE = 60 * 1000
_MS_PER_HOUR = 60 * _MS_PER_MINUTE

_UNITS: tuple[tuple[Decimal, str], ...] = (
    (Decimal("1e9"), "B"),
    (Decimal("1e6"), "M"),
    (Decimal("1e3"), "K"),
)


def now_ms() -> int:
    """Current Unix time in milliseconds."""
    return int(time.time() * 1000)


def ms_until(next_funding_time_ms: int, now: int | None = None) -> int:
    """Milliseconds from ``now`` until the next funding; negative once it has passed."""
    return next_funding_time_ms - (now if now is not None else now_ms())


def describe_time_to_funding(next_funding_time_ms: int, now: int | None = None) -> str:
    """Render the time until funding, e.g. "3h 20m" or "less than 1 hour (25 min)"."""
    remaining = ms_until(next_funding_time_ms, now)
    if remaining < 0:
        return "funding already passed"

    hours, rest = divmod(remaining, _MS_PER_HOUR)
    minutes = rest // _MS_PER_MINUTE
    if hours == 0:
        return f"less than 1 hour ({minutes} min)"
    if hours < 24:
        return f"{hours}h {minutes}m"
    days, hours = divmod(hours, 24)
    return f"{days}d {hours}h"


def format_compact_number(value: Decimal) -> str:
    """Format a large quantity with a K/M/B suffix and two decimals."""
    for threshold, suffix in _UNITS:
        if abs(value) >= threshold:
            return f"{value / threshold:.2f}{suffix}"
    return f"{value:.2f}"
