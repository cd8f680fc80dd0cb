"""
Fleet Core Time — Injectable Clock
===================================
The future-date validation rule and decision timestamps are the only
time-sensitive code in the core. Neither calls datetime.now() directly:
"now" is passed in explicitly or read from a Clock, so evaluations can be
replayed with a FixedClock.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Optional, Protocol


class Clock(Protocol):

    def now_utc(self) -> datetime:
        ...  # pragma: no cover


class SystemClock:
    """Wall-clock time, always UTC."""

    def now_utc(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """
    Clock pinned to a single instant, normalised to UTC.

    Usage:
        clock = FixedClock(datetime(2026, 3, 1, 8, 0, tzinfo=timezone.utc))
        lifecycle = EventLifecycle(clock=clock)
        clock.advance(days=1)
    """

    def __init__(self, fixed_dt: datetime) -> None:
        if not isinstance(fixed_dt, datetime):
            raise TypeError("FixedClock requires a datetime.")
        if fixed_dt.tzinfo is None:
            raise ValueError("FixedClock requires timezone-aware datetime.")
        self._fixed_dt = fixed_dt.astimezone(timezone.utc)

    def now_utc(self) -> datetime:
        return self._fixed_dt

    def today_utc(self) -> date:
        return self._fixed_dt.date()

    def advance(self, **delta) -> None:
        """Move the pinned instant forward, e.g. advance(days=1)."""
        self._fixed_dt = self._fixed_dt + timedelta(**delta)


SYSTEM_CLOCK = SystemClock()


def now_utc(clock: Optional[Clock] = None) -> datetime:
    """Current UTC time from clock, or from the system clock."""
    return (clock if clock is not None else SYSTEM_CLOCK).now_utc()
