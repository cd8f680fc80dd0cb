"""
Fleet Core Time — Public API
============================
"""

from fleetcore.time.clock import SYSTEM_CLOCK, Clock, FixedClock, SystemClock, now_utc

__all__ = [
    "Clock",
    "FixedClock",
    "SystemClock",
    "SYSTEM_CLOCK",
    "now_utc",
]
