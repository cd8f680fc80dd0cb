"""
Fleet Core Lifecycle — Event Summary
====================================
Counters for a list of fuel events (validation queue header, reports).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from fleetcore.lifecycle.events import FuelEvent
from fleetcore.lifecycle.states import EventStatus


@dataclass(frozen=True)
class EventsSummary:
    total: int = 0
    pending: int = 0
    validated: int = 0
    rejected: int = 0
    total_liters: float = 0

    @property
    def decided(self) -> int:
        return self.validated + self.rejected

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "pending": self.pending,
            "validated": self.validated,
            "rejected": self.rejected,
            "total_liters": self.total_liters,
        }


def summarize_events(events: Iterable[FuelEvent]) -> EventsSummary:
    counts = {status: 0 for status in EventStatus}
    total_liters = 0
    total = 0
    for event in events:
        total += 1
        counts[event.status] += 1
        total_liters += event.liters

    return EventsSummary(
        total=total,
        pending=counts[EventStatus.PENDING],
        validated=counts[EventStatus.VALIDATED],
        rejected=counts[EventStatus.REJECTED],
        total_liters=total_liters,
    )
