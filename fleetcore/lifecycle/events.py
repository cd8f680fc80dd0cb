"""
Fleet Core Lifecycle — Fuel Event
=================================
Immutable snapshot of a fuel load. Transitions return a new snapshot;
the original is never mutated.

Invariants:
- rejection_reason is a non-empty string iff status is rejected
- a pending event carries no decision (decided_by / decided_at)
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from numbers import Real
from typing import Optional, Union

from fleetcore.lifecycle.states import EventStatus


@dataclass(frozen=True)
class FuelEvent:
    """
    Fields:
        event_id:         Identifier from the events collaborator.
        liters:           Loaded volume. Non-positive values are allowed
                          here and blocked by validation.
        occurred_at:      Date (or datetime) of the load.
        status:           pending | validated | rejected.
        evidence_count:   Evidence items known when last evaluated.
        rejection_reason: Present iff rejected.
        unit_id:          Business unit the load belongs to.
        decided_by:       identity_id of the validator/rejector.
        decided_at:       When the decision was taken (UTC).
    """

    event_id: Union[int, str]
    liters: float
    occurred_at: date
    status: EventStatus = EventStatus.PENDING
    evidence_count: int = 0
    rejection_reason: Optional[str] = None
    unit_id: Optional[int] = None
    decided_by: Optional[str] = None
    decided_at: Optional[datetime] = None

    def __post_init__(self):
        if self.event_id is None or self.event_id == "":
            raise ValueError("event_id must be set.")

        if isinstance(self.liters, bool) or not isinstance(self.liters, Real):
            raise ValueError(f"liters must be a number, got {self.liters!r}.")

        if not isinstance(self.occurred_at, date):
            raise ValueError("occurred_at must be a date or datetime.")

        if not isinstance(self.status, EventStatus):
            object.__setattr__(self, "status", EventStatus(self.status))

        if (
            isinstance(self.evidence_count, bool)
            or not isinstance(self.evidence_count, int)
            or self.evidence_count < 0
        ):
            raise ValueError("evidence_count must be an int >= 0.")

        if self.status == EventStatus.REJECTED:
            if (
                not isinstance(self.rejection_reason, str)
                or not self.rejection_reason.strip()
            ):
                raise ValueError("A rejected event requires a rejection_reason.")
        elif self.rejection_reason is not None:
            raise ValueError(
                f"rejection_reason is only allowed on rejected events, "
                f"status is '{self.status.value}'."
            )

        if self.status == EventStatus.PENDING and (
            self.decided_by is not None or self.decided_at is not None
        ):
            raise ValueError("A pending event cannot carry a decision.")

        if self.decided_at is not None and (
            not isinstance(self.decided_at, datetime)
            or self.decided_at.tzinfo is None
        ):
            raise ValueError("decided_at must be a timezone-aware datetime.")

    @property
    def is_pending(self) -> bool:
        return self.status == EventStatus.PENDING

    def to_dict(self) -> dict:
        return {
            "event_id": self.event_id,
            "liters": self.liters,
            "occurred_at": self.occurred_at.isoformat(),
            "status": self.status.value,
            "evidence_count": self.evidence_count,
            "rejection_reason": self.rejection_reason,
            "unit_id": self.unit_id,
            "decided_by": self.decided_by,
            "decided_at": (
                self.decided_at.isoformat() if self.decided_at else None
            ),
        }
