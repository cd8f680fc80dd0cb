"""
Fleet Core Lifecycle — Event Lifecycle
======================================
Every transition request produces exactly one TransitionOutcome.

APPLIED → the returned event is the new snapshot.
BLOCKED → request refused; reason_code says why, event unchanged.
IGNORED → event already decided; event unchanged.

validate() is gated by the validation policy. reject() only needs a
non-blank reason. Neither raises for a valid-shaped event; errors of an
evidence source propagate.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from fleetcore.lifecycle.events import FuelEvent
from fleetcore.lifecycle.states import (
    FUEL_EVENT_WORKFLOW,
    EventStatus,
    WorkflowDefinition,
)
from fleetcore.policy.evaluator import evaluate
from fleetcore.policy.result import ValidationResult
from fleetcore.policy.thresholds import ValidationThresholds
from fleetcore.sync.contracts import EvidenceSource
from fleetcore.time.clock import Clock, now_utc

logger = logging.getLogger("fleet.lifecycle")


# ══════════════════════════════════════════════════════════════
# OUTCOME
# ══════════════════════════════════════════════════════════════

class TransitionStatus(Enum):
    APPLIED = "APPLIED"
    BLOCKED = "BLOCKED"
    IGNORED = "IGNORED"


class ReasonCode:
    """Machine-readable reasons for BLOCKED / IGNORED outcomes."""

    NOT_PENDING = "EVENT_NOT_PENDING"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    REASON_REQUIRED = "REJECTION_REASON_REQUIRED"


@dataclass(frozen=True)
class TransitionOutcome:
    """
    Invariants:
        - APPLIED has no reason_code
        - BLOCKED / IGNORED always carry a reason_code
    """

    status: TransitionStatus
    event: FuelEvent
    reason_code: Optional[str] = None
    validation: Optional[ValidationResult] = None

    def __post_init__(self):
        if not isinstance(self.status, TransitionStatus):
            raise ValueError(
                f"status must be TransitionStatus, got {type(self.status).__name__}."
            )
        if self.status == TransitionStatus.APPLIED and self.reason_code is not None:
            raise ValueError("APPLIED outcome must NOT include a reason_code.")
        if self.status != TransitionStatus.APPLIED and not self.reason_code:
            raise ValueError(
                f"{self.status.value} outcome must include a reason_code."
            )

    @property
    def is_applied(self) -> bool:
        return self.status == TransitionStatus.APPLIED

    @property
    def is_blocked(self) -> bool:
        return self.status == TransitionStatus.BLOCKED

    @property
    def is_ignored(self) -> bool:
        return self.status == TransitionStatus.IGNORED


# ══════════════════════════════════════════════════════════════
# LIFECYCLE
# ══════════════════════════════════════════════════════════════

class EventLifecycle:
    """
    Usage:
        lifecycle = EventLifecycle(clock=FixedClock(...), evidence_source=api)
        outcome = lifecycle.validate(event)
        if outcome.is_applied:
            save(outcome.event)

    Evidence count, first match wins: the evidence_count argument, the
    evidence_source, the count carried by the event snapshot.
    """

    def __init__(
        self,
        clock: Optional[Clock] = None,
        thresholds: Optional[ValidationThresholds] = None,
        workflow: WorkflowDefinition = FUEL_EVENT_WORKFLOW,
        evidence_source: Optional[EvidenceSource] = None,
    ):
        self._clock = clock
        self._thresholds = thresholds
        self._workflow = workflow
        self._evidence_source = evidence_source

    def _now(self) -> datetime:
        return now_utc(self._clock)

    def _evidence_count(self, event: FuelEvent, evidence_count: Optional[int]) -> int:
        if evidence_count is not None:
            return evidence_count
        if self._evidence_source is not None:
            return self._evidence_source.count_evidence(event.event_id)
        return event.evidence_count

    def check(
        self,
        event: FuelEvent,
        evidence_count: Optional[int] = None,
        thresholds: Optional[ValidationThresholds] = None,
    ) -> ValidationResult:
        """Run the validation policy without transitioning."""
        return evaluate(
            event,
            thresholds if thresholds is not None else self._thresholds,
            self._evidence_count(event, evidence_count),
            self._now(),
        )

    def validate(
        self,
        event: FuelEvent,
        evidence_count: Optional[int] = None,
        thresholds: Optional[ValidationThresholds] = None,
        actor_id: Optional[str] = None,
    ) -> TransitionOutcome:
        if not self._workflow.is_valid_transition(
            event.status, EventStatus.VALIDATED
        ):
            return self._ignored(event, "validate")

        count = self._evidence_count(event, evidence_count)
        now = self._now()
        result = evaluate(
            event,
            thresholds if thresholds is not None else self._thresholds,
            count,
            now,
        )

        if not result.valid:
            logger.info(
                f"Validation of event {event.event_id} blocked: "
                f"{list(result.errors)}"
            )
            return TransitionOutcome(
                status=TransitionStatus.BLOCKED,
                event=event,
                reason_code=ReasonCode.VALIDATION_FAILED,
                validation=result,
            )

        validated = dataclasses.replace(
            event,
            status=EventStatus.VALIDATED,
            evidence_count=count,
            rejection_reason=None,
            decided_by=actor_id,
            decided_at=now,
        )
        logger.info(
            f"Event {event.event_id} validated by {actor_id} "
            f"({len(result.warnings)} warnings)"
        )
        return TransitionOutcome(
            status=TransitionStatus.APPLIED,
            event=validated,
            validation=result,
        )

    def reject(
        self,
        event: FuelEvent,
        reason: Optional[str],
        actor_id: Optional[str] = None,
    ) -> TransitionOutcome:
        if not self._workflow.is_valid_transition(
            event.status, EventStatus.REJECTED
        ):
            return self._ignored(event, "reject")

        cleaned = reason.strip() if isinstance(reason, str) else ""
        if not cleaned:
            logger.info(f"Rejection of event {event.event_id} blocked: no reason")
            return TransitionOutcome(
                status=TransitionStatus.BLOCKED,
                event=event,
                reason_code=ReasonCode.REASON_REQUIRED,
            )

        rejected = dataclasses.replace(
            event,
            status=EventStatus.REJECTED,
            rejection_reason=cleaned,
            decided_by=actor_id,
            decided_at=self._now(),
        )
        logger.info(f"Event {event.event_id} rejected by {actor_id}")
        return TransitionOutcome(status=TransitionStatus.APPLIED, event=rejected)

    def _ignored(self, event: FuelEvent, action: str) -> TransitionOutcome:
        logger.debug(
            f"{action} ignored for event {event.event_id}: "
            f"already {event.status.value}"
        )
        return TransitionOutcome(
            status=TransitionStatus.IGNORED,
            event=event,
            reason_code=ReasonCode.NOT_PENDING,
        )
