"""
Fleet Core Lifecycle — Event Workflow
=====================================
State machine schema for fuel events.

    pending ──→ validated   (terminal)
        └────→ rejected    (terminal)

Reopening a decided event is not supported.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet


class EventStatus(Enum):
    PENDING = "pending"
    VALIDATED = "validated"
    REJECTED = "rejected"


# ══════════════════════════════════════════════════════════════
# WORKFLOW DEFINITION (state machine schema)
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class WorkflowDefinition:
    """
    Valid states and transitions for a workflow type.

    Fields:
        name:            Identifier for this workflow type
        initial_state:   Starting state for all new instances
        terminal_states: States from which no further transitions are allowed
        transitions:     Dict of {from_state → frozenset(allowed_to_states)}
    """
    name: str
    initial_state: EventStatus
    terminal_states: FrozenSet[EventStatus]
    transitions: Dict[EventStatus, FrozenSet[EventStatus]]

    def __post_init__(self):
        if not self.name:
            raise ValueError("Workflow name must be non-empty.")
        if self.initial_state not in self.transitions:
            raise ValueError(
                f"initial_state '{self.initial_state}' not in transitions."
            )
        for state in self.terminal_states:
            if self.transitions.get(state):
                raise ValueError(
                    f"Terminal state '{state.value}' cannot have outgoing "
                    f"transitions."
                )

    def is_valid_transition(
        self, from_state: EventStatus, to_state: EventStatus
    ) -> bool:
        allowed = self.transitions.get(from_state, frozenset())
        return to_state in allowed

    def is_terminal(self, state: EventStatus) -> bool:
        return state in self.terminal_states

    def allowed_next_states(self, from_state: EventStatus) -> FrozenSet[EventStatus]:
        return self.transitions.get(from_state, frozenset())


FUEL_EVENT_WORKFLOW = WorkflowDefinition(
    name="FuelEvent",
    initial_state=EventStatus.PENDING,
    terminal_states=frozenset({EventStatus.VALIDATED, EventStatus.REJECTED}),
    transitions={
        EventStatus.PENDING: frozenset(
            {EventStatus.VALIDATED, EventStatus.REJECTED}
        ),
        EventStatus.VALIDATED: frozenset(),
        EventStatus.REJECTED: frozenset(),
    },
)
