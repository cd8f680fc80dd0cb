"""
Fleet Core Lifecycle — Public API
=================================
"""

from fleetcore.lifecycle.states import (
    FUEL_EVENT_WORKFLOW,
    EventStatus,
    WorkflowDefinition,
)
from fleetcore.lifecycle.events import FuelEvent
from fleetcore.lifecycle.machine import (
    EventLifecycle,
    ReasonCode,
    TransitionOutcome,
    TransitionStatus,
)
from fleetcore.lifecycle.summary import EventsSummary, summarize_events

__all__ = [
    "FUEL_EVENT_WORKFLOW",
    "EventStatus",
    "WorkflowDefinition",
    "FuelEvent",
    "EventLifecycle",
    "ReasonCode",
    "TransitionOutcome",
    "TransitionStatus",
    "EventsSummary",
    "summarize_events",
]
