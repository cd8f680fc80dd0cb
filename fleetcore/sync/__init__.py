"""
Fleet Core Sync — Public API
============================
Collaborator contracts and the effects that keep stores in sync.
"""

from fleetcore.sync.contracts import (
    AuthCollaborator,
    AuthenticationExpired,
    EvidenceSource,
    InMemoryEvidenceSource,
    InMemoryThresholdSource,
    InMemoryUnitCatalog,
    ThresholdSource,
    UnitCatalogSource,
)
from fleetcore.sync.scope_sync import ScopeSynchronizer
from fleetcore.sync.profile import backfill_profile

__all__ = [
    "AuthCollaborator",
    "AuthenticationExpired",
    "EvidenceSource",
    "InMemoryEvidenceSource",
    "InMemoryThresholdSource",
    "InMemoryUnitCatalog",
    "ThresholdSource",
    "UnitCatalogSource",
    "ScopeSynchronizer",
    "backfill_profile",
]
