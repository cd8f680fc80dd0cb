"""
Fleet Core Sync — Collaborator Contracts
========================================
What the core expects from the outside world. Transport, retries and
timeouts belong to the implementations, never to the core.

    AuthCollaborator    → profile lookup; raises AuthenticationExpired on 401
    UnitCatalogSource   → business units of a company
    ThresholdSource     → per-tenant validation thresholds
    EvidenceSource      → evidence count of a fuel event
"""

from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence, Union

from fleetcore.context.business_unit import BusinessUnitSummary
from fleetcore.policy.thresholds import InMemoryThresholdSource, ThresholdSource


class AuthenticationExpired(Exception):
    """The collaborator answered 401: the session is no longer valid."""

    def __init__(self, identity_id: Optional[str] = None):
        self.identity_id = identity_id
        super().__init__(f"Authentication expired for '{identity_id}'.")


class AuthCollaborator(Protocol):

    def resolve_profile(self, identity_id: str) -> Optional[dict]:
        """
        Profile fields for identity_id (company_id, assigned_unit_ids, ...),
        or None when unknown.
        """
        ...  # pragma: no cover


class UnitCatalogSource(Protocol):

    def fetch_units(self, company_id: int) -> Sequence[BusinessUnitSummary]:
        ...  # pragma: no cover


class EvidenceSource(Protocol):

    def count_evidence(self, event_id: Union[int, str]) -> int:
        ...  # pragma: no cover


# ══════════════════════════════════════════════════════════════
# IN-MEMORY IMPLEMENTATIONS (for testing / bootstrap)
# ══════════════════════════════════════════════════════════════

class InMemoryUnitCatalog:

    def __init__(self) -> None:
        self._units: dict[int, tuple[BusinessUnitSummary, ...]] = {}
        self.fetch_count = 0

    def set_units(
        self, company_id: int, units: Iterable[BusinessUnitSummary]
    ) -> None:
        self._units[company_id] = tuple(units)

    def fetch_units(self, company_id: int) -> Sequence[BusinessUnitSummary]:
        self.fetch_count += 1
        return self._units.get(company_id, ())


class InMemoryEvidenceSource:

    def __init__(self) -> None:
        self._counts: dict[Union[int, str], int] = {}

    def set_count(self, event_id: Union[int, str], count: int) -> None:
        if count < 0:
            raise ValueError("Evidence count must be >= 0.")
        self._counts[event_id] = count

    def count_evidence(self, event_id: Union[int, str]) -> int:
        return self._counts.get(event_id, 0)


__all__ = [
    "AuthenticationExpired",
    "AuthCollaborator",
    "UnitCatalogSource",
    "ThresholdSource",
    "EvidenceSource",
    "InMemoryUnitCatalog",
    "InMemoryEvidenceSource",
    "InMemoryThresholdSource",
]
