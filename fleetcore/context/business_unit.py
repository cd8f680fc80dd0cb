"""
Fleet Core Context — Business Unit Summary
===========================================
Read-only projection of a tenant's business units (branches, field sites,
depots). Owned by the catalog collaborator; the core only filters it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class UnitStatus(Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"


class UnitKind(Enum):
    FIELD = "field"
    BRANCH = "branch"
    PLANT = "plant"
    DEPOT = "depot"
    OFFICE = "office"
    OTHER = "other"


@dataclass(frozen=True)
class BusinessUnitSummary:
    unit_id: int
    name: str
    code: str = ""
    kind: UnitKind = UnitKind.OTHER
    status: UnitStatus = UnitStatus.ACTIVE

    def __post_init__(self):
        if not isinstance(self.unit_id, int) or isinstance(self.unit_id, bool):
            raise ValueError("unit_id must be int.")
        if not isinstance(self.name, str):
            raise ValueError("name must be a string.")
        if not isinstance(self.kind, UnitKind):
            object.__setattr__(self, "kind", UnitKind(self.kind))
        if not isinstance(self.status, UnitStatus):
            object.__setattr__(self, "status", UnitStatus(self.status))

    @property
    def is_active(self) -> bool:
        return self.status == UnitStatus.ACTIVE

    def to_dict(self) -> dict:
        return {
            "unit_id": self.unit_id,
            "name": self.name,
            "code": self.code,
            "kind": self.kind.value,
            "status": self.status.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "BusinessUnitSummary":
        return cls(
            unit_id=data["unit_id"],
            name=data.get("name", ""),
            code=data.get("code", ""),
            kind=UnitKind(data.get("kind", UnitKind.OTHER.value)),
            status=UnitStatus(data.get("status", UnitStatus.ACTIVE.value)),
        )
