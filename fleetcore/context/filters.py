"""
Fleet Core Context — Unit Filters
==================================
Query filters derived from identity + resolved Scope, handed to the data
collaborators that list events, vehicles, reports, etc.

    full admin, "all" selected   → no unit filter
    full admin, unit selected    → that unit
    anyone else                  → always filtered to assigned units

Restricted identities without any assignment get an empty unit_ids filter
(matches nothing) rather than no filter.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from fleetcore.context.resolver import AccessKind, classify_access
from fleetcore.context.scope import ALL_UNITS_LABEL, Scope
from fleetcore.identity.models import Identity

DEFAULT_UNIT_LABEL = "My unit"


def can_view_all_units(identity: Optional[Identity]) -> bool:
    return classify_access(identity) == AccessKind.FULL_ADMIN


def can_access_unit(identity: Optional[Identity], unit_id: int) -> bool:
    access = classify_access(identity)
    if access == AccessKind.NONE:
        return False
    if access == AccessKind.FULL_ADMIN:
        return True
    return unit_id in identity.assigned_unit_ids


@dataclass(frozen=True)
class UnitFilter:
    unit_id: Optional[int]
    unit_ids: Optional[tuple[int, ...]]
    can_view_all: bool
    has_filter: bool
    label: str

    @classmethod
    def for_scope(cls, identity: Optional[Identity], scope: Scope) -> "UnitFilter":
        access = classify_access(identity)

        if access == AccessKind.NONE:
            return cls(
                unit_id=None,
                unit_ids=(),
                can_view_all=False,
                has_filter=True,
                label="",
            )

        if access == AccessKind.FULL_ADMIN:
            if scope.active_unit is None:
                return cls(
                    unit_id=None,
                    unit_ids=None,
                    can_view_all=True,
                    has_filter=False,
                    label=ALL_UNITS_LABEL,
                )
            return cls(
                unit_id=scope.active_unit.unit_id,
                unit_ids=(scope.active_unit.unit_id,),
                can_view_all=True,
                has_filter=True,
                label=scope.active_unit.name,
            )

        assigned = identity.assigned_unit_ids
        if scope.active_unit is not None and scope.active_unit.unit_id in assigned:
            focus = scope.active_unit.unit_id
        else:
            focus = assigned[0] if assigned else None

        focus_unit = None if focus is None else scope.find(focus)
        label = focus_unit.name if focus_unit is not None else DEFAULT_UNIT_LABEL
        return cls(
            unit_id=focus,
            unit_ids=assigned,
            can_view_all=False,
            has_filter=True,
            label=label,
        )
