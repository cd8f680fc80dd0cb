"""
Fleet Core Context — Scope
===========================
The derived set of business units an identity may see, plus the selected one.

    active_unit is None  → "all visible units"
    active_unit not None → must be one of visible_units (by unit_id)

Scopes are recomputed by the resolver, never hand-edited. scopes_equal() is
the structural comparison stores use to skip no-op commits.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Iterable, Optional

from fleetcore.context.business_unit import BusinessUnitSummary

ALL_UNITS_LABEL = "All units"


@dataclass(frozen=True)
class Scope:
    visible_units: tuple[BusinessUnitSummary, ...] = ()
    active_unit: Optional[BusinessUnitSummary] = None

    EMPTY: ClassVar["Scope"]

    def __post_init__(self):
        if not isinstance(self.visible_units, tuple):
            object.__setattr__(self, "visible_units", tuple(self.visible_units))

        ids = [unit.unit_id for unit in self.visible_units]
        if len(set(ids)) != len(ids):
            raise ValueError(f"visible_units must have unique ids, got {ids}.")

        if self.active_unit is not None and self.active_unit.unit_id not in ids:
            raise ValueError(
                f"active_unit {self.active_unit.unit_id} is not among "
                f"visible_units {ids}."
            )

    @property
    def active_unit_id(self) -> Optional[int]:
        return None if self.active_unit is None else self.active_unit.unit_id

    @property
    def visible_unit_ids(self) -> tuple[int, ...]:
        return tuple(unit.unit_id for unit in self.visible_units)

    @property
    def is_all_units(self) -> bool:
        return self.active_unit is None

    @property
    def is_empty(self) -> bool:
        return not self.visible_units

    def find(self, unit_id: int) -> Optional[BusinessUnitSummary]:
        for unit in self.visible_units:
            if unit.unit_id == unit_id:
                return unit
        return None


Scope.EMPTY = Scope()


def _unit_key(unit: BusinessUnitSummary) -> tuple:
    return (unit.unit_id, unit.name, unit.code, unit.kind, unit.status)


def units_equal(
    left: Iterable[BusinessUnitSummary],
    right: Iterable[BusinessUnitSummary],
) -> bool:
    return [_unit_key(u) for u in left] == [_unit_key(u) for u in right]


def scopes_equal(left: Optional[Scope], right: Optional[Scope]) -> bool:
    """Field-by-field comparison: every unit's fields plus the active unit id."""
    if left is None or right is None:
        return left is right
    return (
        units_equal(left.visible_units, right.visible_units)
        and left.active_unit_id == right.active_unit_id
    )
