"""
Fleet Core State — Scope Store
==============================
Holds the resolved Scope. Commits are structural: a Scope equal to the
current one under scopes_equal() is not committed and notifies nobody.

Persistence:
    Only {active_unit} is written, under UNIT_STORAGE_KEY, in the durable
    area. The restored unit is exposed as previous_active until the first
    real commit; the resolver re-validates it against a fresh catalog.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional

from fleetcore.context.business_unit import BusinessUnitSummary
from fleetcore.context.scope import ALL_UNITS_LABEL, Scope, scopes_equal
from fleetcore.state.cell import ObservableCell
from fleetcore.state.errors import UnitNotVisibleError
from fleetcore.state.storage import InMemoryStorage, KeyValueStorage

logger = logging.getLogger("fleet.scope")

UNIT_STORAGE_KEY = "unit-storage"


class ScopeStore:

    def __init__(self, storage: Optional[KeyValueStorage] = None):
        self._storage = storage if storage is not None else InMemoryStorage()
        self._restored_active = self._restore()
        self._committed = False
        self._cell: ObservableCell[Scope] = ObservableCell(
            Scope.EMPTY, name="scope", equals=scopes_equal
        )

    # ── State ─────────────────────────────────────────────────

    @property
    def scope(self) -> Scope:
        return self._cell.get()

    @property
    def previous_active(self) -> Optional[BusinessUnitSummary]:
        if self._committed:
            return self.scope.active_unit
        return self._restored_active

    def subscribe(
        self, listener: Callable[[Scope, Scope], None]
    ) -> Callable[[], None]:
        return self._cell.subscribe(listener)

    # ── Writes ────────────────────────────────────────────────

    def commit(self, scope: Scope) -> bool:
        """Replace the Scope. Returns False for a structurally equal Scope."""
        if not isinstance(scope, Scope):
            raise TypeError("commit() requires a Scope.")

        changed = self._cell.set(scope)
        if not changed:
            logger.debug("Scope unchanged; commit skipped")
            return False

        self._committed = True
        self._persist()
        logger.info(
            f"Scope committed: {len(scope.visible_units)} visible, "
            f"active={scope.active_unit_id}"
        )
        return True

    def set_visible_units(self, units: Iterable[BusinessUnitSummary]) -> bool:
        """Replace visible units, dropping an active unit no longer visible."""
        units = tuple(units)
        active_id = self.scope.active_unit_id
        active = None
        for unit in units:
            if unit.unit_id == active_id:
                active = unit
                break
        return self.commit(Scope(visible_units=units, active_unit=active))

    def set_active_unit(self, unit: Optional[BusinessUnitSummary]) -> bool:
        """Select a visible unit, or None for all visible units."""
        current = self.scope
        if unit is None:
            return self.commit(
                Scope(visible_units=current.visible_units, active_unit=None)
            )

        found = current.find(unit.unit_id)
        if found is None:
            raise UnitNotVisibleError(unit.unit_id, current.visible_unit_ids)
        return self.commit(
            Scope(visible_units=current.visible_units, active_unit=found)
        )

    def clear(self) -> None:
        self._restored_active = None
        self._storage.delete(UNIT_STORAGE_KEY)
        self._cell.set(Scope.EMPTY)
        self._committed = True

    # ── Selectors ─────────────────────────────────────────────

    @property
    def active_unit_id(self) -> Optional[int]:
        return self.scope.active_unit_id

    @property
    def has_multiple_units(self) -> bool:
        return len(self.scope.visible_units) > 1

    @property
    def is_all_units(self) -> bool:
        return self.scope.is_all_units

    @property
    def active_unit_label(self) -> str:
        active = self.scope.active_unit
        return ALL_UNITS_LABEL if active is None else active.name

    # ── Persistence ───────────────────────────────────────────

    def _persist(self) -> None:
        active = self.scope.active_unit
        self._storage.set(
            UNIT_STORAGE_KEY,
            {"active_unit": None if active is None else active.to_dict()},
        )

    def _restore(self) -> Optional[BusinessUnitSummary]:
        data = self._storage.get(UNIT_STORAGE_KEY)
        if not data or not data.get("active_unit"):
            return None
        try:
            unit = BusinessUnitSummary.from_dict(data["active_unit"])
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning(f"Discarding malformed '{UNIT_STORAGE_KEY}': {exc}")
            self._storage.delete(UNIT_STORAGE_KEY)
            return None
        logger.debug(f"Restored active unit {unit.unit_id}")
        return unit
