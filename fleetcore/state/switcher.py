"""
Fleet Core State — Unit Switcher
================================
The only user-driven write to ScopeStore: a full admin choosing among
several visible units (or "all units").

Other identities have their active unit forced by the resolver; a select()
from them is an injection attempt and raises.
"""

from __future__ import annotations

import logging
from typing import Optional

from fleetcore.context.resolver import AccessKind, classify_access
from fleetcore.state.errors import UnitNotVisibleError, UnitSwitchNotAllowedError
from fleetcore.state.scope_store import ScopeStore
from fleetcore.state.session import SessionStore

logger = logging.getLogger("fleet.scope")


class UnitSwitcher:

    def __init__(self, session_store: SessionStore, scope_store: ScopeStore):
        self._session = session_store
        self._scopes = scope_store

    @property
    def can_switch(self) -> bool:
        return (
            classify_access(self._session.identity) == AccessKind.FULL_ADMIN
            and self._scopes.has_multiple_units
        )

    def select(self, unit_id: Optional[int]) -> bool:
        """Activate unit_id, or None for all units. Returns True on change."""
        identity = self._session.identity
        if not self.can_switch:
            raise UnitSwitchNotAllowedError(
                identity.identity_id if identity else None
            )

        if unit_id is None:
            changed = self._scopes.set_active_unit(None)
        else:
            scope = self._scopes.scope
            unit = scope.find(unit_id)
            if unit is None:
                raise UnitNotVisibleError(unit_id, scope.visible_unit_ids)
            changed = self._scopes.set_active_unit(unit)

        if changed:
            logger.info(
                f"'{identity.identity_id}' switched active unit to {unit_id}"
            )
        return changed
