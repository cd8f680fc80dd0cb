"""
Fleet Core Sync — Scope Synchronizer
====================================
Change-driven effect that keeps ScopeStore in line with SessionStore
and the latest unit catalog.

Recompute key: (role, company_id, assigned_unit_ids, catalog).
A recompute with an unchanged key does nothing; a changed key resolves
a new Scope and commits it (the store dedupes structurally equal ones).

    no identity / no company      → commit Scope.EMPTY
    catalog not loaded for company → wait (restored active unit survives)
    otherwise                      → resolve_scope() → ScopeStore.commit()

Catalog responses for a company other than the current identity's are
stale and discarded.

With a catalog_source, the catalog is fetched on start-up when the
session already carries a company (restored from storage), and again
after every company change. A fetch triggered by a session change runs
once the session notification is over, so the source may end the
session (handle_expiry on a 401) from inside fetch_units.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from fleetcore.context.business_unit import BusinessUnitSummary
from fleetcore.context.resolver import resolve_scope
from fleetcore.context.scope import Scope
from fleetcore.state.scope_store import ScopeStore
from fleetcore.state.session import SessionState, SessionStore
from fleetcore.sync.contracts import UnitCatalogSource

logger = logging.getLogger("fleet.sync")


def _company_of(state: SessionState) -> Optional[int]:
    return state.identity.company_id if state.identity is not None else None


class ScopeSynchronizer:
    """
    Usage:
        sync = ScopeSynchronizer(session_store, scope_store, catalog_source=api)
        session_store.login(identity)   # catalog fetched, scope committed
        sync.stop()
    """

    def __init__(
        self,
        session_store: SessionStore,
        scope_store: ScopeStore,
        *,
        catalog_source: Optional[UnitCatalogSource] = None,
    ):
        self._session = session_store
        self._scopes = scope_store
        self._catalog_source = catalog_source
        self._catalog: Optional[tuple[BusinessUnitSummary, ...]] = None
        self._catalog_company: Optional[int] = None
        self._last_key: Optional[tuple] = None
        self._unsubscribe = session_store.subscribe(self._on_session_change)
        try:
            self._sync_current()
        except Exception:
            self.stop()
            raise

    @property
    def catalog(self) -> Optional[tuple[BusinessUnitSummary, ...]]:
        return self._catalog

    @property
    def is_running(self) -> bool:
        return self._unsubscribe is not None

    def stop(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
            logger.debug("Scope synchronizer stopped")

    # ══════════════════════════════════════════════════════════
    # INPUTS
    # ══════════════════════════════════════════════════════════

    def catalog_received(
        self, company_id: int, units: Iterable[BusinessUnitSummary]
    ) -> bool:
        """Accept a catalog for company_id. Returns True if a Scope was committed."""
        current = _company_of(self._session.state)
        if company_id != current:
            logger.warning(
                f"Discarding unit catalog for company {company_id}; "
                f"current company is {current}"
            )
            return False

        self._catalog_company = company_id
        self._catalog = tuple(units)
        logger.debug(
            f"Catalog received for company {company_id}: {len(self._catalog)} units"
        )
        return self.recompute()

    def refresh(self, catalog_source: Optional[UnitCatalogSource] = None) -> bool:
        """Fetch the catalog for the current company. Fetch errors propagate."""
        source = catalog_source if catalog_source is not None else self._catalog_source
        if source is None:
            raise ValueError("No catalog source configured.")

        company_id = _company_of(self._session.state)
        if company_id is None:
            logger.debug("Refresh skipped: no company")
            return False

        units = source.fetch_units(company_id)
        return self.catalog_received(company_id, units)

    # ══════════════════════════════════════════════════════════
    # RECOMPUTE
    # ══════════════════════════════════════════════════════════

    def recompute(self) -> bool:
        identity = self._session.identity
        if identity is None or identity.company_id is None:
            self._last_key = None
            return self._scopes.commit(Scope.EMPTY)

        if self._catalog is None or self._catalog_company != identity.company_id:
            logger.debug(
                f"Waiting for unit catalog of company {identity.company_id}"
            )
            return False

        key = (
            identity.role,
            identity.company_id,
            identity.assigned_unit_ids,
            self._catalog,
        )
        if key == self._last_key:
            logger.debug("Scope inputs unchanged; recompute skipped")
            return False
        self._last_key = key

        scope = resolve_scope(identity, self._catalog, self._scopes.previous_active)
        return self._scopes.commit(scope)

    def _sync_current(self) -> None:
        if not self.is_running:
            return
        if (
            _company_of(self._session.state) is not None
            and self._catalog_source is not None
        ):
            self.refresh()
        else:
            self.recompute()

    def _on_session_change(self, new: SessionState, old: SessionState) -> None:
        new_company = _company_of(new)
        if new_company != _company_of(old):
            self._catalog = None
            self._catalog_company = None
            self._last_key = None
            if new_company is not None and self._catalog_source is not None:
                # The fetch may end the session (401); never inside this notification.
                self._session.defer(self._sync_current)
                return
        self.recompute()
