"""
Fleet Core State — Session Store
================================
Holds the signed-in Identity and the login status.

State:
    identity          → Identity | None
    is_authenticated  → True only while an identity is present
    is_loading        → a login round-trip is in flight
    error             → last login failure message

Persistence:
    Only {identity, is_authenticated} is written, under AUTH_STORAGE_KEY,
    in the session area. Loading flags and errors are never persisted.
    The snapshot is restored on construction; a malformed snapshot is
    discarded.

End of session:
    logout()         → SessionEndReason.SIGNED_OUT
    handle_expiry()  → SessionEndReason.EXPIRED (no-op when signed out)
    Either call made from a session listener takes effect once the
    notification is over.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from functools import partial
from typing import Callable, Iterable, Optional

from fleetcore.identity.models import Identity
from fleetcore.permissions import table
from fleetcore.permissions.constants import ADMIN_ROLES, Permission, Role
from fleetcore.state.cell import ObservableCell
from fleetcore.state.storage import InMemoryStorage, KeyValueStorage

logger = logging.getLogger("fleet.session")

AUTH_STORAGE_KEY = "auth-storage"


class SessionEndReason(Enum):
    SIGNED_OUT = "SIGNED_OUT"
    EXPIRED = "EXPIRED"


@dataclass(frozen=True)
class SessionState:
    identity: Optional[Identity] = None
    is_authenticated: bool = False
    is_loading: bool = False
    error: Optional[str] = None

    def __post_init__(self):
        if self.is_authenticated and self.identity is None:
            raise ValueError("An authenticated session requires an identity.")
        if self.identity is not None and not isinstance(self.identity, Identity):
            raise TypeError("identity must be an Identity or None.")


SIGNED_OUT = SessionState()

SessionEndListener = Callable[[SessionEndReason], None]


class SessionStore:

    def __init__(self, storage: Optional[KeyValueStorage] = None):
        self._storage = storage if storage is not None else InMemoryStorage()
        self._cell: ObservableCell[SessionState] = ObservableCell(
            self._restore(), name="session"
        )
        self._end_listeners: list[SessionEndListener] = []

    # ══════════════════════════════════════════════════════════
    # STATE
    # ══════════════════════════════════════════════════════════

    @property
    def state(self) -> SessionState:
        return self._cell.get()

    @property
    def identity(self) -> Optional[Identity]:
        return self.state.identity

    @property
    def is_authenticated(self) -> bool:
        return self.state.is_authenticated

    @property
    def is_loading(self) -> bool:
        return self.state.is_loading

    @property
    def error(self) -> Optional[str]:
        return self.state.error

    def subscribe(
        self, listener: Callable[[SessionState, SessionState], None]
    ) -> Callable[[], None]:
        return self._cell.subscribe(listener)

    def subscribe_session_end(
        self, listener: SessionEndListener
    ) -> Callable[[], None]:
        if not callable(listener):
            raise TypeError(f"Listener must be callable, got {type(listener)}.")
        self._end_listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._end_listeners:
                self._end_listeners.remove(listener)

        return unsubscribe

    # ══════════════════════════════════════════════════════════
    # TRANSITIONS
    # ══════════════════════════════════════════════════════════

    def begin_login(self) -> None:
        current = self.state
        self._cell.set(
            SessionState(
                identity=current.identity,
                is_authenticated=current.is_authenticated,
                is_loading=True,
                error=None,
            )
        )

    def login(self, identity: Identity) -> None:
        if not isinstance(identity, Identity):
            raise TypeError("login() requires an Identity.")
        logger.info(
            f"Signed in '{identity.identity_id}' as {identity.role.value} "
            f"(company={identity.company_id})"
        )
        self._cell.set(SessionState(identity=identity, is_authenticated=True))
        # Reads the state back: work deferred by listeners may have ended it.
        self._persist()

    def fail_login(self, message: str) -> None:
        self._cell.set(SessionState(error=message or "Sign-in failed"))
        self._persist()
        logger.warning(f"Sign-in failed: {message}")

    def clear_error(self) -> None:
        current = self.state
        if current.error is None:
            return
        self._cell.set(
            SessionState(
                identity=current.identity,
                is_authenticated=current.is_authenticated,
                is_loading=current.is_loading,
            )
        )

    def update_identity(self, **patch) -> bool:
        """
        Shallow-merge patch into the current identity.

        Returns False when signed out or when nothing changed.
        """
        current = self.state
        if current.identity is None:
            logger.debug("update_identity ignored: no signed-in identity")
            return False

        updated = current.identity.with_patch(**patch)
        changed = self._cell.set(
            SessionState(
                identity=updated,
                is_authenticated=current.is_authenticated,
                is_loading=current.is_loading,
                error=current.error,
            )
        )
        if changed:
            self._persist()
            logger.info(
                f"Identity '{updated.identity_id}' patched: {sorted(patch)}"
            )
        return changed

    def logout(self) -> None:
        self._cell.defer(partial(self._end, SessionEndReason.SIGNED_OUT))

    def handle_expiry(self) -> bool:
        """
        Treat a 401-class failure as the end of the session.

        Called from a session listener (a catalog fetch triggered by
        login, say), the session ends once that notification is over.
        """
        if not self.state.is_authenticated:
            return False
        self._cell.defer(self._expire)
        return True

    def defer(self, callback: Callable[[], None]) -> None:
        """Run callback now, or after the session notification in progress."""
        self._cell.defer(callback)

    # ══════════════════════════════════════════════════════════
    # QUERIES
    # ══════════════════════════════════════════════════════════

    def has_permission(self, permission: Permission) -> bool:
        return table.has_permission(self.identity, permission)

    def has_all_permissions(self, permissions: Iterable[Permission]) -> bool:
        return table.has_all_permissions(self.identity, permissions)

    def has_any_permission(self, permissions: Iterable[Permission]) -> bool:
        return table.has_any_permission(self.identity, permissions)

    def has_any_role(self, roles: Iterable[Role]) -> bool:
        return table.has_any_role(self.identity, roles)

    def is_super_admin(self) -> bool:
        return self.has_any_role((Role.COMPANY_SUPER_ADMIN,))

    def is_admin(self) -> bool:
        return self.has_any_role(ADMIN_ROLES)

    # ══════════════════════════════════════════════════════════
    # INTERNALS
    # ══════════════════════════════════════════════════════════

    def _expire(self) -> None:
        if self.state.is_authenticated:
            self._end(SessionEndReason.EXPIRED)

    def _end(self, reason: SessionEndReason) -> None:
        previous = self.identity
        self._cell.set(SIGNED_OUT)
        self._persist()

        if reason == SessionEndReason.EXPIRED:
            logger.warning(
                f"Session expired for "
                f"'{previous.identity_id if previous else None}'"
            )
        else:
            logger.info(
                f"Signed out '{previous.identity_id if previous else None}'"
            )

        for listener in tuple(self._end_listeners):
            try:
                listener(reason)
            except Exception as exc:
                logger.error(
                    f"Session-end listener failed ({reason.value}): {exc}",
                    exc_info=True,
                )

    def _persist(self) -> None:
        current = self.state
        if current.identity is None:
            self._storage.delete(AUTH_STORAGE_KEY)
            return
        self._storage.set(
            AUTH_STORAGE_KEY,
            {
                "identity": current.identity.to_dict(),
                "is_authenticated": current.is_authenticated,
            },
        )

    def _restore(self) -> SessionState:
        data = self._storage.get(AUTH_STORAGE_KEY)
        if not data or not data.get("identity"):
            return SIGNED_OUT

        try:
            identity = Identity.from_dict(data["identity"])
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning(f"Discarding malformed '{AUTH_STORAGE_KEY}': {exc}")
            self._storage.delete(AUTH_STORAGE_KEY)
            return SIGNED_OUT

        is_authenticated = bool(data.get("is_authenticated"))
        logger.debug(
            f"Restored identity '{identity.identity_id}' "
            f"(authenticated={is_authenticated})"
        )
        return SessionState(identity=identity, is_authenticated=is_authenticated)
