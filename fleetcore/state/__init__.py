"""
Fleet Core State — Public API
=============================
Observable stores for the signed-in session and the resolved Scope.
"""

from fleetcore.state.errors import (
    ReentrantWriteError,
    StateError,
    UnitNotVisibleError,
    UnitSwitchNotAllowedError,
)
from fleetcore.state.cell import ObservableCell
from fleetcore.state.storage import (
    DjangoCacheStorage,
    DjangoSessionStorage,
    InMemoryStorage,
    KeyValueStorage,
)
from fleetcore.state.session import (
    AUTH_STORAGE_KEY,
    SessionEndReason,
    SessionState,
    SessionStore,
)
from fleetcore.state.scope_store import UNIT_STORAGE_KEY, ScopeStore
from fleetcore.state.switcher import UnitSwitcher

__all__ = [
    "ReentrantWriteError",
    "StateError",
    "UnitNotVisibleError",
    "UnitSwitchNotAllowedError",
    "ObservableCell",
    "DjangoCacheStorage",
    "DjangoSessionStorage",
    "InMemoryStorage",
    "KeyValueStorage",
    "AUTH_STORAGE_KEY",
    "SessionEndReason",
    "SessionState",
    "SessionStore",
    "UNIT_STORAGE_KEY",
    "ScopeStore",
    "UnitSwitcher",
]
