"""
Fleet Core State — Key-Value Storage
====================================
Where stores persist their small snapshots.

Two areas exist:
    durable area   → survives sign-out (last selected business unit)
    session area   → cleared on sign-out/expiry (identity snapshot)

Values are JSON-compatible dicts. Storage never interprets them; the
owning store validates on restore.

Adapters:
- InMemoryStorage       → tests and bootstrap
- DjangoCacheStorage    → durable area on a Django cache alias
- DjangoSessionStorage  → session area on a Django session object
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Optional, Protocol

logger = logging.getLogger("fleet.state")


class KeyValueStorage(Protocol):
    """Minimal persistence contract for stores."""

    def get(self, key: str) -> Optional[dict]:
        ...

    def set(self, key: str, value: dict) -> None:
        ...

    def delete(self, key: str) -> None:
        ...


def _check_value(key: str, value: Any) -> None:
    if not isinstance(key, str) or not key:
        raise ValueError("Storage key must be a non-empty string.")
    if not isinstance(value, dict):
        raise TypeError(
            f"Storage value for '{key}' must be a dict, got {type(value).__name__}."
        )


# ══════════════════════════════════════════════════════════════
# IN-MEMORY
# ══════════════════════════════════════════════════════════════

class InMemoryStorage:
    """Dict-backed storage. Values are copied on the way in and out."""

    def __init__(self, initial: Optional[dict[str, dict]] = None):
        self._data: dict[str, dict] = {}
        for key, value in (initial or {}).items():
            self.set(key, value)

    def get(self, key: str) -> Optional[dict]:
        value = self._data.get(key)
        return copy.deepcopy(value) if value is not None else None

    def set(self, key: str, value: dict) -> None:
        _check_value(key, value)
        self._data[key] = copy.deepcopy(value)

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> tuple[str, ...]:
        return tuple(self._data)

    def __contains__(self, key: str) -> bool:
        return key in self._data


# ══════════════════════════════════════════════════════════════
# DJANGO ADAPTERS
# ══════════════════════════════════════════════════════════════

class DjangoCacheStorage:
    """
    Durable area on a configured Django cache.

    Entries never expire on their own (timeout=None); the owning store
    decides when to delete them.
    """

    def __init__(self, alias: str = "default", *, prefix: str = "fleet"):
        self._alias = alias
        self._prefix = prefix

    @property
    def _cache(self):
        from django.core.cache import caches

        return caches[self._alias]

    def _key(self, key: str) -> str:
        return f"{self._prefix}:{key}" if self._prefix else key

    def get(self, key: str) -> Optional[dict]:
        value = self._cache.get(self._key(key))
        if value is not None and not isinstance(value, dict):
            logger.warning(
                f"Ignoring non-dict cache entry '{key}' on alias '{self._alias}'"
            )
            return None
        return value

    def set(self, key: str, value: dict) -> None:
        _check_value(key, value)
        self._cache.set(self._key(key), value, timeout=None)

    def delete(self, key: str) -> None:
        self._cache.delete(self._key(key))


class DjangoSessionStorage:
    """
    Session area on a Django session object (any SessionBase).

    Every write saves the session so the snapshot is visible to the next
    request that loads the same session key.
    """

    def __init__(self, session):
        self._session = session

    @property
    def session_key(self) -> Optional[str]:
        return self._session.session_key

    def get(self, key: str) -> Optional[dict]:
        value = self._session.get(key)
        if value is not None and not isinstance(value, dict):
            logger.warning(f"Ignoring non-dict session entry '{key}'")
            return None
        return value

    def set(self, key: str, value: dict) -> None:
        _check_value(key, value)
        self._session[key] = value
        self._session.save()

    def delete(self, key: str) -> None:
        if key in self._session:
            del self._session[key]
            self._session.save()
