"""
Fleet Core State — Observable Cell
==================================
Single-writer value holder with change notification.

Rules:
- set() commits only if the new value differs under the cell's equality
- An equal write is a no-op: no state change, no notification
- Listeners run synchronously, in subscription order
- A failing listener is logged and skipped; delivery continues
- Writing a cell from inside its own notification raises ReentrantWriteError
- defer() queues work that must wait until the notification is over;
  queued callbacks run in order once the last listener has returned
"""

from __future__ import annotations

import logging
import operator
from collections import deque
from typing import Any, Callable, Generic, TypeVar

from fleetcore.state.errors import ReentrantWriteError

logger = logging.getLogger("fleet.state")

T = TypeVar("T")

Listener = Callable[[Any, Any], None]


def _name_of(fn: Callable) -> str:
    return getattr(fn, "__qualname__", str(fn))


class ObservableCell(Generic[T]):

    def __init__(
        self,
        initial: T,
        *,
        name: str = "cell",
        equals: Callable[[T, T], bool] = operator.eq,
    ):
        self._value = initial
        self._name = name
        self._equals = equals
        self._listeners: list[Listener] = []
        self._notifying = False
        self._deferred: deque[Callable[[], None]] = deque()

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_notifying(self) -> bool:
        return self._notifying

    def get(self) -> T:
        return self._value

    def set(self, value: T) -> bool:
        """Commit value. Returns True if listeners were notified."""
        if self._notifying:
            raise ReentrantWriteError(self._name)

        old = self._value
        if self._equals(old, value):
            logger.debug(f"Cell '{self._name}': equal write skipped")
            return False

        self._value = value
        self._notify(value, old)
        self._run_deferred()
        return True

    def update(self, fn: Callable[[T], T]) -> bool:
        return self.set(fn(self._value))

    def defer(self, callback: Callable[[], None]) -> None:
        """
        Run callback now, or after the current notification when called
        from a listener. Errors of a queued callback are logged; errors of
        an immediate one propagate.
        """
        if not callable(callback):
            raise TypeError(f"Callback must be callable, got {type(callback)}.")
        if not self._notifying:
            callback()
            return
        self._deferred.append(callback)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register listener(new, old). Returns an unsubscribe callable.
        """
        if not callable(listener):
            raise TypeError(f"Listener must be callable, got {type(listener)}.")
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def _notify(self, new: T, old: T) -> None:
        self._notifying = True
        try:
            for listener in tuple(self._listeners):
                try:
                    listener(new, old)
                except ReentrantWriteError:
                    self._deferred.clear()
                    raise
                except Exception as exc:
                    logger.error(
                        f"Listener {_name_of(listener)} failed on cell "
                        f"'{self._name}': {exc}",
                        exc_info=True,
                    )
        finally:
            self._notifying = False

    def _run_deferred(self) -> None:
        while self._deferred and not self._notifying:
            callback = self._deferred.popleft()
            try:
                callback()
            except Exception as exc:
                logger.error(
                    f"Deferred {_name_of(callback)} failed on cell "
                    f"'{self._name}': {exc}",
                    exc_info=True,
                )
