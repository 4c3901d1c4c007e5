"""Minimal synchronous observer support shared by the state stores."""

import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)

# Listener receives the name of the field that changed
StateListener = Callable[[str], None]


class ObservableStore:
    """Base class giving a store ``subscribe`` / ``_notify`` semantics.

    Listeners run synchronously in registration order. A failing listener
    is logged and does not stop the others or the store operation.
    """

    def __init__(self) -> None:
        self._listeners: list[StateListener] = []

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a listener; returns a callable that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, field: str) -> None:
        for listener in list(self._listeners):
            try:
                listener(field)
            except Exception:
                logger.exception("State listener failed for field '%s'", field)
