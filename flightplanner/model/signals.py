"""Mini README: Synchronous publish/subscribe channel for model changes.

Structure:
    * ChangeSignal - ordered registry of listener callables for one stream.

Listeners are invoked in subscription order, on the caller's thread, before
``emit`` returns. Exceptions raised by a listener propagate to the code that
triggered the change.
"""

from __future__ import annotations

from typing import Any, Callable, List

from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

Listener = Callable[..., Any]


class ChangeSignal:
    """Named stream of change notifications."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener and return a callable that removes it again."""

        if not callable(listener):
            raise TypeError(f"Listener for '{self.name}' must be callable")
        self._listeners.append(listener)

        def unsubscribe() -> None:
            self.unsubscribe(listener)

        return unsubscribe

    def unsubscribe(self, listener: Listener) -> None:
        """Remove a listener; unknown listeners are ignored."""

        if listener in self._listeners:
            self._listeners.remove(listener)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def emit(self, *payload: Any) -> None:
        """Deliver the payload to every listener registered at call time."""

        LOGGER.debug("Emitting '%s' to %s listeners", self.name, len(self._listeners))
        for listener in list(self._listeners):
            listener(*payload)
