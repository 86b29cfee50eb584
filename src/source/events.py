"""Synchronous change notification for features and sources."""

from __future__ import annotations

from enum import Enum
from typing import Callable, Dict, List

Listener = Callable[[str], None]


class EventType(str, Enum):
    """Event names dispatched by features and sources."""
    CHANGE = "change"
    ADD_FEATURE = "addfeature"
    REMOVE_FEATURE = "removefeature"
    CLEAR = "clear"


def _event_name(event_type) -> str:
    return event_type.value if isinstance(event_type, Enum) else str(event_type)


class Observable:
    """
    Minimal event target.

    Listeners run synchronously in registration order and receive the event
    type. Exceptions raised by a listener propagate to whoever fired the
    event.
    """

    def __init__(self):
        self._listeners: Dict[str, List[Listener]] = {}
        self._revision = 0

    def on(self, event_type: str, listener: Listener) -> None:
        listeners = self._listeners.setdefault(_event_name(event_type), [])
        if listener not in listeners:
            listeners.append(listener)

    def un(self, event_type: str, listener: Listener) -> None:
        listeners = self._listeners.get(_event_name(event_type), [])
        if listener in listeners:
            listeners.remove(listener)

    def has_listener(self, event_type: str) -> bool:
        return bool(self._listeners.get(_event_name(event_type)))

    def dispatch_event(self, event_type: str) -> None:
        name = _event_name(event_type)
        # copy: a listener may unsubscribe itself
        for listener in list(self._listeners.get(name, [])):
            listener(name)

    def changed(self) -> None:
        """Bump the revision counter and dispatch ``change``."""
        self._revision += 1
        self.dispatch_event(EventType.CHANGE.value)

    def get_revision(self) -> int:
        return self._revision
