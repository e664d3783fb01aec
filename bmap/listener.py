"""Listener support for BMap change notifications."""

from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Union

from bmap.exceptions import IllegalArgumentException


class BMapEventType(Enum):
    """Kind of change a notification describes."""

    ADD = "add"
    UPDATE = "update"
    DELETE = "delete"

    @classmethod
    def parse(cls, value: Union["BMapEventType", str]) -> "BMapEventType":
        """Resolve an event kind from an enum member or its string name.

        Raises:
            IllegalArgumentException: If the value names no known event kind.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise IllegalArgumentException(
                f"Unknown event type: {value!r}. "
                f"Must be one of {[t.value for t in cls]}"
            )


# Listeners receive a freshly built BMap holding the affected entries.
BMapListener = Callable[[Any], None]


class ListenerRegistry:
    """Ordered per-event-kind listener lists for one map.

    Listeners are invoked in registration order. A dispatch iterates a
    snapshot of the list taken when it starts, so registrations made or
    removed by a listener only affect later dispatches. Exceptions raised
    by a listener propagate to the caller and stop the dispatch.
    """

    def __init__(self):
        self._listeners: Dict[BMapEventType, List[BMapListener]] = {}

    def add(self, event_type: Union[BMapEventType, str], listener: BMapListener) -> None:
        """Register a listener for an event kind.

        Raises:
            IllegalArgumentException: If the event kind is unknown or the
                listener is not callable.
        """
        event_type = BMapEventType.parse(event_type)
        if not callable(listener):
            raise IllegalArgumentException(
                f"Listener must be callable, got {type(listener).__name__}"
            )
        self._listeners.setdefault(event_type, []).append(listener)

    def remove(self, event_type: Union[BMapEventType, str], listener: BMapListener) -> bool:
        """Remove the earliest registration of a listener.

        Returns:
            True if the listener was removed, False if it was not registered.
        """
        event_type = BMapEventType.parse(event_type)
        listeners = self._listeners.get(event_type)
        if not listeners:
            return False
        for index, registered in enumerate(listeners):
            if registered == listener:
                del listeners[index]
                if not listeners:
                    del self._listeners[event_type]
                return True
        return False

    def has_listeners(self, event_type: Optional[Union[BMapEventType, str]] = None) -> bool:
        if event_type is None:
            return any(self._listeners.values())
        return bool(self._listeners.get(BMapEventType.parse(event_type)))

    def listeners(self, event_type: Union[BMapEventType, str]) -> List[BMapListener]:
        """Get a copy of the listeners registered for an event kind."""
        return list(self._listeners.get(BMapEventType.parse(event_type), ()))

    def fire(self, event_type: BMapEventType, payload: Any) -> int:
        """Invoke every listener of an event kind with the payload.

        Returns:
            The number of listeners invoked.
        """
        listeners = list(self._listeners.get(event_type, ()))
        for listener in listeners:
            listener(payload)
        return len(listeners)

    def clear(self) -> None:
        """Remove all registered listeners."""
        self._listeners.clear()

    def __len__(self) -> int:
        return sum(len(listeners) for listeners in self._listeners.values())

    def __repr__(self) -> str:
        counts = ", ".join(
            f"{event_type.value}={len(listeners)}"
            for event_type, listeners in self._listeners.items()
        )
        return f"ListenerRegistry({counts})"
