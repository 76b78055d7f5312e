"""In-process notification bus."""

from collections.abc import Callable
from enum import Enum
from typing import Any


def _name(event: str) -> str:
    return event.value if isinstance(event, Enum) else str(event)


class NotificationBus:
    """Minimal publish/subscribe registry.

    Callbacks run synchronously in subscription order. Exceptions raised
    by a callback propagate to the emitter.
    """

    def __init__(self) -> None:
        self._subscribers: dict[str, list[Callable[..., Any]]] = {}

    def subscribe(self, event: str, callback: Callable[..., Any]) -> None:
        """Register a callback for an event name."""
        self._subscribers.setdefault(_name(event), []).append(callback)

    def unsubscribe(self, event: str, callback: Callable[..., Any]) -> None:
        """Remove a callback. No-op if it is not registered."""
        callbacks = self._subscribers.get(_name(event), [])
        if callback in callbacks:
            callbacks.remove(callback)

    def subscribers(self, event: str) -> list[Callable[..., Any]]:
        """Return the callbacks registered for an event."""
        return list(self._subscribers.get(_name(event), []))

    def emit(self, event: str, *args: Any, **kwargs: Any) -> list[Any]:
        """Call every subscriber of an event.

        Args:
            event: The event name.
            *args: Positional arguments passed to each callback.
            **kwargs: Keyword arguments passed to each callback.

        Returns:
            The callbacks' return values, in call order.
        """
        return [callback(*args, **kwargs) for callback in self.subscribers(event)]

    def __len__(self) -> int:
        return sum(len(callbacks) for callbacks in self._subscribers.values())
