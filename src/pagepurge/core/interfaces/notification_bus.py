"""Notification bus interface."""

from collections.abc import Callable
from typing import Any, Protocol


class INotificationBus(Protocol):
    """Contract for the host mechanism that delivers mutation notifications."""

    def subscribe(self, event: str, callback: Callable[..., Any]) -> None:
        """Register a callback for an event name.

        Args:
            event: The event name.
            callback: Called with the event's arguments each time it fires.
        """
        ...
