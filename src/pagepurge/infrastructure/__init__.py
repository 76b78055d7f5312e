"""Infrastructure layer implementations for pagepurge."""

from pagepurge.infrastructure.notifications import NotificationBus
from pagepurge.infrastructure.stores import InMemoryContentStore
from pagepurge.infrastructure.transports import (
    RecordingPurgeTransport,
    VarnishPurgeTransport,
)

__all__ = [
    "InMemoryContentStore",
    "NotificationBus",
    "RecordingPurgeTransport",
    "VarnishPurgeTransport",
]
