"""Core interfaces (Protocol classes) for pagepurge."""

from pagepurge.core.interfaces.content_store import IContentStore
from pagepurge.core.interfaces.link_resolver import ILinkResolver, ResolutionError
from pagepurge.core.interfaces.notification_bus import INotificationBus
from pagepurge.core.interfaces.transport import IPurgeTransport, TransportError

__all__ = [
    "IContentStore",
    "ILinkResolver",
    "INotificationBus",
    "IPurgeTransport",
    "ResolutionError",
    "TransportError",
]
