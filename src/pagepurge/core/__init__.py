"""Core domain layer for pagepurge."""

from pagepurge.core.entities import ContentItem, PurgeConfig, TermRef, UrlSet
from pagepurge.core.interfaces import (
    IContentStore,
    ILinkResolver,
    INotificationBus,
    IPurgeTransport,
)
from pagepurge.core.services import EpochAccumulator, FlushCoordinator, Purger

__all__ = [
    # Entities
    "ContentItem",
    "PurgeConfig",
    "TermRef",
    "UrlSet",
    # Interfaces
    "IContentStore",
    "ILinkResolver",
    "INotificationBus",
    "IPurgeTransport",
    # Services
    "EpochAccumulator",
    "FlushCoordinator",
    "Purger",
]
