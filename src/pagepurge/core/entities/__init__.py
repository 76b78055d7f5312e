"""Domain entities for pagepurge."""

from pagepurge.core.entities.content import (
    Author,
    Comment,
    ContentItem,
    EntityId,
    TermRef,
)
from pagepurge.core.entities.notification import Notification
from pagepurge.core.entities.purge_config import PurgeConfig
from pagepurge.core.entities.url_set import UrlSet

__all__ = [
    "Author",
    "Comment",
    "ContentItem",
    "EntityId",
    "TermRef",
    "Notification",
    "PurgeConfig",
    "UrlSet",
]
