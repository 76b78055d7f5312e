"""Notification names understood by the purger."""

from enum import Enum


class Notification(str, Enum):
    """Mutation and lifecycle notifications a host can emit.

    Full-purge events are not listed here; their names come from
    PurgeConfig.full_purge_events.
    """

    ITEM_BEFORE_CHANGE = "item.before_change"
    ITEM_AFTER_CHANGE = "item.after_change"
    ITEM_TERMS_CHANGED = "item.terms_changed"
    ITEM_DELETED = "item.deleted"
    TERM_UPDATED = "term.updated"
    TERM_DELETED = "term.deleted"
    COMMENT_STATUS_CHANGED = "comment.status_changed"
    COMMENT_DELETED = "comment.deleted"
    PROFILE_UPDATED = "author.profile_updated"
    SHUTDOWN = "shutdown"
