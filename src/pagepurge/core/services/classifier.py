"""Transition classification.

Decides whether a mutation warrants any purge at all, before any URL
is computed.
"""

from collections.abc import Collection, Iterable

from pagepurge.core.entities.content import Author, ContentItem

APPROVED_COMMENT_STATUSES = frozenset({"approve", "approved"})


def should_purge(
    previous_status: str | None,
    new_status: str | None,
    public_statuses: Collection[str],
) -> bool:
    """Check whether a status transition touches publicly cached pages.

    An item entering a public status must show up on the archives that
    now list it; an item leaving one must disappear from them. Either
    side being public is enough. A missing previous status counts as
    not public.

    Args:
        previous_status: Status before the mutation, or None if unknown.
        new_status: Status after the mutation.
        public_statuses: Statuses under which content is publicly cached.

    Returns:
        True if the transition requires purging.
    """
    return (previous_status is not None and previous_status in public_statuses) or (
        new_status is not None and new_status in public_statuses
    )


def is_eligible(item: ContentItem | None, excluded_types: Collection[str]) -> bool:
    """Check whether an item may trigger purging at all.

    Status is intentionally not checked here.

    Args:
        item: The item, or None if it could not be fetched.
        excluded_types: Content types that never trigger purging.

    Returns:
        False for missing items, excluded types, autosaves and revisions.
    """
    if item is None:
        return False
    return item.type not in excluded_types and not item.is_derivative


def comment_visibility_changed(new_status: str, old_status: str) -> bool:
    """Check whether a comment moved into or out of the approved state."""
    return (
        new_status in APPROVED_COMMENT_STATUSES
        or old_status in APPROVED_COMMENT_STATUSES
    )


def changed_profile_fields(
    old: Author,
    new: Author,
    fields: Iterable[str],
) -> list[str]:
    """Return the profile fields whose values differ between two snapshots."""
    return [name for name in fields if old.get(name) != new.get(name)]
