"""Content store interface."""

from collections.abc import Iterable
from typing import Protocol

from pagepurge.core.entities.content import (
    Author,
    Comment,
    ContentItem,
    EntityId,
    TermRef,
)


class IContentStore(Protocol):
    """Read-only query contract against the host's content store.

    The engine may call these methods repeatedly within an epoch and
    tolerates results that change between calls.
    """

    def get_item(self, item_id: EntityId) -> ContentItem | None:
        """Fetch a content item by id, or None if it does not exist."""
        ...

    def get_term(self, term_id: EntityId, taxonomy: str) -> TermRef | None:
        """Fetch a term by id within a taxonomy."""
        ...

    def get_term_by_taxonomy_id(self, taxonomy_term_id: EntityId) -> TermRef | None:
        """Fetch a term by its taxonomy-term id."""
        ...

    def get_comment(self, comment_id: EntityId) -> Comment | None:
        """Fetch a comment by id."""
        ...

    def get_author(self, author_id: EntityId) -> Author | None:
        """Fetch an author's profile by id."""
        ...

    def taxonomies_for(self, item_type: str) -> list[str]:
        """Return the taxonomies applicable to a content type."""
        ...

    def public_types(self) -> list[str]:
        """Return the content types that are publicly viewable."""
        ...

    def private_types(self) -> list[str]:
        """Return the content types that are not publicly viewable."""
        ...

    def list_item_ids(
        self,
        *,
        types: Iterable[str] | None = None,
        statuses: Iterable[str] | None = None,
        term: TermRef | None = None,
        author_id: EntityId | None = None,
    ) -> list[EntityId]:
        """List item ids matching every given filter.

        The result is not paginated.

        Args:
            types: Restrict to these content types.
            statuses: Restrict to these statuses.
            term: Restrict to items carrying this term.
            author_id: Restrict to items owned by this author.

        Returns:
            Matching item ids.
        """
        ...
