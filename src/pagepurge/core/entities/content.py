"""Content entities observed by the purge engine.

These are read-only snapshots of the host's content store. The engine
never mutates them; it only derives URLs from them.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

EntityId = int | str

DERIVATIVE_KINDS = ("autosave", "revision")


@dataclass(frozen=True)
class TermRef:
    """Reference to a taxonomy term.

    Resolves to zero or one archive URL through the link resolver.
    """

    id: EntityId
    taxonomy: str
    taxonomy_term_id: EntityId | None = None
    slug: str | None = None
    name: str | None = None


@dataclass(frozen=True)
class ContentItem:
    """Immutable snapshot of a content item (post, page, custom type).

    Attributes:
        id: Item identifier.
        type: Content type name, e.g. "post" or "page".
        status: Free-form status, compared against the public statuses.
        created_at: Creation timestamp used for date archives.
        author_id: Identifier of the owning author.
        terms: Taxonomy terms attached to the item.
        slug: Optional URL slug.
        parent_id: Item this one derives from, for autosaves and revisions.
        derivative: "autosave" or "revision" for transient copies.
    """

    id: EntityId
    type: str
    status: str
    created_at: datetime
    author_id: EntityId
    terms: tuple[TermRef, ...] = ()
    slug: str | None = None
    parent_id: EntityId | None = None
    derivative: str | None = None

    @property
    def is_derivative(self) -> bool:
        """Whether this item is a transient copy of another item."""
        return self.derivative in DERIVATIVE_KINDS

    def terms_in(self, taxonomy: str) -> list[TermRef]:
        """Return the attached terms that belong to a taxonomy."""
        return [term for term in self.terms if term.taxonomy == taxonomy]

    @classmethod
    def create(
        cls,
        id: EntityId,
        type: str = "post",
        status: str = "publish",
        created_at: datetime | None = None,
        author_id: EntityId = 1,
        terms: Iterable[TermRef] | None = None,
        **kwargs: Any,
    ) -> "ContentItem":
        """Factory method with sensible defaults.

        Args:
            id: Item identifier.
            type: Content type name.
            status: Item status.
            created_at: Creation time. Defaults to now.
            author_id: Owning author.
            terms: Attached taxonomy terms.
            **kwargs: Remaining dataclass fields.

        Returns:
            A new ContentItem instance.
        """
        return cls(
            id=id,
            type=type,
            status=status,
            created_at=created_at or datetime.now(),
            author_id=author_id,
            terms=tuple(terms) if terms else (),
            **kwargs,
        )


@dataclass(frozen=True)
class Comment:
    """Snapshot of a comment attached to a content item."""

    id: EntityId
    item_id: EntityId
    status: str = "approved"


@dataclass(frozen=True)
class Author:
    """Snapshot of an author's public profile fields."""

    id: EntityId
    fields: Mapping[str, Any] = field(default_factory=dict)

    def get(self, name: str) -> Any:
        """Return a profile field value, or None if the field is unset."""
        return self.fields.get(name)
