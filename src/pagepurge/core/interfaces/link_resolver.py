"""Link resolver interface."""

from typing import Protocol

from pagepurge.core.entities.content import ContentItem, EntityId, TermRef


class ResolutionError(Exception):
    """Raised when an entity cannot be resolved to a URL.

    Never fatal: the caller drops that one URL and carries on.
    """

    pass


class ILinkResolver(Protocol):
    """Contract for turning entities into public URLs.

    Any method may raise ResolutionError or return None when an
    address cannot be produced.
    """

    def item_url(self, item: ContentItem) -> str | None:
        """Return the canonical URL of a content item."""
        ...

    def front_page_url(self) -> str | None:
        """Return the site's front page URL."""
        ...

    def posts_page_url(self) -> str | None:
        """Return the posts listing page URL, or None if not configured."""
        ...

    def author_url(self, author_id: EntityId) -> str | None:
        """Return the archive URL of an author."""
        ...

    def year_url(self, year: int) -> str | None:
        """Return the yearly archive URL."""
        ...

    def month_url(self, year: int, month: int) -> str | None:
        """Return the monthly archive URL."""
        ...

    def day_url(self, year: int, month: int, day: int) -> str | None:
        """Return the daily archive URL."""
        ...

    def term_url(self, term: TermRef) -> str | None:
        """Return the archive URL of a taxonomy term."""
        ...
