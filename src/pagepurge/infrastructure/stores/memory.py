"""In-memory content store and link resolver."""

from collections.abc import Iterable

from pagepurge.core.entities.content import (
    Author,
    Comment,
    ContentItem,
    EntityId,
    TermRef,
)
from pagepurge.core.interfaces.link_resolver import ResolutionError


class InMemoryContentStore:
    """Dictionary-backed content store that also resolves permalinks.

    Suitable for tests and for hosts that hand the engine pre-loaded
    snapshots. URLs follow a plain pretty-permalink layout::

        {base}/                      front page
        {base}/{slug}/               item
        {base}/author/{nicename}/    author archive
        {base}/{yyyy}/{mm}/{dd}/     date archives
        {base}/{term_base}/{slug}/   term archive
    """

    def __init__(
        self,
        base_url: str = "https://example.com",
        posts_page_id: EntityId | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            base_url: Site address without a trailing slash.
            posts_page_id: Item shown as the posts listing page, if any.
        """
        self._base_url = base_url.rstrip("/")
        self._posts_page_id = posts_page_id
        self._items: dict[EntityId, ContentItem] = {}
        self._terms: dict[tuple[str, EntityId], TermRef] = {}
        self._comments: dict[EntityId, Comment] = {}
        self._authors: dict[EntityId, Author] = {}
        self._taxonomies: dict[str, tuple[str, list[str]]] = {}
        self._types: dict[str, bool] = {"post": True, "page": True, "attachment": True}

    @property
    def base_url(self) -> str:
        return self._base_url

    # Loading

    def add_item(self, item: ContentItem) -> ContentItem:
        """Store or replace an item snapshot."""
        self._items[item.id] = item
        for term in item.terms:
            self._terms.setdefault((term.taxonomy, term.id), term)
        return item

    def remove_item(self, item_id: EntityId) -> None:
        self._items.pop(item_id, None)

    def add_term(self, term: TermRef) -> TermRef:
        self._terms[(term.taxonomy, term.id)] = term
        return term

    def remove_term(self, term_id: EntityId, taxonomy: str) -> None:
        self._terms.pop((taxonomy, term_id), None)

    def add_comment(self, comment: Comment) -> Comment:
        self._comments[comment.id] = comment
        return comment

    def add_author(self, author: Author) -> Author:
        self._authors[author.id] = author
        return author

    def register_type(self, name: str, public: bool = True) -> None:
        """Declare a content type and whether it is publicly viewable."""
        self._types[name] = public

    def register_taxonomy(
        self,
        name: str,
        item_types: Iterable[str],
        url_base: str | None = None,
    ) -> None:
        """Declare a taxonomy.

        Args:
            name: Taxonomy name, e.g. "category".
            item_types: Content types the taxonomy applies to.
            url_base: Path segment of the term archives. Defaults to name.
        """
        self._taxonomies[name] = (url_base or name, list(item_types))

    # IContentStore

    def get_item(self, item_id: EntityId) -> ContentItem | None:
        return self._items.get(item_id)

    def get_term(self, term_id: EntityId, taxonomy: str) -> TermRef | None:
        return self._terms.get((taxonomy, term_id))

    def get_term_by_taxonomy_id(self, taxonomy_term_id: EntityId) -> TermRef | None:
        for term in self._terms.values():
            if term.taxonomy_term_id == taxonomy_term_id:
                return term
        return None

    def get_comment(self, comment_id: EntityId) -> Comment | None:
        return self._comments.get(comment_id)

    def get_author(self, author_id: EntityId) -> Author | None:
        return self._authors.get(author_id)

    def taxonomies_for(self, item_type: str) -> list[str]:
        return [
            name
            for name, (_, item_types) in self._taxonomies.items()
            if item_type in item_types
        ]

    def public_types(self) -> list[str]:
        return [name for name, public in self._types.items() if public]

    def private_types(self) -> list[str]:
        return [name for name, public in self._types.items() if not public]

    def list_item_ids(
        self,
        *,
        types: Iterable[str] | None = None,
        statuses: Iterable[str] | None = None,
        term: TermRef | None = None,
        author_id: EntityId | None = None,
    ) -> list[EntityId]:
        type_filter = set(types) if types is not None else None
        status_filter = set(statuses) if statuses is not None else None

        matches: list[EntityId] = []
        for item in self._items.values():
            if item.is_derivative:
                continue
            if type_filter is not None and item.type not in type_filter:
                continue
            if status_filter is not None and item.status not in status_filter:
                continue
            if author_id is not None and item.author_id != author_id:
                continue
            if term is not None and not any(
                t.id == term.id and t.taxonomy == term.taxonomy for t in item.terms
            ):
                continue
            matches.append(item.id)
        return matches

    # ILinkResolver

    def item_url(self, item: ContentItem) -> str | None:
        return f"{self._base_url}/{item.slug or item.id}/"

    def front_page_url(self) -> str | None:
        return f"{self._base_url}/"

    def posts_page_url(self) -> str | None:
        if self._posts_page_id is None:
            return None
        page = self._items.get(self._posts_page_id)
        if page is None:
            raise ResolutionError(f"Posts page {self._posts_page_id} not found")
        return self.item_url(page)

    def author_url(self, author_id: EntityId) -> str | None:
        author = self._authors.get(author_id)
        nicename = author.get("user_nicename") if author is not None else None
        return f"{self._base_url}/author/{nicename or author_id}/"

    def year_url(self, year: int) -> str | None:
        return f"{self._base_url}/{year:04d}/"

    def month_url(self, year: int, month: int) -> str | None:
        return f"{self._base_url}/{year:04d}/{month:02d}/"

    def day_url(self, year: int, month: int, day: int) -> str | None:
        return f"{self._base_url}/{year:04d}/{month:02d}/{day:02d}/"

    def term_url(self, term: TermRef) -> str | None:
        taxonomy = self._taxonomies.get(term.taxonomy)
        if taxonomy is None:
            raise ResolutionError(f"Unknown taxonomy '{term.taxonomy}'")
        stored = self._terms.get((term.taxonomy, term.id))
        if stored is None:
            raise ResolutionError(f"Term {term.id} not found in '{term.taxonomy}'")
        url_base, _ = taxonomy
        return f"{self._base_url}/{url_base}/{stored.slug or stored.id}/"
