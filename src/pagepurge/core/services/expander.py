"""Entity expansion - computes the URLs a changed entity affects."""

import logging
from collections.abc import Callable, Iterable

from pagepurge.core.entities.content import Comment, ContentItem, EntityId, TermRef
from pagepurge.core.entities.purge_config import PurgeConfig
from pagepurge.core.entities.url_set import UrlSet
from pagepurge.core.interfaces.content_store import IContentStore
from pagepurge.core.interfaces.link_resolver import ILinkResolver, ResolutionError
from pagepurge.hooks import PurgeHooks

logger = logging.getLogger(__name__)


class EntityExpander:
    """Expands content items, terms, authors and comments into URL sets.

    Only read queries are issued against the content store. Every address
    that fails to resolve is left out of the result instead of failing
    the whole expansion.
    """

    def __init__(
        self,
        store: IContentStore,
        resolver: ILinkResolver,
        config: PurgeConfig | None = None,
        hooks: PurgeHooks | None = None,
    ) -> None:
        """Initialize the expander.

        Args:
            store: Content store to query.
            resolver: Resolver producing public URLs.
            config: Purge configuration. Uses defaults if not provided.
            hooks: Extension points. Item filters run once per item.
        """
        self._store = store
        self._resolver = resolver
        self._config = config or PurgeConfig()
        self._hooks = hooks or PurgeHooks()

    def expand(self, item: ContentItem) -> UrlSet:
        """Compute every URL that displays a content item.

        Covers the item itself, the front page, the posts page (for the
        type listed there), the author archive, the year, month and day
        archives, and the archive of each attached term in every taxonomy
        that applies to the item's type.

        Args:
            item: The content item.

        Returns:
            The URLs after the item filter chain has run.
        """
        urls = UrlSet()
        resolver = self._resolver

        self._add(urls, "item", lambda: resolver.item_url(item))

        front_page = self._resolve("front page", resolver.front_page_url)
        if front_page:
            urls.add(front_page)

        if item.type == self._config.posts_item_type:
            posts_page = self._resolve("posts page", resolver.posts_page_url)
            if posts_page and posts_page != front_page:
                urls.add(posts_page)

        self._add(urls, "author", lambda: resolver.author_url(item.author_id))

        created = item.created_at
        self._add(urls, "year", lambda: resolver.year_url(created.year))
        self._add(
            urls, "month", lambda: resolver.month_url(created.year, created.month)
        )
        self._add(
            urls,
            "day",
            lambda: resolver.day_url(created.year, created.month, created.day),
        )

        for taxonomy in self._taxonomies_for(item):
            for term in item.terms_in(taxonomy):
                self._add(urls, f"term {term.id}", lambda t=term: resolver.term_url(t))

        return self._hooks.apply_item(urls, item)

    def expand_term(self, term: TermRef) -> UrlSet:
        """Compute the URLs affected by a change to a term.

        The term's own archive plus the full expansion of every public
        item carrying the term. The item list is not paginated, so very
        large terms produce correspondingly large sets.

        Args:
            term: The term.

        Returns:
            The union of all affected URLs.
        """
        urls = UrlSet()
        term_url = self._resolve(
            f"term {term.id}", lambda: self._resolver.term_url(term)
        )
        if term_url:
            urls.add(term_url)
            self._log_debug(f"Added term archive to purge list: {term_url}")

        item_ids = self._store.list_item_ids(
            types=self._store.public_types(),
            statuses=self._config.public_statuses,
            term=term,
        )
        if item_ids:
            self._log_debug(f"Found {len(item_ids)} items with term ID {term.id}")
        urls.update(self._expand_ids(item_ids))
        return urls

    def expand_author(self, author_id: EntityId) -> UrlSet:
        """Compute the URLs affected by a change to an author.

        The author archive plus the full expansion of every public item
        the author owns. Not paginated.

        Args:
            author_id: The author.

        Returns:
            The union of all affected URLs.
        """
        urls = UrlSet()
        author_url = self._resolve(
            f"author {author_id}", lambda: self._resolver.author_url(author_id)
        )
        if author_url:
            urls.add(author_url)
            self._log_debug(f"Added author archive to purge list: {author_url}")

        item_ids = self._store.list_item_ids(
            types=self._store.public_types(),
            statuses=self._config.public_statuses,
            author_id=author_id,
        )
        if item_ids:
            self._log_debug(f"Found {len(item_ids)} items by author {author_id}")
        urls.update(self._expand_ids(item_ids))
        return urls

    def expand_comment(self, comment: Comment) -> UrlSet:
        """Compute the URLs affected by a change to a comment.

        Args:
            comment: The comment.

        Returns:
            The parent item's expansion if the parent is public,
            otherwise an empty set.
        """
        item = self._store.get_item(comment.item_id)
        if item is None or not self._config.is_public(item.status):
            return UrlSet()

        self._log_debug(f"Comment change affects item ID: {item.id}")
        return self.expand(item)

    def expand_removed_terms(
        self,
        old_taxonomy_term_ids: Iterable[EntityId],
        new_taxonomy_term_ids: Iterable[EntityId],
    ) -> UrlSet:
        """Compute the archives of terms detached from an item.

        The item's own expansion only sees the terms it carries now; this
        covers the archives that listed it before the change.

        Args:
            old_taxonomy_term_ids: Taxonomy-term ids before the change.
            new_taxonomy_term_ids: Taxonomy-term ids after the change.

        Returns:
            Archive URLs of every removed term that could be resolved.
        """
        remaining = set(new_taxonomy_term_ids)
        urls = UrlSet()
        for tt_id in old_taxonomy_term_ids:
            if tt_id in remaining:
                continue
            term = self._store.get_term_by_taxonomy_id(tt_id)
            if term is None:
                self._log_debug(f"No term found for taxonomy-term ID {tt_id}")
                continue
            term_url = self._resolve(
                f"term {term.id}", lambda t=term: self._resolver.term_url(t)
            )
            if term_url:
                urls.add(term_url)
                self._log_debug(f"Added term archive to purge list: {term_url}")
        return urls

    def _expand_ids(self, item_ids: Iterable[EntityId]) -> UrlSet:
        urls = UrlSet()
        for item_id in item_ids:
            item = self._store.get_item(item_id)
            if item is not None:
                urls.update(self.expand(item))
        return urls

    def _taxonomies_for(self, item: ContentItem) -> list[str]:
        try:
            return list(self._store.taxonomies_for(item.type))
        except ResolutionError as e:
            self._log_debug(f"Could not list taxonomies for '{item.type}': {e}")
            return []

    def _add(self, urls: UrlSet, what: str, resolve: Callable[[], str | None]) -> None:
        url = self._resolve(what, resolve)
        if url:
            urls.add(url)

    def _resolve(self, what: str, resolve: Callable[[], str | None]) -> str | None:
        try:
            return resolve()
        except ResolutionError as e:
            self._log_debug(f"Could not resolve {what} URL: {e}")
            return None

    def _log_debug(self, message: str) -> None:
        if self._config.debug:
            logger.debug(f"[pagepurge] {message}")
