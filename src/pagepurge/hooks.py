"""Extension points for adjusting purge lists.

Two ordered chains of pure transforms let host code add or remove URLs:

- item filters run once per expanded content item and receive the
  candidate URLs together with the item;
- final filters run once per flush, just before per-URL purging.

Example:
    hooks = PurgeHooks()

    @hooks.add_item_filter
    def add_feed(urls: UrlSet, item: ContentItem) -> UrlSet:
        urls.add("https://example.com/feed/")
        return urls

    @hooks.add_final_filter
    def skip_previews(urls: UrlSet) -> UrlSet:
        return UrlSet(url for url in urls.purgeable() if "preview" not in url)
"""

from collections.abc import Callable

from pagepurge.core.entities.content import ContentItem
from pagepurge.core.entities.url_set import UrlSet, UrlSetLike

ItemFilter = Callable[[UrlSet, ContentItem], UrlSetLike]
FinalFilter = Callable[[UrlSet], UrlSetLike]


class PurgeHooks:
    """Ordered URL filter chains applied in registration order."""

    def __init__(
        self,
        item_filters: list[ItemFilter] | None = None,
        final_filters: list[FinalFilter] | None = None,
    ) -> None:
        self._item_filters: list[ItemFilter] = list(item_filters or [])
        self._final_filters: list[FinalFilter] = list(final_filters or [])

    @property
    def item_filters(self) -> tuple[ItemFilter, ...]:
        return tuple(self._item_filters)

    @property
    def final_filters(self) -> tuple[FinalFilter, ...]:
        return tuple(self._final_filters)

    def add_item_filter(self, func: ItemFilter) -> ItemFilter:
        """Register an item filter. Usable as a decorator."""
        self._item_filters.append(func)
        return func

    def add_final_filter(self, func: FinalFilter) -> FinalFilter:
        """Register a final filter. Usable as a decorator."""
        self._final_filters.append(func)
        return func

    def remove_item_filter(self, func: ItemFilter) -> None:
        """Unregister an item filter if present."""
        if func in self._item_filters:
            self._item_filters.remove(func)

    def remove_final_filter(self, func: FinalFilter) -> None:
        """Unregister a final filter if present."""
        if func in self._final_filters:
            self._final_filters.remove(func)

    def apply_item(self, urls: UrlSet, item: ContentItem) -> UrlSet:
        """Run the item filter chain.

        Args:
            urls: Candidate URLs computed for the item.
            item: The item the URLs were computed from.

        Returns:
            The filtered URL set.
        """
        for func in self._item_filters:
            urls = UrlSet.coerce(func(urls, item))
        return urls

    def apply_final(self, urls: UrlSet) -> UrlSet:
        """Run the final filter chain.

        Args:
            urls: The URLs accumulated during the epoch.

        Returns:
            The filtered URL set.
        """
        for func in self._final_filters:
            urls = UrlSet.coerce(func(urls))
        return urls
