"""URL set entity."""

from collections.abc import Iterable, Iterator, Mapping
from typing import Union

UrlSetLike = Union["UrlSet", Mapping[str, bool], Iterable[str]]


class UrlSet(Mapping[str, bool]):
    """Deduplicating collection of invalidation targets.

    Maps each URL to a flag telling whether it should be purged. Keys are
    unique and union is idempotent: adding a URL that is already present
    leaves the existing entry untouched. An entry flagged False is treated
    as absent by the flush.

    Validation is deliberately not done here. Any string is accepted and
    malformed URLs are dropped only when the set is flushed.
    """

    __slots__ = ("_urls",)

    def __init__(self, urls: UrlSetLike | None = None) -> None:
        self._urls: dict[str, bool] = {}
        if urls is not None:
            self.update(urls)

    def __getitem__(self, url: str) -> bool:
        return self._urls[url]

    def __iter__(self) -> Iterator[str]:
        return iter(self._urls)

    def __len__(self) -> int:
        return len(self._urls)

    def __repr__(self) -> str:
        return f"UrlSet({list(self._urls)!r})"

    def __or__(self, other: UrlSetLike) -> "UrlSet":
        merged = self.copy()
        merged.update(other)
        return merged

    def __ior__(self, other: UrlSetLike) -> "UrlSet":
        self.update(other)
        return self

    def add(self, url: str, purge: bool = True) -> None:
        """Insert a URL. No-op if the URL is already present.

        Args:
            url: The URL to add.
            purge: Whether the URL should be purged.
        """
        if url not in self._urls:
            self._urls[url] = bool(purge)

    def update(self, other: UrlSetLike) -> None:  # type: ignore[override]
        """Union another URL collection into this one.

        Args:
            other: A UrlSet, a mapping of URL to flag, or an iterable of URLs.
        """
        if isinstance(other, Mapping):
            for url, purge in other.items():
                self.add(url, purge)
        else:
            for url in other:
                self.add(url)

    def discard(self, url: str) -> None:
        """Remove a URL if present."""
        self._urls.pop(url, None)

    def clear(self) -> None:
        """Remove every entry."""
        self._urls.clear()

    def copy(self) -> "UrlSet":
        """Return a shallow copy."""
        clone = UrlSet()
        clone._urls = dict(self._urls)
        return clone

    def purgeable(self) -> list[str]:
        """Return the URLs flagged for purging, in insertion order."""
        return [url for url, purge in self._urls.items() if purge]

    @classmethod
    def coerce(cls, value: UrlSetLike | None) -> "UrlSet":
        """Convert a filter's return value to a UrlSet.

        Args:
            value: A UrlSet, mapping, iterable of URLs, or None.

        Returns:
            The value itself if it is already a UrlSet, otherwise a new one.
        """
        if isinstance(value, UrlSet):
            return value
        if value is None:
            return cls()
        if isinstance(value, str):
            return cls([value])
        return cls(value)
