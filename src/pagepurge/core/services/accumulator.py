"""Epoch accumulator - per unit-of-work purge state."""

from collections.abc import Mapping
from types import MappingProxyType

from pagepurge.core.entities.content import EntityId
from pagepurge.core.entities.url_set import UrlSet, UrlSetLike


class EpochAccumulator:
    """Holds everything gathered during one epoch.

    One instance belongs to one unit of work at a time. It starts empty,
    collects URLs, an optional full-purge latch and pre-mutation status
    snapshots, and is reset after every flush so the same instance can
    serve the next epoch.
    """

    def __init__(self) -> None:
        self._urls = UrlSet()
        self._full_purge = False
        self._pre_states: dict[EntityId, str] = {}

    @property
    def urls(self) -> UrlSet:
        """URLs collected so far."""
        return self._urls

    @property
    def is_full_purge(self) -> bool:
        """Whether a full flush has been requested during this epoch."""
        return self._full_purge

    @property
    def pre_states(self) -> Mapping[EntityId, str]:
        """Read-only view of the pre-mutation status snapshots."""
        return MappingProxyType(self._pre_states)

    @property
    def is_empty(self) -> bool:
        """True if nothing has been recorded since the last reset."""
        return not self._urls and not self._full_purge and not self._pre_states

    def record_pre_state(self, entity_id: EntityId, status: str) -> None:
        """Remember an item's status before it changes.

        Overwrites any snapshot already taken for the same id.
        """
        self._pre_states[entity_id] = status

    def consume_pre_state(self, entity_id: EntityId) -> str | None:
        """Return the snapshot taken for an item, or None if none exists.

        The snapshot stays available for the rest of the epoch.
        """
        return self._pre_states.get(entity_id)

    def merge(self, urls: UrlSetLike) -> None:
        """Union URLs into the epoch's set."""
        self._urls.update(urls)

    def add(self, url: str) -> None:
        """Add a single URL to the epoch's set."""
        self._urls.add(url)

    def latch_full_purge(self) -> None:
        """Request a full flush. Stays set until reset."""
        self._full_purge = True

    def drain(self) -> tuple[UrlSet, bool]:
        """Detach the current epoch and reset.

        Anything recorded after this call belongs to the next epoch.

        Returns:
            The epoch's URL set and full-purge latch.
        """
        urls, full_purge = self._urls, self._full_purge
        self.reset()
        return urls, full_purge

    def reset(self) -> None:
        """Return to the initial empty state."""
        self._urls = UrlSet()
        self._full_purge = False
        self._pre_states = {}
