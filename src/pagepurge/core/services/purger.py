"""Purger - main orchestrator wiring notifications to the engine."""

import logging
from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager
from typing import Any, TypeGuard

from pagepurge.core.entities.content import Author, Comment, ContentItem, EntityId, TermRef
from pagepurge.core.entities.notification import Notification
from pagepurge.core.entities.purge_config import PurgeConfig
from pagepurge.core.interfaces.content_store import IContentStore
from pagepurge.core.interfaces.link_resolver import ILinkResolver
from pagepurge.core.interfaces.notification_bus import INotificationBus
from pagepurge.core.interfaces.transport import IPurgeTransport
from pagepurge.core.services.accumulator import EpochAccumulator
from pagepurge.core.services.classifier import (
    changed_profile_fields,
    comment_visibility_changed,
    is_eligible,
    should_purge,
)
from pagepurge.core.services.expander import EntityExpander
from pagepurge.core.services.flush import EpochState, FlushCoordinator, FlushReport
from pagepurge.hooks import PurgeHooks

logger = logging.getLogger(__name__)


class Purger:
    """Domain service that turns mutation notifications into purges.

    Each handler classifies a notification, expands the affected entity
    and merges the result into the epoch accumulator. ``shutdown`` is the
    end-of-unit-of-work signal: it flushes exactly once and resets.

    A Purger owns one accumulator. Hosts that process units of work
    concurrently should build one Purger per unit of work.
    """

    def __init__(
        self,
        store: IContentStore,
        resolver: ILinkResolver,
        transport: IPurgeTransport,
        config: PurgeConfig | None = None,
        hooks: PurgeHooks | None = None,
        accumulator: EpochAccumulator | None = None,
    ) -> None:
        """Initialize the purger.

        Args:
            store: Content store to query.
            resolver: Resolver producing public URLs.
            transport: Client that performs the purges.
            config: Purge configuration. Uses defaults if not provided.
            hooks: URL filter chains.
            accumulator: Epoch state. A fresh one is created if not provided.
        """
        self._store = store
        self._resolver = resolver
        self._transport = transport
        self._config = config or PurgeConfig()
        self._hooks = hooks or PurgeHooks()
        self._accumulator = accumulator or EpochAccumulator()

        excluded = list(self._config.excluded_types)
        if self._config.exclude_private_types:
            excluded.extend(t for t in store.private_types() if t not in excluded)
        self._excluded_types = tuple(excluded)

        self._expander = EntityExpander(store, resolver, self._config, self._hooks)
        self._coordinator = FlushCoordinator(
            self._accumulator, transport, resolver, self._config, self._hooks
        )
        self._registered = False

    @property
    def config(self) -> PurgeConfig:
        """Get the purge configuration."""
        return self._config

    @property
    def accumulator(self) -> EpochAccumulator:
        """Get the epoch accumulator."""
        return self._accumulator

    @property
    def expander(self) -> EntityExpander:
        """Get the entity expander."""
        return self._expander

    @property
    def state(self) -> EpochState:
        """Current epoch state."""
        return self._coordinator.state

    @property
    def excluded_types(self) -> tuple[str, ...]:
        """Content types that never trigger purging."""
        return self._excluded_types

    @property
    def registered(self) -> bool:
        """Whether the purger subscribed to a notification bus."""
        return self._registered

    def is_available(self) -> bool:
        """Check the startup gate.

        Returns:
            False if purging is disabled in the configuration, or if the
            transport is disabled or cannot answer.
        """
        if not self._config.enabled:
            self._log_debug("Purging disabled by configuration")
            return False
        try:
            enabled = self._transport.is_enabled()
        except Exception as e:
            logger.error(f"[pagepurge] Purge transport unavailable: {e}")
            return False
        if not enabled:
            logger.error("[pagepurge] Purge transport is not enabled")
            return False
        return True

    def register(self, bus: INotificationBus) -> bool:
        """Subscribe every handler to a notification bus.

        Nothing is registered when the startup gate fails, which leaves
        the engine inert for the lifetime of the bus.

        Args:
            bus: The host's notification mechanism.

        Returns:
            True if the handlers were registered.
        """
        if self._registered:
            return True
        if not self.is_available():
            return False

        for event, handler in self._handlers().items():
            bus.subscribe(event, handler)

        for event in self._config.full_purge_events:
            bus.subscribe(event, self._full_purge_handler(event))

        bus.subscribe(Notification.SHUTDOWN.value, self.shutdown)

        self._registered = True
        return True

    def handle_item_before_change(self, item_id: EntityId, *args: Any) -> None:
        """Snapshot an item's status before it is saved."""
        item = self._store.get_item(item_id)
        if not self._eligible(item):
            return
        self._accumulator.record_pre_state(item_id, item.status)

    def handle_item_after_change(
        self,
        item_id: EntityId,
        item: ContentItem | None = None,
        *args: Any,
    ) -> None:
        """Purge an item's pages after it is saved.

        Any transition involving a public status qualifies, so publishing
        a draft refreshes the archives that must now list it and
        unpublishing refreshes the ones that must drop it.

        Args:
            item_id: The saved item.
            item: The item after saving. Fetched from the store if omitted.
        """
        if item is None:
            item = self._store.get_item(item_id)
        if not self._eligible(item):
            return

        previous = self._accumulator.consume_pre_state(item_id)
        if not should_purge(previous, item.status, self._config.public_statuses):
            return

        self._log_debug(f"Handling item update for item ID: {item_id}")
        self._accumulator.merge(self._expander.expand(item))

    def handle_item_terms_changed(
        self,
        item_id: EntityId,
        taxonomy: str,
        taxonomy_term_ids: Iterable[EntityId],
        old_taxonomy_term_ids: Iterable[EntityId],
        *args: Any,
    ) -> None:
        """Purge the archives of terms detached from a public item.

        Args:
            item_id: The item whose terms changed.
            taxonomy: The taxonomy that changed.
            taxonomy_term_ids: Taxonomy-term ids after the change.
            old_taxonomy_term_ids: Taxonomy-term ids before the change.
        """
        item = self._store.get_item(item_id)
        if not self._eligible(item):
            return
        if not self._config.is_public(item.status):
            return

        self._log_debug(f"Handling term changes in '{taxonomy}' for item ID: {item_id}")
        self._accumulator.merge(
            self._expander.expand_removed_terms(old_taxonomy_term_ids, taxonomy_term_ids)
        )

    def handle_item_deletion(
        self,
        item_id: EntityId,
        item: ContentItem | None = None,
        *args: Any,
    ) -> None:
        """Purge the pages of a public item that is about to be deleted."""
        if item is None:
            item = self._store.get_item(item_id)
        if not self._eligible(item):
            return
        if not self._config.is_public(item.status):
            return

        self._log_debug(f"Handling deletion for item ID: {item.id}")
        self._accumulator.merge(self._expander.expand(item))

    def handle_term_update(
        self,
        term_id: EntityId,
        taxonomy: str,
        *args: Any,
    ) -> None:
        """Purge a term's archive and every item carrying the term."""
        self._log_debug(f"Handling update for term ID: {term_id} in taxonomy '{taxonomy}'")
        self._accumulator.merge(self._expander.expand_term(self._term(term_id, taxonomy)))

    def handle_term_deletion(
        self,
        term_id: EntityId,
        taxonomy: str,
        deleted_term: TermRef | None = None,
        *args: Any,
    ) -> None:
        """Purge every page that referenced a deleted term."""
        term = deleted_term or self._term(term_id, taxonomy)
        self._log_debug(
            f"Handling deletion for term '{term.name or term.id}' "
            f"(ID: {term_id}) in taxonomy '{taxonomy}'"
        )
        self._accumulator.merge(self._expander.expand_term(term))

    def handle_comment_status_transition(
        self,
        new_status: str,
        old_status: str,
        comment: Comment,
        *args: Any,
    ) -> None:
        """Purge a comment's item when the comment's visibility changes."""
        if not comment_visibility_changed(new_status, old_status):
            return

        self._log_debug(
            f"Handling comment status change for comment ID: {comment.id} "
            f"({old_status} -> {new_status})"
        )
        self._accumulator.merge(self._expander.expand_comment(comment))

    def handle_comment_deletion(self, comment_id: EntityId, *args: Any) -> None:
        """Purge the item a deleted comment belonged to."""
        self._log_debug(f"Handling deletion for comment ID: {comment_id}")
        comment = self._store.get_comment(comment_id)
        if comment is not None:
            self._accumulator.merge(self._expander.expand_comment(comment))

    def handle_profile_update(
        self,
        author_id: EntityId,
        old_author: Author,
        *args: Any,
    ) -> None:
        """Purge an author's pages when a public profile field changed."""
        new_author = self._store.get_author(author_id)
        if new_author is None:
            return

        changed = changed_profile_fields(old_author, new_author, self._config.profile_fields)
        if not changed:
            return

        self._log_debug(f"Profile field '{changed[0]}' changed for author ID: {author_id}")
        self._accumulator.merge(self._expander.expand_author(author_id))

    def handle_full_purge_event(self, event: str = "", *args: Any) -> None:
        """Latch a full cache flush for this epoch."""
        self._log_debug(f"Full purge requested by '{event}'")
        self._accumulator.latch_full_purge()

    def shutdown(self, *args: Any) -> FlushReport:
        """Signal the end of the unit of work and flush.

        Returns:
            The flush report.
        """
        return self._coordinator.flush()

    @contextmanager
    def epoch(self) -> Iterator["Purger"]:
        """Run a block of work as one epoch, flushing when it ends.

        The flush also runs if the block raises.

        Example:
            with purger.epoch():
                purger.handle_item_after_change(42)
        """
        try:
            yield self
        finally:
            self.shutdown()

    def _handlers(self) -> dict[str, Callable[..., Any]]:
        return {
            Notification.ITEM_BEFORE_CHANGE.value: self.handle_item_before_change,
            Notification.ITEM_AFTER_CHANGE.value: self.handle_item_after_change,
            Notification.ITEM_TERMS_CHANGED.value: self.handle_item_terms_changed,
            Notification.ITEM_DELETED.value: self.handle_item_deletion,
            Notification.TERM_UPDATED.value: self.handle_term_update,
            Notification.TERM_DELETED.value: self.handle_term_deletion,
            Notification.COMMENT_STATUS_CHANGED.value: self.handle_comment_status_transition,
            Notification.COMMENT_DELETED.value: self.handle_comment_deletion,
            Notification.PROFILE_UPDATED.value: self.handle_profile_update,
        }

    def _full_purge_handler(self, event: str) -> Callable[..., None]:
        def handler(*args: Any, **kwargs: Any) -> None:
            self.handle_full_purge_event(event)

        return handler

    def _eligible(self, item: ContentItem | None) -> TypeGuard[ContentItem]:
        if is_eligible(item, self._excluded_types):
            return True
        if item is not None and item.is_derivative:
            self._log_debug(
                f"Skipping {item.derivative} {item.id} of item ID: {item.parent_id}"
            )
        return False

    def _term(self, term_id: EntityId, taxonomy: str) -> TermRef:
        term = self._store.get_term(term_id, taxonomy)
        return term if term is not None else TermRef(id=term_id, taxonomy=taxonomy)

    def _log_debug(self, message: str) -> None:
        if self._config.debug:
            logger.debug(f"[pagepurge] {message}")


def create_purger(
    store: IContentStore,
    resolver: ILinkResolver,
    transport: IPurgeTransport,
    config: PurgeConfig | None = None,
    hooks: PurgeHooks | None = None,
) -> Purger:
    """Create a purger with a fresh accumulator.

    Args:
        store: Content store to query.
        resolver: Resolver producing public URLs.
        transport: Client that performs the purges.
        config: Purge configuration.
        hooks: URL filter chains.

    Returns:
        A new Purger.
    """
    return Purger(
        store=store,
        resolver=resolver,
        transport=transport,
        config=config,
        hooks=hooks,
    )


def bootstrap(
    bus: INotificationBus,
    store: IContentStore,
    resolver: ILinkResolver,
    transport_factory: Callable[[], IPurgeTransport],
    config: PurgeConfig | None = None,
    hooks: PurgeHooks | None = None,
) -> Purger | None:
    """Build a purger and register it with the host, if it can run.

    This is the startup gate: when the configuration disables purging,
    the transport cannot be constructed, or the transport reports itself
    disabled, nothing is registered and None is returned.

    Args:
        bus: The host's notification mechanism.
        store: Content store to query.
        resolver: Resolver producing public URLs.
        transport_factory: Builds the purge transport.
        config: Purge configuration.
        hooks: URL filter chains.

    Returns:
        The registered Purger, or None if the engine stays inert.
    """
    config = config or PurgeConfig()
    if not config.enabled:
        return None

    try:
        transport = transport_factory()
    except Exception as e:
        logger.error(f"[pagepurge] Could not create purge transport: {e}")
        return None

    purger = create_purger(store, resolver, transport, config, hooks)
    if not purger.register(bus):
        return None
    return purger
