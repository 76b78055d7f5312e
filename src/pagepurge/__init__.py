"""pagepurge - Context-aware page cache purging for content backends.

A Python library that works out which cached pages a content change
affects and purges them exactly once per unit of work: a set of targeted
URL purges, or a single full-cache flush when a change is too broad to
reason about selectively.

Example:
    from pagepurge import (
        InMemoryContentStore,
        NotificationBus,
        PurgeConfig,
        VarnishPurgeTransport,
        bootstrap,
    )

    store = InMemoryContentStore(base_url="https://example.com")
    store.register_taxonomy("category", ["post"])

    bus = NotificationBus()
    purger = bootstrap(
        bus,
        store=store,
        resolver=store,
        transport_factory=lambda: VarnishPurgeTransport(server="http://varnish:6081"),
        config=PurgeConfig(cache_tag_prefix="site1"),
    )

    # Host emits notifications during a request or job
    bus.emit("item.before_change", 42)
    bus.emit("item.after_change", 42)

    # ... and signals the end of the unit of work
    bus.emit("shutdown")

Adjusting purge lists:
    from pagepurge import PurgeHooks, UrlSet

    hooks = PurgeHooks()

    @hooks.add_item_filter
    def add_feed(urls: UrlSet, item) -> UrlSet:
        urls.add("https://example.com/feed/")
        return urls
"""

from pagepurge.core.entities import (
    Author,
    Comment,
    ContentItem,
    Notification,
    PurgeConfig,
    TermRef,
    UrlSet,
)
from pagepurge.core.interfaces import (
    IContentStore,
    ILinkResolver,
    INotificationBus,
    IPurgeTransport,
    ResolutionError,
    TransportError,
)
from pagepurge.core.services import (
    EntityExpander,
    EpochAccumulator,
    EpochState,
    FlushCoordinator,
    FlushReport,
    Purger,
    bootstrap,
    create_purger,
    is_eligible,
    should_purge,
)
from pagepurge.hooks import PurgeHooks
from pagepurge.infrastructure import (
    InMemoryContentStore,
    NotificationBus,
    RecordingPurgeTransport,
    VarnishPurgeTransport,
)

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Core entities
    "Author",
    "Comment",
    "ContentItem",
    "Notification",
    "PurgeConfig",
    "TermRef",
    "UrlSet",
    # Core interfaces
    "IContentStore",
    "ILinkResolver",
    "INotificationBus",
    "IPurgeTransport",
    "ResolutionError",
    "TransportError",
    # Core services
    "Purger",
    "create_purger",
    "bootstrap",
    "EntityExpander",
    "EpochAccumulator",
    "EpochState",
    "FlushCoordinator",
    "FlushReport",
    "should_purge",
    "is_eligible",
    # Extension points
    "PurgeHooks",
    # Infrastructure implementations
    "InMemoryContentStore",
    "NotificationBus",
    "RecordingPurgeTransport",
    "VarnishPurgeTransport",
]
