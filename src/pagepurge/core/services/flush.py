"""Flush coordinator - drains an epoch into the purge transport."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from pagepurge.core.entities.purge_config import PurgeConfig
from pagepurge.core.entities.url_set import UrlSet
from pagepurge.core.interfaces.link_resolver import ILinkResolver, ResolutionError
from pagepurge.core.interfaces.transport import IPurgeTransport
from pagepurge.core.services.accumulator import EpochAccumulator
from pagepurge.hooks import PurgeHooks
from pagepurge.utils.urls import host_of, is_valid_url

logger = logging.getLogger(__name__)


class EpochState(Enum):
    """Lifecycle of an epoch as seen by the flush coordinator."""

    IDLE = "idle"
    ACCUMULATING = "accumulating"
    FLUSHING = "flushing"


@dataclass(frozen=True)
class FlushReport:
    """Outcome of one flush.

    Attributes:
        full_purge: Whether the flush was a full flush.
        purged: Targets accepted by the transport. URLs for a selective
            flush; the host and tag for a full flush.
        failed: Targets whose purge call raised or returned False.
        skipped: Malformed URLs dropped before purging.
    """

    full_purge: bool = False
    purged: tuple[str, ...] = ()
    failed: tuple[str, ...] = ()
    skipped: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        """True if no purge call failed."""
        return not self.failed


class FlushCoordinator:
    """Executes the accumulated purges exactly once per epoch.

    A latched full purge wins over the URL set: the whole host (and the
    cache tag, when configured) is purged and no per-URL purge is sent.
    Otherwise every well-formed URL is purged individually. A failing
    call is logged and does not stop the others. The epoch is detached
    from the accumulator before anything is purged, so the accumulator
    is always reset and later notifications start the next epoch.
    """

    def __init__(
        self,
        accumulator: EpochAccumulator,
        transport: IPurgeTransport,
        resolver: ILinkResolver,
        config: PurgeConfig | None = None,
        hooks: PurgeHooks | None = None,
    ) -> None:
        """Initialize the flush coordinator.

        Args:
            accumulator: The epoch state to drain.
            transport: Client that performs the purges.
            resolver: Used to find the site host for full flushes.
            config: Purge configuration. Uses defaults if not provided.
            hooks: Extension points. Final filters run once per flush.
        """
        self._accumulator = accumulator
        self._transport = transport
        self._resolver = resolver
        self._config = config or PurgeConfig()
        self._hooks = hooks or PurgeHooks()
        self._flushing = False

    @property
    def state(self) -> EpochState:
        """Current epoch state."""
        if self._flushing:
            return EpochState.FLUSHING
        if self._accumulator.is_empty:
            return EpochState.IDLE
        return EpochState.ACCUMULATING

    def flush(self) -> FlushReport:
        """Drain the epoch.

        Returns:
            A report of what was purged. An idle epoch yields an empty one.
        """
        if self._flushing:
            # Reentrant call from a filter or transport; whatever it would
            # drain waits for the next flush.
            return FlushReport()

        # Notifications delivered while purging land in the next epoch.
        urls, full_purge = self._accumulator.drain()
        self._flushing = True
        try:
            if full_purge:
                return self._purge_entire_cache()
            return self._purge_urls(urls)
        finally:
            self._flushing = False

    def _purge_entire_cache(self) -> FlushReport:
        purged: list[str] = []
        failed: list[str] = []

        try:
            host = host_of(self._resolver.front_page_url())
        except ResolutionError as e:
            logger.error(f"[pagepurge] Could not determine site host: {e}")
            host = ""

        if host:
            if self._call(self._transport.purge_host, host, "host"):
                purged.append(host)
                self._log_debug(f"Purged entire cache for host: {host}")
            else:
                failed.append(host)

        tag = self._config.cache_tag_prefix
        if tag:
            if self._call(self._transport.purge_tag, tag, "cache tag"):
                purged.append(tag)
                self._log_debug(f"Purged cache tag: {tag}")
            else:
                failed.append(tag)

        return FlushReport(full_purge=True, purged=tuple(purged), failed=tuple(failed))

    def _purge_urls(self, urls: UrlSet) -> FlushReport:
        urls = self._hooks.apply_final(urls)

        valid: list[str] = []
        skipped: list[str] = []
        for url in urls.purgeable():
            if is_valid_url(url):
                valid.append(url)
            else:
                skipped.append(url)

        purged: list[str] = []
        failed: list[str] = []
        for url in valid:
            if self._call(self._transport.purge_url, url, "URL"):
                purged.append(url)
                self._log_debug(f"Purged: {url}")
            else:
                failed.append(url)

        return FlushReport(
            full_purge=False,
            purged=tuple(purged),
            failed=tuple(failed),
            skipped=tuple(skipped),
        )

    def _call(self, purge: Callable[[str], bool], target: str, what: str) -> bool:
        try:
            accepted = purge(target)
        except Exception as e:
            logger.error(f"[pagepurge] Failed to purge {what} {target}: {e}")
            return False

        if accepted is False:
            logger.error(f"[pagepurge] Failed to purge {what} {target}: rejected")
            return False
        return True

    def _log_debug(self, message: str) -> None:
        if self._config.debug:
            logger.debug(f"[pagepurge] {message}")
