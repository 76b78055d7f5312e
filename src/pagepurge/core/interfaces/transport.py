"""Purge transport interface."""

from typing import Protocol


class TransportError(Exception):
    """Raised when a purge request cannot be delivered."""

    pass


class IPurgeTransport(Protocol):
    """Contract for the client that talks to the cache server.

    Each call reports success as a boolean. Calls may also raise; the
    flush treats both a False return and an exception as a failure of
    that single call.
    """

    def purge_url(self, url: str) -> bool:
        """Purge a single cached URL.

        Args:
            url: Absolute URL to purge.

        Returns:
            True if the cache server accepted the purge.
        """
        ...

    def purge_host(self, host: str) -> bool:
        """Purge every cached page of a host.

        Args:
            host: Hostname, e.g. "example.com".

        Returns:
            True if the cache server accepted the purge.
        """
        ...

    def purge_tag(self, tag: str) -> bool:
        """Purge every cached page carrying a tag or tag prefix.

        Args:
            tag: The cache tag.

        Returns:
            True if the cache server accepted the purge.
        """
        ...

    def is_enabled(self) -> bool:
        """Whether purging is enabled at all."""
        ...
