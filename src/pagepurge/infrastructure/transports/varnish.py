"""Varnish purge transport implementation."""

import logging
from urllib.parse import urlsplit

import httpx

from pagepurge.core.interfaces.transport import TransportError

logger = logging.getLogger(__name__)

PURGE_METHOD = "PURGE"


class VarnishPurgeTransport:
    """Sends HTTP PURGE requests to a Varnish cache server.

    Request shapes:

    - URL purge: ``PURGE {server}{path}?{query}`` with the URL's ``Host``.
    - Host purge: ``PURGE {server}/`` with ``Host: {host}`` and
      ``X-Purge-Method: regex``, which the server's VCL bans as ``.*``.
    - Tag purge: ``PURGE {server}/`` with ``X-Cache-Tags: {tag}``.

    Any 2xx response counts as accepted. Network errors are raised as
    TransportError.
    """

    def __init__(
        self,
        server: str = "http://127.0.0.1:6081",
        enabled: bool = True,
        timeout: float = 5.0,
        headers: dict[str, str] | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        """Initialize the Varnish transport.

        Args:
            server: Base URL of the Varnish server.
            enabled: Whether purging is enabled.
            timeout: Request timeout in seconds.
            headers: Extra headers sent with every request.
            client: Optional preconfigured httpx client. The transport
                closes only clients it created itself.
        """
        self._server = server.rstrip("/")
        self._enabled = enabled
        self._headers = dict(headers or {})
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout)

    @property
    def server(self) -> str:
        return self._server

    def is_enabled(self) -> bool:
        return self._enabled and bool(self._server)

    def purge_url(self, url: str) -> bool:
        """Purge a single URL.

        Args:
            url: Absolute URL of the cached page.

        Returns:
            True if Varnish accepted the purge.
        """
        parts = urlsplit(url)
        target = f"{self._server}{parts.path or '/'}"
        if parts.query:
            target = f"{target}?{parts.query}"
        return self._send(target, {"Host": parts.netloc})

    def purge_host(self, host: str) -> bool:
        """Purge every cached page of a host.

        Args:
            host: The hostname.

        Returns:
            True if Varnish accepted the purge.
        """
        return self._send(
            f"{self._server}/",
            {"Host": host, "X-Purge-Method": "regex"},
        )

    def purge_tag(self, tag: str) -> bool:
        """Purge every cached page carrying a cache tag.

        Args:
            tag: The cache tag or tag prefix.

        Returns:
            True if Varnish accepted the purge.
        """
        return self._send(f"{self._server}/", {"X-Cache-Tags": tag})

    def close(self) -> None:
        """Close the HTTP client if the transport created it."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "VarnishPurgeTransport":
        return self

    def __exit__(self, exc_type: type, exc_val: Exception, exc_tb: object) -> None:
        self.close()

    def _send(self, target: str, headers: dict[str, str]) -> bool:
        try:
            response = self._client.request(
                PURGE_METHOD,
                target,
                headers={**self._headers, **headers},
            )
        except httpx.HTTPError as e:
            raise TransportError(f"{PURGE_METHOD} {target} failed: {e}") from e

        if not response.is_success:
            logger.debug(
                f"[pagepurge] {PURGE_METHOD} {target} returned {response.status_code}"
            )
        return response.is_success
