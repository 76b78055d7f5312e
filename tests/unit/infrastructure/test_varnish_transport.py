"""Tests for VarnishPurgeTransport."""

import logging
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from pagepurge.core.interfaces import TransportError
from pagepurge.infrastructure.transports.varnish import VarnishPurgeTransport


def create_transport(
    handler: Callable[[httpx.Request], httpx.Response],
    requests: list[httpx.Request],
    **kwargs: Any,
) -> VarnishPurgeTransport:
    """Create a transport whose client records requests."""

    def record(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return handler(request)

    client = httpx.Client(transport=httpx.MockTransport(record))
    return VarnishPurgeTransport(server="http://varnish:6081/", client=client, **kwargs)


def ok(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200)


class TestRequests:
    """Tests for the PURGE request shapes."""

    def test_purge_url(self) -> None:
        requests: list[httpx.Request] = []
        transport = create_transport(ok, requests)

        assert transport.purge_url("https://example.com/2024/03/?page=2") is True

        [request] = requests
        assert request.method == "PURGE"
        assert str(request.url) == "http://varnish:6081/2024/03/?page=2"
        assert request.headers["host"] == "example.com"

    def test_purge_url_without_path(self) -> None:
        requests: list[httpx.Request] = []
        transport = create_transport(ok, requests)

        transport.purge_url("https://example.com")

        assert requests[0].url.path == "/"

    def test_purge_host(self) -> None:
        requests: list[httpx.Request] = []
        transport = create_transport(ok, requests)

        assert transport.purge_host("example.com") is True

        [request] = requests
        assert request.method == "PURGE"
        assert request.headers["host"] == "example.com"
        assert request.headers["x-purge-method"] == "regex"

    def test_purge_tag(self) -> None:
        requests: list[httpx.Request] = []
        transport = create_transport(ok, requests)

        assert transport.purge_tag("site1") is True

        assert requests[0].headers["x-cache-tags"] == "site1"

    def test_extra_headers(self) -> None:
        requests: list[httpx.Request] = []
        transport = create_transport(ok, requests, headers={"X-Purge-Token": "secret"})

        transport.purge_tag("site1")

        assert requests[0].headers["x-purge-token"] == "secret"


class TestResponses:
    def test_non_2xx_is_rejected(self, caplog: pytest.LogCaptureFixture) -> None:
        """The status is only reported at debug level; the flush logs the error."""
        transport = create_transport(lambda request: httpx.Response(405), [])

        with caplog.at_level(logging.DEBUG, logger="pagepurge"):
            assert transport.purge_url("https://example.com/a/") is False

        assert any("405" in r.getMessage() for r in caplog.records)
        assert all(r.levelno == logging.DEBUG for r in caplog.records)

    def test_network_error_raises(self) -> None:
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        transport = create_transport(refuse, [])

        with pytest.raises(TransportError, match="connection refused"):
            transport.purge_host("example.com")


class TestLifecycle:
    def test_is_enabled(self) -> None:
        assert VarnishPurgeTransport(client=httpx.Client()).is_enabled()
        assert not VarnishPurgeTransport(enabled=False, client=httpx.Client()).is_enabled()
        assert not VarnishPurgeTransport(server="", client=httpx.Client()).is_enabled()

    def test_server_trailing_slash_stripped(self) -> None:
        transport = VarnishPurgeTransport(server="http://varnish:6081/", client=httpx.Client())
        assert transport.server == "http://varnish:6081"

    def test_injected_client_left_open(self) -> None:
        client = httpx.Client()
        with VarnishPurgeTransport(client=client):
            pass

        assert not client.is_closed
        client.close()

    def test_owned_client_closed(self) -> None:
        transport = VarnishPurgeTransport()
        transport.close()

        assert transport._client.is_closed
