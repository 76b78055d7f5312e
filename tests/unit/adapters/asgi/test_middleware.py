"""Tests for PurgeEpochMiddleware."""

import logging

import pytest
from starlette.applications import Starlette
from starlette.background import BackgroundTask
from starlette.middleware import Middleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route
from starlette.testclient import TestClient

from pagepurge.adapters.asgi import PurgeEpochMiddleware, current_purger
from pagepurge.core.services.purger import Purger, create_purger
from pagepurge.infrastructure.stores.memory import InMemoryContentStore
from pagepurge.infrastructure.transports.memory import RecordingPurgeTransport


async def save_item(request: Request) -> JSONResponse:
    purger: Purger = request.state.purger
    purger.handle_item_after_change(int(request.path_params["item_id"]))
    return JSONResponse({"state": purger.state.value})


async def save_later(request: Request) -> JSONResponse:
    purger: Purger = request.state.purger
    item_id = int(request.path_params["item_id"])
    return JSONResponse(
        {"queued": item_id},
        background=BackgroundTask(purger.handle_item_after_change, item_id),
    )


async def save_and_fail(request: Request) -> JSONResponse:
    request.state.purger.handle_item_after_change(1)
    raise RuntimeError("handler failed")


async def context(request: Request) -> JSONResponse:
    purger = current_purger()
    return JSONResponse(
        {
            "tracked": purger is not None,
            "same": purger is getattr(request.state, "purger", None),
        }
    )


def create_app(factory, should_track=None) -> Starlette:
    return Starlette(
        routes=[
            Route("/items/{item_id}", save_item, methods=["POST"]),
            Route("/items/{item_id}/later", save_later, methods=["POST"]),
            Route("/fail", save_and_fail, methods=["POST"]),
            Route("/context", context, methods=["GET", "POST"]),
        ],
        middleware=[
            Middleware(
                PurgeEpochMiddleware,
                purger_factory=factory,
                should_track=should_track,
            )
        ],
    )


@pytest.fixture
def purgers() -> list[Purger]:
    return []


@pytest.fixture
def factory(
    store: InMemoryContentStore,
    transport: RecordingPurgeTransport,
    purgers: list[Purger],
):
    def build() -> Purger:
        purger = create_purger(store, store, transport)
        purgers.append(purger)
        return purger

    return build


class TestPurgeEpochMiddleware:
    """Tests for per-request epochs."""

    def test_request_flushes_after_response(
        self, factory, transport: RecordingPurgeTransport
    ) -> None:
        client = TestClient(create_app(factory))

        response = client.post("/items/1")

        assert response.status_code == 200
        assert response.json() == {"state": "accumulating"}
        assert "https://example.com/hello-world/" in transport.urls

    def test_each_request_gets_its_own_purger(
        self, factory, purgers: list[Purger]
    ) -> None:
        client = TestClient(create_app(factory))

        client.post("/items/1")
        client.post("/items/2")

        assert len(purgers) == 2
        assert purgers[0] is not purgers[1]
        assert all(purger.accumulator.is_empty for purger in purgers)

    def test_flush_runs_when_endpoint_raises(
        self, factory, transport: RecordingPurgeTransport
    ) -> None:
        client = TestClient(create_app(factory), raise_server_exceptions=False)

        response = client.post("/fail")

        assert response.status_code == 500
        assert "https://example.com/hello-world/" in transport.urls

    def test_current_purger_matches_request_state(self, factory) -> None:
        client = TestClient(create_app(factory))

        assert client.get("/context").json() == {"tracked": True, "same": True}

    def test_untracked_requests(self, factory, purgers: list[Purger]) -> None:
        client = TestClient(
            create_app(factory, should_track=lambda request: request.method != "GET")
        )

        response = client.get("/context")

        assert response.json() == {"tracked": False, "same": True}
        assert purgers == []

    def test_factory_returning_none(self, transport: RecordingPurgeTransport) -> None:
        client = TestClient(create_app(lambda: None))

        assert client.get("/context").json() == {"tracked": False, "same": True}
        assert transport.calls == []

    def test_failed_purges_logged(
        self, store: InMemoryContentStore, caplog: pytest.LogCaptureFixture
    ) -> None:
        transport = RecordingPurgeTransport(raising=["https://example.com/hello-world/"])
        client = TestClient(create_app(lambda: create_purger(store, store, transport)))

        with caplog.at_level(logging.ERROR):
            client.post("/items/1")

        assert any(
            "failed for POST /items/1" in r.getMessage() for r in caplog.records
        )

    def test_background_task_notifications_flushed(
        self, factory, transport: RecordingPurgeTransport, purgers: list[Purger]
    ) -> None:
        """Notifications from a response's background task join the epoch."""
        client = TestClient(create_app(factory))

        response = client.post("/items/1/later")

        assert response.json() == {"queued": 1}
        assert "https://example.com/hello-world/" in transport.urls
        assert purgers[0].accumulator.is_empty

    def test_non_http_scopes_pass_through(self, factory, purgers: list[Purger]) -> None:
        with TestClient(create_app(factory)):
            pass

        assert purgers == []
