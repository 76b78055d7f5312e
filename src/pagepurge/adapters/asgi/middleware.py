"""ASGI middleware running one purge epoch per request."""

import logging
from collections.abc import Callable
from contextvars import ContextVar

from starlette.concurrency import run_in_threadpool
from starlette.requests import Request
from starlette.types import ASGIApp, Receive, Scope, Send

from pagepurge.core.services.purger import Purger

logger = logging.getLogger(__name__)

_current_purger: ContextVar[Purger | None] = ContextVar("pagepurge_purger", default=None)


def current_purger() -> Purger | None:
    """Return the purger of the request being handled, if any."""
    return _current_purger.get()


class PurgeEpochMiddleware:
    """Gives every request its own purger and flushes it afterwards.

    The request is the unit of work: handlers called while it is being
    served accumulate into the request's purger. The flush runs once the
    wrapped application has returned, which is after the response body
    has been sent and the response's background tasks have run, or after
    the application raised.

    Usage:
        store = MyContentStore()
        transport = VarnishPurgeTransport(server="http://varnish:6081")

        app.add_middleware(
            PurgeEpochMiddleware,
            purger_factory=lambda: create_purger(store, store, transport),
        )

        @app.post("/items/{item_id}")
        async def save_item(request: Request):
            ...
            request.state.purger.handle_item_after_change(item_id)
    """

    def __init__(
        self,
        app: ASGIApp,
        purger_factory: Callable[[], Purger | None],
        should_track: Callable[[Request], bool] | None = None,
    ) -> None:
        """Initialize the middleware.

        Args:
            app: The wrapped ASGI application.
            purger_factory: Builds a purger per request. Returning None
                leaves the request untracked.
            should_track: Optional callback deciding per request whether
                to open an epoch at all, e.g. only for mutating methods.
        """
        self.app = app
        self._purger_factory = purger_factory
        self._should_track = should_track

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope, receive)
        if self._should_track is not None and not self._should_track(request):
            await self.app(scope, receive, send)
            return

        purger = self._purger_factory()
        if purger is None:
            await self.app(scope, receive, send)
            return

        request.state.purger = purger
        token = _current_purger.set(purger)
        try:
            await self.app(scope, receive, send)
        finally:
            _current_purger.reset(token)
            report = await run_in_threadpool(purger.shutdown)
            if report.failed:
                logger.error(
                    f"[pagepurge] {len(report.failed)} purge(s) failed for "
                    f"{scope['method']} {scope['path']}"
                )
