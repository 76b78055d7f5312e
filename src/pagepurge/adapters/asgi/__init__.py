"""ASGI adapter for pagepurge."""

from pagepurge.adapters.asgi.middleware import PurgeEpochMiddleware, current_purger

__all__ = ["PurgeEpochMiddleware", "current_purger"]
