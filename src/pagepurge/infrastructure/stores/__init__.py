"""Content store implementations."""

from pagepurge.infrastructure.stores.memory import InMemoryContentStore

__all__ = ["InMemoryContentStore"]
