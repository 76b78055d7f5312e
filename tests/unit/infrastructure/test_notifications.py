"""Tests for NotificationBus."""

import pytest

from pagepurge.core.entities import Notification
from pagepurge.infrastructure.notifications import NotificationBus


class TestNotificationBus:
    def test_emit_in_subscription_order(self) -> None:
        bus = NotificationBus()
        calls: list[str] = []
        bus.subscribe("saved", lambda item_id: calls.append(f"first:{item_id}"))
        bus.subscribe("saved", lambda item_id: calls.append(f"second:{item_id}"))

        bus.emit("saved", 7)

        assert calls == ["first:7", "second:7"]

    def test_emit_returns_results(self) -> None:
        bus = NotificationBus()
        bus.subscribe("sum", lambda a, b=0: a + b)

        assert bus.emit("sum", 1, b=2) == [3]
        assert bus.emit("unknown") == []

    def test_enum_and_string_names_match(self) -> None:
        bus = NotificationBus()
        bus.subscribe(Notification.SHUTDOWN, lambda: "done")

        assert bus.emit("shutdown") == ["done"]
        assert len(bus.subscribers(Notification.SHUTDOWN)) == 1

    def test_unsubscribe(self) -> None:
        bus = NotificationBus()

        def callback() -> None:
            pass

        bus.subscribe("event", callback)
        bus.unsubscribe("event", callback)
        bus.unsubscribe("event", callback)

        assert len(bus) == 0

    def test_callback_errors_propagate(self) -> None:
        bus = NotificationBus()

        def broken() -> None:
            raise ValueError("broken")

        bus.subscribe("event", broken)
        with pytest.raises(ValueError):
            bus.emit("event")
