"""Tests for RecordingPurgeTransport."""

import pytest

from pagepurge.infrastructure.transports.memory import RecordingPurgeTransport


class TestRecordingPurgeTransport:
    def test_records_calls(self) -> None:
        transport = RecordingPurgeTransport()

        assert transport.purge_url("https://example.com/a/") is True
        assert transport.purge_host("example.com") is True
        assert transport.purge_tag("site1") is True

        assert transport.calls == [
            ("purge_host", "example.com"),
            ("purge_tag", "site1"),
            ("purge_url", "https://example.com/a/"),
        ]

    def test_failing_and_raising_targets(self) -> None:
        transport = RecordingPurgeTransport(failing=["bad"], raising=["worse"])

        assert transport.purge_url("bad") is False
        with pytest.raises(RuntimeError):
            transport.purge_url("worse")
        assert transport.urls == ["bad", "worse"]

    def test_enabled_flag(self) -> None:
        assert RecordingPurgeTransport().is_enabled()
        assert not RecordingPurgeTransport(enabled=False).is_enabled()

    def test_clear(self) -> None:
        transport = RecordingPurgeTransport()
        transport.purge_host("example.com")
        transport.clear()
        assert transport.calls == []
