"""Purge transport implementations."""

from pagepurge.infrastructure.transports.memory import RecordingPurgeTransport
from pagepurge.infrastructure.transports.varnish import VarnishPurgeTransport

__all__ = ["RecordingPurgeTransport", "VarnishPurgeTransport"]
