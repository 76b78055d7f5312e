"""In-memory purge transport implementation."""

from collections.abc import Iterable


class RecordingPurgeTransport:
    """Purge transport that records calls instead of sending them.

    Useful for tests and dry runs. Targets listed in ``failing`` are
    rejected; targets listed in ``raising`` raise a RuntimeError.
    """

    def __init__(
        self,
        enabled: bool = True,
        failing: Iterable[str] | None = None,
        raising: Iterable[str] | None = None,
    ) -> None:
        self._enabled = enabled
        self._failing = set(failing or ())
        self._raising = set(raising or ())
        self.urls: list[str] = []
        self.hosts: list[str] = []
        self.tags: list[str] = []

    @property
    def calls(self) -> list[tuple[str, str]]:
        """Every recorded call as (method, target), grouped by method."""
        return (
            [("purge_host", host) for host in self.hosts]
            + [("purge_tag", tag) for tag in self.tags]
            + [("purge_url", url) for url in self.urls]
        )

    def purge_url(self, url: str) -> bool:
        return self._record(self.urls, url)

    def purge_host(self, host: str) -> bool:
        return self._record(self.hosts, host)

    def purge_tag(self, tag: str) -> bool:
        return self._record(self.tags, tag)

    def is_enabled(self) -> bool:
        return self._enabled

    def clear(self) -> None:
        """Forget every recorded call."""
        self.urls.clear()
        self.hosts.clear()
        self.tags.clear()

    def _record(self, calls: list[str], target: str) -> bool:
        calls.append(target)
        if target in self._raising:
            raise RuntimeError(f"Simulated purge failure for {target}")
        return target not in self._failing
