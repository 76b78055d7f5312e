"""Tests for URL helpers."""

import pytest

from pagepurge.utils.urls import host_of, is_valid_url


class TestIsValidUrl:
    @pytest.mark.parametrize(
        "url",
        [
            "https://example.com/",
            "http://example.com:8080/a/b/?page=2",
            "https://sub.example.com/2024/03/05/",
        ],
    )
    def test_valid(self, url: str) -> None:
        assert is_valid_url(url)

    @pytest.mark.parametrize(
        "url",
        [
            "",
            "   ",
            "not a url",
            "/relative/path/",
            "example.com/page/",
            "https://",
            "https://example.com/a b/",
            "https://example.com/\n",
            "https://example.com:99999/",
            None,
            42,
        ],
    )
    def test_invalid(self, url: object) -> None:
        assert not is_valid_url(url)


class TestHostOf:
    def test_host(self) -> None:
        assert host_of("https://Example.com:8443/path/") == "example.com"

    def test_empty(self) -> None:
        assert host_of("") == ""
        assert host_of(None) == ""
        assert host_of("/relative/") == ""
