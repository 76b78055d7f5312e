"""URL helpers for the flush boundary."""

import re
from urllib.parse import urlsplit

_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.\-]*$")
_FORBIDDEN_RE = re.compile(r"[\s\x00-\x1f\x7f]")


def is_valid_url(url: object) -> bool:
    """Check whether a value is a well-formed absolute URL.

    Requires a scheme and a host, and rejects whitespace and control
    characters anywhere in the string.

    Args:
        url: The candidate value.

    Returns:
        True if the value can be handed to the purge transport.
    """
    if not isinstance(url, str) or not url:
        return False
    if _FORBIDDEN_RE.search(url):
        return False

    try:
        parts = urlsplit(url)
        hostname, _port = parts.hostname, parts.port
    except ValueError:
        return False

    if not parts.scheme or not _SCHEME_RE.match(parts.scheme):
        return False
    return bool(hostname)


def host_of(url: str | None) -> str:
    """Return the hostname of a URL, or an empty string."""
    if not url:
        return ""
    try:
        return urlsplit(url).hostname or ""
    except ValueError:
        return ""
