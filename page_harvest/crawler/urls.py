# page_harvest/crawler/urls.py
"""
URL canonicalization: the identity key used for deduplication.
"""
from __future__ import annotations

from urllib.parse import urlsplit, urlunsplit

from page_harvest.errors import InvalidAddress

__all__ = ("canonicalize",)

_SCHEMES = ("http", "https")


def canonicalize(url: str) -> str:
    """
    Return the canonical form of an absolute http(s) *url*.

    The fragment is removed, scheme and host are lower-cased and an empty
    path becomes ``/``. Applying the function twice gives the same result
    as applying it once.

    Raises :class:`InvalidAddress` if *url* is not a well-formed absolute
    http(s) URL.
    """
    if not isinstance(url, str) or not url.strip():
        raise InvalidAddress(url, "empty address")
    try:
        parts = urlsplit(url.strip())
        # accessing .port validates it
        parts.port
    except ValueError as exc:
        raise InvalidAddress(url, str(exc)) from exc

    scheme = parts.scheme.lower()
    if scheme not in _SCHEMES:
        raise InvalidAddress(url, f"unsupported scheme {parts.scheme!r}")
    if not parts.hostname:
        raise InvalidAddress(url, "missing host")

    return urlunsplit((scheme, parts.netloc.lower(), parts.path or "/", parts.query, ""))

