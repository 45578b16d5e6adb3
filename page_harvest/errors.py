# page_harvest/errors.py
"""
Exception taxonomy for PageHarvest.

Per-page fetch problems and upload problems are returned as values
(:class:`~page_harvest.crawler.models.FetchFailure`,
:class:`~page_harvest.crawler.models.UploadFailure`); only the conditions
below are raised.
"""
from __future__ import annotations

__all__ = (
    "PageHarvestError",
    "InvalidAddress",
    "FrontierEmpty",
    "PageCapReached",
    "MissingCredential",
)


class PageHarvestError(Exception):
    """Base class for all PageHarvest errors."""


class InvalidAddress(PageHarvestError, ValueError):
    """Address cannot be parsed as an absolute http(s) URL."""

    def __init__(self, address: object, reason: str = "malformed URL") -> None:
        self.address = address
        self.reason = reason
        super().__init__(f"Invalid address {address!r}: {reason}")


class FrontierEmpty(PageHarvestError, LookupError):
    """No more addresses can be taken from the frontier."""


class PageCapReached(FrontierEmpty):
    """The frontier has already handed out ``max_pages`` addresses."""


class MissingCredential(PageHarvestError):
    """Upload requested but no API credential configured."""
