# page_harvest/crawler/models.py
"""
Data models for the PageHarvest crawler.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Union

__all__ = (
    "FailureKind",
    "Document",
    "FetchFailure",
    "FetchResult",
    "PageRecord",
    "CrawlOutcome",
    "UploadSuccess",
    "UploadFailure",
    "UploadResult",
)


class FailureKind(str, Enum):
    """Why a fetch or an upload did not succeed."""

    TIMEOUT = "timeout"
    BAD_STATUS = "bad_status"
    NETWORK = "network"
    MALFORMED_RESPONSE = "malformed_response"


@dataclass(slots=True, frozen=True)
class Document:
    """Successfully retrieved page.

    ``url`` is the requested canonical address and stays the record identity;
    ``final_url`` is where redirects ended and is the base for relative links.
    """

    url: str
    body: str
    status: int = 200
    final_url: Optional[str] = None

    @property
    def base_url(self) -> str:
        return self.final_url or self.url


@dataclass(slots=True, frozen=True)
class FetchFailure:
    """A single fetch that produced no document."""

    url: str
    kind: FailureKind
    status: Optional[int] = None
    detail: str = ""


FetchResult = Union[Document, FetchFailure]


@dataclass(slots=True, frozen=True)
class PageRecord:
    """Extracted record, in the shape the sink expects."""

    title: str
    url: str
    language: str
    content: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


@dataclass(slots=True)
class CrawlOutcome:
    """Result of extracting one document: optional record plus outbound links."""

    record: Optional[PageRecord] = None
    links: List[str] = field(default_factory=list)


@dataclass(slots=True, frozen=True)
class UploadSuccess:
    """Sink acknowledgement: how many of the delivered pages were stored."""

    inserted: int
    total: int


@dataclass(slots=True, frozen=True)
class UploadFailure:
    """Batch delivery failed; ``detail`` carries the sink's response body when there is one."""

    kind: FailureKind
    status: Optional[int] = None
    detail: str = ""

    def __str__(self) -> str:
        if self.kind is FailureKind.BAD_STATUS:
            return f"sink responded with {self.status}: {self.detail}"
        return self.kind.value + (f": {self.detail}" if self.detail else "")


UploadResult = Union[UploadSuccess, UploadFailure]
