# page_harvest/crawler/extractor.py
"""
Page extraction for PageHarvest.

One BeautifulSoup pass over a fetched document yields:

* title   — text of the first heading matching ``title_selector`` or ``""``;
* content — paragraph text inside the main content region, whitespace
  collapsed and cut to ``content_limit`` characters (a preview, not an error);
* links   — same-site article links that match ``link_pattern``, resolved
  against the address the page was finally served from and canonicalized.
  Duplicates and the page itself are dropped before ``max_links`` is
  applied, so the cap counts distinct neighbours rather than raw anchors.
"""
from __future__ import annotations

import re
from typing import List, Pattern, Union
from urllib.parse import urljoin

from bs4 import BeautifulSoup
from bs4.element import Tag

from page_harvest.crawler.models import CrawlOutcome, Document, PageRecord
from page_harvest.crawler.urls import canonicalize
from page_harvest.errors import InvalidAddress
from page_harvest.logger import logger

__all__ = ("Extractor", "collapse_whitespace")

_WHITESPACE_RE = re.compile(r"\s+")


def collapse_whitespace(text: str) -> str:
    """Replace every whitespace run with a single space and trim the ends."""
    return _WHITESPACE_RE.sub(" ", text).strip()


class Extractor:
    """Turns a :class:`Document` into a :class:`CrawlOutcome`."""

    def __init__(
        self,
        *,
        title_selector: str = "h1",
        content_selector: str = ".mw-parser-output p",
        link_pattern: Union[str, Pattern[str]] = r"^/wiki/",
        namespace_separator: str = ":",
        max_links: int = 10,
        language: str = "en",
        content_limit: int = 250,
    ) -> None:
        if max_links < 0:
            raise ValueError("max_links must be >= 0")
        if content_limit < 1:
            raise ValueError("content_limit must be >= 1")
        self.title_selector = title_selector
        self.content_selector = content_selector
        self.link_pattern = re.compile(link_pattern) if isinstance(link_pattern, str) else link_pattern
        self.namespace_separator = namespace_separator
        self.max_links = max_links
        self.language = language
        self.content_limit = content_limit

    @classmethod
    def from_config(cls, config) -> Extractor:
        return cls(
            title_selector=config.title_selector,
            content_selector=config.content_selector,
            link_pattern=config.link_pattern,
            namespace_separator=config.namespace_separator,
            max_links=config.max_links_per_page,
            language=config.language,
            content_limit=config.content_limit,
        )

    def extract(self, document: Document) -> CrawlOutcome:
        soup = BeautifulSoup(document.body, "html.parser")
        title = self._title(soup)
        content = self._content(soup)
        links = self._links(soup, document)

        record = None
        if content:
            record = PageRecord(title=title, url=document.url, language=self.language, content=content)
        return CrawlOutcome(record=record, links=links)

    def _title(self, soup: BeautifulSoup) -> str:
        heading = soup.select_one(self.title_selector)
        return collapse_whitespace(heading.get_text()) if heading else ""

    def _content(self, soup: BeautifulSoup) -> str:
        blocks = (el.get_text().strip() for el in soup.select(self.content_selector))
        text = collapse_whitespace(" ".join(b for b in blocks if b))
        return text[: self.content_limit]

    def _links(self, soup: BeautifulSoup, document: Document) -> List[str]:
        if self.max_links == 0:
            return []
        base = document.base_url
        seen = {document.url, canonicalize(base)}
        links: List[str] = []
        for tag in soup.find_all("a", href=True):
            if not isinstance(tag, Tag):
                continue
            href = tag.get("href")
            if not isinstance(href, str):
                continue
            href = href.strip()
            if not self.link_pattern.search(href):
                continue
            if self.namespace_separator and self.namespace_separator in href:
                continue
            try:
                url = canonicalize(urljoin(base, href))
            except InvalidAddress as exc:
                logger.debug("Dropped link on %s: %s", document.url, exc)
                continue
            if url in seen:
                continue
            seen.add(url)
            links.append(url)
            if len(links) >= self.max_links:
                break
        return links
