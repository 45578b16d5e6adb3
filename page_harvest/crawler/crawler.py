# === FILE: page_harvest/crawler/crawler.py ===
from __future__ import annotations

import asyncio
import time
from typing import List, Optional

from aiohttp import ClientSession

from page_harvest.config import CrawlerConfig
from page_harvest.crawler.extractor import Extractor
from page_harvest.crawler.fetcher import Fetcher
from page_harvest.crawler.frontier import Frontier
from page_harvest.crawler.models import Document, FetchFailure, PageRecord
from page_harvest.errors import FrontierEmpty, InvalidAddress
from page_harvest.logger import logger

__all__ = ("Crawler",)


class Crawler:
    """Последовательный BFS-краулер: один запрос за раз, пауза между запросами, лимит страниц.

    The crawler owns the frontier and the batch for the duration of
    :meth:`crawl`. Used as an async context manager it opens its own HTTP
    session; tests may inject a ready ``fetcher`` instead.
    """

    def __init__(
        self,
        config: CrawlerConfig,
        fetcher: Optional[Fetcher] = None,
        extractor: Optional[Extractor] = None,
    ) -> None:
        self.config = config
        self.fetcher = fetcher
        self.extractor = extractor or Extractor.from_config(config)
        self.session: Optional[ClientSession] = None
        self.frontier: Optional[Frontier] = None
        self.visited: List[str] = []
        self.failures: List[FetchFailure] = []

    async def __aenter__(self) -> Crawler:
        if self.fetcher is None:
            self.session = ClientSession(headers={"User-Agent": self.config.user_agent})
            self.fetcher = Fetcher(self.session)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    async def crawl(self) -> List[PageRecord]:
        if self.fetcher is None:
            raise RuntimeError("Session not initialized")

        seed = str(self.config.seed_url)
        logger.info("Start URL: %s", seed)
        logger.info("Max pages: %d", self.config.max_pages)
        start = time.monotonic()

        frontier = self.frontier = Frontier(self.config.max_pages)
        self.visited = []
        self.failures = []
        batch: List[PageRecord] = []

        try:
            frontier.enqueue_if_new(seed)
        except InvalidAddress as exc:
            logger.error("Seed dropped: %s", exc)
            return batch

        while frontier.has_pending() and not frontier.cap_reached():
            try:
                url = frontier.next_to_visit()
            except FrontierEmpty:
                break
            if url in self.visited:
                continue
            self.visited.append(url)

            result = await self.fetcher.fetch(url, self.config.timeout)
            if isinstance(result, FetchFailure):
                self.failures.append(result)
            else:
                self._absorb(result, frontier, batch)

            if frontier.has_pending() and not frontier.cap_reached() and self.config.delay > 0:
                await asyncio.sleep(self.config.delay)

        duration = time.monotonic() - start
        logger.info(
            "Finished: %d pages gathered, %d visited, %d failed in %.2f s",
            len(batch), len(self.visited), len(self.failures), duration,
        )
        return batch

    def _absorb(self, document: Document, frontier: Frontier, batch: List[PageRecord]) -> None:
        outcome = self.extractor.extract(document)
        if outcome.record is not None:
            batch.append(outcome.record)
            logger.info("Crawled: %s", document.url)
        else:
            logger.info("Crawled: %s (no content)", document.url)

        for link in outcome.links:
            try:
                frontier.enqueue_if_new(link)
            except InvalidAddress as exc:
                logger.debug("Link dropped: %s", exc)
