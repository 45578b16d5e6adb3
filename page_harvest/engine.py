# File: page_harvest/engine.py
"""page_harvest.engine: запуск обхода и отправка собранного пакета в приёмник."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from page_harvest.config import CrawlerConfig
from page_harvest.crawler.crawler import Crawler
from page_harvest.crawler.models import FetchFailure, PageRecord, UploadFailure, UploadResult
from page_harvest.errors import MissingCredential
from page_harvest.logger import logger
from page_harvest.uploader import BatchUploader

__all__ = ["RunReport", "start_crawl"]


@dataclass(slots=True)
class RunReport:
    """Итог одного запуска: собранные страницы, порядок обхода, ошибки и ответ приёмника."""

    pages: List[PageRecord] = field(default_factory=list)
    visited: List[str] = field(default_factory=list)
    failures: List[FetchFailure] = field(default_factory=list)
    upload: Optional[UploadResult] = None

    @property
    def ok(self) -> bool:
        return not isinstance(self.upload, UploadFailure)

    def summary(self) -> Dict[str, Any]:
        upload: Dict[str, Any] | None = None
        if isinstance(self.upload, UploadFailure):
            upload = {"ok": False, "kind": self.upload.kind.value, "status": self.upload.status}
        elif self.upload is not None:
            upload = {"ok": True, "inserted": self.upload.inserted, "total": self.upload.total}
        return {
            "pages": len(self.pages),
            "visited": len(self.visited),
            "failed": len(self.failures),
            "upload": upload,
        }


async def start_crawl(config: CrawlerConfig, *, upload: bool = True) -> RunReport:
    """Проверяет ключ API, обходит страницы и отправляет пакет одним запросом.

    Без ключа при ``upload=True`` бросает MissingCredential ещё до первого запроса.
    """
    if upload and not config.has_credential:
        raise MissingCredential("API key is not set (CRAWLER_API_KEY)")

    logger.info("=== PageHarvest crawler ===")
    async with Crawler(config) as crawler:
        pages = await crawler.crawl()
        report = RunReport(pages=pages, visited=list(crawler.visited), failures=list(crawler.failures))
        logger.info("Total pages crawled: %d", len(pages))

        if upload and config.api_key is not None:
            if crawler.session is None:
                raise RuntimeError("Session not initialized")
            uploader = BatchUploader(
                crawler.session,
                endpoint=str(config.sink_url),
                api_key=config.api_key.get_secret_value(),
                timeout=config.timeout,
            )
            report.upload = await uploader.upload(pages)

    logger.info("Run summary: %s", report.summary())
    return report
