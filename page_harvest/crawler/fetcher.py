# page_harvest/crawler/fetcher.py
"""
Fetcher module: a single time-bounded HTTP GET per call, no retries.
"""
from __future__ import annotations

import asyncio

from aiohttp import ClientError, ClientSession, ClientTimeout

from page_harvest.crawler.models import Document, FailureKind, FetchFailure, FetchResult
from page_harvest.logger import logger

__all__ = ("Fetcher",)


class Fetcher:
    """Retrieves documents through a shared session.

    The session is expected to carry the client ``User-Agent`` header; the
    fetcher only adds the per-request deadline.
    """

    def __init__(self, session: ClientSession) -> None:
        self.session = session

    async def fetch(self, url: str, timeout: float) -> FetchResult:
        """
        Fetch *url* within *timeout* seconds.

        Returns Document on a 2xx response, FetchFailure otherwise. Errors are
        reported in the result, never raised.
        """
        try:
            async with self.session.get(url, timeout=ClientTimeout(total=timeout)) as resp:
                if not 200 <= resp.status < 300:
                    logger.warning("Failed to fetch %s: HTTP %s %s", url, resp.status, resp.reason or "")
                    return FetchFailure(url, FailureKind.BAD_STATUS, status=resp.status)
                body = await resp.text(errors="replace")
                return Document(url=url, body=body, status=resp.status, final_url=str(resp.url))
        except asyncio.TimeoutError:
            # ServerTimeoutError is also a ClientError, so this branch goes first
            logger.warning("Timeout fetching %s: no response within %.1fs", url, timeout)
            return FetchFailure(url, FailureKind.TIMEOUT, detail=f"no response within {timeout}s")
        except ClientError as exc:
            logger.warning("Error fetching %s: %s", url, exc)
            return FetchFailure(url, FailureKind.NETWORK, detail=str(exc) or type(exc).__name__)
