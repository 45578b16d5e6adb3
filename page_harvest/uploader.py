# page_harvest/uploader.py
"""
Batch delivery to the sink: one POST with the whole batch, one attempt.
"""
from __future__ import annotations

import asyncio
from typing import Optional, Sequence

from aiohttp import ClientError, ClientSession, ClientTimeout
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from page_harvest.crawler.models import (
    FailureKind,
    PageRecord,
    UploadFailure,
    UploadResult,
    UploadSuccess,
)
from page_harvest.logger import logger

__all__ = ("BatchUploader", "UploadAck", "API_KEY_HEADER")

API_KEY_HEADER = "X-API-Key"


class UploadAck(BaseModel):
    """Acknowledgement body returned by the sink; counts must be JSON integers."""
    model_config = ConfigDict(strict=True)

    inserted: int = Field(..., ge=0)
    total: int = Field(..., ge=0)


class BatchUploader:
    """Sends a batch of :class:`PageRecord` to the sink endpoint."""

    def __init__(self, session: ClientSession, endpoint: str, api_key: str, timeout: float) -> None:
        self.session = session
        self.endpoint = endpoint
        self.api_key = api_key
        self.timeout = timeout

    async def upload(self, batch: Sequence[PageRecord]) -> Optional[UploadResult]:
        """
        Deliver *batch* in a single request.

        Returns None without touching the network when the batch is empty,
        UploadSuccess with the sink's counts, or UploadFailure.
        """
        if not batch:
            logger.info("Nothing to upload")
            return None

        payload = {"pages": [record.to_dict() for record in batch]}
        logger.info("Sending %d pages to %s", len(batch), self.endpoint)
        try:
            async with self.session.post(
                self.endpoint,
                json=payload,
                headers={API_KEY_HEADER: self.api_key},
                timeout=ClientTimeout(total=self.timeout),
            ) as resp:
                text = await resp.text(errors="replace")
                if not 200 <= resp.status < 300:
                    logger.error("Sink responded with %s: %s", resp.status, text)
                    return UploadFailure(FailureKind.BAD_STATUS, status=resp.status, detail=text)
                try:
                    ack = UploadAck.model_validate_json(text)
                except ValidationError as exc:
                    logger.error("Malformed acknowledgement from sink: %s", exc)
                    return UploadFailure(FailureKind.MALFORMED_RESPONSE, status=resp.status, detail=text)
        except asyncio.TimeoutError:
            logger.error("Timeout sending batch: no response within %.1fs", self.timeout)
            return UploadFailure(FailureKind.TIMEOUT, detail=f"no response within {self.timeout}s")
        except ClientError as exc:
            logger.error("Error sending batch: %s", exc)
            return UploadFailure(FailureKind.NETWORK, detail=str(exc) or type(exc).__name__)

        logger.info("Success! Inserted %d/%d pages", ack.inserted, ack.total)
        return UploadSuccess(inserted=ack.inserted, total=ack.total)
