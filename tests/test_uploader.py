# File: tests/test_uploader.py
from __future__ import annotations

import asyncio
from typing import Any

import pytest
from aiohttp import ClientSession, web

from page_harvest.crawler.models import FailureKind, PageRecord, UploadFailure, UploadSuccess
from page_harvest.uploader import API_KEY_HEADER, BatchUploader

RECORDS = [
    PageRecord(title="A", url="https://wiki.test/wiki/A", language="en", content="alpha"),
    PageRecord(title="B", url="https://wiki.test/wiki/B", language="en", content="beta"),
]


def sink_app(calls: list[dict[str, Any]], *, status: int = 200, body: Any = None, sleep: float = 0) -> web.Application:
    """Sink stub that records every request and answers with *status* / *body*."""
    app = web.Application()

    async def handle(request):
        calls.append({"json": await request.json(), "key": request.headers.get(API_KEY_HEADER)})
        if sleep:
            await asyncio.sleep(sleep)
        if isinstance(body, str):
            return web.Response(status=status, text=body)
        return web.json_response(body, status=status)

    app.router.add_post("/api/batch-pages", handle)
    return app


async def upload(base: str, batch, *, timeout: float = 2.0):
    async with ClientSession() as session:
        uploader = BatchUploader(session, f"{base}/api/batch-pages", "secret", timeout)
        return await uploader.upload(batch)


@pytest.mark.asyncio()
async def test_upload_success_reports_counts(serve):
    calls: list[dict[str, Any]] = []
    async with serve(sink_app(calls, body={"inserted": 7, "total": 10})) as base:
        result = await upload(base, RECORDS)

    assert result == UploadSuccess(inserted=7, total=10)
    assert len(calls) == 1
    assert calls[0]["key"] == "secret"
    assert calls[0]["json"] == {"pages": [r.to_dict() for r in RECORDS]}


@pytest.mark.asyncio()
async def test_empty_batch_makes_no_request(serve):
    calls: list[dict[str, Any]] = []
    async with serve(sink_app(calls, body={"inserted": 0, "total": 0})) as base:
        result = await upload(base, [])

    assert result is None
    assert calls == []


@pytest.mark.asyncio()
async def test_bad_status_carries_body(serve):
    calls: list[dict[str, Any]] = []
    async with serve(sink_app(calls, status=401, body="invalid API key")) as base:
        result = await upload(base, RECORDS)

    assert isinstance(result, UploadFailure)
    assert result.kind is FailureKind.BAD_STATUS
    assert result.status == 401
    assert result.detail == "invalid API key"
    assert len(calls) == 1


@pytest.mark.asyncio()
@pytest.mark.parametrize(
    "body",
    [
        "not json",
        {"inserted": 3},
        {"inserted": "many", "total": 10},
        {"inserted": -1, "total": 2},
        [1, 2],
        {"inserted": "7", "total": True},
        {"inserted": 7.0, "total": "10"},
        {"inserted": 7, "total": 10.5},
        {"inserted": False, "total": 0},
    ],
)
async def test_malformed_acknowledgement(serve, body):
    async with serve(sink_app([], body=body)) as base:
        result = await upload(base, RECORDS)

    assert isinstance(result, UploadFailure)
    assert result.kind is FailureKind.MALFORMED_RESPONSE


@pytest.mark.asyncio()
async def test_upload_timeout_is_not_retried(serve):
    calls: list[dict[str, Any]] = []
    async with serve(sink_app(calls, body={"inserted": 2, "total": 2}, sleep=0.5)) as base:
        result = await upload(base, RECORDS, timeout=0.1)

    assert isinstance(result, UploadFailure)
    assert result.kind is FailureKind.TIMEOUT
    assert len(calls) == 1


@pytest.mark.asyncio()
async def test_upload_network_error(unused_tcp_port):
    result = await upload(f"http://127.0.0.1:{unused_tcp_port}", RECORDS)

    assert isinstance(result, UploadFailure)
    assert result.kind is FailureKind.NETWORK
