# File: tests/conftest.py
import socket
from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable, Iterable

import pytest
from aiohttp import web

from page_harvest.config import CrawlerConfig


def build_wiki_page(title: str = "", paragraphs: Iterable[str] = (), links: Iterable[str] = ()) -> str:
    """Minimal article markup: heading, main content region with paragraphs and anchors."""
    heading = f"<h1>{title}</h1>" if title else ""
    paras = "".join(f"<p>{p}</p>" for p in paragraphs)
    anchors = "".join(f'<a href="{href}">{href}</a>' for href in links)
    return (
        "<html><head><title>ignored</title></head><body>"
        f'{heading}<div class="mw-parser-output">{paras}<div class="nav">{anchors}</div></div>'
        "</body></html>"
    )


@pytest.fixture()
def wiki_page() -> Callable[..., str]:
    """Return the article markup builder."""
    return build_wiki_page


@pytest.fixture()
def basic_config() -> CrawlerConfig:
    """
    Return a basic valid CrawlerConfig for crawler tests: no delay, short timeout.
    """
    return CrawlerConfig(
        seed_url="https://wiki.test/wiki/A",
        max_pages=10,
        delay=0,
        timeout=2.0,
        user_agent="TestAgent/1.0",
        api_key="test-key",
    )


@pytest.fixture()
def unused_tcp_port() -> int:
    """Free TCP port on the loopback interface."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


@pytest.fixture()
def serve(unused_tcp_port: int):
    """
    Return an async context manager that serves an aiohttp app on a free port
    and yields its base URL.
    """

    @asynccontextmanager
    async def _serve(app: web.Application) -> AsyncIterator[str]:
        runner = web.AppRunner(app)
        await runner.setup()
        site = web.TCPSite(runner, "127.0.0.1", unused_tcp_port)
        await site.start()
        try:
            yield f"http://127.0.0.1:{unused_tcp_port}"
        finally:
            await runner.cleanup()

    return _serve
