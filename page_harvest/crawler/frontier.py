# page_harvest/crawler/frontier.py
"""
Frontier and visited set for a single breadth-first crawl run.
"""
from __future__ import annotations

from collections import deque
from typing import Deque, Dict, Tuple

from page_harvest.crawler.urls import canonicalize
from page_harvest.errors import FrontierEmpty, PageCapReached

__all__ = ("Frontier",)


class Frontier:
    """FIFO queue of canonical addresses plus the set already handed out for fetching.

    The frontier is the only place that decides whether an address is new.
    ``visited_count()`` never exceeds ``max_pages``: once the cap is reached
    :meth:`next_to_visit` refuses to hand out more addresses even if some are
    still queued.
    """

    def __init__(self, max_pages: int) -> None:
        if max_pages < 1:
            raise ValueError("max_pages must be >= 1")
        self.max_pages = max_pages
        self._queue: Deque[str] = deque()
        self._queued: set[str] = set()
        # dict keeps visit order
        self._visited: Dict[str, None] = {}

    def __len__(self) -> int:
        return len(self._queue)

    def __repr__(self) -> str:
        return f"Frontier(queued={len(self._queue)}, visited={len(self._visited)}, max_pages={self.max_pages})"

    @property
    def visited(self) -> Tuple[str, ...]:
        """Visited addresses in the order they were handed out."""
        return tuple(self._visited)

    def visited_count(self) -> int:
        return len(self._visited)

    def has_pending(self) -> bool:
        return bool(self._queue)

    def cap_reached(self) -> bool:
        return len(self._visited) >= self.max_pages

    def is_visited(self, addr: str) -> bool:
        return canonicalize(addr) in self._visited

    def enqueue_if_new(self, addr: str) -> bool:
        """Canonicalize *addr* and append it unless already visited or queued.

        Returns True if the address was appended. Raises InvalidAddress for
        malformed input.
        """
        url = canonicalize(addr)
        if url in self._visited or url in self._queued:
            return False
        self._queue.append(url)
        self._queued.add(url)
        return True

    def next_to_visit(self) -> str:
        """Pop the head of the queue, mark it visited and return it."""
        if self.cap_reached():
            raise PageCapReached(f"page cap of {self.max_pages} reached")
        while self._queue:
            url = self._queue.popleft()
            self._queued.discard(url)
            if url in self._visited:
                continue
            self._visited[url] = None
            return url
        raise FrontierEmpty("frontier is exhausted")
