# File: tests/test_frontier.py
import pytest

from page_harvest.crawler.frontier import Frontier
from page_harvest.errors import FrontierEmpty, InvalidAddress, PageCapReached

BASE = "https://wiki.test/wiki/"


def test_fifo_order():
    frontier = Frontier(max_pages=10)
    for name in "ABC":
        assert frontier.enqueue_if_new(BASE + name)
    assert [frontier.next_to_visit() for _ in range(3)] == [BASE + "A", BASE + "B", BASE + "C"]
    assert frontier.visited == (BASE + "A", BASE + "B", BASE + "C")


def test_enqueue_ignores_queued_and_visited():
    frontier = Frontier(max_pages=10)
    assert frontier.enqueue_if_new(BASE + "A")
    assert not frontier.enqueue_if_new(BASE + "A")
    assert not frontier.enqueue_if_new(BASE + "A#Section")
    assert len(frontier) == 1

    assert frontier.next_to_visit() == BASE + "A"
    assert not frontier.enqueue_if_new(BASE + "A")
    assert not frontier.has_pending()
    assert frontier.is_visited(BASE + "A#other")


def test_enqueue_canonicalizes():
    frontier = Frontier(max_pages=10)
    frontier.enqueue_if_new("HTTPS://Wiki.Test/wiki/A#top")
    assert frontier.next_to_visit() == BASE + "A"


def test_enqueue_rejects_invalid_address():
    frontier = Frontier(max_pages=10)
    with pytest.raises(InvalidAddress):
        frontier.enqueue_if_new("not a url")
    assert len(frontier) == 0


def test_empty_frontier_signals():
    frontier = Frontier(max_pages=10)
    with pytest.raises(FrontierEmpty):
        frontier.next_to_visit()


def test_cap_is_never_exceeded():
    frontier = Frontier(max_pages=3)
    for i in range(10):
        frontier.enqueue_if_new(f"{BASE}P{i}")

    for _ in range(3):
        frontier.next_to_visit()
        assert frontier.visited_count() <= 3

    assert frontier.cap_reached()
    assert frontier.has_pending()
    with pytest.raises(PageCapReached):
        frontier.next_to_visit()
    assert frontier.visited_count() == 3


def test_page_cap_reached_is_frontier_empty():
    assert issubclass(PageCapReached, FrontierEmpty)


def test_max_pages_must_be_positive():
    with pytest.raises(ValueError):
        Frontier(max_pages=0)
