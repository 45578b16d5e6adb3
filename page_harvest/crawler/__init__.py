"""page_harvest.crawler: canonicalization, frontier, fetching, extraction and the crawl loop."""

from page_harvest.crawler.crawler import Crawler
from page_harvest.crawler.extractor import Extractor
from page_harvest.crawler.fetcher import Fetcher
from page_harvest.crawler.frontier import Frontier
from page_harvest.crawler.urls import canonicalize

__all__ = ["Crawler", "Extractor", "Fetcher", "Frontier", "canonicalize"]
