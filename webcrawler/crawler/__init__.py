"""Concurrency core of webcrawler: pools, per-host admission and level synchronization."""

from webcrawler.crawler.admission import HostAdmissionController
from webcrawler.crawler.crawler import WebCrawler
from webcrawler.crawler.link_extractor import HtmlDocument
from webcrawler.crawler.models import (
    CrawlResult,
    Document,
    Downloader,
    ExtractionError,
    FetchError,
)
from webcrawler.crawler.synchronizer import LevelSynchronizer

__all__ = [
    "CrawlResult",
    "Document",
    "Downloader",
    "ExtractionError",
    "FetchError",
    "HostAdmissionController",
    "HtmlDocument",
    "LevelSynchronizer",
    "WebCrawler",
]
