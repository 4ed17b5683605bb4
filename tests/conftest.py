# File: tests/conftest.py
from __future__ import annotations

import threading
import time
from collections import Counter
from typing import Dict, Iterable, List, Optional

import pytest

from webcrawler.crawler.models import ExtractionError, FetchError
from webcrawler.utils import get_host

SEED = "http://seed.test/"
B = "http://b.test/b"
C = "http://c.test/c"
D = "http://d.test/d"

#: seed → {b, c}, b → {d}, c → {d}, d → {}
DIAMOND: Dict[str, List[str]] = {SEED: [B, C], B: [D], C: [D], D: []}


class GraphDocument:
    """Document backed by an in-memory adjacency list."""

    def __init__(self, downloader: GraphDownloader, url: str) -> None:
        self.downloader = downloader
        self.url = url

    def extract_links(self) -> List[str]:
        dl = self.downloader
        dl.log("extract-start", self.url)
        try:
            if self.url in dl.broken_links:
                raise ExtractionError(f"cannot parse {self.url}")
            return list(dl.graph.get(self.url, []))
        finally:
            dl.extracted.append(self.url)
            dl.log("extract-end", self.url)


class GraphDownloader:
    """
    Fake fetch capability over a dict graph.

    Tracks every fetch, the peak number of simultaneous fetches overall and per
    host, and an ordered event log used by the level-ordering tests.
    """

    def __init__(
        self,
        graph: Dict[str, List[str]],
        failures: Optional[Dict[str, BaseException]] = None,
        broken_links: Iterable[str] = (),
        delay: float = 0.0,
    ) -> None:
        self.graph = graph
        self.failures = failures or {}
        self.broken_links = set(broken_links)
        self.delay = delay
        self.fetched: List[str] = []
        self.extracted: List[str] = []
        self.events: List[tuple[str, str]] = []
        self.max_active = 0
        self.max_active_per_host: Counter[str] = Counter()
        self._active = 0
        self._active_per_host: Counter[str] = Counter()
        self._lock = threading.Lock()

    def log(self, event: str, url: str) -> None:
        with self._lock:
            self.events.append((event, url))

    def fetch(self, url: str) -> GraphDocument:
        host = get_host(url)
        with self._lock:
            self.fetched.append(url)
            self.events.append(("fetch-start", url))
            self._active += 1
            self._active_per_host[host] += 1
            self.max_active = max(self.max_active, self._active)
            self.max_active_per_host[host] = max(
                self.max_active_per_host[host], self._active_per_host[host]
            )
        try:
            if self.delay:
                time.sleep(self.delay)
            if url in self.failures:
                raise self.failures[url]
            if url not in self.graph:
                raise FetchError(f"not found: {url}")
            return GraphDocument(self, url)
        finally:
            with self._lock:
                self._active -= 1
                self._active_per_host[host] -= 1
                self.events.append(("fetch-end", url))


@pytest.fixture()
def diamond() -> Dict[str, List[str]]:
    return {k: list(v) for k, v in DIAMOND.items()}


@pytest.fixture()
def graph_downloader(diamond) -> GraphDownloader:
    return GraphDownloader(diamond)
