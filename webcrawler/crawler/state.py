# webcrawler/crawler/state.py
"""
Shared per-crawl state mutated concurrently by fetch and extraction tasks.
"""
from __future__ import annotations

import threading
from typing import Dict, FrozenSet, Generic, Hashable, Iterable, List, TypeVar

from webcrawler.crawler.models import Address, CrawlResult
from webcrawler.crawler.synchronizer import LevelSynchronizer
from webcrawler.utils import is_excluded

T = TypeVar("T", bound=Hashable)


class ConcurrentSet(Generic[T]):
    """Insertion-ordered set whose check-then-insert is a single atomic step."""

    def __init__(self, items: Iterable[T] = ()) -> None:
        self._items: Dict[T, None] = dict.fromkeys(items)
        self._lock = threading.Lock()

    def add(self, item: T) -> bool:
        """Insert *item*; True if it was absent."""
        with self._lock:
            if item in self._items:
                return False
            self._items[item] = None
            return True

    def drain(self) -> List[T]:
        """Return all items and empty the set."""
        with self._lock:
            items = list(self._items)
            self._items.clear()
            return items

    def snapshot(self) -> List[T]:
        with self._lock:
            return list(self._items)

    def __contains__(self, item: object) -> bool:
        with self._lock:
            return item in self._items

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)


class CrawlState:
    """Everything one ``crawl()`` call shares between its tasks; discarded after the result is taken."""

    def __init__(self, depth: int, excludes: FrozenSet[str]) -> None:
        self.depth = depth
        self.excludes = excludes
        self.synchronizer = LevelSynchronizer()
        self.visited: ConcurrentSet[Address] = ConcurrentSet()
        self.downloaded: ConcurrentSet[Address] = ConcurrentSet()
        self.discovered: ConcurrentSet[Address] = ConcurrentSet()
        self._errors: Dict[Address, BaseException] = {}
        self._errors_lock = threading.Lock()

    def excluded(self, url: Address) -> bool:
        return is_excluded(url, self.excludes)

    def discover(self, url: Address) -> bool:
        """Admit *url* to the next frontier unless excluded or already visited."""
        if self.excluded(url) or not self.visited.add(url):
            return False
        self.discovered.add(url)
        return True

    def record_download(self, url: Address) -> None:
        self.downloaded.add(url)

    def record_error(self, url: Address, reason: BaseException) -> None:
        with self._errors_lock:
            self._errors.setdefault(url, reason)

    def next_frontier(self) -> List[Address]:
        return self.discovered.drain()

    def result(self) -> CrawlResult:
        with self._errors_lock:
            errors = dict(self._errors)
        return CrawlResult(downloaded=tuple(self.downloaded.snapshot()), errors=errors)
