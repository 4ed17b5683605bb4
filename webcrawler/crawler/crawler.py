# === FILE: webcrawler/crawler/crawler.py ===
from __future__ import annotations

import time
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING, Iterable, List

from webcrawler.crawler.admission import HostAdmissionController
from webcrawler.crawler.models import Address, CrawlResult, Document, Downloader
from webcrawler.crawler.state import CrawlState
from webcrawler.logger import logger
from webcrawler.utils import get_host

if TYPE_CHECKING:
    from webcrawler.config import CrawlerConfig

__all__ = ("WebCrawler",)


class WebCrawler:
    """Breadth-first, depth-bounded crawler over two bounded thread pools with a per-host cap."""

    def __init__(
        self,
        downloader: Downloader,
        downloaders: int = 1,
        extractors: int = 1,
        per_host: int = 1,
    ) -> None:
        for name, value in (("downloaders", downloaders), ("extractors", extractors), ("per_host", per_host)):
            if not isinstance(value, int) or value < 1:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")
        self.downloader = downloader
        self.downloaders = downloaders
        self.extractors = extractors
        self.admission = HostAdmissionController(per_host)
        self._download_pool = ThreadPoolExecutor(max_workers=downloaders, thread_name_prefix="downloader")
        self._extract_pool = ThreadPoolExecutor(max_workers=extractors, thread_name_prefix="extractor")
        self._closed = False

    @classmethod
    def from_config(cls, downloader: Downloader, config: CrawlerConfig) -> WebCrawler:
        return cls(
            downloader,
            downloaders=config.downloaders,
            extractors=config.extractors,
            per_host=config.per_host,
        )

    def __enter__(self) -> WebCrawler:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        """Shut both pools down; tasks already submitted run to completion."""
        if self._closed:
            return
        self._closed = True
        self._download_pool.shutdown(wait=True)
        self._extract_pool.shutdown(wait=True)

    @property
    def closed(self) -> bool:
        return self._closed

    def crawl(self, seed: Address, depth: int = 1, excludes: Iterable[str] = frozenset()) -> CrawlResult:
        """Crawl *depth* levels starting at *seed*, skipping addresses containing any of *excludes*."""
        if self._closed:
            raise RuntimeError("crawler is closed")
        if not isinstance(seed, str) or not seed:
            raise ValueError("seed must be a non-empty string")
        if isinstance(depth, bool) or not isinstance(depth, int) or depth < 1:
            raise ValueError(f"depth must be an integer >= 1, got {depth!r}")
        excludes = frozenset(excludes)
        if not all(isinstance(part, str) for part in excludes):
            raise ValueError("excludes must contain strings only")

        logger.info("Crawl started: %s (depth=%d)", seed, depth)
        start = time.monotonic()
        state = CrawlState(depth, excludes)
        state.visited.add(seed)
        frontier: List[Address] = [seed]
        for level in range(depth):
            logger.info("Level %d: %d address(es) in frontier", level, len(frontier))
            for url in frontier:
                if state.excluded(url):
                    logger.debug("Excluded: %s", url)
                    continue
                try:
                    self._submit(self._download_pool, state, self._download, state, url, level)
                except RuntimeError as exc:
                    # let the tasks already running for this level finish first
                    state.synchronizer.await_advance()
                    raise RuntimeError("crawler closed during crawl") from exc
            state.synchronizer.await_advance()
            frontier = state.next_frontier()
            if not frontier:
                break

        result = state.result()
        logger.info(
            "Crawl finished: %d downloaded, %d failed in %.2f s",
            len(result.downloaded), len(result.errors), time.monotonic() - start,
        )
        return result

    @staticmethod
    def _submit(pool: ThreadPoolExecutor, state: CrawlState, fn, *args) -> None:
        state.synchronizer.register()
        try:
            pool.submit(fn, *args)
        except BaseException:
            state.synchronizer.arrive_and_deregister()
            raise

    def _download(self, state: CrawlState, url: Address, level: int) -> None:
        try:
            with self.admission.admit(get_host(url)):
                document = self.downloader.fetch(url)
        except (OSError, ValueError) as exc:
            logger.warning("Failed %s: %s", url, exc)
            state.record_error(url, exc)
        except Exception as exc:
            logger.exception("Unexpected error fetching %s", url)
            state.record_error(url, exc)
        else:
            state.record_download(url)
            if level + 1 < state.depth:
                self._hand_off(state, document)
        finally:
            state.synchronizer.arrive_and_deregister()

    def _hand_off(self, state: CrawlState, document: Document) -> None:
        try:
            self._submit(self._extract_pool, state, self._extract, state, document)
        except RuntimeError as exc:
            logger.warning("Extraction not scheduled: %s", exc)

    def _extract(self, state: CrawlState, document: Document) -> None:
        try:
            links = self._links(document)
            for link in links:
                state.discover(link)
        except Exception:
            logger.exception("Unexpected error while collecting links")
        finally:
            state.synchronizer.arrive_and_deregister()

    @staticmethod
    def _links(document: Document) -> List[Address]:
        try:
            return list(document.extract_links())
        except OSError as exc:
            logger.debug("Link extraction failed: %s", exc)
        except Exception:
            logger.exception("Unexpected error during link extraction")
        return []
