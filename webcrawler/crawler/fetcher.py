# webcrawler/crawler/fetcher.py
"""
HTTP fetch capability: one aiohttp request per call with retry/backoff and timeout.
"""
from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Sequence

from aiohttp import ClientError, ClientSession, ClientTimeout

from webcrawler.crawler.link_extractor import HtmlDocument
from webcrawler.crawler.models import FetchError
from webcrawler.logger import logger

if TYPE_CHECKING:
    from webcrawler.config import CrawlerConfig

RETRY_STATUS: Sequence[int] = tuple(range(500, 600)) + (429,)


class HttpDownloader:
    """Blocking downloader for worker threads; each call runs on its own event loop."""

    def __init__(
        self,
        timeout: float = 10.0,
        user_agent: str = "WebCrawler/1.0",
        retry_times: int = 0,
        retry_status: Sequence[int] = RETRY_STATUS,
    ) -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self.retry_times = retry_times
        self._retry_status = retry_status

    @classmethod
    def from_config(cls, config: CrawlerConfig) -> HttpDownloader:
        return cls(timeout=config.timeout, user_agent=config.user_agent, retry_times=config.retry_times)

    def fetch(self, url: str) -> HtmlDocument:
        """
        Fetch *url* and return its document.

        Raises FetchError on timeout, connection failure or a non-2xx status.
        """
        return asyncio.run(self._fetch(url))

    async def _fetch(self, url: str) -> HtmlDocument:
        async with ClientSession(
            timeout=ClientTimeout(total=self.timeout),
            headers={"User-Agent": self.user_agent},
        ) as session:
            attempts = 0
            while True:
                try:
                    async with session.get(url, raise_for_status=False) as resp:
                        if resp.status in self._retry_status and attempts < self.retry_times:
                            raise ClientError(f"retryable status {resp.status}")
                        if not 200 <= resp.status < 300:
                            raise FetchError(f"HTTP {resp.status}")
                        ctype = resp.headers.get("Content-Type", "").lower()
                        if "html" in ctype:
                            try:
                                text = await resp.text()
                            except UnicodeDecodeError as exc:
                                raise FetchError(f"cannot decode content: {exc.reason}") from exc
                            return HtmlDocument(url, text)
                        return HtmlDocument(url, "")
                except asyncio.TimeoutError as exc:
                    # no retry on timeout
                    raise FetchError("timeout") from exc
                except ClientError as exc:
                    attempts += 1
                    if attempts > self.retry_times:
                        raise FetchError(str(exc) or type(exc).__name__) from exc
                    # exponential backoff, cap at 60s
                    backoff = min(2 ** (attempts - 1) * 0.1, 60)
                    logger.debug("Retry %d/%d for %s after %.2f s", attempts, self.retry_times, url, backoff)
                    await asyncio.sleep(backoff)
