"""
Link extraction utilities for webcrawler documents.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Union
from urllib.parse import urldefrag, urljoin, urlparse

from bs4 import BeautifulSoup
from bs4.element import Tag

from webcrawler.crawler.models import ExtractionError
from webcrawler.utils import remove_duplicates

_SKIP_PREFIXES = ("mailto:", "javascript:", "tel:", "data:")


@dataclass(slots=True)
class HtmlDocument:
    """Holds the URL and content of a fetched page (text or binary)."""

    url: str
    content: Union[str, bytes]

    def extract_links(self) -> List[str]:
        return extract_links(self.url, self.content)


def extract_links(page_url: str, content: Union[str, bytes]) -> List[str]:
    """
    Extract absolute HTTP(S) links from HTML *content* fetched from *page_url*.

    Relative hrefs are resolved against the page URL and fragments are dropped.
    Links to other hosts are kept: the crawler decides what to visit.
    """
    try:
        soup = BeautifulSoup(content, "html.parser")
    except Exception as exc:
        raise ExtractionError(f"Cannot parse {page_url}: {exc}") from exc

    links: List[str] = []
    for tag in soup.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href_val = tag.get("href")
        if not isinstance(href_val, str):
            continue
        raw = href_val.strip()
        if not raw or raw.startswith(_SKIP_PREFIXES):
            continue
        try:
            absolute, _ = urldefrag(urljoin(page_url, raw))
            scheme = urlparse(absolute).scheme
        except ValueError:
            # e.g. a malformed IPv6 literal in href
            continue
        if scheme in ("http", "https"):
            links.append(absolute)
    return remove_duplicates(links)
