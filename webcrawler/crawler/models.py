# webcrawler/crawler/models.py
"""
Data models and capability protocols for the webcrawler crawler.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Protocol, Sequence, runtime_checkable

Address = str


class FetchError(OSError):
    """Raised by a downloader when an address cannot be retrieved."""


class ExtractionError(OSError):
    """Raised by a document when its links cannot be enumerated."""


@runtime_checkable
class Document(Protocol):
    """A fetched page; the crawler only ever asks it for outbound links."""

    def extract_links(self) -> Sequence[Address]:
        ...


@runtime_checkable
class Downloader(Protocol):
    """Fetch capability: turns an address into a :class:`Document` or raises."""

    def fetch(self, url: Address) -> Document:
        ...


@dataclass(frozen=True, slots=True)
class CrawlResult:
    """Snapshot of one crawl: downloaded addresses and per-address fetch failures."""

    downloaded: tuple[Address, ...] = ()
    errors: Mapping[Address, BaseException] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "downloaded", tuple(self.downloaded))
        object.__setattr__(self, "errors", MappingProxyType(dict(self.errors)))
