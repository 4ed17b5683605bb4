# File: webcrawler/utils.py
"""webcrawler.utils: helpers for deriving hosts from addresses and applying exclusion rules."""

from __future__ import annotations

from typing import Collection, Iterable, List, Sequence
from urllib.parse import urlsplit

from webcrawler.logger import logger

__all__: Sequence[str] = (
    "get_host",
    "is_excluded",
    "remove_duplicates",
)


def get_host(address: str) -> str:
    """Return ``scheme://authority`` of *address*; raises ValueError when it cannot be parsed."""
    parts = urlsplit(address)
    if not parts.netloc:
        raise ValueError(f"No host in address: {address!r}")
    return f"{parts.scheme}://{parts.netloc}"


def is_excluded(address: str, excludes: Iterable[str]) -> bool:
    """True if *address* contains any of the exclusion substrings."""
    return any(part in address for part in excludes)


def remove_duplicates(urls: Collection[str]) -> List[str]:
    """Удаляет дубликаты из списка URL, сохраняя порядок."""
    unique = list(dict.fromkeys(urls))
    removed = len(urls) - len(unique)
    if removed:
        logger.debug("Removed %d duplicate URLs", removed)
    return unique
