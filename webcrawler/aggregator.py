# File: webcrawler/aggregator.py
"""webcrawler.aggregator: сводный отчёт по результату обхода."""

from __future__ import annotations

import json
from collections import Counter
from dataclasses import asdict, dataclass, field
from typing import Dict, List

from webcrawler.crawler.models import CrawlResult
from webcrawler.utils import get_host


@dataclass(slots=True)
class CrawlReport:
    """Serializable view of a CrawlResult: sorted pages, error reasons as text, pages per host."""

    downloaded: List[str] = field(default_factory=list)
    errors: Dict[str, str] = field(default_factory=dict)
    hosts: Dict[str, int] = field(default_factory=dict)

    def json(self, *, pretty: bool = False) -> str:
        return json.dumps(asdict(self), ensure_ascii=False, indent=2 if pretty else None)


def _count_hosts(urls: List[str]) -> Dict[str, int]:
    counts: Counter[str] = Counter()
    for url in urls:
        try:
            counts[get_host(url)] += 1
        except ValueError:
            counts[url] += 1
    return dict(sorted(counts.items()))


def aggregate_result(result: CrawlResult) -> CrawlReport:
    """Собирает CrawlReport из CrawlResult."""
    downloaded = sorted(result.downloaded)
    return CrawlReport(
        downloaded=downloaded,
        errors={url: str(reason) for url, reason in sorted(result.errors.items())},
        hosts=_count_hosts(downloaded),
    )
