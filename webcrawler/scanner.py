"""
Модуль-обёртка для запуска обхода из CLI.
"""
from typing import Optional

from webcrawler.config import CrawlerConfig
from webcrawler.crawler.crawler import WebCrawler
from webcrawler.crawler.fetcher import HttpDownloader
from webcrawler.crawler.models import CrawlResult, Downloader


def run_crawl(cfg: CrawlerConfig, seed: str, downloader: Optional[Downloader] = None) -> CrawlResult:
    """
    Создаёт краулер по конфигу, выполняет один обход и закрывает пулы.

    Parameters
    ----------
    cfg : CrawlerConfig
        Размеры пулов, глубина и исключения.
    seed : str
        Стартовый адрес.
    downloader : Downloader, optional
        Источник документов; по умолчанию HttpDownloader из конфига.
    """
    if downloader is None:
        downloader = HttpDownloader.from_config(cfg)
    with WebCrawler.from_config(downloader, cfg) as crawler:
        return crawler.crawl(seed, cfg.depth, cfg.excludes)


__all__ = ["run_crawl"]
