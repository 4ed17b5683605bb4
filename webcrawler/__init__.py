# webcrawler/__init__.py
"""
webcrawler package initializer.
Defines package version and exposes the crawler; the CLI lives in webcrawler.cli.
"""
__version__ = "0.1.0"

from webcrawler.crawler import CrawlResult, WebCrawler  # noqa: E402

__all__ = ["__version__", "CrawlResult", "WebCrawler"]
