# webcrawler/logger.py
"""Logging for webcrawler: one ``webcrawler`` logger shared by the crawl threads.

Records go to stderr, so JSON reports printed on stdout stay parseable, and
optionally to a rotating log file. Thread names are part of the format because
fetches and extractions run on separate pools.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Union

_DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(threadName)s | %(message)s"
_LOGGER_NAME: Final[str] = "webcrawler"
_MAX_BYTES: Final[int] = 5 * 1024 * 1024

_LevelT = Union[int, str]


def _handler(handler: logging.Handler, fmt: str) -> logging.Handler:
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def configure(
    *,
    level: _LevelT = "INFO",
    log_file: str | Path | None = None,
    log_format: str = _DEFAULT_FORMAT,
    replace_handlers: bool = True,
) -> logging.Logger:
    """Set *level* on the crawler logger and attach a stderr handler (plus *log_file*, if given).

    Replaced handlers are closed so a reconfigured CLI run does not leak file descriptors.
    """
    lg = logging.getLogger(_LOGGER_NAME)
    lg.setLevel(level)

    if replace_handlers:
        for old in list(lg.handlers):
            lg.removeHandler(old)
            old.close()

    lg.addHandler(_handler(logging.StreamHandler(sys.stderr), log_format))
    if log_file is not None:
        rotating = RotatingFileHandler(str(log_file), maxBytes=_MAX_BYTES, backupCount=3, encoding="utf-8")
        lg.addHandler(_handler(rotating, log_format))

    lg.propagate = False
    return lg


def init_logging(
    level: _LevelT = "INFO",
    log_file: str | Path | None = None,
    log_format: str = _DEFAULT_FORMAT,
) -> logging.Logger:
    """Used by the CLI: replace handlers and apply *level*."""
    return configure(level=level, log_file=log_file, log_format=log_format, replace_handlers=True)


logger: logging.Logger = init_logging()

__all__ = ["logger", "configure", "init_logging"]
