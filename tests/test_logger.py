# File: tests/test_logger.py
import logging

from webcrawler.logger import configure, init_logging


def test_configure_with_rotating_file(tmp_path):
    log_file = tmp_path / "crawl.log"
    lg = configure(level="DEBUG", log_file=log_file)
    try:
        assert lg.level == logging.DEBUG
        assert len(lg.handlers) == 2
        assert not lg.propagate
        lg.debug("fetched %s", "http://a.test/")
        for handler in lg.handlers:
            handler.flush()
        assert "fetched http://a.test/" in log_file.read_text(encoding="utf-8")
    finally:
        init_logging()


def test_init_logging_replaces_handlers():
    init_logging()
    lg = init_logging(level="WARNING")
    assert len(lg.handlers) == 1
    assert lg.level == logging.WARNING
    init_logging()
