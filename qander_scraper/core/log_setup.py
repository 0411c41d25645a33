"""Logging setup for command-line runs."""

from __future__ import annotations

import logging
import sys

LOGGER_NAME = "qander_scraper"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class _FlushStreamHandler(logging.StreamHandler):
    def emit(self, record: logging.LogRecord) -> None:
        super().emit(record)
        self.flush()


def configure_logging(verbose: bool = False) -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.propagate = False
    logger.handlers = []
    handler = _FlushStreamHandler(stream=sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    return logger


__all__ = ["LOGGER_NAME", "LOG_FORMAT", "configure_logging"]
