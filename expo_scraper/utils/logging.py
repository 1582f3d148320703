"""Module loggers for the scraper.

Console output follows ``LOG_LEVEL``; the rotating file under
``<OUTPUT_DIR>/logs`` always records DEBUG so per-element skips can be traced
after a run.  Every logger shares the same file handler.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from expo_scraper.config import settings

_FORMATTER = logging.Formatter(
    "%(asctime)s | %(name)-28s | %(levelname)-7s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
LOG_FILE_NAME = "scraper.log"
_MAX_BYTES = 10 * 1024 * 1024
_BACKUP_COUNT = 5

_shared_file_handler: RotatingFileHandler | None = None


def log_file_path() -> Path:
    return Path(settings.output_dir) / "logs" / LOG_FILE_NAME


def _file_handler() -> RotatingFileHandler:
    global _shared_file_handler
    if _shared_file_handler is None:
        path = log_file_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(path, maxBytes=_MAX_BYTES, backupCount=_BACKUP_COUNT, encoding="utf-8")
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(_FORMATTER)
        _shared_file_handler = handler
    return _shared_file_handler


def _console_handler() -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(settings.log_level.upper())
    handler.setFormatter(_FORMATTER)
    return handler


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    logger.addHandler(_console_handler())
    if settings.log_to_file:
        logger.addHandler(_file_handler())
    # Handlers filter by level; the logger itself passes everything through
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    return logger
