"""Logging helpers (console defaults, rotating log files)."""

from __future__ import annotations

import logging

from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_file_logger(
    log_file: Path, name: str = "langwire", level: int = logging.INFO
) -> logging.Logger:
    """Configure a rotating file logger (idempotent per file)."""

    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger = logging.getLogger(name)
    logger.setLevel(level)
    marker = str(log_file)
    if not any(
        isinstance(handler, RotatingFileHandler)
        and getattr(handler, "_langwire_tag", None) == marker
        for handler in logger.handlers
    ):
        handler = RotatingFileHandler(
            log_file, maxBytes=1_000_000, backupCount=3
        )
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._langwire_tag = marker  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger


def configure_logging(
    level: str = "INFO", log_file: Optional[Path] = None
) -> logging.Logger:
    """Install console logging once and, optionally, a log file."""

    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        numeric = logging.INFO
    if not logging.getLogger().handlers:
        logging.basicConfig(
            level=numeric, format="%(levelname)s %(name)s: %(message)s"
        )
    logger = logging.getLogger("langwire")
    logger.setLevel(numeric)
    if log_file is not None:
        setup_file_logger(log_file, level=numeric)
    return logger
