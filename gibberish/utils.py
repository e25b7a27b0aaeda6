"""Logging setup for applications embedding the translator."""

from __future__ import annotations

import logging
from typing import Optional

from .configuration import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logger(logger_name: str = "gibberish", level: Optional[str] = None) -> logging.Logger:
    """Attach one stream handler to ``logger_name``; the level defaults to GIBBERISH_LOG_LEVEL."""

    logger = logging.getLogger(logger_name)
    logger.setLevel(level or get_settings().GIBBERISH_LOG_LEVEL)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger
