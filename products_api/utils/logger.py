"""
Logging configuration
"""
import logging
import sys
from typing import Optional

from products_api.config import get_settings

settings = get_settings()

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def log_level(explicit: Optional[str] = None, debug: bool = False) -> int:
    """LOG_LEVEL when set, otherwise DEBUG in debug mode and INFO elsewhere"""
    if explicit:
        level = logging.getLevelName(explicit.upper())
        if isinstance(level, int):
            return level
    return logging.DEBUG if debug else logging.INFO


def get_logger(name: str) -> logging.Logger:
    """Logger writing to stdout, configured once per name"""
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    logger.setLevel(log_level(settings.LOG_LEVEL, settings.DEBUG))
    return logger
