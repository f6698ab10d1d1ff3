"""Logging setup for the outfit engine and its scripts."""

from __future__ import annotations

import logging

from fito.config.settings import get_settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# HTTP client loggers echo every request at INFO.
_NOISY_LOGGERS = ("httpx", "httpcore", "openai")


def configure_logging() -> None:
    settings = get_settings()
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
