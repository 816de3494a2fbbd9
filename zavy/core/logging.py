"""Logging setup shared by the app, scripts and tests."""

from __future__ import annotations

import logging
import os
import sys

from concurrent_log_handler import ConcurrentRotatingFileHandler

from .config import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d | %(funcName)s] - %(message)s"
LOG_MAX_BYTES = 10 * 1024 * 1024
LOG_BACKUP_COUNT = 10
ROOT_LOGGER = "zavy"


def configure_logging(level: str | None = None) -> logging.Logger:
    """
    Configura o logger raiz do pacote (console + arquivo rotativo opcional).
    Chamadas repetidas apenas ajustam o nivel.
    """
    settings = get_settings()
    level_str = (level or settings.log_level or "INFO").upper()
    numeric_level = getattr(logging, level_str, None)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(numeric_level)
    if logger.handlers:
        return logger

    formatter = logging.Formatter(LOG_FORMAT)
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if settings.log_file:
        directory = os.path.dirname(os.path.abspath(settings.log_file))
        os.makedirs(directory, exist_ok=True)
        file_handler = ConcurrentRotatingFileHandler(
            filename=settings.log_file,
            mode="a",
            maxBytes=LOG_MAX_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
    return logger
