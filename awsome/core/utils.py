from __future__ import annotations

import logging
import os

from awsome.core.paths.global_paths import LOG_FILE

logger = logging.getLogger("awsome")

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging() -> None:
    """Send package logs to the log file, never to the terminal.

    The level comes from ``AWSOME_LOG_LEVEL`` and defaults to WARNING.
    """
    level_name = os.getenv("AWSOME_LOG_LEVEL", "WARNING").upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.WARNING

    logger.setLevel(level)
    logger.propagate = False
    log_path = os.path.abspath(LOG_FILE.path)
    if any(
        isinstance(existing, logging.FileHandler) and existing.baseFilename == log_path
        for existing in logger.handlers
    ):
        return

    try:
        LOG_FILE.path.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_path, encoding="utf-8")
    except OSError:
        handler = logging.NullHandler()
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    logger.addHandler(handler)
