from __future__ import annotations

import os
import sys

from loguru import logger

PACKAGE = "damerau_distance"

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}:{function}:{line}</cyan> - "
    "<level>{message}</level>"
)

# Silent when used as a library; the CLI turns it on.
logger.disable(PACKAGE)


def configure_logging(level: str | None = None) -> None:
    """
    Route package logs to stderr (level falls back to `DLDIST_LOG_LEVEL`, then WARNING).
    """
    level = (level or os.environ.get("DLDIST_LOG_LEVEL") or "WARNING").upper()
    logger.remove()
    logger.add(sys.stderr, level=level, format=LOG_FORMAT, colorize=sys.stderr.isatty())
    logger.enable(PACKAGE)


__all__ = ["logger", "configure_logging", "LOG_FORMAT"]
