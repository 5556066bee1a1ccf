"""Logging setup driven by the ``logging`` config section."""

from __future__ import annotations

import logging
from pathlib import Path

from microbit_animator.config import LoggingConfig

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE_NAME = "microbit_animator.log"
PACKAGE_LOGGER = "microbit_animator"


def configure_logging(config: LoggingConfig) -> logging.Logger:
    """Attach console and file handlers to the package logger.

    Handlers from an earlier call are replaced rather than stacked.
    """
    level = getattr(logging, str(config.level).upper(), None)
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {config.level}")

    log_dir = Path(config.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)
    stream_handler = logging.StreamHandler()
    file_handler = logging.FileHandler(log_dir / LOG_FILE_NAME, encoding="utf-8")
    for handler in (stream_handler, file_handler):
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.setLevel(level)
    return logger


__all__ = ["LOG_FILE_NAME", "LOG_FORMAT", "configure_logging"]
