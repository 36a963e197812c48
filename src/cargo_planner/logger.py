"""Logging setup for command-line use.

Library modules only create module loggers; handlers are installed here,
and only by entry points.
"""

from __future__ import annotations

import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(
    level: int = logging.INFO,
    log_file: Path | str | None = None,
) -> logging.Logger:
    """Attach console (and optionally rotating file) handlers to the package logger.

    Args:
        level: Logging level for the ``cargo_planner`` logger.
        log_file: If given, also log to this file, rotated at midnight with
            seven days of backups.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger("cargo_planner")
    logger.setLevel(level)

    formatter = logging.Formatter(LOG_FORMAT)

    # Re-configuring replaces our handlers instead of stacking duplicates
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = TimedRotatingFileHandler(
            filename=str(log_path),
            when="midnight",
            interval=1,
            backupCount=7,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
