"""
Utility functions shared across the package.

Logging setup lives here: library modules only create module loggers, and
applications (the command line entry point, scripts) call setup_logging()
once to attach handlers.
"""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    level: str | int = "INFO",
    log_file: str | Path | None = None,
    fmt: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """
    Configure the ``mdsim`` logger.

    Sets up a console handler and, when ``log_file`` is given, a rotating
    file handler (1 MB per file, five backups). Calling it again replaces
    the previous handlers.

    Args:
        level: Log level name or number.
        log_file: Optional path of the log file.
        fmt: Log record format.

    Returns:
        The configured package logger.
    """
    if isinstance(level, str):
        level = level.upper()

    logger = logging.getLogger("mdsim")
    logger.setLevel(level)

    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(fmt)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file, maxBytes=1024 * 1024, backupCount=5
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging initialized at level %s", logging.getLevelName(logger.level))
    return logger
