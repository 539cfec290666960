"""
Logging configuration for applications built on yapBSP.

The library itself only creates module loggers; call ``setup_logging``
from an application or an interactive session to see their output.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    logger_name: str = "yapbsp",
) -> logging.Logger:
    """
    Configure the yapBSP logger hierarchy.

    Args:
        level: logging level for the package logger
        log_file: optional path of a file that receives a copy of the records
        logger_name: root of the logger hierarchy to configure

    Returns:
        the configured logger
    """
    logger = logging.getLogger(logger_name)
    logger.setLevel(level)
    logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = RotatingFileHandler(
            filename=Path(log_file),
            maxBytes=5 * 1024 * 1024,
            backupCount=3,
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a logger below the yapBSP hierarchy."""
    if not name.startswith("yapbsp"):
        name = f"yapbsp.{name}"
    return logging.getLogger(name)
