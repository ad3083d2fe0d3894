"""
NetPerfCompare - Logging Configuration

Console logging goes to stderr so that JSON written to stdout stays
parseable. An optional rotating file in the log directory keeps the
full debug trail of a run.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional


CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(message)s"
FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LOG_FILE_NAME = "compare.log"
LOG_FILE_MAX_BYTES = 5 * 1024 * 1024
LOG_FILE_BACKUPS = 3

# Packages whose level follows the requested level
APP_PACKAGES = (
    "src.aggregators",
    "src.cache",
    "src.calculators",
    "src.models",
    "src.utils",
    "src.views",
)


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    log_dir: Optional[Path] = Path("data/logs")
) -> logging.Logger:
    """
    Configure the root logger for a pipeline run.

    Args:
        level: Console and package level
        log_file: File name inside log_dir (default: compare.log)
        log_dir: Directory for the rotating log file; None logs to the console only

    Returns:
        Root logger instance
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(min(level, logging.DEBUG) if log_dir is not None else level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt=DATE_FORMAT))
    root_logger.addHandler(console_handler)

    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_dir / (log_file or LOG_FILE_NAME),
            maxBytes=LOG_FILE_MAX_BYTES,
            backupCount=LOG_FILE_BACKUPS,
            encoding="utf-8"
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
        root_logger.addHandler(file_handler)

    configure_module_loggers(logging.DEBUG if log_dir is not None else level)
    return root_logger


def configure_module_loggers(level: int = logging.INFO) -> None:
    """Set the level of every application package logger."""
    for package in APP_PACKAGES:
        logging.getLogger(package).setLevel(level)
