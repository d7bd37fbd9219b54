import logging
import sys
from pathlib import Path
from typing import Optional

from .models import MoveResult, MoveStatus

LOGGER_NAME = "foldersort"
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(log_path: Optional[Path] = None, stream=None) -> logging.Logger:
    """Configure the run logger: console plus an append-mode log file.

    Calling it again replaces the previous handlers, so repeated runs in one
    process do not duplicate lines. Raises OSError if the file cannot be opened.
    """
    # open the file first so a failure leaves the current setup untouched
    file_handler = logging.FileHandler(log_path, mode="a", encoding="utf-8") if log_path else None
    handlers = [logging.StreamHandler(stream or sys.stdout)]
    if file_handler:
        handlers.append(file_handler)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.INFO)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.propagate = False
    return logger


def get_logger() -> logging.Logger:
    return logging.getLogger(LOGGER_NAME)


def log_result(logger: logging.Logger, result: MoveResult) -> None:
    if result.status is MoveStatus.FAILED:
        logger.error(result.describe())
    else:
        logger.info(result.describe())
