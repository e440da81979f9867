"""Console + daily file logging for ingestion and retrieval."""

import logging
import sys
from datetime import datetime

from .config import LOGS_DIR

LOGGER_NAME = "curation"
CONSOLE_FORMAT = "  %(message)s"
PARALLEL_CONSOLE_FORMAT = "  [%(threadName)s] %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)-8s %(threadName)s %(message)s"

_logger = None


def _console_handler(logger: logging.Logger) -> logging.Handler | None:
    for handler in logger.handlers:
        if isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler):
            return handler
    return None


def get_logger() -> logging.Logger:
    """The shared "curation" logger; handlers are attached on first use."""
    global _logger
    if _logger is not None:
        return _logger

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    if not logger.handlers:
        console = logging.StreamHandler(sys.stdout)
        console.setLevel(logging.INFO)
        console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        logger.addHandler(console)

        LOGS_DIR.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(
            LOGS_DIR / f"{LOGGER_NAME}_{datetime.now():%Y%m%d}.log", encoding="utf-8"
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%H:%M:%S"))
        logger.addHandler(file_handler)

    _logger = logger
    return _logger


def set_verbose(verbose: bool = True):
    """Console at DEBUG (True) or INFO (False); the file always gets DEBUG."""
    console = _console_handler(get_logger())
    if console is not None:
        console.setLevel(logging.DEBUG if verbose else logging.INFO)


def set_parallel(parallel: bool = True):
    """Prefix console lines with the worker thread name while topics run concurrently.

    Worker threads are named after their topic (see IngestionJob.run), so
    interleaved lines stay attributable.
    """
    console = _console_handler(get_logger())
    if console is not None:
        console.setFormatter(logging.Formatter(PARALLEL_CONSOLE_FORMAT if parallel else CONSOLE_FORMAT))


def log(msg: str):
    """INFO-level shorthand."""
    get_logger().info(msg)
