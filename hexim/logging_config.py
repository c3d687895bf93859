"""
Logging Configuration
Sets up the ``hexim`` logger namespace.
"""
import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: int = logging.WARNING, log_file: Optional[str] = None) -> None:
    """
    Configures the logger for the 'hexim' namespace.

    The console handler writes to stderr and stays at ``level`` (WARNING by
    default) so nothing lands on the raw-mode screen during a session. The
    optional file handler records everything down to DEBUG.

    Args:
        level: Console logging level (e.g. logging.WARNING, logging.DEBUG)
        log_file: Optional path to save logs to a file.
    """
    logger = logging.getLogger("hexim")
    logger.setLevel(logging.DEBUG if log_file else level)
    logger.propagate = False

    # Avoid duplicate handlers when called more than once (tests, re-entry).
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S")

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging initialized.")
