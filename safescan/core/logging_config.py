"""
Centralized logging configuration for the SafeScan application.
"""
import logging
import os
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Create a formatter with a consistent format
FORMATTER = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)


def _level_from_env(default: int = logging.INFO) -> int:
    name = os.getenv("SAFESCAN_LOG_LEVEL", "").strip().upper()
    if not name:
        return default
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else default


def get_logger(name: str) -> logging.Logger:
    """
    Get a configured logger instance.

    The level comes from SAFESCAN_LOG_LEVEL when set, INFO otherwise.

    Args:
        name: The name of the logger (typically __name__)

    Returns:
        A configured Logger instance
    """
    logger = logging.getLogger(name)

    # Only add handler if not already configured
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(FORMATTER)
        logger.addHandler(handler)
        logger.setLevel(_level_from_env())

    return logger


def setup_logging(level: int = logging.INFO) -> None:
    """
    Setup the root logging configuration for the runners (API, desktop scanner).

    Args:
        level: The logging level (default: INFO)
    """
    logging.basicConfig(
        level=_level_from_env(level),
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)]
    )
