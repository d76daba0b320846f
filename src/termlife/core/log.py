"""Diagnostic file logging."""

import logging
from pathlib import Path
from typing import Union

LOG_FORMAT = "[%(asctime)s.%(msecs)03d] [%(levelname)-7s] [%(filename)s - %(funcName)s(): %(lineno)d]: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
PACKAGE_LOGGER = "termlife"


def configure_logging(level: Union[int, str], path: Union[str, Path]) -> logging.Handler:
    """Attach an append-mode file handler to the package logger.

    Args:
        level: Threshold as a logging level number or name (e.g. "INFO")
        path: Log file, created if missing

    Returns:
        The attached handler, so callers can detach it again

    Raises:
        ValueError: If the level name is unknown
    """
    if isinstance(level, str):
        numeric = logging.getLevelName(level.upper())
        if not isinstance(numeric, int):
            raise ValueError(f"Unknown log level: {level}")
        level = numeric

    handler = logging.FileHandler(path, mode="a", encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    handler.setLevel(level)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)
    package_logger.addHandler(handler)
    return handler


def remove_logging(handler: logging.Handler) -> None:
    """Detach and close a handler returned by configure_logging."""
    logging.getLogger(PACKAGE_LOGGER).removeHandler(handler)
    handler.close()
