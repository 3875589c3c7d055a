"""
Logging for the Mapbox client.

Every module logs through the ``mapbox_client`` logger, so an embedding
application can tune or silence the library on its own. Nothing is
attached to the root logger. ``initialize_logger`` is an optional setup
for scripts and the mapbox-tiles command.
"""

import logging
from pathlib import Path
from typing import Optional


LOGGER_NAME = "mapbox_client"

CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Set once handlers are attached; later calls are no-ops
_logger_initialized = False


def get_logger() -> logging.Logger:
    return logging.getLogger(LOGGER_NAME)


def _handler(handler: logging.Handler, level: int, fmt: str) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt=DATE_FORMAT))
    return handler


def initialize_logger(log_level: str = "INFO", log_file: Optional[str] = None) -> None:
    """
    Attach a console handler, and a file handler when ``log_file`` is given,
    to the package logger.

    The console shows INFO and above; the file receives everything the
    logger level lets through. Unknown level names fall back to INFO.
    """
    global _logger_initialized

    if _logger_initialized:
        return

    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    logger = get_logger()
    logger.setLevel(level)
    logger.handlers.clear()
    logger.addHandler(_handler(logging.StreamHandler(), logging.INFO, CONSOLE_FORMAT))

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        logger.addHandler(_handler(file_handler, logging.DEBUG, FILE_FORMAT))

    _logger_initialized = True
    logger.info(f"Logger initialized with level {logging.getLevelName(level)}, file: {log_file}")


def log_debug(message: str) -> None:
    get_logger().debug(message)


def log_info(message: str) -> None:
    get_logger().info(message)


def log_warning(message: str) -> None:
    get_logger().warning(message)


def log_error(message: str) -> None:
    """Log an error message; callers still raise the error themselves."""
    get_logger().error(message)
