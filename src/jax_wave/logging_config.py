"""
Logging configuration for scripts.

Library modules only create loggers (`logging.getLogger(__name__)`) and
never attach handlers. Scripts and examples call `setup_logging` to route
the `jax_wave` namespace to the console and, optionally, a file.
"""

import logging
import sys
from typing import Optional

LOGGER_NAME = "jax_wave"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _remove_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure the 'jax_wave' logger.

    Repeated calls replace the handlers of the previous call; replaced file
    handlers are closed.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO)
        log_file: Optional path of a log file, overwritten on each call

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    _remove_handlers(logger)

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S")
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug("Logging to %s", log_file or "stdout")
    return logger
