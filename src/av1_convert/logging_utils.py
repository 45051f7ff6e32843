"""Logging setup for the av1-convert command."""

import logging
from typing import Final

DEFAULT_LOGGER_NAME: Final = "av1_convert"
LOG_FORMAT: Final = "%(asctime)s %(levelname)s %(message)s"


def setup_logging(*, verbose: bool = False, quiet: bool = False) -> logging.Logger:
    """Configure the package logger according to verbosity flags.

    Safe to call more than once; the stderr handler is only added the
    first time.
    """
    level = logging.INFO
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG

    logger = logging.getLogger(DEFAULT_LOGGER_NAME)
    logger.setLevel(level)

    if logger.handlers:
        for handler in logger.handlers:
            handler.setLevel(level)
        return logger

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)

    return logger
