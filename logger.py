"""Logging setup for the console entry point.

Library modules only call ``logging.getLogger(LOGGER_NAME)``; handlers are
installed by the application through :func:`setup_logging`.
"""

import logging
import sys

LOGGER_NAME = "date_picker"

_handler: logging.Handler | None = None


def setup_logging(level: int = logging.INFO, stream=None) -> logging.Logger:
    """Attach one stdout handler to the date picker logger and set its level."""
    global _handler
    log = logging.getLogger(LOGGER_NAME)
    if _handler is None:
        _handler = logging.StreamHandler(stream or sys.stdout)
        _handler.setFormatter(logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        ))
        log.addHandler(_handler)
    log.setLevel(level)
    return log
