"""Logging helpers shared across the package."""

from __future__ import annotations

import logging

PACKAGE_LOGGER_NAME = "reactive_collection"

logging.getLogger(PACKAGE_LOGGER_NAME).addHandler(logging.NullHandler())


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the package logger, or the child logger called *name*.

    Names already rooted at the package (``__name__`` of a package module)
    are used as-is.
    """

    if not name:
        return logging.getLogger(PACKAGE_LOGGER_NAME)
    if name == PACKAGE_LOGGER_NAME or name.startswith(PACKAGE_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{PACKAGE_LOGGER_NAME}.{name}")
