"""Logging utilities for the rotation_ingest package."""

from __future__ import annotations

import logging

PACKAGE_LOGGER_NAME = "rotation_ingest"


def get_logger(name: str = PACKAGE_LOGGER_NAME) -> logging.Logger:
    """Return a package logger without touching the root configuration.

    This package runs inside a logging handler, so configuring the root logger
    here would override the host application's setup. A ``NullHandler`` on the
    package logger keeps library output silent until the host opts in.
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    if not any(isinstance(h, logging.NullHandler) for h in package_logger.handlers):
        package_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)


__all__ = ["PACKAGE_LOGGER_NAME", "get_logger"]
