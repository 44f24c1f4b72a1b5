"""Logging configuration helpers for the investment admin service."""
from __future__ import annotations

import logging
import os

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def _coerce_level(level: str | int) -> int:
    """Translate a user provided level into a numeric log level."""

    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level}")
    return resolved


def configure_logging(level: str | int | None = None, *, force: bool = False) -> None:
    """Configure the root logger for console output.

    The level defaults to the ``INVESTMENT_ADMIN_LOG_LEVEL`` environment variable
    and falls back to INFO when neither is usable. ``force`` mirrors
    :func:`logging.basicConfig` and replaces handlers that are already installed.
    """

    requested = level if level is not None else os.getenv("INVESTMENT_ADMIN_LOG_LEVEL", "INFO")
    try:
        resolved_level = _coerce_level(requested)
    except ValueError:
        resolved_level = logging.INFO

    root_logger = logging.getLogger()
    if root_logger.handlers and not force:
        root_logger.setLevel(resolved_level)
        return

    logging.basicConfig(level=resolved_level, format=LOG_FORMAT, force=force)


__all__ = ["configure_logging"]
