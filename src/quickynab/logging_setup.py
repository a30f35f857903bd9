"""Centralized logging configuration for the ``quickynab`` package.

``configure_logging`` attaches a single ``StreamHandler`` to the package root
logger and is called by the CLI on every invocation. Library modules only call
``get_logger(__name__)`` and never attach handlers of their own.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

_PKG_LOGGER_NAME = "quickynab"
_HANDLER: logging.Handler | None = None


def _parse_level(level: int | str | None) -> int:
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        level = level.strip().upper()
        if level.isdigit():
            return int(level)
        numeric = getattr(logging, level, None)
        if isinstance(numeric, int):
            return numeric
    env_val = os.getenv("QUICKYNAB_LOG_LEVEL")
    if env_val:
        return _parse_level(env_val)
    return logging.WARNING


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] | None = None,
) -> None:
    """Configure the package root logger.

    Calling it again replaces the handler installed by the previous call, so
    the package logger always has exactly one handler with the latest level.

    Parameters
    ----------
    level:
        Logging level as ``int`` or level name. If ``None``, the
        ``QUICKYNAB_LOG_LEVEL`` environment variable is used when set,
        otherwise ``logging.WARNING``.
    fmt:
        Optional format string. Defaults to ``"%(levelname)s %(name)s: %(message)s"``.
    stream:
        Output stream for the handler (defaults to the current ``sys.stderr``).
    """

    global _HANDLER
    logger = logging.getLogger(_PKG_LOGGER_NAME)
    numeric_level = _parse_level(level)

    for h in list(logger.handlers):
        if isinstance(h, logging.NullHandler) or h is _HANDLER:
            logger.removeHandler(h)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(fmt or "%(levelname)s %(name)s: %(message)s"))

    logger.setLevel(numeric_level)
    logger.addHandler(handler)
    _HANDLER = handler


def get_logger(name: str) -> logging.Logger:
    """Return a logger by name, silent until the CLI configures handlers."""

    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if _HANDLER is None and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)
