"""Logging helpers for crxmanifest."""

from __future__ import annotations

import logging
from pathlib import Path

ROOT_LOGGER = "crxmanifest"

CONSOLE_FORMAT = "[crxmanifest] %(levelname)s %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return `crxmanifest.<name>`, or the package logger when no name is given."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}" if name else ROOT_LOGGER)


def _handler(handler: logging.Handler, level: int, fmt: str) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def configure_logging(
    *, verbose: bool = False, log_file: Path | str | None = None
) -> logging.Logger:
    """Route package logs to stderr and, when `log_file` is given, to that file.

    Calling it again replaces the handlers installed by the previous call and
    closes any file they held open.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    logger.propagate = False

    for existing in list(logger.handlers):
        logger.removeHandler(existing)
        existing.close()

    logger.addHandler(_handler(logging.StreamHandler(), level, CONSOLE_FORMAT))
    if log_file is not None:
        file_handler = logging.FileHandler(Path(log_file), encoding="utf-8")
        logger.addHandler(_handler(file_handler, level, FILE_FORMAT))
    return logger


__all__ = ["configure_logging", "get_logger"]
