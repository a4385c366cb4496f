"""Logger hierarchy for obdlint.

Library modules log under ``obdlint.<area>`` (``obdlint.rules``,
``obdlint.coverage`` ...). Nothing is emitted until `configure_logging` is
called, which the CLI does once per invocation; the service leaves handler
setup to uvicorn.
"""

from __future__ import annotations

import logging
from pathlib import Path

ROOT_LOGGER = "obdlint"
CONSOLE_FORMAT = "[obdlint] %(levelname)s %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(area: str | None = None) -> logging.Logger:
    """Logger for one area of the package, or the package root."""
    return logging.getLogger(f"{ROOT_LOGGER}.{area}" if area else ROOT_LOGGER)


def _drop_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def _handler(handler: logging.Handler, level: int, fmt: str) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Route obdlint records to stderr and, when given, to ``log_file``.

    Calling this again replaces the previous handlers, so a process that runs
    several commands logs each record once.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = get_logger()
    logger.setLevel(level)
    logger.propagate = False
    _drop_handlers(logger)

    logger.addHandler(_handler(logging.StreamHandler(), level, CONSOLE_FORMAT))
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.addHandler(
            _handler(logging.FileHandler(log_file, encoding="utf-8"), logging.DEBUG, FILE_FORMAT)
        )
    return logger


__all__ = ["CONSOLE_FORMAT", "FILE_FORMAT", "ROOT_LOGGER", "configure_logging", "get_logger"]
