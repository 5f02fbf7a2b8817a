# === FILE: web_archive/logger.py ===
"""Logger shared by the whole package.

Everything logs through the ``"WebArchive"`` logger; the CLI reconfigures it
from its ``--log-*`` options via :func:`init_logging`.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Union

DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOGGER_NAME: Final[str] = "WebArchive"

# rotation for --log-file
_MAX_BYTES: Final[int] = 5 * 1024 * 1024
_BACKUPS: Final[int] = 3

_LevelT = Union[int, str]


def _handlers(log_file: str | Path | None, fmt: str) -> list[logging.Handler]:
    # stderr keeps stdout free for the archived document
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        handlers.append(
            RotatingFileHandler(str(log_file), maxBytes=_MAX_BYTES, backupCount=_BACKUPS, encoding="utf-8")
        )
    formatter = logging.Formatter(fmt)
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def configure(
    *,
    level: _LevelT = "INFO",
    log_file: str | Path | None = None,
    log_format: str = DEFAULT_FORMAT,
    replace_handlers: bool = True,
) -> logging.Logger:
    """Set level and handlers of the package logger and return it.

    With ``replace_handlers`` the previous handlers are closed and dropped,
    otherwise the new ones are added next to them.
    """
    archive_logger = logging.getLogger(LOGGER_NAME)
    archive_logger.setLevel(level)

    if replace_handlers:
        for handler in list(archive_logger.handlers):
            archive_logger.removeHandler(handler)
            handler.close()

    for handler in _handlers(log_file, log_format):
        archive_logger.addHandler(handler)
    archive_logger.propagate = False
    return archive_logger


def init_logging(
    level: _LevelT = "WARNING",
    log_file: str | Path | None = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    return configure(level=level, log_file=log_file, log_format=log_format, replace_handlers=True)


logger: logging.Logger = init_logging()

__all__ = ["logger", "configure", "init_logging", "DEFAULT_FORMAT", "LOGGER_NAME"]
