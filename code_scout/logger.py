# File: code_scout/logger.py
"""code_scout.logger: the ``CodeScout`` logger shared by every module.

Audit progress and degraded-markup warnings go to stderr; stdout is kept
for the reports themselves, so ``code-scout audit --format json`` can be
piped.  The CLI calls :func:`init_logging` once per invocation with the
``--log-level``, ``--log-file`` and ``--log-format`` values.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Union

DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOGGER_NAME: Final[str] = "CodeScout"

# rotated log files: 5 MiB each, three backups
_MAX_BYTES: Final[int] = 5 * 1024 * 1024
_BACKUPS: Final[int] = 3

_LevelT = Union[int, str]


def _handlers(log_file: str | Path | None, fmt: str) -> list[logging.Handler]:
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        handlers.append(
            RotatingFileHandler(
                filename=str(log_file),
                maxBytes=_MAX_BYTES,
                backupCount=_BACKUPS,
                encoding="utf-8",
            )
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
    """Set level and handlers of the ``CodeScout`` logger and return it.

    With ``replace_handlers`` the previous handlers are detached and closed
    first, otherwise the new ones are added next to them.
    """
    lg = logging.getLogger(LOGGER_NAME)
    lg.setLevel(level)

    if replace_handlers:
        for old in list(lg.handlers):
            lg.removeHandler(old)
            old.close()

    for handler in _handlers(log_file, log_format):
        lg.addHandler(handler)

    # the root logger must not print audit messages a second time
    lg.propagate = False
    return lg


def init_logging(
    level: _LevelT = "INFO",
    log_file: str | Path | None = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    return configure(level=level, log_file=log_file, log_format=log_format, replace_handlers=True)


logger: logging.Logger = init_logging()

__all__ = ["DEFAULT_FORMAT", "LOGGER_NAME", "logger", "configure", "init_logging"]
