# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Structured JSON logger for releasemeta.

Decoding and verification results are meant to be consumed by other tools
(update checkers, launchers, CI jobs), so every log line is a single JSON
object instead of free text. Nothing in the package calls print().

How this works:
  - The standard `logging` module does the routing. JsonFormatter turns each
    record into one JSON line, merging whatever the caller passed in `extra`.
  - `get_logger` is the only factory. It attaches a stdout handler and,
    optionally, a file handler, and stops propagation to the root logger.
  - `set_package_log_level` retunes every already-created releasemeta logger,
    which is how the CLI's --log-level reaches module-level loggers created
    at import time.

A line looks like:
  {"ts": "2026-...", "level": "WARNING", "module": "releasemeta.release.decoder",
   "msg": "Embedded payload is malformed", "tag": "v1.12.2d"}
"""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

PACKAGE_LOGGER_PREFIX = "releasemeta"

# Attributes every LogRecord carries; anything else came in through `extra`.
_STANDARD_RECORD_ATTRS: frozenset[str] = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "relativeCreated",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "pathname",
        "filename",
        "module",
        "levelno",
        "levelname",
        "processName",
        "process",
        "threadName",
        "thread",
        "message",
        "msecs",
        "taskName",
    }
)

_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class JsonFormatter(logging.Formatter):
    """
    Formats log records as single-line JSON objects.

    Mandatory keys:
      ts     ISO 8601 UTC timestamp
      level  log level name
      module logger name
      msg    the formatted message

    Extra context from `extra=` is merged in as-is. When the call carried
    exc_info, the formatted traceback is stored under `exc`.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, object] = {
            "ts": datetime.now(tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "module": record.name,
            "msg": record.getMessage(),
        }

        for key, value in record.__dict__.items():
            if key not in _STANDARD_RECORD_ATTRS and not key.startswith("_"):
                entry[key] = value

        if record.exc_info:
            entry["exc"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


def _resolve_log_level(level_name: str) -> int:
    """Turn a level name string into the corresponding logging constant."""
    upper = level_name.upper()
    if upper not in _VALID_LOG_LEVELS:
        raise ValueError(
            f"Invalid log level '{level_name}'. Must be one of: {', '.join(sorted(_VALID_LOG_LEVELS))}"
        )
    return getattr(logging, upper)


def get_logger(
    name: str,
    log_level: str = "INFO",
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """
    Create (or fetch) a structured JSON logger.

    Every module calls this once at import time and keeps the result in a
    module-level `_logger`.

    Args:
        name: Logger name, normally `__name__` of the caller.
        log_level: One of DEBUG, INFO, WARNING, ERROR, CRITICAL.
        log_file: Optional log file. When given, lines go to stdout and the file.

    Returns:
        A logging.Logger writing JSON lines.

    Raises:
        ValueError: If log_level is not a known level name.
    """
    logger = logging.getLogger(name)
    level = _resolve_log_level(log_level)
    logger.setLevel(level)

    # Called repeatedly for the same name in tests and by the CLI.
    if logger.handlers:
        for handler in logger.handlers:
            handler.setLevel(level)
        return logger

    formatter = JsonFormatter()

    stdout_handler = logging.StreamHandler(stream=sys.stdout)
    stdout_handler.setLevel(level)
    stdout_handler.setFormatter(formatter)
    logger.addHandler(stdout_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.propagate = False

    return logger


def set_package_log_level(log_level: str) -> None:
    """Apply a level to every releasemeta logger created so far."""
    level = _resolve_log_level(log_level)
    for name in list(logging.Logger.manager.loggerDict):
        if name != PACKAGE_LOGGER_PREFIX and not name.startswith(PACKAGE_LOGGER_PREFIX + "."):
            continue
        logger = logging.getLogger(name)
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)
