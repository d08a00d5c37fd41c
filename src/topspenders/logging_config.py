"""Logging setup for the CLI.

Two channels are configured:
- the console (stderr, since stdout carries the report) and an optional log
  file receive every record at the chosen level;
- the `topspenders.diagnostics` logger carries one ERROR record per skipped
  input row and can additionally be written to its own error log.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

DIAGNOSTICS_LOGGER = "topspenders.diagnostics"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def parse_level(value: str | int) -> int:
    """Return the numeric logging level for a name ("debug") or number ("10").

    Raises:
        ValueError: if `value` is not a known level.
    """
    if isinstance(value, int):
        return value
    v = value.strip().upper()
    if v.isdigit():
        return int(v)
    level = logging.getLevelName(v)
    if not isinstance(level, int):
        raise ValueError(f"unknown log level: {value!r}")
    return level


def diagnostics_logger() -> logging.Logger:
    """Logger for rows skipped under the default error policy."""
    return logging.getLogger(DIAGNOSTICS_LOGGER)


def configure_logging(
    log_path: Path | None = None,
    level: int | str = logging.INFO,
    error_log_path: Path | None = None,
) -> None:
    """Configure root logging handlers and the diagnostics error log.

    Args:
        log_path: Optional file receiving all log records.
        level: Logging level as int or level name (defaults to INFO).
        error_log_path: Optional file receiving only skipped-row diagnostics.
    """
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    for path in (log_path, error_log_path):
        if path is not None:
            path.parent.mkdir(parents=True, exist_ok=True)
    if log_path is not None:
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    logging.basicConfig(level=parse_level(level), format=LOG_FORMAT, handlers=handlers)

    diag = diagnostics_logger()
    for old in list(diag.handlers):
        diag.removeHandler(old)
        old.close()
    if error_log_path is not None:
        handler = logging.FileHandler(error_log_path, encoding="utf-8")
        handler.setLevel(logging.ERROR)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        diag.addHandler(handler)
