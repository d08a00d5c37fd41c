"""Configuration helpers.

`PipelineConfig` is the options value passed to `top_spenders`. `Settings`
and `get_settings` read defaults for the CLI from the environment (a `.env`
file in the project root is loaded when present).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from topspenders.errors import ConfigError
from topspenders.logging_config import parse_level

# Explicitly load .env from project root
PROJECT_ROOT = Path(__file__).resolve().parents[2]
load_dotenv(PROJECT_ROOT / ".env")

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class PipelineConfig:
    """Options for a single pipeline run.

    Attributes:
        stop_on_error: Abort on the first bad row and write nothing, instead
            of logging bad rows and ranking the valid ones.
    """
    stop_on_error: bool = False


@dataclass(frozen=True)
class Settings:
    """Container for CLI defaults read from the environment.

    Attributes:
        stop_on_error: Default for `--stop-on-error`.
        log_level: Numeric logging level.
        log_path: Optional log file.
        error_log_path: Optional file for skipped-row diagnostics.
    """
    stop_on_error: bool
    log_level: int
    log_path: Path | None
    error_log_path: Path | None = None


def _parse_bool(name: str, value: str) -> bool:
    v = value.strip().lower()
    if v in _TRUE:
        return True
    if v in _FALSE:
        return False
    raise ConfigError(f"{name} must be a boolean (true/false), got {value!r}")


def _parse_level(name: str, value: str) -> int:
    try:
        return parse_level(value)
    except ValueError:
        raise ConfigError(f"{name} must be a logging level name, got {value!r}") from None


def get_settings() -> Settings:
    """Read environment variables and return a frozen `Settings` object.

    Raises:
        ConfigError: if a variable holds an invalid value.
    """
    stop_on_error = _parse_bool(
        "TOPSPENDERS_STOP_ON_ERROR", os.getenv("TOPSPENDERS_STOP_ON_ERROR", "")
    )
    log_level = _parse_level(
        "TOPSPENDERS_LOG_LEVEL", os.getenv("TOPSPENDERS_LOG_LEVEL", "INFO")
    )
    log_path_raw = os.getenv("TOPSPENDERS_LOG_PATH", "").strip()
    error_log_raw = os.getenv("TOPSPENDERS_ERROR_LOG_PATH", "").strip()

    return Settings(
        stop_on_error=stop_on_error,
        log_level=log_level,
        log_path=Path(log_path_raw) if log_path_raw else None,
        error_log_path=Path(error_log_raw) if error_log_raw else None,
    )
