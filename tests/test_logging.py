from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from topspenders.logging_config import (
    DIAGNOSTICS_LOGGER,
    configure_logging,
    diagnostics_logger,
    parse_level,
)


@pytest.fixture(autouse=True)
def _reset_diagnostics() -> Iterator[None]:
    yield
    diag = logging.getLogger(DIAGNOSTICS_LOGGER)
    for h in list(diag.handlers):
        diag.removeHandler(h)
        h.close()


def test_configure_logging_adds_stream_handler() -> None:
    # Ensure configuring logging doesn't raise and attaches a StreamHandler
    configure_logging(None)
    root = logging.getLogger()
    assert any(isinstance(h, logging.StreamHandler) for h in root.handlers)


def test_configure_logging_creates_log_directory(tmp_path: Path) -> None:
    log_path = tmp_path / "logs" / "run.log"
    configure_logging(log_path)
    assert log_path.parent.is_dir()


def test_configure_logging_routes_diagnostics_to_error_log(tmp_path: Path) -> None:
    error_log = tmp_path / "errors" / "skipped.log"
    configure_logging(None, "INFO", error_log)

    diagnostics_logger().error("Skipping input row: line 3: bad amount")
    logging.getLogger("topspenders.pipeline").error("unrelated failure")
    for h in diagnostics_logger().handlers:
        h.flush()

    text = error_log.read_text(encoding="utf-8")
    assert "line 3: bad amount" in text
    assert "unrelated failure" not in text


def test_configure_logging_replaces_previous_error_log(tmp_path: Path) -> None:
    configure_logging(None, error_log_path=tmp_path / "first.log")
    configure_logging(None, error_log_path=tmp_path / "second.log")
    assert len(diagnostics_logger().handlers) == 1


@pytest.mark.parametrize(
    ("value", "expected"),
    [("debug", logging.DEBUG), (" Warning ", logging.WARNING), ("15", 15), (logging.ERROR, logging.ERROR)],
)
def test_parse_level(value: str | int, expected: int) -> None:
    assert parse_level(value) == expected


def test_parse_level_rejects_unknown_names() -> None:
    with pytest.raises(ValueError):
        parse_level("LOUD")
