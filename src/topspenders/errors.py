"""Exception hierarchy for the top spenders pipeline."""

from __future__ import annotations


class TopSpendersError(Exception):
    """Base exception for the pipeline."""


class ConfigError(TopSpendersError):
    """Invalid configuration read from the environment."""


class RowError(TopSpendersError):
    """An input row that could not be turned into a valid transaction.

    Row errors are per-row: the caller decides whether they abort the run.
    """

    def __init__(self, message: str, line: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.line = line

    def __str__(self) -> str:
        if self.line is None:
            return self.message
        return f"line {self.line}: {self.message}"


class DecodeError(RowError):
    """Wrong column count or an unparsable amount, rate or date."""


class TransactionValidationError(RowError):
    """Transaction type or currency outside the known enumeration."""


class SourceReadError(TopSpendersError):
    """The input stream failed for a reason other than exhaustion."""


class SinkWriteError(TopSpendersError):
    """The report could not be written to the output stream."""
