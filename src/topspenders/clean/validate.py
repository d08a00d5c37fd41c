"""Validation utilities for decoded transactions.

This module checks a `RawTransaction` against the closed `TransactionType`
and `Currency` enumerations using the Pydantic `Transaction` model. Cross-field
consistency (matching currencies, amount sign, date ranges) is not checked.
"""
from __future__ import annotations

from pydantic import ValidationError

from topspenders.errors import TransactionValidationError
from topspenders.models import RawTransaction, Transaction, summarize_errors


def validate_transaction(raw: RawTransaction, line: int | None = None) -> Transaction:
    """Validate a decoded record and return the typed `Transaction`.

    Args:
        raw: Record produced by `decode_record`.
        line: Optional input line number attached to any error.

    Raises:
        TransactionValidationError: if the transaction type or either currency
            is not a known value.
    """
    try:
        return Transaction.model_validate(raw.model_dump())
    except ValidationError as e:
        raise TransactionValidationError(summarize_errors(e), line) from e
