"""Decoding of a single CSV row into a `RawTransaction`.

Column order is fixed and positional:
First name, Last name, Email, Description, Merchant code, Amount,
From Currency, To Currency, Rate, Date
"""

from __future__ import annotations

from collections.abc import Sequence

from pydantic import ValidationError

from topspenders.errors import DecodeError
from topspenders.models import RawTransaction, summarize_errors

COLUMNS = (
    "first_name",
    "last_name",
    "email",
    "transaction_type",
    "merchant_code",
    "amount",
    "from_currency",
    "to_currency",
    "rate",
    "date",
)


def decode_record(record: Sequence[str], line: int | None = None) -> RawTransaction:
    """Decode one CSV row into a `RawTransaction`.

    Args:
        record: Row fields in input order. Fields past the tenth are ignored.
        line: Optional input line number attached to any error.

    Returns:
        The decoded record with amount, rate and date parsed.

    Raises:
        DecodeError: if the row has fewer than 10 fields, or the amount, rate
            or date cannot be parsed.
    """
    if len(record) < len(COLUMNS):
        raise DecodeError(
            f"invalid number of columns: {len(record)} < {len(COLUMNS)}", line
        )

    try:
        return RawTransaction.model_validate(dict(zip(COLUMNS, record)))
    except ValidationError as e:
        raise DecodeError(summarize_errors(e), line) from e
