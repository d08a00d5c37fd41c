"""Pydantic models used for decoding, validation and aggregation.

`RawTransaction` is the shape of a decoded CSV row: numbers and dates are
typed but the enumerated columns are still free-form strings. `Transaction`
is the validated record with closed enumerations, and `UserMonthlySpending`
is the running total kept for one user within one month.
"""

from __future__ import annotations

import re
from datetime import datetime
from decimal import Context, Decimal
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

DATE_FORMAT = "%d/%m/%Y %H:%M"
DATE_RE = re.compile(r"^\d{2}/\d{2}/\d{4} \d{2}:\d{2}$")
NUMBER_RE = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")

# Decoded amounts and rates stay below 10**MAX_MAGNITUDE; MONEY_CONTEXT holds
# their products and running totals with 7+ fractional digits intact.
MAX_MAGNITUDE = 100
MONEY_CONTEXT = Context(prec=4 * MAX_MAGNITUDE)


class TransactionType(str, Enum):
    """Transaction types as they appear in the Description column."""
    CARD_SPEND = "CARD SPEND"
    BUY_GOLD = "BUY GOLD"
    SELL_GOLD = "SELL GOLD"


class Currency(str, Enum):
    """Supported currency codes; GGM is one gram of gold."""
    GBP = "GBP"
    GGM = "GGM"


class RawTransaction(BaseModel):
    """Schema for a decoded row (before enumeration checks)."""
    model_config = ConfigDict(extra="forbid", frozen=True)
    first_name: str
    last_name: str
    email: str
    transaction_type: str
    merchant_code: str
    amount: Decimal
    from_currency: str
    to_currency: str
    rate: Decimal
    date: datetime

    @field_validator("amount", "rate", mode="before")
    @classmethod
    def parse_number(cls, value: Any) -> Any:
        if isinstance(value, str) and not NUMBER_RE.match(value):
            raise ValueError(f"expected a decimal number, got {value!r}")
        return value

    @field_validator("amount", "rate")
    @classmethod
    def check_magnitude(cls, value: Decimal) -> Decimal:
        if value.is_finite() and value.adjusted() > MAX_MAGNITUDE:
            raise ValueError(f"magnitude above 1e{MAX_MAGNITUDE}")
        return value

    @field_validator("date", mode="before")
    @classmethod
    def parse_date(cls, value: Any) -> Any:
        if isinstance(value, str):
            if not DATE_RE.match(value):
                raise ValueError(f"expected DD/MM/YYYY HH:MM, got {value!r}")
            return datetime.strptime(value, DATE_FORMAT)
        return value


class Transaction(BaseModel):
    """Schema for a validated transaction.

    Attributes:
        first_name: Customer first name.
        last_name: Customer last name.
        email: Customer email, used as the aggregation key.
        transaction_type: One of `TransactionType`.
        merchant_code: Opaque merchant category code.
        amount: Magnitude expressed in `from_currency`.
        from_currency: Currency the amount is denominated in.
        to_currency: Currency the amount was converted into.
        rate: GBP price of one GGM, whichever side GGM is on.
        date: Transaction timestamp (naive).
    """
    model_config = ConfigDict(extra="forbid", frozen=True)
    first_name: str
    last_name: str
    email: str
    transaction_type: TransactionType
    merchant_code: str
    amount: Decimal
    from_currency: Currency
    to_currency: Currency
    rate: Decimal
    date: datetime


class UserMonthlySpending(BaseModel):
    """Running card spend for one user within one month."""
    model_config = ConfigDict(extra="forbid")
    first_name: str
    last_name: str
    email: str
    total_gbp: Decimal = Decimal(0)
    transaction_count: int = Field(0, ge=0)

    def add(self, amount_gbp: Decimal) -> None:
        self.total_gbp = MONEY_CONTEXT.add(self.total_gbp, amount_gbp)
        self.transaction_count += 1


def summarize_errors(exc: ValidationError) -> str:
    """Collapse a Pydantic `ValidationError` into one line per failing field."""
    parts = []
    for err in exc.errors():
        field = ".".join(str(loc) for loc in err["loc"]) or "record"
        parts.append(f"{field}: {err['msg']} (got {err.get('input')!r})")
    return "; ".join(parts)
