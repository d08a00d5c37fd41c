"""Monthly accumulation of card spend per user.

Only `CARD SPEND` transactions count. Amounts are converted to GBP using the
per-transaction rate and added to the `UserMonthlySpending` for the
transaction's (month, email) pair.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime
from decimal import Decimal

from topspenders.errors import RowError
from topspenders.ingest.stream import StreamItem
from topspenders.logging_config import diagnostics_logger
from topspenders.models import (
    MONEY_CONTEXT,
    Currency,
    Transaction,
    TransactionType,
    UserMonthlySpending,
)

log = logging.getLogger(__name__)
diag = diagnostics_logger()

# month key (e.g. 202407) -> email -> spending
MonthlySpendingIndex = dict[int, dict[str, UserMonthlySpending]]


def month_key(date: datetime) -> int:
    """Return a sortable integer key for a date, e.g. 2024/07 -> 202407."""
    return date.year * 100 + date.month


def gbp_amount(tx: Transaction) -> Decimal:
    """Return the GBP value of a transaction.

    GGM amounts are multiplied by the rate, which is always the GBP price of
    one GGM regardless of direction.
    """
    if tx.from_currency is Currency.GGM:
        return MONEY_CONTEXT.multiply(tx.amount, tx.rate)
    if tx.from_currency is Currency.GBP:
        return tx.amount
    raise ValueError(f"unsupported currency: {tx.from_currency!r}")


def add_transaction(index: MonthlySpendingIndex, tx: Transaction) -> None:
    """Add one card spend transaction to the index."""
    month = index.setdefault(month_key(tx.date), {})
    spending = month.get(tx.email)
    if spending is None:
        spending = UserMonthlySpending(
            first_name=tx.first_name,
            last_name=tx.last_name,
            email=tx.email,
        )
        month[tx.email] = spending
    spending.add(gbp_amount(tx))


def aggregate_monthly(
    items: Iterable[StreamItem],
    stop_on_error: bool = False,
) -> MonthlySpendingIndex:
    """Accumulate card spend per month and user from a transaction stream.

    Args:
        items: Stream results in input order.
        stop_on_error: Raise the first row error instead of logging it.

    Returns:
        The completed monthly index.

    Raises:
        RowError: the first bad row, when `stop_on_error` is set.
        TopSpendersError: any non-row error (e.g. a source read failure),
            regardless of `stop_on_error`.
    """
    index: MonthlySpendingIndex = {}
    counted = 0
    skipped = 0

    for item in items:
        if item.error is not None:
            if stop_on_error or not isinstance(item.error, RowError):
                raise item.error
            diag.error("Skipping input row: %s", item.error)
            skipped += 1
            continue

        tx = item.transaction
        if tx is None:
            raise TypeError(f"stream item for line {item.line} has no transaction")
        if tx.transaction_type is not TransactionType.CARD_SPEND:
            continue

        add_transaction(index, tx)
        counted += 1

    log.info(
        "Aggregated %d card spend transactions across %d months (skipped=%d)",
        counted,
        len(index),
        skipped,
    )
    return index
