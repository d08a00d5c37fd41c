"""Serialization of the ranking as the CSV report.

Output columns: date, rank, amount, currency, transactions, email,
firstName, lastName. Amounts are fixed-point with 7 fractional digits.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import BinaryIO

import pandas as pd

from topspenders.errors import SinkWriteError

log = logging.getLogger(__name__)

AMOUNT_DECIMALS = 7
REPORT_CURRENCY = "GBP"
REPORT_HEADER = [
    "date",
    "rank",
    "amount",
    "currency",
    "transactions",
    "email",
    "firstName",
    "lastName",
]


def format_month(key: int) -> str:
    """Format a month key as YYYY/MM, e.g. 202407 -> '2024/07'."""
    return f"{key // 100:04d}/{key % 100:02d}"


def format_amount(amount: Decimal) -> str:
    return f"{amount:.{AMOUNT_DECIMALS}f}"


def report_frame(ranking: pd.DataFrame) -> pd.DataFrame:
    """Map a ranking DataFrame onto the report columns and formats."""
    return pd.DataFrame(
        {
            "date": ranking["month_key"].map(format_month),
            "rank": ranking["rank"].astype(int),
            "amount": ranking["total_gbp"].map(format_amount),
            "currency": REPORT_CURRENCY,
            "transactions": ranking["transaction_count"].astype(int),
            "email": ranking["email"],
            "firstName": ranking["first_name"],
            "lastName": ranking["last_name"],
        },
        columns=REPORT_HEADER,
    )


def write_report(ranking: pd.DataFrame, sink: BinaryIO) -> int:
    """Write the ranking as CSV (with a header row) to a byte stream.

    The sink is not closed. Anything written before a failure stays written.

    Args:
        ranking: Output of `rank_top_spenders`.
        sink: Writable binary stream.

    Returns:
        Number of data rows written.

    Raises:
        SinkWriteError: if writing to the sink fails.
    """
    report = report_frame(ranking)
    # At most TOP_N rows per month.
    payload = report.to_csv(index=False, lineterminator="\n").encode("utf-8")
    try:
        sink.write(payload)
        sink.flush()
    except (OSError, ValueError) as e:
        raise SinkWriteError(f"failed to write report: {e}") from e

    log.info("Report written: %d rows", len(report))
    return len(report)
