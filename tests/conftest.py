from __future__ import annotations

import csv
import io
from datetime import datetime
from typing import Any

from topspenders.models import DATE_FORMAT

HEADER = [
    "First name", "Last name", "Email", "Description", "Merchant code",
    "Amount", "From Currency", "To Currency", "Rate", "Date",
]


def tx_row(
    name: str,
    tx_type: str = "CARD SPEND",
    amount: Any = "100",
    from_currency: str = "GBP",
    to_currency: str = "GBP",
    rate: Any = "1",
    date: datetime = datetime(2024, 1, 10, 12, 0),
) -> list[str]:
    """Build a CSV row for a user whose first/last name is `name`."""
    email = f"{name.lower()}@test.com"
    return [
        name, name, email, tx_type, "5013", str(amount),
        from_currency, to_currency, str(rate), date.strftime(DATE_FORMAT),
    ]


def encode_csv(rows: list[list[str]]) -> io.BytesIO:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(HEADER)
    writer.writerows(rows)
    return io.BytesIO(buf.getvalue().encode("utf-8"))


def decode_report(data: bytes) -> list[dict[str, str]]:
    return list(csv.DictReader(io.StringIO(data.decode("utf-8"))))
