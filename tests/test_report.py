from __future__ import annotations

import io
from decimal import Decimal

import pytest

from topspenders.aggregate.build_ranking import rank_top_spenders
from topspenders.aggregate.write_report import format_amount, format_month, write_report
from topspenders.errors import SinkWriteError
from topspenders.models import UserMonthlySpending


class _BrokenSink(io.BytesIO):
    def write(self, data: bytes) -> int:  # type: ignore[override]
        raise OSError("disk full")


def _index() -> dict[int, dict[str, UserMonthlySpending]]:
    s = UserMonthlySpending(
        first_name="C", last_name="Smith, Jr", email="c@test.com",
        total_gbp=Decimal("2500.00000000000000"), transaction_count=3,
    )
    return {202401: {s.email: s}}


def test_format_month_pads_year_and_month() -> None:
    assert format_month(202401) == "2024/01"
    assert format_month(99912) == "0999/12"


def test_format_amount_uses_seven_decimals() -> None:
    assert format_amount(Decimal("2500")) == "2500.0000000"
    assert format_amount(Decimal("0.123456789")) == "0.1234568"
    assert format_amount(Decimal("-1.5")) == "-1.5000000"


def test_write_report_emits_header_and_rows() -> None:
    sink = io.BytesIO()
    written = write_report(rank_top_spenders(_index()), sink)
    assert written == 1
    assert sink.getvalue().decode("utf-8") == (
        "date,rank,amount,currency,transactions,email,firstName,lastName\n"
        '2024/01,1,2500.0000000,GBP,3,c@test.com,C,"Smith, Jr"\n'
    )


def test_write_report_header_only_for_empty_ranking() -> None:
    sink = io.BytesIO()
    assert write_report(rank_top_spenders({}), sink) == 0
    assert sink.getvalue() == b"date,rank,amount,currency,transactions,email,firstName,lastName\n"


def test_write_report_wraps_sink_errors() -> None:
    with pytest.raises(SinkWriteError, match="disk full"):
        write_report(rank_top_spenders(_index()), _BrokenSink())


def test_write_report_leaves_sink_open() -> None:
    sink = io.BytesIO()
    write_report(rank_top_spenders(_index()), sink)
    assert not sink.closed
