"""Ranking of monthly spenders.

Functions in this module turn the monthly index built by
`aggregate_monthly` into a small pandas DataFrame holding the top spenders of
every month.

Expectations:
- Input: month key -> email -> `UserMonthlySpending`
- Output: one row per ranked user with columns `month_key`, `rank`,
  `total_gbp`, `transaction_count`, `email`, `first_name`, `last_name`,
  ordered by month ascending then rank.
"""
from __future__ import annotations

import pandas as pd

from topspenders.aggregate.monthly import MonthlySpendingIndex

TOP_N = 5

RANKING_COLUMNS = [
    "month_key",
    "rank",
    "total_gbp",
    "transaction_count",
    "email",
    "first_name",
    "last_name",
]


def spending_frame(index: MonthlySpendingIndex) -> pd.DataFrame:
    """Flatten the monthly index into one row per (month, user)."""
    rows = [
        {
            "month_key": key,
            "total_gbp": s.total_gbp,
            "transaction_count": s.transaction_count,
            "email": s.email,
            "first_name": s.first_name,
            "last_name": s.last_name,
        }
        for key, users in index.items()
        for s in users.values()
    ]
    return pd.DataFrame(rows, columns=[c for c in RANKING_COLUMNS if c != "rank"])


def rank_top_spenders(index: MonthlySpendingIndex, top_n: int = TOP_N) -> pd.DataFrame:
    """Return the top `top_n` spenders of every month.

    Users are ordered by total GBP spend descending within a month; equal
    totals are ordered by email ascending.

    Args:
        index: Completed monthly index.
        top_n: Maximum number of users per month (default 5).

    Returns:
        DataFrame with `RANKING_COLUMNS`; months without spend do not appear.
    """
    df = spending_frame(index)
    if df.empty:
        return pd.DataFrame(columns=RANKING_COLUMNS)

    df = df.sort_values(
        ["month_key", "total_gbp", "email"],
        ascending=[True, False, True],
    )
    top = df.groupby("month_key", sort=False).head(top_n).copy()
    top["rank"] = top.groupby("month_key", sort=False).cumcount() + 1

    return top[RANKING_COLUMNS].reset_index(drop=True)
