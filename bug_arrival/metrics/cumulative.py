"""
Cumulative bug counts over a bounded range of month or week buckets.

Both bucketers work the same way: give every report a bucket key, keep the
keys that fall inside the range, count per key, fill empty buckets with 0
and take the running sum. They differ only in how the key and the range
boundaries are computed.

The result is a DataFrame with one row per bucket:

    bucket      1-based position in the range
    label       "2015-01" for months, "2003-10-01 to 2003-10-07" for weeks
    start, end  first and last calendar day of the bucket
    count       bugs created in the bucket
    cumulative  running total up to and including the bucket
"""

from datetime import date, timedelta
from typing import Iterable, List, Tuple, Union

import pandas as pd

COLUMNS = ["bucket", "label", "start", "end", "count", "cumulative"]

MonthLike = Union[pd.Period, Tuple[int, int]]


def cumulative_histogram(keys: pd.Series, buckets: pd.Index) -> pd.DataFrame:
    """Count keys per bucket over the full ordered range, then accumulate."""
    keys = keys[keys.isin(buckets)]
    counts = keys.value_counts().reindex(buckets, fill_value=0).astype(int)

    return pd.DataFrame({
        "bucket": range(1, len(buckets) + 1),
        "count": counts.to_numpy(),
        "cumulative": counts.cumsum().to_numpy(),
    })


def to_month(start_month: MonthLike) -> pd.Period:
    if isinstance(start_month, pd.Period):
        return start_month.asfreq("M")
    year, month = start_month
    return pd.Period(year=year, month=month, freq="M")


def month_range(start_month: MonthLike, months: int) -> pd.PeriodIndex:
    if months < 1:
        raise ValueError(f"months must be >= 1, got {months}")
    return pd.period_range(start=to_month(start_month), periods=months, freq="M")


def monthly_cumulative(dates: Iterable[date], start_month: MonthLike, months: int) -> pd.DataFrame:
    buckets = month_range(start_month, months)

    # Day of month is ignored: the key is the (year, month) period.
    # Periods rather than timestamps so any year 1-9999 is fine.
    keys = pd.Series([pd.Period(year=d.year, month=d.month, freq="M") for d in dates], dtype="period[M]")
    table = cumulative_histogram(keys, buckets)

    table["label"] = [str(p) for p in buckets]
    table["start"] = [date(p.year, p.month, 1) for p in buckets]
    table["end"] = [date(p.year, p.month, p.days_in_month) for p in buckets]
    return table[COLUMNS]


def week_end(start_date: date, weeks: int) -> date:
    """Last day of the last week."""
    if weeks < 1:
        raise ValueError(f"weeks must be >= 1, got {weeks}")
    return start_date + timedelta(days=(weeks - 1) * 7 + 6)


def weekly_cumulative(dates: Iterable[date], start_date: date, weeks: int) -> pd.DataFrame:
    end_date = week_end(start_date, weeks)
    keys = pd.Series(
        [(d - start_date).days // 7 + 1 for d in dates if start_date <= d <= end_date],
        dtype="int64",
    )

    table = cumulative_histogram(keys, pd.RangeIndex(1, weeks + 1))

    starts = [start_date + timedelta(weeks=w) for w in range(weeks)]
    table["start"] = starts
    table["end"] = [s + timedelta(days=6) for s in starts]
    table["label"] = [f"{s} to {s + timedelta(days=6)}" for s in starts]
    return table[COLUMNS]


def pairs(table: pd.DataFrame) -> List[Tuple[int, int]]:
    return list(zip(table["bucket"].tolist(), table["cumulative"].tolist()))


def total(table: pd.DataFrame) -> int:
    if table.empty:
        return 0
    return int(table["cumulative"].iloc[-1])
