from __future__ import annotations

from datetime import date, timedelta

import pandas as pd
import pytest

from bug_arrival.metrics.cumulative import (
    cumulative_histogram,
    month_range,
    monthly_cumulative,
    pairs,
    total,
    week_end,
    weekly_cumulative,
)


def test_cumulative_histogram_fills_gaps_and_drops_out_of_range() -> None:
    keys = pd.Series([3, 1, 1, 9, -2])
    table = cumulative_histogram(keys, pd.RangeIndex(1, 5))
    assert table["count"].tolist() == [2, 0, 1, 0]
    assert table["cumulative"].tolist() == [2, 2, 3, 3]
    assert table["bucket"].tolist() == [1, 2, 3, 4]


def test_monthly_scenario() -> None:
    dates = [date(2015, 1, 10), date(2015, 1, 20), date(2015, 3, 5)]
    table = monthly_cumulative(dates, (2015, 1), 3)
    assert table["count"].tolist() == [2, 0, 1]
    assert pairs(table) == [(1, 2), (2, 2), (3, 3)]
    assert table["label"].tolist() == ["2015-01", "2015-02", "2015-03"]
    assert table["end"].tolist()[1] == date(2015, 2, 28)


def test_monthly_excludes_out_of_range() -> None:
    dates = [date(2014, 12, 31), date(2015, 1, 1), date(2015, 2, 28), date(2015, 3, 1)]
    table = monthly_cumulative(dates, (2015, 1), 2)
    assert pairs(table) == [(1, 1), (2, 2)]
    assert total(table) == 2


def test_monthly_single_month_and_year_rollover() -> None:
    assert pairs(monthly_cumulative([date(2015, 1, 31)], (2015, 1), 1)) == [(1, 1)]

    labels = monthly_cumulative([], pd.Period("2014-11", freq="M"), 4)["label"].tolist()
    assert labels == ["2014-11", "2014-12", "2015-01", "2015-02"]


def test_monthly_empty_input_is_all_zero() -> None:
    table = monthly_cumulative([], (2015, 1), 5)
    assert pairs(table) == [(i, 0) for i in range(1, 6)]


def test_month_range_rejects_zero() -> None:
    with pytest.raises(ValueError):
        month_range((2015, 1), 0)


def test_weekly_scenario() -> None:
    dates = [date(2003, 10, 1), date(2003, 10, 7), date(2003, 10, 8)]
    table = weekly_cumulative(dates, date(2003, 10, 1), 2)
    assert pairs(table) == [(1, 2), (2, 3)]
    assert table["label"].tolist() == ["2003-10-01 to 2003-10-07", "2003-10-08 to 2003-10-14"]


def test_weekly_boundaries() -> None:
    start = date(2003, 10, 1)
    end = week_end(start, 3)
    assert end == date(2003, 10, 21)

    dates = [start - timedelta(days=1), start, end - timedelta(days=1), end, end + timedelta(days=1)]
    table = weekly_cumulative(dates, start, 3)
    assert table["count"].tolist() == [1, 0, 2]
    assert total(table) == 3


def test_weekly_properties_hold_for_many_ranges() -> None:
    start = date(2003, 10, 1)
    dates = [start + timedelta(days=d) for d in range(-10, 80, 3)]
    for weeks in (1, 2, 7, 13):
        table = weekly_cumulative(dates, start, weeks)
        cumulative = table["cumulative"].tolist()
        in_range = [d for d in dates if start <= d <= week_end(start, weeks)]

        assert table["bucket"].tolist() == list(range(1, weeks + 1))
        assert all(a <= b for a, b in zip(cumulative, cumulative[1:]))
        assert cumulative[-1] == len(in_range)


def test_week_end_rejects_zero() -> None:
    with pytest.raises(ValueError):
        weekly_cumulative([], date(2003, 10, 1), 0)


def test_monthly_properties_hold_for_many_ranges() -> None:
    dates = [date(2014, 11, 3) + timedelta(days=d) for d in range(0, 500, 11)]
    for months in (1, 2, 7, 13):
        table = monthly_cumulative(dates, (2015, 1), months)
        cumulative = table["cumulative"].tolist()
        last = table["end"].iloc[-1]
        in_range = [d for d in dates if date(2015, 1, 1) <= d <= last]

        assert table["bucket"].tolist() == list(range(1, months + 1))
        assert all(a <= b for a, b in zip(cumulative, cumulative[1:]))
        assert cumulative[-1] == len(in_range)


def test_far_year_dates_are_just_out_of_range() -> None:
    dates = [date(1500, 1, 1), date(2015, 1, 10), date(9999, 12, 31)]

    assert pairs(monthly_cumulative(dates, (2015, 1), 2)) == [(1, 1), (2, 1)]
    assert pairs(weekly_cumulative(dates, date(2015, 1, 10), 2)) == [(1, 1), (2, 1)]


def test_far_year_ranges() -> None:
    table = monthly_cumulative([date(1500, 2, 14)], (1500, 1), 2)
    assert pairs(table) == [(1, 0), (2, 1)]
    assert table["label"].tolist() == ["1500-01", "1500-02"]
    assert table["end"].tolist() == [date(1500, 1, 31), date(1500, 2, 28)]

    table = weekly_cumulative([date(9999, 12, 31)], date(9999, 12, 25), 1)
    assert pairs(table) == [(1, 1)]
    assert table["label"].tolist() == ["9999-12-25 to 9999-12-31"]
