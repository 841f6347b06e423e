from __future__ import annotations

from datetime import date

from bug_arrival.metrics.cumulative import monthly_cumulative
from bug_arrival.metrics.formatting import format_breakdown, format_pairs


def test_format_pairs_literal() -> None:
    assert format_pairs([(1, 2), (2, 5), (3, 5)]) == "{{1,2}, {2,5}, {3,5}}"


def test_format_pairs_single_and_empty() -> None:
    assert format_pairs([(1, 0)]) == "{{1,0}}"
    assert format_pairs([]) == "{}"


def test_format_breakdown_lines() -> None:
    table = monthly_cumulative([date(2015, 1, 10), date(2015, 1, 20)], (2015, 1), 2)
    assert format_breakdown(table, "Month") == [
        "Month 1 (2015-01): 2 bugs",
        "Month 2 (2015-02): 0 bugs",
    ]
