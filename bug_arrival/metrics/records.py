"""
Load bug reports from a CSV export.

The export has a header line, then one bug per line with the bug id in the
first column and the creation date (yyyy-MM-dd) in the second. Quoted fields
may contain commas; nothing else about CSV quoting is supported.

Bad rows never stop a run:
- rows with fewer than 2 fields are dropped silently
- rows whose date does not parse are dropped and echoed to stderr
- if the file cannot be opened or read, the traceback goes to stderr and
  whatever was loaded so far is returned
"""

import re
import traceback
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import List, Optional, Union

from bug_arrival.utils import log_error

DATE_RE = re.compile(r"([0-9]{4})-([0-9]{2})-([0-9]{2})")


@dataclass(frozen=True)
class Report:
    creation_date: date


@dataclass(frozen=True)
class RowError:
    line_no: int
    value: str
    reason: str


@dataclass
class LoadResult:
    reports: List[Report] = field(default_factory=list)
    errors: List[RowError] = field(default_factory=list)
    source_error: Optional[str] = None

    @property
    def dates(self) -> List[date]:
        return [r.creation_date for r in self.reports]


def split_line(line: str) -> List[str]:
    fields = []
    current = []
    in_quotes = False

    for ch in line:
        if ch == '"':
            in_quotes = not in_quotes
        elif ch == "," and not in_quotes:
            fields.append("".join(current))
            current = []
        else:
            current.append(ch)

    fields.append("".join(current))
    return fields


def parse_report(value: str, line_no: int = 0) -> Union[Report, RowError]:
    m = DATE_RE.fullmatch(value)
    if not m:
        return RowError(line_no, value, "expected yyyy-MM-dd")

    year, month, day = (int(g) for g in m.groups())
    try:
        return Report(date(year, month, day))
    except ValueError as e:
        return RowError(line_no, value, str(e))


def load_reports(path: Union[str, Path]) -> LoadResult:
    result = LoadResult()

    try:
        with open(path, "r", encoding="utf-8", newline="") as f:
            next(f, None)  # header

            for line_no, line in enumerate(f, start=2):
                values = split_line(line.rstrip("\r\n"))
                if len(values) < 2:
                    continue

                creation_date = values[1].strip()
                parsed = parse_report(creation_date, line_no)
                if isinstance(parsed, RowError):
                    result.errors.append(parsed)
                    log_error(f"Could not parse date: {creation_date}")
                else:
                    result.reports.append(parsed)
    except (OSError, UnicodeDecodeError) as e:
        traceback.print_exc()
        result.source_error = f"{type(e).__name__}: {e}"

    return result
