import argparse
from datetime import datetime
from pathlib import Path

import pandas as pd

from bug_arrival import config
from bug_arrival.metrics.cumulative import pairs, total, week_end, weekly_cumulative
from bug_arrival.metrics.formatting import format_breakdown, format_pairs
from bug_arrival.metrics.plot_cumulative import plot_cumulative
from bug_arrival.metrics.records import load_reports
from bug_arrival.utils import log, positive_int


def run_weekly(csv_path, start_date=config.DEFAULT_START_DATE, weeks=config.DEFAULT_WEEKS,
               out=None, plot=None) -> pd.DataFrame:
    # -----------------------------
    # Load
    # -----------------------------
    loaded = load_reports(csv_path)

    # -----------------------------
    # Week buckets (7-day spans from start_date, not calendar weeks)
    # -----------------------------
    end_date = week_end(start_date, weeks)
    log(f"Analyzing bug reports from {start_date} to {end_date} ({weeks} weeks)")

    table = weekly_cumulative(loaded.dates, start_date, weeks)
    log(f"Weekly cumulative result: {format_pairs(pairs(table))}")

    log("\nWeekly bug counts:")
    for line in format_breakdown(table, "Week"):
        log(line)

    log(f"\nTotal bugs in {weeks} weeks: {total(table)}")

    # -----------------------------
    # Optional outputs
    # -----------------------------
    if out:
        out = Path(out)
        out.parent.mkdir(parents=True, exist_ok=True)
        table.to_csv(out, index=False)
        log(f"Saved: {out}")

    if plot:
        saved = plot_cumulative(
            table, plot,
            title=f"Cumulative Bug Reports per Week ({start_date} to {end_date})",
            xlabel="Week",
        )
        log(f"Saved: {saved}")

    return table


def parse_date(value: str):
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {value!r}")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Cumulative bug reports per 7-day week from a start date.")
    parser.add_argument("--csv", default=str(config.DEFAULT_CSV))
    parser.add_argument("--start", type=parse_date, default=config.DEFAULT_START_DATE,
                        help="first day of week 1, YYYY-MM-DD")
    parser.add_argument("--weeks", type=positive_int, default=config.DEFAULT_WEEKS)
    parser.add_argument("--out", default=None, help="write the weekly table as CSV")
    parser.add_argument("--plot", default=None, help="save the cumulative curve as PNG")
    args = parser.parse_args(argv)

    run_weekly(args.csv, args.start, args.weeks, out=args.out, plot=args.plot)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
