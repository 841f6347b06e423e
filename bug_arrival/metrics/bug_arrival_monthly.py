import argparse
from datetime import datetime
from pathlib import Path

import pandas as pd

from bug_arrival import config
from bug_arrival.metrics.cumulative import monthly_cumulative, month_range, pairs, total
from bug_arrival.metrics.formatting import format_breakdown, format_pairs
from bug_arrival.metrics.plot_cumulative import plot_cumulative
from bug_arrival.metrics.records import load_reports
from bug_arrival.utils import log, positive_int


def run_monthly(csv_path, start_month=config.DEFAULT_START_MONTH, months=config.DEFAULT_MONTHS,
                out=None, plot=None) -> pd.DataFrame:
    # -----------------------------
    # Load
    # -----------------------------
    loaded = load_reports(csv_path)

    # -----------------------------
    # Month buckets
    # -----------------------------
    buckets = month_range(start_month, months)
    log(f"Analyzing bug reports from {buckets[0]} to {buckets[-1]} ({months} months)")

    table = monthly_cumulative(loaded.dates, start_month, months)
    log(f"Monthly cumulative result: {format_pairs(pairs(table))}")

    log("\nMonthly bug counts:")
    for line in format_breakdown(table, "Month"):
        log(line)

    log(f"\nTotal bugs in {months} months: {total(table)}")

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
            title=f"Cumulative Bug Reports per Month ({buckets[0]} to {buckets[-1]})",
            xlabel="Month",
        )
        log(f"Saved: {saved}")

    return table


def parse_month(value: str):
    try:
        dt = datetime.strptime(value, "%Y-%m")
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM, got {value!r}")
    return dt.year, dt.month


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Cumulative bug reports per calendar month.")
    parser.add_argument("--csv", default=str(config.DEFAULT_CSV))
    parser.add_argument("--start", type=parse_month, default=config.DEFAULT_START_MONTH,
                        help="first month, YYYY-MM")
    parser.add_argument("--months", type=positive_int, default=config.DEFAULT_MONTHS)
    parser.add_argument("--out", default=None, help="write the monthly table as CSV")
    parser.add_argument("--plot", default=None, help="save the cumulative curve as PNG")
    args = parser.parse_args(argv)

    run_monthly(args.csv, args.start, args.months, out=args.out, plot=args.plot)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
