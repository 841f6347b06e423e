import argparse
import time
from pathlib import Path

import pandas as pd
import requests

from bug_arrival import config
from bug_arrival.utils import log

HEADERS = {"Accept": "application/json"}
if config.BUGZILLA_API_KEY:
    HEADERS["X-BUGZILLA-API-KEY"] = config.BUGZILLA_API_KEY

MAX_ATTEMPTS = 5


class BugzillaError(RuntimeError):
    """Error body returned by the Bugzilla REST API ({"error": true, "code": ..., "message": ...})."""

    def __init__(self, code, message):
        super().__init__(f"Bugzilla error {code}: {message}")
        self.code = code
        self.message = message


def read_bugzilla_payload(r: requests.Response) -> dict:
    # Bugzilla reports bad params / bad API keys as 4xx with a JSON error body
    try:
        data = r.json()
    except ValueError:
        r.raise_for_status()
        raise

    if isinstance(data, dict) and data.get("error"):
        raise BugzillaError(data.get("code"), data.get("message"))
    r.raise_for_status()
    return data


def rest_request(url: str, params: dict) -> dict:
    """GET a Bugzilla REST resource, retrying timeouts, dropped connections and 5xx."""
    for attempt in range(1, MAX_ATTEMPTS + 1):
        try:
            r = requests.get(url, headers=HEADERS, params=params, timeout=30)
        except (requests.exceptions.Timeout, requests.exceptions.ConnectionError) as e:
            reason = type(e).__name__
        else:
            if r.status_code < 500:
                return read_bugzilla_payload(r)
            reason = f"HTTP {r.status_code}"

        if attempt < MAX_ATTEMPTS:
            wait = min(2 ** attempt, 30)
            log(f"[Bugzilla] attempt {attempt}/{MAX_ATTEMPTS} failed ({reason}). retry {wait}s")
            time.sleep(wait)
    raise RuntimeError(f"Bugzilla request to {url} failed after {MAX_ATTEMPTS} attempts ({reason}).")


def fetch_bug_reports(base_url: str = config.BUGZILLA_URL, since: str = "2000-01-01",
                      product: str = None, page_size: int = config.BUGZILLA_PAGE_SIZE,
                      max_pages: int = None) -> pd.DataFrame:
    rows = []
    offset = 0
    page = 0
    url = f"{base_url}/rest/bug"

    while max_pages is None or page < max_pages:
        page += 1
        params = {
            "include_fields": "id,creation_time",
            "creation_time": since,
            "order": "bug_id",
            "limit": page_size,
            "offset": offset,
        }
        if product:
            params["product"] = product

        bugs = rest_request(url, params).get("bugs", []) or []
        if not bugs:
            break

        for bug in bugs:
            rows.append({
                "bug_id": bug.get("id"),
                "creation_time": bug.get("creation_time"),
            })
        log(f"[Bugzilla] page {page} fetched. total rows: {len(rows)}")

        if len(bugs) < page_size:
            break
        offset += page_size
        time.sleep(0.2)

    return pd.DataFrame(rows, columns=["bug_id", "creation_time"])


def to_export(bugs: pd.DataFrame) -> pd.DataFrame:
    """bug_id,creation_date with the date as yyyy-MM-dd, the layout load_reports reads."""
    bugs = bugs.copy()
    created = pd.to_datetime(bugs["creation_time"], utc=True, errors="coerce")
    dropped = int(created.isna().sum())
    if dropped:
        log(f"[WARN] {dropped} bugs without a usable creation_time -> skipping")

    bugs["creation_date"] = created.dt.strftime("%Y-%m-%d")
    return bugs.dropna(subset=["creation_date"])[["bug_id", "creation_date"]]


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Fetch bug ids and creation dates from a Bugzilla instance.")
    parser.add_argument("--url", default=config.BUGZILLA_URL)
    parser.add_argument("--since", default="2000-01-01", help="only bugs created on or after this date")
    parser.add_argument("--product", default=None)
    parser.add_argument("--max-pages", type=int, default=None)
    parser.add_argument("--out", default=str(config.DEFAULT_CSV))
    args = parser.parse_args(argv)

    log(f"Collecting bug reports from {args.url} since {args.since}")
    bugs = fetch_bug_reports(args.url.rstrip("/"), args.since, args.product, max_pages=args.max_pages)
    export = to_export(bugs)

    out = Path(args.out)
    out.parent.mkdir(parents=True, exist_ok=True)
    export.to_csv(out, index=False)
    log(f"Saved: {out} ({len(export)} bugs)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
