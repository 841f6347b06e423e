import os
from datetime import date
from pathlib import Path

# =============================
# CONFIG
# =============================
# Relative to the working directory, like the exported data the scripts run against.
DEFAULT_CSV = Path(os.environ.get("BUG_REPORTS_CSV", str(Path("data") / "winehq_bug_report_data.csv")))

# Month pipeline: 19 months starting January 2015
DEFAULT_START_MONTH = (2015, 1)
DEFAULT_MONTHS = 19

# Week pipeline: 19 weeks starting 2003-10-01 (about 5 months)
DEFAULT_START_DATE = date(2003, 10, 1)
DEFAULT_WEEKS = 19

# Bugzilla (optional, only used by collect-bug-reports)
BUGZILLA_URL = os.environ.get("BUGZILLA_URL", "https://bugs.winehq.org").rstrip("/")
BUGZILLA_API_KEY = os.environ.get("BUGZILLA_API_KEY")
BUGZILLA_PAGE_SIZE = 500
