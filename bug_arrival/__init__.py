"""Cumulative bug-arrival curves from bug report CSV exports."""
