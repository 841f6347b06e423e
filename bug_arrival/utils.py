import argparse
import sys


def log(msg: str):
    print(msg, flush=True)


def log_error(msg: str):
    print(msg, file=sys.stderr, flush=True)


def positive_int(value: str) -> int:
    """argparse type for bucket counts."""
    n = int(value)
    if n < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {n}")
    return n
