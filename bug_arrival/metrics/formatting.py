from typing import Iterable, List, Tuple

import pandas as pd


def format_pairs(result: Iterable[Tuple[int, int]]) -> str:
    """Render [(1, 5), (2, 12)] as {{1,5}, {2,12}}."""
    return "{" + ", ".join(f"{{{i},{c}}}" for i, c in result) + "}"


def format_breakdown(table: pd.DataFrame, unit: str) -> List[str]:
    rows = zip(table["bucket"].tolist(), table["label"].tolist(), table["count"].tolist())
    return [f"{unit} {i} ({label}): {n} bugs" for i, label, n in rows]
