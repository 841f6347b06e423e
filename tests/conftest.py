from __future__ import annotations

import pytest


@pytest.fixture
def write_csv(tmp_path):
    def _write(*rows: str, header: str = "bug_id,creation_date") -> str:
        path = tmp_path / "bugs.csv"
        path.write_text("\n".join((header,) + rows) + "\n", encoding="utf-8")
        return str(path)

    return _write
