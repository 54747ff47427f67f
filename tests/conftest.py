# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path

import pandas as pd
import pytest

from sheet_analyzer.logging.init import reset_logging


@pytest.fixture(autouse=True)
def _clean_logging():
    # 各テストで logger を作り直す (capsys のストリーム差し替えに追従)
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        # setenv → delenv で teardown 時に元の状態へ戻す (.env 経由の設定も消える)
        monkeypatch.setenv("SHEET_ANALYZER_CONFIG", "")
        monkeypatch.delenv("SHEET_ANALYZER_CONFIG")
        yield p


def _write_workbook(path: Path, rows: list[list[object]], sheet: str = "Sheet1",
                   extra_sheets: dict[str, list[list[object]]] | None = None) -> Path:
    """Write rows (first row = header) as-is into an .xlsx workbook."""
    with pd.ExcelWriter(path) as writer:
        pd.DataFrame(rows).to_excel(writer, sheet_name=sheet, header=False, index=False)
        for name, extra in (extra_sheets or {}).items():
            pd.DataFrame(extra).to_excel(writer, sheet_name=name, header=False, index=False)
    return path


@pytest.fixture()
def make_workbook():
    return _write_workbook


@pytest.fixture()
def sales_rows() -> list[list[object]]:
    return [
        ["Region", "Product", "Quarter", "Sales"],
        ["East", "Widget", "Q1", 10],
        ["East", "Gadget", "Q2", 5],
        ["West", "Widget", "Q1", 3],
        ["East", "Widget", "Q2", 7],
    ]


@pytest.fixture()
def sales_workbook(temp_workdir: Path, sales_rows) -> Path:
    return _write_workbook(temp_workdir / "data" / "sales.xlsx", sales_rows)


@pytest.fixture()
def sample_config_yaml() -> str:
    return """pivot:
  rows: [Region]
  cols: [Quarter]
  value: Sales
  aggregator: Sum
unique_columns: [Region, Product]
preview_rows: 2
null_sentinels: ["n/a"]
warning_log: false
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "analyzer.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg
