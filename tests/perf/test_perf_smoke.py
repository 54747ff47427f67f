from __future__ import annotations

import importlib.util
import time
from pathlib import Path

import pytest

from sheet_analyzer.models.pivot import PivotConfig
from sheet_analyzer.services.aggregator import aggregate, build_chart_rows
from sheet_analyzer.services.ingest import load_table
from sheet_analyzer.services.unique import unique_combinations

"""Performance smoke test: a 20k-row sheet loads, types and pivots quickly."""

ROWS = 20_000
SCRIPT = Path(__file__).resolve().parents[2] / "scripts" / "gen_sample_workbook.py"


@pytest.fixture(scope="module")
def generator():
    spec = importlib.util.spec_from_file_location("gen_sample_workbook", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_aggregate_throughput(generator):
    df = generator.generate_sales_frame(ROWS, bad_value_ratio=0.01)
    rows = df.to_dict(orient="records")
    config = PivotConfig(rows=("Region", "Product"), cols=("Quarter",), value="Sales")

    start = time.perf_counter()
    result = aggregate(rows, config)
    chart = build_chart_rows(result)
    elapsed = time.perf_counter() - start

    assert len(chart) == 16
    assert len(result.warnings) > 0
    assert elapsed < 5.0, f"aggregate too slow: {elapsed:.3f}s for {ROWS} rows"


def test_load_and_pivot_workbook(generator, tmp_path: Path):
    path = tmp_path / "sales.xlsx"
    generator.write_workbook(generator.generate_sales_frame(2_000), path)

    start = time.perf_counter()
    table = load_table(path, progress=False)
    result = aggregate(table.rows, PivotConfig(rows=("Region",), value="Sales"))
    elapsed = time.perf_counter() - start

    assert table.row_count == 2_000
    assert [c.type.value for c in table.columns] == ["string", "string", "string", "date", "number", "number"]
    assert result.warnings == ()
    assert len(unique_combinations(table.rows, ["Region", "Quarter"])) == 16
    assert elapsed < 30.0, f"load+pivot too slow: {elapsed:.3f}s"
