from __future__ import annotations

import json
from pathlib import Path

from sheet_analyzer.cli import main as cli_main


def test_pivot_sum_json(sales_workbook: Path, capsys):
    code = cli_main(["pivot", str(sales_workbook), "--rows", "Region", "--value", "Sales", "--json"])
    data = json.loads(capsys.readouterr().out)
    assert code == 0
    assert data["data"] == {"East": {"": 22}, "West": {"": 3}}
    assert data["aggregator"] == "Count"
    assert data["value"] == "Sales"


def test_pivot_count_json(sales_workbook: Path, capsys):
    cli_main(["pivot", str(sales_workbook), "--rows", "Region", "--json"])
    data = json.loads(capsys.readouterr().out)
    assert data["data"] == {"East": {"": 3}, "West": {"": 1}}


def test_pivot_two_level(sales_workbook: Path, capsys):
    cli_main([
        "pivot", str(sales_workbook),
        "--rows", "Region", "--cols", "Quarter", "--value", "Sales", "--aggregator", "Sum", "--json",
    ])
    data = json.loads(capsys.readouterr().out)
    assert data["data"] == {"East": {"Q1": 10, "Q2": 12}, "West": {"Q1": 3}}
    assert data["aggregator"] == "Sum"


def test_pivot_grand_total(sales_workbook: Path, capsys):
    cli_main(["pivot", str(sales_workbook), "--json"])
    assert json.loads(capsys.readouterr().out)["data"] == {"": {"": 4}}


def test_pivot_text_table(sales_workbook: Path, capsys):
    cli_main(["pivot", str(sales_workbook), "--rows", "Region", "--cols", "Quarter", "--value", "Sales"])
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "Sum of Sales"
    assert lines[1].split() == ["Q1", "Q2"]
    assert lines[3].split() == ["East", "10.0", "12.0"]
    # West/Q2 never occurred: blank, not zero
    assert lines[4].split() == ["West", "3.0"]


def test_pivot_from_config_with_flag_override(sales_workbook: Path, write_config: Path, capsys):
    cli_main(["pivot", str(sales_workbook), "--json"])
    data = json.loads(capsys.readouterr().out)
    assert data["rows"] == ["Region"]
    assert data["cols"] == ["Quarter"]
    assert data["aggregator"] == "Sum"
    assert data["data"] == {"East": {"Q1": 10, "Q2": 12}, "West": {"Q1": 3}}

    cli_main(["pivot", str(sales_workbook), "--rows", "Product", "--json"])
    data = json.loads(capsys.readouterr().out)
    assert data["data"] == {"Widget": {"Q1": 13, "Q2": 7}, "Gadget": {"Q2": 5}}


def test_pivot_non_numeric_values_warn(temp_workdir: Path, make_workbook, capsys):
    wb = make_workbook(
        temp_workdir / "data" / "bad.xlsx",
        [["Region", "Sales"], ["E", 10], ["E", "ten"], ["W", None], ["W", 3]],
    )
    code = cli_main(["pivot", str(wb), "--rows", "Region", "--value", "Sales", "--json"])
    captured = capsys.readouterr()
    assert code == 0
    assert json.loads(captured.out)["data"] == {"E": {"": 10}, "W": {"": 3}}
    assert "WARN row 2: Sales='ten' non-numeric value counted as 0" in captured.err
    assert not (temp_workdir / "logs").exists()


def test_pivot_warning_overflow_is_collapsed(temp_workdir: Path, make_workbook, capsys):
    rows = [["Region", "Sales"]] + [["E", f"bad{i}"] for i in range(15)]
    wb = make_workbook(temp_workdir / "data" / "many.xlsx", rows)
    cli_main(["pivot", str(wb), "--rows", "Region", "--value", "Sales"])
    err = capsys.readouterr().err
    assert err.count("non-numeric value counted as 0") == 10
    assert "... 5 more non-numeric values counted as 0" in err


def test_chart_json(sales_workbook: Path, capsys):
    code = cli_main(["chart", str(sales_workbook), "--rows", "Region", "--cols", "Quarter", "--value", "Sales"])
    data = json.loads(capsys.readouterr().out)
    assert code == 0
    assert data["series"] == ["Q1", "Q2"]
    assert data["data"] == [
        {"name": "East", "Q1": 10, "Q2": 12},
        {"name": "West", "Q1": 3},
    ]


def test_pivot_empty_sheet(temp_workdir: Path, make_workbook, capsys):
    wb = make_workbook(temp_workdir / "data" / "header_only.xlsx", [["Region", "Sales"]])
    code = cli_main(["pivot", str(wb), "--rows", "Region"])
    assert code == 0
    assert capsys.readouterr().out.strip() == "(no rows)"


def test_pivot_text_heading_without_value_column(sales_workbook: Path, capsys):
    cli_main(["pivot", str(sales_workbook), "--rows", "Region"])
    assert capsys.readouterr().out.splitlines()[0] == "Count"
