#!/usr/bin/env python3
"""Sample workbook generator for manual and performance testing.

Generates a synthetic sales sheet (first row = headers) with string, numeric
and date columns, optionally sprinkling non-numeric values into the Sales
column to exercise the data-quality warnings.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

REGIONS = ["East", "West", "North", "South"]
PRODUCTS = ["Widget", "Gadget", "Gizmo", "Doohickey"]
QUARTERS = ["Q1", "Q2", "Q3", "Q4"]


def generate_sales_frame(rows: int, seed: int = 42, bad_value_ratio: float = 0.0) -> pd.DataFrame:
    """Generate a sales DataFrame.

    Args:
        rows: Number of data rows
        seed: Random seed for reproducible data
        bad_value_ratio: Share of Sales cells replaced by the text "n/a"

    Returns:
        DataFrame with Region, Product, Quarter, OrderDate, Units, Sales columns
    """
    rng = np.random.default_rng(seed)
    sales: list[Any] = np.round(rng.uniform(1, 1000, rows), 2).tolist()
    if bad_value_ratio > 0:
        for i in np.flatnonzero(rng.random(rows) < bad_value_ratio):
            sales[int(i)] = "n/a"
    dates = pd.date_range("2024-01-01", "2024-12-31", periods=50)
    return pd.DataFrame(
        {
            "Region": rng.choice(REGIONS, rows).tolist(),
            "Product": rng.choice(PRODUCTS, rows).tolist(),
            "Quarter": rng.choice(QUARTERS, rows).tolist(),
            "OrderDate": rng.choice(dates.to_pydatetime(), rows).tolist(),
            "Units": rng.integers(1, 50, rows).tolist(),
            "Sales": sales,
        }
    )


def write_workbook(df: pd.DataFrame, output_path: Path, sheet_name: str = "Sales") -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name=sheet_name, index=False)


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Generate a synthetic sales workbook")
    p.add_argument("output", type=Path, help="Output .xlsx path")
    p.add_argument("--rows", type=int, default=1000)
    p.add_argument("--seed", type=int, default=42)
    p.add_argument("--bad-value-ratio", type=float, default=0.0)
    args = p.parse_args(argv)

    if args.rows < 0:
        print("rows must be >= 0", file=sys.stderr)
        return 1
    df = generate_sales_frame(args.rows, seed=args.seed, bad_value_ratio=args.bad_value_ratio)
    write_workbook(df, args.output)
    print(f"wrote {args.rows} rows to {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
