from __future__ import annotations

from ..models.column import ColumnType
from ..models.summary import DataSummary
from ..models.table import Table

"""Data summary service.

Counts rows/columns of a loaded table and groups column names by inferred
type, then renders the SUMMARY line from contracts in
tests/contract/test_summary_output_contract.py.
"""


def summarize_table(table: Table) -> DataSummary:
    return DataSummary(
        row_count=table.row_count,
        column_count=len(table.columns),
        numeric_columns=table.columns_of_type(ColumnType.NUMBER),
        categorical_columns=table.columns_of_type(ColumnType.STRING),
        date_columns=table.columns_of_type(ColumnType.DATE),
    )


def render_summary_line(summary: DataSummary) -> str:
    """Render a SUMMARY line from a DataSummary.

    Format:
    SUMMARY rows={rows} columns={columns} numeric={n} categorical={n} date={n}

    Examples:
        >>> render_summary_line(DataSummary(3, 2, ["Sales"], ["Region"], []))
        'SUMMARY rows=3 columns=2 numeric=1 categorical=1 date=0'
    """
    return (
        f"SUMMARY rows={summary.row_count} "
        f"columns={summary.column_count} "
        f"numeric={len(summary.numeric_columns)} "
        f"categorical={len(summary.categorical_columns)} "
        f"date={len(summary.date_columns)}"
    )


def render_summary_details(summary: DataSummary) -> list[str]:
    """Human readable summary lines (one per fact)."""
    return [
        f"Total Rows: {summary.row_count}",
        f"Total Columns: {summary.column_count}",
        f"Numeric Columns: {', '.join(summary.numeric_columns)}",
        f"Categorical Columns: {', '.join(summary.categorical_columns)}",
        f"Date Columns: {', '.join(summary.date_columns)}",
    ]
