from __future__ import annotations

from dataclasses import dataclass

"""DataSummary model: table-level counts and column names grouped by type."""

__all__ = [
    "DataSummary",
]


@dataclass(frozen=True)
class DataSummary:
    row_count: int  # Data rows (header excluded)
    column_count: int
    numeric_columns: list[str]
    categorical_columns: list[str]  # string-typed columns
    date_columns: list[str]
