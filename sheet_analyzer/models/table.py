from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .column import Column, ColumnType

"""Table domain model: the parsed first sheet of an uploaded workbook.

Rows keep the original sheet order. Each row maps column name -> cell value
(None for absent cells).
"""

__all__ = [
    "Row",
    "Table",
    "DEFAULT_PREVIEW_ROWS",
]

Row = dict[str, Any]

DEFAULT_PREVIEW_ROWS = 5


@dataclass(frozen=True)
class Table:
    """Parsed sheet with inferred column metadata."""
    source_name: str  # File name the table was read from
    columns: list[Column]
    rows: tuple[Row, ...]

    @property
    def column_names(self) -> list[str]:
        return [c.name for c in self.columns]

    @property
    def row_count(self) -> int:
        return len(self.rows)

    def column(self, name: str) -> Column | None:
        for col in self.columns:
            if col.name == name:
                return col
        return None

    def columns_of_type(self, column_type: ColumnType) -> list[str]:
        return [c.name for c in self.columns if c.type is column_type]

    def values(self, name: str) -> list[Any]:
        """Cell values of one column in sheet order (None where absent)."""
        return [row.get(name) for row in self.rows]

    def preview(self, limit: int | None = DEFAULT_PREVIEW_ROWS) -> list[Row]:
        """First ``limit`` rows; ``None`` returns every row."""
        if limit is None:
            return list(self.rows)
        return list(self.rows[: max(limit, 0)])
