from __future__ import annotations

import logging
from pathlib import Path

from ..excel.reader import SheetData, normalize_sheet, read_first_sheet
from ..models.table import Table
from .inference import infer_columns
from .progress import ProgressTracker

"""Table ingest: read the first sheet, normalize rows, infer column types.

Only an unreadable workbook raises (SpreadsheetReadError from the reader);
every data-shape issue is repaired by normalize_sheet.
"""

__all__ = [
    "load_table",
    "table_from_sheet",
]

logger = logging.getLogger(__name__)


def table_from_sheet(sheet: SheetData, source_name: str) -> Table:
    columns = infer_columns(sheet.columns, sheet.rows)
    return Table(source_name=source_name, columns=columns, rows=tuple(sheet.rows))


def load_table(path: Path, null_sentinels: set[str] | None = None, progress: bool = True) -> Table:
    """Load a workbook into a Table.

    Args:
        path: Workbook path
        null_sentinels: Extra strings read as empty cells (case-insensitive)
        progress: Show a row progress bar on a TTY for large sheets

    Raises:
        SpreadsheetReadError: The workbook cannot be read
    """
    sheet_name, df = read_first_sheet(path)
    logger.info(f"Reading {path.name} sheet={sheet_name} raw_rows={max(df.shape[0] - 1, 0)}")
    with ProgressTracker(max(df.shape[0] - 1, 0), enabled=progress) as tracker:
        sheet = normalize_sheet(df, sheet_name, null_sentinels=null_sentinels, on_row=tracker.advance)
    table = table_from_sheet(sheet, path.name)
    logger.debug(
        "columns: " + ", ".join(f"{c.name}:{c.type.value}" for c in table.columns)
    )
    logger.info(f"Loaded {table.row_count} rows x {len(table.columns)} columns from {path.name}")
    return table
