from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pandas as pd

from ..models.keys import format_cell

"""Spreadsheet reader.

- Only the first sheet of a workbook is read.
- Row 1 is the header row, row 2 onwards are data rows.
- Data-shape problems (blank headers, duplicate headers, ragged rows, blank
  rows) are repaired silently. Only an unreadable file raises.
"""

__all__ = [
    "SheetData",
    "SpreadsheetReadError",
    "SUPPORTED_SUFFIXES",
    "read_first_sheet",
    "normalize_sheet",
]

SUPPORTED_SUFFIXES = (".xlsx", ".xlsm", ".xls")


class SpreadsheetReadError(Exception):
    """Raised when the workbook cannot be opened or parsed."""


@dataclass
class SheetData:
    sheet_name: str
    columns: list[str]
    rows: list[dict[str, Any]]  # 正規化済 (列名→値)


def read_first_sheet(path: Path) -> tuple[str, pd.DataFrame]:
    """Read the first sheet of a workbook as a raw, header-less DataFrame.

    Parameters
    ----------
    path: workbook path (.xlsx / .xlsm via openpyxl, .xls via xlrd)

    Returns
    -------
    (sheet name, raw DataFrame with object dtype)

    String cells such as "NA" or "null" are kept as text; only truly empty
    cells become NaN.
    """
    if not path.exists():
        raise SpreadsheetReadError(f"file not found: {path}")
    if path.suffix.lower() not in SUPPORTED_SUFFIXES:
        raise SpreadsheetReadError(
            f"unsupported file type '{path.suffix}' (expected one of {', '.join(SUPPORTED_SUFFIXES)})"
        )
    try:
        with pd.ExcelFile(path) as xls:
            if not xls.sheet_names:
                raise SpreadsheetReadError(f"workbook has no sheets: {path}")
            name = xls.sheet_names[0]
            # keep_default_na=False: pandas 既定の NA 文字列変換を無効化
            df = xls.parse(name, header=None, dtype=object, keep_default_na=False, na_values=[""])
    except SpreadsheetReadError:
        raise
    except Exception as e:
        raise SpreadsheetReadError(f"cannot read workbook {path.name}: {e}") from e
    return str(name), df


def _header_names(raw_headers: Iterable[Any]) -> list[str]:
    """Stringify header cells, filling blanks and de-duplicating."""
    columns: list[str] = []
    taken: set[str] = set()
    suffix: dict[str, int] = {}
    for index, raw in enumerate(raw_headers):
        name = "" if _is_missing(raw) else format_cell(raw).strip()
        if not name:
            name = f"column_{index + 1}"
        if name in taken:
            # 生成名が既存ヘッダと衝突する場合は次の番号へ
            base = name
            n = suffix.get(base, 1)
            while name in taken:
                n += 1
                name = f"{base}_{n}"
            suffix[base] = n
        taken.add(name)
        columns.append(name)
    return columns


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def normalize_sheet(
    df: pd.DataFrame,
    sheet_name: str,
    null_sentinels: set[str] | None = None,
    on_row: Callable[[], None] | None = None,
) -> SheetData:
    """Normalize a raw DataFrame using the first row as header.

    Steps:
    1. Empty sheet -> no columns, no rows
    2. Extract header from the first row (blank -> column_<n>, duplicates -> name_2 ...)
    3. Remaining rows become data rows; cells missing from a short row read as None
    4. Fully blank rows are skipped
    5. Empty strings and null sentinels (case-insensitive) become None

    ``on_row`` is called once per raw data row (progress reporting).
    """
    if df.shape[0] == 0:
        return SheetData(sheet_name=sheet_name, columns=[], rows=[])
    columns = _header_names(df.iloc[0].tolist())
    sentinels = {s.strip().upper() for s in null_sentinels} if null_sentinels else set()

    rows: list[dict[str, Any]] = []
    for raw in df.iloc[1:].itertuples(index=False, name=None):
        if on_row is not None:
            on_row()
        row_dict: dict[str, Any] = {}
        for col, val in zip(columns, raw, strict=False):
            if _is_missing(val):
                row_dict[col] = None
                continue
            if isinstance(val, str):
                stripped = val.strip()
                # NULL サニタイズ
                if stripped == "" or (sentinels and stripped.upper() in sentinels):
                    row_dict[col] = None
                    continue
            if isinstance(val, pd.Timestamp):
                val = val.to_pydatetime()
            row_dict[col] = val
        # 列数が足りない行は None で補完
        for col in columns[len(raw):]:
            row_dict[col] = None
        if all(v is None for v in row_dict.values()):
            continue
        rows.append(row_dict)

    return SheetData(sheet_name=sheet_name, columns=columns, rows=rows)
