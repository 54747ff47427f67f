from __future__ import annotations

import math
import numbers
import re
import warnings
from collections.abc import Iterable, Sequence
from datetime import date
from typing import Any

import numpy as np
import pandas as pd

from ..models.column import Column, ColumnType
from ..models.table import Row

"""Column type inference.

A column is classified from all of its non-empty values:

1. every value is a numeric literal -> number
2. every value is a calendar date   -> date
3. otherwise                        -> string

The numeric check runs first, so a purely numeric column is never a date
column. A single non-conforming value demotes the whole column to the next
check. A column without any non-empty value is a number column (every() over
nothing is true).
"""

__all__ = [
    "parse_number",
    "is_date_value",
    "is_empty_value",
    "infer_column_type",
    "infer_columns",
]

# 10 / -1.5 / .5 / 5. / 1e3 / +2E-4 / Infinity
_NUMERIC_LITERAL = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")
_INFINITY_LITERAL = re.compile(r"^[+-]?Infinity$")
# "today", "now", "May" などは pandas が日付として受理するため数字必須
_HAS_DIGIT = re.compile(r"\d")


def is_empty_value(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, float):
        return math.isnan(value)
    return False


def parse_number(value: Any) -> float | None:
    """Parse a cell as a number, or None when it is not numeric.

    Numbers pass through (booleans count as 1/0). Strings must be a complete
    decimal literal, surrounding whitespace allowed. Empty values are None.
    """
    if is_empty_value(value):
        return None
    if isinstance(value, (bool, np.bool_)):
        return 1.0 if value else 0.0
    if isinstance(value, numbers.Real):
        f = float(value)
        return None if math.isnan(f) else f
    if isinstance(value, str):
        text = value.strip()
        if _NUMERIC_LITERAL.match(text):
            return float(text)
        if _INFINITY_LITERAL.match(text):
            return -math.inf if text.startswith("-") else math.inf
    return None


def is_date_value(value: Any) -> bool:
    """True for date/datetime objects and strings pandas can parse as a date.

    Strings without any digit (relative words, bare month names) are not dates.
    """
    if isinstance(value, date):
        return True
    if not isinstance(value, str):
        return False
    text = value.strip()
    if not _HAS_DIGIT.search(text):
        return False
    with warnings.catch_warnings():
        # 単一文字列の推定パースで出る UserWarning は無視
        warnings.simplefilter("ignore")
        try:
            parsed = pd.to_datetime(text, errors="coerce")
        except (ValueError, TypeError, OverflowError):
            return False
    return not pd.isna(parsed)


def infer_column_type(values: Iterable[Any]) -> ColumnType:
    present = [v for v in values if not is_empty_value(v)]
    if all(parse_number(v) is not None for v in present):
        return ColumnType.NUMBER
    if all(is_date_value(v) for v in present):
        return ColumnType.DATE
    return ColumnType.STRING


def infer_columns(column_names: Sequence[str], rows: Sequence[Row]) -> list[Column]:
    """Infer one Column per header, in header order."""
    return [
        Column(name=name, type=infer_column_type(row.get(name) for row in rows))
        for name in column_names
    ]
