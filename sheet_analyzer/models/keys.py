from __future__ import annotations

import math
import numbers
from collections.abc import Iterable
from datetime import date, datetime, time
from typing import Any

import numpy as np

"""Structured composite keys and their display rendering.

Grouping keys are tuples of raw cell values, one per selected column. They are
rendered to a delimited string only at the output boundary, so a value that
contains the delimiter can never collide with a differently split key.
"""

__all__ = [
    "CompositeKey",
    "COLUMN_KEY_DELIMITER",
    "UNIQUE_LIST_DELIMITER",
    "format_cell",
    "key_part",
    "make_key",
    "render_key",
]

CompositeKey = tuple[Any, ...]

COLUMN_KEY_DELIMITER = "-"
UNIQUE_LIST_DELIMITER = " - "


def format_cell(value: Any) -> str:
    """Render a single cell value for display.

    None renders as an empty string, integral floats drop the trailing ``.0``
    (Excel stores every number as a float), booleans render lower-case and
    midnight timestamps render as plain ISO dates.
    """
    if value is None:
        return ""
    if isinstance(value, (bool, np.bool_)):
        return "true" if value else "false"
    if isinstance(value, numbers.Integral):
        return str(int(value))
    if isinstance(value, numbers.Real):
        f = float(value)
        if math.isnan(f):
            return ""
        if math.isinf(f):
            return "Infinity" if f > 0 else "-Infinity"
        if f.is_integer():
            return str(int(f))
        return repr(f)
    if isinstance(value, datetime):
        if value.time() == time(0, 0) and value.tzinfo is None:
            return value.date().isoformat()
        return value.isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def render_key(key: CompositeKey, delimiter: str = COLUMN_KEY_DELIMITER) -> str:
    """Join the rendered parts of a composite key (empty key -> "")."""
    return delimiter.join(format_cell(part) for part in key)


def key_part(value: Any) -> Any:
    """Hashable key component for one cell.

    Booleans compare equal to 1/0 in Python, so a True cell would share a dict
    slot with a numeric 1 cell. They are stored as their rendered text instead.
    """
    if isinstance(value, (bool, np.bool_)):
        return format_cell(value)
    return value


def make_key(values: Iterable[Any]) -> CompositeKey:
    return tuple(key_part(v) for v in values)
