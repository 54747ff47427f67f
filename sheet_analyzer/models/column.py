from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

"""Column domain model and ColumnType enum.

A Column is derived once per loaded table from the sampled cell values and is
immutable afterwards.
"""

__all__ = [
    "Column",
    "ColumnType",
]


class ColumnType(Enum):
    """Inferred column type.

    Inference order: number -> date -> string (the first check that every
    non-empty value passes wins).
    """
    NUMBER = "number"
    STRING = "string"
    DATE = "date"


@dataclass(frozen=True)
class Column:
    name: str  # Header text (row 1 of the sheet)
    type: ColumnType
