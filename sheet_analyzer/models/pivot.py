from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import pandas as pd

from .data_quality import DataQualityWarning
from .keys import COLUMN_KEY_DELIMITER, CompositeKey, render_key

"""Pivot configuration, pivot result and chart row models.

PivotResult keeps structured tuple keys internally. ``to_display()`` renders
the flat legacy mapping (row-key string -> column-key string -> number) used
by text/JSON output and by the chart flattening.
"""

__all__ = [
    "Aggregator",
    "PivotConfig",
    "PivotResult",
    "ChartRow",
]


class Aggregator(Enum):
    """Reduction label shown with the pivot.

    The per-row contribution is decided by ``PivotConfig.value``: with a value
    column each row adds its numeric value, without one each row adds 1.
    """
    COUNT = "Count"
    SUM = "Sum"

    @classmethod
    def parse(cls, raw: str | Aggregator | None) -> Aggregator:
        if raw is None:
            return cls.COUNT
        if isinstance(raw, Aggregator):
            return raw
        for member in cls:
            if member.value.lower() == str(raw).strip().lower():
                return member
        raise ValueError(f"unknown aggregator: {raw!r} (expected Count or Sum)")


@dataclass(frozen=True)
class PivotConfig:
    """User-selected pivot layout."""
    rows: tuple[str, ...] = ()  # Row-grouping columns (order = key field order)
    cols: tuple[str, ...] = ()  # Column-grouping columns
    value: str | None = None  # At most one value column; None = pure count
    aggregator: Aggregator = Aggregator.COUNT

    @property
    def heading(self) -> str:
        """Text heading for the pivot grid, e.g. ``"Sum of Sales"``.

        Describes what the cells hold: with a value column they are sums
        regardless of the aggregator label, without one they are row counts.
        """
        if self.value:
            return f"{Aggregator.SUM.value} of {self.value}"
        return Aggregator.COUNT.value

    @property
    def referenced_columns(self) -> list[str]:
        names = list(self.rows) + list(self.cols)
        if self.value:
            names.append(self.value)
        return names


@dataclass(frozen=True)
class ChartRow:
    """One bar-chart category: the rendered row key plus one field per column key."""
    name: str
    values: dict[str, float] = field(default_factory=dict)

    def to_record(self) -> dict[str, Any]:
        """Flatten to ``{"name": ..., <colKey>: value, ...}``."""
        record: dict[str, Any] = {"name": self.name}
        record.update(self.values)
        return record


@dataclass(frozen=True)
class PivotResult:
    """Nested accumulator table keyed by (row key, column key)."""
    cells: dict[CompositeKey, dict[CompositeKey, float]] = field(default_factory=dict)
    warnings: tuple[DataQualityWarning, ...] = ()

    @property
    def row_keys(self) -> list[CompositeKey]:
        return list(self.cells.keys())

    @property
    def col_keys(self) -> list[CompositeKey]:
        seen: dict[CompositeKey, None] = {}
        for col_values in self.cells.values():
            for key in col_values:
                seen.setdefault(key, None)
        return list(seen)

    @property
    def is_empty(self) -> bool:
        return not self.cells

    def get(self, row_key: CompositeKey, col_key: CompositeKey) -> float | None:
        return self.cells.get(row_key, {}).get(col_key)

    def grand_total(self) -> float:
        return sum(v for col_values in self.cells.values() for v in col_values.values())

    def to_display(self, delimiter: str = COLUMN_KEY_DELIMITER) -> dict[str, dict[str, float]]:
        """Render keys to strings.

        Distinct structured keys that render to the same string (e.g. the text
        "10" and the number 10) are merged by summing, same as a flat mapping
        keyed by the rendered string would have accumulated them.
        """
        display: dict[str, dict[str, float]] = {}
        for row_key, col_values in self.cells.items():
            target = display.setdefault(render_key(row_key, delimiter), {})
            for col_key, amount in col_values.items():
                name = render_key(col_key, delimiter)
                target[name] = target.get(name, 0) + amount
        return display

    def to_frame(self, delimiter: str = COLUMN_KEY_DELIMITER) -> pd.DataFrame:
        """Pivot grid as a DataFrame (rows = row keys, columns = column keys).

        Combinations that never occurred are NaN, not zero.
        """
        display = self.to_display(delimiter)
        col_names: dict[str, None] = {}
        for col_values in display.values():
            for name in col_values:
                col_names.setdefault(name, None)
        frame = pd.DataFrame.from_dict(display, orient="index", columns=list(col_names))
        frame.index.name = "row"
        return frame
