from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from ..models.data_quality import NON_NUMERIC_VALUE, DataQualityWarning
from ..models.keys import COLUMN_KEY_DELIMITER, CompositeKey, format_cell, make_key, render_key
from ..models.pivot import ChartRow, PivotConfig, PivotResult
from .inference import is_empty_value, parse_number

"""Pivot aggregation and chart flattening.

aggregate() folds the full row sequence into a nested sum table keyed by
(row key, column key) and is always run from scratch on the complete data.
It never raises on cell data: a non-numeric value-column cell contributes 0
and is reported as a NON_NUMERIC_VALUE warning on the result.
"""

__all__ = [
    "aggregate",
    "row_contribution",
    "build_chart_rows",
    "chart_series",
    "render_key",
]

logger = logging.getLogger(__name__)


def _key(row: Mapping[str, Any], columns: Iterable[str]) -> CompositeKey:
    return make_key(row.get(c) for c in columns)


def row_contribution(row: Mapping[str, Any], value_column: str | None) -> float:
    """Amount one row adds to its cell.

    Without a value column every row counts 1. With one, the parsed number
    of that cell, or 0 when it is absent or not numeric.
    """
    if not value_column:
        return 1
    return parse_number(row.get(value_column)) or 0


def aggregate(
    rows: Iterable[Mapping[str, Any]],
    config: PivotConfig,
    source: str = "",
) -> PivotResult:
    """Fold rows into ``cells[row_key][col_key]``.

    Args:
        rows: Parsed rows in sheet order
        config: Pivot layout (row/column grouping, optional value column)
        source: File name used when reporting data-quality warnings

    Returns:
        PivotResult with first-seen key order and the coercion warnings
    """
    cells: dict[CompositeKey, dict[CompositeKey, float]] = {}
    found: list[DataQualityWarning] = []
    value_column = config.value or None

    for index, row in enumerate(rows, start=1):
        row_key = _key(row, config.rows)
        col_key = _key(row, config.cols)
        amount = row_contribution(row, value_column)
        if value_column and amount == 0:
            raw = row.get(value_column)
            if not is_empty_value(raw) and parse_number(raw) is None:
                found.append(
                    DataQualityWarning.create(
                        source=source,
                        row=index,
                        column=value_column,
                        warning_type=NON_NUMERIC_VALUE,
                        value=format_cell(raw),
                        message="non-numeric value counted as 0",
                    )
                )
        col_values = cells.setdefault(row_key, {})
        col_values[col_key] = col_values.get(col_key, 0) + amount

    if found:
        logger.debug(f"aggregate: {len(found)} non-numeric cells in '{value_column}' counted as 0")
    return PivotResult(cells=cells, warnings=tuple(found))


def build_chart_rows(result: PivotResult, delimiter: str = COLUMN_KEY_DELIMITER) -> list[ChartRow]:
    """One ChartRow per rendered row key, in first-seen order.

    Only column keys that co-occurred with the row key become fields; there is
    no zero filling across the full column-key set.
    """
    return [
        ChartRow(name=name, values=dict(col_values))
        for name, col_values in result.to_display(delimiter).items()
    ]


def chart_series(chart_rows: Iterable[ChartRow]) -> list[str]:
    """Every column-key name across all chart rows, first-seen order."""
    series: dict[str, None] = {}
    for chart_row in chart_rows:
        for name in chart_row.values:
            series.setdefault(name, None)
    return list(series)
