"""Domain models for the spreadsheet analyzer.

This package contains the value types shared by the reader, the transforms
(type inference, aggregation, unique lists) and the application state.
"""

from .column import Column, ColumnType
from .data_quality import DataQualityWarning
from .keys import CompositeKey, format_cell, make_key, render_key
from .pivot import Aggregator, ChartRow, PivotConfig, PivotResult
from .summary import DataSummary
from .table import Row, Table

__all__ = [
    # Table models
    "Column",
    "ColumnType",
    "Row",
    "Table",
    "DataSummary",
    # Pivot models
    "Aggregator",
    "ChartRow",
    "CompositeKey",
    "PivotConfig",
    "PivotResult",
    "format_cell",
    "make_key",
    "render_key",
    # Data quality
    "DataQualityWarning",
]
