"""Spreadsheet analyzer: column type inference, previews, unique-value lists
and pivot/chart aggregation over the first sheet of a workbook."""

__version__ = "0.1.0"
