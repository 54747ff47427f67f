"""Command-line interface (``python -m sheet_analyzer.cli`` / ``sheet-analyzer``)."""

from .main import main

__all__ = ["main"]
