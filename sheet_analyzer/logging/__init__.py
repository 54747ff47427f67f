"""Logging setup and the data-quality warning log."""
