"""Workbook reading and sheet normalization."""
