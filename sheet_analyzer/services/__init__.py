"""Transforms over a loaded table: type inference, aggregation, unique lists,
summary, and the application state reducers."""
