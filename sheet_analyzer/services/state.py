from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from ..models.pivot import ChartRow, PivotConfig, PivotResult
from ..models.summary import DataSummary
from ..models.table import Table
from .aggregator import aggregate, build_chart_rows
from .summary import summarize_table
from .unique import unique_combinations

"""Application state and its reducers.

AppState is an immutable value; every reducer returns a new state. Derived
views (summary, pivot, chart rows) are recomputed from scratch whenever the
table or the pivot configuration changes, never updated incrementally.

Uploads are versioned with a monotonically increasing generation token:
begin_upload() hands out a token, ingest_table() drops a table whose token is
older than the latest upload so a slow read cannot overwrite a newer one.
"""

__all__ = [
    "AppState",
    "begin_upload",
    "ingest_table",
    "update_pivot_config",
    "toggle_column",
    "select_columns",
    "build_unique_list",
    "recompute",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppState:
    table: Table | None = None
    summary: DataSummary | None = None
    pivot_config: PivotConfig = PivotConfig()
    pivot: PivotResult = PivotResult()
    chart_rows: tuple[ChartRow, ...] = ()
    selected_columns: tuple[str, ...] = ()  # Unique-list selection, click order
    unique_list: tuple[str, ...] = ()
    upload_generation: int = 0


def begin_upload(state: AppState) -> tuple[AppState, int]:
    """Start a new upload; returns the new state and its generation token."""
    token = state.upload_generation + 1
    return replace(state, upload_generation=token), token


def recompute(state: AppState) -> AppState:
    """Rebuild pivot and chart rows from the full table."""
    if state.table is None:
        return replace(state, pivot=PivotResult(), chart_rows=())
    result = aggregate(state.table.rows, state.pivot_config, source=state.table.source_name)
    return replace(state, pivot=result, chart_rows=tuple(build_chart_rows(result)))


def ingest_table(state: AppState, table: Table, token: int | None = None) -> AppState:
    """Replace the table and every view derived from it.

    ``token`` is the value returned by begin_upload(). A token older than the
    current generation marks a stale upload, which is discarded. Without a
    token the table is accepted as a new upload.
    """
    if token is None:
        state, token = begin_upload(state)
    elif token < state.upload_generation:
        logger.debug(
            f"discarding stale upload {table.source_name} "
            f"(token={token} current={state.upload_generation})"
        )
        return state
    new_state = replace(
        state,
        table=table,
        summary=summarize_table(table),
        unique_list=(),
        upload_generation=max(token, state.upload_generation),
    )
    return recompute(new_state)


def update_pivot_config(state: AppState, config: PivotConfig) -> AppState:
    return recompute(replace(state, pivot_config=config))


def toggle_column(state: AppState, name: str) -> AppState:
    """Add a column to the unique-list selection, or remove it if selected."""
    if name in state.selected_columns:
        selected = tuple(c for c in state.selected_columns if c != name)
    else:
        selected = state.selected_columns + (name,)
    return replace(state, selected_columns=selected)


def select_columns(state: AppState, names: tuple[str, ...] | list[str]) -> AppState:
    return replace(state, selected_columns=tuple(names))


def build_unique_list(state: AppState) -> AppState:
    """Compute the unique list for the current selection (no-op when empty)."""
    if not state.selected_columns:
        return state
    rows = state.table.rows if state.table is not None else ()
    return replace(state, unique_list=tuple(unique_combinations(rows, state.selected_columns)))
