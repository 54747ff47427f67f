from __future__ import annotations

import argparse
import json
import sys
from datetime import date
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd
from dotenv import load_dotenv

from ..config.loader import AnalyzerConfig, ConfigError, load_config, resolve_config_path
from ..excel.reader import SpreadsheetReadError
from ..logging.init import get_logger, log_summary, set_debug, setup_logging
from ..logging.warning_log import WarningLogBuffer
from ..models.keys import format_cell
from ..models.pivot import Aggregator, PivotConfig
from ..models.table import Table
from ..services.aggregator import chart_series
from ..services.ingest import load_table
from ..services.state import (
    AppState,
    build_unique_list,
    ingest_table,
    select_columns,
)
from ..services.summary import render_summary_details, render_summary_line

"""CLI entrypoint.

Flow:
- Load .env, resolve and load the optional YAML config
- Read the first sheet of the given workbook into a Table
- Feed it through the AppState reducers and print the requested view to stdout

Log lines (INFO/WARN/ERROR/SUMMARY) go to stderr.
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_DATA_WARNINGS = 2  # --strict and data-quality warnings were found

# Individual warnings echoed to the log before collapsing into a count
MAX_LOGGED_WARNINGS = 10


def _load_env_file(path: Path, override: bool = False) -> None:
    """Load .env using python-dotenv (existing environment wins by default)."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _common_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("file", type=Path, help="Workbook (.xlsx/.xlsm/.xls); the first sheet is read")
    common.add_argument("--config", type=Path, default=None, help="YAML config file")
    common.add_argument("--debug", action="store_true", help="Enable debug logging")
    common.add_argument("--json", action="store_true", help="Print JSON instead of text")
    return common


def _add_pivot_options(p: argparse.ArgumentParser) -> None:
    p.add_argument("--rows", action="append", default=None, metavar="COLUMN", help="Row grouping column (repeatable)")
    p.add_argument("--cols", action="append", default=None, metavar="COLUMN", help="Column grouping column (repeatable)")
    p.add_argument("--value", default=None, metavar="COLUMN", help="Numeric value column (omit to count rows)")
    p.add_argument("--aggregator", choices=[a.value for a in Aggregator], default=None)
    p.add_argument("--strict", action="store_true", help="Exit with code 2 when non-numeric values were counted as 0")
    p.add_argument("--warning-log", action="store_true", help="Write data-quality warnings to logs/ as JSON Lines")


def _parse_args(argv: list[str]) -> argparse.Namespace:
    common = _common_parser()
    p = argparse.ArgumentParser(
        prog="sheet-analyzer",
        description="Spreadsheet column typing, preview, unique lists and pivot aggregation",
    )
    sub = p.add_subparsers(dest="command", required=True)
    sub.add_parser("columns", parents=[common], help="Show inferred column types")
    sub.add_parser("summary", parents=[common], help="Show row/column counts by type")
    preview = sub.add_parser("preview", parents=[common], help="Show the first rows")
    preview.add_argument("-n", "--limit", type=int, default=None, help="Rows to show (default from config: 5)")
    preview.add_argument("--all", action="store_true", help="Show every row")
    unique = sub.add_parser("unique", parents=[common], help="List distinct value combinations")
    unique.add_argument("--column", action="append", default=None, metavar="COLUMN", help="Column to combine (repeatable, order matters)")
    pivot = sub.add_parser("pivot", parents=[common], help="Aggregate rows into a pivot table")
    _add_pivot_options(pivot)
    chart = sub.add_parser("chart", parents=[common], help="Print chart-ready rows (JSON)")
    _add_pivot_options(chart)
    return p.parse_args(argv)


def _to_jsonable(x: Any) -> Any:
    if isinstance(x, date):
        return format_cell(x)
    if isinstance(x, np.bool_):
        return bool(x)
    if isinstance(x, np.integer):
        return int(x)
    if isinstance(x, np.floating):
        return float(x)
    return x


def _print_json(payload: Any) -> None:
    print(json.dumps(payload, ensure_ascii=False, indent=2, default=_to_jsonable))


def _pivot_config_from_args(args: argparse.Namespace, base: PivotConfig) -> PivotConfig:
    return PivotConfig(
        rows=tuple(args.rows) if args.rows is not None else base.rows,
        cols=tuple(args.cols) if args.cols is not None else base.cols,
        value=args.value if args.value is not None else base.value,
        aggregator=Aggregator.parse(args.aggregator) if args.aggregator else base.aggregator,
    )


def _warn_unknown_columns(table: Table, names: list[str]) -> None:
    known = set(table.column_names)
    for name in dict.fromkeys(names):
        if name not in known:
            get_logger().warning(f"unknown column '{name}' (values read as empty)")


def _show_columns(state: AppState, args: argparse.Namespace) -> int:
    assert state.table is not None
    records = [{"name": c.name, "type": c.type.value} for c in state.table.columns]
    if args.json:
        _print_json(records)
    elif records:
        print(pd.DataFrame(records).to_string(index=False))
    else:
        print("(no columns)")
    return EXIT_SUCCESS


def _show_summary(state: AppState, args: argparse.Namespace) -> int:
    assert state.summary is not None
    s = state.summary
    if args.json:
        _print_json(
            {
                "row_count": s.row_count,
                "column_count": s.column_count,
                "numeric_columns": s.numeric_columns,
                "categorical_columns": s.categorical_columns,
                "date_columns": s.date_columns,
            }
        )
    else:
        for line in render_summary_details(s):
            print(line)
    return EXIT_SUCCESS


def _show_preview(state: AppState, args: argparse.Namespace, cfg: AnalyzerConfig) -> int:
    assert state.table is not None
    limit = None if args.all else (args.limit if args.limit is not None else cfg.preview_rows)
    rows = state.table.preview(limit)
    if args.json:
        _print_json(rows)
        return EXIT_SUCCESS
    if not rows:
        print("(no rows)")
        return EXIT_SUCCESS
    frame = pd.DataFrame(
        [[format_cell(r.get(c)) for c in state.table.column_names] for r in rows],
        columns=state.table.column_names,
    )
    print(frame.to_string(index=False))
    return EXIT_SUCCESS


def _show_unique(state: AppState, args: argparse.Namespace, cfg: AnalyzerConfig) -> int:
    assert state.table is not None
    columns = tuple(args.column) if args.column is not None else cfg.unique_columns
    if not columns:
        get_logger().warning("unique: no columns selected")
    _warn_unknown_columns(state.table, list(columns))
    state = build_unique_list(select_columns(state, columns))
    if args.json:
        _print_json(list(state.unique_list))
    else:
        for value in state.unique_list:
            print(value)
    get_logger().info(f"unique: {len(state.unique_list)} combinations of {list(columns)}")
    return EXIT_SUCCESS


def _report_warnings(state: AppState, args: argparse.Namespace, cfg: AnalyzerConfig) -> int:
    logger = get_logger()
    found = state.pivot.warnings
    for w in found[:MAX_LOGGED_WARNINGS]:
        logger.warning(f"row {w.row}: {w.column}={w.value!r} {w.message}")
    if len(found) > MAX_LOGGED_WARNINGS:
        logger.warning(f"... {len(found) - MAX_LOGGED_WARNINGS} more non-numeric values counted as 0")
    if found and (args.warning_log or cfg.warning_log):
        buffer = WarningLogBuffer()
        buffer.extend(found)
        path = buffer.flush()
        logger.info(f"data-quality warnings written to {path}")
    if found and args.strict:
        return EXIT_DATA_WARNINGS
    return EXIT_SUCCESS


def _show_pivot(state: AppState, args: argparse.Namespace, cfg: AnalyzerConfig) -> int:
    assert state.table is not None
    config = state.pivot_config
    _warn_unknown_columns(state.table, config.referenced_columns)
    if args.json:
        _print_json(
            {
                "rows": list(config.rows),
                "cols": list(config.cols),
                "value": config.value,
                "aggregator": config.aggregator.value,
                "data": state.pivot.to_display(),
            }
        )
    elif state.pivot.is_empty:
        print("(no rows)")
    else:
        print(config.heading)
        print(state.pivot.to_frame().to_string(na_rep=""))
    return _report_warnings(state, args, cfg)


def _show_chart(state: AppState, args: argparse.Namespace, cfg: AnalyzerConfig) -> int:
    assert state.table is not None
    _warn_unknown_columns(state.table, state.pivot_config.referenced_columns)
    _print_json(
        {
            "series": chart_series(state.chart_rows),
            "data": [r.to_record() for r in state.chart_rows],
        }
    )
    return _report_warnings(state, args, cfg)


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None のときのみ sys.argv を読む (テストで main([...]) を呼ぶため)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"))

    if args.debug:
        set_debug(True)
        logger.debug("debug mode enabled")

    config_path = resolve_config_path(args.config)
    try:
        cfg = load_config(config_path) if config_path is not None else AnalyzerConfig()
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL
    if config_path is not None:
        logger.debug(f"config loaded from {config_path}")

    try:
        table = load_table(args.file, null_sentinels=cfg.null_sentinels)
    except SpreadsheetReadError as e:
        logger.error(f"read: {e}")
        return EXIT_FATAL

    pivot_config = cfg.pivot
    if args.command in ("pivot", "chart"):
        pivot_config = _pivot_config_from_args(args, cfg.pivot)

    state = ingest_table(AppState(pivot_config=pivot_config), table)

    if args.command == "columns":
        code = _show_columns(state, args)
    elif args.command == "summary":
        code = _show_summary(state, args)
    elif args.command == "preview":
        code = _show_preview(state, args, cfg)
    elif args.command == "unique":
        code = _show_unique(state, args, cfg)
    elif args.command == "pivot":
        code = _show_pivot(state, args, cfg)
    else:
        code = _show_chart(state, args, cfg)

    assert state.summary is not None
    # log_summary が "SUMMARY " を付与するため先頭ラベルを除去
    log_summary(render_summary_line(state.summary)[len("SUMMARY "):])
    return code
