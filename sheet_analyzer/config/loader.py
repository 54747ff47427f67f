from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.pivot import Aggregator, PivotConfig
from ..models.table import DEFAULT_PREVIEW_ROWS

"""Config loader.

Responsibilities:
- Load the optional YAML config (pivot layout, unique-list columns, preview size,
  null sentinels, warning log switch)
- Validate it against the packaged JSON schema (analyzer_schema.json)
- Apply defaults for missing keys
- Resolve which file to load: explicit path > SHEET_ANALYZER_CONFIG > config/analyzer.yml
"""

SCHEMA_PATH = Path(__file__).parent / "analyzer_schema.json"
DEFAULT_CONFIG_PATH = Path("config/analyzer.yml")
CONFIG_ENV_VAR = "SHEET_ANALYZER_CONFIG"


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class AnalyzerConfig:
    pivot: PivotConfig = PivotConfig()
    unique_columns: tuple[str, ...] = ()
    preview_rows: int = DEFAULT_PREVIEW_ROWS
    null_sentinels: set[str] = field(default_factory=set)
    warning_log: bool = False


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: If the schema file is missing or not valid JSON, or the
            config data fails validation (unknown keys, wrong types).
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def config_from_dict(data: dict[str, Any]) -> AnalyzerConfig:
    _validate_config_schema(data)

    pivot_raw = data.get("pivot") or {}
    pivot = PivotConfig(
        rows=tuple(pivot_raw.get("rows", [])),
        cols=tuple(pivot_raw.get("cols", [])),
        value=pivot_raw.get("value") or None,
        aggregator=Aggregator.parse(pivot_raw.get("aggregator")),
    )
    return AnalyzerConfig(
        pivot=pivot,
        unique_columns=tuple(data.get("unique_columns", [])),
        preview_rows=data.get("preview_rows", DEFAULT_PREVIEW_ROWS),
        null_sentinels={s.strip().upper() for s in data.get("null_sentinels", [])},
        warning_log=bool(data.get("warning_log", False)),
    )


def load_config(path: Path) -> AnalyzerConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping: {path}")
    return config_from_dict(data)


def resolve_config_path(explicit: Path | None = None) -> Path | None:
    """Pick the config file to load, or None to run with defaults.

    An explicit path or the environment variable is returned even when the
    file does not exist, so load_config() can report it. The default location
    is only used if present.
    """
    if explicit is not None:
        return explicit
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    if DEFAULT_CONFIG_PATH.exists():
        return DEFAULT_CONFIG_PATH
    return None
