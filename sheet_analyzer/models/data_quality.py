from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""DataQualityWarning model for the data-quality warning log.

Aggregation never fails on bad cell data: a non-numeric value in the value
column contributes 0. Each such coercion is reported as one DataQualityWarning
so the caller can see what was dropped instead of losing it silently.

Records are serialized as JSON Lines with a fixed key set (see
tests/contract/test_warning_log_schema_contract.py).
"""

__all__ = [
    "DataQualityWarning",
    "NON_NUMERIC_VALUE",
]

NON_NUMERIC_VALUE = "NON_NUMERIC_VALUE"


@dataclass(frozen=True)
class DataQualityWarning:
    """Structured data-quality warning.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        source: File name of the table being processed ("" when unknown)
        row: 1-based data row number (header excluded)
        column: Column the warning concerns
        warning_type: Classification in UPPER_SNAKE_CASE
        value: Rendered offending value ("" when not applicable)
        message: Human readable description
    """
    timestamp: str  # ISO8601 UTC
    source: str
    row: int  # データ行番号 (ヘッダ除く, 1 始まり)
    column: str
    warning_type: str  # UPPER_SNAKE
    value: str
    message: str

    @staticmethod
    def create(
        source: str, row: int, column: str, warning_type: str, value: str, message: str
    ) -> DataQualityWarning:
        """Create a new DataQualityWarning stamped with the current UTC time."""
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return DataQualityWarning(
            timestamp=ts,
            source=source,
            row=row,
            column=column,
            warning_type=warning_type,
            value=value,
            message=message,
        )

    def to_json_line(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False)
