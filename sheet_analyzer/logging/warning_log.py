from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, datetime
from pathlib import Path

from ..models.data_quality import DataQualityWarning

"""Data-quality warning log (JSON Lines).

- Fixed schema per line (DataQualityWarning fields, no extra keys)
- One file per run: ``logs/data-quality-YYYYMMDD-HHMMSS.log`` (UTC), created
  on first flush that has records
- Serial use only; no locking
"""

__all__ = [
    "DataQualityWarning",
    "WarningLogBuffer",
]

LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


class WarningLogBuffer:
    """In-memory buffer for warning records. flush() appends JSON Lines."""

    def __init__(self, logs_dir: Path | None = None) -> None:
        self._records: list[DataQualityWarning] = []
        self._logs_dir = logs_dir if logs_dir is not None else LOGS_DIR
        self._file_path: Path | None = None

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self._logs_dir / f"data-quality-{stamp}.log"
        return self._file_path

    def append(self, record: DataQualityWarning) -> None:
        self._records.append(record)

    def extend(self, records: Iterable[DataQualityWarning]) -> None:
        self._records.extend(records)

    def __len__(self) -> int:  # pragma: no cover (trivial)
        return len(self._records)

    def flush(self) -> Path | None:
        """Write buffered records; returns the file path, or None if nothing was written."""
        if not self._records:
            return None
        fp = self.file_path
        fp.parent.mkdir(parents=True, exist_ok=True)
        with fp.open("a", encoding="utf-8") as f:
            for r in self._records:
                f.write(r.to_json_line() + "\n")
        self._records.clear()
        return fp
