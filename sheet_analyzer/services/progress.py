from __future__ import annotations

import sys
from typing import Any

from tqdm import tqdm
from tqdm.std import tqdm as TqdmType

"""Progress display service with tqdm (TTY only).

Large sheets take a moment to normalize and type-check; a single tqdm bar
shows row progress while a table is loaded. In non-TTY environments (pipes,
CI) the bar is disabled so stdout/stderr stay free of control sequences.
"""

__all__ = [
    "ProgressTracker",
    "is_tty_enabled",
]

# Bars for tiny sheets only flicker
MIN_ROWS_FOR_PROGRESS = 1000


def is_tty_enabled() -> bool:
    """Check if stderr is a TTY (progress bars are written to stderr)."""
    return sys.stderr.isatty()


class ProgressTracker:
    """Row progress tracker using tqdm."""

    def __init__(
        self, total_rows: int, *, description: str = "Loading rows", enabled: bool = True
    ) -> None:
        self.total_rows = total_rows
        self.description = description
        self.processed = 0

        self.enabled = enabled and is_tty_enabled() and total_rows >= MIN_ROWS_FOR_PROGRESS
        self.pbar: TqdmType[Any] | None
        if self.enabled:
            self.pbar = tqdm(
                total=total_rows,
                desc=description,
                unit="row",
                leave=False,
                ncols=80,
                ascii=True,
                file=sys.stderr,
            )
        else:
            self.pbar = None

    def advance(self, rows: int = 1) -> None:
        self.processed += rows
        if self.pbar is not None:
            self.pbar.update(rows)

    def set_postfix(self, **kwargs: Any) -> None:
        if self.pbar is not None:
            self.pbar.set_postfix(**kwargs)

    def close(self) -> None:
        if self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> ProgressTracker:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
