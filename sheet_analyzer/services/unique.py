from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from ..models.keys import UNIQUE_LIST_DELIMITER, CompositeKey, make_key, render_key

"""Unique-combination lister.

Builds the distinct combinations of the selected columns' values. Column
order matters: it is the field order inside each combination.
"""

__all__ = [
    "unique_combination_keys",
    "unique_combinations",
]


def unique_combination_keys(
    rows: Iterable[Mapping[str, Any]], columns: Sequence[str]
) -> list[CompositeKey]:
    """Distinct structured keys in first-seen order ([] for an empty selection)."""
    if not columns:
        return []
    seen: dict[CompositeKey, None] = {}
    for row in rows:
        seen.setdefault(make_key(row.get(c) for c in columns), None)
    return list(seen)


def unique_combinations(
    rows: Iterable[Mapping[str, Any]],
    columns: Sequence[str],
    delimiter: str = UNIQUE_LIST_DELIMITER,
) -> list[str]:
    """Distinct rendered combinations, e.g. ``"East - Widget"``.

    Keys that differ only in type (the text "10" and the number 10) render the
    same and are listed once.
    """
    rendered: dict[str, None] = {}
    for key in unique_combination_keys(rows, columns):
        rendered.setdefault(render_key(key, delimiter), None)
    return list(rendered)
