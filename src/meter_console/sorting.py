from __future__ import annotations

import math
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from functools import cmp_to_key
from typing import Any, Literal

Direction = Literal["asc", "desc"]


@dataclass(frozen=True)
class SortConfig:
    key: str
    direction: Direction = "asc"


def _field(row: Any, key: str) -> Any:
    if isinstance(row, Mapping):
        return row.get(key)
    return getattr(row, key, None)


def _as_number(value: Any) -> float | None:
    if value is None or value == "" or isinstance(value, bool):
        return None
    if isinstance(value, str) and "_" in value:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def compare_values(a: Any, b: Any) -> int:
    """Numeric comparison when both sides parse as finite numbers, text otherwise."""
    left, right = _as_number(a), _as_number(b)
    if left is not None and right is not None:
        return (left > right) - (left < right)
    left_text = "" if a is None else str(a).casefold()
    right_text = "" if b is None else str(b).casefold()
    return (left_text > right_text) - (left_text < right_text)


def sort_rows(data: Iterable[Any], key: str, direction: Direction = "asc") -> list[Any]:
    if direction not in ("asc", "desc"):
        raise ValueError(f"Unknown sort direction {direction!r}")
    sign = 1 if direction == "asc" else -1

    def compare(a: Any, b: Any) -> int:
        return sign * compare_values(_field(a, key), _field(b, key))

    # sorted() is stable, so ties keep their input order in both directions
    return sorted(data, key=cmp_to_key(compare))


class SortableDataset:
    def __init__(self, rows: Sequence[Any] = (), initial: SortConfig | None = None) -> None:
        self._rows = list(rows)
        self.sort_config = initial

    @property
    def rows(self) -> list[Any]:
        return list(self._rows)

    @property
    def sorted_data(self) -> list[Any]:
        if self.sort_config is None:
            return list(self._rows)
        return sort_rows(self._rows, self.sort_config.key, self.sort_config.direction)

    def request_sort(self, key: str, direction: Direction = "asc") -> None:
        self.sort_config = SortConfig(key=key, direction=direction)

    def toggle_sort(self, key: str) -> Direction:
        if self.sort_config is not None and self.sort_config.key == key and self.sort_config.direction == "asc":
            direction: Direction = "desc"
        else:
            direction = "asc"
        self.request_sort(key, direction)
        return direction

    def replace(self, rows: Sequence[Any]) -> None:
        self._rows = list(rows)
