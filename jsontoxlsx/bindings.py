"""Placeholder discovery in cell text."""

from __future__ import annotations

import re
from typing import Any, Iterable, List, Optional, Tuple

from .schema import Binding

BINDING = re.compile(r"\{([^{}]+)\}")


def find_bindings(value: Any) -> List[str]:
    """Return the placeholder paths in ``value`` in order of appearance."""

    if not isinstance(value, str):
        return []
    return [match.group(1) for match in BINDING.finditer(value)]


def is_binding_cell(value: Any) -> bool:
    return isinstance(value, str) and BINDING.search(value) is not None


def pure_binding(value: Any) -> Optional[str]:
    """Return the path when ``value`` is exactly one placeholder and nothing else."""

    if not isinstance(value, str):
        return None
    match = BINDING.fullmatch(value)
    return match.group(1) if match else None


def is_binding_row(values: Iterable[Any]) -> bool:
    """True when the row has cells and every one of them is a pure placeholder."""

    values = list(values)
    return bool(values) and all(pure_binding(value) is not None for value in values)


def scan_row(row_index: int, cells: Iterable[Tuple[int, Any]]) -> List[Binding]:
    """Collect the bindings of ``(column, value)`` pairs, column by column."""

    return [
        Binding(path=path, row=row_index, column=column)
        for column, value in cells
        for path in find_bindings(value)
    ]
