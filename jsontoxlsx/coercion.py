"""Coercion of resolved JSON values into typed cell values."""

# Module responsibilities:
# - Turn a binding cell's text plus a JSON object into one CellValue.
# - Detect ISO-8601 instants so they land in the sheet as real dates.

from __future__ import annotations

import math
import re
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from .bindings import BINDING, find_bindings, pure_binding
from .errors import BindingError
from .resolver import resolve_path, render_text
from .schema import CellValue

_INSTANT = re.compile(
    r"(?P<date>\d{4}-\d{2}-\d{2})T(?P<time>\d{2}:\d{2}(?::\d{2})?)"
    r"(?:\.(?P<fraction>\d{1,9}))?(?P<offset>Z|z|[+-]\d{2}:\d{2})"
)


def parse_instant(text: str) -> Optional[datetime]:
    """Parse an ISO-8601 instant into a naive UTC datetime.

    Returns ``None`` for anything that is not a complete instant with a zone
    designator, including look-alikes with impossible dates.
    """

    match = _INSTANT.fullmatch(text)
    if match is None:
        return None
    offset = match.group("offset")
    normalized = f"{match.group('date')}T{match.group('time')}"
    if match.group("fraction"):
        normalized += "." + match.group("fraction")[:6].ljust(6, "0")
    normalized += "+00:00" if offset in ("Z", "z") else offset
    try:
        parsed = datetime.fromisoformat(normalized)
    except ValueError:
        return None
    return parsed.astimezone(timezone.utc).replace(tzinfo=None)


def is_instant(text: Any) -> bool:
    return isinstance(text, str) and parse_instant(text) is not None


def coerce_json(value: Any) -> CellValue:
    """Map one resolved JSON value onto the cell value variants."""

    if isinstance(value, bool):
        return CellValue.boolean(value)
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            number = math.inf
        if math.isfinite(number):
            return CellValue.number(number)
        # Outside the double range: written as text.
        return CellValue.string(render_text(value))
    if isinstance(value, str):
        instant = parse_instant(value)
        if instant is not None:
            return CellValue.date(instant)
        return CellValue.string(value)
    return CellValue.empty()


def resolve_cell_text(cell_text: str, data: Mapping[str, Any]) -> CellValue:
    """Compute the value of a binding cell against ``data``.

    A cell that is exactly one placeholder keeps the JSON type of what it
    resolves to. Anything else becomes a string with every placeholder
    replaced, left to right, by the text of its resolved value.

    Raises:
        BindingError: When ``cell_text`` holds no placeholder.
    """

    paths = find_bindings(cell_text)
    if not paths:
        raise BindingError(f"Cell text has no placeholder: {cell_text!r}")

    single = pure_binding(cell_text)
    if single is not None:
        return coerce_json(resolve_path(data, single))

    return CellValue.string(
        BINDING.sub(lambda match: render_text(resolve_path(data, match.group(1))), cell_text)
    )
