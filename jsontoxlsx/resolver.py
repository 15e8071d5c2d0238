"""Dot-path lookup in decoded JSON objects."""

# Module responsibilities:
# - Walk object members along a dot-separated path without raising on absence.
# - Render resolved scalars in their natural JSON text form.

from __future__ import annotations

import math
from decimal import Decimal
from typing import Any, Mapping

MISSING = ""


def resolve_path(data: Mapping[str, Any], path: str) -> Any:
    """Return the scalar at ``path`` or ``MISSING``.

    Only object members are navigated; arrays, nulls and nested objects at the
    end of the path are not concrete values and fall back to ``MISSING``.
    """

    current: Any = data
    for segment in path.split("."):
        if not isinstance(current, Mapping) or segment not in current:
            return MISSING
        current = current[segment]
    if current is None or isinstance(current, (Mapping, list)):
        return MISSING
    return current


def _plain_decimal(value: float) -> str:
    """Positional text of ``value``: ``1e2`` gives ``100``, ``2.5e-7`` gives ``0.00000025``."""

    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def render_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and math.isfinite(value):
        return _plain_decimal(value)
    return str(value)
