"""Unit tests for dot-path resolution."""

from __future__ import annotations

import pytest

from jsontoxlsx.resolver import MISSING, render_text, resolve_path

DATA = {
    "name": "Ann",
    "age": 41,
    "active": False,
    "address": {"city": "Ghent", "geo": {"lat": 51.05}},
    "tags": ["a", "b"],
    "nothing": None,
}


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("name", "Ann"),
        ("age", 41),
        ("active", False),
        ("address.city", "Ghent"),
        ("address.geo.lat", 51.05),
    ],
)
def test_resolve_path_hits(path: str, expected: object) -> None:
    assert resolve_path(DATA, path) == expected


@pytest.mark.parametrize(
    "path",
    ["missing", "address.zip", "name.first", "address", "tags", "tags.0", "nothing", "address..city"],
)
def test_resolve_path_falls_back_to_empty_text(path: str) -> None:
    assert resolve_path(DATA, path) == MISSING == ""


def test_render_text_natural_forms() -> None:
    assert render_text(True) == "true"
    assert render_text(False) == "false"
    assert render_text(7) == "7"
    assert render_text(2.5) == "2.5"
    assert render_text("Ann") == "Ann"
    assert render_text("") == ""


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (1e2, "100"),
        (1e20, "100000000000000000000"),
        (2.5e-7, "0.00000025"),
        (-0.0, "0"),
        (10**30, "1" + "0" * 30),
        (float("inf"), "inf"),
    ],
)
def test_render_text_writes_numbers_positionally(value: object, expected: str) -> None:
    assert render_text(value) == expected
