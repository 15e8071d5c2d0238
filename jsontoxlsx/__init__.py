"""`jsontoxlsx` merges JSON documents into Excel templates."""

# Module responsibilities:
# - Re-export the merge entry points and the building blocks they are made of.

from __future__ import annotations

from .bindings import find_bindings, is_binding_cell, is_binding_row, pure_binding
from .coercion import coerce_json, is_instant, parse_instant, resolve_cell_text
from .config import MergeOptions, load_options
from .errors import BindingError, ConfigError, JsonSourceError, JsonToXlsxError, TemplateError
from .json_source import JsonDocument, JsonKind, iter_array, open_json
from .merge import MergeMode, MergeResult, merge, merge_files, merge_items, merge_object
from .resolver import resolve_path
from .schema import CellKind, CellValue
from .template import Classification, classify, load_template

__all__ = [
    "find_bindings",
    "is_binding_cell",
    "is_binding_row",
    "pure_binding",
    "coerce_json",
    "is_instant",
    "parse_instant",
    "resolve_cell_text",
    "MergeOptions",
    "load_options",
    "BindingError",
    "ConfigError",
    "JsonSourceError",
    "JsonToXlsxError",
    "TemplateError",
    "JsonDocument",
    "JsonKind",
    "iter_array",
    "open_json",
    "MergeMode",
    "MergeResult",
    "merge",
    "merge_files",
    "merge_items",
    "merge_object",
    "resolve_path",
    "CellKind",
    "CellValue",
    "Classification",
    "classify",
    "load_template",
]

__version__ = "0.1.0"
