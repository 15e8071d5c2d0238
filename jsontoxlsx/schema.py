"""Shared schemas for template bindings and typed cell values."""

# Module responsibilities:
# - Provide the closed set of cell value kinds exchanged between template, coercer and writer.
# - Define lightweight records for bindings and the array-mode row schema.

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Tuple, Union

from openpyxl.cell.cell import Cell, MergedCell

TemplateCell = Union[Cell, MergedCell]


class CellKind(str, Enum):
    """Kinds of values a cell can carry."""

    BOOLEAN = "boolean"
    NUMERIC = "numeric"
    STRING = "string"
    DATE = "date"
    ERROR = "error"
    FORMULA = "formula"
    BLANK = "blank"


@dataclass(frozen=True)
class CellValue:
    """Typed cell value; ``value`` always matches ``kind``."""

    kind: CellKind
    value: Any = None

    @classmethod
    def boolean(cls, value: bool) -> "CellValue":
        return cls(CellKind.BOOLEAN, bool(value))

    @classmethod
    def number(cls, value: float) -> "CellValue":
        return cls(CellKind.NUMERIC, float(value))

    @classmethod
    def string(cls, value: str) -> "CellValue":
        return cls(CellKind.STRING, value)

    @classmethod
    def date(cls, value: datetime) -> "CellValue":
        return cls(CellKind.DATE, value)

    @classmethod
    def error(cls, value: str) -> "CellValue":
        return cls(CellKind.ERROR, value)

    @classmethod
    def formula(cls, value: str) -> "CellValue":
        return cls(CellKind.FORMULA, value)

    @classmethod
    def blank(cls) -> "CellValue":
        return cls(CellKind.BLANK)

    @classmethod
    def empty(cls) -> "CellValue":
        return cls(CellKind.STRING, "")


@dataclass(frozen=True)
class Binding:
    """A placeholder path found at a zero-based cell position."""

    path: str
    row: int
    column: int


@dataclass(frozen=True)
class TemplateRow:
    """A row of present template cells with its zero-based index."""

    index: int
    cells: Tuple[TemplateCell, ...]


@dataclass(frozen=True)
class RowSchema:
    """Array-mode row layout extracted from the first binding row."""

    row_index: int
    paths: Tuple[str, ...]
    cells: Tuple[TemplateCell, ...]
    header_labels: Tuple[CellValue, ...]
