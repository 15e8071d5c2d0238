"""Template workbook loading and classification."""

# Module responsibilities:
# - Load the template with openpyxl and expose its first sheet as ordered rows of present cells.
# - Report column widths and freeze-pane state for the writer.
# - Detect the first binding row, which switches the template into array mode.

from __future__ import annotations

import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Dict, Iterator, List, Optional, Union

from openpyxl import load_workbook
from openpyxl.utils import column_index_from_string
from openpyxl.utils.exceptions import InvalidFileException
from openpyxl.worksheet.formula import ArrayFormula, DataTableFormula
from openpyxl.worksheet.worksheet import Worksheet

from .bindings import is_binding_row, pure_binding, scan_row
from .errors import TemplateError
from .schema import Binding, CellKind, CellValue, RowSchema, TemplateCell, TemplateRow
from .utils.log import get_logger

logger = get_logger("template")

TemplateSource = Union[str, Path, IO[bytes]]

_FROZEN_STATES = {"frozen", "frozenSplit"}


def template_value(cell: TemplateCell) -> CellValue:
    """Read a template cell's native value into the closed value variants."""

    value = cell.value
    if value is None:
        return CellValue.blank()
    data_type = cell.data_type
    if data_type == "b":
        return CellValue.boolean(value)
    if data_type == "e":
        return CellValue.error(str(value))
    if data_type == "f":
        text = value.text if isinstance(value, (ArrayFormula, DataTableFormula)) else value
        text = str(text or "")
        return CellValue.formula(text[1:] if text.startswith("=") else text)
    if data_type == "d":
        return CellValue.date(value)
    if data_type == "n":
        return CellValue(CellKind.NUMERIC, value)
    if data_type in ("s", "inlineStr"):
        return CellValue.string(str(value))
    return CellValue.blank()


def _is_present(cell: TemplateCell) -> bool:
    return cell.value is not None or cell.has_style


class TemplateSheet:
    """Read-only view over the first worksheet of a template workbook."""

    def __init__(self, worksheet: Worksheet) -> None:
        self.worksheet = worksheet
        self._rows = list(self._collect_rows())

    def _collect_rows(self) -> Iterator[TemplateRow]:
        for index, cells in enumerate(self.worksheet.iter_rows()):
            present = tuple(cell for cell in cells if _is_present(cell))
            if present:
                yield TemplateRow(index=index, cells=present)

    def rows(self) -> List[TemplateRow]:
        return list(self._rows)

    def row(self, index: int) -> Optional[TemplateRow]:
        for candidate in self._rows:
            if candidate.index == index:
                return candidate
        return None

    def bindings(self) -> List[Binding]:
        """All placeholders of the sheet, top to bottom and left to right."""

        found: List[Binding] = []
        for row in self._rows:
            found.extend(scan_row(row.index, ((cell.column - 1, cell.value) for cell in row.cells)))
        return found

    @property
    def has_freeze_pane(self) -> bool:
        pane = self.worksheet.sheet_view.pane
        return pane is not None and pane.state in _FROZEN_STATES

    @property
    def column_widths(self) -> Dict[int, float]:
        """Explicit widths keyed by zero-based column index."""

        widths: Dict[int, float] = {}
        for key, dimension in self.worksheet.column_dimensions.items():
            if not dimension.width:
                continue
            start = dimension.min or column_index_from_string(key)
            end = dimension.max or start
            for column in range(start, end + 1):
                widths[column - 1] = dimension.width
        return widths


@dataclass(frozen=True)
class Classification:
    """Outcome of scanning a template for an array-mode schema row."""

    schema: Optional[RowSchema] = None

    @property
    def array_mode(self) -> bool:
        return self.schema is not None


def load_template(source: TemplateSource) -> TemplateSheet:
    """Load a template workbook and return its first sheet.

    Args:
        source: Path or binary file object of an ``.xlsx`` workbook.

    Returns:
        TemplateSheet over the first worksheet.

    Raises:
        FileNotFoundError: When a template path does not exist.
        TemplateError: When the workbook cannot be parsed or has no worksheet.
    """

    if isinstance(source, (str, Path)):
        source = Path(source)
        if not source.exists():
            raise FileNotFoundError(f"Template workbook not found: {source}")

    try:
        workbook = load_workbook(source, rich_text=False)
    except (InvalidFileException, zipfile.BadZipFile, KeyError) as exc:
        logger.error("Failed to read template workbook", extra={"error": str(exc)})
        raise TemplateError(f"Unreadable template workbook: {exc}") from exc

    if not workbook.worksheets:
        raise TemplateError("Template workbook has no worksheet")

    sheet = TemplateSheet(workbook.worksheets[0])
    logger.info(
        "Template loaded",
        extra={"sheet": sheet.worksheet.title, "rows": len(sheet.rows())},
    )
    return sheet


def classify(sheet: TemplateSheet) -> Classification:
    """Find the first binding row and derive the array-mode row schema from it.

    The header labels are the binding row's own cell texts, placeholders
    included, wherever that row sits in the sheet.
    """

    for row in sheet.rows():
        if not is_binding_row(cell.value for cell in row.cells):
            continue
        schema = RowSchema(
            row_index=row.index,
            paths=tuple(pure_binding(cell.value) for cell in row.cells),
            cells=row.cells,
            header_labels=tuple(CellValue.string(cell.value) for cell in row.cells),
        )
        return Classification(schema=schema)
    return Classification()
