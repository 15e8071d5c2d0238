"""Row/sheet generation strategies for object and array mode."""

# Module responsibilities:
# - copy_merge(): replay the template sheet, substituting binding cells from one JSON object.
# - expand_merge(): write a header plus one row per JSON array element using the row schema.
# - Clone template styles by value and replicate column widths and the freeze pane.

from __future__ import annotations

from copy import copy
from typing import Any, Dict, Iterable, List, Optional

from openpyxl.cell import WriteOnlyCell
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE, Cell
from openpyxl.utils import get_column_letter
from openpyxl.worksheet._write_only import WriteOnlyWorksheet

from .bindings import is_binding_cell
from .coercion import resolve_cell_text
from .config import MergeOptions
from .schema import CellKind, CellValue, TemplateCell
from .template import Classification, TemplateSheet, template_value
from .utils.log import get_logger

logger = get_logger("generator")


def clone_style(source: TemplateCell, target: Cell) -> None:
    """Copy every style aspect of ``source`` onto ``target`` by value."""

    if not source.has_style:
        return
    target.font = copy(source.font)
    target.fill = copy(source.fill)
    target.border = copy(source.border)
    target.alignment = copy(source.alignment)
    target.protection = copy(source.protection)
    target.number_format = source.number_format


def make_cell(
    out_sheet: WriteOnlyWorksheet,
    value: CellValue,
    source: TemplateCell,
    date_format: Optional[str] = None,
) -> Cell:
    """Build an output cell holding ``value`` styled like ``source``.

    ``date_format`` replaces the cloned number format for date values.
    """

    cell = WriteOnlyCell(out_sheet)
    clone_style(source, cell)
    if value.kind is CellKind.BLANK:
        return cell

    content = value.value
    if isinstance(content, str):
        # Control characters are not allowed in worksheet XML.
        content = ILLEGAL_CHARACTERS_RE.sub("", content)
    cell.value = content
    if value.kind in (CellKind.STRING, CellKind.FORMULA):
        # Text starting with "=" or looking like "#N/A" stays text.
        cell.data_type = "s"
    elif value.kind is CellKind.ERROR:
        cell.data_type = "e"
    elif value.kind is CellKind.DATE and date_format:
        cell.number_format = date_format
    return cell


def _positioned(cells: Dict[int, Cell]) -> List[Optional[Cell]]:
    if not cells:
        return []
    row: List[Optional[Cell]] = [None] * (max(cells) + 1)
    for column, cell in cells.items():
        row[column] = cell
    return row


def prepare_sheet(
    out_sheet: WriteOnlyWorksheet,
    template: TemplateSheet,
    columns: Iterable[int],
    options: MergeOptions,
) -> None:
    """Apply freeze pane and column widths; must run before the first row is appended."""

    if options.freeze_header and template.has_freeze_pane:
        out_sheet.freeze_panes = "A2"
    if not options.copy_column_widths:
        return
    widths = template.column_widths
    for column in sorted(set(columns)):
        if column in widths:
            out_sheet.column_dimensions[get_column_letter(column + 1)].width = widths[column]


def copy_merge(
    template: TemplateSheet,
    data: Dict[str, Any],
    out_sheet: WriteOnlyWorksheet,
    options: MergeOptions,
) -> int:
    """Write the template sheet with its binding cells resolved against ``data``.

    Output rows and columns mirror the template; missing template rows are
    written as empty rows to keep the indices aligned.

    Returns:
        Number of template rows written.
    """

    rows = template.rows()
    prepare_sheet(
        out_sheet,
        template,
        (cell.column - 1 for row in rows for cell in row.cells),
        options,
    )

    next_index = 0
    for row in rows:
        while next_index < row.index:
            out_sheet.append([])
            next_index += 1
        cells: Dict[int, Cell] = {}
        for source in row.cells:
            if is_binding_cell(source.value):
                cells[source.column - 1] = make_cell(
                    out_sheet,
                    resolve_cell_text(source.value, data),
                    source,
                    options.date_format,
                )
            else:
                cells[source.column - 1] = make_cell(out_sheet, template_value(source), source)
        out_sheet.append(_positioned(cells))
        next_index += 1

    logger.info(
        "Object merge complete",
        extra={"rows": len(rows), "bindings": len(template.bindings())},
    )
    return len(rows)


def expand_merge(
    template: TemplateSheet,
    classification: Classification,
    items: Iterable[Any],
    out_sheet: WriteOnlyWorksheet,
    options: MergeOptions,
) -> int:
    """Write a header and one row per object in ``items``.

    ``items`` is consumed lazily; each row is appended before the next element
    is pulled. ``None`` and non-object elements are skipped. Without a schema
    row nothing is written.

    Returns:
        Number of data rows written.
    """

    schema = classification.schema
    if schema is None:
        logger.warning("Template has no binding row; array input produces an empty sheet")
        prepare_sheet(out_sheet, template, (), options)
        return 0

    columns = [cell.column - 1 for cell in schema.cells]
    prepare_sheet(out_sheet, template, columns, options)

    header = {
        source.column - 1: make_cell(out_sheet, label, source)
        for source, label in zip(schema.cells, schema.header_labels)
    }
    out_sheet.append(_positioned(header))

    written = 0
    skipped = 0
    for item in items:
        if not isinstance(item, dict):
            skipped += 1
            logger.debug("Skipping non-object array element", extra={"type": type(item).__name__})
            continue
        cells = {
            column: make_cell(
                out_sheet,
                resolve_cell_text(source.value, item),
                source,
                options.date_format,
            )
            for column, source in zip(columns, schema.cells)
        }
        out_sheet.append(_positioned(cells))
        written += 1

    logger.info(
        "Array merge complete",
        extra={"schema_row": schema.row_index, "rows": written, "skipped": skipped},
    )
    return written
