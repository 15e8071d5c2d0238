"""Merge orchestration: JSON source + template -> output workbook."""

# Module responsibilities:
# - Pick the generation strategy from the shape of the JSON input.
# - Own the write-only output workbook and flush it to the sink once per call.
# - Offer a file-path entry point for the CLI.

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import IO, Any, Callable, Dict, Iterable, Optional, Union

from openpyxl import Workbook
from openpyxl.worksheet._write_only import WriteOnlyWorksheet
from pydantic import BaseModel

from .config import MergeOptions
from .generator import copy_merge, expand_merge
from .json_source import JsonDocument, JsonKind, open_json
from .template import TemplateSheet, TemplateSource, classify, load_template
from .utils.log import get_logger

logger = get_logger("merge")

OutputSink = Union[str, Path, IO[bytes]]


class MergeMode(str, Enum):
    OBJECT = "object"
    ARRAY = "array"


class MergeResult(BaseModel):
    """Outcome of one merge call."""

    mode: Optional[MergeMode] = None
    rows_written: int = 0
    schema_row: Optional[int] = None
    output: Optional[str] = None


def _run(
    template: TemplateSource,
    out: OutputSink,
    generate: Callable[[TemplateSheet, WriteOnlyWorksheet], MergeResult],
) -> MergeResult:
    sheet = load_template(template)
    workbook = Workbook(write_only=True)
    out_sheet = workbook.create_sheet(title=sheet.worksheet.title)
    result = generate(sheet, out_sheet)

    if isinstance(out, (str, Path)):
        out = Path(out)
        out.parent.mkdir(parents=True, exist_ok=True)
        result.output = str(out)
    workbook.save(out)
    logger.info(
        "Output workbook written",
        extra={"output": result.output, "mode": result.mode, "rows_written": result.rows_written},
    )
    return result


def merge_object(
    data: Dict[str, Any],
    template: TemplateSource,
    out: OutputSink,
    options: Optional[MergeOptions] = None,
) -> MergeResult:
    """Substitute the fields of ``data`` into every binding cell of the template."""

    options = options or MergeOptions()

    def generate(sheet: TemplateSheet, out_sheet: WriteOnlyWorksheet) -> MergeResult:
        rows = copy_merge(sheet, data, out_sheet, options)
        return MergeResult(mode=MergeMode.OBJECT, rows_written=rows)

    return _run(template, out, generate)


def merge_items(
    items: Iterable[Any],
    template: TemplateSource,
    out: OutputSink,
    options: Optional[MergeOptions] = None,
) -> MergeResult:
    """Expand ``items`` into one row each, following the template's binding row."""

    options = options or MergeOptions()

    def generate(sheet: TemplateSheet, out_sheet: WriteOnlyWorksheet) -> MergeResult:
        classification = classify(sheet)
        rows = expand_merge(sheet, classification, items, out_sheet, options)
        schema_row = classification.schema.row_index if classification.schema else None
        return MergeResult(mode=MergeMode.ARRAY, rows_written=rows, schema_row=schema_row)

    return _run(template, out, generate)


def merge(
    document: JsonDocument,
    template: TemplateSource,
    out: OutputSink,
    options: Optional[MergeOptions] = None,
) -> MergeResult:
    """Dispatch on the kind of ``document``; other kinds write nothing."""

    if document.kind is JsonKind.OBJECT:
        return merge_object(document.value, template, out, options)
    if document.kind is JsonKind.ARRAY:
        return merge_items(document.value, template, out, options)
    logger.warning("Nothing to merge; no output written")
    return MergeResult()


def merge_files(
    json_path: Union[str, Path],
    template_path: Union[str, Path],
    out_path: Union[str, Path],
    options: Optional[MergeOptions] = None,
) -> MergeResult:
    """Merge the JSON file at ``json_path`` into ``template_path`` and write ``out_path``.

    Raises:
        FileNotFoundError: When the JSON or template file does not exist.
        JsonSourceError: When the JSON input is malformed.
        TemplateError: When the template cannot be read.
    """

    options = options or MergeOptions()
    json_path = Path(json_path)
    if not json_path.exists():
        raise FileNotFoundError(f"JSON input not found: {json_path}")

    logger.info(
        "Starting merge",
        extra={"json": str(json_path), "template": str(template_path), "output": str(out_path)},
    )
    with json_path.open("r", encoding="utf-8") as handle:
        document = open_json(handle, options.chunk_size)
        return merge(document, template_path, out_path, options)
