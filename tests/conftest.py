from __future__ import annotations

import logging
import os
import sys
import tempfile
from pathlib import Path
from typing import Callable, Iterable, Optional

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Keep CLI log files out of the home directory.
os.environ.setdefault("JSONTOXLSX_LOG_DIR", tempfile.mkdtemp(prefix="jsontoxlsx-logs-"))

from openpyxl import Workbook, load_workbook
from openpyxl.worksheet.worksheet import Worksheet

TemplateBuilder = Callable[..., Path]


@pytest.fixture(autouse=True)
def _reset_package_logging():
    """Drop handlers a test attached so later tests do not write through them."""

    yield
    package_logger = logging.getLogger("jsontoxlsx")
    for handler in list(package_logger.handlers):
        if isinstance(handler, logging.NullHandler):
            continue
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True


def _write_rows(ws: Worksheet, rows: Iterable[Iterable[object]]) -> None:
    for row in rows:
        ws.append(list(row))


@pytest.fixture()
def make_template(tmp_path: Path) -> TemplateBuilder:
    """Return a helper that saves a one-sheet template built from row values."""

    def _build(
        rows: Iterable[Iterable[object]],
        name: str = "template.xlsx",
        customize: Optional[Callable[[Worksheet], None]] = None,
    ) -> Path:
        wb = Workbook()
        ws = wb.active
        ws.title = "Template"
        _write_rows(ws, rows)
        if customize is not None:
            customize(ws)
        path = tmp_path / name
        wb.save(path)
        return path

    return _build


def first_sheet(path: Path) -> Worksheet:
    return load_workbook(path).worksheets[0]


def sheet_values(path: Path) -> list[tuple]:
    """Rows of the output's first sheet with fully empty rows dropped."""

    ws = first_sheet(path)
    return [
        row for row in ws.iter_rows(values_only=True) if any(value is not None for value in row)
    ]
