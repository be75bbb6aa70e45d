"""
catalog_import/readers/cell_grid.py

Binary workbook adapter that exposes every sheet as a matrix of raw cell values.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, time
from io import BytesIO
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Sequence
from xml.etree.ElementTree import ParseError
from zipfile import BadZipFile

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

logger = logging.getLogger(__name__)

# lxml XMLSyntaxError derives from SyntaxError, like ParseError
_READ_ERRORS = (
    InvalidFileException,
    BadZipFile,
    KeyError,
    OSError,
    ValueError,
    ParseError,
    SyntaxError,
)

CellValue = str | int | float | bool | None
SheetMatrix = tuple[tuple[CellValue, ...], ...]


class WorkbookReadError(ValueError):
    """
    Raised when the uploaded payload cannot be opened as a workbook.
    """


def normalize_cell(value: Any) -> CellValue:
    """
    Reduce an openpyxl cell value to text, number, boolean, or blank.
    """

    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return str(value)


def _row_is_blank(row: Sequence[CellValue]) -> bool:
    return all(cell is None or (isinstance(cell, str) and not cell.strip()) for cell in row)


def _build_matrix(rows: Iterable[Sequence[Any]]) -> SheetMatrix:
    matrix = [tuple(normalize_cell(cell) for cell in row) for row in rows]
    while matrix and _row_is_blank(matrix[-1]):
        matrix.pop()
    return tuple(matrix)


@dataclass(frozen=True)
class WorkbookGrid:
    """
    Read-only view of a workbook: sheet name to row matrix, in workbook order.
    """

    sheets: Mapping[str, SheetMatrix]

    @classmethod
    def from_mapping(cls, sheets: Mapping[str, Iterable[Sequence[Any]]]) -> "WorkbookGrid":
        return cls(
            sheets=MappingProxyType({name: _build_matrix(rows) for name, rows in sheets.items()})
        )

    @property
    def sheet_names(self) -> tuple[str, ...]:
        return tuple(self.sheets)

    def has_sheet(self, name: str) -> bool:
        return name in self.sheets

    def rows(self, name: str) -> SheetMatrix | None:
        return self.sheets.get(name)


def load_workbook_grid(payload: bytes) -> WorkbookGrid:
    """
    Open an `.xlsx` payload and materialize every sheet.

    Read-only worksheets parse their XML lazily, so a corrupt sheet part only
    surfaces while rows are iterated; both stages raise WorkbookReadError.
    """

    if not payload:
        raise WorkbookReadError("Uploaded workbook is empty.")

    try:
        workbook = load_workbook(filename=BytesIO(payload), read_only=True, data_only=True)
    except _READ_ERRORS as exc:
        raise WorkbookReadError(f"Invalid workbook: {exc}") from exc

    try:
        sheets = {
            worksheet.title: worksheet.iter_rows(values_only=True)
            for worksheet in workbook.worksheets
        }
        grid = WorkbookGrid.from_mapping(sheets)
    except _READ_ERRORS as exc:
        raise WorkbookReadError(f"Invalid workbook: {exc}") from exc
    finally:
        workbook.close()

    logger.debug("Loaded workbook with sheets: %s", ", ".join(grid.sheet_names))
    return grid
