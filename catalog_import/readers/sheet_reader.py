"""
catalog_import/readers/sheet_reader.py

Turns one sheet matrix into header-keyed row records.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

from catalog_import.contract import ATTRIBUTE_COLUMN_PREFIX
from catalog_import.readers.cell_grid import CellValue, WorkbookGrid
from catalog_import.validators.scalar_coercers import is_blank, to_text


@dataclass(frozen=True)
class SheetRow:
    """
    One data row; `row_number` is the 1-based spreadsheet row.
    """

    row_number: int
    data: Mapping[str, CellValue]

    def get(self, column: str) -> CellValue:
        return self.data.get(column)

    def has_any_value(self, columns: Sequence[str]) -> bool:
        return any(not is_blank(self.data.get(column)) for column in columns)


@dataclass(frozen=True)
class ParsedSheet:
    name: str
    exists: bool
    headers: tuple[str, ...] = ()
    rows: tuple[SheetRow, ...] = ()
    missing_headers: tuple[str, ...] = field(default_factory=tuple)

    @property
    def attribute_headers(self) -> tuple[str, ...]:
        """
        Dynamic `attr:<identifier>` columns, each once, in sheet order.
        """

        return tuple(
            dict.fromkeys(header for header in self.headers if header.startswith(ATTRIBUTE_COLUMN_PREFIX))
        )


def build_column_index(headers: Sequence[str]) -> dict[str, int]:
    """
    Map each non-blank header to its column; a repeated header resolves to
    its rightmost column.
    """

    return {header: position for position, header in enumerate(headers) if header}


class SheetReader:
    """
    Reads named sheets from a workbook grid against a required header list.
    """

    def __init__(self, grid: WorkbookGrid) -> None:
        self._grid = grid

    def read(self, sheet_name: str, required_headers: Sequence[str]) -> ParsedSheet:
        matrix = self._grid.rows(sheet_name)
        if matrix is None:
            return ParsedSheet(
                name=sheet_name,
                exists=False,
                missing_headers=tuple(required_headers),
            )

        headers = tuple(to_text(value) for value in matrix[0]) if matrix else ()
        column_index = build_column_index(headers)
        missing = tuple(header for header in required_headers if header not in column_index)

        rows = tuple(
            SheetRow(
                row_number=offset + 1,
                data=self._row_record(matrix[offset], column_index),
            )
            for offset in range(1, len(matrix))
        )
        return ParsedSheet(
            name=sheet_name,
            exists=True,
            headers=headers,
            rows=rows,
            missing_headers=missing,
        )

    @staticmethod
    def _row_record(values: Sequence[CellValue], column_index: Mapping[str, int]) -> dict[str, Any]:
        return {
            header: values[position] if position < len(values) else None
            for header, position in column_index.items()
        }
