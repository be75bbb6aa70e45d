"""
catalog_import/readers package marker.
"""

from catalog_import.readers.cell_grid import WorkbookGrid, WorkbookReadError, load_workbook_grid
from catalog_import.readers.sheet_reader import ParsedSheet, SheetReader, SheetRow

__all__ = [
    "ParsedSheet",
    "SheetReader",
    "SheetRow",
    "WorkbookGrid",
    "WorkbookReadError",
    "load_workbook_grid",
]
