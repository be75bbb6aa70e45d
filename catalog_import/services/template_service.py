"""
catalog_import/services/template_service.py

Blank import workbook generation. Header rows are taken from the same
contract constants the validator reads, so a generated template always
validates cleanly.
"""

from __future__ import annotations

import json
from io import BytesIO
from typing import Any, Sequence

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter

from catalog_import.contract import (
    ATTRIBUTE_COLUMN_PREFIX,
    ATTRIBUTE_HEADERS,
    ATTRIBUTES_SHEET,
    CONFIG_HEADERS,
    CONFIG_SHEET,
    DEFAULT_ERROR_POLICY,
    DEFAULT_IMPORT_MODE,
    DEFAULT_LANGUAGE,
    DEFAULT_PRODUCT_SHEETS,
    GROUP_HEADERS,
    GROUPS_SHEET,
    ITEM_BASE_HEADERS,
    ITEM_PARENTS_SHEET,
    README_SHEET,
    TYPE_GROUP_BINDING_HEADERS,
    TYPE_GROUP_BINDINGS_SHEET,
    TYPE_HEADERS,
    TYPES_SHEET,
)
from catalog_import.domain.attribute_types import TYPE_CODE_HELP

TEMPLATE_FILENAME = "Catalog_Import_Template.xlsx"

_HEADER_FILL = PatternFill(start_color="FFF2CC", end_color="FFF2CC", fill_type="solid")
_HEADER_FONT = Font(bold=True)

_ROOT_TYPE = "product_type"
_ROOT_ITEM = "catalog_root_001"
_GROUPS: tuple[tuple[str, str, int], ...] = (
    ("cutting_geometry", "Cutting Geometry", 10),
    ("commercial", "Commercial Data", 20),
)
_EXAMPLE_ATTRIBUTE = "cutting_diameter"
_EXAMPLE_DIAMETERS: tuple[float, ...] = (12.7, 8.5, 6.2)
_EXAMPLE_MATERIALS: tuple[str, ...] = ("Carbide", "Steel", "HSS")
_TYPE_ICONS: tuple[tuple[str, str], ...] = (
    ("saw-blade", "indigo"),
    ("tools", "teal"),
    ("drill", "orange"),
)


def product_type_identifier(sheet_name: str) -> str:
    return sheet_name.strip().lower()


def _append_header(worksheet, columns: Sequence[str]) -> None:
    worksheet.append(list(columns))
    worksheet.freeze_panes = "A2"
    for idx, column_name in enumerate(columns, start=1):
        cell = worksheet.cell(row=1, column=idx)
        cell.fill = _HEADER_FILL
        cell.font = _HEADER_FONT
        worksheet.column_dimensions[get_column_letter(idx)].width = max(14, min(36, len(column_name) + 5))


def _add_sheet(workbook: Workbook, name: str, headers: Sequence[str], rows: Sequence[Sequence[Any]]) -> None:
    worksheet = workbook.create_sheet(name)
    _append_header(worksheet, headers)
    for row in rows:
        worksheet.append(list(row))


def _readme_lines(product_sheets: Sequence[str]) -> list[str]:
    return [
        "Catalog Excel Import Template",
        "",
        "Required product sheets:",
        ", ".join(product_sheets),
        "",
        "Fill metadata sheets first:",
        GROUPS_SHEET,
        ATTRIBUTES_SHEET,
        TYPES_SHEET,
        TYPE_GROUP_BINDINGS_SHEET,
        ITEM_PARENTS_SHEET,
        "",
        "Rules:",
        "1) All identifiers must be unique and stable. Identifiers are case-insensitive.",
        "2) Create or reference parent items for child types. Child-type products require parent_identifier.",
        "3) Product values can be set through values_json or through dynamic columns "
        f"{ATTRIBUTE_COLUMN_PREFIX}<attribute_identifier>.",
        "4) values_json and channels_json must contain valid JSON objects.",
        "5) Attribute type_code values:",
        TYPE_CODE_HELP,
        "6) Booleans accept: true/false/1/0/yes/no.",
        "7) Type_Group_Bindings sheet is used to propagate type visibility/validity to attributes by group.",
        "8) Item_Parents rows are imported before product sheets so product rows can reference them.",
    ]


def build_import_template(product_sheets: Sequence[str] = DEFAULT_PRODUCT_SHEETS) -> Workbook:
    """
    Build the import workbook with a README sheet and one example row per sheet.
    """

    product_types = [product_type_identifier(sheet) for sheet in product_sheets]

    workbook = Workbook()
    workbook.remove(workbook.active)

    readme = workbook.create_sheet(README_SHEET)
    for line in _readme_lines(product_sheets):
        readme.append([line])
    readme.column_dimensions["A"].width = 120

    _add_sheet(
        workbook,
        CONFIG_SHEET,
        CONFIG_HEADERS,
        [
            ["mode", DEFAULT_IMPORT_MODE],
            ["errors", DEFAULT_ERROR_POLICY],
            ["default_language", DEFAULT_LANGUAGE],
        ],
    )
    _add_sheet(
        workbook,
        GROUPS_SHEET,
        GROUP_HEADERS,
        [[identifier, name, order, "TRUE", "{}"] for identifier, name, order in _GROUPS],
    )
    _add_sheet(
        workbook,
        ATTRIBUTES_SHEET,
        ATTRIBUTE_HEADERS,
        [
            [_EXAMPLE_ATTRIBUTE, "Cutting Diameter", 4, "cutting_geometry", 10,
             "FALSE", "FALSE", "FALSE", "", "", "{}", "", ""],
            ["material", "Material", 1, "commercial", 20,
             "FALSE", "FALSE", "FALSE", "", "", "{}", "", ""],
            ["is_coated", "Is Coated", 2, "commercial", 30,
             "FALSE", "FALSE", "FALSE", "", "", "{}", "", ""],
        ],
    )

    type_rows: list[list[Any]] = [[_ROOT_TYPE, "Product Type", "", "shape-outline", "blue", "FALSE"]]
    for index, (sheet, type_identifier) in enumerate(zip(product_sheets, product_types)):
        icon, color = _TYPE_ICONS[index % len(_TYPE_ICONS)]
        type_rows.append([type_identifier, sheet.replace("_", " "), _ROOT_TYPE, icon, color, "FALSE"])
    _add_sheet(workbook, TYPES_SHEET, TYPE_HEADERS, type_rows)

    _add_sheet(
        workbook,
        TYPE_GROUP_BINDINGS_SHEET,
        TYPE_GROUP_BINDING_HEADERS,
        [
            [group_identifier, type_identifier, "TRUE", "TRUE"]
            for group_identifier, _, _ in _GROUPS
            for type_identifier in product_types
        ],
    )
    _add_sheet(
        workbook,
        ITEM_PARENTS_SHEET,
        ITEM_BASE_HEADERS,
        [[_ROOT_ITEM, "Catalog Root 001", _ROOT_TYPE, "", "{}", "{}"]],
    )

    product_headers = (*ITEM_BASE_HEADERS, f"{ATTRIBUTE_COLUMN_PREFIX}{_EXAMPLE_ATTRIBUTE}")
    for index, (sheet, type_identifier) in enumerate(zip(product_sheets, product_types)):
        values = {
            "material": _EXAMPLE_MATERIALS[index % len(_EXAMPLE_MATERIALS)],
            "is_coated": index % 2 == 0,
        }
        _add_sheet(
            workbook,
            sheet,
            product_headers,
            [[
                f"{type_identifier}_001",
                f"{sheet.replace('_', ' ')} 001",
                type_identifier,
                _ROOT_ITEM,
                json.dumps(values, separators=(",", ":")),
                "{}",
                _EXAMPLE_DIAMETERS[index % len(_EXAMPLE_DIAMETERS)],
            ]],
        )

    return workbook


def render_import_template(product_sheets: Sequence[str] = DEFAULT_PRODUCT_SHEETS) -> bytes:
    buffer = BytesIO()
    build_import_template(product_sheets).save(buffer)
    return buffer.getvalue()
