from __future__ import annotations

from io import BytesIO
from typing import Any
from zipfile import ZipFile

import pytest

from catalog_import.contract import (
    ATTRIBUTE_HEADERS,
    CONFIG_HEADERS,
    GROUP_HEADERS,
    ITEM_BASE_HEADERS,
    TYPE_GROUP_BINDING_HEADERS,
    TYPE_HEADERS,
)
from catalog_import.domain.catalog import ValidationResult
from catalog_import.readers.cell_grid import WorkbookGrid
from catalog_import.services.workbook_validation_service import WorkbookValidationService

PRODUCT_HEADERS = [*ITEM_BASE_HEADERS, "attr:cutting_diameter", "attr:material"]


def attribute_row(identifier: str, name: str, type_code: Any, groups: str, **overrides: Any) -> list[Any]:
    row = dict.fromkeys(ATTRIBUTE_HEADERS, "")
    row.update(
        identifier=identifier,
        name_en=name,
        type_code=type_code,
        groups_csv=groups,
        language_dependent="FALSE",
        rich_text="FALSE",
        multi_line="FALSE",
        options_json="{}",
    )
    row.update(overrides)
    return [row[header] for header in ATTRIBUTE_HEADERS]


def build_sheets() -> dict[str, list[list[Any]]]:
    """
    Minimal well-formed workbook: validates with no errors and no warnings.
    """

    product_types = ["tct_router_bit", "insert_tool", "countersink"]
    return {
        "Import_Config": [
            list(CONFIG_HEADERS),
            ["mode", "CREATE_UPDATE"],
            ["errors", "PROCESS_WARN"],
            ["default_language", "en"],
        ],
        "Attribute_Groups": [
            list(GROUP_HEADERS),
            ["cutting_geometry", "Cutting Geometry", 10, "TRUE", "{}"],
            ["commercial", "Commercial Data", 20, "TRUE", "{}"],
        ],
        "Attributes": [
            list(ATTRIBUTE_HEADERS),
            attribute_row("cutting_diameter", "Cutting Diameter", 4, "cutting_geometry", order=10),
            attribute_row("material", "Material", 1, "commercial", order=20),
            attribute_row("is_coated", "Is Coated", 2, "commercial", order=30),
        ],
        "Types": [
            list(TYPE_HEADERS),
            ["product_type", "Product Type", "", "shape-outline", "blue", "FALSE"],
            ["tct_router_bit", "TCT Router Bit", "product_type", "saw-blade", "indigo", "FALSE"],
            ["insert_tool", "Insert Tool", "product_type", "tools", "teal", "FALSE"],
            ["countersink", "Countersink", "product_type", "drill", "orange", "FALSE"],
        ],
        "Type_Group_Bindings": [
            list(TYPE_GROUP_BINDING_HEADERS),
            *[
                [group, type_identifier, "TRUE", "TRUE"]
                for group in ("cutting_geometry", "commercial")
                for type_identifier in product_types
            ],
        ],
        "Item_Parents": [
            list(ITEM_BASE_HEADERS),
            ["catalog_root_001", "Catalog Root 001", "product_type", "", "{}", "{}"],
        ],
        "TCT_Router_Bit": [
            PRODUCT_HEADERS,
            [
                "router_bit_001",
                "Router Bit 001",
                "tct_router_bit",
                "catalog_root_001",
                '{"is_coated": true}',
                "{}",
                12.7,
                "Carbide",
            ],
        ],
        "Insert_Tool": [list(PRODUCT_HEADERS)],
        "Countersink": [list(PRODUCT_HEADERS)],
    }


def run_validation(sheets: dict[str, list[list[Any]]]) -> ValidationResult:
    return WorkbookValidationService(log_issues=False).validate_grid(WorkbookGrid.from_mapping(sheets))


@pytest.fixture()
def sheets() -> dict[str, list[list[Any]]]:
    """Fresh, mutable copy of the minimal workbook for each test."""
    return build_sheets()


def truncate_workbook_part(payload: bytes, member: str = "xl/worksheets/sheet2.xml") -> bytes:
    """Rewrite an .xlsx archive with one part cut in half."""
    buffer = BytesIO()
    with ZipFile(BytesIO(payload)) as source, ZipFile(buffer, "w") as target:
        for info in source.infolist():
            data = source.read(info.filename)
            if info.filename == member:
                data = data[: len(data) // 2]
            target.writestr(info, data)
    return buffer.getvalue()
