"""
catalog_import/parsers/type_parser.py

Item type tree parsing.
"""

from __future__ import annotations

from catalog_import.contract import TYPE_HEADERS, TYPES_SHEET
from catalog_import.domain.catalog import ImportConfig, TypeRequest
from catalog_import.domain.issues import Issue, error, warning
from catalog_import.parsers.base import missing_header_issues
from catalog_import.readers.sheet_reader import SheetReader, SheetRow
from catalog_import.validators.scalar_coercers import (
    is_blank,
    normalize_identifier,
    parse_boolean,
    to_text,
)

TypeTable = dict[str, TypeRequest]


def parse_types(reader: SheetReader, config: ImportConfig) -> tuple[TypeTable, list[Issue]]:
    parsed = reader.read(TYPES_SHEET, TYPE_HEADERS)
    if not parsed.exists:
        return {}, []

    issues = missing_header_issues(parsed)
    types: TypeTable = {}

    for row in parsed.rows:
        if not row.has_any_value(TYPE_HEADERS):
            continue
        request = _parse_type_row(row, config=config, types=types, issues=issues)
        if request is not None:
            types[request.identifier] = request

    # Parents may be declared below their children, so resolve after the full pass.
    for request in types.values():
        if request.parent_identifier and request.parent_identifier not in types:
            issues.append(
                warning(
                    TYPES_SHEET,
                    request.row_number,
                    "parent_identifier",
                    f"Parent type '{request.parent_identifier}' is not defined in this workbook. "
                    "It must already exist in the catalog.",
                )
            )

    return types, issues


def _parse_type_row(
    row: SheetRow,
    *,
    config: ImportConfig,
    types: TypeTable,
    issues: list[Issue],
) -> TypeRequest | None:
    identifier = normalize_identifier(row.get("identifier"))
    name = to_text(row.get("name_en"))
    parent_identifier = normalize_identifier(row.get("parent_identifier"))

    if not identifier:
        issues.append(error(TYPES_SHEET, row.row_number, "identifier", "identifier is required"))
        return None
    if not name:
        issues.append(error(TYPES_SHEET, row.row_number, "name_en", "name_en is required"))
        return None
    if identifier in types:
        issues.append(error(TYPES_SHEET, row.row_number, "identifier", "Duplicate type identifier"))
        return None
    if parent_identifier == identifier:
        issues.append(
            error(
                TYPES_SHEET,
                row.row_number,
                "parent_identifier",
                f"Type '{identifier}' cannot reference itself as parent.",
            )
        )
        return None

    file_value = None
    if not is_blank(row.get("file")):
        parsed_file = parse_boolean(row.get("file"))
        if not parsed_file.ok:
            issues.append(error(TYPES_SHEET, row.row_number, "file", parsed_file.error))
            return None
        file_value = parsed_file.value

    return TypeRequest(
        identifier=identifier,
        name=name,
        language=config.default_language,
        row_number=row.row_number,
        parent_identifier=parent_identifier or None,
        icon=to_text(row.get("icon")) or None,
        icon_color=to_text(row.get("icon_color")) or None,
        file=file_value,
    )
