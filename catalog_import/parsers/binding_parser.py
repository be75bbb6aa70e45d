"""
catalog_import/parsers/binding_parser.py

Type/group binding parsing. Bindings are not emitted on their own; they are
folded into attribute valid/visible type sets.
"""

from __future__ import annotations

from typing import Collection

from catalog_import.contract import (
    GROUPS_SHEET,
    TYPE_GROUP_BINDING_HEADERS,
    TYPE_GROUP_BINDINGS_SHEET,
    TYPES_SHEET,
)
from catalog_import.domain.catalog import TypeGroupBinding
from catalog_import.domain.issues import Issue, error, warning
from catalog_import.parsers.base import missing_header_issues
from catalog_import.readers.sheet_reader import SheetReader, SheetRow
from catalog_import.validators.scalar_coercers import (
    CoercionResult,
    is_blank,
    normalize_identifier,
    parse_boolean,
)

BindingTable = dict[str, list[TypeGroupBinding]]


def parse_type_group_bindings(
    reader: SheetReader,
    *,
    group_identifiers: Collection[str],
    type_identifiers: Collection[str],
) -> tuple[BindingTable, list[Issue]]:
    """
    Parse binding rows into a table keyed by group identifier.
    """

    parsed = reader.read(TYPE_GROUP_BINDINGS_SHEET, TYPE_GROUP_BINDING_HEADERS)
    if not parsed.exists:
        return {}, []

    issues = missing_header_issues(parsed)
    bindings: BindingTable = {}

    for row in parsed.rows:
        if not row.has_any_value(TYPE_GROUP_BINDING_HEADERS):
            continue
        binding = _parse_binding_row(
            row,
            group_identifiers=group_identifiers,
            type_identifiers=type_identifiers,
            issues=issues,
        )
        if binding is not None:
            bindings.setdefault(binding.group_identifier, []).append(binding)

    return bindings, issues


def _flag(value: object) -> CoercionResult:
    if is_blank(value):
        return CoercionResult.accept(True)
    return parse_boolean(value)


def _parse_binding_row(
    row: SheetRow,
    *,
    group_identifiers: Collection[str],
    type_identifiers: Collection[str],
    issues: list[Issue],
) -> TypeGroupBinding | None:
    sheet = TYPE_GROUP_BINDINGS_SHEET
    group_identifier = normalize_identifier(row.get("group_identifier"))
    type_identifier = normalize_identifier(row.get("type_identifier"))

    if not group_identifier:
        issues.append(error(sheet, row.row_number, "group_identifier", "group_identifier is required"))
        return None
    if not type_identifier:
        issues.append(error(sheet, row.row_number, "type_identifier", "type_identifier is required"))
        return None

    if group_identifier not in group_identifiers:
        issues.append(
            warning(
                sheet,
                row.row_number,
                "group_identifier",
                f"Group '{group_identifier}' is not defined in {GROUPS_SHEET} sheet",
            )
        )
    if type_identifier not in type_identifiers:
        issues.append(
            warning(
                sheet,
                row.row_number,
                "type_identifier",
                f"Type '{type_identifier}' is not defined in {TYPES_SHEET} sheet",
            )
        )

    valid = _flag(row.get("valid"))
    if not valid.ok:
        issues.append(error(sheet, row.row_number, "valid", valid.error))
        return None
    visible = _flag(row.get("visible"))
    if not visible.ok:
        issues.append(error(sheet, row.row_number, "visible", visible.error))
        return None

    return TypeGroupBinding(
        group_identifier=group_identifier,
        type_identifier=type_identifier,
        valid=valid.value,
        visible=visible.value,
    )
