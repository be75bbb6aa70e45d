"""
catalog_import/parsers/attribute_parser.py

Attribute sheet parsing, including propagation of type/group bindings into
each attribute's valid and visible type sets.
"""

from __future__ import annotations

from typing import Collection, Mapping

from catalog_import.contract import ATTRIBUTE_HEADERS, ATTRIBUTES_SHEET
from catalog_import.domain.attribute_types import AttributeType
from catalog_import.domain.catalog import AttributeRequest, ImportConfig, TypeGroupBinding
from catalog_import.domain.issues import Issue, error, warning
from catalog_import.parsers.base import missing_header_issues
from catalog_import.readers.sheet_reader import SheetReader, SheetRow
from catalog_import.validators.scalar_coercers import (
    CoercionResult,
    is_blank,
    normalize_identifier,
    parse_boolean,
    parse_csv_list,
    parse_integer,
    parse_json_object,
    to_text,
)

AttributeTable = dict[str, AttributeRequest]

_FLAG_COLUMNS: tuple[str, ...] = ("language_dependent", "rich_text", "multi_line")


def parse_attributes(
    reader: SheetReader,
    config: ImportConfig,
    *,
    group_identifiers: Collection[str],
    type_identifiers: Collection[str],
    bindings: Mapping[str, list[TypeGroupBinding]],
) -> tuple[AttributeTable, list[Issue]]:
    parsed = reader.read(ATTRIBUTES_SHEET, ATTRIBUTE_HEADERS)
    if not parsed.exists:
        return {}, []

    issues = missing_header_issues(parsed)
    attributes: AttributeTable = {}

    for row in parsed.rows:
        if not row.has_any_value(ATTRIBUTE_HEADERS):
            continue
        request = _parse_attribute_row(
            row,
            config=config,
            attributes=attributes,
            group_identifiers=group_identifiers,
            bindings=bindings,
            issues=issues,
        )
        if request is None:
            continue
        issues.extend(_unresolved_type_warnings(row, request, type_identifiers))
        attributes[request.identifier] = request

    return attributes, issues


def resolve_type_sets(
    groups: Collection[str],
    *,
    explicit_valid: list[str],
    explicit_visible: list[str],
    bindings: Mapping[str, list[TypeGroupBinding]],
) -> tuple[tuple[str, ...], tuple[str, ...]]:
    """
    Union explicit type identifiers with those propagated from group bindings.
    """

    valid = dict.fromkeys(explicit_valid)
    visible = dict.fromkeys(explicit_visible)
    for group_identifier in groups:
        for binding in bindings.get(group_identifier, ()):
            if binding.valid:
                valid.setdefault(binding.type_identifier)
            if binding.visible:
                visible.setdefault(binding.type_identifier)
    return tuple(valid), tuple(visible)


def _flag(value: object) -> CoercionResult:
    if is_blank(value):
        return CoercionResult.accept(False)
    return parse_boolean(value)


def _parse_attribute_row(
    row: SheetRow,
    *,
    config: ImportConfig,
    attributes: AttributeTable,
    group_identifiers: Collection[str],
    bindings: Mapping[str, list[TypeGroupBinding]],
    issues: list[Issue],
) -> AttributeRequest | None:
    sheet = ATTRIBUTES_SHEET
    identifier = normalize_identifier(row.get("identifier"))
    name = to_text(row.get("name_en"))
    type_raw = to_text(row.get("type_code"))

    if not identifier:
        issues.append(error(sheet, row.row_number, "identifier", "identifier is required"))
        return None
    if not name:
        issues.append(error(sheet, row.row_number, "name_en", "name_en is required"))
        return None
    if not type_raw:
        issues.append(error(sheet, row.row_number, "type_code", "type_code is required"))
        return None
    if identifier in attributes:
        issues.append(error(sheet, row.row_number, "identifier", "Duplicate attribute identifier"))
        return None

    parsed_code = parse_integer(row.get("type_code"))
    attribute_type = AttributeType.from_code(parsed_code.value) if parsed_code.ok else None
    if attribute_type is None:
        issues.append(error(sheet, row.row_number, "type_code", "type_code must be one of 1..8"))
        return None

    groups = parse_csv_list(row.get("groups_csv"))
    if not groups:
        issues.append(
            error(sheet, row.row_number, "groups_csv", "At least one group identifier is required")
        )
        return None
    unknown_groups = [group for group in groups if group not in group_identifiers]
    if unknown_groups:
        issues.append(
            error(
                sheet,
                row.row_number,
                "groups_csv",
                f"Unknown group identifiers: {', '.join(unknown_groups)}",
            )
        )
        return None

    order = None
    if not is_blank(row.get("order")):
        parsed_order = parse_integer(row.get("order"))
        if not parsed_order.ok:
            issues.append(error(sheet, row.row_number, "order", parsed_order.error))
            return None
        order = parsed_order.value

    flags: dict[str, bool] = {}
    for column in _FLAG_COLUMNS:
        parsed_flag = _flag(row.get(column))
        if not parsed_flag.ok:
            issues.append(error(sheet, row.row_number, column, parsed_flag.error))
            return None
        flags[column] = parsed_flag.value

    options = parse_json_object(row.get("options_json"), allow_blank=True)
    if not options.ok:
        issues.append(error(sheet, row.row_number, "options_json", options.error))
        return None

    valid_types, visible_types = resolve_type_sets(
        groups,
        explicit_valid=parse_csv_list(row.get("valid_types_csv")),
        explicit_visible=parse_csv_list(row.get("visible_types_csv")),
        bindings=bindings,
    )

    return AttributeRequest(
        identifier=identifier,
        name=name,
        language=config.default_language,
        type=attribute_type,
        groups=tuple(dict.fromkeys(groups)),
        language_dependent=flags["language_dependent"],
        rich_text=flags["rich_text"],
        multi_line=flags["multi_line"],
        order=order,
        pattern=to_text(row.get("pattern")) or None,
        lov=normalize_identifier(row.get("lov_identifier")) or None,
        valid_types=valid_types,
        visible_types=visible_types,
        options=options.value,
    )


def _unresolved_type_warnings(
    row: SheetRow,
    request: AttributeRequest,
    type_identifiers: Collection[str],
) -> list[Issue]:
    warnings: list[Issue] = []
    for type_identifier in dict.fromkeys((*request.valid_types, *request.visible_types)):
        if type_identifier in type_identifiers:
            continue
        column = "valid_types_csv" if type_identifier in request.valid_types else "visible_types_csv"
        warnings.append(
            warning(
                ATTRIBUTES_SHEET,
                row.row_number,
                column,
                f"Type '{type_identifier}' is not in Types sheet. It must already exist in the catalog.",
            )
        )
    return warnings
