"""
catalog_import/parsers/attribute_group_parser.py

Attribute group sheet parsing.
"""

from __future__ import annotations

from catalog_import.contract import GROUP_HEADERS, GROUPS_SHEET
from catalog_import.domain.catalog import AttributeGroupRequest, ImportConfig
from catalog_import.domain.issues import Issue, error
from catalog_import.parsers.base import missing_header_issues
from catalog_import.readers.sheet_reader import SheetReader, SheetRow
from catalog_import.validators.scalar_coercers import (
    normalize_identifier,
    parse_boolean,
    parse_integer,
    parse_json_object,
    to_text,
)

AttributeGroupTable = dict[str, AttributeGroupRequest]


def parse_attribute_groups(
    reader: SheetReader,
    config: ImportConfig,
) -> tuple[AttributeGroupTable, list[Issue]]:
    """
    Parse group rows; the returned table is keyed by normalized identifier
    and iterates in sheet order.
    """

    parsed = reader.read(GROUPS_SHEET, GROUP_HEADERS)
    if not parsed.exists:
        return {}, []

    issues = missing_header_issues(parsed)
    groups: AttributeGroupTable = {}

    for row in parsed.rows:
        if not row.has_any_value(GROUP_HEADERS):
            continue
        request = _parse_group_row(row, config=config, groups=groups, issues=issues)
        if request is not None:
            groups[request.identifier] = request

    return groups, issues


def _parse_group_row(
    row: SheetRow,
    *,
    config: ImportConfig,
    groups: AttributeGroupTable,
    issues: list[Issue],
) -> AttributeGroupRequest | None:
    identifier = normalize_identifier(row.get("identifier"))
    name = to_text(row.get("name_en"))
    order_text = to_text(row.get("order"))
    visible_text = to_text(row.get("visible"))

    if not identifier:
        issues.append(error(GROUPS_SHEET, row.row_number, "identifier", "identifier is required"))
        return None
    if not name:
        issues.append(error(GROUPS_SHEET, row.row_number, "name_en", "name_en is required"))
        return None
    if identifier in groups:
        issues.append(error(GROUPS_SHEET, row.row_number, "identifier", "Duplicate group identifier"))
        return None

    order = None
    if order_text:
        parsed_order = parse_integer(row.get("order"))
        if not parsed_order.ok:
            issues.append(error(GROUPS_SHEET, row.row_number, "order", parsed_order.error))
            return None
        order = parsed_order.value

    visible = None
    if visible_text:
        parsed_visible = parse_boolean(row.get("visible"))
        if not parsed_visible.ok:
            issues.append(error(GROUPS_SHEET, row.row_number, "visible", parsed_visible.error))
            return None
        visible = parsed_visible.value

    options = parse_json_object(row.get("options_json"), allow_blank=True)
    if not options.ok:
        issues.append(error(GROUPS_SHEET, row.row_number, "options_json", options.error))
        return None

    return AttributeGroupRequest(
        identifier=identifier,
        name=name,
        language=config.default_language,
        order=order,
        visible=visible,
        options=options.value,
    )
