"""
catalog_import/parsers/item_parser.py

Parent-item and product-item sheet parsing.

All item sheets share one identifier namespace. Attribute values come from
`values_json` and from dynamic `attr:<identifier>` columns; the columns are
applied last and win when both name the same attribute.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from catalog_import.contract import ATTRIBUTE_COLUMN_PREFIX, ITEM_BASE_HEADERS
from catalog_import.domain.catalog import AttributeModel, ImportConfig, ItemRequest, TypeRequest
from catalog_import.domain.issues import Issue, error, warning
from catalog_import.parsers.base import missing_header_issues
from catalog_import.readers.sheet_reader import ParsedSheet, SheetReader, SheetRow
from catalog_import.validators.scalar_coercers import normalize_identifier, parse_json_object, to_text
from catalog_import.validators.value_coercer import coerce_attribute_value, is_blank_value


def collect_declared_item_identifiers(reader: SheetReader, sheet_names: Iterable[str]) -> set[str]:
    """
    Every non-blank item identifier across the given sheets, valid or not.
    """

    declared: set[str] = set()
    for sheet_name in sheet_names:
        parsed = reader.read(sheet_name, ITEM_BASE_HEADERS)
        for row in parsed.rows:
            identifier = normalize_identifier(row.get("identifier"))
            if identifier:
                declared.add(identifier)
    return declared


class ItemSheetParser:
    """
    Parses item sheets for one validation run.

    One instance must be used for all item sheets of a workbook so that
    duplicate identifiers are detected across sheets.
    """

    def __init__(
        self,
        *,
        reader: SheetReader,
        config: ImportConfig,
        attributes: Mapping[str, AttributeModel],
        types: Mapping[str, TypeRequest],
        declared_identifiers: set[str],
    ) -> None:
        self._reader = reader
        self._config = config
        self._attributes = attributes
        self._types = types
        self._declared_identifiers = declared_identifiers
        self._seen_identifiers: set[str] = set()

    def parse_sheet(self, sheet_name: str) -> tuple[list[ItemRequest], list[Issue]]:
        parsed = self._reader.read(sheet_name, ITEM_BASE_HEADERS)
        if not parsed.exists:
            return [], []

        issues = missing_header_issues(parsed)
        items: list[ItemRequest] = []
        for row in parsed.rows:
            if not row.has_any_value(parsed.headers):
                continue
            item = self._parse_row(parsed, row, issues)
            if item is not None:
                items.append(item)
        return items, issues

    def _parse_row(self, parsed: ParsedSheet, row: SheetRow, issues: list[Issue]) -> ItemRequest | None:
        sheet = parsed.name
        identifier = normalize_identifier(row.get("identifier"))
        name = to_text(row.get("name_en"))
        type_identifier = normalize_identifier(row.get("type_identifier"))
        parent_identifier = normalize_identifier(row.get("parent_identifier"))

        if not identifier:
            issues.append(error(sheet, row.row_number, "identifier", "identifier is required"))
            return None
        if not name:
            issues.append(error(sheet, row.row_number, "name_en", "name_en is required"))
            return None
        if not type_identifier:
            issues.append(error(sheet, row.row_number, "type_identifier", "type_identifier is required"))
            return None
        if identifier in self._seen_identifiers:
            issues.append(
                error(
                    sheet,
                    row.row_number,
                    "identifier",
                    f"Duplicate item identifier '{identifier}' across item sheets",
                )
            )
            return None

        # Claimed before the remaining checks: a rejected row still owns its identifier.
        self._seen_identifiers.add(identifier)

        type_request = self._types.get(type_identifier)
        if type_request is None:
            issues.append(
                warning(
                    sheet,
                    row.row_number,
                    "type_identifier",
                    f"Type '{type_identifier}' is not in Types sheet. It must already exist in the catalog.",
                )
            )
        elif type_request.parent_identifier and not parent_identifier:
            issues.append(
                error(
                    sheet,
                    row.row_number,
                    "parent_identifier",
                    f"type '{type_identifier}' is child of '{type_request.parent_identifier}', "
                    "so parent_identifier is required",
                )
            )
            return None

        if parent_identifier and parent_identifier == identifier:
            issues.append(
                error(
                    sheet,
                    row.row_number,
                    "parent_identifier",
                    "parent_identifier cannot reference the same item identifier",
                )
            )
            return None

        if (
            parent_identifier
            and parent_identifier not in self._seen_identifiers
            and parent_identifier not in self._declared_identifiers
        ):
            issues.append(
                warning(
                    sheet,
                    row.row_number,
                    "parent_identifier",
                    f"Parent item '{parent_identifier}' is not declared in workbook. "
                    "It must already exist in the catalog.",
                )
            )

        values_json = parse_json_object(row.get("values_json"), allow_blank=True)
        if not values_json.ok:
            issues.append(error(sheet, row.row_number, "values_json", values_json.error))
            return None
        channels_json = parse_json_object(row.get("channels_json"), allow_blank=True)
        if not channels_json.ok:
            issues.append(error(sheet, row.row_number, "channels_json", channels_json.error))
            return None

        values: dict[str, Any] = {}
        for key, raw_value in values_json.value.items():
            attribute_identifier = normalize_identifier(key)
            attribute = self._attributes.get(attribute_identifier)
            if attribute is None:
                issues.append(
                    error(
                        sheet,
                        row.row_number,
                        "values_json",
                        f"values_json contains unknown attribute '{key}'",
                    )
                )
                continue
            self._apply_value(
                values,
                attribute=attribute,
                raw_value=raw_value,
                sheet=sheet,
                row_number=row.row_number,
                field=f"values_json.{key}",
                issues=issues,
            )

        for header in parsed.attribute_headers:
            attribute_identifier = normalize_identifier(header[len(ATTRIBUTE_COLUMN_PREFIX):])
            raw_value = row.get(header)
            if not attribute_identifier or is_blank_value(raw_value):
                continue
            attribute = self._attributes.get(attribute_identifier)
            if attribute is None:
                issues.append(
                    error(
                        sheet,
                        row.row_number,
                        header,
                        f"Unknown attribute '{attribute_identifier}'",
                    )
                )
                continue
            self._apply_value(
                values,
                attribute=attribute,
                raw_value=raw_value,
                sheet=sheet,
                row_number=row.row_number,
                field=header,
                issues=issues,
            )

        return ItemRequest(
            identifier=identifier,
            name=name,
            language=self._config.default_language,
            type_identifier=type_identifier,
            sheet=sheet,
            parent_identifier=parent_identifier or None,
            values=values,
            channels=channels_json.value,
        )

    def _apply_value(
        self,
        values: dict[str, Any],
        *,
        attribute: AttributeModel,
        raw_value: Any,
        sheet: str,
        row_number: int,
        field: str,
        issues: list[Issue],
    ) -> None:
        if is_blank_value(raw_value):
            return
        coerced = coerce_attribute_value(
            raw_value,
            attribute=attribute,
            default_language=self._config.default_language,
        )
        if not coerced.ok:
            issues.append(error(sheet, row_number, field, f"Invalid value: {coerced.error}"))
            return
        values[attribute.identifier] = coerced.value
