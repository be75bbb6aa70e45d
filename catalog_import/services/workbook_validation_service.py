"""
catalog_import/services/workbook_validation_service.py

Orchestrates one workbook validation run.

Sheets are parsed strictly in dependency order, each stage consuming the
lookup tables built by the previous ones:

    1. Import_Config          (optional, defaults apply)
    2. Attribute_Groups
    3. Types
    4. Type_Group_Bindings    (folded into attributes)
    5. Attributes
    6. Item_Parents, then each product sheet in declared order

Every parser returns its own issue list; the service concatenates them and
never aborts on row-level problems. The only terminal failure is a payload
that cannot be opened as a workbook (WorkbookReadError).
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Sequence

from catalog_import.config import get_workbook_import_settings
from catalog_import.contract import DEFAULT_PRODUCT_SHEETS, item_sheet_names, mandatory_sheet_names
from catalog_import.domain.catalog import ImportSummary, ItemRequest, ValidationResult
from catalog_import.domain.issues import Issue, error, format_issue, split_issues
from catalog_import.logging_utils import log_event
from catalog_import.parsers import (
    ItemSheetParser,
    collect_declared_item_identifiers,
    parse_attribute_groups,
    parse_attributes,
    parse_config,
    parse_type_group_bindings,
    parse_types,
)
from catalog_import.readers.cell_grid import WorkbookGrid, load_workbook_grid
from catalog_import.readers.sheet_reader import SheetReader

logger = logging.getLogger(__name__)


def missing_sheet_issues(grid: WorkbookGrid, required_sheets: Sequence[str]) -> list[Issue]:
    return [
        error(sheet, None, "sheet", "Sheet is required but missing")
        for sheet in required_sheets
        if not grid.has_sheet(sheet)
    ]


class WorkbookValidationService:
    """
    Validates and normalizes a catalog import workbook into an import payload.
    """

    def __init__(
        self,
        *,
        product_sheets: Sequence[str] = DEFAULT_PRODUCT_SHEETS,
        log_issues: bool = True,
        max_logged_issues: int = 200,
    ) -> None:
        self._product_sheets = tuple(product_sheets)
        self._log_issues = log_issues
        self._max_logged_issues = max(1, max_logged_issues)

    @property
    def product_sheets(self) -> tuple[str, ...]:
        return self._product_sheets

    def validate_bytes(self, payload: bytes) -> ValidationResult:
        """
        Open a binary `.xlsx` payload and validate it.

        Raises WorkbookReadError if the payload is not a readable workbook.
        """

        return self.validate_grid(load_workbook_grid(payload))

    def validate_grid(self, grid: WorkbookGrid) -> ValidationResult:
        reader = SheetReader(grid)
        issues: list[Issue] = missing_sheet_issues(grid, mandatory_sheet_names(self._product_sheets))

        config, stage_issues = parse_config(reader)
        issues.extend(stage_issues)

        groups, stage_issues = parse_attribute_groups(reader, config)
        issues.extend(stage_issues)

        types, stage_issues = parse_types(reader, config)
        issues.extend(stage_issues)

        bindings, stage_issues = parse_type_group_bindings(
            reader,
            group_identifiers=groups.keys(),
            type_identifiers=types.keys(),
        )
        issues.extend(stage_issues)

        attributes, stage_issues = parse_attributes(
            reader,
            config,
            group_identifiers=groups.keys(),
            type_identifiers=types.keys(),
            bindings=bindings,
        )
        issues.extend(stage_issues)

        sheet_names = item_sheet_names(self._product_sheets)
        item_parser = ItemSheetParser(
            reader=reader,
            config=config,
            attributes={identifier: request.model() for identifier, request in attributes.items()},
            types=types,
            declared_identifiers=collect_declared_item_identifiers(reader, sheet_names),
        )
        items: list[ItemRequest] = []
        for sheet_name in sheet_names:
            sheet_items, stage_issues = item_parser.parse_sheet(sheet_name)
            items.extend(sheet_items)
            issues.extend(stage_issues)

        errors, warnings = split_issues(issues)
        result = ValidationResult(
            config=config,
            attr_groups=list(groups.values()),
            attributes=list(attributes.values()),
            types=list(types.values()),
            items=items,
            summary=ImportSummary(
                attr_groups=len(groups),
                attributes=len(attributes),
                types=len(types),
                items=len(items),
                errors=len(errors),
                warnings=len(warnings),
            ),
            errors=errors,
            warnings=warnings,
        )
        self._log_result(result)
        return result

    def _log_result(self, result: ValidationResult) -> None:
        log_event(
            logger,
            logging.INFO,
            "workbook_validated",
            valid=result.valid,
            **result.summary.to_dict(),
        )
        if not self._log_issues:
            return
        for issue in [*result.errors, *result.warnings][: self._max_logged_issues]:
            logger.debug("Workbook %s: %s", issue.severity.value, format_issue(issue))


@lru_cache(maxsize=1)
def get_workbook_validation_service() -> WorkbookValidationService:
    """
    Build and cache the workbook validation service from settings.
    """

    settings = get_workbook_import_settings()
    return WorkbookValidationService(
        product_sheets=settings.product_sheets,
        log_issues=settings.log_issues,
        max_logged_issues=settings.max_logged_issues,
    )
