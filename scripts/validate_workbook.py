"""
Validate a catalog import workbook from CLI.

Exit codes: 0 valid, 1 invalid, 2 unreadable workbook.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from catalog_import.config import get_workbook_import_settings
from catalog_import.domain.issues import format_issue
from catalog_import.readers.cell_grid import WorkbookReadError
from catalog_import.services.workbook_validation_service import WorkbookValidationService


def main() -> int:
    parser = argparse.ArgumentParser(description="Validate a catalog import workbook.")
    parser.add_argument("path", type=Path, help="Path to the .xlsx workbook.")
    parser.add_argument(
        "--product-sheet",
        dest="product_sheets",
        action="append",
        default=None,
        help="Product sheet name; repeat for several. Defaults to configured sheets.",
    )
    parser.add_argument(
        "--payload-only",
        action="store_true",
        help="Print only the import payload instead of the full result.",
    )
    parser.add_argument("--verbose", action="store_true", help="Log each issue to stderr.")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s [%(name)s] %(message)s",
    )

    settings = get_workbook_import_settings()
    service = WorkbookValidationService(
        product_sheets=args.product_sheets or settings.product_sheets,
        log_issues=args.verbose,
        max_logged_issues=settings.max_logged_issues,
    )

    try:
        result = service.validate_bytes(args.path.read_bytes())
    except (OSError, WorkbookReadError) as exc:
        print(f"Unable to read workbook: {exc}", file=sys.stderr)
        return 2

    output = result.payload() if args.payload_only else result.to_dict()
    print(json.dumps(output, indent=2, ensure_ascii=False))
    for issue in result.errors:
        print(format_issue(issue), file=sys.stderr)
    return 0 if result.valid else 1


if __name__ == "__main__":
    raise SystemExit(main())
