"""
Write a blank catalog import workbook from CLI.
"""

from __future__ import annotations

import argparse
from pathlib import Path

from catalog_import.config import get_workbook_import_settings
from catalog_import.services.template_service import TEMPLATE_FILENAME, build_import_template


def main() -> int:
    parser = argparse.ArgumentParser(description="Generate the catalog import workbook template.")
    parser.add_argument(
        "output",
        nargs="?",
        type=Path,
        default=Path(TEMPLATE_FILENAME),
        help="Destination .xlsx path.",
    )
    parser.add_argument(
        "--product-sheet",
        dest="product_sheets",
        action="append",
        default=None,
        help="Product sheet name; repeat for several. Defaults to configured sheets.",
    )
    args = parser.parse_args()

    product_sheets = args.product_sheets or get_workbook_import_settings().product_sheets
    build_import_template(product_sheets).save(args.output)
    print(f"Template written to {args.output}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
