"""
catalog_import/parsers/base.py

Helpers shared by the entity sheet parsers.
"""

from __future__ import annotations

from catalog_import.domain.issues import Issue, error
from catalog_import.readers.sheet_reader import ParsedSheet


def missing_header_issues(parsed: ParsedSheet) -> list[Issue]:
    """
    One error per required header absent from a present sheet.
    """

    if not parsed.exists:
        return []
    return [
        error(parsed.name, 1, header, "Missing required header")
        for header in parsed.missing_headers
    ]
