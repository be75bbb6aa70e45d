"""
catalog_import/parsers/config_parser.py

Key/value config sheet parsing with defaults.
"""

from __future__ import annotations

import re

from catalog_import.contract import (
    CONFIG_HEADERS,
    CONFIG_KEY_DEFAULT_LANGUAGE,
    CONFIG_KEY_ERRORS,
    CONFIG_KEY_MODE,
    CONFIG_SHEET,
    DEFAULT_ERROR_POLICY,
    DEFAULT_IMPORT_MODE,
    DEFAULT_LANGUAGE,
    ERROR_POLICIES,
    IMPORT_MODES,
)
from catalog_import.domain.catalog import ImportConfig
from catalog_import.domain.issues import Issue, error, warning
from catalog_import.parsers.base import missing_header_issues
from catalog_import.readers.sheet_reader import SheetReader
from catalog_import.validators.scalar_coercers import to_text

_LANGUAGE_PATTERN = re.compile(r"^[a-z]{2}(-[a-z]{2})?$")

DEFAULT_CONFIG = ImportConfig(
    mode=DEFAULT_IMPORT_MODE,
    error_policy=DEFAULT_ERROR_POLICY,
    default_language=DEFAULT_LANGUAGE,
)


def parse_config(reader: SheetReader) -> tuple[ImportConfig, list[Issue]]:
    parsed = reader.read(CONFIG_SHEET, CONFIG_HEADERS)
    if not parsed.exists:
        return DEFAULT_CONFIG, []

    issues = missing_header_issues(parsed)
    values: dict[str, str] = {}

    for row in parsed.rows:
        if not row.has_any_value(CONFIG_HEADERS):
            continue
        key = to_text(row.get("key")).lower()
        if not key:
            issues.append(error(CONFIG_SHEET, row.row_number, "key", "Key is required"))
            continue
        values[key] = to_text(row.get("value"))

    mode = (values.get(CONFIG_KEY_MODE) or DEFAULT_IMPORT_MODE).upper()
    error_policy = (values.get(CONFIG_KEY_ERRORS) or DEFAULT_ERROR_POLICY).upper()
    default_language = (values.get(CONFIG_KEY_DEFAULT_LANGUAGE) or DEFAULT_LANGUAGE).lower()

    if mode not in IMPORT_MODES:
        issues.append(
            error(
                CONFIG_SHEET,
                None,
                CONFIG_KEY_MODE,
                "mode must be CREATE_ONLY, UPDATE_ONLY, or CREATE_UPDATE",
            )
        )
    if error_policy not in ERROR_POLICIES:
        issues.append(
            error(
                CONFIG_SHEET,
                None,
                CONFIG_KEY_ERRORS,
                "errors must be PROCESS_WARN or WARN_REJECTED",
            )
        )
    if not _LANGUAGE_PATTERN.match(default_language):
        issues.append(
            warning(
                CONFIG_SHEET,
                None,
                CONFIG_KEY_DEFAULT_LANGUAGE,
                "default_language should look like en or en-us",
            )
        )

    return (
        ImportConfig(
            mode=mode,
            error_policy=error_policy,
            default_language=default_language,
        ),
        issues,
    )
