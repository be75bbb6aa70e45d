"""
catalog_import/validators package marker.
"""

from catalog_import.validators.scalar_coercers import (
    CoercionResult,
    is_blank,
    normalize_identifier,
    parse_boolean,
    parse_csv_list,
    parse_float,
    parse_integer,
    parse_json_object,
    parse_text,
    to_text,
)

__all__ = [
    "CoercionResult",
    "is_blank",
    "normalize_identifier",
    "parse_boolean",
    "parse_csv_list",
    "parse_float",
    "parse_integer",
    "parse_json_object",
    "parse_text",
    "to_text",
]
