"""
catalog_import/validators/scalar_coercers.py

Total, side-effect-free conversions from raw cell values to typed values.

Every parser returns a CoercionResult instead of raising so that callers can
turn a rejection into an issue and keep processing the rest of the workbook.
"""

from __future__ import annotations

import json
import math
import re
from dataclasses import dataclass
from typing import Any, Mapping

_INTEGER_PATTERN = re.compile(r"^-?\d+$")
_DECIMAL_PATTERN = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")
_CSV_SEPARATORS = re.compile(r"[;,]")

TRUE_TOKENS = frozenset({"true", "1", "yes", "y"})
FALSE_TOKENS = frozenset({"false", "0", "no", "n"})


@dataclass(frozen=True)
class CoercionResult:
    """
    Outcome of one coercion: either a value or a rejection reason.
    """

    ok: bool
    value: Any = None
    error: str | None = None

    @classmethod
    def accept(cls, value: Any) -> "CoercionResult":
        return cls(ok=True, value=value)

    @classmethod
    def reject(cls, reason: str) -> "CoercionResult":
        return cls(ok=False, error=reason)


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    return False


def to_text(value: Any) -> str:
    """
    Render a raw cell value as trimmed text.
    """

    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (Mapping, list)):
        return json.dumps(value, separators=(",", ":"), default=str)
    return str(value).strip()


def normalize_identifier(value: Any) -> str:
    return to_text(value).lower()


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def parse_boolean(value: Any) -> CoercionResult:
    if isinstance(value, bool):
        return CoercionResult.accept(value)

    if _is_number(value):
        if value == 1:
            return CoercionResult.accept(True)
        if value == 0:
            return CoercionResult.accept(False)
        return CoercionResult.reject("Expected boolean-like value")

    text = to_text(value).lower()
    if text == "":
        return CoercionResult.reject("Expected boolean-like value")
    if text in TRUE_TOKENS:
        return CoercionResult.accept(True)
    if text in FALSE_TOKENS:
        return CoercionResult.accept(False)
    return CoercionResult.reject("Expected one of: true/false/1/0/yes/no")


def parse_integer(value: Any) -> CoercionResult:
    if isinstance(value, int) and not isinstance(value, bool):
        return CoercionResult.accept(value)
    if isinstance(value, float) and value.is_integer():
        return CoercionResult.accept(int(value))

    text = to_text(value)
    if not _INTEGER_PATTERN.match(text):
        return CoercionResult.reject("Expected integer")
    return CoercionResult.accept(int(text))


def parse_float(value: Any) -> CoercionResult:
    if _is_number(value) and math.isfinite(value):
        return CoercionResult.accept(value)

    text = to_text(value)
    # plain decimal or exponent notation only; no inf/nan, no "1_000"
    if isinstance(value, bool) or not _DECIMAL_PATTERN.match(text):
        return CoercionResult.reject("Expected number")

    parsed = float(text)
    if not math.isfinite(parsed):
        return CoercionResult.reject("Expected number")
    return CoercionResult.accept(parsed)


def parse_text(value: Any) -> CoercionResult:
    return CoercionResult.accept(to_text(value))


def parse_csv_list(value: Any) -> list[str]:
    """
    Split on comma or semicolon into normalized, non-empty identifiers.
    """

    if isinstance(value, (list, tuple)):
        tokens = [normalize_identifier(entry) for entry in value]
    else:
        text = to_text(value)
        if not text:
            return []
        tokens = [normalize_identifier(entry) for entry in _CSV_SEPARATORS.split(text)]
    return [token for token in tokens if token]


def parse_json_object(value: Any, *, allow_blank: bool = True) -> CoercionResult:
    if isinstance(value, Mapping):
        return CoercionResult.accept(dict(value))

    text = to_text(value)
    if text == "":
        if allow_blank:
            return CoercionResult.accept({})
        return CoercionResult.reject("JSON object is required")

    try:
        parsed = json.loads(text)
    except (json.JSONDecodeError, RecursionError):
        # RecursionError: nesting deeper than the decoder allows
        return CoercionResult.reject("Invalid JSON object")

    if not isinstance(parsed, dict):
        return CoercionResult.reject("Expected JSON object")
    return CoercionResult.accept(parsed)
