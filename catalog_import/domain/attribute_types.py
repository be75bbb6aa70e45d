"""
catalog_import/domain/attribute_types.py

Attribute type codes and the value coercion bound to each of them.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any, Callable

from catalog_import.validators.scalar_coercers import (
    CoercionResult,
    parse_boolean,
    parse_float,
    parse_integer,
    parse_text,
)


class AttributeType(IntEnum):
    TEXT = 1
    BOOLEAN = 2
    INTEGER = 3
    FLOAT = 4
    DATE = 5
    TIME = 6
    ENUM = 7
    URL = 8

    @classmethod
    def from_code(cls, code: int) -> "AttributeType | None":
        try:
            return cls(code)
        except ValueError:
            return None

    def coerce(self, value: Any) -> CoercionResult:
        """
        Coerce a non-blank raw value into the stored form for this type.
        """

        return _COERCERS[self](value)


_COERCERS: dict[AttributeType, Callable[[Any], CoercionResult]] = {
    AttributeType.TEXT: parse_text,
    AttributeType.BOOLEAN: parse_boolean,
    AttributeType.INTEGER: parse_integer,
    AttributeType.FLOAT: parse_float,
    AttributeType.DATE: parse_text,
    AttributeType.TIME: parse_text,
    AttributeType.ENUM: parse_text,
    AttributeType.URL: parse_text,
}

TYPE_CODE_HELP = ", ".join(f"{member.value}={member.name}" for member in AttributeType)
