"""
catalog_import/validators/value_coercer.py

Coercion of item attribute values according to the declared attribute schema.
"""

from __future__ import annotations

from typing import Any, Mapping

from catalog_import.domain.catalog import AttributeModel
from catalog_import.validators.scalar_coercers import CoercionResult, to_text


def is_blank_value(value: Any) -> bool:
    return value is None or to_text(value) == ""


def coerce_attribute_value(
    value: Any,
    *,
    attribute: AttributeModel,
    default_language: str,
) -> CoercionResult:
    """
    Coerce one non-blank raw value for `attribute`.

    Language-dependent values are kept as-is when already localized, otherwise
    wrapped under the default language. Callers drop blank values beforehand.
    """

    if attribute.language_dependent:
        if isinstance(value, Mapping):
            return CoercionResult.accept(dict(value))
        return CoercionResult.accept({default_language: to_text(value)})

    return attribute.type.coerce(value)
