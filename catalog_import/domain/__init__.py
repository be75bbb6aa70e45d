"""
catalog_import/domain package marker.
"""

from catalog_import.domain.attribute_types import AttributeType
from catalog_import.domain.catalog import (
    AttributeGroupRequest,
    AttributeModel,
    AttributeRequest,
    ImportConfig,
    ImportSummary,
    ItemRequest,
    TypeGroupBinding,
    TypeRequest,
    ValidationResult,
)
from catalog_import.domain.issues import Issue, IssueSeverity, format_issue

__all__ = [
    "AttributeGroupRequest",
    "AttributeModel",
    "AttributeRequest",
    "AttributeType",
    "ImportConfig",
    "ImportSummary",
    "Issue",
    "IssueSeverity",
    "ItemRequest",
    "TypeGroupBinding",
    "TypeRequest",
    "ValidationResult",
    "format_issue",
]
