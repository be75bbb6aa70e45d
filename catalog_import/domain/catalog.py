"""
catalog_import/domain/catalog.py

Normalized import request records built from workbook rows.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from catalog_import.domain.attribute_types import AttributeType
from catalog_import.domain.issues import Issue


def _localized(language: str, text: str) -> dict[str, str]:
    return {language: text}


@dataclass(frozen=True)
class ImportConfig:
    """
    Workbook-wide import settings from the config sheet.
    """

    mode: str
    error_policy: str
    default_language: str

    def to_payload(self) -> dict[str, Any]:
        return {"mode": self.mode, "errors": self.error_policy}


@dataclass(frozen=True)
class AttributeGroupRequest:
    identifier: str
    name: str
    language: str
    order: int | None = None
    visible: bool | None = None
    options: dict[str, Any] = field(default_factory=dict)

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "identifier": self.identifier,
            "name": _localized(self.language, self.name),
        }
        if self.order is not None:
            payload["order"] = self.order
        if self.visible is not None:
            payload["visible"] = self.visible
        if self.options:
            payload["options"] = self.options
        return payload


@dataclass(frozen=True)
class TypeRequest:
    identifier: str
    name: str
    language: str
    row_number: int
    parent_identifier: str | None = None
    icon: str | None = None
    icon_color: str | None = None
    file: bool | None = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "identifier": self.identifier,
            "name": _localized(self.language, self.name),
        }
        if self.parent_identifier:
            payload["parentIdentifier"] = self.parent_identifier
        if self.icon:
            payload["icon"] = self.icon
        if self.icon_color:
            payload["iconColor"] = self.icon_color
        if self.file is not None:
            payload["file"] = self.file
        return payload


@dataclass(frozen=True)
class TypeGroupBinding:
    """
    Declared validity/visibility of one group's attributes for one type.
    """

    group_identifier: str
    type_identifier: str
    valid: bool = True
    visible: bool = True


@dataclass(frozen=True)
class AttributeModel:
    """
    Reduced attribute projection used when coercing item values.
    """

    identifier: str
    type: AttributeType
    language_dependent: bool


@dataclass(frozen=True)
class AttributeRequest:
    identifier: str
    name: str
    language: str
    type: AttributeType
    groups: tuple[str, ...]
    language_dependent: bool = False
    rich_text: bool = False
    multi_line: bool = False
    order: int | None = None
    pattern: str | None = None
    lov: str | None = None
    valid_types: tuple[str, ...] = ()
    visible_types: tuple[str, ...] = ()
    options: dict[str, Any] = field(default_factory=dict)

    def model(self) -> AttributeModel:
        return AttributeModel(
            identifier=self.identifier,
            type=self.type,
            language_dependent=self.language_dependent,
        )

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "identifier": self.identifier,
            "name": _localized(self.language, self.name),
            "groups": list(self.groups),
            "type": int(self.type),
            "languageDependent": self.language_dependent,
            "richText": self.rich_text,
            "multiLine": self.multi_line,
        }
        if self.order is not None:
            payload["order"] = self.order
        if self.pattern:
            payload["pattern"] = self.pattern
        if self.lov:
            payload["lov"] = self.lov
        if self.valid_types:
            payload["valid"] = list(self.valid_types)
        if self.visible_types:
            payload["visible"] = list(self.visible_types)
        if self.options:
            payload["options"] = self.options
        return payload


@dataclass(frozen=True)
class ItemRequest:
    """
    One parent or product item; both share this shape.
    """

    identifier: str
    name: str
    language: str
    type_identifier: str
    sheet: str
    parent_identifier: str | None = None
    values: dict[str, Any] = field(default_factory=dict)
    channels: dict[str, Any] = field(default_factory=dict)

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "identifier": self.identifier,
            "typeIdentifier": self.type_identifier,
            "name": _localized(self.language, self.name),
        }
        if self.parent_identifier:
            payload["parentIdentifier"] = self.parent_identifier
        if self.values:
            payload["values"] = self.values
        if self.channels:
            payload["channels"] = self.channels
        return payload


@dataclass(frozen=True)
class ImportSummary:
    attr_groups: int
    attributes: int
    types: int
    items: int
    errors: int
    warnings: int

    def to_dict(self) -> dict[str, int]:
        return {
            "attrGroups": self.attr_groups,
            "attributes": self.attributes,
            "types": self.types,
            "items": self.items,
            "errors": self.errors,
            "warnings": self.warnings,
        }


@dataclass(frozen=True)
class ValidationResult:
    """
    Terminal artifact of one workbook validation run.
    """

    config: ImportConfig
    attr_groups: list[AttributeGroupRequest]
    attributes: list[AttributeRequest]
    types: list[TypeRequest]
    items: list[ItemRequest]
    summary: ImportSummary
    errors: list[Issue]
    warnings: list[Issue]

    @property
    def valid(self) -> bool:
        return not self.errors

    def payload(self) -> dict[str, Any]:
        return {
            "config": self.config.to_payload(),
            "attrGroups": [group.to_payload() for group in self.attr_groups],
            "attributes": [attribute.to_payload() for attribute in self.attributes],
            "types": [type_request.to_payload() for type_request in self.types],
            "items": [item.to_payload() for item in self.items],
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "payload": self.payload(),
            "summary": self.summary.to_dict(),
            "errors": [issue.to_dict() for issue in self.errors],
            "warnings": [issue.to_dict() for issue in self.warnings],
            "valid": self.valid,
        }
