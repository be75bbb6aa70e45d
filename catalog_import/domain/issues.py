"""
catalog_import/domain/issues.py

Validation issue records produced by every sheet parser.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable


class IssueSeverity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class Issue:
    """
    One validation finding tied to a sheet, an optional row, and an optional field.
    """

    severity: IssueSeverity
    sheet: str
    row: int | None
    field: str | None
    message: str

    @property
    def is_error(self) -> bool:
        return self.severity is IssueSeverity.ERROR

    def to_dict(self) -> dict[str, Any]:
        return {
            "severity": self.severity.value,
            "sheet": self.sheet,
            "row": self.row,
            "field": self.field,
            "message": self.message,
        }


def error(sheet: str, row: int | None, field: str | None, message: str) -> Issue:
    return Issue(IssueSeverity.ERROR, sheet, row, field, message)


def warning(sheet: str, row: int | None, field: str | None, message: str) -> Issue:
    return Issue(IssueSeverity.WARNING, sheet, row, field, message)


def split_issues(issues: Iterable[Issue]) -> tuple[list[Issue], list[Issue]]:
    """
    Partition issues into (errors, warnings), preserving order.
    """

    errors: list[Issue] = []
    warnings: list[Issue] = []
    for issue in issues:
        (errors if issue.is_error else warnings).append(issue)
    return errors, warnings


def format_issue(issue: Issue) -> str:
    """
    Render an issue as `Sheet:row N [field] - message`.
    """

    location = issue.sheet if not issue.row else f"{issue.sheet}:row {issue.row}"
    field_part = f" [{issue.field}]" if issue.field else ""
    return f"{location}{field_part} - {issue.message}"
