"""
catalog_import/schemas/workbook_validation.py

Response schemas for workbook validation endpoints.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from catalog_import.domain.catalog import ValidationResult
from catalog_import.domain.issues import Issue


class WorkbookIssueResponse(BaseModel):
    """
    API response model for one validation issue.
    """

    model_config = ConfigDict(frozen=True)

    severity: Literal["error", "warning"]
    sheet: str
    row: int | None = Field(default=None, ge=1)
    field: str | None = None
    message: str

    @classmethod
    def from_issue(cls, issue: Issue) -> "WorkbookIssueResponse":
        return cls(
            severity=issue.severity.value,
            sheet=issue.sheet,
            row=issue.row,
            field=issue.field,
            message=issue.message,
        )


class WorkbookSummaryResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    attr_groups: int = Field(..., ge=0, alias="attrGroups")
    attributes: int = Field(..., ge=0)
    types: int = Field(..., ge=0)
    items: int = Field(..., ge=0)
    errors: int = Field(..., ge=0)
    warnings: int = Field(..., ge=0)


class WorkbookValidationResponse(BaseModel):
    """
    API response model for one workbook validation run.
    """

    payload: dict[str, Any]
    summary: WorkbookSummaryResponse
    errors: list[WorkbookIssueResponse] = Field(default_factory=list)
    warnings: list[WorkbookIssueResponse] = Field(default_factory=list)
    valid: bool

    @classmethod
    def from_result(cls, result: ValidationResult) -> "WorkbookValidationResponse":
        return cls(
            payload=result.payload(),
            summary=WorkbookSummaryResponse(**result.summary.to_dict()),
            errors=[WorkbookIssueResponse.from_issue(issue) for issue in result.errors],
            warnings=[WorkbookIssueResponse.from_issue(issue) for issue in result.warnings],
            valid=result.valid,
        )
