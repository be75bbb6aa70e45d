"""
catalog_import/schemas package marker.
"""

from catalog_import.schemas.workbook_validation import (
    WorkbookIssueResponse,
    WorkbookSummaryResponse,
    WorkbookValidationResponse,
)

__all__ = [
    "WorkbookIssueResponse",
    "WorkbookSummaryResponse",
    "WorkbookValidationResponse",
]
