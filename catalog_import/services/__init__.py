"""
catalog_import/services package marker.
"""

from catalog_import.services.template_service import (
    TEMPLATE_FILENAME,
    build_import_template,
    render_import_template,
)
from catalog_import.services.workbook_validation_service import (
    WorkbookValidationService,
    get_workbook_validation_service,
)

__all__ = [
    "TEMPLATE_FILENAME",
    "WorkbookValidationService",
    "build_import_template",
    "get_workbook_validation_service",
    "render_import_template",
]
