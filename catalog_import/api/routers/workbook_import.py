"""
catalog_import/api/routers/workbook_import.py

Workbook validation and template HTTP endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response, UploadFile, status

from catalog_import.api.dependencies import get_workbook_upload
from catalog_import.config import WorkbookImportSettings, get_workbook_import_settings
from catalog_import.readers.cell_grid import WorkbookReadError
from catalog_import.schemas.workbook_validation import WorkbookValidationResponse
from catalog_import.services.template_service import TEMPLATE_FILENAME, render_import_template
from catalog_import.services.workbook_validation_service import (
    WorkbookValidationService,
    get_workbook_validation_service,
)

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

router = APIRouter(prefix="/workbook-imports", tags=["workbook-import"])


@router.post("/validate", response_model=WorkbookValidationResponse, response_model_by_alias=True)
def validate_workbook(
    file: UploadFile = Depends(get_workbook_upload),
    settings: WorkbookImportSettings = Depends(get_workbook_import_settings),
    validation_service: WorkbookValidationService = Depends(get_workbook_validation_service),
) -> WorkbookValidationResponse:
    """
    Validate one catalog import workbook and return the normalized payload with all issues.
    """

    try:
        payload = file.file.read(settings.max_upload_bytes + 1)
    finally:
        file.file.close()

    if len(payload) > settings.max_upload_bytes:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"Workbook exceeds the {settings.max_upload_bytes} byte upload limit.",
        )

    try:
        result = validation_service.validate_bytes(payload)
    except WorkbookReadError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc

    return WorkbookValidationResponse.from_result(result)


@router.get("/template")
def download_template(
    validation_service: WorkbookValidationService = Depends(get_workbook_validation_service),
) -> Response:
    """
    Download a blank import workbook matching the configured product sheets.
    """

    return Response(
        content=render_import_template(validation_service.product_sheets),
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{TEMPLATE_FILENAME}"'},
    )
