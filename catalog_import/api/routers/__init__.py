"""
catalog_import/api/routers package marker.
"""

from catalog_import.api.routers.workbook_import import router as workbook_import_router

__all__ = [
    "workbook_import_router",
]
