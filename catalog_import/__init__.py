"""
catalog_import package marker.
"""
