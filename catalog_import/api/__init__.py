"""
catalog_import/api package marker.
"""
