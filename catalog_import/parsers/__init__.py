"""
catalog_import/parsers package marker.
"""

from catalog_import.parsers.attribute_group_parser import parse_attribute_groups
from catalog_import.parsers.attribute_parser import parse_attributes, resolve_type_sets
from catalog_import.parsers.binding_parser import parse_type_group_bindings
from catalog_import.parsers.config_parser import DEFAULT_CONFIG, parse_config
from catalog_import.parsers.item_parser import ItemSheetParser, collect_declared_item_identifiers
from catalog_import.parsers.type_parser import parse_types

__all__ = [
    "DEFAULT_CONFIG",
    "ItemSheetParser",
    "collect_declared_item_identifiers",
    "parse_attribute_groups",
    "parse_attributes",
    "parse_config",
    "parse_type_group_bindings",
    "parse_types",
    "resolve_type_sets",
]
