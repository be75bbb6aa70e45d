"""
catalog_import/contract.py

Sheet and header contract shared by the workbook reader and the template builder.
"""

from __future__ import annotations

README_SHEET = "README"
CONFIG_SHEET = "Import_Config"
GROUPS_SHEET = "Attribute_Groups"
ATTRIBUTES_SHEET = "Attributes"
TYPES_SHEET = "Types"
TYPE_GROUP_BINDINGS_SHEET = "Type_Group_Bindings"
ITEM_PARENTS_SHEET = "Item_Parents"

DEFAULT_PRODUCT_SHEETS: tuple[str, ...] = (
    "TCT_Router_Bit",
    "Insert_Tool",
    "Countersink",
)

# Config is optional: defaults apply when the sheet is absent.
MANDATORY_METADATA_SHEETS: tuple[str, ...] = (
    GROUPS_SHEET,
    ATTRIBUTES_SHEET,
    TYPES_SHEET,
    TYPE_GROUP_BINDINGS_SHEET,
    ITEM_PARENTS_SHEET,
)

CONFIG_HEADERS: tuple[str, ...] = ("key", "value")

GROUP_HEADERS: tuple[str, ...] = (
    "identifier",
    "name_en",
    "order",
    "visible",
    "options_json",
)

ATTRIBUTE_HEADERS: tuple[str, ...] = (
    "identifier",
    "name_en",
    "type_code",
    "groups_csv",
    "order",
    "language_dependent",
    "rich_text",
    "multi_line",
    "pattern",
    "lov_identifier",
    "options_json",
    "valid_types_csv",
    "visible_types_csv",
)

TYPE_HEADERS: tuple[str, ...] = (
    "identifier",
    "name_en",
    "parent_identifier",
    "icon",
    "icon_color",
    "file",
)

TYPE_GROUP_BINDING_HEADERS: tuple[str, ...] = (
    "group_identifier",
    "type_identifier",
    "valid",
    "visible",
)

ITEM_BASE_HEADERS: tuple[str, ...] = (
    "identifier",
    "name_en",
    "type_identifier",
    "parent_identifier",
    "values_json",
    "channels_json",
)

ATTRIBUTE_COLUMN_PREFIX = "attr:"

CONFIG_KEY_MODE = "mode"
CONFIG_KEY_ERRORS = "errors"
CONFIG_KEY_DEFAULT_LANGUAGE = "default_language"

IMPORT_MODES: frozenset[str] = frozenset({"CREATE_ONLY", "UPDATE_ONLY", "CREATE_UPDATE"})
ERROR_POLICIES: frozenset[str] = frozenset({"PROCESS_WARN", "WARN_REJECTED"})

DEFAULT_IMPORT_MODE = "CREATE_UPDATE"
DEFAULT_ERROR_POLICY = "PROCESS_WARN"
DEFAULT_LANGUAGE = "en"


def item_sheet_names(product_sheets: tuple[str, ...]) -> tuple[str, ...]:
    """
    Item sheets in parse order: parents first, then each product sheet.
    """

    return (ITEM_PARENTS_SHEET, *product_sheets)


def mandatory_sheet_names(product_sheets: tuple[str, ...]) -> tuple[str, ...]:
    return (*MANDATORY_METADATA_SHEETS, *product_sheets)
