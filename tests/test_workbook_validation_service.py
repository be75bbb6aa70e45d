"""
tests/test_workbook_validation_service.py

End-to-end tests of the validation pipeline over in-memory workbook grids.
No binary workbook is involved; every test starts from the minimal valid
workbook in conftest and breaks exactly one thing.
"""

from __future__ import annotations

from conftest import PRODUCT_HEADERS, attribute_row, run_validation

from catalog_import.domain.issues import IssueSeverity, format_issue


def _item(result, identifier):
    return next(item for item in result.items if item.identifier == identifier)


def _attribute(result, identifier):
    return next(attribute for attribute in result.attributes if attribute.identifier == identifier)


# ---------------------------------------------------------------------------
# Baseline
# ---------------------------------------------------------------------------


class TestBaseline:
    def test_minimal_workbook_is_valid(self, sheets) -> None:
        result = run_validation(sheets)

        assert result.valid is True
        assert result.errors == []
        assert result.warnings == []
        assert result.summary.to_dict() == {
            "attrGroups": 2,
            "attributes": 3,
            "types": 4,
            "items": 2,
            "errors": 0,
            "warnings": 0,
        }

    def test_runs_are_deterministic(self, sheets) -> None:
        assert run_validation(sheets).to_dict() == run_validation(sheets).to_dict()

    def test_payload_shape(self, sheets) -> None:
        payload = run_validation(sheets).payload()

        assert payload["config"] == {"mode": "CREATE_UPDATE", "errors": "PROCESS_WARN"}
        assert payload["types"][1] == {
            "identifier": "tct_router_bit",
            "name": {"en": "TCT Router Bit"},
            "parentIdentifier": "product_type",
            "icon": "saw-blade",
            "iconColor": "indigo",
            "file": False,
        }
        router_bit = payload["items"][1]
        assert router_bit["typeIdentifier"] == "tct_router_bit"
        assert router_bit["parentIdentifier"] == "catalog_root_001"
        assert router_bit["values"] == {"is_coated": True, "cutting_diameter": 12.7, "material": "Carbide"}
        assert "channels" not in router_bit


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------


class TestConfig:
    def test_absent_config_sheet_uses_defaults(self, sheets) -> None:
        del sheets["Import_Config"]

        result = run_validation(sheets)

        assert result.valid is True
        assert result.config.mode == "CREATE_UPDATE"
        assert result.config.error_policy == "PROCESS_WARN"
        assert result.config.default_language == "en"

    def test_invalid_mode_is_error_and_odd_language_is_warning(self, sheets) -> None:
        sheets["Import_Config"][1] = ["Mode", "replace_all"]
        sheets["Import_Config"][3] = ["default_language", "english"]

        result = run_validation(sheets)

        assert [(issue.field, issue.row) for issue in result.errors] == [("mode", None)]
        assert [issue.field for issue in result.warnings] == ["default_language"]

    def test_default_language_tags_names(self, sheets) -> None:
        sheets["Import_Config"][3] = ["default_language", "DE-at"]

        result = run_validation(sheets)

        assert result.attr_groups[0].to_payload()["name"] == {"de-at": "Cutting Geometry"}


# ---------------------------------------------------------------------------
# Groups, types, bindings
# ---------------------------------------------------------------------------


class TestMetadataSheets:
    def test_duplicate_group_identifier_is_case_insensitive(self, sheets) -> None:
        sheets["Attribute_Groups"].append([" COMMERCIAL ", "Commercial Again", 30, "", ""])

        result = run_validation(sheets)

        assert len(result.errors) == 1
        issue = result.errors[0]
        assert (issue.sheet, issue.row, issue.field) == ("Attribute_Groups", 4, "identifier")
        assert [group.name for group in result.attr_groups] == ["Cutting Geometry", "Commercial Data"]

    def test_missing_header_is_reported_on_row_one(self, sheets) -> None:
        sheets["Attribute_Groups"][0] = ["identifier", "name_en", "order", "visible"]
        for row in sheets["Attribute_Groups"][1:]:
            row.pop()

        result = run_validation(sheets)

        assert [(issue.row, issue.field, issue.message) for issue in result.errors] == [
            (1, "options_json", "Missing required header")
        ]
        assert len(result.attr_groups) == 2

    def test_blank_rows_are_skipped_silently(self, sheets) -> None:
        sheets["Types"].insert(2, ["", None, "  ", "", "", ""])

        result = run_validation(sheets)

        assert result.valid is True
        assert len(result.types) == 4

    def test_self_parent_type_is_rejected(self, sheets) -> None:
        sheets["Types"].append(["loop", "Loop", "LOOP", "", "", ""])

        result = run_validation(sheets)

        assert [(issue.row, issue.field) for issue in result.errors] == [(6, "parent_identifier")]
        assert "loop" not in {type_request.identifier for type_request in result.types}

    def test_unresolved_parent_type_is_warning(self, sheets) -> None:
        sheets["Types"].append(["spade_bit", "Spade Bit", "external_root", "", "", ""])

        result = run_validation(sheets)

        assert result.valid is True
        assert [(issue.row, issue.field) for issue in result.warnings] == [(6, "parent_identifier")]
        assert "spade_bit" in {type_request.identifier for type_request in result.types}

    def test_invalid_file_flag_drops_type(self, sheets) -> None:
        sheets["Types"][4][5] = "sometimes"

        result = run_validation(sheets)

        assert [(issue.row, issue.field) for issue in result.errors] == [(5, "file")]
        assert len(result.types) == 3

    def test_binding_with_unknown_references_is_warning(self, sheets) -> None:
        sheets["Type_Group_Bindings"].append(["legacy_group", "legacy_type", "", ""])

        result = run_validation(sheets)

        assert result.valid is True
        assert {issue.field for issue in result.warnings} == {"group_identifier", "type_identifier"}

    def test_binding_with_bad_flag_is_error(self, sheets) -> None:
        sheets["Type_Group_Bindings"][1][2] = "perhaps"

        result = run_validation(sheets)

        assert [(issue.sheet, issue.field) for issue in result.errors] == [("Type_Group_Bindings", "valid")]


# ---------------------------------------------------------------------------
# Attributes
# ---------------------------------------------------------------------------


class TestAttributes:
    def test_unknown_group_rejects_attribute(self, sheets) -> None:
        sheets["Attributes"].append(attribute_row("shank", "Shank", 4, "unknown_group"))

        result = run_validation(sheets)

        assert len(result.errors) == 1
        assert (result.errors[0].row, result.errors[0].field) == (5, "groups_csv")
        assert "shank" not in {attribute.identifier for attribute in result.attributes}

    def test_bindings_propagate_to_valid_types(self, sheets) -> None:
        result = run_validation(sheets)

        material = _attribute(result, "material")
        assert "tct_router_bit" in material.valid_types
        assert material.visible_types == ("tct_router_bit", "insert_tool", "countersink")

    def test_binding_flags_split_valid_and_visible(self, sheets) -> None:
        sheets["Type_Group_Bindings"] = [
            sheets["Type_Group_Bindings"][0],
            ["commercial", "insert_tool", "FALSE", "TRUE"],
        ]
        sheets["Attributes"][2] = attribute_row(
            "material", "Material", 1, "commercial", valid_types_csv="Countersink"
        )

        result = run_validation(sheets)

        material = _attribute(result, "material")
        assert material.valid_types == ("countersink",)
        assert material.visible_types == ("insert_tool",)

    def test_unknown_explicit_type_is_warning(self, sheets) -> None:
        sheets["Attributes"][1] = attribute_row(
            "cutting_diameter", "Cutting Diameter", 4, "cutting_geometry", visible_types_csv="legacy"
        )

        result = run_validation(sheets)

        assert result.valid is True
        assert [(issue.row, issue.field) for issue in result.warnings] == [(2, "visible_types_csv")]
        assert "legacy" in _attribute(result, "cutting_diameter").visible_types

    def test_invalid_type_code_is_error(self, sheets) -> None:
        sheets["Attributes"].append(attribute_row("shank", "Shank", 9, "commercial"))

        result = run_validation(sheets)

        assert [issue.message for issue in result.errors] == ["type_code must be one of 1..8"]

    def test_duplicate_attribute_identifier(self, sheets) -> None:
        sheets["Attributes"].append(attribute_row("Material", "Material 2", 1, "commercial"))

        result = run_validation(sheets)

        assert [issue.message for issue in result.errors] == ["Duplicate attribute identifier"]
        assert len(result.attributes) == 3

    def test_optional_fields_reach_payload(self, sheets) -> None:
        sheets["Attributes"].append(
            attribute_row(
                "coating",
                "Coating",
                7,
                "commercial",
                lov_identifier="Coatings",
                pattern="^[A-Z]+$",
                options_json='{"display": "chips"}',
                language_dependent="yes",
            )
        )

        payload = _attribute(run_validation(sheets), "coating").to_payload()

        assert payload["lov"] == "coatings"
        assert payload["pattern"] == "^[A-Z]+$"
        assert payload["options"] == {"display": "chips"}
        assert payload["languageDependent"] is True
        assert payload["type"] == 7


# ---------------------------------------------------------------------------
# Items
# ---------------------------------------------------------------------------


def _product_row(identifier="router_bit_002", *, parent="catalog_root_001", values="{}", diameter="", material=""):
    return [identifier, "Router Bit 002", "tct_router_bit", parent, values, "{}", diameter, material]


class TestItems:
    def test_child_type_requires_parent_item(self, sheets) -> None:
        sheets["TCT_Router_Bit"].append(_product_row(parent=""))

        result = run_validation(sheets)

        assert len(result.errors) == 1
        assert (result.errors[0].row, result.errors[0].field) == (3, "parent_identifier")
        assert "router_bit_002" not in {item.identifier for item in result.items}

    def test_values_json_is_coerced_per_attribute_type(self, sheets) -> None:
        sheets["TCT_Router_Bit"].append(_product_row(values='{"cutting_diameter": "12.7"}'))

        result = run_validation(sheets)

        value = _item(result, "router_bit_002").values["cutting_diameter"]
        assert value == 12.7
        assert isinstance(value, float)

    def test_blank_attribute_column_is_omitted(self, sheets) -> None:
        sheets["TCT_Router_Bit"].append(_product_row(diameter=6.0, material=""))

        result = run_validation(sheets)

        values = _item(result, "router_bit_002").values
        assert "material" not in values
        assert values == {"cutting_diameter": 6.0}

    def test_attribute_columns_override_values_json(self, sheets) -> None:
        sheets["TCT_Router_Bit"].append(_product_row(values='{"Material": "Steel"}', material="HSS"))

        result = run_validation(sheets)

        assert _item(result, "router_bit_002").values == {"material": "HSS"}

    def test_duplicate_item_identifier_across_sheets(self, sheets) -> None:
        sheets["Item_Parents"].append(["x001", "First", "product_type", "", "{}", "{}"])
        sheets["Insert_Tool"].append(
            ["X001", "Second", "insert_tool", "catalog_root_001", "{}", "{}", "", ""]
        )

        result = run_validation(sheets)

        assert len(result.errors) == 1
        issue = result.errors[0]
        assert (issue.sheet, issue.row, issue.field) == ("Insert_Tool", 2, "identifier")
        duplicates = [item for item in result.items if item.identifier == "x001"]
        assert [item.name for item in duplicates] == ["First"]

    def test_unknown_attribute_reference_is_error_but_row_survives(self, sheets) -> None:
        sheets["TCT_Router_Bit"].append(_product_row(values='{"weight": 3, "material": "Steel"}'))

        result = run_validation(sheets)

        assert [(issue.field, issue.message) for issue in result.errors] == [
            ("values_json", "values_json contains unknown attribute 'weight'")
        ]
        assert _item(result, "router_bit_002").values == {"material": "Steel"}

    def test_unknown_attribute_column_is_error(self, sheets) -> None:
        sheets["Insert_Tool"] = [
            [*PRODUCT_HEADERS, "attr:weight"],
            ["insert_001", "Insert 001", "insert_tool", "catalog_root_001", "{}", "{}", "", "", 3],
        ]

        result = run_validation(sheets)

        assert [(issue.field, issue.message) for issue in result.errors] == [
            ("attr:weight", "Unknown attribute 'weight'")
        ]

    def test_value_coercion_failure_omits_value(self, sheets) -> None:
        sheets["TCT_Router_Bit"].append(_product_row(values='{"is_coated": "sometimes"}', diameter="wide"))

        result = run_validation(sheets)

        assert [issue.field for issue in result.errors] == ["values_json.is_coated", "attr:cutting_diameter"]
        assert result.errors[1].message == "Invalid value: Expected number"
        assert _item(result, "router_bit_002").values == {}

    def test_language_dependent_values_are_wrapped(self, sheets) -> None:
        sheets["Attributes"].append(attribute_row("summary", "Summary", 1, "commercial", language_dependent="TRUE"))
        sheets["TCT_Router_Bit"].append(
            _product_row(values='{"summary": "Fast cut", "SUMMARY": {"fr": "Coupe rapide"}}')
        )

        result = run_validation(sheets)

        assert _item(result, "router_bit_002").values["summary"] == {"fr": "Coupe rapide"}
        assert result.valid is True

    def test_item_cannot_be_its_own_parent(self, sheets) -> None:
        sheets["TCT_Router_Bit"].append(_product_row(parent="router_bit_002"))

        result = run_validation(sheets)

        assert [issue.message for issue in result.errors] == [
            "parent_identifier cannot reference the same item identifier"
        ]

    def test_unresolved_parent_item_is_warning(self, sheets) -> None:
        sheets["TCT_Router_Bit"].append(_product_row(parent="external_root"))

        result = run_validation(sheets)

        assert result.valid is True
        assert [(issue.field, issue.severity) for issue in result.warnings] == [
            ("parent_identifier", IssueSeverity.WARNING)
        ]
        assert _item(result, "router_bit_002").parent_identifier == "external_root"

    def test_parent_declared_in_later_sheet_is_resolved(self, sheets) -> None:
        sheets["TCT_Router_Bit"].append(_product_row(parent="insert_001"))
        sheets["Insert_Tool"].append(
            ["insert_001", "Insert 001", "insert_tool", "catalog_root_001", "{}", "{}", "", ""]
        )

        result = run_validation(sheets)

        assert result.warnings == []

    def test_deeply_nested_json_cell_is_reported_not_raised(self, sheets) -> None:
        sheets["TCT_Router_Bit"][1][4] = "[" * 5000

        result = run_validation(sheets)

        assert [(issue.sheet, issue.field, issue.message) for issue in result.errors] == [
            ("TCT_Router_Bit", "values_json", "Invalid JSON object"),
        ]
        assert [item.identifier for item in result.items] == ["catalog_root_001"]

    def test_invalid_channels_json_drops_item(self, sheets) -> None:
        row = _product_row()
        row[5] = "[1, 2]"
        sheets["TCT_Router_Bit"].append(row)

        result = run_validation(sheets)

        assert [(issue.field, issue.message) for issue in result.errors] == [
            ("channels_json", "Expected JSON object")
        ]
        assert len(result.items) == 2


# ---------------------------------------------------------------------------
# Mandatory sheets
# ---------------------------------------------------------------------------


class TestMandatorySheets:
    def test_missing_types_sheet_reports_once_and_continues(self, sheets) -> None:
        del sheets["Types"]

        result = run_validation(sheets)

        assert len(result.errors) == 1
        issue = result.errors[0]
        assert (issue.sheet, issue.row, issue.field) == ("Types", None, "sheet")
        assert result.types == []
        assert len(result.attributes) == 3
        assert len(result.items) == 2
        assert any(issue.sheet == "TCT_Router_Bit" for issue in result.warnings)

    def test_missing_product_sheet_is_error(self, sheets) -> None:
        del sheets["Countersink"]

        result = run_validation(sheets)

        assert [format_issue(issue) for issue in result.errors] == [
            "Countersink [sheet] - Sheet is required but missing"
        ]
