"""
tests/test_enums.py
Unit tests for typegen.enums.

Tests cover:
- Enum schemas to member tables
- Member-name legality
- Plugin enums
- Inline enum extraction (labeled enum vs. type alias)
"""

from __future__ import annotations

import re
from typing import Any, Dict

import pytest

from typegen.enums import (
    InlineEnum,
    enum_to_union_type,
    extract_inline_enums,
    generate_enums,
    generate_plugin_enums,
    schema_to_enum,
    to_enum_member_name,
)
from typegen.models import GenerationConfig, SchemaCollection, SchemaDefinition

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def _collection(*schemas: Dict[str, Any]) -> SchemaCollection:
    return SchemaCollection.model_validate({"schemas": list(schemas)})


# ===========================================================================
# Named enums
# ===========================================================================


class TestSchemaToEnum:
    """Enum-kind schemas become member tables."""

    def test_status_members(self) -> None:
        schema = SchemaDefinition.model_validate(
            {"name": "Status", "kind": "enum", "values": ["active", "inactive"]}
        )
        definition = schema_to_enum(schema)
        assert [(m.name, m.value) for m in definition.members] == [
            ("Active", "active"),
            ("Inactive", "inactive"),
        ]
        assert not definition.has_labels
        assert definition.comment == "Status"

    def test_object_schema_is_not_an_enum(self) -> None:
        assert schema_to_enum(SchemaDefinition(name="User")) is None

    def test_labels_resolved_to_target_locale(self) -> None:
        schema = SchemaDefinition.model_validate(
            {
                "name": "Plan",
                "kind": "enum",
                "values": [{"value": "free", "label": {"en": "Free", "ja": "無料"}}],
            }
        )
        definition = schema_to_enum(schema, GenerationConfig(locale="ja"))
        assert definition.members[0].label == "無料"

    def test_labels_kept_as_maps_in_multi_locale(self) -> None:
        schema = SchemaDefinition.model_validate(
            {
                "name": "Plan",
                "kind": "enum",
                "values": [{"value": "free", "label": {"en": "Free", "ja": "無料"}}],
            }
        )
        definition = schema_to_enum(schema, GenerationConfig(multi_locale=True))
        assert definition.members[0].label == {"en": "Free", "ja": "無料"}
        assert definition.has_multi_locale_labels

    def test_extra_metadata(self) -> None:
        schema = SchemaDefinition.model_validate(
            {"name": "Tier", "kind": "enum", "values": [{"value": "gold", "extra": {"rank": 1}}, "silver"]}
        )
        definition = schema_to_enum(schema)
        assert definition.has_extra
        assert definition.members[0].extra == {"rank": 1}
        assert definition.members[1].extra is None

    def test_generate_enums_declaration_order(self, example_collection: SchemaCollection) -> None:
        assert [e.name for e in generate_enums(example_collection)] == ["Status"]


class TestMemberNames:
    """Every raw value maps to a legal identifier."""

    @pytest.mark.parametrize(
        "raw",
        ["active", "in_progress", "inProgress", "2fa", "1st-place", "a b c", "ä", "-", "", "x.y", "$dollar"],
    )
    def test_member_name_is_identifier(self, raw: str) -> None:
        assert _IDENTIFIER_RE.match(to_enum_member_name(raw))

    def test_camel_case_value_capitalizes_first_letter_only(self) -> None:
        assert to_enum_member_name("inProgress") == "Inprogress"

    def test_digit_prefix(self) -> None:
        assert to_enum_member_name("2fa") == "_2fa"


# ===========================================================================
# Plugin enums
# ===========================================================================


class TestPluginEnums:
    """Plugin enums live in their own namespace."""

    def test_plugin_flag_and_labels(self, example_config: GenerationConfig) -> None:
        (prefecture,) = generate_plugin_enums(example_config)
        assert prefecture.plugin is True
        assert prefecture.comment == "Prefecture"
        assert [(m.name, m.label) for m in prefecture.members] == [("Tokyo", "Tokyo"), ("Osaka", "Osaka")]

    def test_no_plugin_enums(self) -> None:
        assert generate_plugin_enums(GenerationConfig()) == []


# ===========================================================================
# Inline enums
# ===========================================================================


class TestInlineEnums:
    """Inline enumerations become labeled enums or literal-union aliases."""

    def test_labeled_inline_enum(self) -> None:
        collection = _collection(
            {
                "name": "Task",
                "properties": {
                    "task_status": {"type": "Enum", "enum": [{"value": "pending", "label": {"en": "Pending"}}]}
                },
            }
        )
        (found,) = extract_inline_enums(collection)
        assert found.name == "TaskTaskStatus"
        assert found.enum is not None
        assert found.alias is None
        assert found.enum.members[0].label == "Pending"
        assert found.source == "Task.task_status"

    def test_unlabeled_inline_enum_is_alias(self) -> None:
        collection = _collection(
            {"name": "Post", "properties": {"visibility": {"type": "Enum", "enum": ["public", "private"]}}}
        )
        (found,) = extract_inline_enums(collection)
        assert found.enum is None
        assert found.alias.name == "PostVisibility"
        assert found.alias.type_expr == "'public' | 'private'"
        assert found.alias.comment == "Post visibility enum"

    def test_select_options(self, example_collection: SchemaCollection) -> None:
        found = {i.name: i for i in extract_inline_enums(example_collection)}
        assert set(found) == {"TaskTaskStatus", "TaskPriority"}
        assert found["TaskPriority"].alias.values == ("low", "medium", "high")
        assert found["TaskPriority"].alias.comment == "Task priority options"

    def test_camel_case_property_name(self) -> None:
        collection = _collection(
            {"name": "Account", "properties": {"planType": {"type": "Select", "options": ["a"]}}}
        )
        assert extract_inline_enums(collection)[0].name == "AccountPlanType"

    def test_empty_inline_enum_has_no_name(self) -> None:
        with pytest.raises(ValueError, match="Task.status"):
            InlineEnum(schema_name="Task", property_name="status").name

    def test_empty_and_referenced_enums_ignored(self) -> None:
        collection = _collection(
            {
                "name": "Item",
                "properties": {
                    "a": {"type": "Enum", "enum": []},
                    "b": {"type": "EnumRef", "enum": "Status"},
                },
            }
        )
        assert extract_inline_enums(collection) == []

    def test_hidden_schemas_scanned(self) -> None:
        collection = _collection(
            {
                "name": "Audit",
                "options": {"hidden": True},
                "properties": {"level": {"type": "Enum", "enum": ["info"]}},
            }
        )
        assert [i.name for i in extract_inline_enums(collection)] == ["AuditLevel"]

    def test_union_from_enum(self) -> None:
        schema = SchemaDefinition.model_validate({"name": "Status", "kind": "enum", "values": ["a", "b"]})
        alias = enum_to_union_type(schema_to_enum(schema))
        assert alias.type_expr == "'a' | 'b'"
