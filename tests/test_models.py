"""
tests/test_models.py
Unit tests for typegen.models.

Tests cover:
- Property variant selection from the raw ``type`` tag
- camelCase / snake_case key acceptance
- Enum value coercion
- Plugin registries keyed by name
- GeneratedFile computed metrics
- SchemaCollection lookup helpers
"""

from __future__ import annotations

from typing import Any, Dict

import pytest
from pydantic import ValidationError

from typegen.models import (
    AssociationProperty,
    CustomTypeProperty,
    EnumRefProperty,
    EnumValueDefinition,
    FileCategory,
    FileProperty,
    GeneratedFile,
    GenerationConfig,
    InlineEnumProperty,
    OutputLayout,
    PrimitiveProperty,
    SchemaCollection,
    SchemaDefinition,
    SelectProperty,
)
from typegen.utils import sha256_hex


def _property(raw: Dict[str, Any]):
    schema = SchemaDefinition.model_validate({"name": "Probe", "properties": {"p": raw}})
    return schema.properties["p"]


# ===========================================================================
# Property variants
# ===========================================================================


class TestPropertyVariants:
    """The raw type tag selects exactly one property model."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ({"type": "String"}, PrimitiveProperty),
            ({"type": "Timestamp"}, PrimitiveProperty),
            ({"type": "Association", "relation": "ManyToOne", "target": "User"}, AssociationProperty),
            ({"type": "EnumRef", "enum": "Status"}, EnumRefProperty),
            ({"type": "Enum", "enum": "Status"}, EnumRefProperty),
            ({"type": "Enum", "enum": ["a", "b"]}, InlineEnumProperty),
            ({"type": "Select", "options": ["x"]}, SelectProperty),
            ({"type": "File", "multiple": True}, FileProperty),
            ({"type": "JapaneseAddress"}, CustomTypeProperty),
        ],
    )
    def test_variant_selection(self, raw: Dict[str, Any], expected: type) -> None:
        assert isinstance(_property(raw), expected)

    def test_enum_with_string_keeps_reference(self) -> None:
        prop = _property({"type": "Enum", "enum": "Status"})
        assert prop.enum == "Status"

    def test_association_requires_relation(self) -> None:
        with pytest.raises(ValidationError):
            _property({"type": "Association", "target": "User"})

    def test_nullable_defaults_to_false(self) -> None:
        assert _property({"type": "String"}).is_nullable is False
        assert _property({"type": "String", "nullable": True}).is_nullable is True

    def test_camel_case_keys_accepted(self) -> None:
        prop = _property({"type": "String", "displayName": "Title", "maxLength": 20})
        assert prop.display_name == "Title"
        assert prop.max_length == 20

    def test_compound_overrides_read_from_fields_key(self) -> None:
        prop = _property({"type": "JapaneseAddress", "fields": {"city": {"nullable": True}}})
        assert prop.field_overrides["city"].nullable is True


# ===========================================================================
# Enum values
# ===========================================================================


class TestEnumValueDefinition:
    """Bare scalars and records both validate."""

    def test_string_scalar(self) -> None:
        assert EnumValueDefinition.model_validate("active").value == "active"

    def test_numeric_scalar_becomes_string(self) -> None:
        assert EnumValueDefinition.model_validate(3).value == "3"

    def test_boolean_scalar_lowercased(self) -> None:
        assert EnumValueDefinition.model_validate(True).value == "true"

    def test_record_with_label_and_extra(self) -> None:
        value = EnumValueDefinition.model_validate(
            {"value": "gold", "label": {"en": "Gold"}, "extra": {"color": "#ffd700"}}
        )
        assert value.label == {"en": "Gold"}
        assert value.extra == {"color": "#ffd700"}


# ===========================================================================
# Schemas
# ===========================================================================


class TestSchemaDefinition:
    """Schema kinds, options and immutability."""

    def test_defaults(self) -> None:
        schema = SchemaDefinition(name="Item")
        assert not schema.is_enum
        assert schema.options.id is True
        assert schema.options.timestamps is True
        assert schema.options.soft_delete is False
        assert not schema.is_hidden

    def test_enum_kind(self) -> None:
        schema = SchemaDefinition.model_validate(
            {"name": "Status", "kind": "enum", "values": ["active", "inactive"]}
        )
        assert schema.is_enum
        assert [v.value for v in schema.values] == ["active", "inactive"]

    def test_options_camel_case(self) -> None:
        schema = SchemaDefinition.model_validate(
            {"name": "Item", "options": {"softDelete": True, "idType": "Uuid"}}
        )
        assert schema.options.soft_delete is True
        assert schema.options.id_type == "Uuid"

    def test_source_label(self) -> None:
        assert SchemaDefinition(name="User").source_label == "<User>"
        assert SchemaDefinition(name="User", source_path="a/User.yaml").source_label == "a/User.yaml"

    def test_frozen(self) -> None:
        schema = SchemaDefinition(name="Item")
        with pytest.raises(ValidationError):
            schema.name = "Other"  # type: ignore[misc]

    def test_empty_name_rejected(self) -> None:
        with pytest.raises(ValidationError):
            SchemaDefinition(name="")


class TestSchemaCollection:
    """Ordered list with name lookup; duplicates survive loading."""

    def test_duplicates_kept(self, duplicate_user_schemas) -> None:
        collection = SchemaCollection.model_validate({"schemas": duplicate_user_schemas})
        assert len(collection) == 2
        assert collection.get("User").source_path == "schemas/User.yaml"

    def test_partitions(self, example_collection: SchemaCollection) -> None:
        assert example_collection.enum_names == frozenset({"Status"})
        assert "Comment" in example_collection.object_names
        assert [s.name for s in example_collection.object_schemas] == [
            "User", "Task", "Post", "Video", "Comment",
        ]

    def test_get_missing(self, example_collection: SchemaCollection) -> None:
        assert example_collection.get("Nope") is None


# ===========================================================================
# Generation config
# ===========================================================================


class TestGenerationConfig:
    """Defaults and plugin registries."""

    def test_defaults(self) -> None:
        config = GenerationConfig()
        assert config.generate_zod_schemas is True
        assert config.readonly is False
        assert config.layout == OutputLayout.FLAT.value
        assert config.package_name == "@schema-base"
        assert config.target_locale == "en"
        assert config.import_extension == ""

    def test_js_extension(self) -> None:
        assert GenerationConfig(use_js_extension=True).import_extension == ".js"

    def test_custom_types_from_list(self) -> None:
        config = GenerationConfig.model_validate(
            {"custom_types": [{"name": "Money", "type_hint": "number"}]}
        )
        assert config.custom_type("Money").type_hint == "number"
        assert config.custom_type("Other") is None

    def test_custom_types_from_mapping_take_key_as_name(self) -> None:
        config = GenerationConfig.model_validate({"customTypes": {"Money": {"typescript": {"type": "number"}}}})
        definition = config.custom_type("Money")
        assert definition.name == "Money"
        assert definition.type_hint == "number"

    def test_plugin_field_lifts_sql_nullable(self) -> None:
        config = GenerationConfig.model_validate(
            {
                "custom_types": {
                    "Addr": {
                        "compound": True,
                        "expand": [{"suffix": "line2", "sql": {"nullable": True, "length": 80}}],
                    }
                }
            }
        )
        entry = config.custom_type("Addr").expand[0]
        assert entry.nullable is True
        assert entry.length == 80

    def test_accessors_accept_records(self) -> None:
        config = GenerationConfig.model_validate(
            {"custom_types": {"Name": {"compound": True, "accessors": [{"name": "full"}, "initials"]}}}
        )
        assert config.custom_type("Name").accessors == ["full", "initials"]

    def test_plugin_enums_keyed_by_name(self, example_config: GenerationConfig) -> None:
        assert list(example_config.plugin_enums) == ["Prefecture"]

    def test_nameless_list_entry_rejected(self) -> None:
        with pytest.raises(ValidationError, match="has no 'name'"):
            GenerationConfig.model_validate({"custom_types": [{"type_hint": "number"}]})

    def test_locale_requires_at_least_one(self) -> None:
        with pytest.raises(ValidationError):
            GenerationConfig.model_validate({"locale_config": {"locales": []}})


# ===========================================================================
# Generated output
# ===========================================================================


class TestGeneratedFile:
    """Computed metrics and defaults."""

    def test_metrics(self) -> None:
        generated = GeneratedFile(path="index.ts", content="a\nb\n")
        assert generated.line_count == 2
        assert generated.size_bytes == 4
        assert generated.checksum == sha256_hex("a\nb\n")

    def test_defaults(self) -> None:
        generated = GeneratedFile(path="x.ts", content="")
        assert generated.category == FileCategory.SCHEMA.value
        assert generated.overwrite is True
        assert generated.line_count == 0

    def test_multibyte_size(self) -> None:
        assert GeneratedFile(path="x.ts", content="姓").size_bytes == 3
