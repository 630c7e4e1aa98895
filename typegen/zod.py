# File: typegen/zod.py
"""
NexaFlow TypeGen - Zod Validator Synthesis
===========================================
Derives a Zod expression for every property of an object schema, the
per-locale i18n labels, and the create/update exclusion sets.

Composition order for one property::

    base validator (by kind)
      → declarative rules (format replaces the base, then string/numeric
        constraints are appended)
      → property pattern
      → ``.optional().nullable()``   (always last)

Associations, files and unregistered tags produce no validator; the field
is simply left out of the Zod schemas.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Optional, Sequence, Union

from typegen.locale import locale_map
from typegen.models import (
    NUMERIC_TYPES,
    STRING_TYPES,
    AssociationProperty,
    CustomTypeDefinition,
    CustomTypeField,
    CustomTypeProperty,
    EnumRefProperty,
    FileProperty,
    GenerationConfig,
    InlineEnumProperty,
    PropertyBase,
    SchemaDefinition,
    SelectProperty,
    ValidationRules,
)
from typegen.utils import escape_regex, escape_string, format_number, quote, to_snake_case

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("typegen.zod")

NULLABLE_SUFFIX: str = ".optional().nullable()"

# Fixed primitive → base validator table
_BASE_VALIDATORS: Dict[str, str] = {
    "Boolean": "z.boolean()",
    "Date": "z.string().date()",
    "DateTime": "z.string().datetime({ offset: true })",
    "Timestamp": "z.string().datetime({ offset: true })",
    "Time": "z.string().time()",
    "Json": "z.unknown()",
    "Lookup": "z.number().int().positive()",
}

_FORMAT_VALIDATORS: Sequence = (
    ("url", "z.string().url()"),
    ("uuid", "z.string().uuid()"),
    ("ip", "z.string().ip()"),
    ("ipv4", 'z.string().ip({ version: "v4" })'),
    ("ipv6", 'z.string().ip({ version: "v6" })'),
)

_CHARACTER_CLASSES: Sequence = (
    ("alpha", r"/^[a-zA-Z]*$/", "Must contain only letters"),
    ("alpha_num", r"/^[a-zA-Z0-9]*$/", "Must contain only letters and numbers"),
    (
        "alpha_dash",
        r"/^[a-zA-Z0-9_-]*$/",
        "Must contain only letters, numbers, dashes, and underscores",
    ),
    ("numeric", r"/^\d*$/", "Must contain only numbers"),
)

_COMPOUND_FORMATS: Dict[str, str] = {
    "email": "z.string().email()",
    "url": "z.string().url()",
    "phone": "z.string()",
    "postal_code": r"z.string().regex(/^\d{3}-?\d{4}$/)",
}


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ZodFieldSchema:
    field_name: str
    schema: str
    in_create: bool = True
    in_update: bool = True
    comment: Optional[str] = None


@dataclass(frozen=True)
class DisplayNames:
    """Per-locale labels for a model and its fields (insertion ordered)."""

    label: Dict[str, str]
    fields: Dict[str, Dict[str, str]] = field(default_factory=dict)
    placeholders: Dict[str, Dict[str, str]] = field(default_factory=dict)


@dataclass(frozen=True)
class ExcludedFields:
    create: FrozenSet[str]
    update: FrozenSet[str]


# ---------------------------------------------------------------------------
# Rule application
# ---------------------------------------------------------------------------


def _non_empty(value: Union[str, List[str], None]) -> List[str]:
    if value is None:
        return []
    items: List[str] = [value] if isinstance(value, str) else list(value)
    return [item for item in items if item]


def _affix_rule(values: List[str], anchor_start: bool) -> str:
    if len(values) == 1:
        method: str = "startsWith" if anchor_start else "endsWith"
        return f".{method}({quote(values[0])})"
    alternation: str = "|".join(escape_regex(v) for v in values)
    listing: str = escape_string(", ".join(values))
    if anchor_start:
        return f".regex(/^({alternation})/, {{ message: 'Must start with: {listing}' }})"
    return f".regex(/({alternation})$/, {{ message: 'Must end with: {listing}' }})"


def apply_validation_rules(schema: str, rules: Optional[ValidationRules], prop_type: str) -> str:
    """
    Append the declarative *rules* to a base Zod expression.

    The first truthy format rule (url > uuid > ip > ipv4 > ipv6) replaces
    *schema* outright.  String-only and numeric-only constraints are then
    appended according to *prop_type*; inconsistent bounds are emitted
    as given.
    """
    if rules is None:
        return schema

    result: str = schema
    for flag, replacement in _FORMAT_VALIDATORS:
        if getattr(rules, flag):
            result = replacement
            break

    if prop_type in STRING_TYPES:
        if rules.min_length is not None:
            result += f".min({rules.min_length})"
        if rules.max_length is not None:
            result += f".max({rules.max_length})"

        for flag, regex, message in _CHARACTER_CLASSES:
            if getattr(rules, flag):
                result += f".regex({regex}, {{ message: '{message}' }})"
        if rules.digits is not None:
            result += (
                f".length({rules.digits}).regex(/^\\d+$/, "
                f"{{ message: 'Must be exactly {rules.digits} digits' }})"
            )
        if rules.digits_between is not None:
            low, high = rules.digits_between
            result += (
                f".min({low}).max({high}).regex(/^\\d+$/, "
                f"{{ message: 'Must be {low}-{high} digits' }})"
            )

        prefixes: List[str] = _non_empty(rules.starts_with)
        if prefixes:
            result += _affix_rule(prefixes, anchor_start=True)
        suffixes: List[str] = _non_empty(rules.ends_with)
        if suffixes:
            result += _affix_rule(suffixes, anchor_start=False)

        if rules.lowercase:
            result += ".refine(v => v === v.toLowerCase(), { message: 'Must be lowercase' })"
        if rules.uppercase:
            result += ".refine(v => v === v.toUpperCase(), { message: 'Must be uppercase' })"

    if prop_type in NUMERIC_TYPES:
        if rules.min is not None:
            result += f".gte({format_number(rules.min)})"
        if rules.max is not None:
            result += f".lte({format_number(rules.max)})"
        if rules.between is not None:
            low_n, high_n = rules.between
            result += f".gte({format_number(low_n)}).lte({format_number(high_n)})"
        if rules.gt is not None:
            result += f".gt({format_number(rules.gt)})"
        if rules.lt is not None:
            result += f".lt({format_number(rules.lt)})"
        if rules.multiple_of is not None:
            result += f".multipleOf({format_number(rules.multiple_of)})"

    return result


# ---------------------------------------------------------------------------
# Per-property validators
# ---------------------------------------------------------------------------


def _enum_literals(values: Sequence) -> str:
    return ", ".join(quote(v.value) for v in values)


def _primitive_validator(prop: PropertyBase) -> str:
    kind: str = prop.type
    upper: Optional[int] = prop.max_length or prop.length

    if kind == "Email":
        schema: str = "z.string().email()"
        if upper:
            schema += f".max({upper})"
        return schema

    if kind in STRING_TYPES:
        schema = "z.string()"
        explicit_floor: bool = prop.rules is not None and prop.rules.min_length is not None
        if not prop.is_nullable and not explicit_floor:
            floor: int = prop.min_length if prop.min_length and prop.min_length > 1 else 1
            schema += f".min({floor})"
        elif prop.min_length:
            schema += f".min({prop.min_length})"
        if upper:
            schema += f".max({upper})"
        return schema

    if kind in NUMERIC_TYPES:
        schema = "z.number()" if kind == "Float" else "z.number().int()"
        if prop.min is not None:
            schema += f".gte({format_number(prop.min)})"
        if prop.max is not None:
            schema += f".lte({format_number(prop.max)})"
        return schema

    return _BASE_VALIDATORS.get(kind, "")


def zod_schema_for_property(prop: PropertyBase, config: Optional[GenerationConfig] = None) -> str:
    """
    Zod expression for one non-compound property.

    Returns an empty string when the property has no runtime validator
    (associations, files, unregistered tags).
    """
    cfg: GenerationConfig = config or GenerationConfig()

    if isinstance(prop, (AssociationProperty, FileProperty)):
        return ""

    if isinstance(prop, CustomTypeProperty):
        definition: Optional[CustomTypeDefinition] = cfg.custom_type(prop.type)
        if definition is None:
            logger.debug("No validator for unregistered type tag %r", prop.type)
            return ""
        schema: str = "z.string()"
        if definition.length:
            schema += f".max({definition.length})"
        if prop.is_nullable:
            schema += NULLABLE_SUFFIX
        return schema

    if isinstance(prop, EnumRefProperty):
        schema = f"z.nativeEnum({prop.enum})"
    elif isinstance(prop, InlineEnumProperty):
        schema = f"z.enum([{_enum_literals(prop.enum)}])" if prop.enum else "z.string()"
    elif isinstance(prop, SelectProperty):
        schema = f"z.enum([{_enum_literals(prop.options)}])" if prop.options else "z.string()"
    else:
        schema = _primitive_validator(prop)

    if not schema:
        return ""

    schema = apply_validation_rules(schema, prop.rules, prop.type)
    if prop.pattern:
        schema += f".regex(/{prop.pattern}/)"
    if prop.is_nullable:
        schema += NULLABLE_SUFFIX
    return schema


def _first(*candidates):
    for candidate in candidates:
        if candidate is not None:
            return candidate
    return None


def _compound_field_schema(
    prop: PropertyBase,
    entry: CustomTypeField,
) -> str:
    override = prop.field_overrides.get(entry.suffix)
    override_rules: Optional[ValidationRules] = override.rules if override else None
    plugin_rules: Optional[ValidationRules] = entry.rules

    nullable: bool = bool(
        _first(override.nullable if override else None, entry.nullable, prop.nullable)
    )
    length: Optional[int] = _first(
        override.length if override else None,
        override_rules.max_length if override_rules else None,
        plugin_rules.max_length if plugin_rules else None,
        entry.length,
    )
    min_length: Optional[int] = _first(
        override_rules.min_length if override_rules else None,
        plugin_rules.min_length if plugin_rules else None,
    )
    pattern: Optional[str] = _first(
        override_rules.pattern if override_rules else None,
        plugin_rules.pattern if plugin_rules else None,
    )
    fmt: Optional[str] = _first(
        override_rules.format if override_rules else None,
        plugin_rules.format if plugin_rules else None,
    )

    schema: str = _COMPOUND_FORMATS.get(fmt or "", "z.string()")
    if not nullable:
        schema += f".min({min_length if min_length is not None else 1})"
    elif min_length:
        schema += f".min({min_length})"
    if length:
        schema += f".max({length})"
    if pattern and not fmt:
        schema += f".regex(/{pattern}/)"
    if nullable:
        schema += NULLABLE_SUFFIX
    return schema


def compound_type_schemas(
    prop_name: str,
    prop: PropertyBase,
    definition: CustomTypeDefinition,
    config: Optional[GenerationConfig] = None,
) -> List[ZodFieldSchema]:
    """One validator per expansion entry; accessors get none."""
    cfg: GenerationConfig = config or GenerationConfig()
    locale_cfg = cfg.locale_config
    labels: Dict[str, str] = locale_map(
        prop.display_name, locale_cfg.locales, locale_cfg.fallback_locale, prop_name
    )
    base_label: str = labels.get("en", prop_name)
    snake_prop: str = to_snake_case(prop_name)

    return [
        ZodFieldSchema(
            field_name=f"{snake_prop}_{to_snake_case(entry.suffix)}",
            schema=_compound_field_schema(prop, entry),
            comment=f"{base_label} ({entry.suffix})",
        )
        for entry in definition.expand
    ]


def generate_zod_schemas(
    schema: SchemaDefinition,
    config: Optional[GenerationConfig] = None,
) -> List[ZodFieldSchema]:
    """Field validators for one object schema, in declaration order."""
    cfg: GenerationConfig = config or GenerationConfig()
    fields: List[ZodFieldSchema] = []

    for prop_name, prop in schema.properties.items():
        definition: Optional[CustomTypeDefinition] = (
            cfg.custom_type(prop.type) if isinstance(prop, CustomTypeProperty) else None
        )
        if definition is not None and definition.compound:
            fields.extend(compound_type_schemas(prop_name, prop, definition, cfg))
            continue

        expr: str = zod_schema_for_property(prop, cfg)
        if not expr:
            continue
        fields.append(ZodFieldSchema(field_name=to_snake_case(prop_name), schema=expr))

    return fields


# ---------------------------------------------------------------------------
# i18n labels
# ---------------------------------------------------------------------------


def generate_display_names(
    schema: SchemaDefinition,
    config: Optional[GenerationConfig] = None,
) -> DisplayNames:
    """
    Per-locale labels and placeholders keyed by output field name.

    Compound fields take their label from the per-schema override, then
    the plugin label, else ``"<property label> (<suffix>)"``.
    """
    cfg: GenerationConfig = config or GenerationConfig()
    locales: List[str] = list(cfg.locale_config.locales)
    fallback: str = cfg.locale_config.fallback_locale

    names = DisplayNames(label=locale_map(schema.display_name, locales, fallback, schema.name))

    for prop_name, prop in schema.properties.items():
        field_name: str = to_snake_case(prop_name)
        definition: Optional[CustomTypeDefinition] = (
            cfg.custom_type(prop.type) if isinstance(prop, CustomTypeProperty) else None
        )

        if definition is not None and definition.compound and definition.expand:
            if prop.display_name:
                names.fields[field_name] = locale_map(prop.display_name, locales, fallback, prop_name)
            for entry in definition.expand:
                expanded: str = f"{field_name}_{to_snake_case(entry.suffix)}"
                override = prop.field_overrides.get(entry.suffix)
                label_source = _first(override.display_name if override else None, entry.label)
                if label_source:
                    names.fields[expanded] = locale_map(label_source, locales, fallback, entry.suffix)
                else:
                    parent = locale_map(prop.display_name, locales, fallback, prop_name)
                    names.fields[expanded] = {
                        loc: f"{text} ({entry.suffix})" for loc, text in parent.items()
                    }
                placeholder_source = _first(override.placeholder if override else None, entry.placeholder)
                if placeholder_source:
                    names.placeholders[expanded] = locale_map(placeholder_source, locales, fallback, "")
            continue

        names.fields[field_name] = locale_map(prop.display_name, locales, fallback, prop_name)
        if prop.placeholder:
            names.placeholders[field_name] = locale_map(prop.placeholder, locales, fallback, "")

    return names


# ---------------------------------------------------------------------------
# Create / update shapes
# ---------------------------------------------------------------------------


def computed_fields(schema: SchemaDefinition, config: GenerationConfig) -> List[str]:
    """Accessor field names contributed by custom types, in declaration order."""
    names: List[str] = []
    for prop_name, prop in schema.properties.items():
        if not isinstance(prop, CustomTypeProperty):
            continue
        definition: Optional[CustomTypeDefinition] = config.custom_type(prop.type)
        if definition is None:
            continue
        for accessor in definition.accessors:
            names.append(f"{to_snake_case(prop_name)}_{to_snake_case(accessor)}")
    return names


def excluded_field_list(schema: SchemaDefinition, config: Optional[GenerationConfig] = None) -> List[str]:
    """Ordered list of fields left out of the create payload."""
    cfg: GenerationConfig = config or GenerationConfig()
    excluded: List[str] = []
    if schema.options.id:
        excluded.append("id")
    if schema.options.timestamps:
        excluded.extend(["created_at", "updated_at"])
    if schema.options.soft_delete:
        excluded.append("deleted_at")
    if "emailVerifiedAt" in schema.properties or "email_verified_at" in schema.properties:
        excluded.append("email_verified_at")
    excluded.extend(computed_fields(schema, cfg))
    return excluded


def excluded_fields(schema: SchemaDefinition, config: Optional[GenerationConfig] = None) -> ExcludedFields:
    """The update shape is the partial form of create, so both sets match."""
    names: FrozenSet[str] = frozenset(excluded_field_list(schema, config))
    return ExcludedFields(create=names, update=names)


__all__: List[str] = [
    "NULLABLE_SUFFIX",
    "ZodFieldSchema",
    "DisplayNames",
    "ExcludedFields",
    "apply_validation_rules",
    "zod_schema_for_property",
    "compound_type_schemas",
    "generate_zod_schemas",
    "generate_display_names",
    "computed_fields",
    "excluded_field_list",
    "excluded_fields",
]

logger.debug("typegen.zod loaded.")
