# File: typegen/expander.py
"""
NexaFlow TypeGen - Property Expander
=====================================
Expands declared properties into the physical fields of the generated
interface and assembles whole-entity ``InterfaceDefinition`` records.

Exactly one rule applies per property:

* compound custom type → one field per expansion entry + one per accessor
* simple custom type   → one field typed by the plugin's hint
* MorphTo association  → ``<p>Type``, ``<p>Id``, ``<p>``
* everything else      → one field

Entity field order is fixed: id → declared properties → timestamps →
soft-delete marker.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Set, Tuple

from typegen.locale import resolve_localized_string
from typegen.models import (
    AssociationProperty,
    CustomTypeDefinition,
    CustomTypeProperty,
    EnumRefProperty,
    GenerationConfig,
    LocalizedString,
    PropertyBase,
    RelationKind,
    SchemaCollection,
    SchemaDefinition,
)
from typegen.resolver import (
    ResolvedType,
    extract_type_references,
    resolve_primary_key_type,
    resolve_property_type,
)
from typegen.utils import quote, to_snake_case

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("typegen.expander")

_NULL_SUFFIX: str = " | null"


# ---------------------------------------------------------------------------
# Output records
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class InterfaceField:
    """One property line of a generated interface."""

    name: str
    type: str
    optional: bool = False
    readonly: bool = False
    comment: Optional[str] = None


@dataclass(frozen=True, slots=True)
class InterfaceDefinition:
    """A fully expanded entity interface."""

    name: str
    fields: Tuple[InterfaceField, ...]
    comment: str
    dependencies: Tuple[str, ...] = ()
    enum_dependencies: Tuple[str, ...] = ()

    @property
    def field_names(self) -> List[str]:
        return [f.name for f in self.fields]

    def uses_type(self, type_name: str) -> bool:
        return any(type_name in f.type for f in self.fields)


@dataclass(frozen=True)
class ExpansionContext:
    """Everything the expander needs besides the property itself."""

    collection: SchemaCollection
    config: GenerationConfig = field(default_factory=GenerationConfig)

    def display_name(self, value: Optional[LocalizedString]) -> Optional[str]:
        return resolve_localized_string(
            value, self.config.locale, self.config.locale_config
        )

    def custom_type_for(self, prop: PropertyBase) -> Optional[CustomTypeDefinition]:
        if isinstance(prop, CustomTypeProperty):
            return self.config.custom_type(prop.type)
        return None


# ---------------------------------------------------------------------------
# Expansion rules
# ---------------------------------------------------------------------------


def _compound_fields(
    name: str,
    prop: PropertyBase,
    definition: CustomTypeDefinition,
    label: str,
    ctx: ExpansionContext,
) -> List[InterfaceField]:
    readonly: bool = ctx.config.readonly
    fields: List[InterfaceField] = []

    for entry in definition.expand:
        override = prop.field_overrides.get(entry.suffix)
        nullable: Optional[bool] = override.nullable if override else None
        if nullable is None:
            nullable = entry.nullable
        if nullable is None:
            nullable = prop.nullable
        fields.append(
            InterfaceField(
                name=f"{name}_{to_snake_case(entry.suffix)}",
                type=entry.type_hint,
                optional=bool(nullable),
                readonly=readonly,
                comment=f"{label} ({entry.suffix})",
            )
        )

    for accessor in definition.accessors:
        fields.append(
            InterfaceField(
                name=f"{name}_{to_snake_case(accessor)}",
                type="string | null",
                optional=True,
                readonly=True,
                comment=f"{label} (computed)",
            )
        )
    return fields


def _morph_to_fields(
    name: str,
    prop: AssociationProperty,
    display_name: Optional[str],
    ctx: ExpansionContext,
) -> List[InterfaceField]:
    readonly: bool = ctx.config.readonly
    targets: List[str] = list(prop.targets)
    if targets:
        discriminator: str = " | ".join(quote(t) for t in targets)
        relation: str = " | ".join(targets)
        relation_doc: str = f"Polymorphic relation to {', '.join(targets)}"
    else:
        discriminator = "string"
        relation = "unknown"
        relation_doc = "Polymorphic relation"

    return [
        InterfaceField(
            name=f"{name}Type",
            type=discriminator,
            optional=True,
            readonly=readonly,
            comment=f"Polymorphic type for {name}",
        ),
        InterfaceField(
            name=f"{name}Id",
            type="number",
            optional=True,
            readonly=readonly,
            comment=f"Polymorphic ID for {name}",
        ),
        InterfaceField(
            name=name,
            type=f"{relation}{_NULL_SUFFIX}",
            optional=True,
            readonly=readonly,
            comment=display_name or relation_doc,
        ),
    ]


def _apply_null_policy(fields: List[InterfaceField], strict: bool) -> List[InterfaceField]:
    if strict:
        return fields
    return [
        InterfaceField(
            name=f.name,
            type=f.type.replace(_NULL_SUFFIX, ""),
            optional=f.optional,
            readonly=f.readonly,
            comment=f.comment,
        )
        for f in fields
    ]


def expand_property(
    name: str,
    prop: PropertyBase,
    ctx: ExpansionContext,
) -> List[InterfaceField]:
    """
    Expand one declared property into its interface fields.

    Compound properties always yield ``len(expand) + len(accessors)``
    fields and MorphTo always yields three, whatever the nullability
    settings.
    """
    display_name: Optional[str] = ctx.display_name(prop.display_name)
    definition: Optional[CustomTypeDefinition] = ctx.custom_type_for(prop)

    expanded: List[InterfaceField]
    if definition is not None and definition.compound:
        expanded = _compound_fields(name, prop, definition, display_name or name, ctx)
    elif definition is not None:
        expanded = [
            InterfaceField(
                name=name,
                type=definition.type_hint,
                optional=prop.is_nullable,
                readonly=ctx.config.readonly,
                comment=display_name,
            )
        ]
    elif (
        isinstance(prop, AssociationProperty)
        and prop.relation == RelationKind.MORPH_TO.value
    ):
        expanded = _morph_to_fields(name, prop, display_name, ctx)
    else:
        resolved: ResolvedType = resolve_property_type(
            prop, ctx.collection, ctx.config.custom_types
        )
        expanded = [
            InterfaceField(
                name=name,
                type=resolved.type_expr,
                optional=prop.is_nullable,
                readonly=ctx.config.readonly,
                comment=display_name,
            )
        ]

    return _apply_null_policy(expanded, ctx.config.strict_null_checks)


# ---------------------------------------------------------------------------
# Whole entities
# ---------------------------------------------------------------------------


def schema_to_interface(schema: SchemaDefinition, ctx: ExpansionContext) -> InterfaceDefinition:
    """Build the interface for one object schema."""
    readonly: bool = ctx.config.readonly
    fields: List[InterfaceField] = []

    if schema.options.id:
        fields.append(
            InterfaceField(
                name="id",
                type=resolve_primary_key_type(schema.options.id_type),
                optional=False,
                readonly=readonly,
                comment="Primary key",
            )
        )

    for prop_name, prop in schema.properties.items():
        fields.extend(expand_property(prop_name, prop, ctx))

    if schema.options.timestamps:
        fields.append(
            InterfaceField("created_at", "DateTimeString", True, readonly, "Creation timestamp")
        )
        fields.append(
            InterfaceField("updated_at", "DateTimeString", True, readonly, "Last update timestamp")
        )
    if schema.options.soft_delete:
        fields.append(
            InterfaceField("deleted_at", "DateTimeString", True, readonly, "Soft delete timestamp")
        )

    entity_names = ctx.collection.object_names
    dependencies: Set[str] = set()
    for f in fields:
        for ref in extract_type_references(f.type, entity_names):
            if ref != schema.name:
                dependencies.add(ref)

    enum_dependencies: Set[str] = {
        prop.enum for prop in schema.properties.values() if isinstance(prop, EnumRefProperty)
    }

    logger.debug(
        "Expanded %s: %d fields, %d entity deps, %d enum deps",
        schema.name,
        len(fields),
        len(dependencies),
        len(enum_dependencies),
    )

    return InterfaceDefinition(
        name=schema.name,
        fields=tuple(fields),
        comment=ctx.display_name(schema.display_name) or schema.name,
        dependencies=tuple(sorted(dependencies)),
        enum_dependencies=tuple(sorted(enum_dependencies)),
    )


def generate_interfaces(
    collection: SchemaCollection,
    config: Optional[GenerationConfig] = None,
) -> List[InterfaceDefinition]:
    """Interfaces for every visible object schema, in declaration order."""
    ctx = ExpansionContext(collection, config or GenerationConfig())
    return [
        schema_to_interface(schema, ctx)
        for schema in collection.object_schemas
        if not schema.is_hidden
    ]


__all__: List[str] = [
    "InterfaceField",
    "InterfaceDefinition",
    "ExpansionContext",
    "expand_property",
    "schema_to_interface",
    "generate_interfaces",
]

logger.debug("typegen.expander loaded.")
