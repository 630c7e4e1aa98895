# File: typegen/enums.py
"""
NexaFlow TypeGen - Enum & Union Extraction
===========================================
Discovers named enums (enum-kind schemas), plugin enums and inline
enumerations (``Enum``/``Select`` properties with a literal list), and
builds the member tables the emitter renders.

Inline enumerations become:

* a full ``EnumDefinition`` when at least one value carries a label;
* otherwise a lightweight ``TypeAliasDefinition`` (literal union).

Their type name is ``<SchemaName><PascalCase(propertyName)>``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from typegen.locale import resolve_localized_string, resolve_or_keep
from typegen.models import (
    EnumValueDefinition,
    GenerationConfig,
    InlineEnumProperty,
    PluginEnumDefinition,
    SchemaCollection,
    SchemaDefinition,
    SelectProperty,
)
from typegen.utils import quote, to_member_name, to_pascal_case

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("typegen.enums")

Label = Union[str, Dict[str, str]]


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class EnumMember:
    """One ``Name = 'value'`` line plus its optional label and metadata."""

    name: str
    value: str
    label: Optional[Label] = None
    extra: Optional[Mapping[str, Any]] = None

    @property
    def has_multi_locale_label(self) -> bool:
        return isinstance(self.label, dict)


@dataclass(frozen=True, slots=True)
class EnumDefinition:
    name: str
    members: Tuple[EnumMember, ...]
    comment: str
    plugin: bool = False

    @property
    def has_labels(self) -> bool:
        return any(m.label is not None for m in self.members)

    @property
    def has_multi_locale_labels(self) -> bool:
        return any(m.has_multi_locale_label for m in self.members)

    @property
    def has_extra(self) -> bool:
        return any(m.extra is not None for m in self.members)

    @property
    def values(self) -> List[str]:
        return [m.value for m in self.members]


@dataclass(frozen=True, slots=True)
class TypeAliasDefinition:
    """``export type Name = 'a' | 'b';``"""

    name: str
    values: Tuple[str, ...]
    comment: str

    @property
    def type_expr(self) -> str:
        return " | ".join(quote(v) for v in self.values)


@dataclass(frozen=True, slots=True)
class InlineEnum:
    """Result of scanning one inline enumeration; exactly one side is set."""

    schema_name: str
    property_name: str
    enum: Optional[EnumDefinition] = None
    alias: Optional[TypeAliasDefinition] = None

    @property
    def name(self) -> str:
        if self.enum is not None:
            return self.enum.name
        if self.alias is not None:
            return self.alias.name
        raise ValueError(f"Inline enum {self.source} has neither an enum nor an alias.")

    @property
    def source(self) -> str:
        return f"{self.schema_name}.{self.property_name}"


# ---------------------------------------------------------------------------
# Member construction
# ---------------------------------------------------------------------------


def to_enum_member_name(value: str) -> str:
    """
    Legal TypeScript member name for a raw enum value.

    ``"in_progress"`` → ``InProgress``, ``"inProgress"`` → ``Inprogress``,
    ``"2fa"`` → ``_2fa``.
    """
    return to_member_name(value)


def _member(value: EnumValueDefinition, config: GenerationConfig) -> EnumMember:
    label: Optional[Label] = None
    if value.label is not None:
        label = resolve_or_keep(
            value.label, config.multi_locale, config.locale, config.locale_config
        )
    return EnumMember(
        name=to_enum_member_name(value.value),
        value=value.value,
        label=label,
        extra=dict(value.extra) if value.extra is not None else None,
    )


def _members(values: Iterable[EnumValueDefinition], config: GenerationConfig) -> Tuple[EnumMember, ...]:
    return tuple(_member(v, config) for v in values)


# ---------------------------------------------------------------------------
# Named enums
# ---------------------------------------------------------------------------


def schema_to_enum(
    schema: SchemaDefinition,
    config: Optional[GenerationConfig] = None,
) -> Optional[EnumDefinition]:
    """Enum for an enum-kind schema; ``None`` for object schemas."""
    if not schema.is_enum:
        return None
    cfg: GenerationConfig = config or GenerationConfig()
    comment: Optional[str] = resolve_localized_string(
        schema.display_name, cfg.locale, cfg.locale_config
    )
    return EnumDefinition(
        name=schema.name,
        members=_members(schema.values, cfg),
        comment=comment or schema.name,
    )


def generate_enums(
    collection: SchemaCollection,
    config: Optional[GenerationConfig] = None,
) -> List[EnumDefinition]:
    enums: List[EnumDefinition] = []
    for schema in collection.enum_schemas:
        definition: Optional[EnumDefinition] = schema_to_enum(schema, config)
        if definition is not None:
            enums.append(definition)
    return enums


def plugin_enum_to_ts_enum(
    definition: PluginEnumDefinition,
    config: Optional[GenerationConfig] = None,
) -> EnumDefinition:
    cfg: GenerationConfig = config or GenerationConfig()
    comment: Optional[str] = resolve_localized_string(
        definition.display_name, cfg.locale, cfg.locale_config
    )
    return EnumDefinition(
        name=definition.name,
        members=_members(definition.values, cfg),
        comment=comment or definition.name,
        plugin=True,
    )


def generate_plugin_enums(config: GenerationConfig) -> List[EnumDefinition]:
    """Plugin enums in registration order."""
    return [plugin_enum_to_ts_enum(d, config) for d in config.plugin_enums.values()]


def enum_to_union_type(definition: EnumDefinition) -> TypeAliasDefinition:
    """Collapse a full enum into its literal-union alias."""
    return TypeAliasDefinition(
        name=definition.name,
        values=tuple(definition.values),
        comment=definition.comment,
    )


# ---------------------------------------------------------------------------
# Inline enums
# ---------------------------------------------------------------------------


def _inline_values(prop: Any) -> List[EnumValueDefinition]:
    if isinstance(prop, InlineEnumProperty):
        return list(prop.enum)
    if isinstance(prop, SelectProperty):
        return list(prop.options)
    return []


def extract_inline_enums(
    collection: SchemaCollection,
    config: Optional[GenerationConfig] = None,
) -> List[InlineEnum]:
    """
    Scan every object schema, in declaration order, for inline enumerations.

    Hidden schemas are scanned as well: their inline types still occupy
    the shared name space.
    """
    cfg: GenerationConfig = config or GenerationConfig()
    found: List[InlineEnum] = []

    for schema in collection.object_schemas:
        for prop_name, prop in schema.properties.items():
            values: List[EnumValueDefinition] = _inline_values(prop)
            if not values:
                continue

            type_name: str = f"{schema.name}{to_pascal_case(prop_name)}"
            noun: str = "enum" if isinstance(prop, InlineEnumProperty) else "options"
            comment: str = (
                resolve_localized_string(prop.display_name, cfg.locale, cfg.locale_config)
                or f"{schema.name} {prop_name} {noun}"
            )

            if any(v.label is not None for v in values):
                found.append(
                    InlineEnum(
                        schema.name,
                        prop_name,
                        enum=EnumDefinition(type_name, _members(values, cfg), comment),
                    )
                )
            else:
                found.append(
                    InlineEnum(
                        schema.name,
                        prop_name,
                        alias=TypeAliasDefinition(
                            type_name, tuple(v.value for v in values), comment
                        ),
                    )
                )

    logger.debug("Extracted %d inline enumerations", len(found))
    return found


__all__: List[str] = [
    "EnumMember",
    "EnumDefinition",
    "TypeAliasDefinition",
    "InlineEnum",
    "to_enum_member_name",
    "schema_to_enum",
    "generate_enums",
    "plugin_enum_to_ts_enum",
    "generate_plugin_enums",
    "enum_to_union_type",
    "extract_inline_enums",
]

logger.debug("typegen.enums loaded.")
