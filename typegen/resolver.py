# File: typegen/resolver.py
"""
NexaFlow TypeGen - Type Resolver
=================================
Maps one property definition to a TypeScript type expression plus the
entity and enum names it references.

Resolution is total: every variant has exactly one branch below and any
unrecognised tag degrades to ``unknown`` rather than raising.

Type table (fixed, read-only)::

    String, Text, MediumText, LongText, Time,
    Email, Password, Enum, Select          → string
    TinyInt, Int, BigInt, Float, Lookup    → number
    Boolean                                → boolean
    Date                                   → DateString
    DateTime, Timestamp                    → DateTimeString
    Json                                   → unknown
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Tuple

from typegen.models import (
    AssociationProperty,
    CustomTypeDefinition,
    CustomTypeProperty,
    EnumRefProperty,
    EnumValueDefinition,
    FileProperty,
    InlineEnumProperty,
    PropertyBase,
    RelationKind,
    SchemaCollection,
    SelectProperty,
)
from typegen.utils import quote

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("typegen.resolver")

# ---------------------------------------------------------------------------
# Lookup tables
# ---------------------------------------------------------------------------

TYPE_MAP: Mapping[str, str] = MappingProxyType(
    {
        "String": "string",
        "TinyInt": "number",
        "Int": "number",
        "BigInt": "number",
        "Float": "number",
        "Boolean": "boolean",
        "Text": "string",
        "MediumText": "string",
        "LongText": "string",
        "Date": "DateString",
        "Time": "string",
        "DateTime": "DateTimeString",
        "Timestamp": "DateTimeString",
        "Json": "unknown",
        "Email": "string",
        "Password": "string",
        "Enum": "string",
        "Select": "string",
        "Lookup": "number",
    }
)

PRIMARY_KEY_TYPE_MAP: Mapping[str, str] = MappingProxyType(
    {
        "Int": "number",
        "BigInt": "number",
        "Uuid": "string",
        "String": "string",
    }
)

UNKNOWN_TYPE: str = "unknown"
FILE_INTERFACE_NAME: str = "File"

SINGULAR_RELATIONS: frozenset = frozenset(
    {RelationKind.ONE_TO_ONE.value, RelationKind.MANY_TO_ONE.value, RelationKind.MORPH_ONE.value}
)
PLURAL_RELATIONS: frozenset = frozenset(
    {
        RelationKind.ONE_TO_MANY.value,
        RelationKind.MANY_TO_MANY.value,
        RelationKind.MORPH_MANY.value,
        RelationKind.MORPH_TO_MANY.value,
        RelationKind.MORPHED_BY_MANY.value,
    }
)

_TS_PRIMITIVES: frozenset = frozenset(
    {"string", "number", "boolean", "unknown", "null", "undefined", "void", "never", "any"}
)
_ARRAY_SUFFIX_RE: re.Pattern[str] = re.compile(r"\[\]")
_NULL_MEMBER_RE: re.Pattern[str] = re.compile(r"\s*\|\s*null")
_UNION_SPLIT_RE: re.Pattern[str] = re.compile(r"\s*\|\s*")
_QUOTES_RE: re.Pattern[str] = re.compile(r"^['\"]|['\"]$")


# ---------------------------------------------------------------------------
# Result type
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ResolvedType:
    """Outcome of resolving one property."""

    type_expr: str
    entity_refs: Tuple[str, ...] = ()
    enum_refs: Tuple[str, ...] = ()

    @property
    def is_unknown(self) -> bool:
        return self.type_expr == UNKNOWN_TYPE


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def literal_union(values: Iterable[EnumValueDefinition]) -> str:
    """``['a', 'b']`` → ``'a' | 'b'``."""
    return " | ".join(quote(v.value) for v in values)


def resolve_primary_key_type(id_type: str) -> str:
    """Int/BigInt → number, Uuid/String → string, anything else → number."""
    return PRIMARY_KEY_TYPE_MAP.get(id_type, "number")


def resolve_association(prop: AssociationProperty) -> ResolvedType:
    relation: str = prop.relation
    if relation == RelationKind.MORPH_TO.value:
        if not prop.targets:
            return ResolvedType(UNKNOWN_TYPE)
        return ResolvedType(" | ".join(prop.targets), entity_refs=tuple(prop.targets))

    target: str = prop.target or UNKNOWN_TYPE
    refs: Tuple[str, ...] = (prop.target,) if prop.target else ()
    if relation in SINGULAR_RELATIONS:
        return ResolvedType(target, entity_refs=refs)
    if relation in PLURAL_RELATIONS:
        return ResolvedType(f"{target}[]", entity_refs=refs)

    logger.debug("Unknown relation kind %r; resolving to unknown", relation)
    return ResolvedType(UNKNOWN_TYPE)


def resolve_property_type(
    prop: PropertyBase,
    collection: Optional[SchemaCollection] = None,
    custom_types: Optional[Mapping[str, CustomTypeDefinition]] = None,
) -> ResolvedType:
    """
    Resolve *prop* to a type expression.

    When *collection* is given, ``entity_refs`` only lists names that exist
    there as object schemas; the type expression itself is never altered.

    Custom (plugin) tags are looked up in *custom_types*: a simple type
    yields its type hint, a compound type is not representable as one
    expression and yields ``unknown`` (the expander handles it field by
    field).  Unregistered tags fall back to the primitive table.
    """
    if isinstance(prop, FileProperty):
        return ResolvedType(
            f"{FILE_INTERFACE_NAME}[]" if prop.multiple else f"{FILE_INTERFACE_NAME} | null"
        )

    if isinstance(prop, AssociationProperty):
        resolved: ResolvedType = resolve_association(prop)
        if collection is None:
            return resolved
        known = collection.object_names
        return ResolvedType(
            resolved.type_expr,
            entity_refs=tuple(r for r in resolved.entity_refs if r in known),
        )

    if isinstance(prop, EnumRefProperty):
        return ResolvedType(prop.enum, enum_refs=(prop.enum,))

    if isinstance(prop, InlineEnumProperty):
        if prop.enum:
            return ResolvedType(literal_union(prop.enum))
        return ResolvedType(TYPE_MAP["Enum"])

    if isinstance(prop, SelectProperty):
        if prop.options:
            return ResolvedType(literal_union(prop.options))
        return ResolvedType(TYPE_MAP["Select"])

    if isinstance(prop, CustomTypeProperty) and custom_types:
        definition: Optional[CustomTypeDefinition] = custom_types.get(prop.type)
        if definition is not None:
            if definition.compound:
                return ResolvedType(UNKNOWN_TYPE)
            return ResolvedType(definition.type_hint)

    return ResolvedType(TYPE_MAP.get(prop.type, UNKNOWN_TYPE))


def extract_type_references(type_expr: str, entity_names: Iterable[str]) -> List[str]:
    """
    Find object-schema names mentioned in *type_expr*.

    Array suffixes and ``| null`` members are stripped first; quoted
    literals are unquoted so ``'Post' | 'Video'`` also counts.
    """
    names = frozenset(entity_names)
    refs: List[str] = []
    cleaned: str = _NULL_MEMBER_RE.sub("", _ARRAY_SUFFIX_RE.sub("", type_expr))
    for part in _UNION_SPLIT_RE.split(cleaned):
        candidate: str = _QUOTES_RE.sub("", part.strip())
        if candidate not in _TS_PRIMITIVES and candidate in names:
            refs.append(candidate)
    return refs


__all__: List[str] = [
    "TYPE_MAP",
    "PRIMARY_KEY_TYPE_MAP",
    "UNKNOWN_TYPE",
    "FILE_INTERFACE_NAME",
    "SINGULAR_RELATIONS",
    "PLURAL_RELATIONS",
    "ResolvedType",
    "literal_union",
    "resolve_primary_key_type",
    "resolve_association",
    "resolve_property_type",
    "extract_type_references",
]

logger.debug("typegen.resolver loaded.")
