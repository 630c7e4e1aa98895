# File: typegen/validators.py
"""
NexaFlow TypeGen - Cross-Schema Validators
===========================================
Pydantic handles per-field structural correctness of the input model.
This module adds **cross-schema semantic validation** over a whole
``SchemaCollection`` + ``GenerationConfig``:

* the name-collision pre-pass (fatal): duplicate schema names, plugin
  enums clashing with schema names, inline enum type names clashing with
  anything else in the shared name space;
* reference checks (warnings): association targets, enum references,
  unregistered property type tags, relation kinds;
* enum member checks (warnings): two values mapping to one member name;
* locale configuration sanity (warnings).

Warnings never stop generation; the affected construct degrades to a
safe default (``unknown`` type, no validator, raw identifier).

Usage:
    from typegen.validators import ensure_no_conflicts, validate_full
    ensure_no_conflicts(collection, config)   # raises SchemaConflictError
    result = validate_full(collection, config)
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Callable, Dict, List, Optional, Tuple

from typegen.enums import extract_inline_enums, to_enum_member_name
from typegen.models import (
    AssociationProperty,
    CustomTypeProperty,
    EnumRefProperty,
    EnumValueDefinition,
    GenerationConfig,
    InlineEnumProperty,
    RelationKind,
    SchemaCollection,
    SelectProperty,
)
from typegen.resolver import TYPE_MAP

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("typegen.validators")


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class TypeGenError(Exception):
    """Base class for every error raised by typegen."""


class SchemaConflictError(TypeGenError, ValueError):
    """
    Fatal name collisions found by the pre-pass.

    ``result`` holds every collision as a ``ValidationError``;
    ``conflicts`` maps each offending name to the sources declaring it.
    """

    def __init__(self, result: "ValidationResult") -> None:
        self.result: ValidationResult = result
        self.conflicts: Dict[str, List[str]] = {
            item.context["name"]: list(item.context["sources"]) for item in result.errors
        }
        super().__init__(format_conflicts(self.conflicts))


# ---------------------------------------------------------------------------
# Validation result container
# ---------------------------------------------------------------------------


class ValidationError:
    """One finding; ``level`` is ``"error"``, ``"warning"`` or ``"info"``."""

    __slots__ = ("level", "code", "message", "context")

    def __init__(
        self,
        level: str,
        code: str,
        message: str,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.level: str = level
        self.code: str = code
        self.message: str = message
        self.context: Dict[str, Any] = context or {}

    @property
    def is_error(self) -> bool:
        return self.level == "error"

    @property
    def is_warning(self) -> bool:
        return self.level == "warning"

    def __repr__(self) -> str:
        return f"[{self.level.upper()}] {self.code}: {self.message}"

    __str__ = __repr__

    def to_dict(self) -> Dict[str, Any]:
        return {
            "level": self.level,
            "code": self.code,
            "message": self.message,
            "context": self.context,
        }


class ValidationResult:
    """Accumulates ``ValidationError`` items; truthy when there are no errors."""

    __slots__ = ("_items",)

    def __init__(self) -> None:
        self._items: List[ValidationError] = []

    def add_error(self, code: str, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        self._items.append(ValidationError("error", code, message, context))

    def add_warning(self, code: str, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        self._items.append(ValidationError("warning", code, message, context))

    def add_info(self, code: str, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        self._items.append(ValidationError("info", code, message, context))

    def merge(self, other: "ValidationResult") -> None:
        self._items.extend(other._items)

    @property
    def errors(self) -> List[ValidationError]:
        return [e for e in self._items if e.is_error]

    @property
    def warnings(self) -> List[ValidationError]:
        return [e for e in self._items if e.is_warning]

    @property
    def all_items(self) -> List[ValidationError]:
        return list(self._items)

    @property
    def has_errors(self) -> bool:
        return any(e.is_error for e in self._items)

    @property
    def error_count(self) -> int:
        return sum(1 for e in self._items if e.is_error)

    @property
    def warning_count(self) -> int:
        return sum(1 for e in self._items if e.is_warning)

    @property
    def is_valid(self) -> bool:
        return not self.has_errors

    def codes(self) -> List[str]:
        return [e.code for e in self._items]

    def summary(self) -> str:
        return (
            f"Validation: {self.error_count} error(s), "
            f"{self.warning_count} warning(s), "
            f"{len(self._items)} total item(s)."
        )

    def __repr__(self) -> str:
        return f"<ValidationResult {self.summary()}>"

    def __bool__(self) -> bool:
        return self.is_valid

    def __len__(self) -> int:
        return len(self._items)

    def format_report(self, include_info: bool = False) -> str:
        lines: List[str] = [self.summary(), ""]
        icons: Dict[str, str] = {"error": "❌", "warning": "⚠️", "info": "ℹ️"}
        for item in self._items:
            if item.level == "info" and not include_info:
                continue
            lines.append(f"  {icons.get(item.level, '•')} [{item.code}] {item.message}")
        return "\n".join(lines)


# ---------------------------------------------------------------------------
# Name-collision pre-pass
# ---------------------------------------------------------------------------

PLUGIN_ENUM_SOURCE: str = "plugin enum"

_CONFLICT_HEADER: str = (
    "Duplicate schema/enum names detected. Names must be globally unique:"
)


def format_conflicts(conflicts: Dict[str, List[str]]) -> str:
    lines: List[str] = [_CONFLICT_HEADER]
    for name, sources in conflicts.items():
        lines.append(f'  - "{name}" defined in: {", ".join(sources)}')
    return "\n".join(lines)


def collect_declared_names(
    collection: SchemaCollection,
    config: GenerationConfig,
) -> Dict[str, List[Tuple[str, str]]]:
    """
    Every name that becomes a top-level generated type, mapped to the
    ``(kind, source)`` pairs declaring it, in declaration order.

    Kinds: ``schema``, ``plugin``, ``inline``.
    """
    declared: Dict[str, List[Tuple[str, str]]] = defaultdict(list)
    for schema in collection.schemas:
        declared[schema.name].append(("schema", schema.source_label))
    for name in config.plugin_enums:
        declared[name].append(("plugin", PLUGIN_ENUM_SOURCE))
    for inline in extract_inline_enums(collection, config):
        declared[inline.name].append(("inline", f"{inline.source} (inline enum)"))
    return declared


def check_name_collisions(
    collection: SchemaCollection,
    config: Optional[GenerationConfig] = None,
) -> ValidationResult:
    """
    One error per colliding name.  The code tells which name spaces met:
    ``INLINE_ENUM_CONFLICT`` when an inline enum is involved, otherwise
    ``PLUGIN_ENUM_CONFLICT`` when a plugin enum is, otherwise
    ``DUPLICATE_SCHEMA_NAME``.
    """
    cfg: GenerationConfig = config or GenerationConfig()
    result = ValidationResult()

    for name, entries in collect_declared_names(collection, cfg).items():
        if len(entries) < 2:
            continue
        kinds = {kind for kind, _ in entries}
        sources: List[str] = [source for _, source in entries]
        if "inline" in kinds:
            code = "INLINE_ENUM_CONFLICT"
        elif "plugin" in kinds:
            code = "PLUGIN_ENUM_CONFLICT"
        else:
            code = "DUPLICATE_SCHEMA_NAME"
        result.add_error(
            code,
            f'"{name}" defined in: {", ".join(sources)}',
            {"name": name, "sources": sources},
        )
    return result


def ensure_no_conflicts(
    collection: SchemaCollection,
    config: Optional[GenerationConfig] = None,
) -> ValidationResult:
    """Run the pre-pass to completion; raise ``SchemaConflictError`` on any collision."""
    result: ValidationResult = check_name_collisions(collection, config)
    if result.has_errors:
        logger.error("Name collision pre-pass failed: %d conflicting name(s)", result.error_count)
        raise SchemaConflictError(result)
    logger.debug("Name collision pre-pass passed (%d schemas)", len(collection))
    return result


# ---------------------------------------------------------------------------
# Reference checks
# ---------------------------------------------------------------------------

_RELATION_KINDS = frozenset(kind.value for kind in RelationKind)


def validate_references(collection: SchemaCollection, config: GenerationConfig) -> ValidationResult:
    result = ValidationResult()
    object_names = collection.object_names
    enum_names = collection.enum_names | frozenset(config.plugin_enums)

    for schema in collection.object_schemas:
        for prop_name, prop in schema.properties.items():
            where: str = f"{schema.name}.{prop_name}"
            ctx: Dict[str, Any] = {"schema": schema.name, "property": prop_name}

            if isinstance(prop, AssociationProperty):
                if prop.relation not in _RELATION_KINDS:
                    result.add_warning(
                        "UNKNOWN_RELATION_KIND",
                        f"{where}: relation '{prop.relation}' is not recognised; typed as unknown.",
                        ctx,
                    )
                targets: List[str] = list(prop.targets) or ([prop.target] if prop.target else [])
                for target in targets:
                    if target not in object_names:
                        result.add_warning(
                            "UNKNOWN_ASSOCIATION_TARGET",
                            f"{where}: association target '{target}' is not a known schema.",
                            {**ctx, "target": target},
                        )

            elif isinstance(prop, EnumRefProperty):
                if prop.enum not in enum_names:
                    result.add_warning(
                        "UNKNOWN_ENUM_REFERENCE",
                        f"{where}: enum '{prop.enum}' is not defined.",
                        {**ctx, "enum": prop.enum},
                    )

            elif isinstance(prop, CustomTypeProperty):
                if prop.type not in TYPE_MAP and config.custom_type(prop.type) is None:
                    result.add_warning(
                        "UNKNOWN_PROPERTY_TYPE",
                        f"{where}: type '{prop.type}' is not registered; typed as unknown.",
                        {**ctx, "type": prop.type},
                    )
    return result


# ---------------------------------------------------------------------------
# Enum member checks
# ---------------------------------------------------------------------------


def _duplicate_members(
    owner: str,
    values: List[EnumValueDefinition],
    result: ValidationResult,
) -> None:
    seen: Dict[str, str] = {}
    for value in values:
        member: str = to_enum_member_name(value.value)
        if member in seen and seen[member] != value.value:
            result.add_warning(
                "DUPLICATE_ENUM_MEMBER",
                f"{owner}: values '{seen[member]}' and '{value.value}' both map to member '{member}'.",
                {"enum": owner, "member": member},
            )
        elif member in seen:
            result.add_warning(
                "DUPLICATE_ENUM_MEMBER",
                f"{owner}: value '{value.value}' is listed more than once.",
                {"enum": owner, "member": member},
            )
        else:
            seen[member] = value.value


def validate_enum_members(collection: SchemaCollection, config: GenerationConfig) -> ValidationResult:
    result = ValidationResult()
    for schema in collection.enum_schemas:
        _duplicate_members(schema.name, list(schema.values), result)
    for name, plugin_enum in config.plugin_enums.items():
        _duplicate_members(name, list(plugin_enum.values), result)
    for schema in collection.object_schemas:
        for prop_name, prop in schema.properties.items():
            if isinstance(prop, InlineEnumProperty):
                _duplicate_members(f"{schema.name}.{prop_name}", list(prop.enum), result)
            elif isinstance(prop, SelectProperty):
                _duplicate_members(f"{schema.name}.{prop_name}", list(prop.options), result)
    return result


# ---------------------------------------------------------------------------
# Configuration checks
# ---------------------------------------------------------------------------


def validate_locale_config(config: GenerationConfig) -> ValidationResult:
    result = ValidationResult()
    locale_cfg = config.locale_config
    for field_name, value in (
        ("default_locale", locale_cfg.default_locale),
        ("fallback_locale", locale_cfg.fallback_locale),
    ):
        if value not in locale_cfg.locales:
            result.add_warning(
                "LOCALE_NOT_SUPPORTED",
                f"{field_name} '{value}' is not in locales {list(locale_cfg.locales)}.",
                {"field": field_name, "locale": value},
            )
    if config.generate_rules and config.generate_zod_schemas:
        result.add_info(
            "RULES_IGNORED",
            "generate_rules has no effect while Zod schemas are enabled.",
        )
    return result


# ---------------------------------------------------------------------------
# Aggregate entry point
# ---------------------------------------------------------------------------


def validate_full(
    collection: SchemaCollection,
    config: Optional[GenerationConfig] = None,
) -> ValidationResult:
    """
    Collision pre-pass plus every non-fatal check, merged into one result.

    Unlike ``ensure_no_conflicts`` this never raises; callers decide what
    to do with ``has_errors``.
    """
    cfg: GenerationConfig = config or GenerationConfig()
    logger.info("Validating %d schema(s)", len(collection))

    result = ValidationResult()
    checks: List[Callable[[SchemaCollection, GenerationConfig], ValidationResult]] = [
        check_name_collisions,
        validate_references,
        validate_enum_members,
    ]
    for check in checks:
        logger.debug("Running validator: %s", check.__name__)
        result.merge(check(collection, cfg))
    result.merge(validate_locale_config(cfg))

    for item in result.warnings:
        logger.warning("%s", item.message)
    if result.has_errors:
        logger.error("Validation FAILED. %s", result.summary())
    else:
        logger.info("Validation PASSED. %s", result.summary())
    return result


__all__: List[str] = [
    "TypeGenError",
    "SchemaConflictError",
    "ValidationError",
    "ValidationResult",
    "PLUGIN_ENUM_SOURCE",
    "format_conflicts",
    "collect_declared_names",
    "check_name_collisions",
    "ensure_no_conflicts",
    "validate_references",
    "validate_enum_members",
    "validate_locale_config",
    "validate_full",
]

logger.debug("typegen.validators loaded.")
