# File: typegen/rules.py
"""
NexaFlow TypeGen - Legacy Validation Rules
===========================================
Ant Design compatible rule tables (``rules/<Entity>.rules.ts``), emitted
only when Zod output is disabled and ``generate_rules`` is set.

Each rule carries a per-locale message rendered from
``messages.DEFAULT_VALIDATION_TEMPLATES`` (merged with the user's
``validation_templates``), with ``${displayName}`` replaced by the
property's label in that locale.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Union

from typegen.locale import locale_map
from typegen.messages import localized_messages, merge_validation_templates
from typegen.models import GenerationConfig, PropertyBase, SchemaDefinition

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("typegen.rules")

_LENGTH_TYPES = frozenset({"String", "Text", "LongText"})
_RANGE_TYPES = frozenset({"Int", "BigInt", "Float"})
_DISPLAY_NAME_PLACEHOLDER: str = "${displayName}"


@dataclass
class PropertyRule:
    """One rule object; ``None`` members are omitted when rendered."""

    message: Dict[str, str]
    required: bool = False
    type: Optional[str] = None
    min: Optional[Union[int, float]] = None
    max: Optional[Union[int, float]] = None
    pattern: Optional[str] = None


@dataclass
class PropertyRules:
    display_name: Dict[str, str]
    rules: List[PropertyRule] = field(default_factory=list)


@dataclass
class ModelRules:
    display_name: Dict[str, str]
    properties: Dict[str, PropertyRules] = field(default_factory=dict)


def generate_property_rules(
    prop_name: str,
    prop: PropertyBase,
    display_name: Mapping[str, str],
    locales: List[str],
    fallback_locale: str,
    templates: Mapping[str, Mapping[str, str]],
) -> List[PropertyRule]:
    """Rules in fixed order: required, email, length, range, pattern."""

    def render(rule: str, **variables: Union[str, int, float]) -> Dict[str, str]:
        variables.setdefault("displayName", _DISPLAY_NAME_PLACEHOLDER)
        return localized_messages(templates, rule, locales, variables, fallback_locale)

    rules: List[PropertyRule] = []
    if not prop.is_nullable:
        rules.append(PropertyRule(required=True, message=render("required")))

    if prop.type == "Email":
        rules.append(PropertyRule(type="email", message=render("email")))

    if prop.type in _LENGTH_TYPES:
        if prop.min_length:
            rules.append(
                PropertyRule(min=prop.min_length, message=render("minLength", min=prop.min_length))
            )
        upper: Optional[int] = prop.max_length or prop.length
        if upper:
            rules.append(PropertyRule(max=upper, message=render("maxLength", max=upper)))

    if prop.type in _RANGE_TYPES:
        kind: str = "number" if prop.type == "Float" else "integer"
        if prop.min is not None:
            rules.append(PropertyRule(type=kind, min=prop.min, message=render("min", min=prop.min)))
        if prop.max is not None:
            rules.append(PropertyRule(type=kind, max=prop.max, message=render("max", max=prop.max)))

    if prop.pattern:
        rules.append(PropertyRule(pattern=prop.pattern, message=render("pattern")))

    for rule in rules:
        rule.message = {
            loc: text.replace(_DISPLAY_NAME_PLACEHOLDER, display_name.get(loc, prop_name))
            for loc, text in rule.message.items()
            if text
        }
    return rules


def generate_model_rules(
    schema: SchemaDefinition,
    config: Optional[GenerationConfig] = None,
) -> ModelRules:
    cfg: GenerationConfig = config or GenerationConfig()
    locales: List[str] = list(cfg.locale_config.locales)
    fallback: str = cfg.locale_config.fallback_locale
    templates: Dict[str, Dict[str, str]] = merge_validation_templates(cfg.validation_templates)

    model = ModelRules(display_name=locale_map(schema.display_name, locales, fallback, schema.name))
    for prop_name, prop in schema.properties.items():
        labels: Dict[str, str] = locale_map(prop.display_name, locales, fallback, prop_name)
        model.properties[prop_name] = PropertyRules(
            display_name=labels,
            rules=generate_property_rules(prop_name, prop, labels, locales, fallback, templates),
        )

    logger.debug(
        "Built legacy rules for %s (%d properties)", schema.name, len(model.properties)
    )
    return model


__all__: List[str] = [
    "PropertyRule",
    "PropertyRules",
    "ModelRules",
    "generate_property_rules",
    "generate_model_rules",
]

logger.debug("typegen.rules loaded.")
