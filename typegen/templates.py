# File: typegen/templates.py
"""
NexaFlow TypeGen - File Renderers
==================================
One renderer per generated file type.  Each renderer receives fully
resolved data (interfaces, enum tables, zod fields, i18n labels) plus the
run's ``ImportPaths`` and returns the file content as a string.

Every module specifier in every generated import or re-export comes from
``ImportPaths``; renderers never spell out a path on their own.

Rendered files:
    enum / plugin enum      render_enum_file
    inline type alias       render_type_alias_file
    base/<Entity>.ts        render_base_file
    <Entity>.ts             render_model_file
    rules/<Entity>.rules.ts render_rules_file
    common.ts               render_common_file
    i18n.ts                 render_i18n_file
    index.ts                render_index_file
"""

from __future__ import annotations

import logging
import posixpath
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Set, Tuple

from typegen.builder import (
    Banner,
    Declaration,
    ExportDecl,
    Group,
    LineComment,
    SourceFile,
    doc_comment,
    function_body,
)
from typegen.enums import EnumDefinition, EnumMember, TypeAliasDefinition
from typegen.expander import InterfaceDefinition, InterfaceField
from typegen.messages import merge_i18n_messages
from typegen.models import GenerationConfig, OutputLayout
from typegen.rules import ModelRules, PropertyRule
from typegen.utils import escape_string, format_number, js_json, lower_first, quote
from typegen.zod import DisplayNames, ZodFieldSchema

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("typegen.templates")


# ---------------------------------------------------------------------------
# Import-prefix table
# ---------------------------------------------------------------------------


def _is_scoped(prefix: Optional[str]) -> bool:
    return bool(prefix) and prefix.startswith("@")  # type: ignore[union-attr]


@dataclass(frozen=True)
class ImportPaths:
    """
    All module specifiers used by generated code for one run.

    Prefixes starting with ``@`` denote a package-scoped location (e.g. a
    generated package under ``node_modules``); anything else is relative.
    """

    ext: str
    schema_enum_prefix: str
    plugin_enum_prefix: str
    index_enum_prefix: str
    index_plugin_enum_prefix: str
    base_prefix: str
    base_is_package: bool

    @classmethod
    def from_config(cls, config: GenerationConfig) -> "ImportPaths":
        enum_prefix: Optional[str] = config.enum_import_prefix
        plugin_prefix: Optional[str] = config.plugin_enum_import_prefix
        base_prefix: Optional[str] = config.base_import_prefix

        if config.layout == OutputLayout.PACKAGE.value:
            enum_prefix = enum_prefix or f"{config.package_name}/enum"
            plugin_prefix = plugin_prefix or f"{config.package_name}/enum"
            base_prefix = base_prefix or f"{config.package_name}/schemas"

        # Base files live one directory below the index.
        schema_enum_prefix: str
        if config.schema_enum_import_prefix:
            schema_enum_prefix = config.schema_enum_import_prefix
        elif _is_scoped(enum_prefix):
            schema_enum_prefix = enum_prefix  # type: ignore[assignment]
        elif enum_prefix:
            schema_enum_prefix = posixpath.normpath(f"../{enum_prefix}")
        else:
            schema_enum_prefix = "../enum"

        index_enum_prefix: str = enum_prefix or "./enum"
        return cls(
            ext=config.import_extension,
            schema_enum_prefix=schema_enum_prefix,
            plugin_enum_prefix=plugin_prefix or f"{schema_enum_prefix}/plugin",
            index_enum_prefix=index_enum_prefix,
            index_plugin_enum_prefix=plugin_prefix or f"{index_enum_prefix}/plugin",
            base_prefix=base_prefix or "./base",
            base_is_package=_is_scoped(base_prefix),
        )

    def module(self, prefix: str, name: str) -> str:
        return f"{prefix}/{name}{self.ext}"

    # -- Shared support files ------------------------------------------------

    @property
    def common_from_base(self) -> str:
        return ("./common" if self.base_is_package else "../common") + self.ext

    @property
    def common_from_root(self) -> str:
        root: str = f"{self.base_prefix}/common" if self.base_is_package else "./common"
        return root + self.ext

    @property
    def i18n_from_root(self) -> str:
        root: str = f"{self.base_prefix}/i18n" if self.base_is_package else "./i18n"
        return root + self.ext

    @property
    def common_from_rules(self) -> str:
        root: str = f"{self.base_prefix}/common" if self.base_is_package else "../common"
        return root + self.ext

    # -- Cross-file references ----------------------------------------------

    def enum_from_base(self, name: str, plugin: bool) -> str:
        return self.module(self.plugin_enum_prefix if plugin else self.schema_enum_prefix, name)

    def entity_from_base(self, name: str) -> str:
        return self.module(".", name)

    def base_from_model(self, name: str) -> str:
        return self.module(self.base_prefix, name)

    def model_from_index(self, name: str) -> str:
        return self.module(".", name)

    def rules_from_index(self, name: str) -> str:
        return self.module("./rules", f"{name}.rules")


# ---------------------------------------------------------------------------
# Headers
# ---------------------------------------------------------------------------

_DO_NOT_EDIT_LINES: Tuple[str, ...] = (
    "⚠️ DO NOT EDIT THIS FILE! ⚠️",
    "このファイルを編集しないでください！",
    "KHÔNG ĐƯỢC SỬA FILE NÀY!",
)


def generated_header(subject: str = "Auto-generated TypeScript types from TypeGen schemas.") -> str:
    return doc_comment(
        [
            *_DO_NOT_EDIT_LINES,
            "",
            subject,
            "Any manual changes will be OVERWRITTEN on next generation.",
            "",
            "To modify: Edit the schema YAML file and run: typegen",
        ]
    )


def model_header(name: str, zod: bool) -> str:
    overridable: str = "types/schemas" if zod else "types"
    return doc_comment(
        [
            f"{name} Model",
            "",
            "This file extends the auto-generated base interface.",
            f"You can add custom methods, computed properties, or override {overridable} here.",
            "This file will NOT be overwritten by the generator.",
        ]
    )


# ---------------------------------------------------------------------------
# Interfaces
# ---------------------------------------------------------------------------


def render_property(prop: InterfaceField) -> str:
    readonly: str = "readonly " if prop.readonly else ""
    optional: str = "?" if prop.optional else ""
    line: str = f"  {readonly}{prop.name}{optional}: {prop.type};"
    if prop.comment:
        return f"  /** {prop.comment} */\n{line}"
    return line


def render_interface(iface: InterfaceDefinition, extends: Sequence[str] = ()) -> str:
    clause: str = f" extends {', '.join(extends)}" if extends else ""
    body: str = "\n".join(render_property(p) for p in iface.fields)
    return f"export interface {iface.name}{clause} {{\n{body}\n}}"


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


def _label_entry(enum_name: str, member: EnumMember) -> str:
    key: str = f"[{enum_name}.{member.name}]"
    if isinstance(member.label, dict):
        pairs: str = ", ".join(
            f"'{escape_string(loc)}': {quote(text)}" for loc, text in member.label.items()
        )
        return f"  {key}: {{ {pairs} }},"
    return f"  {key}: {{ default: {quote(str(member.label))} }},"


def _enum_label_blocks(definition: EnumDefinition, fallback_locale: str) -> List[Declaration]:
    name: str = definition.name
    labels_var: str = f"{lower_first(name)}Labels"
    labeled: List[EnumMember] = [m for m in definition.members if m.label is not None]

    if not labeled:
        return [
            Declaration(
                f"export function get{name}Label(value: {name}): string {{\n"
                + function_body(["return value;"])
                + "}",
                f"Get label for {name} value (returns value as-is)",
            )
        ]

    if definition.has_multi_locale_labels:
        chain: List[str] = list(dict.fromkeys([fallback_locale, "en"]))
        lookups: str = " ?? ".join(f"labels[{quote(loc)}]" for loc in chain)
        entries: str = "\n".join(_label_entry(name, m) for m in labeled)
        return [
            Declaration(
                f"const {labels_var}: Partial<Record<{name}, Record<string, string>>> = {{\n"
                f"{entries}\n}};"
            ),
            Declaration(
                f"export function get{name}Label(value: {name}, locale?: string): string {{\n"
                + function_body(
                    [
                        f"const labels = {labels_var}[value];",
                        "if (!labels) return value;",
                        "if (locale && labels[locale]) return labels[locale];",
                        f"// Fallback: {' → '.join(chain)} → first available",
                        f"return {lookups} ?? Object.values(labels)[0] ?? value;",
                    ]
                )
                + "}",
                f"Get label for {name} value with locale support",
            ),
        ]

    entries = "\n".join(
        f"  [{name}.{m.name}]: {quote(str(m.label))}," for m in labeled
    )
    return [
        Declaration(f"const {labels_var}: Partial<Record<{name}, string>> = {{\n{entries}\n}};"),
        Declaration(
            f"export function get{name}Label(value: {name}): string {{\n"
            + function_body([f"return {labels_var}[value] ?? value;"])
            + "}",
            f"Get label for {name} value (fallback to value if no label)",
        ),
    ]


def _enum_extra_blocks(definition: EnumDefinition) -> List[Declaration]:
    name: str = definition.name
    doc: str = f"Get extra metadata for {name} value (undefined if not defined)"
    if not definition.has_extra:
        return [
            Declaration(
                f"export function get{name}Extra(_value: {name}): Record<string, unknown> | undefined {{\n"
                + function_body(["return undefined;"])
                + "}",
                doc,
            )
        ]
    extra_var: str = f"{lower_first(name)}Extra"
    entries: str = "\n".join(
        f"  [{name}.{m.name}]: {js_json(m.extra)},"
        for m in definition.members
        if m.extra is not None
    )
    return [
        Declaration(
            f"const {extra_var}: Partial<Record<{name}, Record<string, unknown>>> = {{\n{entries}\n}};"
        ),
        Declaration(
            f"export function get{name}Extra(value: {name}): Record<string, unknown> | undefined {{\n"
            + function_body([f"return {extra_var}[value];"])
            + "}",
            doc,
        ),
    ]


def _type_guard(name: str) -> Declaration:
    return Declaration(
        f"export function is{name}(value: unknown): value is {name} {{\n"
        + function_body([f"return {name}Values.includes(value as {name});"])
        + "}",
        f"Type guard for {name}",
    )


def render_enum_file(definition: EnumDefinition, fallback_locale: str = "en") -> str:
    """Full enum with Values, is-guard, label and extra helpers."""
    name: str = definition.name
    members: str = "\n".join(f"  {m.name} = {quote(m.value)}," for m in definition.members)
    source = SourceFile(header=generated_header())
    source.declare(f"export enum {name} {{\n{members}\n}}", definition.comment, block_doc=True)
    source.declare(f"export const {name}Values = Object.values({name}) as {name}[];", f"All {name} values")
    source.add(_type_guard(name))
    source.add(*_enum_label_blocks(definition, fallback_locale))
    source.add(*_enum_extra_blocks(definition))
    return source.render()


def render_type_alias_file(alias: TypeAliasDefinition) -> str:
    """Literal union plus the same helper surface as a full enum."""
    name: str = alias.name
    literals: str = ", ".join(quote(v) for v in alias.values)
    source = SourceFile(header=generated_header())
    source.declare(f"export type {name} = {alias.type_expr};", alias.comment, block_doc=True)
    source.declare(f"export const {name}Values: {name}[] = [{literals}];", f"All {name} values")
    source.add(_type_guard(name))
    source.declare(
        f"export function get{name}Label(value: {name}): string {{\n"
        + function_body(["return value;"])
        + "}",
        f"Get label for {name} value (returns value as-is)",
    )
    source.declare(
        f"export function get{name}Extra(_value: {name}): Record<string, unknown> | undefined {{\n"
        + function_body(["return undefined;"])
        + "}",
        f"Get extra metadata for {name} value (always undefined for type aliases)",
    )
    return source.render()


# ---------------------------------------------------------------------------
# Base files
# ---------------------------------------------------------------------------


def _i18n_object(name: str, names: DisplayNames) -> str:
    lines: List[str] = [
        f"export const {lower_first(name)}I18n = {{",
        "  /** Model display name */",
        f"  label: {js_json(names.label)},",
        "  /** Field labels and placeholders */",
        "  fields: {",
    ]
    for field_name, label in names.fields.items():
        lines.append(f"    {field_name}: {{")
        lines.append(f"      label: {js_json(label)},")
        placeholder: Optional[Dict[str, str]] = names.placeholders.get(field_name)
        if placeholder:
            lines.append(f"      placeholder: {js_json(placeholder)},")
        lines.append("    },")
    lines.append("  },")
    lines.append("} as const;")
    return "\n".join(lines)


def _i18n_helpers(name: str) -> List[Declaration]:
    i18n: str = f"{lower_first(name)}I18n"
    return [
        Declaration(
            f"export function get{name}Label(locale: string): string {{\n"
            + function_body(
                [
                    f"return {i18n}.label[locale as keyof typeof {i18n}.label] "
                    f"?? {i18n}.label['en'] ?? {quote(name)};"
                ]
            )
            + "}",
            "Get model label for a specific locale",
        ),
        Declaration(
            f"export function get{name}FieldLabel(field: string, locale: string): string {{\n"
            + function_body(
                [
                    f"const fieldI18n = {i18n}.fields[field as keyof typeof {i18n}.fields];",
                    "if (!fieldI18n) return field;",
                    "return fieldI18n.label[locale as keyof typeof fieldI18n.label] "
                    "?? fieldI18n.label['en'] ?? field;",
                ]
            )
            + "}",
            "Get field label for a specific locale",
        ),
        Declaration(
            f"export function get{name}FieldPlaceholder(field: string, locale: string): string {{\n"
            + function_body(
                [
                    f"const fieldI18n = {i18n}.fields[field as keyof typeof {i18n}.fields];",
                    "if (!fieldI18n || !('placeholder' in fieldI18n)) return '';",
                    "const placeholder = fieldI18n.placeholder as Record<string, string>;",
                    "return placeholder[locale] ?? placeholder['en'] ?? '';",
                ]
            )
            + "}",
            "Get field placeholder for a specific locale",
        ),
    ]


def _zod_section(
    name: str,
    fields: Sequence[ZodFieldSchema],
    names: DisplayNames,
    excluded: Set[str],
) -> List:
    schemas_var: str = f"base{name}Schemas"
    schema_lines: List[str] = []
    for f in fields:
        if f.comment:
            schema_lines.append(f"  /** {f.comment} */")
        schema_lines.append(f"  {f.field_name}: {f.schema},")
    create_lines: List[str] = [
        f"  {f.field_name}: {schemas_var}.{f.field_name},"
        for f in fields
        if f.in_create and f.field_name not in excluded
    ]

    return [
        Banner("I18n (Internationalization)"),
        Declaration(
            _i18n_object(name, names),
            (f"Unified i18n object for {name}", "Contains model label and all field labels/placeholders"),
        ),
        Banner("Zod Schemas"),
        Declaration(
            f"export const {schemas_var} = {{\n" + "".join(f"{l}\n" for l in schema_lines) + "} as const;",
            f"Field schemas for {name}",
        ),
        Declaration(
            f"export const base{name}CreateSchema = z.object({{\n"
            + "".join(f"{l}\n" for l in create_lines)
            + "});",
            f"Create schema for {name} (POST requests)",
        ),
        Declaration(
            f"export const base{name}UpdateSchema = base{name}CreateSchema.partial();",
            f"Update schema for {name} (PUT/PATCH requests)",
        ),
        Banner("Inferred Types"),
        Declaration(
            f"export type Base{name}Create = z.infer<typeof base{name}CreateSchema>;\n"
            f"export type Base{name}Update = z.infer<typeof base{name}UpdateSchema>;"
        ),
        Banner("I18n Helper Functions"),
        *_i18n_helpers(name),
    ]


def _utility_types(name: str, excluded: Sequence[str]) -> List[Declaration]:
    omit: str = (
        f"Omit<{name}, {' | '.join(quote(f) for f in excluded)}>" if excluded else name
    )
    return [
        Declaration(f"export type {name}Create = {omit};", f"For creating new {name} (POST requests)"),
        Declaration(
            f"export type {name}Update = Partial<{name}Create>;",
            f"For updating {name} (PUT/PATCH requests)",
        ),
    ]


def render_base_file(
    iface: InterfaceDefinition,
    paths: ImportPaths,
    *,
    zod_fields: Optional[Sequence[ZodFieldSchema]] = None,
    display_names: Optional[DisplayNames] = None,
    excluded: Sequence[str] = (),
    plugin_enum_names: Sequence[str] = (),
) -> str:
    """
    ``base/<Entity>.ts``: interface plus either the Zod/i18n section
    (when *zod_fields* is given) or Create/Update utility types.
    """
    name: str = iface.name
    use_zod: bool = zod_fields is not None
    source = SourceFile(header=generated_header())

    if use_zod:
        source.add_import(["z"], "zod")
    common_types: List[str] = [
        t for t in ("DateTimeString", "DateString") if iface.uses_type(t)
    ]
    if common_types:
        source.add_import(common_types, paths.common_from_base, type_only=True)
    plugin_names: Set[str] = set(plugin_enum_names)
    for enum_name in iface.enum_dependencies:
        source.add_import([enum_name], paths.enum_from_base(enum_name, enum_name in plugin_names))
    for dep in iface.dependencies:
        source.add_import([dep], paths.entity_from_base(dep), type_only=True)

    source.declare(render_interface(iface), iface.comment, block_doc=True)

    if use_zod:
        source.add(
            *_zod_section(
                name,
                zod_fields or (),
                display_names or DisplayNames(label={}),
                set(excluded),
            )
        )
    else:
        source.add(*_utility_types(name, excluded))
    return source.render()


# ---------------------------------------------------------------------------
# Model files
# ---------------------------------------------------------------------------


def render_model_file(name: str, paths: ImportPaths, zod: bool = True) -> str:
    """User-owned ``<Entity>.ts`` extending the base file."""
    lower: str = lower_first(name)
    base_module: str = paths.base_from_model(name)
    source = SourceFile(header=model_header(name, zod))

    if not zod:
        source.add_import([f"{name} as {name}Base"], base_module, type_only=True)
        source.declare(
            f"export interface {name} extends {name}Base {{\n  // Add custom properties here\n}}",
            (f"{name} model interface.", "Add custom properties or methods here."),
        )
        source.add(
            Group(
                (
                    LineComment("Re-export base type for internal use"),
                    ExportDecl((f"{name}Base",), type_only=True),
                )
            )
        )
        return source.render()

    helpers: Tuple[str, ...] = (
        f"{lower}I18n",
        f"get{name}Label",
        f"get{name}FieldLabel",
        f"get{name}FieldPlaceholder",
    )
    source.add_import(["z"], "zod")
    source.add_import([f"{name} as {name}Base"], base_module, type_only=True)
    source.add_import(
        [f"base{name}Schemas", f"base{name}CreateSchema", f"base{name}UpdateSchema", *helpers],
        base_module,
        multiline=True,
    )
    source.add(Banner("Types (extend or re-export)"))
    source.declare(f"export interface {name} extends {name}Base {{\n  // Add custom properties here\n}}")
    source.add(Banner("Schemas (extend or re-export)"))
    source.declare(
        f"export const {lower}Schemas = {{ ...base{name}Schemas }};\n"
        f"export const {lower}CreateSchema = base{name}CreateSchema;\n"
        f"export const {lower}UpdateSchema = base{name}UpdateSchema;"
    )
    source.add(Banner("Types"))
    source.declare(
        f"export type {name}Create = z.infer<typeof {lower}CreateSchema>;\n"
        f"export type {name}Update = z.infer<typeof {lower}UpdateSchema>;"
    )
    source.add(
        Group((LineComment("Re-export i18n and helpers"), ExportDecl(helpers, multiline=True))),
        Group(
            (
                LineComment("Re-export base type for internal use"),
                ExportDecl((f"{name}Base",), type_only=True),
            )
        ),
    )
    return source.render()


# ---------------------------------------------------------------------------
# Legacy rules files
# ---------------------------------------------------------------------------

_RULE_MESSAGE_SHAPE: str = (
    "Array<{ required?: boolean; type?: string; min?: number; max?: number; "
    "pattern?: RegExp; message: string }>"
)


def render_rule(rule: PropertyRule) -> str:
    parts: List[str] = []
    if rule.required:
        parts.append("required: true")
    if rule.type:
        parts.append(f"type: '{rule.type}'")
    if rule.min is not None:
        parts.append(f"min: {format_number(rule.min)}")
    if rule.max is not None:
        parts.append(f"max: {format_number(rule.max)}")
    if rule.pattern:
        parts.append(f"pattern: /{rule.pattern}/")
    parts.append(f"message: {js_json(rule.message)}")
    return "{ " + ", ".join(parts) + " }"


def render_rules_file(name: str, rules: ModelRules, paths: ImportPaths) -> str:
    source = SourceFile(
        header=generated_header(f"Auto-generated validation rules and metadata for {name}.")
    )
    source.add_import(["LocaleMap", "ValidationRule"], paths.common_from_rules, type_only=True)

    source.declare(
        f"export const {name}DisplayName: LocaleMap = {js_json(rules.display_name, indent=2)};",
        f"Display name for {name}",
    )
    display_entries: str = "".join(
        f"  {prop}: {js_json(p.display_name)},\n" for prop, p in rules.properties.items()
    )
    source.declare(
        f"export const {name}PropertyDisplayNames: Record<string, LocaleMap> = {{\n{display_entries}}};",
        f"Property display names for {name}",
    )
    rule_entries: List[str] = []
    for prop, p in rules.properties.items():
        if not p.rules:
            continue
        rule_entries.append(f"  {prop}: [")
        rule_entries.extend(f"    {render_rule(r)}," for r in p.rules)
        rule_entries.append("  ],")
    source.declare(
        f"export const {name}Rules: Record<string, ValidationRule[]> = {{\n"
        + "".join(f"{l}\n" for l in rule_entries)
        + "};",
        f"Validation rules for {name} (Ant Design compatible)",
    )
    source.declare(
        f"export function get{name}Rules(locale: string): Record<string, {_RULE_MESSAGE_SHAPE}> {{\n"
        + function_body(
            [
                f"const result: Record<string, {_RULE_MESSAGE_SHAPE}> = {{}};",
                f"for (const [prop, rules] of Object.entries({name}Rules)) {{",
                "  result[prop] = rules.map(rule => ({",
                "    ...rule,",
                "    message: rule.message[locale] ?? rule.message['en'] ?? '',",
                "  }));",
                "}",
                "return result;",
            ]
        )
        + "}",
        "Get validation rules with messages for a specific locale",
    )
    source.declare(
        f"export function get{name}DisplayName(locale: string): string {{\n"
        + function_body(
            [f"return {name}DisplayName[locale] ?? {name}DisplayName['en'] ?? {quote(name)};"]
        )
        + "}",
        "Get display name for a specific locale",
    )
    source.declare(
        f"export function get{name}PropertyDisplayName(property: string, locale: string): string {{\n"
        + function_body(
            [
                f"const names = {name}PropertyDisplayNames[property];",
                "return names?.[locale] ?? names?.['en'] ?? property;",
            ]
        )
        + "}",
        "Get property display name for a specific locale",
    )
    return source.render()


# ---------------------------------------------------------------------------
# Shared support files
# ---------------------------------------------------------------------------

COMMON_TYPES: Tuple[str, ...] = (
    "LocaleMap",
    "Locale",
    "ValidationRule",
    "DateTimeString",
    "DateString",
)
I18N_EXPORTS: Tuple[str, ...] = (
    "defaultLocale",
    "fallbackLocale",
    "supportedLocales",
    "validationMessages",
    "getMessage",
    "getMessages",
)


def render_common_file(config: GenerationConfig) -> str:
    locales: List[str] = list(config.locale_config.locales)
    source = SourceFile(header=generated_header())
    source.declare(
        "export interface LocaleMap {\n  [locale: string]: string;\n}",
        "Locale map for multi-language support.",
        block_doc=True,
    )
    source.declare(
        f"export type Locale = {' | '.join(quote(l) for l in locales)};",
        "Supported locales in this project.",
        block_doc=True,
    )
    source.declare(
        "export interface ValidationRule {\n"
        "  required?: boolean;\n"
        "  type?: 'string' | 'number' | 'email' | 'url' | 'integer' | 'array' | 'object';\n"
        "  min?: number;\n"
        "  max?: number;\n"
        "  len?: number;\n"
        "  pattern?: RegExp;\n"
        "  message: LocaleMap;\n"
        "}",
        (
            "Validation rule with multi-locale messages.",
            "Use get{Model}Rules(locale) to get Ant Design compatible rules with string messages.",
        ),
    )
    source.declare("export type DateTimeString = string;", "ISO 8601 date-time string.", block_doc=True)
    source.declare("export type DateString = string;", "ISO 8601 date string (YYYY-MM-DD).", block_doc=True)
    return source.render()


def render_i18n_file(config: GenerationConfig, paths: ImportPaths) -> str:
    locale_cfg = config.locale_config
    messages: Dict[str, Dict[str, str]] = merge_i18n_messages(
        list(locale_cfg.locales), locale_cfg.messages
    )
    lookup: str = (
        "(messages as LocaleMap)[{loc}]\n"
        "    ?? (messages as LocaleMap)[fallbackLocale]\n"
        "    ?? (messages as LocaleMap)[defaultLocale]\n"
        "    ?? key;"
    )

    source = SourceFile(header=generated_header())
    source.add_import(["LocaleMap"], paths.common_from_root, type_only=True)
    source.declare(
        f"export const defaultLocale = {quote(locale_cfg.default_locale)} as const;",
        "Default locale for this project.",
        block_doc=True,
    )
    source.declare(
        f"export const fallbackLocale = {quote(locale_cfg.fallback_locale)} as const;",
        "Fallback locale when requested locale is not found.",
        block_doc=True,
    )
    source.declare(
        f"export const supportedLocales = {js_json(list(locale_cfg.locales))} as const;",
        "Supported locales in this project.",
        block_doc=True,
    )
    source.declare(
        f"export const validationMessages = {js_json(messages, indent=2)} as const;",
        (
            "Validation messages for all supported locales.",
            "Use getMessage(key, locale, params) to get formatted message.",
        ),
    )
    source.declare(
        "export function getMessage(\n"
        "  key: string,\n"
        "  locale: string,\n"
        "  params: Record<string, string | number> = {}\n"
        "): string {\n"
        + function_body(
            [
                "const messages = validationMessages[key as keyof typeof validationMessages];",
                "if (!messages) return key;",
                "",
                "let message = " + lookup.format(loc="locale"),
                "",
                "// Replace template placeholders",
                "for (const [param, value] of Object.entries(params)) {",
                r"  message = message.replace(new RegExp(`\\$\\{${param}\\}`, 'g'), String(value));",
                "}",
                "",
                "return message;",
            ]
        )
        + "}",
        (
            "Get validation message for a specific key and locale.",
            "Supports template placeholders: ${displayName}, ${min}, ${max}, etc.",
            "",
            "@param key - Message key (e.g., 'required', 'minLength')",
            "@param locale - Locale code (e.g., 'ja', 'en')",
            "@param params - Template parameters to replace",
            "@returns Formatted message string",
        ),
    )
    source.declare(
        "export function getMessages(locale: string): Record<string, string> {\n"
        + function_body(
            [
                "const result: Record<string, string> = {};",
                "for (const [key, messages] of Object.entries(validationMessages)) {",
                "  result[key] = " + lookup.format(loc="locale").replace("\n    ", "\n      "),
                "}",
                "return result;",
            ]
        )
        + "}",
        (
            "Get all validation messages for a specific locale.",
            "",
            "@param locale - Locale code",
            "@returns Object with all messages for the locale",
        ),
    )
    return source.render()


def _enum_exports(name: str, module: str, type_alias: bool = False) -> ExportDecl:
    head: str = f"type {name}" if type_alias else name
    return ExportDecl(
        (head, f"{name}Values", f"is{name}", f"get{name}Label", f"get{name}Extra"),
        module,
        multiline=True,
    )


def render_index_file(
    entity_names: Sequence[str],
    enums: Sequence[EnumDefinition],
    plugin_enums: Sequence[EnumDefinition],
    aliases: Sequence[TypeAliasDefinition],
    config: GenerationConfig,
    paths: ImportPaths,
) -> str:
    """Barrel module re-exporting every public generated name."""
    source = SourceFile(header=generated_header())
    source.add(
        Group((LineComment("Common Types"), ExportDecl(COMMON_TYPES, paths.common_from_root, type_only=True))),
        Group(
            (
                LineComment("i18n (Internationalization)"),
                ExportDecl(I18N_EXPORTS, paths.i18n_from_root, multiline=True),
            )
        ),
    )

    if enums:
        source.add(
            Group(
                (LineComment("Schema Enums"),)
                + tuple(_enum_exports(e.name, paths.module(paths.index_enum_prefix, e.name)) for e in enums)
            )
        )
    if plugin_enums:
        source.add(
            Group(
                (LineComment("Plugin Enums"),)
                + tuple(
                    _enum_exports(e.name, paths.module(paths.index_plugin_enum_prefix, e.name))
                    for e in plugin_enums
                )
            )
        )
    if aliases:
        source.add(
            Group(
                (LineComment("Inline Enums (Type Aliases)"),)
                + tuple(
                    _enum_exports(a.name, paths.module(paths.index_enum_prefix, a.name), type_alias=True)
                    for a in aliases
                )
            )
        )

    if not entity_names:
        return source.render()

    if config.generate_zod_schemas:
        items: List = [LineComment("Models (with Zod schemas, i18n, and Create/Update types)")]
        for name in entity_names:
            lower: str = lower_first(name)
            module: str = paths.model_from_index(name)
            items.append(ExportDecl((name, f"{name}Create", f"{name}Update"), module, type_only=True))
            items.append(
                ExportDecl(
                    (
                        f"{lower}Schemas",
                        f"{lower}CreateSchema",
                        f"{lower}UpdateSchema",
                        f"{lower}I18n",
                        f"get{name}Label",
                        f"get{name}FieldLabel",
                        f"get{name}FieldPlaceholder",
                    ),
                    module,
                    multiline=True,
                )
            )
        source.add(Group(tuple(items)))
        return source.render()

    items = [LineComment("Models (with Create/Update utility types)")]
    for name in entity_names:
        items.append(ExportDecl((name,), paths.model_from_index(name), type_only=True))
        items.append(
            ExportDecl((f"{name}Create", f"{name}Update"), paths.base_from_model(name), type_only=True)
        )
    source.add(Group(tuple(items)))

    if config.generate_rules:
        source.add(
            Group(
                (LineComment("Validation Rules"),)
                + tuple(
                    ExportDecl(
                        (f"get{n}Rules", f"get{n}DisplayName", f"get{n}PropertyDisplayName"),
                        paths.rules_from_index(n),
                        multiline=True,
                    )
                    for n in entity_names
                )
            )
        )
    return source.render()


__all__: List[str] = [
    "ImportPaths",
    "COMMON_TYPES",
    "I18N_EXPORTS",
    "generated_header",
    "model_header",
    "render_property",
    "render_interface",
    "render_enum_file",
    "render_type_alias_file",
    "render_base_file",
    "render_model_file",
    "render_rule",
    "render_rules_file",
    "render_common_file",
    "render_i18n_file",
    "render_index_file",
]

logger.debug("typegen.templates loaded.")
