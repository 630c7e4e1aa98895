# File: typegen/planner.py
"""
NexaFlow TypeGen - File Planner
================================
``generate_typescript`` is the pure core of typegen: a
``SchemaCollection`` plus a ``GenerationConfig`` in, an ordered list of
``GeneratedFile`` records out.  No file system access happens here.

Plan order::

    1. schema enums               enum/<Name>.ts          (category enum)
    2. plugin enums               enum/plugin/<Name>.ts   (category plugin-enum)
    3. inline enums / aliases     enum/<Name>.ts          (category enum)
    4. base files                 base/<Entity>.ts        (always overwritten)
    5. model files                <Entity>.ts             (created once)
    6. legacy rules files         rules/<Entity>.rules.ts (opt-in, no Zod)
    7. common.ts, i18n.ts, index.ts

Paths in the plan are *logical*; ``ProjectExporter`` maps categories to
physical directories for the chosen layout.

The name-collision pre-pass runs before anything is planned, so a
conflicting input yields an exception and zero files.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from typegen.enums import (
    EnumDefinition,
    InlineEnum,
    TypeAliasDefinition,
    extract_inline_enums,
    generate_enums,
    generate_plugin_enums,
)
from typegen.expander import ExpansionContext, InterfaceDefinition, schema_to_interface
from typegen.models import FileCategory, GeneratedFile, GenerationConfig, SchemaCollection, SchemaDefinition
from typegen.rules import generate_model_rules
from typegen.templates import (
    COMMON_TYPES,
    ImportPaths,
    render_base_file,
    render_common_file,
    render_enum_file,
    render_i18n_file,
    render_index_file,
    render_model_file,
    render_rules_file,
    render_type_alias_file,
)
from typegen.validators import ensure_no_conflicts
from typegen.zod import excluded_field_list, generate_display_names, generate_zod_schemas

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("typegen.planner")


# ---------------------------------------------------------------------------
# Per-file planners
# ---------------------------------------------------------------------------


def plan_enum_file(definition: EnumDefinition, config: GenerationConfig) -> GeneratedFile:
    return GeneratedFile(
        path=f"{definition.name}.ts",
        content=render_enum_file(definition, config.locale_config.fallback_locale),
        category=FileCategory.PLUGIN_ENUM if definition.plugin else FileCategory.ENUM,
        types=[definition.name],
    )


def plan_type_alias_file(alias: TypeAliasDefinition) -> GeneratedFile:
    return GeneratedFile(
        path=f"{alias.name}.ts",
        content=render_type_alias_file(alias),
        category=FileCategory.ENUM,
        types=[alias.name],
    )


def plan_base_file(
    schema: SchemaDefinition,
    iface: InterfaceDefinition,
    config: GenerationConfig,
    paths: ImportPaths,
) -> GeneratedFile:
    name: str = schema.name
    excluded: List[str] = excluded_field_list(schema, config)
    plugin_names: List[str] = list(config.plugin_enums)

    if config.generate_zod_schemas:
        content: str = render_base_file(
            iface,
            paths,
            zod_fields=generate_zod_schemas(schema, config),
            display_names=generate_display_names(schema, config),
            excluded=excluded,
            plugin_enum_names=plugin_names,
        )
    else:
        content = render_base_file(
            iface,
            paths,
            excluded=[f for f in excluded if f in iface.field_names],
            plugin_enum_names=plugin_names,
        )
    return GeneratedFile(
        path=f"base/{name}.ts",
        content=content,
        category=FileCategory.BASE,
        types=[name, f"{name}Create", f"{name}Update"],
    )


def plan_model_file(name: str, config: GenerationConfig, paths: ImportPaths) -> GeneratedFile:
    return GeneratedFile(
        path=f"{name}.ts",
        content=render_model_file(name, paths, zod=config.generate_zod_schemas),
        category=FileCategory.SCHEMA,
        overwrite=False,
        types=[name],
    )


def plan_rules_file(schema: SchemaDefinition, config: GenerationConfig, paths: ImportPaths) -> GeneratedFile:
    name: str = schema.name
    return GeneratedFile(
        path=f"rules/{name}.rules.ts",
        content=render_rules_file(name, generate_model_rules(schema, config), paths),
        category=FileCategory.SCHEMA,
        types=[f"{name}Rules", f"{name}DisplayName"],
    )


def plan_common_file(config: GenerationConfig, paths: ImportPaths) -> GeneratedFile:
    return GeneratedFile(
        path="common.ts",
        content=render_common_file(config),
        category=FileCategory.BASE if paths.base_is_package else FileCategory.SCHEMA,
        types=list(COMMON_TYPES),
    )


def plan_i18n_file(config: GenerationConfig, paths: ImportPaths) -> GeneratedFile:
    return GeneratedFile(
        path="i18n.ts",
        content=render_i18n_file(config, paths),
        category=FileCategory.BASE if paths.base_is_package else FileCategory.SCHEMA,
        types=["validationMessages", "getMessage", "getMessages"],
    )


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def generate_typescript(
    collection: SchemaCollection,
    config: Optional[GenerationConfig] = None,
) -> List[GeneratedFile]:
    """
    Plan every output file for *collection*.

    Raises ``SchemaConflictError`` (before any planning) when two
    top-level generated types would share a name.
    """
    cfg: GenerationConfig = config or GenerationConfig()
    ensure_no_conflicts(collection, cfg)

    paths: ImportPaths = ImportPaths.from_config(cfg)
    files: List[GeneratedFile] = []

    schema_enums: List[EnumDefinition] = generate_enums(collection, cfg)
    plugin_enums: List[EnumDefinition] = generate_plugin_enums(cfg)
    inline: List[InlineEnum] = extract_inline_enums(collection, cfg)
    inline_enums: List[EnumDefinition] = [i.enum for i in inline if i.enum is not None]
    aliases: List[TypeAliasDefinition] = [i.alias for i in inline if i.alias is not None]

    files.extend(plan_enum_file(e, cfg) for e in schema_enums)
    files.extend(plan_enum_file(e, cfg) for e in plugin_enums)
    for item in inline:
        if item.enum is not None:
            files.append(plan_enum_file(item.enum, cfg))
        elif item.alias is not None:
            files.append(plan_type_alias_file(item.alias))

    visible: List[SchemaDefinition] = [s for s in collection.object_schemas if not s.is_hidden]
    ctx = ExpansionContext(collection, cfg)
    for schema in visible:
        files.append(plan_base_file(schema, schema_to_interface(schema, ctx), cfg, paths))
    for schema in visible:
        files.append(plan_model_file(schema.name, cfg, paths))
    if cfg.generate_rules and not cfg.generate_zod_schemas:
        for schema in visible:
            files.append(plan_rules_file(schema, cfg, paths))

    files.append(plan_common_file(cfg, paths))
    files.append(plan_i18n_file(cfg, paths))
    files.append(
        GeneratedFile(
            path="index.ts",
            content=render_index_file(
                [s.name for s in visible],
                schema_enums + inline_enums,
                plugin_enums,
                aliases,
                cfg,
                paths,
            ),
            category=FileCategory.SCHEMA,
        )
    )

    logger.info(
        "Planned %d file(s): %d enum, %d plugin enum, %d inline, %d entit(y/ies)",
        len(files),
        len(schema_enums),
        len(plugin_enums),
        len(inline),
        len(visible),
    )
    return files


__all__: List[str] = [
    "plan_enum_file",
    "plan_type_alias_file",
    "plan_base_file",
    "plan_model_file",
    "plan_rules_file",
    "plan_common_file",
    "plan_i18n_file",
    "generate_typescript",
]

logger.debug("typegen.planner loaded.")
