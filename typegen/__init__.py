# File: typegen/__init__.py
"""
NexaFlow TypeGen - TypeScript Type & Zod Schema Generator
==========================================================

Turns a declarative data-model description (object schemas, enum schemas,
plugin compound types, plugin enums, locale configuration) into an
ordered list of TypeScript source files: interfaces, enums with helper
functions, Zod validators, i18n metadata and a barrel ``index.ts``.

Architecture overview::

    ┌──────────────┐     ┌───────────────┐     ┌──────────────────┐
    │  CLI / Entry │────▶│ TypeGenerator │────▶│ generate_typescript│
    │   (cli.py)   │     │ (generator.py)│     │   (planner.py)    │
    └──────────────┘     └───────┬───────┘     └─────────┬────────┘
                                 │                       │
                    ┌────────────┼──────────┐   ┌────────┼─────────────┐
                    ▼            ▼          ▼   ▼        ▼             ▼
             ┌──────────┐ ┌──────────┐ ┌─────────┐ ┌──────────┐ ┌──────────┐
             │validators│ │  models  │ │exporters│ │ expander │ │templates │
             └──────────┘ └──────────┘ └─────────┘ │ enums zod│ │ builder  │
                                                   └──────────┘ └──────────┘

Usage::

    # As a library (pure, no I/O)
    from typegen import GenerationConfig, SchemaCollection, generate_typescript
    files = generate_typescript(collection, GenerationConfig())

    # From the command line
    typegen --schema schemas.yaml --output ./web/src -v
"""

from __future__ import annotations

__version__: str = "1.0.0"
__author__: str = "NexaFlow Team"
__license__: str = "MIT"

from typegen.models import (
    CustomTypeDefinition,
    CustomTypeField,
    EnumValueDefinition,
    FileCategory,
    GeneratedFile,
    GenerationConfig,
    LocaleConfig,
    OutputLayout,
    PluginEnumDefinition,
    RelationKind,
    SchemaCollection,
    SchemaDefinition,
    SchemaKind,
    ValidationRules,
)
from typegen.locale import resolve_localized_string
from typegen.resolver import resolve_property_type
from typegen.planner import generate_typescript
from typegen.validators import (
    SchemaConflictError,
    TypeGenError,
    ValidationResult,
    validate_full,
)
from typegen.exporters import ExportManifest, ExportResult, ProjectExporter
from typegen.generator import GenerationReport, SchemaLoadError, TypeGenerator

__all__: list[str] = [
    # Version info
    "__version__",
    "__author__",
    "__license__",
    # Core
    "generate_typescript",
    "resolve_property_type",
    "resolve_localized_string",
    # Orchestrator
    "TypeGenerator",
    "GenerationReport",
    # Models
    "CustomTypeDefinition",
    "CustomTypeField",
    "EnumValueDefinition",
    "FileCategory",
    "GeneratedFile",
    "GenerationConfig",
    "LocaleConfig",
    "OutputLayout",
    "PluginEnumDefinition",
    "RelationKind",
    "SchemaCollection",
    "SchemaDefinition",
    "SchemaKind",
    "ValidationRules",
    # Errors & validation
    "TypeGenError",
    "SchemaConflictError",
    "SchemaLoadError",
    "ValidationResult",
    "validate_full",
    # Exporters
    "ProjectExporter",
    "ExportManifest",
    "ExportResult",
]
