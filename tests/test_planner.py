"""
tests/test_planner.py
Unit tests for typegen.planner.

Tests cover:
- Plan order, logical paths and routing categories
- Collision pre-pass (no files on conflict)
- Deterministic output
- Legacy rules files and index exports
- Package layout imports
"""

from __future__ import annotations

from typing import Any, Dict, List

import pytest

from typegen.models import FileCategory, GeneratedFile, GenerationConfig, SchemaCollection
from typegen.planner import generate_typescript
from typegen.validators import SchemaConflictError


def _collection(*schemas: Dict[str, Any]) -> SchemaCollection:
    return SchemaCollection.model_validate({"schemas": list(schemas)})


def _by_path(files: List[GeneratedFile]) -> Dict[str, GeneratedFile]:
    return {f.path: f for f in files}


# ===========================================================================
# Plan shape
# ===========================================================================


class TestPlanShape:
    """Order, paths and categories for the reference schema."""

    def test_order(self, example_collection: SchemaCollection, example_config: GenerationConfig) -> None:
        files = generate_typescript(example_collection, example_config)
        assert [f.path for f in files] == [
            "Status.ts",
            "Prefecture.ts",
            "TaskTaskStatus.ts",
            "TaskPriority.ts",
            "base/User.ts",
            "base/Task.ts",
            "base/Post.ts",
            "base/Video.ts",
            "base/Comment.ts",
            "User.ts",
            "Task.ts",
            "Post.ts",
            "Video.ts",
            "Comment.ts",
            "common.ts",
            "i18n.ts",
            "index.ts",
        ]

    def test_categories(self, example_collection: SchemaCollection, example_config: GenerationConfig) -> None:
        files = _by_path(generate_typescript(example_collection, example_config))
        assert files["Status.ts"].category == FileCategory.ENUM
        assert files["Prefecture.ts"].category == FileCategory.PLUGIN_ENUM
        assert files["TaskPriority.ts"].category == FileCategory.ENUM
        assert files["base/User.ts"].category == FileCategory.BASE
        assert files["User.ts"].category == FileCategory.SCHEMA
        assert files["common.ts"].category == FileCategory.SCHEMA

    def test_model_files_created_once(
        self, example_collection: SchemaCollection, example_config: GenerationConfig
    ) -> None:
        files = generate_typescript(example_collection, example_config)
        create_once = sorted(f.path for f in files if not f.overwrite)
        assert create_once == ["Comment.ts", "Post.ts", "Task.ts", "User.ts", "Video.ts"]

    def test_default_config(self) -> None:
        files = generate_typescript(_collection({"name": "Item"}))
        assert [f.path for f in files] == ["base/Item.ts", "Item.ts", "common.ts", "i18n.ts", "index.ts"]

    def test_hidden_schema_has_no_entity_files(self) -> None:
        collection = _collection(
            {"name": "Audit", "options": {"hidden": True}, "properties": {"level": {"type": "Enum", "enum": ["info"]}}}
        )
        paths = [f.path for f in generate_typescript(collection)]
        assert "AuditLevel.ts" in paths
        assert "base/Audit.ts" not in paths
        assert "Audit.ts" not in paths

    def test_types_recorded(self, example_collection: SchemaCollection, example_config: GenerationConfig) -> None:
        files = _by_path(generate_typescript(example_collection, example_config))
        assert files["base/User.ts"].types == ["User", "UserCreate", "UserUpdate"]
        assert files["Status.ts"].types == ["Status"]


# ===========================================================================
# Collision pre-pass
# ===========================================================================


class TestConflicts:
    """A colliding input produces an exception and no plan."""

    def test_duplicate_schema_names(self, duplicate_user_schemas: List[Dict[str, Any]]) -> None:
        collection = SchemaCollection.model_validate({"schemas": duplicate_user_schemas})
        with pytest.raises(SchemaConflictError) as exc_info:
            generate_typescript(collection)
        assert exc_info.value.conflicts == {"User": ["schemas/User.yaml", "schemas/legacy/User.yaml"]}
        assert "schemas/User.yaml" in str(exc_info.value)
        assert "schemas/legacy/User.yaml" in str(exc_info.value)

    def test_inline_enum_shadowing_schema(self) -> None:
        collection = _collection(
            {"name": "PostStatus", "kind": "enum", "values": ["a"]},
            {"name": "Post", "properties": {"status": {"type": "Enum", "enum": ["draft"]}}},
        )
        with pytest.raises(SchemaConflictError) as exc_info:
            generate_typescript(collection)
        assert list(exc_info.value.conflicts) == ["PostStatus"]

    def test_conflict_error_is_value_error(self, duplicate_user_schemas: List[Dict[str, Any]]) -> None:
        collection = SchemaCollection.model_validate({"schemas": duplicate_user_schemas})
        with pytest.raises(ValueError):
            generate_typescript(collection)


# ===========================================================================
# Determinism
# ===========================================================================


class TestDeterminism:
    """Same input, byte-identical output."""

    def test_idempotent(self, example_collection: SchemaCollection, example_config: GenerationConfig) -> None:
        first = generate_typescript(example_collection, example_config)
        second = generate_typescript(example_collection, example_config)
        assert [(f.path, f.content) for f in first] == [(f.path, f.content) for f in second]

    def test_every_file_ends_with_single_newline(
        self, example_collection: SchemaCollection, example_config: GenerationConfig
    ) -> None:
        for f in generate_typescript(example_collection, example_config):
            assert f.content.endswith("\n"), f.path
            assert not f.content.endswith("\n\n"), f.path


# ===========================================================================
# Content wiring
# ===========================================================================


class TestContentWiring:
    """Cross-file imports and index exports."""

    def test_plugin_enum_import(self, example_collection: SchemaCollection, example_config: GenerationConfig) -> None:
        files = _by_path(generate_typescript(example_collection, example_config))
        assert "import { Prefecture } from '../enum/plugin/Prefecture';" in files["base/User.ts"].content

    def test_index_exports(self, example_collection: SchemaCollection, example_config: GenerationConfig) -> None:
        index = _by_path(generate_typescript(example_collection, example_config))["index.ts"].content
        assert (
            "// Common Types\n"
            "export type { LocaleMap, Locale, ValidationRule, DateTimeString, DateString } from './common';"
        ) in index
        assert "  getStatusExtra,\n} from './enum/Status';" in index
        assert "  getTaskTaskStatusExtra,\n} from './enum/TaskTaskStatus';" in index
        assert "  getPrefectureExtra,\n} from './enum/plugin/Prefecture';" in index
        assert "export {\n  type TaskPriority,\n  TaskPriorityValues," in index
        assert "export type { User, UserCreate, UserUpdate } from './User';" in index
        assert "  getCommentFieldPlaceholder,\n} from './Comment';" in index

    def test_index_without_zod(self) -> None:
        collection = _collection({"name": "Item", "properties": {"title": {"type": "String"}}})
        index = _by_path(generate_typescript(collection, GenerationConfig(generate_zod_schemas=False)))["index.ts"]
        assert "export type { Item } from './Item';" in index.content
        assert "export type { ItemCreate, ItemUpdate } from './base/Item';" in index.content
        assert "Validation Rules" not in index.content

    def test_rules_files_only_without_zod(self) -> None:
        collection = _collection({"name": "Item", "properties": {"title": {"type": "String"}}})
        with_zod = generate_typescript(collection, GenerationConfig(generate_rules=True))
        assert not any(f.path.startswith("rules/") for f in with_zod)

        legacy = _by_path(
            generate_typescript(collection, GenerationConfig(generate_zod_schemas=False, generate_rules=True))
        )
        assert "rules/Item.rules.ts" in legacy
        assert "} from './rules/Item.rules';" in legacy["index.ts"].content

    def test_package_layout_imports(self) -> None:
        collection = _collection(
            {"name": "Status", "kind": "enum", "values": ["a"]},
            {"name": "Post", "properties": {"state": {"type": "EnumRef", "enum": "Status"}}},
        )
        config = GenerationConfig(layout="package", package_name="@app/schema")
        files = _by_path(generate_typescript(collection, config))
        assert "import { Status } from '@app/schema/enum/Status';" in files["base/Post.ts"].content
        assert "from '@app/schema/schemas/Post';" in files["Post.ts"].content
        assert files["common.ts"].category == FileCategory.BASE
        assert "from '@app/schema/schemas/common';" in files["index.ts"].content
