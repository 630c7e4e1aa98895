"""
tests/test_exporters.py
Unit tests for typegen.exporters.ProjectExporter.

Tests cover:
- Physical routing for flat and package layouts
- package.json for the generated base package
- Create-once model files are never overwritten
- Optional export manifest
"""

from __future__ import annotations

import json
import pathlib

from typegen.exporters import (
    MANIFEST_FILE_NAME,
    ProjectExporter,
    render_package_json,
    resolve_output_path,
)
from typegen.models import FileCategory, GeneratedFile, GenerationConfig, SchemaCollection
from typegen.planner import generate_typescript


def _file(path: str, category: FileCategory = FileCategory.SCHEMA, overwrite: bool = True) -> GeneratedFile:
    return GeneratedFile(path=path, content="export {};\n", category=category, overwrite=overwrite)


# ===========================================================================
# Routing
# ===========================================================================


class TestRouting:
    """Logical path + category to physical path."""

    def test_flat_layout(self) -> None:
        config = GenerationConfig()
        assert resolve_output_path(_file("Status.ts", FileCategory.ENUM), config) == "models/enum/Status.ts"
        assert (
            resolve_output_path(_file("Prefecture.ts", FileCategory.PLUGIN_ENUM), config)
            == "models/enum/plugin/Prefecture.ts"
        )
        assert resolve_output_path(_file("base/User.ts", FileCategory.BASE), config) == "models/base/User.ts"
        assert resolve_output_path(_file("User.ts", overwrite=False), config) == "models/User.ts"
        assert resolve_output_path(_file("index.ts"), config) == "models/index.ts"

    def test_custom_models_path(self) -> None:
        config = GenerationConfig(models_path="src/types")
        assert resolve_output_path(_file("common.ts"), config) == "src/types/common.ts"

    def test_package_layout(self) -> None:
        config = GenerationConfig(layout="package", package_name="@app/schema")
        pkg = "node_modules/@app/schema"
        assert resolve_output_path(_file("Status.ts", FileCategory.ENUM), config) == f"{pkg}/enum/Status.ts"
        assert (
            resolve_output_path(_file("Prefecture.ts", FileCategory.PLUGIN_ENUM), config)
            == f"{pkg}/enum/Prefecture.ts"
        )
        assert resolve_output_path(_file("base/User.ts", FileCategory.BASE), config) == f"{pkg}/schemas/User.ts"
        assert resolve_output_path(_file("common.ts"), config) == f"{pkg}/schemas/common.ts"
        assert resolve_output_path(_file("i18n.ts"), config) == f"{pkg}/schemas/i18n.ts"
        assert resolve_output_path(_file("User.ts", overwrite=False), config) == "models/User.ts"
        assert resolve_output_path(_file("index.ts"), config) == "models/index.ts"

    def test_package_json(self) -> None:
        document = json.loads(render_package_json(GenerationConfig(package_name="@app/schema")))
        assert document["name"] == "@app/schema"
        assert set(document["exports"]) == {"./enum/*", "./schemas/*"}


# ===========================================================================
# Writing
# ===========================================================================


class TestExport:
    """End-to-end writes into a temp directory."""

    def test_flat_export(
        self,
        example_collection: SchemaCollection,
        example_config: GenerationConfig,
        output_dir: pathlib.Path,
    ) -> None:
        files = generate_typescript(example_collection, example_config)
        result = ProjectExporter(example_config, output_dir).export(files)

        assert result.success
        assert result.manifest.total_files == len(files)
        assert (output_dir / "models" / "enum" / "Status.ts").is_file()
        assert (output_dir / "models" / "enum" / "plugin" / "Prefecture.ts").is_file()
        assert (output_dir / "models" / "base" / "User.ts").is_file()
        assert (output_dir / "models" / "index.ts").is_file()
        assert not (output_dir / "node_modules").exists()
        assert not (output_dir / MANIFEST_FILE_NAME).exists()

    def test_written_content_matches_plan(self, output_dir: pathlib.Path) -> None:
        collection = SchemaCollection.model_validate({"schemas": [{"name": "Item"}]})
        files = generate_typescript(collection)
        ProjectExporter(GenerationConfig(), output_dir).export(files)
        index = next(f for f in files if f.path == "index.ts")
        assert (output_dir / "models" / "index.ts").read_text(encoding="utf-8") == index.content

    def test_existing_model_file_preserved(
        self,
        example_collection: SchemaCollection,
        example_config: GenerationConfig,
        output_dir: pathlib.Path,
    ) -> None:
        user_file = output_dir / "models" / "User.ts"
        user_file.parent.mkdir(parents=True)
        user_file.write_text("// my edits\n", encoding="utf-8")

        files = generate_typescript(example_collection, example_config)
        result = ProjectExporter(example_config, output_dir).export(files)

        assert user_file.read_text(encoding="utf-8") == "// my edits\n"
        assert result.skipped == ("models/User.ts",)
        assert result.manifest.total_files == len(files) - 1

    def test_base_file_always_overwritten(self, output_dir: pathlib.Path) -> None:
        base_file = output_dir / "models" / "base" / "Item.ts"
        base_file.parent.mkdir(parents=True)
        base_file.write_text("stale\n", encoding="utf-8")

        collection = SchemaCollection.model_validate({"schemas": [{"name": "Item"}]})
        ProjectExporter(GenerationConfig(), output_dir).export(generate_typescript(collection))
        assert base_file.read_text(encoding="utf-8") != "stale\n"

    def test_package_export(self, output_dir: pathlib.Path) -> None:
        collection = SchemaCollection.model_validate(
            {
                "schemas": [
                    {"name": "Status", "kind": "enum", "values": ["a"]},
                    {"name": "Post", "properties": {"state": {"type": "EnumRef", "enum": "Status"}}},
                ]
            }
        )
        config = GenerationConfig(layout="package")
        result = ProjectExporter(config, output_dir).export(generate_typescript(collection, config))

        pkg = output_dir / "node_modules" / "@schema-base"
        assert result.success
        assert (pkg / "enum" / "Status.ts").is_file()
        assert (pkg / "schemas" / "Post.ts").is_file()
        assert (pkg / "schemas" / "common.ts").is_file()
        assert json.loads((pkg / "package.json").read_text(encoding="utf-8"))["name"] == "@schema-base"
        assert (output_dir / "models" / "Post.ts").is_file()
        assert (output_dir / "models" / "index.ts").is_file()

    def test_manifest(self, output_dir: pathlib.Path) -> None:
        collection = SchemaCollection.model_validate({"schemas": [{"name": "Item"}]})
        files = generate_typescript(collection)
        ProjectExporter(GenerationConfig(), output_dir, generate_manifest=True).export(files)

        manifest = json.loads((output_dir / MANIFEST_FILE_NAME).read_text(encoding="utf-8"))
        assert manifest["layout"] == "flat"
        assert manifest["total_files"] == len(files)
        assert [f["relative_path"] for f in manifest["files"]] == [
            "models/base/Item.ts",
            "models/Item.ts",
            "models/common.ts",
            "models/i18n.ts",
            "models/index.ts",
        ]
        assert all(len(f["sha256"]) == 64 for f in manifest["files"])

    def test_plan_paths(self, output_dir: pathlib.Path) -> None:
        exporter = ProjectExporter(GenerationConfig(), output_dir)
        planned = exporter.plan_paths([_file("Status.ts", FileCategory.ENUM)])
        assert [p for _, p in planned] == ["models/enum/Status.ts"]
        assert exporter.output_dir == output_dir.resolve()
