"""
tests/test_cli.py
Tests for typegen.cli exit codes and modes.

Every run goes through ``cli_main`` with an explicit argv and asserts on
the ``SystemExit`` code.
"""

from __future__ import annotations

import pathlib
from typing import List

import pytest

from typegen.cli import (
    EXIT_INPUT_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
    cli_main,
)


def _run(argv: List[str]) -> int:
    with pytest.raises(SystemExit) as exc_info:
        cli_main(argv)
    return exc_info.value.code


# ===========================================================================
# Generation
# ===========================================================================


class TestGenerate:
    """Full generation runs."""

    def test_success(self, schema_yaml_path: pathlib.Path, output_dir: pathlib.Path) -> None:
        code = _run(["-s", str(schema_yaml_path), "-o", str(output_dir), "-q"])
        assert code == EXIT_SUCCESS
        assert (output_dir / "models" / "index.ts").is_file()

    def test_package_layout_flags(self, minimal_schema_yaml_path: pathlib.Path, output_dir: pathlib.Path) -> None:
        code = _run(
            [
                "-s", str(minimal_schema_yaml_path),
                "-o", str(output_dir),
                "--layout", "package",
                "--package-name", "@app/schema",
                "--js-extension",
                "-q",
            ]
        )
        assert code == EXIT_SUCCESS
        assert (output_dir / "node_modules" / "@app" / "schema" / "schemas" / "Item.ts").is_file()
        model = (output_dir / "models" / "Item.ts").read_text(encoding="utf-8")
        assert "from '@app/schema/schemas/Item.js';" in model

    def test_no_zod_with_rules(self, minimal_schema_yaml_path: pathlib.Path, output_dir: pathlib.Path) -> None:
        code = _run(["-s", str(minimal_schema_yaml_path), "-o", str(output_dir), "--no-zod", "--rules", "-q"])
        assert code == EXIT_SUCCESS
        assert (output_dir / "models" / "rules" / "Item.rules.ts").is_file()

    def test_manifest_flag(self, minimal_schema_yaml_path: pathlib.Path, output_dir: pathlib.Path) -> None:
        assert _run(["-s", str(minimal_schema_yaml_path), "-o", str(output_dir), "--manifest", "-q"]) == EXIT_SUCCESS
        assert (output_dir / ".typegen-manifest.json").is_file()

    def test_duplicate_names(self, duplicate_schema_yaml_path: pathlib.Path, output_dir: pathlib.Path) -> None:
        code = _run(["-s", str(duplicate_schema_yaml_path), "-o", str(output_dir), "-q"])
        assert code == EXIT_VALIDATION_ERROR
        assert list(output_dir.iterdir()) == []

    def test_dry_run_lists_plan(
        self,
        minimal_schema_yaml_path: pathlib.Path,
        output_dir: pathlib.Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = _run(["-s", str(minimal_schema_yaml_path), "-o", str(output_dir), "--dry-run", "-q"])
        out = capsys.readouterr().out
        assert code == EXIT_SUCCESS
        assert "Planned files:" in out
        assert "Item.ts  (create once)" in out
        assert list(output_dir.iterdir()) == []

    def test_fail_on_warnings_is_validation_error(self, tmp_path: pathlib.Path, output_dir: pathlib.Path) -> None:
        path = tmp_path / "warn.yaml"
        path.write_text(
            "schemas:\n  - name: Post\n    properties:\n      blob:\n        type: Mystery\n",
            encoding="utf-8",
        )
        assert _run(["-s", str(path), "-o", str(output_dir), "-q"]) == EXIT_SUCCESS
        strict_out = tmp_path / "strict"
        code = _run(["-s", str(path), "-o", str(strict_out), "--fail-on-warnings", "-q"])
        assert code == EXIT_VALIDATION_ERROR
        assert not strict_out.exists() or list(strict_out.iterdir()) == []

    def test_non_utf8_input(self, tmp_path: pathlib.Path, output_dir: pathlib.Path) -> None:
        path = tmp_path / "latin1.yaml"
        path.write_bytes(b"schemas:\n  - name: \xff\xfe\n")
        assert _run(["-s", str(path), "-o", str(output_dir), "-q"]) == EXIT_INPUT_ERROR
        assert _run(["-s", str(path), "--validate-only", "-q"]) == EXIT_INPUT_ERROR

    def test_malformed_input(self, tmp_path: pathlib.Path, output_dir: pathlib.Path) -> None:
        path = tmp_path / "broken.yaml"
        path.write_text("models: []\n", encoding="utf-8")
        assert _run(["-s", str(path), "-o", str(output_dir), "-q"]) == EXIT_INPUT_ERROR


# ===========================================================================
# Argument errors
# ===========================================================================


class TestArguments:
    """Input/argument errors exit with 4."""

    def test_missing_schema_path(self, tmp_path: pathlib.Path) -> None:
        assert _run(["-s", str(tmp_path / "missing.yaml"), "-o", str(tmp_path), "-q"]) == EXIT_INPUT_ERROR

    def test_output_required(self, minimal_schema_yaml_path: pathlib.Path) -> None:
        assert _run(["-s", str(minimal_schema_yaml_path), "-q"]) == EXIT_INPUT_ERROR

    def test_version(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert _run(["--version"]) == 0
        assert "NexaFlow TypeGen v" in capsys.readouterr().out


# ===========================================================================
# Validate-only
# ===========================================================================


class TestValidateOnly:
    """--validate-only never writes."""

    def test_valid(self, schema_yaml_path: pathlib.Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert _run(["-s", str(schema_yaml_path), "--validate-only", "-q"]) == EXIT_SUCCESS
        assert "All validations passed!" in capsys.readouterr().out

    def test_collision(self, duplicate_schema_yaml_path: pathlib.Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert _run(["-s", str(duplicate_schema_yaml_path), "--validate-only", "-q"]) == EXIT_VALIDATION_ERROR
        assert "DUPLICATE_SCHEMA_NAME" in capsys.readouterr().out

    def test_fail_on_warnings(self, tmp_path: pathlib.Path) -> None:
        path = tmp_path / "warn.yaml"
        path.write_text(
            "schemas:\n  - name: Post\n    properties:\n      blob:\n        type: Hyperblob\n",
            encoding="utf-8",
        )
        assert _run(["-s", str(path), "--validate-only", "-q"]) == EXIT_SUCCESS
        assert _run(["-s", str(path), "--validate-only", "--fail-on-warnings", "-q"]) == EXIT_VALIDATION_ERROR

    def test_malformed_input(self, tmp_path: pathlib.Path) -> None:
        path = tmp_path / "broken.yaml"
        path.write_text("models: []\n", encoding="utf-8")
        assert _run(["-s", str(path), "--validate-only", "-q"]) == EXIT_INPUT_ERROR
