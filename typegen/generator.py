# File: typegen/generator.py
"""
NexaFlow TypeGen - Generation Pipeline (Orchestrator)
======================================================

Connects every phase together:

    Schema Input → Validation → File Planning → File Export

Workflow::

    1. Load the input from a JSON/YAML file, or a directory holding one
       schema per file.
    2. Parse into ``SchemaCollection`` + ``GenerationConfig`` (models.py).
    3. Run cross-schema validation (validators.py); collisions abort here.
    4. Plan every output file (planner.generate_typescript).
    5. Hand off to ``ProjectExporter`` (exporters.py), unless dry-run.
    6. Return a ``GenerationReport`` with metrics and status.

Error handling strategy:
    - Load and parse failures raise ``SchemaLoadError`` from the loader
      functions; the orchestrator records them in the report.
    - Validation errors are collected and surfaced, never swallowed.
    - Export errors are recorded per file by the exporter.
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from typegen.exporters import ExportManifest, ExportResult, ProjectExporter
from typegen.models import GeneratedFile, GenerationConfig, SchemaCollection
from typegen.planner import generate_typescript
from typegen.utils import Timer
from typegen.validators import TypeGenError, ValidationResult, validate_full

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("typegen.generator")

SCHEMA_SUFFIXES: Tuple[str, ...] = (".yaml", ".yml", ".json")
_SCHEMA_KEYS: Tuple[str, ...] = ("schemas",)
_CONFIG_KEYS: Tuple[str, ...] = ("config", "generation_config", "options")


class SchemaLoadError(TypeGenError, ValueError):
    """The input file or directory could not be read or parsed."""


# ---------------------------------------------------------------------------
# Generation report
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class GenerationStepMetric:
    """Timing and outcome for a single pipeline step."""

    step_name: str = ""
    success: bool = True
    elapsed_seconds: float = 0.0
    detail: str = ""


@dataclass(slots=True)
class GenerationReport:
    """Everything ``TypeGenerator`` learned during one run."""

    success: bool = False
    output_directory: str = ""
    dry_run: bool = False

    # Metrics
    schema_count: int = 0
    planned_count: int = 0
    total_files: int = 0
    total_bytes: int = 0
    total_lines: int = 0
    total_elapsed_seconds: float = 0.0

    # Sub-reports
    step_metrics: List[GenerationStepMetric] = field(default_factory=list)
    validation_errors: List[str] = field(default_factory=list)
    validation_warnings: List[str] = field(default_factory=list)
    input_errors: List[str] = field(default_factory=list)
    generation_errors: List[str] = field(default_factory=list)
    export_errors: List[str] = field(default_factory=list)
    skipped_files: List[str] = field(default_factory=list)

    config: Optional[GenerationConfig] = None
    planned_files: List[GeneratedFile] = field(default_factory=list)
    manifest: Optional[ExportManifest] = None

    @property
    def validation_failed(self) -> bool:
        """True when the validation step rejected the input, including warnings promoted to errors."""
        return bool(self.validation_errors) or any(
            step.step_name == "Validate Schemas" and not step.success for step in self.step_metrics
        )

    def summary(self) -> str:
        rule: str = "=" * 60
        thin: str = "─" * 60
        status: str = "✅ SUCCESS" if self.success else "❌ FAILED"
        lines: List[str] = [
            rule,
            "  NexaFlow TypeGen - Generation Report",
            rule,
            f"  Status:           {status}{' (dry run)' if self.dry_run else ''}",
            f"  Output:           {self.output_directory}",
            f"  Schemas:          {self.schema_count}",
            f"  Files planned:    {self.planned_count}",
            f"  Files written:    {self.total_files}",
            f"  Files skipped:    {len(self.skipped_files)}",
            f"  Total lines:      {self.total_lines:,}",
            f"  Total bytes:      {self.total_bytes:,}",
            f"  Total time:       {self.total_elapsed_seconds:.3f}s",
            thin,
        ]

        if self.step_metrics:
            lines.append("  Pipeline Steps:")
            for step in self.step_metrics:
                icon: str = "✓" if step.success else "✗"
                lines.append(
                    f"    {icon} {step.step_name:<28s} {step.elapsed_seconds:>7.3f}s  {step.detail}"
                )

        sections: Tuple[Tuple[str, List[str], str], ...] = (
            ("Input Errors", self.input_errors, "✗"),
            ("Validation Errors", self.validation_errors, "✗"),
            ("Validation Warnings", self.validation_warnings, "⚠"),
            ("Generation Errors", self.generation_errors, "✗"),
            ("Export Errors", self.export_errors, "✗"),
            ("Skipped Files (already exist)", self.skipped_files, "⊘"),
        )
        for title, items, icon in sections:
            if not items:
                continue
            lines.append(thin)
            lines.append(f"  {title} ({len(items)}):")
            lines.extend(f"    {icon} {item}" for item in items)

        lines.append(rule)
        return "\n".join(lines)


# ---------------------------------------------------------------------------
# Schema loader helpers
# ---------------------------------------------------------------------------


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise SchemaLoadError(f"Schema file {path} is not valid UTF-8: {exc}") from exc
    except OSError as exc:
        raise SchemaLoadError(f"Cannot read schema file {path}: {exc}") from exc


def _load_json_file(path: Path) -> Dict[str, Any]:
    try:
        data: Any = json.loads(_read_text(path))
    except json.JSONDecodeError as exc:
        raise SchemaLoadError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise SchemaLoadError(f"Expected a JSON object at top level of {path}, got {type(data).__name__}.")
    return data


def _load_yaml_file(path: Path) -> Dict[str, Any]:
    try:
        data: Any = yaml.safe_load(_read_text(path))
    except yaml.YAMLError as exc:
        raise SchemaLoadError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise SchemaLoadError(f"Expected a YAML mapping at top level of {path}, got {type(data).__name__}.")
    return data


def _load_mapping(path: Path) -> Dict[str, Any]:
    suffix: str = path.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return _load_yaml_file(path)
    if suffix == ".json":
        return _load_json_file(path)
    logger.info("Unknown extension '%s'; trying JSON then YAML.", suffix)
    try:
        return _load_json_file(path)
    except SchemaLoadError:
        return _load_yaml_file(path)


def load_schema_directory(path: Path) -> Dict[str, Any]:
    """
    One schema per ``*.yaml`` / ``*.yml`` / ``*.json`` file, sorted by
    file name.  ``name`` defaults to the file stem and ``source_path``
    records the file.
    """
    schemas: List[Dict[str, Any]] = []
    for file_path in sorted(p for p in path.iterdir() if p.is_file() and p.suffix.lower() in SCHEMA_SUFFIXES):
        data: Dict[str, Any] = _load_mapping(file_path)
        data.setdefault("name", file_path.stem)
        data.setdefault("source_path", str(file_path))
        schemas.append(data)
    logger.info("Loaded %d schema file(s) from %s", len(schemas), path)
    return {"schemas": schemas}


def load_schema_file(path: Path) -> Dict[str, Any]:
    """
    Load the raw input from a file (JSON or YAML, dispatched on
    extension) or from a directory of schema files.

    Raises:
        SchemaLoadError: missing path, unreadable or malformed content.
    """
    path = Path(path)
    if not path.exists():
        raise SchemaLoadError(f"Schema path not found: {path}")
    if path.is_dir():
        return load_schema_directory(path)
    return _load_mapping(path)


def _schema_entries(raw_schemas: Any) -> List[Dict[str, Any]]:
    if isinstance(raw_schemas, list):
        return [dict(entry) for entry in raw_schemas if isinstance(entry, dict)]
    if isinstance(raw_schemas, dict):
        entries: List[Dict[str, Any]] = []
        for name, entry in raw_schemas.items():
            if not isinstance(entry, dict):
                raise SchemaLoadError(f"Schema '{name}' must be a mapping, got {type(entry).__name__}.")
            entries.append({"name": name, **entry})
        return entries
    raise SchemaLoadError(f"'schemas' must be a list or a mapping, got {type(raw_schemas).__name__}.")


def _config_entry(raw: Dict[str, Any]) -> Tuple[Optional[str], Dict[str, Any]]:
    for key in _CONFIG_KEYS:
        if key in raw and isinstance(raw[key], dict):
            return key, raw[key]
    return None, {}


def parse_raw_schema(raw: Dict[str, Any]) -> Tuple[SchemaCollection, GenerationConfig]:
    """
    Parse a raw mapping into validated models.

    Expected top-level keys:
        - ``schemas``: list of schemas, or mapping of name → schema
        - ``config`` (or ``generation_config`` / ``options``): settings

    Raises:
        SchemaLoadError: missing keys or Pydantic validation failure.
    """
    if not any(key in raw for key in _SCHEMA_KEYS):
        raise SchemaLoadError("Cannot find schemas in input. Expected top-level key: 'schemas'.")

    entries: List[Dict[str, Any]] = _schema_entries(raw["schemas"])
    config_key, config_data = _config_entry(raw)
    if config_key is None:
        logger.info("No generation config found in input; using defaults.")

    try:
        collection = SchemaCollection.model_validate({"schemas": entries})
    except PydanticValidationError as exc:
        raise SchemaLoadError(f"Schema validation failed: {exc}") from exc
    try:
        config = GenerationConfig.model_validate(config_data)
    except PydanticValidationError as exc:
        raise SchemaLoadError(f"Config validation failed: {exc}") from exc

    return collection, config


def apply_config_overrides(raw: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Merge *overrides* (snake_case keys) into the raw config section.

    A camelCase spelling of an overridden key already present in the file
    is dropped so the override wins.
    """
    config_key, config_data = _config_entry(raw)
    merged: Dict[str, Any] = dict(config_data)
    for key, value in overrides.items():
        merged.pop(to_camel(key), None)
        merged[key] = value
    result: Dict[str, Any] = dict(raw)
    result[config_key or "config"] = merged
    return result


# ---------------------------------------------------------------------------
# TypeGenerator: orchestrator
# ---------------------------------------------------------------------------


class TypeGenerator:
    """
    Pipeline orchestrator.

    Usage::

        generator = TypeGenerator()
        report = generator.generate_from_file(Path("schemas.yaml"), Path("./web/src"))
        print(report.summary())

    Reusable: create once, call ``generate()`` many times.
    """

    def __init__(
        self,
        *,
        fail_on_warnings: bool = False,
        dry_run: bool = False,
        write_manifest: bool = False,
    ) -> None:
        self._fail_on_warnings: bool = fail_on_warnings
        self._dry_run: bool = dry_run
        self._write_manifest: bool = write_manifest
        logger.debug(
            "TypeGenerator initialised: fail_on_warnings=%s, dry_run=%s.",
            fail_on_warnings,
            dry_run,
        )

    # -----------------------------------------------------------------
    # Public API
    # -----------------------------------------------------------------

    def generate_from_file(
        self,
        schema_path: Path,
        output_dir: Path,
        *,
        config_overrides: Optional[Dict[str, Any]] = None,
    ) -> GenerationReport:
        """Load → validate → plan → export."""
        report = GenerationReport(output_directory=str(Path(output_dir).resolve()), dry_run=self._dry_run)
        pipeline_start: float = time.perf_counter()
        collection: Optional[SchemaCollection] = None
        config: Optional[GenerationConfig] = None

        with Timer("load_schema") as t_load:
            try:
                raw: Dict[str, Any] = load_schema_file(Path(schema_path))
                if config_overrides:
                    raw = apply_config_overrides(raw, config_overrides)
                collection, config = parse_raw_schema(raw)
            except SchemaLoadError as exc:
                report.input_errors.append(str(exc))
                logger.error("%s", exc)

        report.step_metrics.append(
            GenerationStepMetric(
                step_name="Load Schema",
                success=collection is not None,
                elapsed_seconds=t_load.elapsed,
                detail=(
                    f"{len(collection)} schema(s) from {Path(schema_path).name}"
                    if collection is not None
                    else report.input_errors[-1]
                ),
            )
        )
        if collection is None or config is None:
            return self._finalise_report(report, time.perf_counter() - pipeline_start)

        return self._run_pipeline(collection, config, Path(output_dir), report, pipeline_start)

    def generate(
        self,
        collection: SchemaCollection,
        config: GenerationConfig,
        output_dir: Path,
    ) -> GenerationReport:
        """Validate → plan → export, from in-memory models."""
        report = GenerationReport(output_directory=str(Path(output_dir).resolve()), dry_run=self._dry_run)
        return self._run_pipeline(collection, config, Path(output_dir), report, time.perf_counter())

    def validate(self, collection: SchemaCollection, config: GenerationConfig) -> ValidationResult:
        return validate_full(collection, config)

    # -----------------------------------------------------------------
    # Internal: pipeline
    # -----------------------------------------------------------------

    def _run_pipeline(
        self,
        collection: SchemaCollection,
        config: GenerationConfig,
        output_dir: Path,
        report: GenerationReport,
        pipeline_start: float,
    ) -> GenerationReport:
        report.schema_count = len(collection)
        report.config = config

        if not self._step_validate(collection, config, report):
            return self._finalise_report(report, time.perf_counter() - pipeline_start)

        files: List[GeneratedFile] = self._step_plan(collection, config, report)
        if report.generation_errors:
            return self._finalise_report(report, time.perf_counter() - pipeline_start)

        if not self._dry_run:
            self._step_export(files, config, output_dir, report)

        return self._finalise_report(report, time.perf_counter() - pipeline_start)

    def _step_validate(
        self,
        collection: SchemaCollection,
        config: GenerationConfig,
        report: GenerationReport,
    ) -> bool:
        with Timer("validation") as t:
            result: ValidationResult = validate_full(collection, config)

        report.validation_errors.extend(e.message for e in result.errors)
        report.validation_warnings.extend(w.message for w in result.warnings)

        if result.has_errors:
            detail: str = f"{result.error_count} error(s)"
        elif result.warning_count:
            detail = f"{result.warning_count} warning(s)"
        else:
            detail = "all checks passed"

        passed: bool = result.is_valid and not (self._fail_on_warnings and result.warning_count)
        report.step_metrics.append(
            GenerationStepMetric("Validate Schemas", passed, t.elapsed, detail)
        )
        return passed

    def _step_plan(
        self,
        collection: SchemaCollection,
        config: GenerationConfig,
        report: GenerationReport,
    ) -> List[GeneratedFile]:
        files: List[GeneratedFile] = []
        with Timer("plan_files") as t:
            try:
                files = generate_typescript(collection, config)
            except TypeGenError as exc:
                report.generation_errors.append(str(exc))
                logger.error("%s", exc)

        report.planned_files = files
        report.planned_count = len(files)
        report.step_metrics.append(
            GenerationStepMetric(
                "Plan Files",
                not report.generation_errors,
                t.elapsed,
                f"{len(files)} file(s), ~{sum(f.line_count for f in files):,} lines",
            )
        )
        return files

    def _step_export(
        self,
        files: List[GeneratedFile],
        config: GenerationConfig,
        output_dir: Path,
        report: GenerationReport,
    ) -> None:
        with Timer("export") as t:
            exporter = ProjectExporter(config, output_dir, generate_manifest=self._write_manifest)
            result: ExportResult = exporter.export(files)

        report.total_files = result.manifest.total_files
        report.total_bytes = result.manifest.total_bytes
        report.total_lines = result.manifest.total_lines
        report.export_errors.extend(result.errors)
        report.skipped_files.extend(result.skipped)
        report.manifest = result.manifest
        report.step_metrics.append(
            GenerationStepMetric(
                "Export to Filesystem",
                result.success,
                t.elapsed,
                f"{result.manifest.total_files} written, {len(result.skipped)} skipped",
            )
        )

    def _finalise_report(self, report: GenerationReport, total_elapsed: float) -> GenerationReport:
        report.total_elapsed_seconds = total_elapsed
        report.success = not (
            report.input_errors
            or report.validation_errors
            or report.generation_errors
            or report.export_errors
            or not all(step.success for step in report.step_metrics)
        )
        return report


__all__: List[str] = [
    "SCHEMA_SUFFIXES",
    "SchemaLoadError",
    "GenerationStepMetric",
    "GenerationReport",
    "load_schema_directory",
    "load_schema_file",
    "parse_raw_schema",
    "apply_config_overrides",
    "TypeGenerator",
]

logger.debug("typegen.generator loaded.")
