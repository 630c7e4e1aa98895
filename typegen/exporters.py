# File: typegen/exporters.py
"""
NexaFlow TypeGen - Project Exporter (File-System Writer)
=========================================================

Responsible for:
    1. Mapping each planned file's logical path + category to a physical
       location for the configured layout.
    2. Writing files atomically (write-to-temp then rename).
    3. Never touching an existing user-owned file (``overwrite=False``).
    4. Writing ``package.json`` for the generated base package (package
       layout only).
    5. Producing an export manifest with checksums.

Layouts::

    flat     <models_path>/enum/<E>.ts
             <models_path>/enum/plugin/<E>.ts
             <models_path>/<logical path>

    package  node_modules/<package>/enum/<E>.ts         (enums, plugin enums)
             node_modules/<package>/schemas/<Entity>.ts (base files)
             node_modules/<package>/schemas/common.ts, i18n.ts
             <models_path>/<logical path>               (everything else)

Each individual write is atomic; a failure mid-batch leaves the files
already written intact and is reported in ``ExportResult.errors``.
"""

from __future__ import annotations

import json
import logging
import posixpath
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Sequence, Tuple

from typegen.models import FileCategory, GeneratedFile, GenerationConfig, OutputLayout
from typegen.utils import Timer, count_lines, sha256_hex, write_file

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("typegen.exporters")

MANIFEST_FILE_NAME: str = ".typegen-manifest.json"
_SHARED_SUPPORT_FILES = frozenset({"common.ts", "i18n.ts"})


# ---------------------------------------------------------------------------
# Data classes for export results
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class FileRecord:
    """Immutable record of a single written file."""

    relative_path: str
    absolute_path: str
    size_bytes: int
    line_count: int
    sha256: str


@dataclass(slots=True)
class ExportManifest:
    generator_version: str = ""
    export_timestamp: str = ""
    output_directory: str = ""
    layout: str = ""
    total_files: int = 0
    total_bytes: int = 0
    total_lines: int = 0
    files: List[FileRecord] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "generator_version": self.generator_version,
            "export_timestamp": self.export_timestamp,
            "output_directory": self.output_directory,
            "layout": self.layout,
            "total_files": self.total_files,
            "total_bytes": self.total_bytes,
            "total_lines": self.total_lines,
            "files": [
                {
                    "relative_path": f.relative_path,
                    "size_bytes": f.size_bytes,
                    "line_count": f.line_count,
                    "sha256": f.sha256,
                }
                for f in self.files
            ],
            "skipped": list(self.skipped),
        }

    def to_json(self, indent_size: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent_size, ensure_ascii=False)


@dataclass(frozen=True, slots=True)
class ExportResult:
    """Outcome of ``ProjectExporter.export()``."""

    success: bool
    manifest: ExportManifest
    errors: Tuple[str, ...]
    warnings: Tuple[str, ...]
    skipped: Tuple[str, ...]
    elapsed_seconds: float


# ---------------------------------------------------------------------------
# Routing
# ---------------------------------------------------------------------------


def package_root(config: GenerationConfig) -> str:
    return posixpath.join("node_modules", config.package_name)


def resolve_output_path(generated: GeneratedFile, config: GenerationConfig) -> str:
    """Physical path of *generated*, relative to the output directory."""
    category: str = generated.category
    file_name: str = posixpath.basename(generated.path)
    models: str = config.models_path

    if config.layout == OutputLayout.PACKAGE.value:
        pkg: str = package_root(config)
        if category in (FileCategory.ENUM.value, FileCategory.PLUGIN_ENUM.value):
            return posixpath.join(pkg, "enum", file_name)
        if category == FileCategory.BASE.value:
            return posixpath.join(pkg, "schemas", file_name)
        if generated.overwrite and generated.path in _SHARED_SUPPORT_FILES:
            return posixpath.join(pkg, "schemas", file_name)
        return posixpath.join(models, generated.path)

    if category == FileCategory.ENUM.value:
        return posixpath.join(models, "enum", file_name)
    if category == FileCategory.PLUGIN_ENUM.value:
        return posixpath.join(models, "enum", "plugin", file_name)
    return posixpath.join(models, generated.path)


def render_package_json(config: GenerationConfig) -> str:
    """``package.json`` exposing ``./enum/*`` and ``./schemas/*`` subpaths."""
    document: Dict[str, Any] = {
        "name": config.package_name,
        "version": "0.0.0",
        "private": True,
        "type": "module",
        "exports": {
            "./enum/*": {"types": "./enum/*.ts", "default": "./enum/*.ts"},
            "./schemas/*": {"types": "./schemas/*.ts", "default": "./schemas/*.ts"},
        },
    }
    return json.dumps(document, indent=2, ensure_ascii=False) + "\n"


def _needs_package_json(files: Sequence[GeneratedFile]) -> bool:
    routed = {FileCategory.ENUM.value, FileCategory.PLUGIN_ENUM.value, FileCategory.BASE.value}
    return any(f.category in routed for f in files)


# ---------------------------------------------------------------------------
# ProjectExporter class
# ---------------------------------------------------------------------------


class ProjectExporter:
    """
    Writes a planned file list to disk.

    Usage::

        exporter = ProjectExporter(config, output_dir=Path("./web/src"))
        result = exporter.export(generate_typescript(collection, config))

    Not thread-safe; use one exporter per output directory.
    """

    def __init__(
        self,
        config: GenerationConfig,
        output_dir: Path,
        *,
        atomic_writes: bool = True,
        generate_manifest: bool = False,
    ) -> None:
        self._config: GenerationConfig = config
        self._output_dir: Path = Path(output_dir).resolve()
        self._atomic_writes: bool = atomic_writes
        self._generate_manifest: bool = generate_manifest

        self._errors: List[str] = []
        self._warnings: List[str] = []
        self._skipped: List[str] = []
        self._file_records: List[FileRecord] = []

        logger.debug(
            "ProjectExporter initialised: output_dir=%s, layout=%s, atomic=%s.",
            self._output_dir,
            config.layout,
            atomic_writes,
        )

    @property
    def output_dir(self) -> Path:
        return self._output_dir

    # -----------------------------------------------------------------
    # Public API
    # -----------------------------------------------------------------

    def plan_paths(self, files: Sequence[GeneratedFile]) -> List[Tuple[GeneratedFile, str]]:
        """Physical relative path for each file, in plan order."""
        return [(f, resolve_output_path(f, self._config)) for f in files]

    def export(self, files: Sequence[GeneratedFile]) -> ExportResult:
        with Timer("export") as timer:
            for generated, rel_path in self.plan_paths(files):
                self._export_one(generated, rel_path)

            if self._config.layout == OutputLayout.PACKAGE.value and _needs_package_json(files):
                self._write_support_file(
                    posixpath.join(package_root(self._config), "package.json"),
                    render_package_json(self._config),
                )

            if self._generate_manifest:
                self._write_manifest_file()

        manifest: ExportManifest = self._build_manifest()
        success: bool = not self._errors
        if success:
            logger.info(
                "Export completed: %d written, %d skipped, %.3fs.",
                manifest.total_files,
                len(self._skipped),
                timer.elapsed,
            )
        else:
            logger.error("Export completed with %d error(s).", len(self._errors))

        return ExportResult(
            success=success,
            manifest=manifest,
            errors=tuple(self._errors),
            warnings=tuple(self._warnings),
            skipped=tuple(self._skipped),
            elapsed_seconds=timer.elapsed,
        )

    # -----------------------------------------------------------------
    # Internal: file writing
    # -----------------------------------------------------------------

    def _export_one(self, generated: GeneratedFile, rel_path: str) -> None:
        full_path: Path = self._output_dir / rel_path
        if not generated.overwrite and full_path.exists():
            logger.info("Skipping existing user file: %s", rel_path)
            self._skipped.append(rel_path)
            return
        self._write_support_file(rel_path, generated.content)

    def _write_support_file(self, rel_path: str, content: str) -> None:
        try:
            self._file_records.append(
                self._write_single_file(self._output_dir / rel_path, content, rel_path)
            )
        except OSError as exc:
            error_msg: str = f"Failed to write {rel_path}: {type(exc).__name__}: {exc}"
            self._errors.append(error_msg)
            logger.error(error_msg)

    def _write_single_file(self, full_path: Path, content: str, rel_path: str) -> FileRecord:
        size_bytes: int = write_file(full_path, content, atomic=self._atomic_writes)
        line_count: int = count_lines(content)
        logger.debug("Wrote file: %s (%d bytes, %d lines).", rel_path, size_bytes, line_count)
        return FileRecord(
            relative_path=rel_path,
            absolute_path=str(full_path),
            size_bytes=size_bytes,
            line_count=line_count,
            sha256=sha256_hex(content),
        )

    # -----------------------------------------------------------------
    # Internal: manifest
    # -----------------------------------------------------------------

    def _build_manifest(self) -> ExportManifest:
        import typegen

        return ExportManifest(
            generator_version=typegen.__version__,
            export_timestamp=time.strftime("%Y-%m-%dT%H:%M:%S%z"),
            output_directory=str(self._output_dir),
            layout=str(self._config.layout),
            total_files=len(self._file_records),
            total_bytes=sum(r.size_bytes for r in self._file_records),
            total_lines=sum(r.line_count for r in self._file_records),
            files=list(self._file_records),
            skipped=list(self._skipped),
        )

    def _write_manifest_file(self) -> None:
        try:
            record: FileRecord = self._write_single_file(
                self._output_dir / MANIFEST_FILE_NAME,
                self._build_manifest().to_json(),
                MANIFEST_FILE_NAME,
            )
        except OSError as exc:
            self._warnings.append(f"Could not write manifest: {exc}")
            logger.warning("Failed to write manifest: %s", exc)
            return
        self._file_records.append(record)


__all__: List[str] = [
    "MANIFEST_FILE_NAME",
    "FileRecord",
    "ExportManifest",
    "ExportResult",
    "package_root",
    "resolve_output_path",
    "render_package_json",
    "ProjectExporter",
]

logger.debug("typegen.exporters loaded.")
