# File: typegen/cli.py
"""
NexaFlow TypeGen - Command-Line Interface
==========================================

Built with the standard-library ``argparse`` module.

Usage examples::

    # Generate into ./web/src/models
    typegen -s schemas.yaml -o ./web/src

    # A directory with one schema per file, verbose
    typegen -s ./schemas -o ./web/src -v

    # Package layout with .js import suffixes
    typegen -s schemas.yaml -o ./web --layout package --package-name @app/schema --js-extension

    # Interfaces + utility types + legacy rules instead of Zod
    typegen -s schemas.yaml -o ./web/src --no-zod --rules

    # Validate only / plan without writing
    typegen -s schemas.yaml --validate-only
    typegen -s schemas.yaml -o ./web/src --dry-run

Exit codes:
    0 - success
    1 - validation error (including name collisions)
    2 - generation error
    3 - export error
    4 - input/argument error
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, NoReturn, Optional, Sequence

if TYPE_CHECKING:
    from typegen.generator import GenerationReport

# ---------------------------------------------------------------------------
# Logger (configured in _setup_logging)
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("typegen")


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

EXIT_SUCCESS: int = 0
EXIT_VALIDATION_ERROR: int = 1
EXIT_GENERATION_ERROR: int = 2
EXIT_EXPORT_ERROR: int = 3
EXIT_INPUT_ERROR: int = 4


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------


def _setup_logging(verbosity: int) -> None:
    """0 = WARNING, 1 = INFO, 2+ = DEBUG."""
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity >= 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    handler: logging.StreamHandler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s │ %(levelname)-8s │ %(name)s │ %(message)s",
            datefmt="%H:%M:%S",
        )
    )

    root_logger: logging.Logger = logging.getLogger("typegen")
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.propagate = False


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    from typegen import __version__

    parser = argparse.ArgumentParser(
        prog="typegen",
        description=(
            "NexaFlow TypeGen - TypeScript type and Zod schema generator.\n\n"
            "Turns schema definitions (YAML/JSON) into TypeScript interfaces, "
            "enums, Zod validators and i18n metadata."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  %(prog)s -s schemas.yaml -o ./web/src\n"
            "  %(prog)s -s ./schemas -o ./web --layout package\n"
            "  %(prog)s -s schemas.yaml --validate-only\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"NexaFlow TypeGen v{__version__}")

    parser.add_argument(
        "-s", "--schema",
        type=str,
        required=True,
        metavar="PATH",
        help="Schema file (YAML or JSON) or a directory with one schema per file.",
    )
    parser.add_argument(
        "-o", "--output",
        type=str,
        default=None,
        metavar="DIR",
        help="Output root directory. Required unless --validate-only is set.",
    )

    mode_group = parser.add_argument_group("operation modes")
    mode_group.add_argument(
        "--validate-only",
        action="store_true",
        default=False,
        help="Only validate the schemas; write nothing.",
    )
    mode_group.add_argument(
        "--dry-run",
        action="store_true",
        default=False,
        help="Plan every file and list where it would go, without writing.",
    )

    layout_group = parser.add_argument_group("output layout")
    layout_group.add_argument(
        "--layout",
        choices=["flat", "package"],
        default=None,
        help="flat: everything under the models path; package: base files in node_modules/<package>.",
    )
    layout_group.add_argument("--package-name", default=None, metavar="NAME", help="Base package name (package layout).")
    layout_group.add_argument("--models-path", default=None, metavar="PATH", help="User model directory, relative to the output root.")
    layout_group.add_argument(
        "--js-extension",
        action="store_true",
        default=None,
        help="Append '.js' to relative import specifiers.",
    )

    config_group = parser.add_argument_group("configuration overrides")
    config_group.add_argument(
        "--no-zod",
        action="store_true",
        default=False,
        help="Emit Create/Update utility types instead of Zod schemas.",
    )
    config_group.add_argument(
        "--rules",
        action="store_true",
        default=False,
        help="Emit legacy rules/<Entity>.rules.ts files (only with --no-zod).",
    )
    config_group.add_argument("--locale", default=None, metavar="LOCALE", help="Locale used for doc comments.")
    config_group.add_argument("--enum-prefix", default=None, metavar="PREFIX", help="Import prefix for schema enums.")
    config_group.add_argument("--plugin-enum-prefix", default=None, metavar="PREFIX", help="Import prefix for plugin enums.")
    config_group.add_argument("--base-prefix", default=None, metavar="PREFIX", help="Import prefix for base files.")

    behaviour_group = parser.add_argument_group("behaviour flags")
    behaviour_group.add_argument(
        "--fail-on-warnings",
        action="store_true",
        default=False,
        help="Treat validation warnings as errors.",
    )
    behaviour_group.add_argument(
        "--manifest",
        action="store_true",
        default=False,
        help="Write a manifest of written files with SHA-256 checksums.",
    )

    verbosity_group = parser.add_argument_group("verbosity")
    verbosity_group.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-v for INFO, -vv for DEBUG).",
    )
    verbosity_group.add_argument(
        "-q", "--quiet",
        action="store_true",
        default=False,
        help="Suppress all output except errors.",
    )
    return parser


# ---------------------------------------------------------------------------
# Config override builder
# ---------------------------------------------------------------------------


def _build_config_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    simple = {
        "layout": "layout",
        "package_name": "package_name",
        "models_path": "models_path",
        "locale": "locale",
        "enum_prefix": "enum_import_prefix",
        "plugin_enum_prefix": "plugin_enum_import_prefix",
        "base_prefix": "base_import_prefix",
    }
    for arg_name, config_key in simple.items():
        value = getattr(args, arg_name)
        if value is not None:
            overrides[config_key] = value

    if args.js_extension:
        overrides["use_js_extension"] = True
    if args.no_zod:
        overrides["generate_zod_schemas"] = False
    if args.rules:
        overrides["generate_rules"] = True
    return overrides


# ---------------------------------------------------------------------------
# Validate-only mode
# ---------------------------------------------------------------------------


def _run_validate_only(schema_path: Path, args: argparse.Namespace) -> int:
    from typegen.generator import SchemaLoadError, apply_config_overrides, load_schema_file, parse_raw_schema
    from typegen.utils import Timer
    from typegen.validators import validate_full

    logger.info("Running validation-only mode for: %s", schema_path)
    try:
        raw = apply_config_overrides(load_schema_file(schema_path), _build_config_overrides(args))
        collection, config = parse_raw_schema(raw)
    except SchemaLoadError as exc:
        logger.error("Failed to load schemas: %s", exc)
        return EXIT_INPUT_ERROR

    with Timer("validation") as t:
        result = validate_full(collection, config)

    rule: str = "=" * 50
    print(f"\n{rule}")
    print("  Schema Validation Report")
    print(rule)
    print(f"  Source:   {schema_path.name}")
    print(f"  Schemas:  {len(collection)}")
    print(f"  Time:     {t.elapsed:.3f}s")
    print(f"  Valid:    {'Yes' if result.is_valid else 'No'}")
    if result.errors:
        print(f"\n  Errors ({result.error_count}):")
        for err in result.errors:
            print(f"    ✗ {err}")
    if result.warnings:
        print(f"\n  Warnings ({result.warning_count}):")
        for warn in result.warnings:
            print(f"    ⚠ {warn}")
    if result.is_valid and not result.warnings:
        print("\n  ✅ All validations passed!")
    print(f"{rule}\n")

    if not result.is_valid or (args.fail_on_warnings and result.warning_count):
        return EXIT_VALIDATION_ERROR
    return EXIT_SUCCESS


# ---------------------------------------------------------------------------
# Full generation mode
# ---------------------------------------------------------------------------


def _print_plan(report: "GenerationReport", output_dir: Path) -> None:
    from typegen.exporters import resolve_output_path

    config = report.config
    if config is None or not report.planned_files:
        return
    print("\nPlanned files:")
    for generated in report.planned_files:
        flag: str = "" if generated.overwrite else "  (create once)"
        print(f"  {output_dir / resolve_output_path(generated, config)}{flag}")


def _run_generation(schema_path: Path, output_dir: Path, args: argparse.Namespace) -> int:
    from typegen.generator import GenerationReport, TypeGenerator

    generator = TypeGenerator(
        fail_on_warnings=args.fail_on_warnings,
        dry_run=args.dry_run,
        write_manifest=args.manifest,
    )
    if args.dry_run:
        logger.info("Dry-run mode: files will not be written to disk.")

    overrides: Dict[str, Any] = _build_config_overrides(args)
    report: GenerationReport = generator.generate_from_file(
        schema_path,
        output_dir,
        config_overrides=overrides or None,
    )

    print(report.summary())
    if args.dry_run:
        _print_plan(report, output_dir)

    if report.success:
        return EXIT_SUCCESS
    if report.validation_failed:
        return EXIT_VALIDATION_ERROR
    if report.export_errors:
        return EXIT_EXPORT_ERROR
    if report.input_errors:
        return EXIT_INPUT_ERROR
    return EXIT_GENERATION_ERROR


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------


def cli_main(argv: Optional[Sequence[str]] = None) -> NoReturn:
    """Parse *argv* (defaults to ``sys.argv[1:]``), run, and exit."""
    parser = _build_parser()
    args: argparse.Namespace = parser.parse_args(argv)

    verbosity: int = -1 if args.quiet else args.verbose
    _setup_logging(verbosity)
    if args.quiet:
        logging.getLogger("typegen").setLevel(logging.ERROR)

    schema_path: Path = Path(args.schema).resolve()
    if not schema_path.exists():
        logger.error("Schema path not found: %s", schema_path)
        sys.exit(EXIT_INPUT_ERROR)

    if args.validate_only:
        sys.exit(_run_validate_only(schema_path, args))

    if args.output is None:
        logger.error("Output directory is required for generation. Use -o/--output or --validate-only.")
        parser.print_usage(sys.stderr)
        sys.exit(EXIT_INPUT_ERROR)

    output_dir: Path = Path(args.output).resolve()
    logger.info("Schema:  %s", schema_path)
    logger.info("Output:  %s", output_dir)

    exit_code: int = _run_generation(schema_path, output_dir, args)
    if exit_code == EXIT_SUCCESS:
        logger.info("Generation completed successfully.")
    else:
        logger.error("Generation failed with exit code %d.", exit_code)
    sys.exit(exit_code)


def main() -> None:
    """Console-script entry point."""
    cli_main()


__all__: List[str] = [
    "cli_main",
    "main",
    "EXIT_SUCCESS",
    "EXIT_VALIDATION_ERROR",
    "EXIT_GENERATION_ERROR",
    "EXIT_EXPORT_ERROR",
    "EXIT_INPUT_ERROR",
]

logger.debug("typegen.cli loaded.")
