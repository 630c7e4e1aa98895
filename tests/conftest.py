"""
tests/conftest.py
Shared fixtures for the typegen test suite.

All fixtures are session-scoped or function-scoped as appropriate.
No external mocking libraries are used; real file I/O is performed
inside temporary directories managed by pytest's tmp_path fixtures.
"""

from __future__ import annotations

import copy
import pathlib
from typing import Any, Dict, List, Tuple

import pytest
import yaml

from typegen.generator import parse_raw_schema
from typegen.models import GenerationConfig, SchemaCollection


# ---------------------------------------------------------------------------
# Path helpers
# ---------------------------------------------------------------------------

ROOT_DIR: pathlib.Path = pathlib.Path(__file__).resolve().parent.parent
SCHEMA_EXAMPLE_PATH: pathlib.Path = ROOT_DIR / "schema_example.yaml"


# ---------------------------------------------------------------------------
# Raw schema data fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def raw_schema_dict() -> Dict[str, Any]:
    """Load the reference schema_example.yaml once per session and return as dict."""
    assert SCHEMA_EXAMPLE_PATH.exists(), (
        f"Reference schema not found at {SCHEMA_EXAMPLE_PATH}. "
        "Make sure schema_example.yaml is in the project root."
    )
    with open(SCHEMA_EXAMPLE_PATH, "r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh)
    assert isinstance(data, dict), "Top-level YAML must be a mapping."
    return data


@pytest.fixture()
def schema_dict(raw_schema_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Return a deep copy so each test can mutate freely."""
    return copy.deepcopy(raw_schema_dict)


@pytest.fixture()
def schema_yaml_path(schema_dict: Dict[str, Any], tmp_path: pathlib.Path) -> pathlib.Path:
    """Write the schema dict to a temporary YAML file and return its path."""
    path = tmp_path / "schema.yaml"
    with open(path, "w", encoding="utf-8") as fh:
        yaml.dump(schema_dict, fh, default_flow_style=False, allow_unicode=True)
    return path


@pytest.fixture()
def example(schema_dict: Dict[str, Any]) -> Tuple[SchemaCollection, GenerationConfig]:
    """The reference schema parsed into models."""
    return parse_raw_schema(schema_dict)


@pytest.fixture()
def example_collection(example: Tuple[SchemaCollection, GenerationConfig]) -> SchemaCollection:
    return example[0]


@pytest.fixture()
def example_config(example: Tuple[SchemaCollection, GenerationConfig]) -> GenerationConfig:
    return example[1]


# ---------------------------------------------------------------------------
# Minimal / edge-case schema fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def minimal_schema_dict() -> Dict[str, Any]:
    """Smallest useful input: one entity with one string property."""
    return {
        "schemas": [
            {
                "name": "Item",
                "properties": {
                    "title": {"type": "String", "max_length": 100},
                },
            }
        ],
    }


@pytest.fixture()
def minimal_schema_yaml_path(
    minimal_schema_dict: Dict[str, Any], tmp_path: pathlib.Path
) -> pathlib.Path:
    """Write minimal schema to a temp YAML and return the path."""
    path = tmp_path / "minimal_schema.yaml"
    with open(path, "w", encoding="utf-8") as fh:
        yaml.dump(minimal_schema_dict, fh, default_flow_style=False)
    return path


@pytest.fixture()
def duplicate_user_schemas() -> List[Dict[str, Any]]:
    """Two schemas named ``User`` loaded from different files."""
    return [
        {
            "name": "User",
            "source_path": "schemas/User.yaml",
            "properties": {"email": {"type": "Email"}},
        },
        {
            "name": "User",
            "source_path": "schemas/legacy/User.yaml",
            "properties": {"name": {"type": "String"}},
        },
    ]


@pytest.fixture()
def duplicate_schema_yaml_path(
    duplicate_user_schemas: List[Dict[str, Any]], tmp_path: pathlib.Path
) -> pathlib.Path:
    path = tmp_path / "duplicate_schema.yaml"
    with open(path, "w", encoding="utf-8") as fh:
        yaml.dump({"schemas": duplicate_user_schemas}, fh, default_flow_style=False)
    return path


@pytest.fixture()
def address_type() -> Dict[str, Any]:
    """Compound plugin type with three physical fields and one accessor."""
    return {
        "compound": True,
        "expand": [
            {"suffix": "postalCode", "length": 8, "rules": {"format": "postal_code"}},
            {"suffix": "city", "length": 100, "label": {"en": "City", "ja": "市区町村"}},
            {"suffix": "line2", "nullable": True, "length": 200},
        ],
        "accessors": ["full"],
    }


# ---------------------------------------------------------------------------
# Output directory fixture
# ---------------------------------------------------------------------------


@pytest.fixture()
def output_dir(tmp_path: pathlib.Path) -> pathlib.Path:
    """Provide a clean output directory inside tmp_path."""
    out = tmp_path / "generated_output"
    out.mkdir(parents=True, exist_ok=True)
    return out
