# File: typegen/utils.py
"""
NexaFlow TypeGen - Utility Functions & Helpers
===============================================
String transformation, TypeScript literal formatting, file I/O, and
timing utilities used throughout the generation pipeline.

Performance strategy:
- Identifier conversion functions are decorated with
  ``@lru_cache(maxsize=None)``; the same property and enum value names are
  converted many times per run (interface, zod, i18n and index passes).
- File I/O helpers use atomic rename for safety.
"""

from __future__ import annotations

import functools
import hashlib
import json
import logging
import os
import re
import tempfile
import time
from pathlib import Path
from typing import Any, List, Optional, Sequence, Union

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("typegen.utils")

# ---------------------------------------------------------------------------
# Pre-compiled regex patterns (compiled once at module load)
# ---------------------------------------------------------------------------

_UPPER_RE: re.Pattern[str] = re.compile(r"([A-Z])")
_CAMEL_BOUNDARY_RE: re.Pattern[str] = re.compile(r"([a-z])([A-Z])")
_WORD_SEPARATOR_RE: re.Pattern[str] = re.compile(r"[-_\s]+")
_NON_ALPHANUM_RE: re.Pattern[str] = re.compile(r"[^a-zA-Z0-9]")
_REGEX_SPECIAL_RE: re.Pattern[str] = re.compile(r"([.*+?^${}()|\[\]\\/])")


# ---------------------------------------------------------------------------
# Cached string transformation functions
# ---------------------------------------------------------------------------


@functools.lru_cache(maxsize=None)
def to_snake_case(name: str) -> str:
    """
    Convert a camelCase identifier to snake_case.

    Only uppercase letters introduce a boundary; runs of capitals are split
    letter by letter, and existing underscores are preserved.

    Examples:
        >>> to_snake_case("postalCode")
        'postal_code'
        >>> to_snake_case("first_name")
        'first_name'
        >>> to_snake_case("ID")
        'i_d'
    """
    if not name:
        return ""
    s: str = _UPPER_RE.sub(r"_\1", name)
    if s.startswith("_"):
        s = s[1:]
    return s.lower()


def _capitalize_words(words: Sequence[str]) -> str:
    return "".join(w[:1].upper() + w[1:].lower() for w in words)


@functools.lru_cache(maxsize=None)
def to_pascal_case(name: str) -> str:
    """
    Convert a property name to a PascalCase type-name fragment.

    camelCase boundaries are split before capitalising, so both
    ``plan_type`` and ``planType`` become ``PlanType``.
    """
    if not name:
        return ""
    normalized: str = _CAMEL_BOUNDARY_RE.sub(r"\1_\2", name)
    return _capitalize_words(_WORD_SEPARATOR_RE.split(normalized))


@functools.lru_cache(maxsize=None)
def to_member_name(value: str) -> str:
    """
    Convert a raw enum value to a legal TypeScript enum member name.

    Splits on ``-``, ``_`` and whitespace only (camelCase is NOT split, so
    ``inProgress`` becomes ``Inprogress``), strips non-alphanumerics, and
    prefixes ``_`` when the result is empty or starts with a digit.

    Examples:
        >>> to_member_name("in_progress")
        'InProgress'
        >>> to_member_name("1st-place")
        '_1stPlace'
    """
    result: str = _NON_ALPHANUM_RE.sub(
        "", _capitalize_words(_WORD_SEPARATOR_RE.split(value))
    )
    if not result or result[0].isdigit():
        result = "_" + result
    return result


@functools.lru_cache(maxsize=None)
def lower_first(name: str) -> str:
    """``TaskStatus`` → ``taskStatus``."""
    return name[:1].lower() + name[1:]


# ---------------------------------------------------------------------------
# TypeScript literal formatting
# ---------------------------------------------------------------------------


def escape_string(value: str) -> str:
    """Escape a value for use inside a single-quoted TypeScript string."""
    return value.replace("\\", "\\\\").replace("'", "\\'")


def quote(value: str) -> str:
    """Wrap *value* in single quotes (escaped)."""
    return f"'{escape_string(value)}'"


def escape_regex(value: str) -> str:
    """Escape regex metacharacters for embedding in a ``/.../`` literal."""
    return _REGEX_SPECIAL_RE.sub(r"\\\1", value)


def js_json(value: Any, indent: Optional[int] = None) -> str:
    """
    Serialise *value* the way ``JSON.stringify`` does.

    Non-ASCII characters are kept verbatim.  With ``indent=None`` the output
    is compact (no spaces after separators).
    """
    if indent is None:
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    return json.dumps(value, ensure_ascii=False, indent=indent)


def format_number(value: Union[int, float]) -> str:
    """Render a number as JavaScript would (``5.0`` → ``5``)."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


# ---------------------------------------------------------------------------
# File I/O helpers
# ---------------------------------------------------------------------------


def ensure_directory(path: Path) -> None:
    """Create directory (and parents) if it doesn't exist."""
    path.mkdir(parents=True, exist_ok=True)
    logger.debug("Ensured directory exists: %s", path)


def write_file(path: Path, content: str, atomic: bool = True) -> int:
    """
    Write *content* to *path*.

    When *atomic* is True, writes to a temporary file in the same directory
    first then renames over the target.

    Returns the number of bytes written.
    """
    ensure_directory(path.parent)

    encoded: bytes = content.encode("utf-8")
    byte_count: int = len(encoded)

    if atomic:
        fd: int
        tmp_path: str
        fd, tmp_path = tempfile.mkstemp(
            dir=str(path.parent),
            prefix=f".{path.name}.",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(encoded)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_path, str(path))
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise
    else:
        path.write_bytes(encoded)

    logger.debug("Wrote %d bytes to %s", byte_count, path)
    return byte_count


# ---------------------------------------------------------------------------
# Checksum & metrics
# ---------------------------------------------------------------------------


def sha256_hex(content: str) -> str:
    """Return SHA-256 hex digest of a string. O(n)."""
    return hashlib.sha256(content.encode("utf-8")).hexdigest()


def count_lines(content: str) -> int:
    """Count the number of lines in a string. O(n)."""
    if not content:
        return 0
    return content.count("\n") + (1 if not content.endswith("\n") else 0)


# ---------------------------------------------------------------------------
# Timer context manager
# ---------------------------------------------------------------------------


class Timer:
    """
    Simple context-manager timer for profiling pipeline steps.

    Usage:
        with Timer("plan files") as t:
            ...
        print(t.elapsed)
    """

    __slots__ = ("label", "start_time", "end_time", "elapsed")

    def __init__(self, label: str = "operation") -> None:
        self.label: str = label
        self.start_time: float = 0.0
        self.end_time: float = 0.0
        self.elapsed: float = 0.0

    def __enter__(self) -> "Timer":
        self.start_time = time.perf_counter()
        return self

    def __exit__(
        self,
        exc_type: Optional[type],
        exc_val: Optional[BaseException],
        exc_tb: Optional[object],
    ) -> None:
        self.end_time = time.perf_counter()
        self.elapsed = self.end_time - self.start_time
        logger.info("Timer [%s]: %.4f seconds", self.label, self.elapsed)

    def __repr__(self) -> str:
        return f"<Timer {self.label}: {self.elapsed:.4f}s>"


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "to_snake_case",
    "to_pascal_case",
    "to_member_name",
    "lower_first",
    "escape_string",
    "quote",
    "escape_regex",
    "js_json",
    "format_number",
    "ensure_directory",
    "write_file",
    "sha256_hex",
    "count_lines",
    "Timer",
]

logger.debug("typegen.utils loaded: %d public symbols.", len(__all__))
