# File: typegen/builder.py
"""
NexaFlow TypeGen - TypeScript Source Builder
=============================================
A small document model for generated TypeScript files::

    SourceFile
      ├── header           (file banner comment)
      ├── imports          (ImportDecl …)
      └── blocks           (Declaration | Banner | LineComment | ExportDecl | Group)

Renderers in ``typegen.templates`` only decide *what* goes into a file;
spacing and punctuation are decided here, once, in ``SourceFile.render``:
imports are one per line, top-level blocks are separated by one blank
line, and the file ends with exactly one newline.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple, Union

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("typegen.builder")

BANNER_RULE: str = "// " + "=" * 76
INDENT: str = "  "


# ---------------------------------------------------------------------------
# Comments
# ---------------------------------------------------------------------------


def doc_comment(text: Union[str, Sequence[str]], indent: str = "", block: bool = False) -> str:
    """
    JSDoc comment.

    A single line renders inline (``/** text */``) unless *block* is set;
    several lines always render as a block.
    """
    lines: List[str] = [text] if isinstance(text, str) else list(text)
    if len(lines) == 1 and not block:
        return f"{indent}/** {lines[0]} */"
    body: str = "\n".join(f"{indent} * {line}".rstrip() for line in lines)
    return f"{indent}/**\n{body}\n{indent} */"


# ---------------------------------------------------------------------------
# Imports / exports
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ImportDecl:
    names: Tuple[str, ...]
    module: str
    type_only: bool = False
    multiline: bool = False

    def render(self) -> str:
        keyword: str = "import type" if self.type_only else "import"
        return f"{keyword} {_braced(self.names, self.multiline)} from '{self.module}';"


@dataclass(frozen=True, slots=True)
class ExportDecl:
    """``export { … } from '…';`` (``module=None`` re-exports local names)."""

    names: Tuple[str, ...]
    module: Optional[str] = None
    type_only: bool = False
    multiline: bool = False

    def render(self) -> str:
        keyword: str = "export type" if self.type_only else "export"
        source: str = f" from '{self.module}'" if self.module is not None else ""
        return f"{keyword} {_braced(self.names, self.multiline)}{source};"


def _braced(names: Sequence[str], multiline: bool) -> str:
    if multiline:
        inner: str = "".join(f"{INDENT}{name},\n" for name in names)
        return "{\n" + inner + "}"
    return "{ " + ", ".join(names) + " }"


# ---------------------------------------------------------------------------
# Blocks
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Declaration:
    """A top-level statement with an optional JSDoc comment."""

    body: str
    doc: Optional[Union[str, Tuple[str, ...]]] = None
    block_doc: bool = False

    def render(self) -> str:
        if self.doc is None:
            return self.body
        return f"{doc_comment(self.doc, block=self.block_doc)}\n{self.body}"


@dataclass(frozen=True, slots=True)
class Banner:
    """Section separator."""

    title: str

    def render(self) -> str:
        return f"{BANNER_RULE}\n// {self.title}\n{BANNER_RULE}"


@dataclass(frozen=True, slots=True)
class LineComment:
    text: str

    def render(self) -> str:
        return f"// {self.text}"


@dataclass(frozen=True)
class Group:
    """Blocks rendered back to back with no blank line between them."""

    items: Tuple["Block", ...]

    def render(self) -> str:
        return "\n".join(item.render() for item in self.items)


Block = Union[Declaration, Banner, LineComment, ExportDecl, ImportDecl, Group]


def function_body(lines: Sequence[str]) -> str:
    return "".join(f"{INDENT}{line}\n" if line else "\n" for line in lines)


# ---------------------------------------------------------------------------
# File
# ---------------------------------------------------------------------------


@dataclass
class SourceFile:
    """One generated TypeScript module."""

    header: Optional[str] = None
    imports: List[ImportDecl] = field(default_factory=list)
    blocks: List[Block] = field(default_factory=list)

    def add_import(
        self,
        names: Sequence[str],
        module: str,
        *,
        type_only: bool = False,
        multiline: bool = False,
    ) -> "SourceFile":
        self.imports.append(ImportDecl(tuple(names), module, type_only, multiline))
        return self

    def add(self, *blocks: Block) -> "SourceFile":
        self.blocks.extend(blocks)
        return self

    def declare(
        self,
        body: str,
        doc: Optional[Union[str, Sequence[str]]] = None,
        *,
        block_doc: bool = False,
    ) -> "SourceFile":
        doc_value = doc if doc is None or isinstance(doc, str) else tuple(doc)
        self.blocks.append(Declaration(body, doc_value, block_doc))
        return self

    def render(self) -> str:
        sections: List[str] = []
        if self.header:
            sections.append(self.header.rstrip("\n"))
        if self.imports:
            sections.append("\n".join(decl.render() for decl in self.imports))
        sections.extend(block.render() for block in self.blocks)
        return "\n\n".join(sections) + "\n"


__all__: List[str] = [
    "BANNER_RULE",
    "INDENT",
    "doc_comment",
    "ImportDecl",
    "ExportDecl",
    "Declaration",
    "Banner",
    "LineComment",
    "Group",
    "Block",
    "function_body",
    "SourceFile",
]

logger.debug("typegen.builder loaded.")
