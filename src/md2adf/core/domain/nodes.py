"""
ADF Nodes - Immutable tree of Atlassian Document Format nodes.

Nodes are built once by the converter and never mutated. Each node
knows how to serialize itself to the dict shape Jira expects via
``to_dict()``.

Reference: https://developer.atlassian.com/cloud/jira/platform/apis/document/structure/
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar, Optional, Union


ADF_VERSION = 1


# -------------------------------------------------------------------------
# Marks
# -------------------------------------------------------------------------

class Mark(ABC):
    """Formatting annotation attached to a text run."""

    type: ClassVar[str] = ""

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type}


@dataclass(frozen=True)
class Strong(Mark):
    type: ClassVar[str] = "strong"


@dataclass(frozen=True)
class Emphasis(Mark):
    type: ClassVar[str] = "em"


@dataclass(frozen=True)
class Code(Mark):
    type: ClassVar[str] = "code"


@dataclass(frozen=True)
class Link(Mark):
    type: ClassVar[str] = "link"

    href: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "attrs": {"href": self.href}}


# -------------------------------------------------------------------------
# Base
# -------------------------------------------------------------------------

class Node(ABC):
    """Base class for every ADF node."""

    type: ClassVar[str] = ""

    @abstractmethod
    def to_dict(self) -> dict[str, Any]:
        """Serialize to the ADF wire shape."""


def _serialize(nodes: tuple) -> list[dict[str, Any]]:
    return [node.to_dict() for node in nodes]


# -------------------------------------------------------------------------
# Inline nodes
# -------------------------------------------------------------------------

@dataclass(frozen=True)
class Text(Node):
    """A run of text, optionally carrying marks."""

    type: ClassVar[str] = "text"

    text: str = ""
    marks: tuple[Mark, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        node: dict[str, Any] = {"type": self.type, "text": self.text}
        if self.marks:
            node["marks"] = [mark.to_dict() for mark in self.marks]
        return node


@dataclass(frozen=True)
class Mention(Node):
    """A reference to a user account."""

    type: ClassVar[str] = "mention"

    id: str = ""
    text: str = ""
    access_level: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "attrs": {
                "id": self.id,
                "text": self.text,
                "accessLevel": self.access_level,
            },
        }


@dataclass(frozen=True)
class HardBreak(Node):
    type: ClassVar[str] = "hardBreak"

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type}


Inline = Union[Text, Mention, HardBreak]


# -------------------------------------------------------------------------
# Block nodes
# -------------------------------------------------------------------------

@dataclass(frozen=True)
class Paragraph(Node):
    type: ClassVar[str] = "paragraph"

    content: tuple[Inline, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "content": _serialize(self.content)}


@dataclass(frozen=True)
class Heading(Node):
    type: ClassVar[str] = "heading"

    level: int = 1
    content: tuple[Inline, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "attrs": {"level": self.level},
            "content": _serialize(self.content),
        }


@dataclass(frozen=True)
class CodeBlock(Node):
    """Fenced code. The body is kept verbatim as a single text child."""

    type: ClassVar[str] = "codeBlock"

    text: str = ""
    language: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        node: dict[str, Any] = {"type": self.type}
        if self.language:
            node["attrs"] = {"language": self.language}
        node["content"] = [{"type": "text", "text": self.text}]
        return node


@dataclass(frozen=True)
class Rule(Node):
    type: ClassVar[str] = "rule"

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type}


@dataclass(frozen=True)
class Blockquote(Node):
    type: ClassVar[str] = "blockquote"

    content: tuple["Block", ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "content": _serialize(self.content)}


@dataclass(frozen=True)
class ListItem(Node):
    type: ClassVar[str] = "listItem"

    content: tuple["Block", ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "content": _serialize(self.content)}


@dataclass(frozen=True)
class BulletList(Node):
    type: ClassVar[str] = "bulletList"

    items: tuple[ListItem, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "content": _serialize(self.items)}


@dataclass(frozen=True)
class OrderedList(Node):
    type: ClassVar[str] = "orderedList"

    items: tuple[ListItem, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "content": _serialize(self.items)}


@dataclass(frozen=True)
class TableCell(Node):
    """A table cell; header cells serialize as ``tableHeader``."""

    content: tuple["Block", ...] = ()
    header: bool = False

    @property
    def type(self) -> str:  # type: ignore[override]
        return "tableHeader" if self.header else "tableCell"

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "attrs": {}, "content": _serialize(self.content)}


@dataclass(frozen=True)
class TableRow(Node):
    type: ClassVar[str] = "tableRow"

    cells: tuple[TableCell, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "content": _serialize(self.cells)}


@dataclass(frozen=True)
class Table(Node):
    type: ClassVar[str] = "table"

    rows: tuple[TableRow, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "attrs": {"isNumberColumnEnabled": False, "layout": "default"},
            "content": _serialize(self.rows),
        }


Block = Union[
    Heading,
    Paragraph,
    CodeBlock,
    Rule,
    Blockquote,
    BulletList,
    OrderedList,
    Table,
]


# -------------------------------------------------------------------------
# Document
# -------------------------------------------------------------------------

@dataclass(frozen=True)
class Document(Node):
    """Root of an ADF tree."""

    type: ClassVar[str] = "doc"
    version: ClassVar[int] = ADF_VERSION

    content: tuple[Block, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "type": self.type,
            "content": _serialize(self.content),
        }
