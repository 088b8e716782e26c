"""
Domain - ADF node types and value objects.
"""

from .nodes import (
    ADF_VERSION,
    Mark,
    Strong,
    Emphasis,
    Code,
    Link,
    Node,
    Text,
    Mention,
    HardBreak,
    Inline,
    Paragraph,
    Heading,
    CodeBlock,
    Rule,
    Blockquote,
    ListItem,
    BulletList,
    OrderedList,
    TableCell,
    TableRow,
    Table,
    Block,
    Document,
)
from .value_objects import CommitRef

__all__ = [
    "ADF_VERSION",
    "Mark",
    "Strong",
    "Emphasis",
    "Code",
    "Link",
    "Node",
    "Text",
    "Mention",
    "HardBreak",
    "Inline",
    "Paragraph",
    "Heading",
    "CodeBlock",
    "Rule",
    "Blockquote",
    "ListItem",
    "BulletList",
    "OrderedList",
    "TableCell",
    "TableRow",
    "Table",
    "Block",
    "Document",
    "CommitRef",
]
