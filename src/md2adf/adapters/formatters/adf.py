"""
ADF Formatter - Atlassian Document Format for Jira.

Converts markdown to Jira's ADF format.
"""

import logging
from typing import Any

from ...core.ports.document_formatter import DocumentFormatterPort
from ...core.domain.nodes import (
    Block,
    BulletList,
    Code,
    Document,
    Heading,
    ListItem,
    OrderedList,
    Paragraph,
    Table,
    TableCell,
    TableRow,
    Text,
)
from ...core.domain.value_objects import CommitRef
from .blocks import document_blocks
from .inline import render_inline


logger = logging.getLogger("ADFFormatter")


def parse_document(markdown: str) -> Document:
    """
    Convert markdown into an ADF document tree.

    Never fails on malformed markup; the only error is
    NestingTooDeepError for absurdly deep blockquotes.
    """
    return Document(document_blocks(markdown))


def markdown_to_adf(markdown: str) -> dict[str, Any]:
    """Convert markdown into an ADF document dict, ready for the Jira API."""
    return parse_document(markdown).to_dict()


def extract_text(adf: Any) -> str:
    """
    Extract plain text from an ADF document.

    Text node values are collected depth-first and joined with spaces.
    """
    if not isinstance(adf, dict) or not adf.get("content"):
        return ""

    texts: list[str] = []

    def walk(node: dict[str, Any]) -> None:
        if node.get("type") == "text" and node.get("text"):
            texts.append(node["text"])
        for child in node.get("content") or []:
            walk(child)

    walk(adf)
    return " ".join(texts)


class ADFFormatter(DocumentFormatterPort):
    """
    Atlassian Document Format formatter.

    Converts markdown/text to ADF for Jira API.
    Reference: https://developer.atlassian.com/cloud/jira/platform/apis/document/structure/
    """

    @property
    def name(self) -> str:
        return "ADF"

    # -------------------------------------------------------------------------
    # DocumentFormatterPort Implementation
    # -------------------------------------------------------------------------

    def format_text(self, text: str) -> dict[str, Any]:
        """Convert markdown text to ADF."""
        document = parse_document(text)
        logger.debug(f"Converted {len(text)} chars into {len(document.content)} block(s)")
        return document.to_dict()

    def format_heading(self, text: str, level: int = 2) -> dict[str, Any]:
        """Format a heading."""
        return self._doc([self._heading(text, level)])

    def format_list(self, items: list[str], ordered: bool = False) -> dict[str, Any]:
        """Format a list. No items gives the empty-paragraph document."""
        if not items:
            return self._doc([])
        list_items = tuple(
            ListItem((Paragraph(tuple(render_inline(item))),))
            for item in items
        )
        if ordered:
            return self._doc([OrderedList(list_items)])
        return self._doc([BulletList(list_items)])

    def format_commits_table(self, commits: list[CommitRef]) -> dict[str, Any]:
        """Format commits as a table."""
        rows = [
            TableRow((
                self._table_header("Commit"),
                self._table_header("Message"),
            ))
        ]

        for commit in commits:
            rows.append(TableRow((
                self._table_cell(Text(commit.short_hash, marks=(Code(),))),
                self._table_cell(Text(commit.message)),
            )))

        return self._doc([
            self._heading("Related Commits", level=3),
            Table(tuple(rows)),
        ])

    # -------------------------------------------------------------------------
    # Private Helper Methods
    # -------------------------------------------------------------------------

    def _doc(self, content: list[Block]) -> dict[str, Any]:
        """Create ADF document wrapper."""
        if not content:
            return markdown_to_adf("")
        return Document(tuple(content)).to_dict()

    def _heading(self, text: str, level: int = 2) -> Heading:
        return Heading(level=max(1, min(level, 6)), content=tuple(render_inline(text)))

    def _table_header(self, text: str) -> TableCell:
        return TableCell(content=(Paragraph((Text(text),)),), header=True)

    def _table_cell(self, text: Text) -> TableCell:
        return TableCell(content=(Paragraph((text,)),))
