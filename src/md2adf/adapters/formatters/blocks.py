"""
Block Segmenter - Split markdown into ADF block nodes.

A single forward scan over the input lines. At each line the constructs
below are tried in order; the first that applies consumes its lines:

1. Fenced code block (```lang ... ```)
2. Horizontal rule (---, ***, ___)
3. ATX heading (# .. ######)
4. Blockquote (> ...), parsed recursively as a sub-document
5. Table (header row followed by a |---| separator row)
6. Bullet list (-, *, +, •)
7. Ordered list (1.)
8. Blank line (ends the current paragraph)

Anything else is buffered into the pending paragraph.
"""

import logging
import re
from typing import Optional

from ...core.domain.nodes import (
    Block,
    Blockquote,
    BulletList,
    CodeBlock,
    Heading,
    ListItem,
    OrderedList,
    Paragraph,
    Rule,
    Text,
)
from ...core.exceptions import NestingTooDeepError
from .inline import render_inline
from .tables import is_separator_row, is_table_row, parse_table


MAX_NESTING_DEPTH = 32

CODE_FENCE = re.compile(r"^```([A-Za-z0-9_]*)$")
RULE = re.compile(r"^(\*{3,}|-{3,}|_{3,})\s*$")
HEADING = re.compile(r"^(#{1,6})\s+(.+)$")
QUOTE = re.compile(r"^>\s?")
BULLET_ITEM = re.compile(r"^\s*[-*+•]\s+")
ORDERED_ITEM = re.compile(r"^\s*[0-9]+\.\s+")

EMPTY_PARAGRAPH = Paragraph((Text(""),))

logger = logging.getLogger("BlockSegmenter")


class BlockSegmenter:
    """
    Line-by-line block parser.

    An instance handles exactly one input; the only mutable state is the
    line cursor and the pending paragraph buffer.
    """

    def __init__(self, markdown: str, depth: int = 0):
        if depth > MAX_NESTING_DEPTH:
            raise NestingTooDeepError(depth, MAX_NESTING_DEPTH)

        self.lines = markdown.split("\n")
        self.depth = depth
        self.blocks: list[Block] = []
        self._paragraph: list[str] = []
        self._i = 0

    def segment(self) -> list[Block]:
        """Run the scan and return the blocks in source order."""
        handlers = (
            self._code_block,
            self._rule,
            self._heading,
            self._blockquote,
            self._table,
            self._bullet_list,
            self._ordered_list,
        )

        while self._i < len(self.lines):
            line = self.lines[self._i]
            trimmed = line.rstrip()

            block: Optional[Block] = None
            for handler in handlers:
                block = handler(line, trimmed)
                if block is not None:
                    break

            if block is not None:
                self.blocks.append(block)
                continue

            if trimmed == "":
                self._flush_paragraph()
            else:
                self._paragraph.append(trimmed)
            self._i += 1

        self._flush_paragraph()
        return self.blocks

    # -------------------------------------------------------------------------
    # Paragraph buffer
    # -------------------------------------------------------------------------

    def _flush_paragraph(self) -> None:
        """Emit the pending paragraph unless it is only whitespace."""
        if not self._paragraph:
            return
        text = "\n".join(self._paragraph)
        self._paragraph = []
        if text.strip() == "":
            return
        self.blocks.append(Paragraph(tuple(render_inline(text))))

    # -------------------------------------------------------------------------
    # Constructs
    #
    # Each handler returns None when the current line does not start its
    # construct. On a match it advances the cursor past every consumed line.
    # -------------------------------------------------------------------------

    def _code_block(self, line: str, trimmed: str) -> Optional[Block]:
        match = CODE_FENCE.match(trimmed)
        if not match:
            return None

        self._flush_paragraph()
        language = match.group(1) or None
        code_lines = []
        self._i += 1
        while self._i < len(self.lines) and not self.lines[self._i].rstrip().startswith("```"):
            code_lines.append(self.lines[self._i])
            self._i += 1
        self._i += 1  # closing fence

        return CodeBlock(text="\n".join(code_lines), language=language)

    def _rule(self, line: str, trimmed: str) -> Optional[Block]:
        if not RULE.match(trimmed):
            return None
        self._flush_paragraph()
        self._i += 1
        return Rule()

    def _heading(self, line: str, trimmed: str) -> Optional[Block]:
        match = HEADING.match(trimmed)
        if not match:
            return None
        self._flush_paragraph()
        self._i += 1
        return Heading(
            level=len(match.group(1)),
            content=tuple(render_inline(match.group(2))),
        )

    def _blockquote(self, line: str, trimmed: str) -> Optional[Block]:
        if not QUOTE.match(trimmed):
            return None

        self._flush_paragraph()
        quoted = []
        while self._i < len(self.lines) and QUOTE.match(self.lines[self._i].rstrip()):
            quoted.append(QUOTE.sub("", self.lines[self._i], count=1))
            self._i += 1

        logger.debug(f"Blockquote of {len(quoted)} line(s) at depth {self.depth + 1}")
        return Blockquote(document_blocks("\n".join(quoted), depth=self.depth + 1))

    def _table(self, line: str, trimmed: str) -> Optional[Block]:
        if not is_table_row(trimmed):
            return None

        # A header row only starts a table when a separator row follows it
        next_index = self._i + 1
        next_line = self.lines[next_index] if next_index < len(self.lines) else ""
        if not is_separator_row(next_line):
            return None

        self._flush_paragraph()
        table_lines = []
        while self._i < len(self.lines) and is_table_row(self.lines[self._i]):
            table_lines.append(self.lines[self._i])
            self._i += 1

        return parse_table(table_lines)

    def _bullet_list(self, line: str, trimmed: str) -> Optional[Block]:
        items = self._list_items(line, BULLET_ITEM)
        return BulletList(items) if items else None

    def _ordered_list(self, line: str, trimmed: str) -> Optional[Block]:
        items = self._list_items(line, ORDERED_ITEM)
        return OrderedList(items) if items else None

    def _list_items(self, line: str, marker: re.Pattern) -> tuple[ListItem, ...]:
        """Consume the contiguous run of lines starting with ``marker``."""
        if not marker.match(line):
            return ()

        self._flush_paragraph()
        items = []
        while self._i < len(self.lines) and marker.match(self.lines[self._i]):
            item_text = marker.sub("", self.lines[self._i], count=1)
            items.append(ListItem((Paragraph(tuple(render_inline(item_text))),)))
            self._i += 1

        return tuple(items)


def segment(markdown: str, depth: int = 0) -> list[Block]:
    """Split markdown into block nodes (possibly empty)."""
    return BlockSegmenter(markdown, depth).segment()


def document_blocks(markdown: str, depth: int = 0) -> tuple[Block, ...]:
    """
    Segment markdown for use as the content of a document.

    A document may not be empty, so an input with no blocks yields a single
    empty paragraph.
    """
    blocks = segment(markdown, depth)
    if not blocks:
        return (EMPTY_PARAGRAPH,)
    return tuple(blocks)
