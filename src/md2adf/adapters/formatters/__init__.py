"""
Document Formatters - Convert markdown into tracker rich-text formats.
"""

from .adf import ADFFormatter, markdown_to_adf, parse_document, extract_text
from .blocks import BlockSegmenter, MAX_NESTING_DEPTH, segment
from .inline import render_inline
from .tables import parse_table

__all__ = [
    "ADFFormatter",
    "markdown_to_adf",
    "parse_document",
    "extract_text",
    "BlockSegmenter",
    "MAX_NESTING_DEPTH",
    "segment",
    "render_inline",
    "parse_table",
]
