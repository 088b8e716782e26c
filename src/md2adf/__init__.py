"""
md2adf - Markdown to Atlassian Document Format.

Converts Markdown comments and descriptions into ADF documents and
posts them to Jira.
"""

from .adapters.formatters.adf import ADFFormatter, markdown_to_adf, parse_document, extract_text
from .core.exceptions import ConversionError, NestingTooDeepError

__version__ = "1.0.0"

__all__ = [
    "ADFFormatter",
    "markdown_to_adf",
    "parse_document",
    "extract_text",
    "ConversionError",
    "NestingTooDeepError",
]
