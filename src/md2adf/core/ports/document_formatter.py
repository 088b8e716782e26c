"""
Document Formatter Port - Abstract interface for output formatters.
"""

from abc import ABC, abstractmethod
from typing import Any

from ..domain.value_objects import CommitRef


class DocumentFormatterPort(ABC):
    """
    Interface for converting markup into a tracker's rich-text format.
    """
    
    @property
    @abstractmethod
    def name(self) -> str:
        """Formatter name (e.g., 'ADF')."""
        ...
    
    @abstractmethod
    def format_text(self, text: str) -> dict[str, Any]:
        """Convert markdown text to the output document."""
        ...
    
    @abstractmethod
    def format_heading(self, text: str, level: int = 2) -> dict[str, Any]:
        """Format a single heading as a document."""
        ...
    
    @abstractmethod
    def format_list(self, items: list[str], ordered: bool = False) -> dict[str, Any]:
        """Format a list of markdown strings as a document."""
        ...
    
    @abstractmethod
    def format_commits_table(self, commits: list[CommitRef]) -> dict[str, Any]:
        """Format commits as a table document."""
        ...
