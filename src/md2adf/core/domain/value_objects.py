"""
Value Objects - Small immutable values passed between layers.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class CommitRef:
    """A git commit referenced from an issue comment."""
    
    hash: str
    message: str
    date: str = ""
    author: str = ""
    
    @property
    def short_hash(self) -> str:
        return self.hash[:7]
