"""
Issue Tracker Port - Abstract interface for issue tracking systems.

The converter itself never talks to a tracker; this port describes the
collaborator that receives the converted comment or description.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional

from ..exceptions import (
    IssueTrackerError,
    AuthenticationError,
    NotFoundError,
    PermissionError,
    TransitionError,
)

__all__ = [
    "IssueData",
    "IssueTrackerPort",
    "IssueTrackerError",
    "AuthenticationError",
    "NotFoundError",
    "PermissionError",
    "TransitionError",
]


@dataclass
class IssueData:
    """Tracker-agnostic view of an issue."""
    
    key: str
    summary: str = ""
    status: str = "Unknown"
    assignee: Optional[str] = None
    issue_type: str = "Unknown"
    priority: str = "Unknown"
    description: Optional[str] = None
    id: Optional[int] = None


class IssueTrackerPort(ABC):
    """
    Interface for issue trackers (Jira, ...).
    
    Write operations accept markdown; adapters convert it to whatever
    rich-text format their API expects.
    """
    
    @property
    @abstractmethod
    def name(self) -> str:
        ...
    
    @abstractmethod
    def test_connection(self) -> bool:
        ...
    
    # -------------------------------------------------------------------------
    # Read Operations
    # -------------------------------------------------------------------------
    
    @abstractmethod
    def get_current_user(self) -> dict[str, Any]:
        ...
    
    @abstractmethod
    def get_issue(self, issue_key: str) -> IssueData:
        ...
    
    @abstractmethod
    def get_transitions(self, issue_key: str) -> list[dict[str, str]]:
        ...
    
    @abstractmethod
    def search_issues(self, jql: str, max_results: int = 20) -> list[IssueData]:
        ...
    
    # -------------------------------------------------------------------------
    # Write Operations
    # -------------------------------------------------------------------------
    
    @abstractmethod
    def add_comment(self, issue_key: str, body: Any) -> bool:
        """Add a comment (markdown or a ready ADF document) to an issue."""
        ...
    
    @abstractmethod
    def update_issue_description(self, issue_key: str, description: Any) -> bool:
        """Replace an issue's description (markdown or ADF document)."""
        ...
    
    @abstractmethod
    def transition_issue(self, issue_key: str, transition_id: str) -> bool:
        ...
    
    @abstractmethod
    def assign_issue(self, issue_key: str, account_id: str) -> bool:
        ...
    
    @abstractmethod
    def create_issue(
        self,
        project_key: str,
        summary: str,
        issue_type: str,
        description: Any = None,
        priority: Optional[str] = None,
        assignee_account_id: Optional[str] = None,
    ) -> dict[str, Any]:
        """Create an issue; returns its id, key and browse URL."""
        ...
