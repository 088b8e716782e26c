"""
Query Commands - Read-only operations against the tracker.

These never modify anything, so they run the same with or without
dry-run.
"""

from typing import Optional

from ...core.exceptions import IssueTrackerError
from ...core.ports.issue_tracker import IssueData, IssueTrackerPort
from .base import Command, CommandResult


# Status names (matched as substrings) treated as finished work
RESOLVED_STATUSES = (
    "resolved", "resolvido", "closed", "fechada", "fechado",
    "done", "pronto", "concluído", "concluido", "complete", "completed",
)


def is_resolved_status(status: str) -> bool:
    status = status.lower()
    return any(resolved in status for resolved in RESOLVED_STATUSES)


def build_jql(
    jql: Optional[str] = None,
    project: Optional[str] = None,
    status: Optional[str] = None,
    assignee: Optional[str] = None,
) -> str:
    """
    Build a JQL query from simple filters.
    
    A raw `jql` wins over the filters. `assignee="currentUser"` means the
    authenticated user. With no filters at all, recently updated issues
    are returned.
    """
    if jql:
        return jql
    
    conditions = []
    if project:
        conditions.append(f'project = "{project}"')
    if status:
        conditions.append(f'status = "{status}"')
    if assignee == "currentUser":
        conditions.append("assignee = currentUser()")
    elif assignee:
        conditions.append(f'assignee = "{assignee}"')
    
    if not conditions:
        return "ORDER BY updated DESC"
    return " AND ".join(conditions) + " ORDER BY updated DESC"


class SearchIssuesCommand(Command):
    """Search issues with JQL or simple filters."""
    
    def __init__(
        self,
        tracker: IssueTrackerPort,
        jql: Optional[str] = None,
        project: Optional[str] = None,
        status: Optional[str] = None,
        assignee: Optional[str] = None,
        max_results: int = 20,
        include_resolved: bool = True,
    ):
        super().__init__(dry_run=False)
        self.tracker = tracker
        self.jql = build_jql(jql, project, status, assignee)
        self.max_results = max_results
        self.include_resolved = include_resolved
    
    @property
    def name(self) -> str:
        return "Search"
    
    def validate(self) -> Optional[str]:
        if self.max_results < 1:
            return "max results must be at least 1"
        return None
    
    def execute(self) -> CommandResult:
        error = self.validate()
        if error:
            return CommandResult.fail(error)
        
        self.logger.debug(f"JQL: {self.jql}")
        try:
            issues = self.tracker.search_issues(self.jql, max_results=self.max_results)
        except IssueTrackerError as e:
            return CommandResult.fail(str(e), cause=e)
        
        if not self.include_resolved:
            issues = [i for i in issues if not is_resolved_status(i.status)]
        return CommandResult.ok(issues)


class GetIssueCommand(Command):
    """Fetch a single issue."""
    
    def __init__(self, tracker: IssueTrackerPort, issue_key: str):
        super().__init__(dry_run=False)
        self.tracker = tracker
        self.issue_key = issue_key
    
    @property
    def name(self) -> str:
        return "Show"
    
    def validate(self) -> Optional[str]:
        if not self.issue_key:
            return "Issue key is required"
        return None
    
    def execute(self) -> CommandResult:
        error = self.validate()
        if error:
            return CommandResult.fail(error)
        
        try:
            issue: IssueData = self.tracker.get_issue(self.issue_key)
        except IssueTrackerError as e:
            return CommandResult.fail(str(e), cause=e)
        return CommandResult.ok(issue)
