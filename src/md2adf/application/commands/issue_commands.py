"""
Issue Commands - Write operations against an issue.
"""

from typing import Any, Optional

from ...core.exceptions import ConversionError, IssueTrackerError
from ...core.ports.document_formatter import DocumentFormatterPort
from ...core.ports.issue_tracker import IssueTrackerPort
from ...core.domain.value_objects import CommitRef
from ...adapters.formatters.adf import ADFFormatter
from .base import Command, CommandResult


class _MarkdownCommand(Command):
    """A command that sends converted markdown to an issue."""
    
    def __init__(
        self,
        tracker: IssueTrackerPort,
        issue_key: str,
        markdown: str,
        dry_run: bool = True,
        formatter: Optional[DocumentFormatterPort] = None,
    ):
        super().__init__(dry_run=dry_run)
        self.tracker = tracker
        self.issue_key = issue_key
        self.markdown = markdown
        self.formatter = formatter or ADFFormatter()
    
    def validate(self) -> Optional[str]:
        if not self.issue_key:
            return "Issue key is required"
        if not self.markdown or not self.markdown.strip():
            return f"{self.name} text is empty"
        return None
    
    def execute(self) -> CommandResult:
        error = self.validate()
        if error:
            return CommandResult.fail(error)
        
        try:
            document = self.formatter.format_text(self.markdown)
        except ConversionError as e:
            return CommandResult.fail(f"Could not convert markdown: {e}", cause=e)
        
        if self.dry_run:
            self.logger.info(f"[DRY-RUN] {self.name} for {self.issue_key}")
            return CommandResult.ok(document, dry_run=True)
        
        try:
            self._send(document)
        except IssueTrackerError as e:
            self.logger.error(f"{self.name} failed for {self.issue_key}: {e}")
            return CommandResult.fail(str(e), cause=e)
        
        return CommandResult.ok(document)
    
    def _send(self, document: dict[str, Any]) -> None:
        raise NotImplementedError


class AddCommentCommand(_MarkdownCommand):
    """Add a markdown comment to an issue."""
    
    def __init__(
        self,
        tracker: IssueTrackerPort,
        issue_key: str,
        body: str,
        dry_run: bool = True,
        formatter: Optional[DocumentFormatterPort] = None,
    ):
        super().__init__(tracker, issue_key, body, dry_run=dry_run, formatter=formatter)
    
    @property
    def name(self) -> str:
        return "Comment"
    
    def _send(self, document: dict[str, Any]) -> None:
        self.tracker.add_comment(self.issue_key, document)


class UpdateDescriptionCommand(_MarkdownCommand):
    """Replace an issue's description with converted markdown."""
    
    def __init__(
        self,
        tracker: IssueTrackerPort,
        issue_key: str,
        description: str,
        dry_run: bool = True,
        formatter: Optional[DocumentFormatterPort] = None,
    ):
        super().__init__(tracker, issue_key, description, dry_run=dry_run, formatter=formatter)
    
    @property
    def name(self) -> str:
        return "Description"
    
    def _send(self, document: dict[str, Any]) -> None:
        self.tracker.update_issue_description(self.issue_key, document)


class AddCommitsCommentCommand(Command):
    """Add a table of commits as a comment."""
    
    def __init__(
        self,
        tracker: IssueTrackerPort,
        issue_key: str,
        commits: list[CommitRef],
        dry_run: bool = True,
        formatter: Optional[DocumentFormatterPort] = None,
    ):
        super().__init__(dry_run=dry_run)
        self.tracker = tracker
        self.issue_key = issue_key
        self.commits = commits
        self.formatter = formatter or ADFFormatter()
    
    @property
    def name(self) -> str:
        return "Commits comment"
    
    def validate(self) -> Optional[str]:
        if not self.issue_key:
            return "Issue key is required"
        return None
    
    def execute(self) -> CommandResult:
        error = self.validate()
        if error:
            return CommandResult.fail(error)
        
        if not self.commits:
            return CommandResult.skip("No commits on branch")
        
        document = self.formatter.format_commits_table(self.commits)
        
        if self.dry_run:
            self.logger.info(f"[DRY-RUN] Would add {len(self.commits)} commit(s) to {self.issue_key}")
            return CommandResult.ok(document, dry_run=True)
        
        try:
            self.tracker.add_comment(self.issue_key, document)
        except IssueTrackerError as e:
            return CommandResult.fail(str(e), cause=e)
        
        return CommandResult.ok(document)


class TransitionStatusCommand(Command):
    """Move an issue to the transition whose name matches a status."""
    
    def __init__(
        self,
        tracker: IssueTrackerPort,
        issue_key: str,
        target_status: str,
        dry_run: bool = True,
    ):
        super().__init__(dry_run=dry_run)
        self.tracker = tracker
        self.issue_key = issue_key
        self.target_status = target_status
    
    @property
    def name(self) -> str:
        return "Transition"
    
    def validate(self) -> Optional[str]:
        if not self.issue_key:
            return "Issue key is required"
        if not self.target_status:
            return "Target status is required"
        return None
    
    def execute(self) -> CommandResult:
        error = self.validate()
        if error:
            return CommandResult.fail(error)
        
        if self.dry_run:
            self.logger.info(f"[DRY-RUN] Would transition {self.issue_key} to {self.target_status}")
            return CommandResult.ok(dry_run=True)
        
        try:
            transitions = self.tracker.get_transitions(self.issue_key)
            target = self.target_status.lower()
            match = next((t for t in transitions if t["name"].lower() == target), None)
            if match is None:
                available = ", ".join(t["name"] for t in transitions) or "none"
                return CommandResult.fail(
                    f"No transition named '{self.target_status}' (available: {available})"
                )
            self.tracker.transition_issue(self.issue_key, match["id"])
        except IssueTrackerError as e:
            return CommandResult.fail(str(e), cause=e)
        
        return CommandResult.ok(match)


class AssignToMeCommand(Command):
    """Assign an issue to the authenticated user."""
    
    def __init__(self, tracker: IssueTrackerPort, issue_key: str, dry_run: bool = True):
        super().__init__(dry_run=dry_run)
        self.tracker = tracker
        self.issue_key = issue_key
    
    @property
    def name(self) -> str:
        return "Assign"
    
    def validate(self) -> Optional[str]:
        if not self.issue_key:
            return "Issue key is required"
        return None
    
    def execute(self) -> CommandResult:
        error = self.validate()
        if error:
            return CommandResult.fail(error)
        
        if self.dry_run:
            self.logger.info(f"[DRY-RUN] Would assign {self.issue_key} to the current user")
            return CommandResult.ok(dry_run=True)
        
        try:
            me = self.tracker.get_current_user()
            self.tracker.assign_issue(self.issue_key, me["accountId"])
        except IssueTrackerError as e:
            return CommandResult.fail(str(e), cause=e)
        
        return CommandResult.ok(me)


class CreateIssueCommand(Command):
    """Create an issue whose description is converted from markdown."""
    
    def __init__(
        self,
        tracker: IssueTrackerPort,
        project_key: str,
        summary: str,
        issue_type: str = "Task",
        description: str = "",
        priority: Optional[str] = None,
        assign_to_me: bool = False,
        dry_run: bool = True,
        formatter: Optional[DocumentFormatterPort] = None,
    ):
        super().__init__(dry_run=dry_run)
        self.tracker = tracker
        self.project_key = project_key
        self.summary = summary
        self.issue_type = issue_type
        self.description = description
        self.priority = priority
        self.assign_to_me = assign_to_me
        self.formatter = formatter or ADFFormatter()
    
    @property
    def name(self) -> str:
        return "Create"
    
    def validate(self) -> Optional[str]:
        if not self.project_key:
            return "Project key is required"
        if not self.summary or not self.summary.strip():
            return "Summary is required"
        if not self.issue_type:
            return "Issue type is required"
        return None
    
    def execute(self) -> CommandResult:
        error = self.validate()
        if error:
            return CommandResult.fail(error)
        
        document = None
        if self.description and self.description.strip():
            try:
                document = self.formatter.format_text(self.description)
            except ConversionError as e:
                return CommandResult.fail(f"Could not convert markdown: {e}", cause=e)
        
        if self.dry_run:
            self.logger.info(
                f"[DRY-RUN] Would create {self.issue_type} in {self.project_key}: {self.summary}"
            )
            return CommandResult.ok(document, dry_run=True)
        
        try:
            assignee = self.tracker.get_current_user()["accountId"] if self.assign_to_me else None
            created = self.tracker.create_issue(
                self.project_key,
                self.summary,
                self.issue_type,
                description=document,
                priority=self.priority,
                assignee_account_id=assignee,
            )
        except IssueTrackerError as e:
            return CommandResult.fail(str(e), cause=e)
        
        self.logger.info(f"Created {created['key']}")
        return CommandResult.ok(created)
