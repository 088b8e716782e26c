"""
Jira Adapter - Implements IssueTrackerPort for Atlassian Jira.

This is the main entry point for Jira integration. Markdown passed to the
write operations is converted to ADF before it is sent.
"""

import logging
from typing import Any, Optional

from ...core.ports.issue_tracker import (
    IssueTrackerPort,
    IssueData,
    IssueTrackerError,
    TransitionError,
)
from ...core.ports.config_provider import TrackerConfig
from ...core.domain.value_objects import CommitRef
from ..formatters.adf import ADFFormatter, extract_text
from .client import JiraApiClient


ISSUE_FIELDS = "summary,status,assignee,issuetype,priority,description"
SEARCH_FIELDS = ["summary", "status", "assignee", "issuetype", "priority"]


class JiraAdapter(IssueTrackerPort):
    """
    Jira implementation of the IssueTrackerPort.

    Translates between markdown and Jira's API.
    """

    def __init__(
        self,
        config: TrackerConfig,
        dry_run: bool = True,
        formatter: Optional[ADFFormatter] = None,
    ):
        """
        Initialize the Jira adapter.

        Args:
            config: Tracker configuration
            dry_run: If True, don't make changes
            formatter: Optional custom ADF formatter
        """
        self.config = config
        self._dry_run = dry_run
        self.formatter = formatter or ADFFormatter()
        self.logger = logging.getLogger("JiraAdapter")

        self._client = JiraApiClient(
            base_url=config.url,
            email=config.email,
            api_token=config.api_token,
            dry_run=dry_run,
        )

    # -------------------------------------------------------------------------
    # IssueTrackerPort Implementation - Properties
    # -------------------------------------------------------------------------

    @property
    def name(self) -> str:
        return "Jira"

    def test_connection(self) -> bool:
        return self._client.test_connection()

    # -------------------------------------------------------------------------
    # IssueTrackerPort Implementation - Read Operations
    # -------------------------------------------------------------------------

    def get_current_user(self) -> dict[str, Any]:
        return self._client.get_myself()

    def get_issue(self, issue_key: str) -> IssueData:
        return self._parse_issue(self._client.get_issue(issue_key, ISSUE_FIELDS))

    def get_transitions(self, issue_key: str) -> list[dict[str, str]]:
        return [
            {"id": t["id"], "name": t["name"]}
            for t in self._client.get_transitions(issue_key)
        ]

    def search_issues(self, jql: str, max_results: int = 20) -> list[IssueData]:
        data = self._client.search(jql, SEARCH_FIELDS, max_results=max_results)
        return [self._parse_issue(issue) for issue in data.get("issues", [])]

    # -------------------------------------------------------------------------
    # IssueTrackerPort Implementation - Write Operations
    # -------------------------------------------------------------------------

    def add_comment(self, issue_key: str, body: Any) -> bool:
        adf = self._to_adf(body)

        if self._dry_run:
            self.logger.info(f"[DRY-RUN] Would add comment to {issue_key}")
            return True

        self._client.add_comment(issue_key, adf)
        self.logger.info(f"Added comment to {issue_key}")
        return True

    def update_issue_description(self, issue_key: str, description: Any) -> bool:
        adf = self._to_adf(description)

        if self._dry_run:
            self.logger.info(f"[DRY-RUN] Would update description for {issue_key}")
            return True

        self._client.update_fields(issue_key, {"description": adf})
        self.logger.info(f"Updated description for {issue_key}")
        return True

    def transition_issue(self, issue_key: str, transition_id: str) -> bool:
        if self._dry_run:
            self.logger.info(f"[DRY-RUN] Would apply transition {transition_id} to {issue_key}")
            return True

        try:
            self._client.do_transition(issue_key, transition_id)
        except IssueTrackerError as e:
            raise TransitionError(
                f"Transition {transition_id} failed for {issue_key}: {e}",
                issue_key=issue_key,
                cause=e,
            )
        self.logger.info(f"Applied transition {transition_id} to {issue_key}")
        return True

    def assign_issue(self, issue_key: str, account_id: str) -> bool:
        if self._dry_run:
            self.logger.info(f"[DRY-RUN] Would assign {issue_key} to {account_id}")
            return True

        self._client.set_assignee(issue_key, account_id)
        self.logger.info(f"Assigned {issue_key} to {account_id}")
        return True

    def create_issue(
        self,
        project_key: str,
        summary: str,
        issue_type: str,
        description: Any = None,
        priority: Optional[str] = None,
        assignee_account_id: Optional[str] = None,
    ) -> dict[str, Any]:
        fields: dict[str, Any] = {
            "project": {"key": project_key},
            "summary": summary,
            "issuetype": {"name": issue_type},
        }
        if description:
            fields["description"] = self._to_adf(description)
        if priority:
            fields["priority"] = {"name": priority}
        if assignee_account_id:
            fields["assignee"] = {"accountId": assignee_account_id}

        if self._dry_run:
            self.logger.info(f"[DRY-RUN] Would create {issue_type} in {project_key}: {summary}")
            return {"id": None, "key": None, "url": None}

        data = self._client.create_issue(fields)
        key = data["key"]
        self.logger.info(f"Created {key}")
        return {
            "id": int(data["id"]),
            "key": key,
            "url": self._client.browse_url(key),
        }

    # -------------------------------------------------------------------------
    # Extended Methods (Jira-specific)
    # -------------------------------------------------------------------------

    def add_commits_comment(
        self,
        issue_key: str,
        commits: list[CommitRef]
    ) -> bool:
        """Add a formatted commits table as a comment."""
        adf = self.formatter.format_commits_table(commits)
        return self.add_comment(issue_key, adf)

    # -------------------------------------------------------------------------
    # Private Methods
    # -------------------------------------------------------------------------

    def _to_adf(self, body: Any) -> dict[str, Any]:
        """Markdown strings are converted; ADF dicts pass through."""
        if isinstance(body, str):
            return self.formatter.format_text(body)
        return body

    def _parse_issue(self, data: dict) -> IssueData:
        """Parse Jira API response into IssueData."""
        fields = data.get("fields", {})
        description = fields.get("description")

        issue_id = data.get("id")

        return IssueData(
            key=data["key"],
            id=int(issue_id) if issue_id is not None else None,
            summary=fields.get("summary", ""),
            status=(fields.get("status") or {}).get("name", "Unknown"),
            assignee=(fields.get("assignee") or {}).get("displayName"),
            issue_type=(fields.get("issuetype") or {}).get("name", "Unknown"),
            priority=(fields.get("priority") or {}).get("name", "Unknown"),
            description=extract_text(description) if description else None,
        )
