"""
Commands - Individual operations that can be executed.

Commands represent tracker operations and can be:
- Validated
- Executed (or previewed in dry-run)
- Batched
"""

from .base import Command, CommandResult, CommandBatch
from .issue_commands import (
    AddCommentCommand,
    AddCommitsCommentCommand,
    AssignToMeCommand,
    CreateIssueCommand,
    TransitionStatusCommand,
    UpdateDescriptionCommand,
)
from .query_commands import (
    GetIssueCommand,
    SearchIssuesCommand,
    build_jql,
    is_resolved_status,
)

__all__ = [
    "Command",
    "CommandResult",
    "CommandBatch",
    "AddCommentCommand",
    "AddCommitsCommentCommand",
    "AssignToMeCommand",
    "CreateIssueCommand",
    "TransitionStatusCommand",
    "UpdateDescriptionCommand",
    "GetIssueCommand",
    "SearchIssuesCommand",
    "build_jql",
    "is_resolved_status",
]
