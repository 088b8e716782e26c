"""
Git Adapter - Branch and commit inspection.
"""

from .branch import (
    extract_issue_key,
    get_commits_on_branch,
    get_current_branch,
    get_issue_key_from_branch,
    run_git,
)

__all__ = [
    "extract_issue_key",
    "get_commits_on_branch",
    "get_current_branch",
    "get_issue_key_from_branch",
    "run_git",
]
