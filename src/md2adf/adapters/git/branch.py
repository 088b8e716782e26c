"""
Git Branch - Inspect the current repository with the git CLI.

Read helpers return None or an empty list when git is unavailable or the
directory is not a repository; callers decide whether that is an error.
"""

import logging
import re
import subprocess
from pathlib import Path
from typing import Optional, Union

from ...core.domain.value_objects import CommitRef
from ...core.exceptions import GitError


GIT_TIMEOUT = 10

# MRP-404, feature/MRP-404, MRP-404-some-description
ISSUE_KEY_PATTERN = re.compile(r"([A-Z][A-Z0-9]+-[0-9]+)")

COMMIT_FIELD_SEPARATOR = "||"

logger = logging.getLogger("GitBranch")


def run_git(*args: str, cwd: Optional[Union[str, Path]] = None) -> str:
    """
    Run a git command and return its stripped stdout.

    Raises:
        GitError: If git is missing, times out or exits non-zero
    """
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=str(cwd) if cwd else None,
            capture_output=True,
            text=True,
            timeout=GIT_TIMEOUT,
            check=True,
        )
    except FileNotFoundError as e:
        raise GitError("git executable not found", cause=e)
    except subprocess.TimeoutExpired as e:
        raise GitError(f"git {' '.join(args)} timed out", cause=e)
    except subprocess.CalledProcessError as e:
        stderr = (e.stderr or "").strip()
        raise GitError(f"git {' '.join(args)} failed: {stderr}", cause=e)

    return result.stdout.strip()


def get_current_branch(cwd: Optional[Union[str, Path]] = None) -> Optional[str]:
    """Get current branch name."""
    try:
        return run_git("rev-parse", "--abbrev-ref", "HEAD", cwd=cwd)
    except GitError as e:
        logger.debug(f"Could not read current branch: {e}")
        return None


def extract_issue_key(branch: str) -> Optional[str]:
    """Return the first issue key found in a branch name."""
    match = ISSUE_KEY_PATTERN.search(branch)
    return match.group(1) if match else None


def get_issue_key_from_branch(cwd: Optional[Union[str, Path]] = None) -> Optional[str]:
    """Extract the Jira issue key from the current branch name."""
    branch = get_current_branch(cwd)
    if not branch:
        return None
    return extract_issue_key(branch)


def get_commits_on_branch(
    base_branch: str = "main",
    cwd: Optional[Union[str, Path]] = None,
) -> list[CommitRef]:
    """Get commits on the current branch that are not on the base branch."""
    fmt = COMMIT_FIELD_SEPARATOR.join(["%H", "%s", "%ai", "%an"])
    try:
        log = run_git(
            "log", f"{base_branch}..HEAD", f"--format={fmt}", "--no-merges",
            cwd=cwd,
        )
    except GitError as e:
        logger.debug(f"Could not read commits: {e}")
        return []

    if not log:
        return []

    commits = []
    for line in log.splitlines():
        parts = line.split(COMMIT_FIELD_SEPARATOR)
        parts += [""] * (4 - len(parts))
        commit_hash, message, date, author = parts[:4]
        commits.append(CommitRef(hash=commit_hash, message=message, date=date, author=author))
    return commits
