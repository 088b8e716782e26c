"""
Exceptions - Centralized exception hierarchy.

Every error raised by md2adf derives from Md2AdfError so callers can
catch the whole family at once.
"""

from typing import Optional

__all__ = [
    "Md2AdfError",
    "ConversionError",
    "NestingTooDeepError",
    "ConfigError",
    "GitError",
    "IssueTrackerError",
    "AuthenticationError",
    "PermissionError",
    "NotFoundError",
    "TransitionError",
]


class Md2AdfError(Exception):
    """Base class for all md2adf errors."""
    
    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class ConversionError(Md2AdfError):
    """Markdown could not be converted to ADF."""


class NestingTooDeepError(ConversionError):
    """Blockquotes are nested deeper than the converter allows."""
    
    def __init__(self, depth: int, limit: int):
        super().__init__(f"Blockquote nesting too deep: {depth} levels (limit {limit})")
        self.depth = depth
        self.limit = limit


class ConfigError(Md2AdfError):
    """Configuration is missing or invalid."""


class GitError(Md2AdfError):
    """A git command failed."""


class IssueTrackerError(Md2AdfError):
    """Error talking to the issue tracker."""
    
    def __init__(
        self,
        message: str,
        issue_key: Optional[str] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message, cause=cause)
        self.issue_key = issue_key


class AuthenticationError(IssueTrackerError):
    """Credentials were rejected."""


class PermissionError(IssueTrackerError):
    """The authenticated user may not access the resource."""


class NotFoundError(IssueTrackerError):
    """The requested issue or resource does not exist."""


class TransitionError(IssueTrackerError):
    """A workflow transition could not be applied."""
