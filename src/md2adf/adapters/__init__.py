"""
Adapters - Concrete implementations of ports.

This module contains implementations for:
- Formatters: ADF (Atlassian Document Format)
- Issue Trackers: Jira
- Config: Config file and environment variables
- Git: Branch and commit inspection
"""

from .formatters import ADFFormatter
from .jira import JiraAdapter
from .config import EnvironmentConfigProvider

__all__ = [
    "ADFFormatter",
    "JiraAdapter",
    "EnvironmentConfigProvider",
]
