"""
Ports - Abstract interfaces for external dependencies.

Ports define the contracts that adapters must implement.
This enables dependency inversion and easy testing.
"""

from .issue_tracker import IssueTrackerPort, IssueData
from .document_formatter import DocumentFormatterPort
from .config_provider import (
    ConfigProviderPort,
    AppConfig,
    InstanceConfig,
    ResolvedConfig,
    TrackerConfig,
)

__all__ = [
    "IssueTrackerPort",
    "IssueData",
    "DocumentFormatterPort",
    "ConfigProviderPort",
    "AppConfig",
    "InstanceConfig",
    "ResolvedConfig",
    "TrackerConfig",
]
