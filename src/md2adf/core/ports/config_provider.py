"""
Config Provider Port - Abstract interface for configuration sources.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


@dataclass
class TrackerConfig:
    """Connection settings for one Jira instance."""
    
    url: str
    email: str
    api_token: str
    
    def is_valid(self) -> bool:
        return bool(self.url and self.email and self.api_token)


@dataclass
class InstanceConfig:
    """A named Jira instance and the folder patterns that select it."""
    
    name: str
    tracker: TrackerConfig
    path_patterns: list[str] = field(default_factory=list)
    
    def matches(self, cwd: str) -> bool:
        """Check whether any path pattern occurs in the (lower-cased) cwd."""
        normalized = cwd.lower()
        return any(pattern.lower() in normalized for pattern in self.path_patterns)


@dataclass
class ResolvedConfig:
    """The instance chosen for a working directory."""
    
    instance: InstanceConfig
    base_branch: str = "main"


@dataclass
class AppConfig:
    """Complete application configuration."""
    
    instances: list[InstanceConfig] = field(default_factory=list)
    base_branch: str = "main"
    dry_run: bool = True
    verbose: bool = False


class ConfigProviderPort(ABC):
    """Interface for configuration providers."""
    
    @property
    @abstractmethod
    def name(self) -> str:
        ...
    
    @abstractmethod
    def load(self) -> AppConfig:
        """Load complete configuration."""
        ...
    
    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        ...
    
    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        ...
    
    @abstractmethod
    def validate(self) -> list[str]:
        """Return a list of validation error messages (empty if valid)."""
        ...
    
    @abstractmethod
    def resolve_instance(self, cwd: str) -> ResolvedConfig:
        """Pick the instance for a working directory."""
        ...
