"""
Command Base - Command pattern primitives.

A command wraps one write operation against the issue tracker. Commands
validate their input, honour dry-run, and report the outcome as a
CommandResult instead of raising.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class CommandResult:
    """Outcome of executing a command."""
    
    success: bool = True
    data: Any = None
    error: Optional[str] = None
    dry_run: bool = False
    skipped: bool = False
    cause: Optional[Exception] = None
    
    @classmethod
    def ok(cls, data: Any = None, dry_run: bool = False) -> "CommandResult":
        return cls(success=True, data=data, dry_run=dry_run)
    
    @classmethod
    def fail(cls, error: str, cause: Optional[Exception] = None) -> "CommandResult":
        return cls(success=False, error=error, cause=cause)
    
    @classmethod
    def skip(cls, reason: str) -> "CommandResult":
        return cls(success=True, skipped=True, data=reason)


class Command(ABC):
    """Base class for all commands."""
    
    def __init__(self, dry_run: bool = True):
        self.dry_run = dry_run
        self.logger = logging.getLogger(self.__class__.__name__)
    
    @property
    @abstractmethod
    def name(self) -> str:
        """Human readable command name."""
        ...
    
    def validate(self) -> Optional[str]:
        """Return an error message if the command cannot run, else None."""
        return None
    
    @abstractmethod
    def execute(self) -> CommandResult:
        ...


class CommandBatch:
    """Execute several commands in order."""
    
    def __init__(self, stop_on_error: bool = True):
        self.stop_on_error = stop_on_error
        self.commands: list[Command] = []
        self.results: list[CommandResult] = []
    
    def add(self, command: Command) -> "CommandBatch":
        self.commands.append(command)
        return self
    
    def execute_all(self) -> list[CommandResult]:
        self.results = []
        for command in self.commands:
            result = command.execute()
            self.results.append(result)
            if not result.success and self.stop_on_error:
                break
        return self.results
    
    @property
    def all_succeeded(self) -> bool:
        return all(r.success for r in self.results)
    
    @property
    def executed_count(self) -> int:
        return sum(1 for r in self.results if r.success)
    
    @property
    def failed_count(self) -> int:
        return sum(1 for r in self.results if not r.success)
