"""
Application Layer - Use cases built on top of the ports.

This layer contains:
- commands/: Individual tracker operations (AddComment, CreateIssue, Search, ...)
"""

from .commands import *
