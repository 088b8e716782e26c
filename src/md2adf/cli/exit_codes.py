"""
Exit Codes - Process exit statuses for the CLI.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes returned by md2adf."""
    
    SUCCESS = 0
    ERROR = 1
    CONFIG_ERROR = 2
    FILE_NOT_FOUND = 3
    CONVERSION_ERROR = 4
    TRACKER_ERROR = 5
