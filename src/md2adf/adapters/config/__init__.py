"""
Configuration Adapters - Load configuration from various sources.
"""

from .environment import EnvironmentConfigProvider, config_paths

__all__ = ["EnvironmentConfigProvider", "config_paths"]
