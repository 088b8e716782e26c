"""
Environment Config Provider - Load configuration from files and environment.

Supports:
- JSON config file with several Jira instances
  (~/.config/md2adf/config.json, then ~/.md2adf.json)
- Environment variables (JIRA_URL, JIRA_EMAIL, JIRA_API_TOKEN)
- .env files
- Command line argument overrides

The instance used for a command is picked from the working directory:
each instance lists folder patterns, and the first instance with a
pattern contained in the cwd wins.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

from ...core.exceptions import ConfigError
from ..jira.client import normalize_base_url
from ...core.ports.config_provider import (
    ConfigProviderPort,
    AppConfig,
    InstanceConfig,
    ResolvedConfig,
    TrackerConfig,
)


DEFAULT_INSTANCE_NAME = "default"


def config_paths() -> list[Path]:
    """Config file locations, in the order they are tried."""
    home = Path.home()
    return [
        home / ".config" / "md2adf" / "config.json",
        home / ".md2adf.json",
    ]


class EnvironmentConfigProvider(ConfigProviderPort):
    """
    Configuration provider that loads from a config file, environment
    variables and .env files.
    """

    def __init__(
        self,
        config_file: Optional[Path] = None,
        env_file: Optional[Path] = None,
        cli_overrides: Optional[dict[str, Any]] = None,
    ):
        """
        Initialize the config provider.

        Args:
            config_file: Path to JSON config file (auto-detected if not specified)
            env_file: Path to .env file (auto-detected if not specified)
            cli_overrides: Command line argument overrides
        """
        self._values: dict[str, Any] = {}
        self._config_file = config_file
        self._env_file = env_file
        self._cli_overrides = cli_overrides or {}
        self._file_data: Optional[dict[str, Any]] = None
        self._instances: Optional[list[InstanceConfig]] = None
        self.logger = logging.getLogger("EnvironmentConfigProvider")

        # Load configuration
        self._load_env_file()
        self._load_environment()
        self._load_config_file()
        self._apply_cli_overrides()

    # -------------------------------------------------------------------------
    # ConfigProviderPort Implementation
    # -------------------------------------------------------------------------

    @property
    def name(self) -> str:
        return "Environment"

    def load(self) -> AppConfig:
        """Load complete configuration."""
        return AppConfig(
            instances=self.instances,
            base_branch=self.get("base_branch", "main"),
            dry_run=not self.get("execute", False),
            verbose=self.get("verbose", False),
        )

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value."""
        # Normalize key
        key = key.lower().replace("-", "_")

        # Check CLI overrides first
        if key in self._cli_overrides and self._cli_overrides[key] is not None:
            return self._cli_overrides[key]

        return self._values.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value."""
        key = key.lower().replace("-", "_")
        self._values[key] = value
        self._instances = None

    def validate(self) -> list[str]:
        """Validate configuration."""
        errors = []

        if self._file_data is not None:
            if not self._file_data.get("email"):
                errors.append("Missing 'email' in config file")
            for inst in self.instances:
                if not inst.tracker.url:
                    errors.append(f"Instance '{inst.name}' has no baseUrl")
                if not inst.tracker.api_token:
                    errors.append(f"Instance '{inst.name}' has no apiToken")
            if not self.instances:
                errors.append("Config file defines no instances")
            return errors

        if not self.get("jira_url"):
            errors.append("Missing JIRA_URL - set in environment or .env file")
        if not self.get("jira_email"):
            errors.append("Missing JIRA_EMAIL - set in environment or .env file")
        if not self.get("jira_api_token"):
            errors.append("Missing JIRA_API_TOKEN - set in environment or .env file")

        return errors

    def resolve_instance(self, cwd: str) -> ResolvedConfig:
        """
        Resolve which instance to use based on the working directory.

        Falls back to the first configured instance if no path matches.

        Raises:
            ConfigError: If no instance is configured at all
        """
        instances = self.instances
        if not instances:
            raise ConfigError(
                "No Jira instances configured. Create "
                f"{config_paths()[0]} or set JIRA_URL, JIRA_EMAIL and JIRA_API_TOKEN."
            )

        base_branch = self.get("base_branch", "main")

        for inst in instances:
            if inst.matches(cwd):
                self.logger.debug(f"Resolved instance '{inst.name}' for {cwd}")
                return ResolvedConfig(instance=inst, base_branch=base_branch)

        self.logger.debug(f"No instance matches {cwd}, using '{instances[0].name}'")
        return ResolvedConfig(instance=instances[0], base_branch=base_branch)

    # -------------------------------------------------------------------------
    # Instances
    # -------------------------------------------------------------------------

    @property
    def instances(self) -> list[InstanceConfig]:
        """All configured instances (config file first, then environment)."""
        if self._instances is None:
            if self._file_data is not None:
                self._instances = self._instances_from_file(self._file_data)
            else:
                self._instances = self._instances_from_environment()
        return self._instances

    def list_instances(self) -> list[dict[str, Any]]:
        """Summaries of the configured instances (for diagnostics)."""
        return [
            {
                "name": inst.name,
                "url": inst.tracker.url,
                "patterns": list(inst.path_patterns),
            }
            for inst in self.instances
        ]

    def _instances_from_file(self, data: dict[str, Any]) -> list[InstanceConfig]:
        email = data.get("email", "")
        instances = []
        for raw in data.get("instances", []):
            instances.append(InstanceConfig(
                name=raw.get("name", DEFAULT_INSTANCE_NAME),
                tracker=TrackerConfig(
                    url=normalize_base_url(raw.get("baseUrl", "")),
                    email=raw.get("email", email),
                    api_token=raw.get("apiToken", ""),
                ),
                path_patterns=list(raw.get("pathPatterns", [])),
            ))
        return instances

    def _instances_from_environment(self) -> list[InstanceConfig]:
        tracker = TrackerConfig(
            url=normalize_base_url(self.get("jira_url", "")),
            email=self.get("jira_email", ""),
            api_token=self.get("jira_api_token", ""),
        )
        if not tracker.is_valid():
            return []
        return [InstanceConfig(name=DEFAULT_INSTANCE_NAME, tracker=tracker)]

    # -------------------------------------------------------------------------
    # Private Methods
    # -------------------------------------------------------------------------

    def _load_config_file(self) -> None:
        """Load the first readable JSON config file."""
        candidates = [self._config_file] if self._config_file else config_paths()

        for path in candidates:
            if not path.exists():
                continue
            try:
                data = json.loads(path.read_text(encoding="utf-8"))
            except (OSError, json.JSONDecodeError) as e:
                self.logger.error(f"Failed to parse config file {path}: {e}")
                continue

            if not isinstance(data, dict):
                self.logger.error(f"Config file {path} must contain a JSON object")
                continue

            self.logger.debug(f"Loaded config file {path}")
            self._file_data = data
            if data.get("baseBranch"):
                self._values["base_branch"] = data["baseBranch"]
            return

    def _load_env_file(self) -> None:
        """Load values from .env file."""
        env_file = self._find_env_file()
        if not env_file:
            return

        for line in env_file.read_text().splitlines():
            line = line.strip()

            # Skip empty lines and comments
            if not line or line.startswith("#"):
                continue

            # Parse key=value
            if "=" not in line:
                continue

            key, value = line.split("=", 1)
            key = key.strip().lower()
            value = value.strip().strip('"').strip("'")

            self._values[key] = value

        self._normalize_env_keys()

    def _find_env_file(self) -> Optional[Path]:
        """Find .env file."""
        if self._env_file:
            return self._env_file if self._env_file.exists() else None

        cwd_env = Path.cwd() / ".env"
        if cwd_env.exists():
            return cwd_env

        return None

    def _load_environment(self) -> None:
        """Load values from environment variables."""
        for env_key, config_key in ENV_MAPPING.items():
            raw_value = os.environ.get(env_key)
            if raw_value is not None:
                self._values[config_key] = _coerce(raw_value)

    def _normalize_env_keys(self) -> None:
        """Map .env keys (lower-cased env names) onto config keys."""
        for env_key, config_key in ENV_MAPPING.items():
            value = self._values.pop(env_key.lower(), None)
            if value is not None:
                self._values[config_key] = _coerce(value)

    def _apply_cli_overrides(self) -> None:
        """Apply CLI argument overrides."""
        cli_mapping = {
            "jira_url": "jira_url",
            "base": "base_branch",
            "execute": "execute",
            "verbose": "verbose",
        }

        for cli_key, config_key in cli_mapping.items():
            if cli_key in self._cli_overrides and self._cli_overrides[cli_key] is not None:
                self._values[config_key] = self._cli_overrides[cli_key]


ENV_MAPPING = {
    "JIRA_URL": "jira_url",
    "JIRA_EMAIL": "jira_email",
    "JIRA_API_TOKEN": "jira_api_token",
    "MD2ADF_BASE_BRANCH": "base_branch",
    "MD2ADF_VERBOSE": "verbose",
}


def _coerce(raw_value: Any) -> Any:
    """Convert boolean-ish strings."""
    if not isinstance(raw_value, str):
        return raw_value
    if raw_value.lower() in ("true", "1", "yes"):
        return True
    if raw_value.lower() in ("false", "0", "no"):
        return False
    return raw_value
