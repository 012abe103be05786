#!/usr/bin/env python3
"""Hierarchical configuration for PasteCleaner.

This module provides configuration management with:
- 4-level precedence hierarchy (defaults, file, environment, CLI)
- YAML configuration files
- Environment variable overrides (PASTECLEANER_*)
- An immutable AppConfig snapshot injected into command runners

Example:
    >>> config = ConfigManager()
    >>> config.load_file("pastecleaner.yaml")
    >>> config.get("logging.level", default="INFO")
    >>> app_config = config.to_app_config()
"""

import os
import sys
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from pastecleaner.core.constants import (
    ErrorCode,
    SCHEMA_RESOURCE,
    SETTINGS_FILE_NAME,
)
from pastecleaner.core.errors import ConfigurationError
from pastecleaner.core.logging import LEVELS

RESOURCES_DIR = Path(__file__).resolve().parent.parent / "resources"
ENV_PREFIX = "PASTECLEANER_"


class ConfigSource(Enum):
    """Configuration source precedence levels."""

    COMPILED_DEFAULTS = 1  # Lowest precedence
    CONFIG_FILE = 2
    ENVIRONMENT = 3
    CLI_ARGS = 4  # Highest precedence


def default_settings_path() -> Path:
    """Settings file beside the running program, named after it."""
    program = Path(sys.argv[0] or "pastecleaner").resolve()
    return program.parent / SETTINGS_FILE_NAME


@dataclass(frozen=True)
class AppConfig:
    """Resolved configuration for one invocation."""

    settings_file: Path
    schema_file: Path
    templates_dir: Path
    log_level: str = "INFO"
    log_file: Optional[Path] = None
    indent: int = 2


class ConfigManager:
    """Hierarchical configuration manager.

    Manages configuration from multiple sources with precedence:
    1. Compiled defaults (lowest)
    2. YAML config file
    3. Environment variables (PASTECLEANER_*)
    4. CLI arguments (highest)
    """

    def __init__(self, config_file: Optional[str] = None, environ: Optional[Dict[str, str]] = None):
        """Initialize configuration manager.

        Args:
            config_file: Optional YAML config file to load
            environ: Environment mapping (defaults to os.environ)
        """
        self._config: Dict[ConfigSource, Dict[str, Any]] = {}
        self._config[ConfigSource.COMPILED_DEFAULTS] = self._defaults()

        if config_file:
            self.load_file(config_file)

        self._load_environment(os.environ if environ is None else environ)

    @staticmethod
    def _defaults() -> Dict[str, Any]:
        return {
            "settings_file": str(default_settings_path()),
            "schema_file": str(RESOURCES_DIR / SCHEMA_RESOURCE),
            "templates_dir": str(RESOURCES_DIR / "templates"),
            "logging": {
                "level": "INFO",
                "file": None,
            },
            "output": {
                "indent": 2,
            },
        }

    def load_file(self, file_path: str) -> None:
        """Load configuration from YAML file.

        Args:
            file_path: Path to YAML config file

        Raises:
            ConfigurationError: If file cannot be loaded or parsed
        """
        path = Path(file_path).expanduser().resolve()

        if not path.is_file():
            raise ConfigurationError(f"Config file not found: {file_path}", ErrorCode.NOT_FOUND)

        try:
            with open(path, "r", encoding="utf-8") as f:
                config_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"YAML parse error in {file_path}: {e}") from e
        except OSError as e:
            raise ConfigurationError(
                f"Error loading config {file_path}: {e}", ErrorCode.INTERNAL_ERROR
            ) from e

        if config_data is None:
            config_data = {}
        if not isinstance(config_data, dict):
            raise ConfigurationError(f"Invalid config format in {file_path}")

        self._config[ConfigSource.CONFIG_FILE] = config_data

    def _load_environment(self, environ: Dict[str, str]) -> None:
        """Load configuration from environment variables.

        Environment variables in format: PASTECLEANER_SECTION__KEY=value
        Example: PASTECLEANER_LOGGING__LEVEL=DEBUG
        """
        env_config: Dict[str, Any] = {}

        for key, value in environ.items():
            if not key.startswith(ENV_PREFIX):
                continue

            parts = key[len(ENV_PREFIX):].lower().split("__")

            current = env_config
            for part in parts[:-1]:
                current = current.setdefault(part, {})
            current[parts[-1]] = self._parse_env_value(value)

        if env_config:
            self._config[ConfigSource.ENVIRONMENT] = env_config

    def _parse_env_value(self, value: str) -> Any:
        """Parse environment variable value (int or str)."""
        try:
            return int(value)
        except ValueError:
            return value

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by key.

        Args:
            key: Dot-separated key path (e.g., "logging.level")
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        for source in sorted(self._config.keys(), key=lambda s: s.value, reverse=True):
            value = self._get_nested(self._config[source], key)
            if value is not None:
                return value

        return default

    def _get_nested(self, config: Dict[str, Any], key: str) -> Optional[Any]:
        """Get value from nested dictionary using dot notation."""
        current: Any = config
        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return None
            current = current[part]
        return current

    def set(self, key: str, value: Any, source: ConfigSource = ConfigSource.CLI_ARGS) -> None:
        """Set configuration value.

        Args:
            key: Dot-separated key path
            value: Value to set
            source: Configuration source level
        """
        current = self._config.setdefault(source, {})
        parts = key.split(".")
        for part in parts[:-1]:
            current = current.setdefault(part, {})
        current[parts[-1]] = value

    def to_app_config(self) -> AppConfig:
        """Resolve all sources into an AppConfig.

        Raises:
            ConfigurationError: If a value has the wrong type
        """
        indent = self.get("output.indent", 2)
        if not isinstance(indent, int) or indent < 0:
            raise ConfigurationError(f"output.indent must be a non-negative integer: {indent!r}")

        log_level = str(self.get("logging.level", "INFO")).upper()
        if log_level not in LEVELS:
            raise ConfigurationError(
                f"logging.level must be one of {', '.join(LEVELS)}: {log_level!r}"
            )

        log_file = self.get("logging.file")
        return AppConfig(
            settings_file=Path(self.get("settings_file")).expanduser().resolve(),
            schema_file=Path(self.get("schema_file")).expanduser().resolve(),
            templates_dir=Path(self.get("templates_dir")).expanduser().resolve(),
            log_level=log_level,
            log_file=Path(log_file).expanduser() if log_file else None,
            indent=indent,
        )
