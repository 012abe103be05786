#!/usr/bin/env python3
"""Tests for hierarchical configuration."""

import sys
from pathlib import Path

import pytest

from pastecleaner.core.config import (
    RESOURCES_DIR,
    ConfigManager,
    ConfigSource,
    default_settings_path,
)
from pastecleaner.core.constants import ErrorCode
from pastecleaner.core.errors import ConfigurationError


class TestDefaults:
    """Tests for compiled defaults."""

    def test_default_settings_path(self, monkeypatch, temp_dir):
        """Settings live beside the running program."""
        monkeypatch.setattr(sys, "argv", [str(temp_dir / "pastecleaner")])
        assert default_settings_path() == temp_dir.resolve() / "pastecleaner.json"

    def test_app_config_defaults(self):
        """Defaults resolve to packaged resources."""
        app_config = ConfigManager(environ={}).to_app_config()

        assert app_config.schema_file == (RESOURCES_DIR / "settings.schema.json").resolve()
        assert app_config.templates_dir == (RESOURCES_DIR / "templates").resolve()
        assert app_config.log_level == "INFO"
        assert app_config.log_file is None
        assert app_config.indent == 2

    def test_packaged_resources_exist(self):
        """The schema and the info template ship with the package."""
        assert (RESOURCES_DIR / "settings.schema.json").is_file()
        assert (RESOURCES_DIR / "templates" / "info.txt.j2").is_file()


class TestConfigFile:
    """Tests for YAML configuration files."""

    def test_load_yaml(self, temp_dir):
        """Values from the file override defaults."""
        config_file = temp_dir / "config.yaml"
        config_file.write_text("logging:\n  level: debug\noutput:\n  indent: 4\n")

        manager = ConfigManager(str(config_file), environ={})
        app_config = manager.to_app_config()

        assert app_config.log_level == "DEBUG"
        assert app_config.indent == 4

    def test_empty_file(self, temp_dir):
        """An empty file keeps defaults."""
        config_file = temp_dir / "config.yaml"
        config_file.write_text("")

        assert ConfigManager(str(config_file), environ={}).get("output.indent") == 2

    def test_missing_file(self, temp_dir):
        """A missing file is a configuration error."""
        with pytest.raises(ConfigurationError) as exc_info:
            ConfigManager(str(temp_dir / "missing.yaml"), environ={})
        assert exc_info.value.error_code == ErrorCode.NOT_FOUND

    def test_invalid_yaml(self, temp_dir):
        """Unparseable YAML is a configuration error."""
        config_file = temp_dir / "config.yaml"
        config_file.write_text("logging: [unclosed\n")

        with pytest.raises(ConfigurationError, match="YAML parse error"):
            ConfigManager(str(config_file), environ={})

    def test_not_a_mapping(self, temp_dir):
        """A top-level list is rejected."""
        config_file = temp_dir / "config.yaml"
        config_file.write_text("- one\n- two\n")

        with pytest.raises(ConfigurationError, match="Invalid config format"):
            ConfigManager(str(config_file), environ={})


class TestPrecedence:
    """Tests for source precedence."""

    def test_environment_overrides_file(self, temp_dir):
        """Environment variables win over the config file."""
        config_file = temp_dir / "config.yaml"
        config_file.write_text("logging:\n  level: DEBUG\n")

        manager = ConfigManager(
            str(config_file), environ={"PASTECLEANER_LOGGING__LEVEL": "WARNING"}
        )
        assert manager.get("logging.level") == "WARNING"

    def test_environment_integer(self):
        """Numeric environment values are parsed as integers."""
        manager = ConfigManager(environ={"PASTECLEANER_OUTPUT__INDENT": "0"})
        assert manager.to_app_config().indent == 0

    def test_unrelated_environment_ignored(self):
        """Variables without the prefix are ignored."""
        manager = ConfigManager(environ={"LOGGING__LEVEL": "ERROR"})
        assert manager.get("logging.level") == "INFO"

    def test_cli_overrides_environment(self, temp_dir):
        """CLI values win over everything."""
        manager = ConfigManager(environ={"PASTECLEANER_SETTINGS_FILE": "/env/settings.json"})
        manager.set("settings_file", str(temp_dir / "cli.json"))

        assert manager.to_app_config().settings_file == (temp_dir / "cli.json").resolve()

    def test_set_lower_source(self):
        """A value set at a lower level does not shadow a higher one."""
        manager = ConfigManager(environ={"PASTECLEANER_LOGGING__LEVEL": "ERROR"})
        manager.set("logging.level", "DEBUG", source=ConfigSource.CONFIG_FILE)

        assert manager.get("logging.level") == "ERROR"

    def test_get_default(self):
        """Unknown keys fall back to the given default."""
        assert ConfigManager(environ={}).get("no.such.key", default="x") == "x"


class TestAppConfig:
    """Tests for AppConfig resolution."""

    def test_log_file(self, temp_dir):
        """A configured log file is resolved to a path."""
        manager = ConfigManager(environ={})
        manager.set("logging.file", str(temp_dir / "cleaner.log"))

        assert manager.to_app_config().log_file == Path(temp_dir / "cleaner.log")

    @pytest.mark.parametrize("indent", [-1, "wide"])
    def test_invalid_indent(self, indent):
        """Indentation must be a non-negative integer."""
        manager = ConfigManager(environ={})
        manager.set("output.indent", indent)

        with pytest.raises(ConfigurationError, match="output.indent"):
            manager.to_app_config()

    def test_log_level_case_insensitive(self):
        manager = ConfigManager(environ={"PASTECLEANER_LOGGING__LEVEL": "warning"})
        assert manager.to_app_config().log_level == "WARNING"

    def test_invalid_log_level(self):
        """Unknown levels are refused before logging is set up."""
        manager = ConfigManager(environ={"PASTECLEANER_LOGGING__LEVEL": "verbose"})

        with pytest.raises(ConfigurationError, match="logging.level"):
            manager.to_app_config()
