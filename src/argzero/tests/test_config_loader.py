"""
Test suite for configuration loading system.

This module tests YAML file loading, environment selection, environment
variable overrides and validation error reporting.
"""

import os
from pathlib import Path

import pytest

from argzero.config.loader import ConfigLoader, validate_config_file
from argzero.config.models import ArgZeroConfig, LogLevel, MODULE_SUBDIRECTORY
from argzero.utils.error_handling import ConfigurationError


pytestmark = pytest.mark.unit


@pytest.fixture
def clean_env(monkeypatch):
    """Remove ARGZERO_* variables, including ones a .env file adds during the test."""
    for key in list(os.environ):
        if key.startswith("ARGZERO_"):
            monkeypatch.delenv(key)
    before = set(os.environ)
    yield
    for key in set(os.environ) - before:
        if key.startswith("ARGZERO_"):
            os.environ.pop(key, None)


@pytest.fixture
def loader(tmp_path, clean_env):
    return ConfigLoader(search_root=tmp_path)


def write_yaml(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


class TestConfigLoader:
    """Test the ConfigLoader class functionality."""

    def test_load_default_config(self, loader):
        """Built-in defaults apply when no files exist."""
        config = loader.load_config()

        assert isinstance(config, ArgZeroConfig)
        assert config.app.log_level is LogLevel.WARNING
        assert config.discovery.scan_pattern == "*_arg0.py"
        assert config.dispatch.flag_marker == "/"
        assert config.dispatch.value_delimiter == ":"
        assert config.dispatch.reserved_leading_tokens == 0
        assert config.discovery.module_folders == [
            ".",
            str(Path(config.app.data_dir) / MODULE_SUBDIRECTORY),
        ]

    def test_load_config_from_yaml_file(self, loader, tmp_path):
        config_file = write_yaml(tmp_path / "shell.yaml", """
app:
  name: "Build Shell"
discovery:
  module_folders: "plugins, more-plugins"
dispatch:
  reserved_leading_tokens: 1
""")

        config = loader.load_config(str(config_file))

        assert config.app.name == "Build Shell"
        assert config.discovery.module_folders == ["plugins", "more-plugins"]
        assert config.dispatch.reserved_leading_tokens == 1
        assert config.dispatch.pause_flag == "/pause"
        assert loader.config_path == config_file

    def test_default_file_is_discovered(self, loader, tmp_path):
        write_yaml(tmp_path / "argzero.yaml", "app:\n  name: Discovered\n")

        assert loader.load_config().app.name == "Discovered"

    def test_configs_directory_takes_precedence(self, loader, tmp_path):
        write_yaml(tmp_path / "argzero.yaml", "app:\n  name: Root\n")
        write_yaml(tmp_path / "configs" / "default.yaml", "app:\n  name: Configs\n")

        assert loader.load_config().app.name == "Configs"

    def test_environment_file_merges_over_default(self, loader, tmp_path, monkeypatch):
        write_yaml(tmp_path / "configs" / "default.yaml", "app:\n  name: Default\n  debug: false\n")
        write_yaml(tmp_path / "configs" / "ci.yaml", "app:\n  debug: true\n")
        monkeypatch.setenv("ARGZERO_ENV", "ci")

        config = loader.load_config()

        assert config.app.name == "Default"
        assert config.app.debug is True

    def test_environment_variable_overrides(self, loader, tmp_path, monkeypatch):
        config_file = write_yaml(tmp_path / "shell.yaml", "app:\n  name: From File\n")
        monkeypatch.setenv("ARGZERO_APP_NAME", "From Env")
        monkeypatch.setenv("ARGZERO_DISCOVERY_SCAN_PATTERN", "*_cmd.py")

        config = loader.load_config(config_file)

        assert config.app.name == "From Env"
        assert config.discovery.scan_pattern == "*_cmd.py"

    def test_environment_variable_type_conversion(self, loader, monkeypatch):
        monkeypatch.setenv("ARGZERO_APP_DEBUG", "yes")
        monkeypatch.setenv("ARGZERO_DISCOVERY_SCAN_ON_STARTUP", "off")
        monkeypatch.setenv("ARGZERO_DISPATCH_RESERVED_LEADING_TOKENS", "2")

        config = loader.load_config()

        assert config.app.debug is True
        assert config.discovery.scan_on_startup is False
        assert config.dispatch.reserved_leading_tokens == 2

    def test_dotenv_file_is_loaded(self, tmp_path, clean_env):
        (tmp_path / ".env").write_text("ARGZERO_APP_NAME=Dotenv Shell\n", encoding="utf-8")

        config = ConfigLoader(search_root=tmp_path).load_config()

        assert config.app.name == "Dotenv Shell"

    def test_missing_cli_config_file_raises(self, loader, tmp_path):
        with pytest.raises(ConfigurationError) as exc_info:
            loader.load_config(tmp_path / "nonexistent.yaml")

        assert "not found" in str(exc_info.value)

    def test_malformed_yaml_handling(self, loader, tmp_path):
        config_file = write_yaml(tmp_path / "bad.yaml", 'app:\n  name: "unterminated\n  debug: [\n')

        with pytest.raises(ConfigurationError) as exc_info:
            loader.load_config(config_file)

        assert "Invalid YAML" in str(exc_info.value)

    def test_non_mapping_yaml_is_rejected(self, loader, tmp_path):
        config_file = write_yaml(tmp_path / "list.yaml", "- one\n- two\n")

        with pytest.raises(ConfigurationError) as exc_info:
            loader.load_config(config_file)

        assert "must contain a YAML object" in str(exc_info.value)

    def test_empty_yaml_uses_defaults(self, loader, tmp_path):
        config_file = write_yaml(tmp_path / "empty.yaml", "")

        assert loader.load_config(config_file).dispatch.flag_marker == "/"

    def test_validation_errors_are_reported(self, loader, tmp_path):
        config_file = write_yaml(tmp_path / "invalid.yaml", """
dispatch:
  flag_marker: ":"
  value_delimiter: ":"
""")

        with pytest.raises(ConfigurationError) as exc_info:
            loader.load_config(config_file)

        assert exc_info.value.details["error_type"] == "validation"
        assert "flag_marker and value_delimiter must differ" in str(exc_info.value)

    @pytest.mark.parametrize("field,value", [
        ("flag_marker", "--"),
        ("reserved_leading_tokens", -1),
        ("reserved_leading_tokens", 17),
    ])
    def test_dispatch_field_bounds(self, loader, tmp_path, field, value):
        config_file = write_yaml(tmp_path / "bounds.yaml", f"dispatch:\n  {field}: {value!r}\n")

        with pytest.raises(ConfigurationError):
            loader.load_config(config_file)

    def test_empty_scan_pattern_is_rejected(self, loader, monkeypatch):
        monkeypatch.setenv("ARGZERO_DISCOVERY_SCAN_PATTERN", "  ")

        with pytest.raises(ConfigurationError):
            loader.load_config()

    def test_get_config_caches_and_reload_replaces(self, loader):
        first = loader.get_config()

        assert loader.get_config() is first
        assert loader.reload_config() is not first


class TestConfigLoaderFunctions:
    """Test the module-level configuration functions."""

    def test_validate_config_file(self, tmp_path, clean_env):
        good = write_yaml(tmp_path / "good.yaml", "app:\n  name: Fine\n")
        bad = write_yaml(tmp_path / "bad.yaml", "dispatch:\n  value_delimiter: '::'\n")

        assert validate_config_file(good) == (True, None)
        valid, message = validate_config_file(bad)
        assert valid is False
        assert "value_delimiter" in message
