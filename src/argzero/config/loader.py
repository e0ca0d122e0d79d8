"""
Configuration loading system for ArgZero.

This module handles loading, merging, and validating configuration from
YAML files and environment variables.
"""

import os
from pathlib import Path
from typing import Optional, Dict, Any, Union
import yaml
from pydantic import ValidationError
from dotenv import load_dotenv

from .models import ArgZeroConfig
from ..utils.error_handling import ConfigurationError


ENV_PREFIX = "ARGZERO_"


class ConfigLoader:
    """
    Configuration loader that supports multiple sources and validation.

    Loading priority (highest to lowest):
    1. Environment variables (ARGZERO_<SECTION>_<FIELD>)
    2. CLI-specified config file
    3. Environment-specific config (selected by ARGZERO_ENV)
    4. Default configuration file
    5. Built-in defaults (from Pydantic models)
    """

    def __init__(self, search_root: Optional[Union[str, Path]] = None):
        """Initialize the configuration loader.

        Args:
            search_root: Directory searched for default config files (defaults to cwd)
        """
        self._config: Optional[ArgZeroConfig] = None
        self._config_path: Optional[Path] = None
        self._search_root = Path(search_root) if search_root else Path(".")

        env_file = self._search_root / ".env"
        if env_file.exists():
            load_dotenv(env_file)

    @property
    def config_path(self) -> Optional[Path]:
        """Path of the explicitly requested config file, if any."""
        return self._config_path

    def load_config(self, config_path: Optional[Union[str, Path]] = None) -> ArgZeroConfig:
        """
        Load configuration from multiple sources and validate it.

        Args:
            config_path: Optional path to a specific config file

        Returns:
            Validated ArgZeroConfig instance

        Raises:
            ConfigurationError: If configuration loading or validation fails
        """
        try:
            config_data: Dict[str, Any] = {}

            default_config_path = self._find_default_config()
            if default_config_path:
                config_data = self._deep_merge(config_data, self._load_yaml_file(default_config_path))

            env_config_path = self._find_environment_config()
            if env_config_path and env_config_path != default_config_path:
                config_data = self._deep_merge(config_data, self._load_yaml_file(env_config_path))

            if config_path:
                cli_config_path = Path(config_path)
                if not cli_config_path.exists():
                    raise ConfigurationError(f"Specified config file not found: {config_path}")

                config_data = self._deep_merge(config_data, self._load_yaml_file(cli_config_path))
                self._config_path = cli_config_path

            config_data = self._apply_env_overrides(config_data)

            self._config = ArgZeroConfig(**config_data)
            return self._config

        except ValidationError as e:
            raise ConfigurationError(
                f"Configuration validation failed: {self._format_validation_error(e)}",
                details={"error_type": "validation"}
            ) from e
        except ConfigurationError:
            raise
        except Exception as e:
            raise ConfigurationError(f"Failed to load configuration: {e}") from e

    def get_config(self) -> ArgZeroConfig:
        """Get the current configuration, loading it if necessary."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def reload_config(self, config_path: Optional[Union[str, Path]] = None) -> ArgZeroConfig:
        """Reload configuration from sources."""
        self._config = None
        return self.load_config(config_path)

    def _find_default_config(self) -> Optional[Path]:
        """Find the default configuration file."""
        candidates = [
            "configs/default.yaml",
            "configs/default.yml",
            "config/default.yaml",
            "config/default.yml",
            "argzero.yaml",
            "argzero.yml",
        ]

        for candidate in candidates:
            path = self._search_root / candidate
            if path.exists():
                return path

        return None

    def _find_environment_config(self) -> Optional[Path]:
        """Find environment-specific configuration file."""
        env = os.getenv("ARGZERO_ENV")
        if not env:
            return None

        candidates = [
            f"configs/{env}.yaml",
            f"configs/{env}.yml",
            f"config/{env}.yaml",
            f"config/{env}.yml",
        ]

        for candidate in candidates:
            path = self._search_root / candidate
            if path.exists():
                return path

        return None

    def _load_yaml_file(self, file_path: Path) -> Dict[str, Any]:
        """
        Load and parse a YAML configuration file.

        Raises:
            ConfigurationError: If file cannot be loaded or parsed
        """
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)

            if data is None:
                return {}

            if not isinstance(data, dict):
                raise ConfigurationError(f"Configuration file {file_path} must contain a YAML object (dictionary)")

            return data

        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {file_path}: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Cannot read configuration file {file_path}: {e}") from e

    def _deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Deep merge two configuration dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    def _apply_env_overrides(self, config_data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Apply environment variable overrides to configuration.

        ARGZERO_DISCOVERY_SCAN_PATTERN overrides discovery.scan_pattern: the
        first segment names the section, the rest is the field name.
        ARGZERO_ENV only selects the environment file and is not applied.
        """
        result = config_data.copy()

        for env_key, env_value in os.environ.items():
            if not env_key.startswith(ENV_PREFIX) or env_key == "ARGZERO_ENV":
                continue

            section, _, field = env_key[len(ENV_PREFIX):].lower().partition('_')
            if not section or not field:
                continue

            section_data = result.get(section)
            if section_data is None:
                section_data = {}
            elif not isinstance(section_data, dict):
                continue
            else:
                section_data = dict(section_data)

            section_data[field] = self._convert_env_value(env_value)
            result[section] = section_data

        return result

    def _convert_env_value(self, value: str) -> Any:
        """Convert environment variable string to bool or int where it looks like one."""
        if value.lower() in ('true', 'yes', 'on'):
            return True
        elif value.lower() in ('false', 'no', 'off'):
            return False

        try:
            return int(value)
        except ValueError:
            pass

        # Comma-separated lists stay strings; the models split them.
        return value

    def _format_validation_error(self, error: ValidationError) -> str:
        """Format a Pydantic validation error for user-friendly display."""
        messages = []
        for err in error.errors():
            location = " -> ".join(str(loc) for loc in err['loc'])
            message = err['msg']
            value = err.get('input', 'N/A')
            messages.append(f"  {location}: {message} (got: {value})")

        return "Validation errors:\n" + "\n".join(messages)


# Global configuration loader instance
_config_loader = ConfigLoader()


def load_config(config_path: Optional[Union[str, Path]] = None) -> ArgZeroConfig:
    """
    Load configuration from multiple sources.

    Raises:
        ConfigurationError: If configuration loading fails
    """
    return _config_loader.load_config(config_path)


def get_config() -> ArgZeroConfig:
    """Get the current configuration, loading it if necessary."""
    return _config_loader.get_config()


def reload_config(config_path: Optional[Union[str, Path]] = None) -> ArgZeroConfig:
    """Reload configuration from sources."""
    return _config_loader.reload_config(config_path)


def validate_config_file(config_path: Union[str, Path]) -> tuple[bool, Optional[str]]:
    """
    Validate a configuration file without loading it globally.

    Returns:
        Tuple of (is_valid, error_message)
    """
    try:
        ConfigLoader().load_config(config_path)
        return True, None
    except ConfigurationError as e:
        return False, str(e)
