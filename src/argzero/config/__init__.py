"""
ArgZero Configuration System

    from argzero.config import get_config, load_config

    config = get_config()
    print(config.discovery.module_folders)   # [".", "~/.argzero/arg0"]
    print(config.dispatch.flag_marker)       # "/"
"""

from .loader import (
    ConfigLoader,
    load_config,
    get_config,
    reload_config,
    validate_config_file,
)

from .models import (
    ArgZeroConfig,
    AppConfig,
    DiscoveryConfig,
    DispatchConfig,
    LogLevel,
)

from ..utils.error_handling import ConfigurationError

__all__ = [
    "ConfigLoader",
    "get_config",
    "load_config",
    "reload_config",
    "validate_config_file",
    "ConfigurationError",
    "ArgZeroConfig",
    "AppConfig",
    "DiscoveryConfig",
    "DispatchConfig",
    "LogLevel",
]
