"""
ArgZero Utilities

This module provides logging and error handling helpers used throughout ArgZero.
"""

from .logging import (
    setup_logging,
    get_logger,
    log_performance,
    is_logging_initialized,
)

from .error_handling import (
    ArgZeroError,
    ModuleLoadError,
    ConfigurationError,
    RegistrationError,
    handle_module_operation,
)

__all__ = [
    # Logging utilities
    "setup_logging",
    "get_logger",
    "log_performance",
    "is_logging_initialized",

    # Error handling utilities
    "ArgZeroError",
    "ModuleLoadError",
    "ConfigurationError",
    "RegistrationError",
    "handle_module_operation",
]
