"""
Error types and error handling helpers for ArgZero.

Failures inside the dispatch core are contained where they are detected;
these types carry enough detail for the containing layer to report them.
"""

import functools
import logging
from typing import Any, Callable, Dict, Optional

from .logging import get_logger


class ArgZeroError(Exception):
    """Base exception for all ArgZero errors."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ModuleLoadError(ArgZeroError):
    """An extension module could not be loaded."""
    pass


class ConfigurationError(ArgZeroError):
    """Configuration-related error."""
    pass


class RegistrationError(ArgZeroError):
    """Invalid handler or provider declaration."""
    pass


def handle_module_operation(operation_name: str, logger: Optional[logging.Logger] = None):
    """
    Decorator to standardize extension module error handling.

    The wrapped function receives the module path as its first positional
    argument after ``self``; any failure is logged and re-raised as
    ``ModuleLoadError`` carrying that path.

    Args:
        operation_name: Human-readable name of the operation
        logger: Optional logger instance (defaults to an operation-specific logger)
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(self, path, *args, **kwargs) -> Any:
            _logger = logger or get_logger(f"argzero.core.{operation_name}")

            try:
                _logger.debug(f"Starting {operation_name}: {path}")
                return func(self, path, *args, **kwargs)

            except ModuleLoadError:
                raise

            except (FileNotFoundError, PermissionError, OSError) as e:
                raise ModuleLoadError(
                    f"{operation_name} failed for {path}: {e}",
                    details={"error_type": "filesystem", "path": str(path), "original_error": str(e)}
                ) from e

            except SyntaxError as e:
                raise ModuleLoadError(
                    f"{operation_name} failed for {path}: {e}",
                    details={"error_type": "syntax", "path": str(path), "original_error": str(e)}
                ) from e

            except Exception as e:
                _logger.debug(f"{operation_name} failed - unexpected error", exc_info=True)
                raise ModuleLoadError(
                    f"{operation_name} failed for {path}: {e}",
                    details={"error_type": "unexpected", "path": str(path), "original_error": str(e)}
                ) from e

        return wrapper

    return decorator
