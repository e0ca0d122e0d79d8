"""
ArgZero - first-argument command dispatch with plugin discovery.
"""

__version__ = "0.1.0"

from .core import (
    arg_zero,
    RegisterArguments,
    ShellProvider,
    Dispatcher,
    DispatchContext,
    DispatchResult,
    DispatchStatus,
    ParsedArguments,
    current_arguments,
    current_context,
    execute_arg_zero,
    get_global_context,
)

__all__ = [
    "__version__",
    "arg_zero",
    "RegisterArguments",
    "ShellProvider",
    "Dispatcher",
    "DispatchContext",
    "DispatchResult",
    "DispatchStatus",
    "ParsedArguments",
    "current_arguments",
    "current_context",
    "execute_arg_zero",
    "get_global_context",
]
