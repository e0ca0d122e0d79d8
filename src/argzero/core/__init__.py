"""
ArgZero dispatch core.

Module discovery, handler and provider registries, argument tokenization and
the dispatcher that ties them together.
"""

from .markers import arg_zero, get_marker, ArgZeroMarker, RegisterArguments
from .types import (
    ArgumentInfo,
    DispatchResult,
    DispatchStatus,
    HandlerDescriptor,
    HandlerKind,
    ParsedArguments,
    ProviderRegistration,
)
from .module_locator import ModuleLocator
from .handler_registry import HandlerRegistry
from .provider_registry import ProviderRegistry
from .tokenizer import ArgumentTokenizer
from .context import (
    DispatchContext,
    activate,
    current_arguments,
    current_context,
    get_global_context,
)
from .dispatcher import Dispatcher, execute_arg_zero, exit_success
from .providers import ShellProvider

__all__ = [
    "arg_zero",
    "get_marker",
    "ArgZeroMarker",
    "RegisterArguments",
    "ArgumentInfo",
    "DispatchResult",
    "DispatchStatus",
    "HandlerDescriptor",
    "HandlerKind",
    "ParsedArguments",
    "ProviderRegistration",
    "ModuleLocator",
    "HandlerRegistry",
    "ProviderRegistry",
    "ArgumentTokenizer",
    "DispatchContext",
    "activate",
    "current_arguments",
    "current_context",
    "get_global_context",
    "Dispatcher",
    "execute_arg_zero",
    "exit_success",
    "ShellProvider",
]
