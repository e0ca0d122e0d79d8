"""
Dispatch context.

Owns the registries and the state a running handler reads. A process-wide
context is created on first use; embedders can build their own and pass it
to a Dispatcher instead.
"""

import threading
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Dict, Iterator, List, Optional

from .handler_registry import HandlerRegistry
from .provider_registry import ProviderRegistry
from .tokenizer import ArgumentTokenizer
from .types import ParsedArguments
from ..config.models import ArgZeroConfig


class DispatchContext:
    """Registries, current arguments and recognized flags for one process."""

    def __init__(self, config: Optional[ArgZeroConfig] = None):
        self.config = config or ArgZeroConfig()
        self.handlers = HandlerRegistry()
        self.providers = ProviderRegistry(self, suffix=self.config.dispatch.provider_suffix)
        self.tokenizer = ArgumentTokenizer.from_config(self.config)
        self.arguments = ParsedArguments.empty()
        self.command_line_arguments: List[str] = []
        self._valid_arguments: Dict[str, str] = {}
        self._lock = threading.RLock()

    def add_valid_argument(self, name: str, description: str = "") -> None:
        """Record a flag name the current command understands."""
        with self._lock:
            self._valid_arguments.setdefault(name, description)

    @property
    def valid_arguments(self) -> Dict[str, str]:
        with self._lock:
            return dict(self._valid_arguments)

    def unrecognized_flags(self) -> List[str]:
        """Flags in the current arguments that no provider declared."""
        valid = self.valid_arguments
        return [name for name in self.arguments.flag_names if name not in valid]

    def install(self, arguments: ParsedArguments, command_line_arguments: List[str]) -> None:
        """Make ``arguments`` the current dispatch arguments.

        Recognized flags from the previous dispatch are cleared; providers
        declare them again for the new command.
        """
        with self._lock:
            self.arguments = arguments
            self.command_line_arguments = list(command_line_arguments)
            self._valid_arguments.clear()


_global_context: Optional[DispatchContext] = None
_global_context_lock = threading.Lock()

_active_context: ContextVar[Optional[DispatchContext]] = ContextVar("argzero_active_context", default=None)


def get_global_context(config: Optional[ArgZeroConfig] = None) -> DispatchContext:
    """Get the process-wide context, creating it on first call.

    ``config`` only applies to the call that creates the context.
    """
    global _global_context
    if _global_context is None:
        with _global_context_lock:
            if _global_context is None:
                _global_context = DispatchContext(config)
    return _global_context


@contextmanager
def activate(context: DispatchContext) -> Iterator[DispatchContext]:
    """Make ``context`` the one returned by current_context() inside the block."""
    token = _active_context.set(context)
    try:
        yield context
    finally:
        _active_context.reset(token)


def current_context() -> DispatchContext:
    """The context of the dispatch in progress, else the global context."""
    return _active_context.get() or get_global_context()


def current_arguments() -> ParsedArguments:
    """Arguments of the command being dispatched."""
    return current_context().arguments
