"""
Base class for shell providers.

A shell provider declares the flags its command accepts when the dispatcher
registers it, and offers helpers for reading them back while the command runs.
"""

from typing import Callable, List, Optional

from .context import DispatchContext, current_context
from .markers import RegisterArguments
from .types import ParsedArguments


class ShellProvider(RegisterArguments):
    """Provider with raw-argument bookkeeping and interactive fallbacks."""

    prompt: Callable[[str], str] = staticmethod(input)

    def __init__(self):
        self.raw_arguments: List[str] = []
        self._context: Optional[DispatchContext] = None

    def register_arguments(self, args: List[str], context: DispatchContext) -> None:
        self.raw_arguments = list(args)
        self._context = context

    @property
    def context(self) -> DispatchContext:
        return self._context or current_context()

    @property
    def arguments(self) -> ParsedArguments:
        return self.context.arguments

    def add_valid_argument(self, name: str, description: str = "") -> None:
        self.context.add_valid_argument(name, description)

    @property
    def provider_context_target(self) -> Optional[str]:
        """First non-flag value after the keyword, e.g. the job name."""
        values = self.context.tokenizer.positional_values(self.raw_arguments[1:])
        return values[0] if values else None

    def get_argument(self, name: str, prompt: Optional[str] = None) -> str:
        """Value of flag ``name``, asking the user when it was not given."""
        value = self.arguments.get(name)
        if value is not None:
            return value
        return self.prompt(f"{prompt or f'Please enter {name}'}: ")
