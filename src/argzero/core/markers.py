"""
Declarative markers consumed from extension modules.

A handler is any public method marked with ``@arg_zero``::

    class BuildCommands:
        @arg_zero("build", base_type=BuildArguments)
        def build(self):
            args = current_arguments()
            ...

A provider is any concrete subclass of a ``RegisterArguments`` capability.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, List, Optional

from ..utils.error_handling import RegistrationError


MARKER_ATTRIBUTE = "__arg_zero__"


@dataclass(frozen=True)
class ArgZeroMarker:
    """Keyword and optional capability type declared by ``@arg_zero``."""
    keyword: str
    base_type: Optional[type] = None


def arg_zero(keyword: str, base_type: Optional[type] = None) -> Callable:
    """Mark a method (plain, static or class) as the handler for ``keyword``.

    Args:
        keyword: Command keyword matched against the first command-line token
        base_type: Capability type whose providers are registered before the
            handler runs
    """
    if not isinstance(keyword, str) or not keyword.strip():
        raise RegistrationError("arg_zero keyword must be a non-empty string",
                                details={"keyword": keyword})
    if base_type is not None and not isinstance(base_type, type):
        raise RegistrationError(f"arg_zero base_type must be a class, got {base_type!r}",
                                details={"keyword": keyword})

    marker = ArgZeroMarker(keyword, base_type)

    def decorator(target):
        # staticmethod/classmethod wrappers carry the marker on the function
        function = getattr(target, "__func__", target)
        setattr(function, MARKER_ATTRIBUTE, marker)
        return target

    return decorator


def get_marker(target: Any) -> Optional[ArgZeroMarker]:
    """Return the marker on a function or static/class method wrapper, if any."""
    function = getattr(target, "__func__", target)
    marker = getattr(function, MARKER_ATTRIBUTE, None)
    return marker if isinstance(marker, ArgZeroMarker) else None


class RegisterArguments(ABC):
    """Capability implemented by provider types.

    Providers are constructed with no arguments and handed the raw command
    line so they can declare the flags their command understands.
    """

    @abstractmethod
    def register_arguments(self, args: List[str], context: Any) -> None:
        """Declare recognized flags for the current command.

        Args:
            args: Raw command-line tokens, keyword included
            context: DispatchContext receiving ``add_valid_argument`` calls
        """
