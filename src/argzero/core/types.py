"""
Type definitions for the dispatch core.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Iterator, List, Optional, Type


class HandlerKind(str, Enum):
    """How a handler is bound when it is invoked."""
    INSTANCE = "instance"
    STATIC = "static"
    CLASS = "class"
    FUNCTION = "function"


@dataclass(frozen=True)
class HandlerDescriptor:
    """A callable bound to a command keyword."""
    keyword: str
    function: Callable[..., Any]
    declaring_type: Optional[type] = None
    kind: HandlerKind = HandlerKind.FUNCTION
    base_type: Optional[type] = None

    @property
    def requires_instance(self) -> bool:
        return self.kind is HandlerKind.INSTANCE

    @property
    def module_name(self) -> str:
        if self.declaring_type is not None:
            return self.declaring_type.__module__
        return self.function.__module__

    @property
    def full_name(self) -> str:
        """Declaring type and method name, e.g. ``JobCommands.run``."""
        owner = self.declaring_type.__name__ if self.declaring_type is not None else self.function.__module__
        return f"{owner}.{self.function.__name__}"

    def create_instance(self) -> Optional[Any]:
        """Construct the declaring type with no arguments when the handler needs one."""
        if self.requires_instance:
            return self.declaring_type()
        return None

    def invoke(self, instance: Optional[Any] = None) -> Any:
        """Call the handler with no parameters."""
        if self.kind is HandlerKind.INSTANCE:
            return self.function(instance)
        if self.kind is HandlerKind.CLASS:
            return self.function(self.declaring_type)
        return self.function()


@dataclass(frozen=True)
class ArgumentInfo:
    """A flag parsed from the command line: ``/name`` or ``/name:value``."""
    name: str
    value: Optional[str] = None

    @property
    def has_value(self) -> bool:
        return self.value is not None


@dataclass
class ParsedArguments:
    """Positional values plus the flags found among them."""
    positional: List[str] = field(default_factory=list)
    flags: List[ArgumentInfo] = field(default_factory=list)

    @classmethod
    def empty(cls) -> 'ParsedArguments':
        return cls()

    def __contains__(self, name: str) -> bool:
        return any(flag.name == name for flag in self.flags)

    def __getitem__(self, name: str) -> Optional[str]:
        flag = self.get_flag(name)
        if flag is None:
            raise KeyError(name)
        return flag.value

    def __len__(self) -> int:
        return len(self.positional)

    def __iter__(self) -> Iterator[str]:
        return iter(self.positional)

    def get_flag(self, name: str) -> Optional[ArgumentInfo]:
        """Return the last flag with ``name``; later occurrences win."""
        found = None
        for flag in self.flags:
            if flag.name == name:
                found = flag
        return found

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        flag = self.get_flag(name)
        if flag is None or flag.value is None:
            return default
        return flag.value

    @property
    def flag_names(self) -> List[str]:
        return [flag.name for flag in self.flags]

    def as_dict(self) -> Dict[str, Optional[str]]:
        return {flag.name: flag.value for flag in self.flags}


class DispatchStatus(str, Enum):
    """Outcome of a single dispatch."""
    NO_ARGUMENTS = "no_arguments"
    UNKNOWN_KEYWORD = "unknown_keyword"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class DispatchResult:
    """What happened when a command line was dispatched."""
    status: DispatchStatus
    keyword: Optional[str] = None
    handler: Optional[HandlerDescriptor] = None
    arguments: Optional[ParsedArguments] = None
    error: Optional[Exception] = None

    @property
    def executed(self) -> bool:
        """True when a handler was found and an invocation was attempted."""
        return self.status in (DispatchStatus.COMPLETED, DispatchStatus.FAILED)

    @property
    def succeeded(self) -> bool:
        return self.status is DispatchStatus.COMPLETED

    @property
    def error_message(self) -> Optional[str]:
        return str(self.error) if self.error is not None else None


@dataclass
class ProviderRegistration:
    """A provider type registered under its short name."""
    name: str
    provider_type: Type[Any]
    capability_type: Type[Any]
    conventional_name: bool = True
