"""
Short name to provider type registry.
"""

import inspect
import threading
from types import ModuleType
from typing import Any, Dict, List, Optional, Type

from .types import ProviderRegistration
from ..utils.logging import get_logger


DEFAULT_PROVIDER_SUFFIX = "Provider"


class ProviderRegistry:
    """Registers provider types by short name; collisions keep the first."""

    def __init__(self, context: Any = None, suffix: str = DEFAULT_PROVIDER_SUFFIX):
        """
        Args:
            context: DispatchContext passed to each provider's register_arguments
            suffix: Conventional type-name suffix stripped to form the short name
        """
        self.context = context
        self.suffix = suffix
        self.logger = get_logger(__name__)
        self._providers: Dict[str, ProviderRegistration] = {}
        self._lock = threading.RLock()

    def register_providers(self, capability_type: type, raw_args: List[str], module: ModuleType) -> List[str]:
        """Register every concrete ``capability_type`` subclass defined in ``module``.

        Each provider is constructed with no arguments and asked to register
        its arguments before it is recorded.

        Returns:
            Short names computed for the providers found, in discovery order
        """
        names = []
        with self._lock:
            for provider_type in self.find_provider_types(capability_type, module):
                provider = provider_type()
                provider.register_arguments(list(raw_args), self.context)

                name, conventional = self.short_name(provider_type)
                if not conventional:
                    self.logger.warning(
                        f"For clarity and convention, the name of type {provider_type.__name__} "
                        f"should end with '{self.suffix}'"
                    )

                if name not in self._providers:
                    self._providers[name] = ProviderRegistration(name, provider_type, capability_type, conventional)
                    self.logger.debug(f"Registered provider {name} -> {provider_type.__qualname__}")
                names.append(name)

        return names

    def find_provider_types(self, capability_type: type, module: ModuleType) -> List[type]:
        """Concrete subclasses of ``capability_type`` declared in ``module``."""
        found = []
        for _, obj in inspect.getmembers(module, inspect.isclass):
            if obj is capability_type or obj.__module__ != module.__name__:
                continue
            if issubclass(obj, capability_type) and not inspect.isabstract(obj):
                found.append(obj)
        return found

    def short_name(self, provider_type: type) -> tuple[str, bool]:
        """Strip the conventional suffix; returns (name, followed_convention)."""
        name = provider_type.__name__
        if self.suffix and name.endswith(self.suffix) and len(name) > len(self.suffix):
            return name[:-len(self.suffix)], True
        return name, False

    def get(self, name: str) -> Optional[Type[Any]]:
        with self._lock:
            registration = self._providers.get(name)
            return registration.provider_type if registration else None

    def get_registration(self, name: str) -> Optional[ProviderRegistration]:
        with self._lock:
            return self._providers.get(name)

    def __contains__(self, name: str) -> bool:
        with self._lock:
            return name in self._providers

    def __len__(self) -> int:
        with self._lock:
            return len(self._providers)

    def names(self) -> List[str]:
        with self._lock:
            return list(self._providers)
