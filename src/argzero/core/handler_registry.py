"""
Keyword to handler registry.

Handlers are only registered by scanning modules for ``@arg_zero`` markers.
"""

import inspect
import threading
from types import ModuleType
from typing import Dict, Iterator, List, Optional, Set

from .markers import get_marker
from .types import HandlerDescriptor, HandlerKind
from ..utils.logging import get_logger


def _defined_in(obj, module: ModuleType) -> bool:
    return getattr(obj, "__module__", None) == module.__name__


class HandlerRegistry:
    """Maps command keywords to handlers; first registration wins."""

    def __init__(self):
        self.logger = get_logger(__name__)
        self._handlers: Dict[str, HandlerDescriptor] = {}
        self._visited: Set[ModuleType] = set()
        self._lock = threading.RLock()

    def register(self, keyword: str, handler: HandlerDescriptor) -> bool:
        """Bind ``keyword`` to ``handler`` unless it is already bound.

        Returns:
            True if the binding was added, False if an earlier one is kept
        """
        with self._lock:
            registered = self._handlers.get(keyword)
            if registered is None:
                self._handlers[keyword] = handler
                self.logger.debug(f"Registered ArgZero {keyword} -> {handler.full_name}")
                return True

        self.logger.warning(
            f"The specified ArgZero is already registered {keyword}, will use {registered.full_name}"
        )
        return False

    def scan(self, module: ModuleType) -> int:
        """Register every marked handler in ``module``; a module is scanned once.

        Returns:
            Number of handlers newly bound
        """
        with self._lock:
            if module in self._visited:
                return 0
            self._visited.add(module)

            count = 0
            for handler in self._iter_handlers(module):
                if self.register(handler.keyword, handler):
                    count += 1

        self.logger.debug(f"Scanned {module.__name__}: {count} handler(s) registered")
        return count

    def is_scanned(self, module: ModuleType) -> bool:
        with self._lock:
            return module in self._visited

    def _iter_handlers(self, module: ModuleType) -> Iterator[HandlerDescriptor]:
        for _, cls in inspect.getmembers(module, inspect.isclass):
            if not _defined_in(cls, module):
                continue
            yield from self._iter_class_handlers(cls)

        for name, function in inspect.getmembers(module, inspect.isfunction):
            if name.startswith("_") or not _defined_in(function, module):
                continue
            marker = get_marker(function)
            if marker is not None:
                yield HandlerDescriptor(marker.keyword, function, None, HandlerKind.FUNCTION, marker.base_type)

    def _iter_class_handlers(self, cls: type) -> Iterator[HandlerDescriptor]:
        # Only methods declared on the class itself
        for name, raw in vars(cls).items():
            if name.startswith("_"):
                continue

            if isinstance(raw, staticmethod):
                kind = HandlerKind.STATIC
            elif isinstance(raw, classmethod):
                kind = HandlerKind.CLASS
            elif inspect.isfunction(raw):
                kind = HandlerKind.INSTANCE
            else:
                continue

            marker = get_marker(raw)
            if marker is None:
                continue

            function = getattr(raw, "__func__", raw)
            yield HandlerDescriptor(marker.keyword, function, cls, kind, marker.base_type)

    def get(self, keyword: str) -> Optional[HandlerDescriptor]:
        with self._lock:
            return self._handlers.get(keyword)

    def __contains__(self, keyword: str) -> bool:
        with self._lock:
            return keyword in self._handlers

    def __len__(self) -> int:
        with self._lock:
            return len(self._handlers)

    def keywords(self) -> List[str]:
        with self._lock:
            return sorted(self._handlers)

    def handlers(self) -> List[HandlerDescriptor]:
        with self._lock:
            return [self._handlers[k] for k in sorted(self._handlers)]
