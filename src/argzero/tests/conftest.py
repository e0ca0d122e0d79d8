"""
Shared pytest configuration for ArgZero tests.
"""

import sys
import textwrap
import uuid
from types import ModuleType
from unittest.mock import Mock

import pytest

from argzero.config.models import ArgZeroConfig
from argzero.core.context import DispatchContext
from argzero.core.dispatcher import Dispatcher


@pytest.fixture
def config():
    """Default configuration."""
    return ArgZeroConfig()


@pytest.fixture
def context(config):
    """An isolated dispatch context (not the global one)."""
    return DispatchContext(config)


@pytest.fixture
def pause():
    return Mock()


@pytest.fixture
def dispatcher(context, pause):
    """Dispatcher over the isolated context with an empty process argv."""
    return Dispatcher(context, process_args=[], pause=pause)


@pytest.fixture
def make_module(monkeypatch):
    """Build an in-memory module from source and register it in sys.modules."""
    def factory(source: str, hint: str = "ext") -> ModuleType:
        name = f"{hint}_{uuid.uuid4().hex[:8]}_arg0"
        module = ModuleType(name)
        monkeypatch.setitem(sys.modules, name, module)
        exec(compile(textwrap.dedent(source), f"<{name}>", "exec"), module.__dict__)
        return module

    return factory


@pytest.fixture
def restore_sys_modules():
    """Drop extension modules loaded during the test."""
    before = set(sys.modules)
    yield
    for name in set(sys.modules) - before:
        if "_arg0" in name:
            sys.modules.pop(name, None)


def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
