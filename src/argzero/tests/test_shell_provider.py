"""
Tests for the ShellProvider base class.
"""

from unittest.mock import Mock

import pytest

from argzero.core.context import activate
from argzero.core.providers import ShellProvider


pytestmark = pytest.mark.unit


JOB_SOURCE = """
from argzero import arg_zero, current_context, ShellProvider

captured = []


class JobArguments(ShellProvider):
    pass


class JobProvider(JobArguments):
    def register_arguments(self, args, context):
        super().register_arguments(args, context)
        self.add_valid_argument("worker", "Worker to run the job on")
        captured.append(self)


class JobCommands:
    @arg_zero("job", base_type=JobArguments)
    def job(self):
        provider = captured[-1]
        captured.append((provider.provider_context_target, provider.get_argument("worker")))
"""


class TestShellProvider:
    """Helpers available to providers while a command runs."""

    def test_register_arguments_keeps_raw_arguments(self, context):
        provider = ShellProvider()
        provider.register_arguments(["job", "run", "/worker:alpha"], context)

        assert provider.raw_arguments == ["job", "run", "/worker:alpha"]
        assert provider.context is context

    def test_provider_context_target(self, context):
        provider = ShellProvider()
        provider.register_arguments(["job", "/verbose", "nightly", "extra"], context)

        assert provider.provider_context_target == "nightly"

    def test_provider_context_target_missing(self, context):
        provider = ShellProvider()
        provider.register_arguments(["job", "/verbose"], context)

        assert provider.provider_context_target is None

    def test_get_argument_returns_flag_value(self, context):
        context.install(context.tokenizer.tokenize(["/worker:alpha"]), ["job", "/worker:alpha"])
        provider = ShellProvider()
        provider.register_arguments(["job", "/worker:alpha"], context)
        provider.prompt = Mock()

        assert provider.get_argument("worker") == "alpha"
        provider.prompt.assert_not_called()

    def test_get_argument_prompts_when_missing(self, context):
        provider = ShellProvider()
        provider.register_arguments(["job"], context)
        provider.prompt = Mock(return_value="beta")

        assert provider.get_argument("worker") == "beta"
        provider.prompt.assert_called_once_with("Please enter worker: ")

    def test_get_argument_custom_prompt(self, context):
        provider = ShellProvider()
        provider.register_arguments(["job", "/worker"], context)
        provider.prompt = Mock(return_value="gamma")

        assert provider.get_argument("worker", "Which worker") == "gamma"
        provider.prompt.assert_called_once_with("Which worker: ")

    def test_unregistered_provider_uses_active_context(self, context):
        provider = ShellProvider()

        with activate(context):
            provider.add_valid_argument("dry-run")
            assert provider.context is context

        assert context.valid_arguments == {"dry-run": ""}

    def test_provider_in_dispatch(self, make_module, context, dispatcher):
        module = make_module(JOB_SOURCE)
        context.handlers.scan(module)

        result = dispatcher.execute_arg_zero(["job", "/worker:alpha", "nightly"], None)

        assert result.succeeded
        provider, values = module.captured
        assert isinstance(provider, module.JobProvider)
        assert values == ("nightly", "alpha")
        assert context.valid_arguments == {"worker": "Worker to run the job on"}
