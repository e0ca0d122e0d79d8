"""
ArgZero dispatcher.

Routes the first command-line token to its registered handler. Tokens after
it are parsed into the dispatch context, provider types required by the
handler are registered, and the handler is invoked. Exceptions raised by the
handler are logged and contained; the completion callback always runs once a
handler was found.
"""

import sys
from types import ModuleType
from typing import Callable, List, Optional, Sequence

from .context import DispatchContext, activate, get_global_context
from .module_locator import ModuleLocator
from .types import DispatchResult, DispatchStatus, HandlerDescriptor
from ..utils.logging import get_logger, log_performance


def exit_success() -> None:
    """Default completion callback: terminate with status 0."""
    sys.exit(0)


def _prompt_pause(prompt: str) -> None:
    try:
        input(prompt)
    except EOFError:
        # stdin closed; nothing to wait for
        pass


class Dispatcher:
    """Executes ArgZero command lines against a DispatchContext."""

    def __init__(
        self,
        context: Optional[DispatchContext] = None,
        process_args: Optional[Sequence[str]] = None,
        pause: Callable[[str], None] = _prompt_pause,
    ):
        """
        Args:
            context: Registries and state to use (defaults to the global context)
            process_args: Full process argument vector checked for the pause
                flag (defaults to sys.argv at dispatch time)
            pause: Called with the pause prompt when the pause flag is present
        """
        self.context = context or get_global_context()
        self.process_args = process_args
        self.pause = pause
        self.logger = get_logger(__name__)

    @property
    def config(self):
        return self.context.config

    def discover(self, locator: Optional[ModuleLocator] = None) -> int:
        """Load extension modules and register their handlers.

        Returns:
            Number of modules visited
        """
        locator = locator or ModuleLocator.from_config(self.config)
        visited = 0
        with log_performance("ArgZero module discovery"):
            for module in locator.find_modules():
                self.context.handlers.scan(module)
                visited += 1

        self.logger.debug(f"Discovery visited {visited} module(s); {len(self.context.handlers)} keyword(s) registered")
        return visited

    def register_arg_zero_providers(self, capability_type: type, args: Sequence[str],
                                    module: Optional[ModuleType] = None) -> List[str]:
        """Register providers of ``capability_type`` and the handlers beside them.

        Args:
            capability_type: Capability whose concrete subclasses are providers
            args: Raw command-line tokens handed to each provider
            module: Module to scan (defaults to the capability's own module)
        """
        module = module or sys.modules[capability_type.__module__]
        names = self.context.providers.register_providers(capability_type, list(args), module)
        self.context.handlers.scan(module)
        return names

    def execute_arg_zero(
        self,
        arguments: Sequence[str],
        on_arg_zero_executed: Optional[Callable[[], None]] = exit_success,
    ) -> DispatchResult:
        """Execute the handler named by ``arguments[0]``, if one is registered.

        Args:
            arguments: Command-line tokens; the first is the keyword
            on_arg_zero_executed: Called once after the handler ran or failed;
                None for no callback

        Returns:
            DispatchResult describing what happened
        """
        arguments = list(arguments)
        if not arguments:
            return DispatchResult(DispatchStatus.NO_ARGUMENTS)

        self._pause_if_requested()

        keyword = arguments[0]
        handler = self.context.handlers.get(keyword)
        if handler is None:
            return DispatchResult(DispatchStatus.UNKNOWN_KEYWORD, keyword=keyword)

        parsed = self.context.tokenizer.tokenize(arguments[1:])
        self.context.install(parsed, arguments)

        result = DispatchResult(DispatchStatus.COMPLETED, keyword=keyword, handler=handler, arguments=parsed)
        try:
            with activate(self.context):
                if handler.base_type is not None:
                    self._register_required_providers(handler, arguments)

                instance = handler.create_instance()
                handler.invoke(instance)
        except Exception as ex:
            self.logger.error(f"Exception executing ArgZero {keyword}: {ex}")
            self.logger.debug(f"Handler {handler.full_name} raised", exc_info=True)
            result.status = DispatchStatus.FAILED
            result.error = ex

        if on_arg_zero_executed is not None:
            on_arg_zero_executed()

        return result

    def _pause_if_requested(self) -> None:
        process_args = self.process_args if self.process_args is not None else sys.argv
        pause_flag = self.config.dispatch.pause_flag
        if any(arg == pause_flag for arg in process_args):
            self.pause(self.config.dispatch.pause_prompt)

    def _register_required_providers(self, handler: HandlerDescriptor, arguments: List[str]) -> None:
        """Register providers of the handler's capability type before it runs."""
        capability = handler.base_type
        module_names = [capability.__module__]
        if handler.module_name not in module_names:
            module_names.append(handler.module_name)

        for module_name in module_names:
            module = sys.modules.get(module_name)
            if module is None:
                self.logger.debug(f"Module {module_name} is not loaded; no providers registered from it")
                continue
            self.context.providers.register_providers(capability, arguments, module)


def execute_arg_zero(
    arguments: Sequence[str],
    on_arg_zero_executed: Optional[Callable[[], None]] = exit_success,
) -> DispatchResult:
    """Execute ``arguments`` against the global context."""
    return Dispatcher().execute_arg_zero(arguments, on_arg_zero_executed)
