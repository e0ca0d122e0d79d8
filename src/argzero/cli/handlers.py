"""
CLI command handlers for ArgZero.
"""

import sys

from ..config import load_config, ConfigurationError, DiscoveryConfig
from ..core import Dispatcher, DispatchContext, DispatchStatus, ModuleLocator
from ..utils import setup_logging, get_logger


def handle_cli_command(args) -> int:
    """
    Load configuration, discover extension modules and dispatch.

    Returns:
        int: Exit code (0 for success, non-zero for error)
    """
    try:
        config = load_config(args.config)
    except ConfigurationError as e:
        print(f"❌ Configuration error: {e}", file=sys.stderr)
        return 1

    setup_logging(config, verbose=args.verbose)
    logger = get_logger(__name__)

    if args.module_folders:
        discovery = config.discovery.model_dump()
        discovery["module_folders"] = list(config.discovery.module_folders) + args.module_folders
        config.discovery = DiscoveryConfig.model_validate(discovery)

    dispatcher = Dispatcher(DispatchContext(config))
    if config.discovery.scan_on_startup:
        dispatcher.discover(ModuleLocator.from_config(config))

    if args.list_commands:
        return _handle_list_commands(dispatcher)
    if args.list_providers:
        return _handle_list_providers(dispatcher)

    if not args.arguments:
        print("❌ No command given. Use --list-commands to see what is available.", file=sys.stderr)
        return 1

    result = dispatcher.execute_arg_zero(args.arguments, on_arg_zero_executed=None)

    if result.status is DispatchStatus.UNKNOWN_KEYWORD:
        if args.verbose:
            print(f"❌ Unknown command: {result.keyword}", file=sys.stderr)
        return 1

    if result.status is DispatchStatus.FAILED:
        logger.debug(f"{result.keyword} failed and was contained: {result.error_message}")

    return 0


def _handle_list_commands(dispatcher: Dispatcher) -> int:
    handlers = dispatcher.context.handlers.handlers()
    print("🔧 Registered commands:")

    if not handlers:
        print("  No commands registered")
        return 0

    for handler in handlers:
        print(f"  {handler.keyword}: {handler.full_name}")
    return 0


def _handle_list_providers(dispatcher: Dispatcher) -> int:
    names = dispatcher.context.providers.names()
    print("📋 Registered providers:")

    if not names:
        print("  No providers registered")
        return 0

    for name in names:
        registration = dispatcher.context.providers.get_registration(name)
        print(f"  {name}: {registration.provider_type.__qualname__}")
    return 0
