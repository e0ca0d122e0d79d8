"""
Main entry point for the ArgZero CLI application.

Called from the installed ``argzero`` console script or with
``python -m argzero.main``.
"""

import sys

from .cli import parse_args, handle_cli_command


def main(argv=None) -> int:
    """
    Main entry point for the ArgZero application.

    Args:
        argv: Arguments without the program name (defaults to sys.argv[1:])
    """
    try:
        args = parse_args(argv)
        return handle_cli_command(args)

    except KeyboardInterrupt:
        print("\n👋 Interrupted")
        return 130


if __name__ == "__main__":
    sys.exit(main())
