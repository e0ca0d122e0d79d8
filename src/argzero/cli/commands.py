"""
Command-line argument parser for ArgZero.

Options for the shell itself come first; the first positional token is the
ArgZero keyword and everything after it is passed to the handler untouched.
"""

import argparse

from .. import __version__


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="argzero",
        description="ArgZero - run commands provided by extension modules",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  argzero build /verbose target        # Run the handler registered for 'build'
  argzero --list-commands              # List registered keywords
  argzero --config shell.yaml job run  # Use a specific configuration file
  argzero job run nightly /pause       # Wait for enter before dispatching
        """
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"ArgZero {__version__}"
    )

    parser.add_argument(
        "--config",
        type=str,
        metavar="PATH",
        help="Path to configuration file"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose output"
    )

    parser.add_argument(
        "--module-folder",
        action="append",
        dest="module_folders",
        metavar="DIR",
        help="Extra folder to scan for extension modules (repeatable)"
    )

    parser.add_argument(
        "--list-commands",
        action="store_true",
        help="List registered command keywords"
    )

    parser.add_argument(
        "--list-providers",
        action="store_true",
        help="List provider types registered so far"
    )

    parser.add_argument(
        "arguments",
        nargs=argparse.REMAINDER,
        metavar="KEYWORD [ARGS...]",
        help="Command keyword followed by its arguments"
    )

    return parser


def parse_args(args=None):
    """Parse command line arguments."""
    parser = create_parser()
    return parser.parse_args(args)
