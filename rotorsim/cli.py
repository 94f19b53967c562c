"""
rotorsim CLI - Main entry point

rsim <command> [options]

Command-line interface for the multirotor simulation engine.
マルチロータシミュレーションエンジンのコマンドラインインターフェース。
"""

import argparse
import sys
from typing import Optional, List

from . import __version__
from .commands import version, layouts, mix, run, plot
from .utils import console


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser"""
    parser = argparse.ArgumentParser(
        prog="rsim",
        description="rotorsim - Multirotor flight-state and motor-mixing tools",
        epilog="Run 'rsim <command> --help' for more information on a command.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-V", "--version",
        action="version",
        version=f"rsim {__version__}",
    )

    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show debug output",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        title="commands",
        metavar="<command>",
    )

    version.register(subparsers)
    layouts.register(subparsers)
    mix.register(subparsers)
    run.register(subparsers)
    plot.register(subparsers)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point

    Args:
        argv: Command line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 = success, non-zero = error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.no_color:
        console.set_color(False)
    console.set_verbose(args.verbose)

    if not args.command:
        parser.print_help()
        return 0

    if hasattr(args, "func"):
        try:
            return args.func(args)
        except KeyboardInterrupt:
            console.print("\nInterrupted")
            return 130
        except Exception as e:
            console.error(f"Unexpected error: {e}")
            return 1
    else:
        parser.print_help()
        return 0


if __name__ == "__main__":
    sys.exit(main())
