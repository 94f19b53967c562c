"""
rsim version - Show version information

Displays the rotorsim version and, with -v, library versions.
"""

import argparse
import platform

from .. import __version__
from ..utils import console

COMMAND_NAME = "version"
COMMAND_HELP = "Show version information"


def register(subparsers: argparse._SubParsersAction) -> None:
    """Register command with CLI"""
    parser = subparsers.add_parser(
        COMMAND_NAME,
        help=COMMAND_HELP,
        description=__doc__,
    )
    parser.set_defaults(func=run)


def run(args: argparse.Namespace) -> int:
    """Execute version command"""
    console.print(f"rotorsim version {__version__}")

    if console.verbose:
        import numpy
        import scipy
        import matplotlib

        console.print()
        console.header("Environment")
        console.print(f"Python: {platform.python_version()}")
        console.print(f"Platform: {platform.system()}")
        console.print(f"numpy: {numpy.__version__}")
        console.print(f"scipy: {scipy.__version__}")
        console.print(f"matplotlib: {matplotlib.__version__}")

    return 0
