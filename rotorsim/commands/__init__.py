"""
rotorsim CLI Commands

Each module in this package implements a CLI command.
"""

from . import version
from . import layouts
from . import mix
from . import run
from . import plot

__all__ = [
    "version",
    "layouts",
    "mix",
    "run",
    "plot",
]
