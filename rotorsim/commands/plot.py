"""
rsim plot - Plot a flight log

Plots an output CSV written by 'rsim run --output'.
'rsim run --output' で出力したCSVをプロットします。

Examples:
    rsim plot flight.csv
    rsim plot flight.csv --save flight.png
"""

import argparse
from pathlib import Path

from ..core.state import GROUND_HEIGHT
from ..tools.sim_io import load_output_csv
from ..utils import console

COMMAND_NAME = "plot"
COMMAND_HELP = "Plot a flight log CSV"


def register(subparsers: argparse._SubParsersAction) -> None:
    """Register command with CLI"""
    parser = subparsers.add_parser(
        COMMAND_NAME,
        help=COMMAND_HELP,
        description=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "log",
        help="Output CSV from 'rsim run'",
    )
    parser.add_argument(
        "--save",
        help="Save figure to file instead of showing it",
    )
    parser.add_argument(
        "--title",
        help="Figure title",
    )
    parser.set_defaults(func=run)


def run(args: argparse.Namespace) -> int:
    """Execute plot command"""
    path = Path(args.log)
    if not path.exists():
        console.error(f"Log not found: {path}")
        return 1

    # matplotlib is only needed here
    import matplotlib.pyplot as plt
    from ..tools.visualize import plot_run

    logs, metadata = load_output_csv(path)
    if not logs:
        console.error(f"No frames in {path}")
        return 1

    rotor_ids = metadata.get('rotors', '').split() or None
    try:
        ground_height = float(metadata.get('ground_height', GROUND_HEIGHT))
    except ValueError:
        console.error(f"Invalid ground_height in {path}: {metadata['ground_height']}")
        return 1
    title = args.title or f"{path.name} ({metadata.get('layout', 'unknown layout')})"
    fig = plot_run(logs, title=title, rotor_ids=rotor_ids, save_path=args.save,
                   ground_height=ground_height)

    if args.save:
        console.success(f"Saved plot to {args.save}")
        plt.close(fig)
    else:
        plt.show()
    return 0
