"""
rsim run - Run a headless simulation

Drives the simulation clock at a fixed time step with a scripted intent
sequence (built-in or CSV) and optionally writes the frame log to CSV.
スクリプト化された入力でヘッドレスシミュレーションを実行します。

Examples:
    rsim run --sequence takeoff --output flight.csv
    rsim run --input inputs.csv --layout hex-x --duration 5
    rsim run --config tuned.json --sequence doublet
"""

import argparse

from ..clock import SimulationClock
from ..config import SimConfig, load_config
from ..core.integrator import clamp_dt
from ..core.layout import resolve_layout_name
from ..interfaces.messages import GroundContactRejected
from ..tools.headless import run_headless
from ..tools.input_sequence import SEQUENCES
from ..tools.sim_io import DEFAULT_DT, load_input_csv, save_output_csv
from ..utils import console

COMMAND_NAME = "run"
COMMAND_HELP = "Run headless simulation"


def register(subparsers: argparse._SubParsersAction) -> None:
    """Register command with CLI"""
    parser = subparsers.add_parser(
        COMMAND_NAME,
        help=COMMAND_HELP,
        description=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "-s", "--sequence",
        choices=list(SEQUENCES.keys()),
        default="takeoff",
        help="Built-in input sequence (default: takeoff)",
    )
    source.add_argument(
        "-i", "--input",
        help="Input CSV (time,throttle,yaw,lateral,longitudinal)",
    )
    parser.add_argument(
        "-d", "--duration",
        type=float,
        default=None,
        help="Simulation duration in seconds (default: 10 or input length)",
    )
    parser.add_argument(
        "--dt",
        type=float,
        default=DEFAULT_DT,
        help=f"Fixed time step in seconds (default: {DEFAULT_DT:.6f})",
    )
    parser.add_argument(
        "-l", "--layout",
        help="Rotor layout (overrides config)",
    )
    parser.add_argument(
        "-c", "--config",
        help="JSON configuration file",
    )
    parser.add_argument(
        "-o", "--output",
        help="Output CSV path",
    )
    parser.set_defaults(func=run)


def run(args: argparse.Namespace) -> int:
    """Execute run command"""
    if args.dt <= 0:
        console.error(f"--dt must be positive, got {args.dt}")
        return 1

    try:
        config = load_config(args.config) if args.config else SimConfig()
    except (FileNotFoundError, ValueError) as e:
        console.error(f"Cannot load config: {e}")
        return 1
    if args.layout:
        config.layout = args.layout
    if not resolve_layout_name(config.layout)[1]:
        console.warning(f"Unknown layout '{config.layout}', falling back to the default")

    dt = clamp_dt(args.dt, config.integrator.max_dt)
    if dt < args.dt:
        console.warning(f"--dt {args.dt:g}s exceeds max_dt, using {dt:g}s")

    if args.input:
        try:
            inputs = load_input_csv(args.input)
        except (FileNotFoundError, ValueError, KeyError) as e:
            console.error(f"Cannot load input: {e}")
            return 1
        source = args.input
        duration = args.duration
    else:
        duration = args.duration if args.duration is not None else 10.0
        inputs = SEQUENCES[args.sequence](duration=duration, dt=dt)
        source = args.sequence

    clock = SimulationClock(config)
    rejections = []
    clock.subscribe(GroundContactRejected, rejections.append)

    console.info(f"Running '{source}' on {clock.layout.name} (dt={dt:.6f}s)")
    logs = run_headless(inputs, dt=dt, duration=duration, clock=clock)

    if not logs:
        console.warning("No frames simulated")
        return 0

    final = clock.last_frame
    console.print()
    console.header("Result")
    console.print(final.readout())
    console.print(f"Frames: {len(logs)}  Sim time: {final.sim_time:.2f}s  "
                  f"Max altitude: {max(log.y for log in logs) - config.integrator.ground_height:.2f}")
    if rejections:
        console.debug(f"Ground-contact rejections: {len(rejections)}")

    if args.output:
        metadata = {
            'layout': clock.layout.name,
            'source': source,
            'dt': f"{dt:.6f}",
            'ground_height': f"{config.integrator.ground_height:g}",
            'rotors': " ".join(clock.layout.rotor_ids),
        }
        save_output_csv(args.output, logs, metadata)
        console.success(f"Saved {len(logs)} frames to {args.output}")

    return 0
