"""
rsim mix - Mix normalized commands

Computes per-rotor power for explicit throttle and attitude-rate commands
and shows it as power bars.
指定した指令からロータごとの出力を計算して表示します。

Examples:
    rsim mix --layout quad-x --throttle 0.5 --yaw 1
    rsim mix --layout hex-x --roll -0.5 --pitch 0.3
"""

import argparse

from ..control.motor_mixer import MotorMixer, power_percentages
from ..core.layout import resolve_layout_name, PRESETS
from ..interfaces.messages import spin_glyph
from ..utils import console

COMMAND_NAME = "mix"
COMMAND_HELP = "Mix commands into rotor power"


def register(subparsers: argparse._SubParsersAction) -> None:
    """Register command with CLI"""
    parser = subparsers.add_parser(
        COMMAND_NAME,
        help=COMMAND_HELP,
        description=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-l", "--layout",
        default="quad-x",
        help="Rotor layout (default: quad-x)",
    )
    parser.add_argument(
        "-t", "--throttle",
        type=float,
        default=0.5,
        help="Throttle 0..1 (default: 0.5)",
    )
    parser.add_argument(
        "--roll",
        type=float,
        default=0.0,
        help="Roll (strafe) command -1..1",
    )
    parser.add_argument(
        "--pitch",
        type=float,
        default=0.0,
        help="Pitch (forward) command -1..1",
    )
    parser.add_argument(
        "--yaw",
        type=float,
        default=0.0,
        help="Yaw command -1..1 (+1 = yaw left)",
    )
    parser.add_argument(
        "--inverse",
        action="store_true",
        help="Also show commands recovered by inverse mixing",
    )
    parser.set_defaults(func=run)


def run(args: argparse.Namespace) -> int:
    """Execute mix command"""
    key, matched = resolve_layout_name(args.layout)
    if not matched:
        console.warning(f"Unknown layout '{args.layout}', falling back to '{key}'")
    layout = PRESETS[key]

    mixer = MotorMixer()
    powers = mixer.mix_normalized(args.throttle, args.roll, args.pitch, args.yaw, layout)

    console.header(f"{layout.label} mix")
    console.print(f"throttle={args.throttle:.2f} roll={args.roll:+.2f} "
                  f"pitch={args.pitch:+.2f} yaw={args.yaw:+.2f}")
    console.print()
    for rotor, power, pct in zip(layout.rotors, powers, power_percentages(powers)):
        console.power_bar(rotor.id, float(power), suffix=spin_glyph(rotor))
        console.debug(f"{rotor.id}: {float(power):.4f} ({pct}%)")

    if args.inverse:
        throttle, roll, pitch, yaw = mixer.inverse_mix(powers, layout)
        console.print()
        console.info(f"Inverse: throttle={throttle:.3f} roll={roll:+.3f} "
                     f"pitch={pitch:+.3f} yaw={yaw:+.3f}")

    return 0
