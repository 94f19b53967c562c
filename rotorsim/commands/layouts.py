"""
rsim layouts - List rotor layouts

Without a name, lists the preset layouts. With a name, shows rotor geometry
and spin for that layout (aliases accepted; unknown names fall back to the
default layout).
ロータレイアウトの一覧と詳細を表示します。
"""

import argparse

from ..core.layout import PRESETS, LAYOUT_ALIASES, DEFAULT_LAYOUT_NAME, resolve_layout_name
from ..interfaces.messages import spin_glyph
from ..utils import console

COMMAND_NAME = "layouts"
COMMAND_HELP = "List rotor layouts"


def register(subparsers: argparse._SubParsersAction) -> None:
    """Register command with CLI"""
    parser = subparsers.add_parser(
        COMMAND_NAME,
        help=COMMAND_HELP,
        description=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "name",
        nargs="?",
        help="Layout name or alias to show in detail",
    )
    parser.set_defaults(func=run)


def run(args: argparse.Namespace) -> int:
    """Execute layouts command"""
    if args.name:
        return _show_layout(args.name)

    console.header("Rotor Layouts")
    rows = []
    for key, layout in PRESETS.items():
        aliases = ", ".join(a for a, target in LAYOUT_ALIASES.items() if target == key)
        default = "*" if key == DEFAULT_LAYOUT_NAME else ""
        rows.append([key + default, layout.label, layout.rotor_count,
                     f"{layout.arm_reach:.1f}", aliases or "-"])
    console.table(["Name", "Label", "Rotors", "Reach", "Aliases"], rows)
    console.print()
    console.print("* default")
    return 0


def _show_layout(name: str) -> int:
    key, matched = resolve_layout_name(name)
    if not matched:
        console.warning(f"Unknown layout '{name}', falling back to '{key}'")
    layout = PRESETS[key]

    console.header(f"{layout.label} ({layout.name})")
    rows = []
    for rotor, (xn, yn) in zip(layout.rotors, layout.normalized_positions()):
        rows.append([rotor.id, f"{rotor.x:+.1f}", f"{rotor.y:+.1f}",
                     f"{xn:+.3f}", f"{yn:+.3f}", f"{spin_glyph(rotor)} {rotor.spin.value}"])
    console.table(["Rotor", "X", "Y", "X norm", "Y norm", "Spin"], rows)
    console.print()
    console.print(f"Arm reach: {layout.arm_reach:.1f}  (front is -Y)")
    return 0
