# MIT License
#
# Copyright (c) 2025 Kouhei Ito
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:

# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.

# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

"""
Rotor Layout Catalog
ローターレイアウトカタログ

Static geometry of the supported multirotor frames.
対応するマルチロータフレームの静的な幾何形状。

Body-frame convention (panel coordinates):
機体座標系（パネル座標）:

                 Front (-y)
                    ▲
                    │
        (-x) ◄──────┼──────► (+x)
                    │
                    ▼
                 Rear (+y)

Layouts:
- quad-x:    4 rotors at ±45°, diagonal pairs share spin
- quad-plus: 4 rotors at 0°/90°, opposite pairs share spin
- hex-plus:  6 rotors every 60°, one arm pointing forward
- hex-x:     6 rotors every 60°, offset 30° (gap facing forward)

Spin assignment alternates CCW/CW so that reactive yaw torque cancels.
スピン方向は CCW/CW を交互に割り当て、反トルクを打ち消す。
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Tuple

import numpy as np


class Spin(Enum):
    """Rotor rotational sense / ロータ回転方向"""
    CW = "CW"
    CCW = "CCW"

    @property
    def sign(self) -> int:
        """+1 for CCW, -1 for CW (yaw mixing sign)"""
        return 1 if self is Spin.CCW else -1


@dataclass(frozen=True)
class Rotor:
    """
    Single rotor in a layout.
    レイアウト内の単一ロータ

    Attributes:
        id: Rotor label, unique within a layout (e.g. "R1")
        x: Lateral position (right positive)
        y: Longitudinal position (rear positive, front negative)
        spin: Rotational sense
    """
    id: str
    x: float
    y: float
    spin: Spin

    @property
    def distance(self) -> float:
        """Distance from body center / 機体中心からの距離"""
        return math.hypot(self.x, self.y)


# Minimum arm reach used as a divisor when normalizing moment arms
MIN_ARM_REACH = 1.0


@dataclass(frozen=True)
class RotorLayout:
    """
    Immutable rotor configuration.
    不変のロータ構成

    Selecting another layout creates another value; a layout is never edited
    in place.

    Attributes:
        name: Canonical preset key (e.g. "quad-x")
        rotors: Ordered rotors; mixer outputs follow this order
        arms: Frame arm segments (x1, y1, x2, y2) for drawing
        label: Human readable name
    """
    name: str
    rotors: Tuple[Rotor, ...]
    arms: Tuple[Tuple[float, float, float, float], ...] = ()
    label: str = ""
    arm_reach: float = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "rotors", tuple(self.rotors))
        object.__setattr__(self, "arms", tuple(tuple(a) for a in self.arms))

        ids = [r.id for r in self.rotors]
        if len(set(ids)) != len(ids):
            raise ValueError(f"Duplicate rotor ids in layout '{self.name}': {ids}")

        reach = max((r.distance for r in self.rotors), default=0.0)
        object.__setattr__(self, "arm_reach", max(MIN_ARM_REACH, reach))

    @property
    def rotor_count(self) -> int:
        return len(self.rotors)

    @property
    def rotor_ids(self) -> List[str]:
        return [r.id for r in self.rotors]

    def spin_signs(self) -> np.ndarray:
        """Spin signs per rotor (+1 CCW, -1 CW) / 各ロータのスピン符号"""
        return np.array([r.spin.sign for r in self.rotors], dtype=float)

    def normalized_positions(self) -> np.ndarray:
        """
        Rotor positions divided by arm reach.
        アームリーチで正規化したロータ位置

        Returns:
            Array of shape (N, 2) with columns [x_norm, y_norm]
        """
        if not self.rotors:
            return np.zeros((0, 2))
        xy = np.array([[r.x, r.y] for r in self.rotors], dtype=float)
        return xy / self.arm_reach


# =============================================================================
# Preset geometry
# プリセット形状
# =============================================================================

QUAD_X_OFFSET = 55.0   # Quad-X rotor offset on each axis
QUAD_PLUS_RADIUS = 75.0
HEX_RADIUS = 75.0


def _quad_x() -> RotorLayout:
    s = QUAD_X_OFFSET
    rotors = (
        Rotor("R1", -s, -s, Spin.CCW),  # Front-Left
        Rotor("R2", s, -s, Spin.CW),    # Front-Right
        Rotor("R3", -s, s, Spin.CW),    # Rear-Left
        Rotor("R4", s, s, Spin.CCW),    # Rear-Right
    )
    arms = ((-s, -s, s, s), (s, -s, -s, s))
    return RotorLayout("quad-x", rotors, arms, label="Quad X")


def _quad_plus() -> RotorLayout:
    r = QUAD_PLUS_RADIUS
    rotors = (
        Rotor("R1", 0.0, -r, Spin.CCW),  # Front
        Rotor("R2", r, 0.0, Spin.CW),    # Right
        Rotor("R3", 0.0, r, Spin.CCW),   # Rear
        Rotor("R4", -r, 0.0, Spin.CW),   # Left
    )
    arms = ((0.0, -r, 0.0, r), (-r, 0.0, r, 0.0))
    return RotorLayout("quad-plus", rotors, arms, label="Quad +")


def hex_layout(name: str, offset_deg: float, radius: float = HEX_RADIUS,
               label: str = "") -> RotorLayout:
    """
    Build a hexacopter layout parametrically.
    ヘキサコプターのレイアウトをパラメトリックに生成

    Args:
        name: Layout key
        offset_deg: Angle of the first rotor from forward (0 = arm forward,
                    30 = gap forward)
                    最初のロータの前方からの角度
        radius: Arm length
        label: Human readable name

    Returns:
        RotorLayout with 6 rotors, spins alternating CCW/CW by index
    """
    rotors = []
    arms = []
    for i in range(6):
        # -90 so that 0 deg points forward (negative y)
        a = math.radians(-90.0 + offset_deg + i * 60.0)
        x = math.cos(a) * radius
        y = math.sin(a) * radius
        spin = Spin.CW if i % 2 else Spin.CCW
        rotors.append(Rotor(f"R{i + 1}", x, y, spin))
        arms.append((0.0, 0.0, x, y))
    return RotorLayout(name, tuple(rotors), tuple(arms), label=label)


# Computed once; treated as constants
PRESETS: Dict[str, RotorLayout] = {
    "quad-x": _quad_x(),
    "quad-plus": _quad_plus(),
    "hex-plus": hex_layout("hex-plus", 0.0, label="Hex +"),
    "hex-x": hex_layout("hex-x", 30.0, label="Hex X"),
}

DEFAULT_LAYOUT_NAME = next(iter(PRESETS))

# Short names and legacy button names
LAYOUT_ALIASES: Dict[str, str] = {
    "quad": "quad-plus",
    "hex": "hex-plus",
    "quadx": "quad-x",
    "quad+": "quad-plus",
    "hex+": "hex-plus",
    "hexx": "hex-x",
}


def normalize_layout_name(name) -> str:
    """Lower-case and unify separators / 小文字化と区切り文字の統一"""
    if not isinstance(name, str):
        return ""
    key = name.strip().lower()
    for sep in ("_", " "):
        key = key.replace(sep, "-")
    return key


def resolve_layout_name(name) -> Tuple[str, bool]:
    """
    Resolve a requested name to a preset key.
    要求名をプリセットキーに解決

    Returns:
        (preset_key, matched) - matched is False when the default was used
    """
    key = normalize_layout_name(name)
    key = LAYOUT_ALIASES.get(key, key)
    if key in PRESETS:
        return key, True
    return DEFAULT_LAYOUT_NAME, False


def layout_for(name) -> RotorLayout:
    """
    Get the preset layout for a name.
    名前に対応するプリセットレイアウトを取得

    Unknown names fall back to the default "quad-x" layout; this never raises.
    未知の名前はデフォルト "quad-x" にフォールバック（例外は発生しない）。
    """
    key, _ = resolve_layout_name(name)
    return PRESETS[key]


def layout_names() -> List[str]:
    """Canonical preset keys in catalog order"""
    return list(PRESETS.keys())
