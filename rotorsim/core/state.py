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
Flight State
飛行状態

Kinematic state of the simulated multirotor, passed explicitly between the
control shaper, integrator and mixer. Each stage returns a new value instead
of editing the one it received.
シミュレーション対象マルチロータの運動学的状態。各ステージは受け取った値を
書き換えず、新しい値を返す。

Coordinate frame (world):
- x: lateral, y: up, z: forward at yaw = 0
- Ground plane at y = 0, landing-gear clearance `ground_height`
"""

import math
from dataclasses import dataclass, field, replace

import numpy as np

from .layout import RotorLayout, layout_for, DEFAULT_LAYOUT_NAME


# Landing-gear clearance above the ground plane [m]
GROUND_HEIGHT = 0.06


@dataclass
class FlightLimits:
    """
    Per-axis command limits.
    軸ごとの指令上限

    Attributes:
        max_lateral: Strafe speed at full roll command (m/s)
        max_longitudinal: Forward speed at full pitch command (m/s)
        max_vertical: Climb rate at full lever (m/s)
        max_yaw_rate: Yaw rate at full yaw command (rad/s)
    """
    max_lateral: float = 6.0
    max_longitudinal: float = 8.0
    max_vertical: float = 8.0
    max_yaw_rate: float = math.pi


DEFAULT_FLIGHT_LIMITS = FlightLimits()


def _vec3(value=None) -> np.ndarray:
    if value is None:
        return np.zeros(3)
    return np.array(value, dtype=float).reshape(3)


@dataclass(frozen=True, eq=False)
class FlightState:
    """
    Multirotor flight state.
    マルチロータの飛行状態

    Attributes:
        position: World position [x, y, z] (m)
        velocity: World velocity [x, y, z] (m/s), low-pass filtered
        yaw: Heading (rad)
        yaw_rate: Tracked yaw rate (rad/s)
        vertical_velocity: Tracked climb rate (m/s)
        lateral_velocity: Tracked strafe speed, left positive (m/s)
        longitudinal_velocity: Tracked forward speed (m/s)
        throttle_lever: Sticky power lever [0, 1], 0.5 = hover
        on_ground: Resting on the ground plane
        layout: Active rotor layout
    """
    position: np.ndarray = field(default_factory=_vec3)
    velocity: np.ndarray = field(default_factory=_vec3)
    yaw: float = 0.0
    yaw_rate: float = 0.0
    vertical_velocity: float = 0.0
    lateral_velocity: float = 0.0
    longitudinal_velocity: float = 0.0
    throttle_lever: float = 0.0
    on_ground: bool = True
    layout: RotorLayout = field(default_factory=lambda: layout_for(DEFAULT_LAYOUT_NAME))

    def __post_init__(self):
        position = _vec3(self.position)
        velocity = _vec3(self.velocity)
        # Read-only: every stage builds new arrays
        position.setflags(write=False)
        velocity.setflags(write=False)
        object.__setattr__(self, "position", position)
        object.__setattr__(self, "velocity", velocity)

    @classmethod
    def initial(cls, layout: RotorLayout = None,
                ground_height: float = GROUND_HEIGHT) -> "FlightState":
        """
        Default state: resting on the ground, lever at zero.
        初期状態：地上静止、レバー0
        """
        return cls(
            position=[0.0, ground_height, 0.0],
            layout=layout if layout is not None else layout_for(DEFAULT_LAYOUT_NAME),
        )

    def evolve(self, **changes) -> "FlightState":
        """Return a copy with the given fields replaced / 指定フィールドを置換したコピー"""
        return replace(self, **changes)

    def with_layout(self, layout: RotorLayout) -> "FlightState":
        return replace(self, layout=layout)

    def altitude(self, ground_height: float = GROUND_HEIGHT) -> float:
        """Height above landing-gear clearance (m) / 接地クリアランス基準の高度"""
        return float(self.position[1] - ground_height)

    def to_dict(self) -> dict:
        """Flat dictionary for logging / ログ用のフラットな辞書"""
        return {
            "x": float(self.position[0]),
            "y": float(self.position[1]),
            "z": float(self.position[2]),
            "vx": float(self.velocity[0]),
            "vy": float(self.velocity[1]),
            "vz": float(self.velocity[2]),
            "yaw": self.yaw,
            "yaw_rate": self.yaw_rate,
            "vertical_velocity": self.vertical_velocity,
            "lateral_velocity": self.lateral_velocity,
            "longitudinal_velocity": self.longitudinal_velocity,
            "throttle_lever": self.throttle_lever,
            "on_ground": self.on_ground,
            "layout": self.layout.name,
        }

    def __repr__(self) -> str:
        return (f"FlightState(pos={np.round(self.position, 3)}, "
                f"vel={np.round(self.velocity, 3)}, yaw={self.yaw:.3f}, "
                f"lever={self.throttle_lever:.2f}, on_ground={self.on_ground}, "
                f"layout={self.layout.name})")
