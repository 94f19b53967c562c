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
Simulator Output Messages
シミュレータ出力メッセージ

One-way data pushed from the simulation core to rendering/UI consumers.
The core never looks up UI elements; consumers update their own visuals.
シミュレーションコアからレンダリング/UIへ一方向に送るデータ。

Message Types:
- FrameOutput: State, rotor powers and layout for one tick
- LayoutChanged: Active rotor layout was swapped
- GroundContactRejected: Horizontal/yaw input cancelled while landed
"""

import math
from dataclasses import dataclass
from typing import List, Tuple

import numpy as np

from ..control.motor_mixer import power_percentages
from ..core.integrator import Attitude
from ..core.layout import RotorLayout
from ..core.state import FlightState, GROUND_HEIGHT


# How long the UI keeps the ground-contact message visible (s)
GROUND_NOTICE_DURATION_S = 2.0


# =============================================================================
# Events
# イベント
# =============================================================================

@dataclass(frozen=True)
class LayoutChanged:
    """
    Layout swap notification.
    レイアウト切替通知

    Attributes:
        previous: Layout before the swap
        current: Layout after the swap
        requested: Name as requested by the input collaborator
        fallback: True when the request did not match a preset
    """
    previous: RotorLayout
    current: RotorLayout
    requested: str = ""
    fallback: bool = False


@dataclass(frozen=True)
class GroundContactRejected:
    """
    Input rejected because the aircraft is resting on the ground.
    地上静止中のため入力を拒否

    Attributes:
        sim_time: Simulation time of the rejection (s)
        message: Operator-facing text
        display_s: Suggested display duration (s)
    """
    sim_time: float
    message: str = "Take off before moving or turning"
    display_s: float = GROUND_NOTICE_DURATION_S


# =============================================================================
# Frame output
# フレーム出力
# =============================================================================

@dataclass(frozen=True, eq=False)
class FrameOutput:
    """
    Everything a renderer needs for one tick.
    1ティック分のレンダリング用データ

    Attributes:
        state: Flight state after the tick
        powers: Rotor powers [0, 1], index-aligned with layout.rotors
        layout: Active rotor layout
        attitude: Display attitude
        sim_time: Accumulated simulated time (s)
        dt: Clamped time step of this tick (s)
        paused: Updates were skipped this tick
        ground_rejected: Ground-contact input rejection happened this tick
        ground_height: Landing-gear clearance used for the altitude readout (m)
    """
    state: FlightState
    powers: np.ndarray
    layout: RotorLayout
    attitude: Attitude
    sim_time: float = 0.0
    dt: float = 0.0
    paused: bool = False
    ground_rejected: bool = False
    ground_height: float = GROUND_HEIGHT

    def power_percent(self) -> List[int]:
        """Bar-fill percentage per rotor / ロータごとのバー表示割合"""
        return power_percentages(self.powers)

    def rotor_powers(self) -> List[Tuple[str, float]]:
        """(rotor id, power) pairs in layout order"""
        return [(r.id, float(p)) for r, p in zip(self.layout.rotors, self.powers)]

    def readout(self) -> str:
        return format_readout(self.state, self.ground_height)


def format_readout(state: FlightState, ground_height: float = GROUND_HEIGHT) -> str:
    """
    Position / altitude / yaw text readout.
    位置・高度・ヨーのテキスト表示

    Coordinates are the horizontal (x, z) pair; altitude is relative to the
    landing-gear clearance.
    """
    x, _, z = state.position
    return (
        f"Coordinates: ({x:.2f}, {z:.2f})\n"
        f"Altitude: {state.altitude(ground_height):.2f}\n"
        f"Yaw: {math.degrees(state.yaw):.1f}°"
    )


def spin_glyph(rotor) -> str:
    """Arrow for a rotor's spin direction / 回転方向の矢印"""
    return "↻" if rotor.spin.value == "CW" else "↺"
