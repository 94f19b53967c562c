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
Geometry-Aware Motor Mixer
幾何形状対応モーターミキサー

Distributes the throttle lever and normalized attitude-rate commands across
any RotorLayout, using each rotor's normalized moment arm and spin direction.
スロットルレバーと正規化姿勢レート指令を、各ロータの正規化モーメントアームと
回転方向に基づいて任意のレイアウトへ配分する。

Mixing law (per rotor i):
ミキシング則（ロータ i ごと）:

    power_i = throttle
            + G_roll  * roll_cmd  * x_i / reach
            + G_pitch * pitch_cmd * y_i / reach
            + G_yaw   * yaw_cmd   * spin_i          (spin: CCW +1, CW -1)

then clamped to [min_output, max_output].

Commands come from the tracked state:
    roll_cmd  = clamp(lateral_velocity / max_lateral, -1, 1)
    pitch_cmd = clamp(longitudinal_velocity / max_longitudinal, -1, 1)
    yaw_cmd   = clamp(yaw_rate / max_yaw_rate, -1, 1)

Example (quad-x, throttle 0.5, yaw_cmd +1):
    CCW rotors (R1, R4) -> 0.75, CW rotors (R2, R3) -> 0.25
"""

import math
from dataclasses import dataclass
from functools import lru_cache
from typing import Tuple

import numpy as np

from ..core.layout import RotorLayout
from ..core.state import FlightState, FlightLimits, DEFAULT_FLIGHT_LIMITS


@dataclass
class MixerConfig:
    """
    Motor mixer configuration.
    モーターミキサー設定

    The gains are empirically tuned to leave headroom at hover.
    ゲインはホバー時の余裕を残すよう経験的に調整された値。

    Attributes:
        roll_gain: Roll (strafe) mixing gain
        pitch_gain: Pitch (forward) mixing gain
        yaw_gain: Yaw mixing gain
        min_output: Minimum rotor output
        max_output: Maximum rotor output
    """
    roll_gain: float = 0.5
    pitch_gain: float = 0.5
    yaw_gain: float = 0.25
    min_output: float = 0.0
    max_output: float = 1.0


DEFAULT_MIXER_CONFIG = MixerConfig()


def clamp_sym(x: float) -> float:
    """Clamp to [-1, 1] / [-1, 1] に制限"""
    return max(-1.0, min(1.0, x))


@lru_cache(maxsize=32)
def mixing_matrix(layout: RotorLayout) -> np.ndarray:
    """
    Per-rotor [x_norm, y_norm, spin_sign] coefficients.
    ロータごとの [x_norm, y_norm, spin_sign] 係数

    Returns:
        Read-only array of shape (N, 3), row order = layout.rotors order
    """
    if layout.rotor_count == 0:
        matrix = np.zeros((0, 3))
    else:
        matrix = np.column_stack([layout.normalized_positions(), layout.spin_signs()])
    matrix.setflags(write=False)
    return matrix


class MotorMixer:
    """
    Multirotor motor mixer.
    マルチロータ用モーターミキサー

    Pure function of (state, layout): no internal state between calls.
    (state, layout) の純関数：呼び出し間で内部状態を持たない。

    Usage:
        mixer = MotorMixer()
        powers = mixer.mix(state)                 # uses state.layout
        powers = mixer.mix(state, layout_for("hex-x"))
    """

    def __init__(self, config: MixerConfig = None, limits: FlightLimits = None):
        self.config = config or DEFAULT_MIXER_CONFIG
        self.limits = limits or DEFAULT_FLIGHT_LIMITS

    @property
    def gains(self) -> np.ndarray:
        cfg = self.config
        return np.array([cfg.roll_gain, cfg.pitch_gain, cfg.yaw_gain])

    def commands(self, state: FlightState) -> Tuple[float, float, float]:
        """
        Normalized (roll, pitch, yaw) commands from the tracked state.
        追従状態から正規化 (roll, pitch, yaw) 指令を算出
        """
        lim = self.limits
        roll = clamp_sym(state.lateral_velocity / (lim.max_lateral or 1.0))
        pitch = clamp_sym(state.longitudinal_velocity / (lim.max_longitudinal or 1.0))
        yaw = clamp_sym(state.yaw_rate / (lim.max_yaw_rate or np.pi))
        return roll, pitch, yaw

    def mix(self, state: FlightState, layout: RotorLayout = None) -> np.ndarray:
        """
        Compute per-rotor power for a state.
        状態からロータごとの出力を計算

        Args:
            state: Flight state (read only)
            layout: Rotor layout (defaults to state.layout)

        Returns:
            Rotor powers in [min_output, max_output], index-aligned with
            layout.rotors; empty for a layout without rotors
            layout.rotors と同順のロータ出力
        """
        layout = layout if layout is not None else state.layout
        roll, pitch, yaw = self.commands(state)
        return self.mix_normalized(state.throttle_lever, roll, pitch, yaw, layout)

    def mix_normalized(
        self,
        throttle: float,
        roll: float,
        pitch: float,
        yaw: float,
        layout: RotorLayout,
    ) -> np.ndarray:
        """
        Mix explicit normalized commands.
        正規化指令を直接ミキシング

        Args:
            throttle: Baseline throttle (clamped to 0-1)
            roll: Roll command (clamped to -1..1)
            pitch: Pitch command (clamped to -1..1)
            yaw: Yaw command (clamped to -1..1)
            layout: Rotor layout

        Returns:
            Rotor powers, layout order
        """
        cfg = self.config
        throttle = min(1.0, max(0.0, throttle))
        control = np.array([clamp_sym(roll), clamp_sym(pitch), clamp_sym(yaw)]) * self.gains

        motors = throttle + mixing_matrix(layout) @ control
        return np.clip(motors, cfg.min_output, cfg.max_output)

    def inverse_mix(
        self,
        powers: np.ndarray,
        layout: RotorLayout,
    ) -> Tuple[float, float, float, float]:
        """
        Inverse mixing: rotor powers to (throttle, roll, pitch, yaw).
        逆ミキシング：ロータ出力から (throttle, roll, pitch, yaw) へ

        Least-squares estimate; exact for unsaturated outputs on the preset
        layouts. Useful for analysis and debugging.
        最小二乗推定。分析・デバッグ用。
        """
        powers = np.asarray(powers, dtype=float)
        if layout.rotor_count == 0 or powers.size == 0:
            return 0.0, 0.0, 0.0, 0.0

        A = np.column_stack([np.ones(layout.rotor_count),
                             mixing_matrix(layout) * self.gains])
        solution = np.linalg.lstsq(A, powers, rcond=None)[0]
        return tuple(float(v) for v in solution)


# =============================================================================
# Convenience functions
# =============================================================================

def mix_motors(state: FlightState, layout: RotorLayout = None) -> np.ndarray:
    """
    Convenience function for motor mixing with default gains.
    デフォルトゲインでのモーターミキシング便利関数
    """
    return MotorMixer().mix(state, layout)


def power_percentages(powers) -> list:
    """Rotor powers as whole percentages, halves rounded up"""
    return [int(math.floor(float(p) * 100.0 + 0.5)) for p in powers]
