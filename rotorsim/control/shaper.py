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
Control Shaper
制御整形器

Turns discrete pilot intents into smoothed continuous targets.
離散的な操縦意図を平滑化された連続目標値に変換する。

- Throttle lever: sticky integrator, holds its value when intent is 0
  スロットルレバー：保持型（意図0で値を保持）
- Yaw / strafe / forward / climb: first-order response toward
  intent * axis maximum
  ヨー・横移動・前後・上昇：意図×軸最大値への一次遅れ応答

    value' = value + (target - value) * min(1, gain * dt)

The vertical target comes from the lever: (lever - 0.5) * 2, so 0.5 hovers.
While on the ground, yaw/strafe/forward are forced to zero after smoothing.
"""

from dataclasses import dataclass
from typing import NamedTuple

from ..core.state import FlightState, FlightLimits, DEFAULT_FLIGHT_LIMITS


@dataclass
class ShaperConfig:
    """
    Control shaping configuration.
    制御整形設定

    Attributes:
        throttle_rate: Lever travel per second at full intent (1/s)
        lateral_gain: Strafe response gain (1/s)
        longitudinal_gain: Forward response gain (1/s)
        vertical_gain: Climb response gain (1/s)
        yaw_gain: Yaw-rate response gain (1/s)
    """
    throttle_rate: float = 0.6
    lateral_gain: float = 8.0
    longitudinal_gain: float = 8.0
    vertical_gain: float = 6.0
    yaw_gain: float = 6.0


DEFAULT_SHAPER_CONFIG = ShaperConfig()


def _intent(value) -> int:
    """Reduce any number to -1, 0 or +1"""
    if value > 0:
        return 1
    if value < 0:
        return -1
    return 0


@dataclass(frozen=True)
class CommandIntent:
    """
    Discrete pilot intents, each in {-1, 0, +1}.
    離散的な操縦意図（各 -1, 0, +1）

    Attributes:
        throttle: +1 raise lever, -1 lower lever
        yaw: +1 yaw left, -1 yaw right
        lateral: +1 strafe left, -1 strafe right
        longitudinal: +1 forward, -1 backward
    """
    throttle: int = 0
    yaw: int = 0
    lateral: int = 0
    longitudinal: int = 0

    def __post_init__(self):
        for name in ("throttle", "yaw", "lateral", "longitudinal"):
            object.__setattr__(self, name, _intent(getattr(self, name)))

    @property
    def is_idle(self) -> bool:
        return not (self.throttle or self.yaw or self.lateral or self.longitudinal)


NEUTRAL_INTENT = CommandIntent()


class ShapeResult(NamedTuple):
    """Shaper output / 整形結果"""
    state: FlightState
    ground_rejected: bool  # Horizontal/yaw motion was cancelled by ground contact


def clamp01(x: float) -> float:
    return min(1.0, max(0.0, x))


def first_order(value: float, target: float, gain: float, dt: float) -> float:
    """
    One step of first-order response toward target.
    目標値への一次遅れ応答を1ステップ進める
    """
    return value + (target - value) * min(1.0, gain * dt)


def vertical_target(lever: float) -> float:
    """Normalized climb target from the lever: 0 -> -1, 0.5 -> 0, 1 -> +1"""
    return (lever - 0.5) * 2.0


class ControlShaper:
    """
    Pilot intent shaper.
    操縦意図の整形器

    Usage:
        shaper = ControlShaper()
        result = shaper.shape(state, CommandIntent(throttle=1), dt)
        state = result.state
    """

    def __init__(self, config: ShaperConfig = None, limits: FlightLimits = None):
        self.config = config or DEFAULT_SHAPER_CONFIG
        self.limits = limits or DEFAULT_FLIGHT_LIMITS

    def shape(self, state: FlightState, intent: CommandIntent, dt: float) -> ShapeResult:
        """
        Update lever and tracked velocities.
        レバーと追従速度を更新

        Args:
            state: Current state (not modified)
            intent: Discrete intents
            dt: Time step (s); non-positive values leave the state unchanged

        Returns:
            ShapeResult(new_state, ground_rejected)
        """
        if dt <= 0.0:
            return ShapeResult(state, False)

        cfg = self.config
        lim = self.limits

        lever = clamp01(state.throttle_lever + intent.throttle * cfg.throttle_rate * dt)

        vertical = first_order(state.vertical_velocity,
                               vertical_target(lever) * lim.max_vertical,
                               cfg.vertical_gain, dt)
        lateral = first_order(state.lateral_velocity,
                              intent.lateral * lim.max_lateral,
                              cfg.lateral_gain, dt)
        longitudinal = first_order(state.longitudinal_velocity,
                                   intent.longitudinal * lim.max_longitudinal,
                                   cfg.longitudinal_gain, dt)
        yaw_rate = first_order(state.yaw_rate,
                               intent.yaw * lim.max_yaw_rate,
                               cfg.yaw_gain, dt)

        # On the ground: no sliding, no rotation. Applied after smoothing so
        # nothing survives into this tick.
        # 地上：横滑り・回転なし
        rejected = False
        if state.on_ground:
            rejected = bool(lateral or longitudinal or yaw_rate)
            lateral = 0.0
            longitudinal = 0.0
            yaw_rate = 0.0

        new_state = state.evolve(
            throttle_lever=lever,
            vertical_velocity=vertical,
            lateral_velocity=lateral,
            longitudinal_velocity=longitudinal,
            yaw_rate=yaw_rate,
        )
        return ShapeResult(new_state, rejected)
