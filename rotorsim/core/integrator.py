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
Kinematic Integrator (3-DOF)
運動学積分器（3自由度）

Advances position, velocity, yaw and ground contact from the shaped control
values. Translational motion depends on yaw only; the roll/pitch tilt produced
by `attitude()` is cosmetic and never fed back.
整形済み制御値から位置・速度・ヨー・接地状態を更新する。並進運動はヨーのみに
依存し、`attitude()` の傾きは表示用でダイナミクスには戻さない。

Step (explicit Euler, no sub-stepping):
    yaw      += yaw_rate * dt
    v_des     = left * lateral + forward * longitudinal + up * vertical
    velocity  = lerp(velocity, v_des, min(1, drag_gain * dt))
    position += velocity * dt
    ground clamp at y = ground_height
"""

import math
from dataclasses import dataclass
from typing import Tuple

import numpy as np
from scipy.spatial.transform import Rotation

from .state import FlightState, FlightLimits, DEFAULT_FLIGHT_LIMITS, GROUND_HEIGHT


UP = np.array([0.0, 1.0, 0.0])


@dataclass
class IntegratorConfig:
    """
    Integrator configuration.
    積分器設定

    Attributes:
        drag_gain: First-order velocity smoothing gain (1/s)
        ground_height: Landing-gear clearance (m)
        ground_epsilon: Contact tolerance above ground_height (m)
        max_dt: Largest time step accepted (s)
        max_tilt: Cosmetic roll/pitch at full command (rad)
    """
    drag_gain: float = 4.0
    ground_height: float = GROUND_HEIGHT
    ground_epsilon: float = 1e-9
    max_dt: float = 0.033
    max_tilt: float = 0.2


DEFAULT_INTEGRATOR_CONFIG = IntegratorConfig()


@dataclass(frozen=True)
class Attitude:
    """
    Display attitude for the renderer.
    レンダラ用の表示姿勢

    Attributes:
        roll, pitch, yaw: Angles (rad)
        quaternion: [x, y, z, w], yaw about up, then pitch, then roll
    """
    roll: float
    pitch: float
    yaw: float
    quaternion: Tuple[float, float, float, float]


def clamp_dt(dt: float, max_dt: float = DEFAULT_INTEGRATOR_CONFIG.max_dt) -> float:
    """
    Clamp a frame delta to [0, max_dt].
    フレーム時間差を [0, max_dt] に制限
    """
    if not math.isfinite(dt) or dt <= 0.0:
        return 0.0
    return min(dt, max_dt)


def body_axes(yaw: float) -> Tuple[np.ndarray, np.ndarray]:
    """
    Horizontal body axes for a heading.
    ヨー角に対する水平機体軸

    Returns:
        (forward, left) unit vectors in the world frame
    """
    forward = np.array([math.sin(yaw), 0.0, math.cos(yaw)])
    left = np.array([math.cos(yaw), 0.0, -math.sin(yaw)])
    return forward, left


def _clamp_sym(x: float) -> float:
    return max(-1.0, min(1.0, x))


class KinematicIntegrator:
    """
    3-DOF kinematic integrator.
    3自由度運動学積分器

    Usage:
        integrator = KinematicIntegrator()
        state = integrator.integrate(state, dt)
        att = integrator.attitude(state)
    """

    def __init__(self, config: IntegratorConfig = None, limits: FlightLimits = None):
        self.config = config or DEFAULT_INTEGRATOR_CONFIG
        self.limits = limits or DEFAULT_FLIGHT_LIMITS

    def integrate(self, state: FlightState, dt: float) -> FlightState:
        """
        Advance the state by dt.
        dt だけ状態を進める

        Args:
            state: Current state (not modified)
            dt: Time step (s), clamped to [0, max_dt]

        Returns:
            New FlightState
        """
        cfg = self.config
        dt = clamp_dt(dt, cfg.max_dt)

        yaw = state.yaw + state.yaw_rate * dt
        forward, left = body_axes(yaw)

        desired = (left * state.lateral_velocity
                   + forward * state.longitudinal_velocity
                   + UP * state.vertical_velocity)

        alpha = min(1.0, cfg.drag_gain * dt)
        velocity = state.velocity + (desired - state.velocity) * alpha
        position = state.position + velocity * dt

        # Ground plane
        # 地面
        if position[1] <= cfg.ground_height + cfg.ground_epsilon:
            position[1] = cfg.ground_height
            velocity[1] = max(0.0, velocity[1])
            on_ground = True
        else:
            on_ground = False

        return state.evolve(
            position=position,
            velocity=velocity,
            yaw=yaw,
            on_ground=on_ground,
        )

    def attitude(self, state: FlightState) -> Attitude:
        """
        Cosmetic attitude derived from the tracked velocities.
        追従速度から導出する表示用姿勢

        Roll follows strafe (strafe right -> roll right) and pitch follows
        forward speed (forward -> nose down), both capped at max_tilt.
        """
        lim = self.limits
        tilt = self.config.max_tilt
        lateral_frac = _clamp_sym(state.lateral_velocity / (lim.max_lateral or 1.0))
        longitudinal_frac = _clamp_sym(state.longitudinal_velocity / (lim.max_longitudinal or 1.0))

        roll = -lateral_frac * tilt
        pitch = longitudinal_frac * tilt

        # Intrinsic Y (yaw, world up) -> X (pitch, local right) -> Z (roll, local forward)
        quat = Rotation.from_euler("YXZ", [state.yaw, pitch, roll]).as_quat()
        return Attitude(roll=roll, pitch=pitch, yaw=state.yaw,
                        quaternion=tuple(float(q) for q in quat))
