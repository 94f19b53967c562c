# Core geometry, state and kinematics
# 幾何形状・状態・運動学コアモジュール
"""
Core simulation components: rotor layouts, flight state, kinematic integrator.
コアシミュレーションコンポーネント：ロータレイアウト、飛行状態、運動学積分器
"""

from .layout import (
    Spin,
    Rotor,
    RotorLayout,
    PRESETS,
    LAYOUT_ALIASES,
    DEFAULT_LAYOUT_NAME,
    hex_layout,
    layout_for,
    layout_names,
    resolve_layout_name,
)
from .state import FlightState, FlightLimits, DEFAULT_FLIGHT_LIMITS, GROUND_HEIGHT
from .integrator import (
    KinematicIntegrator,
    IntegratorConfig,
    DEFAULT_INTEGRATOR_CONFIG,
    Attitude,
    body_axes,
    clamp_dt,
)

__all__ = [
    # Layout
    'Spin',
    'Rotor',
    'RotorLayout',
    'PRESETS',
    'LAYOUT_ALIASES',
    'DEFAULT_LAYOUT_NAME',
    'hex_layout',
    'layout_for',
    'layout_names',
    'resolve_layout_name',
    # State
    'FlightState',
    'FlightLimits',
    'DEFAULT_FLIGHT_LIMITS',
    'GROUND_HEIGHT',
    # Integrator
    'KinematicIntegrator',
    'IntegratorConfig',
    'DEFAULT_INTEGRATOR_CONFIG',
    'Attitude',
    'body_axes',
    'clamp_dt',
]
