# Control modules
# 制御モジュール
"""
Control algorithms for the multirotor simulator.
マルチロータシミュレータ用制御アルゴリズム

Modules:
- shaper: Pilot intent to smoothed velocity/yaw targets
- motor_mixer: Geometry-aware per-rotor power mixing
"""

# Control Shaper
from .shaper import (
    ControlShaper,
    ShaperConfig,
    CommandIntent,
    ShapeResult,
    NEUTRAL_INTENT,
    DEFAULT_SHAPER_CONFIG,
)

# Motor Mixer
from .motor_mixer import (
    MotorMixer,
    MixerConfig,
    DEFAULT_MIXER_CONFIG,
    mixing_matrix,
    mix_motors,
    power_percentages,
)

__all__ = [
    # Shaper
    'ControlShaper',
    'ShaperConfig',
    'CommandIntent',
    'ShapeResult',
    'NEUTRAL_INTENT',
    'DEFAULT_SHAPER_CONFIG',
    # Motor Mixer
    'MotorMixer',
    'MixerConfig',
    'DEFAULT_MIXER_CONFIG',
    'mixing_matrix',
    'mix_motors',
    'power_percentages',
]
