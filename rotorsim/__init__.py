"""
rotorsim - Multirotor flight-state integrator and motor-mixing engine
マルチロータ飛行状態積分・モーターミキシングエンジン
"""

__version__ = "0.1.0"

from .core import FlightState, RotorLayout, layout_for, KinematicIntegrator
from .control import ControlShaper, CommandIntent, MotorMixer
from .config import SimConfig, load_config
from .clock import SimulationClock
from .interfaces import FrameOutput, LayoutChanged, GroundContactRejected, InputState

__all__ = [
    '__version__',
    'FlightState',
    'RotorLayout',
    'layout_for',
    'KinematicIntegrator',
    'ControlShaper',
    'CommandIntent',
    'MotorMixer',
    'SimConfig',
    'load_config',
    'SimulationClock',
    'FrameOutput',
    'LayoutChanged',
    'GroundContactRejected',
    'InputState',
]
