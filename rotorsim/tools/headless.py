"""
headless.py - Headless Simulation Runner
ヘッドレスシミュレーション実行

Runs the simulation clock at a fixed time step without a renderer, driven by
a scripted intent sequence. Output is one FrameLog per tick.
レンダラなしで固定時間ステップのシミュレーションを実行する。

Usage:
    from rotorsim.tools.headless import run_headless
    from rotorsim.tools.input_sequence import generate_takeoff_sequence

    logs = run_headless(generate_takeoff_sequence(), duration=10.0)
"""

from typing import List, Optional

from ..clock import SimulationClock
from ..config import SimConfig
from ..core.integrator import clamp_dt
from ..interfaces.input_state import held_from_intent
from .sim_io import FrameLog, IntentSample, DEFAULT_DT, get_input_at_time


def run_headless(
    inputs: List[IntentSample],
    config: Optional[SimConfig] = None,
    dt: float = DEFAULT_DT,
    duration: Optional[float] = None,
    clock: Optional[SimulationClock] = None,
) -> List[FrameLog]:
    """
    Run a scripted simulation.
    スクリプト化されたシミュレーションを実行

    Args:
        inputs: Intent samples (held from each sample's time until the next)
        config: Simulator configuration (ignored when clock is given)
        dt: Fixed time step (s), clamped once to the integrator's max_dt;
            step count and input sampling use the clamped value
        duration: Simulated duration (s); defaults to the input span
        clock: Existing clock to drive (e.g. with listeners attached)

    Returns:
        One FrameLog per tick
    """
    if not dt > 0:
        raise ValueError(f"dt must be positive, got {dt}")

    clock = clock or SimulationClock(config)
    dt = clamp_dt(dt, clock.config.integrator.max_dt)
    if duration is None:
        duration = inputs[-1].time + dt if inputs else 0.0

    steps = int(round(duration / dt))
    start = clock.sim_time
    logs = []
    for _ in range(steps):
        # Inputs are indexed by simulated time
        sample = get_input_at_time(inputs, clock.sim_time - start)
        clock.inputs.set_held(held_from_intent(sample.to_intent()))
        frame = clock.step(dt)
        logs.append(FrameLog.from_frame(frame))

    return logs
