#!/usr/bin/env python3
"""
Headless Runner Test
ヘッドレス実行のテスト
"""

import pytest

from rotorsim.clock import SimulationClock
from rotorsim.config import SimConfig
from rotorsim.core.state import GROUND_HEIGHT
from rotorsim.interfaces.messages import GroundContactRejected
from rotorsim.tools.headless import run_headless
from rotorsim.tools.input_sequence import generate_takeoff_sequence
from rotorsim.tools.sim_io import IntentSample


def test_takeoff_run():
    dt = 1.0 / 60.0
    logs = run_headless(generate_takeoff_sequence(duration=4.0, dt=dt), dt=dt, duration=4.0)
    assert len(logs) == 240
    assert all(log.y >= GROUND_HEIGHT for log in logs)
    assert max(log.y for log in logs) > GROUND_HEIGHT + 0.1
    assert logs[-1].time == pytest.approx(4.0)
    assert all(len(log.powers) == 4 for log in logs)


def test_duration_defaults_to_input_span():
    inputs = [IntentSample(0.0, throttle=1), IntentSample(0.5)]
    logs = run_headless(inputs, dt=0.025)
    assert len(logs) == 21


def test_large_dt_clamped_before_scheduling():
    """Step count and input sampling follow the clamped time step"""
    inputs = [IntentSample(0.0, throttle=1), IntentSample(0.5)]
    logs = run_headless(inputs, dt=0.05, duration=1.0)

    assert len(logs) == 30
    assert logs[0].time == pytest.approx(0.033)
    assert logs[-1].time == pytest.approx(1.0, abs=0.033)
    # Throttle held for 0.5 s of simulated time at 0.6 /s
    assert logs[-1].lever == pytest.approx(0.3, abs=0.6 * 0.033)


def test_layout_from_config():
    logs = run_headless([IntentSample(0.0, throttle=1)], SimConfig(layout="hex-x"),
                        dt=0.02, duration=1.0)
    assert len(logs[-1].powers) == 6


def test_existing_clock_listeners():
    clock = SimulationClock()
    rejections = []
    clock.subscribe(GroundContactRejected, rejections.append)
    run_headless([IntentSample(0.0, yaw=1)], dt=0.02, duration=0.2, clock=clock)
    assert len(rejections) == 10
    assert clock.state.yaw == 0.0


def test_invalid_dt():
    with pytest.raises(ValueError):
        run_headless([IntentSample(0.0)], dt=0.0)
