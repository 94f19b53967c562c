#!/usr/bin/env python3
"""
Kinematic Integrator Test
運動学積分器のテスト

Covers the ground plane, time-step clamping, heading-relative motion and the
cosmetic attitude.
地面処理、時間ステップ制限、機首方向基準の移動、表示姿勢を検証。
"""

import math

import numpy as np
import pytest
from scipy.spatial.transform import Rotation

from rotorsim.control.shaper import ControlShaper, CommandIntent
from rotorsim.core.integrator import (
    KinematicIntegrator,
    IntegratorConfig,
    body_axes,
    clamp_dt,
)
from rotorsim.core.state import FlightState, GROUND_HEIGHT


def test_clamp_dt():
    assert clamp_dt(0.01) == 0.01
    assert clamp_dt(1.0) == 0.033
    assert clamp_dt(0.0) == 0.0
    assert clamp_dt(-0.5) == 0.0
    assert clamp_dt(float("nan")) == 0.0
    assert clamp_dt(float("inf")) == 0.0


def test_body_axes():
    forward, left = body_axes(0.0)
    np.testing.assert_allclose(forward, [0.0, 0.0, 1.0])
    np.testing.assert_allclose(left, [1.0, 0.0, 0.0])

    forward, left = body_axes(math.pi / 2)
    np.testing.assert_allclose(forward, [1.0, 0.0, 0.0], atol=1e-12)
    np.testing.assert_allclose(left, [0.0, 0.0, -1.0], atol=1e-12)


def test_resting_state_stays_on_ground():
    integrator = KinematicIntegrator()
    state = FlightState.initial()
    for _ in range(100):
        state = integrator.integrate(state, 1.0 / 60.0)
    assert state.on_ground
    assert state.position[1] == GROUND_HEIGHT
    np.testing.assert_allclose(state.velocity, 0.0)


def test_descent_clamped_at_ground(airborne_state):
    integrator = KinematicIntegrator()
    state = airborne_state.evolve(
        position=[0.0, GROUND_HEIGHT + 0.01, 0.0],
        velocity=[0.0, -5.0, 0.0],
        vertical_velocity=-8.0,
    )
    state = integrator.integrate(state, 0.02)
    assert state.on_ground
    assert state.position[1] == GROUND_HEIGHT
    assert state.velocity[1] == 0.0


def test_yaw_integration(airborne_state):
    state = airborne_state.evolve(yaw_rate=1.0)
    state = KinematicIntegrator().integrate(state, 0.01)
    assert state.yaw == pytest.approx(0.01)


def test_dt_is_clamped(airborne_state):
    state = airborne_state.evolve(yaw_rate=1.0)
    state = KinematicIntegrator().integrate(state, 0.5)
    assert state.yaw == pytest.approx(0.033)


def test_forward_follows_heading(airborne_state):
    integrator = KinematicIntegrator()

    state = airborne_state.evolve(longitudinal_velocity=8.0)
    for _ in range(30):
        state = integrator.integrate(state, 1.0 / 60.0)
    assert state.position[2] > 0.5
    assert state.position[0] == pytest.approx(0.0, abs=1e-9)

    state = airborne_state.evolve(yaw=math.pi / 2, longitudinal_velocity=8.0)
    for _ in range(30):
        state = integrator.integrate(state, 1.0 / 60.0)
    assert state.position[0] > 0.5
    assert state.position[2] == pytest.approx(0.0, abs=1e-9)


def test_strafe_left_moves_along_left_axis(airborne_state):
    integrator = KinematicIntegrator()
    state = airborne_state.evolve(lateral_velocity=6.0)
    for _ in range(30):
        state = integrator.integrate(state, 1.0 / 60.0)
    assert state.position[0] > 0.3
    assert state.position[2] == pytest.approx(0.0, abs=1e-9)


def test_velocity_smoothing(airborne_state):
    integrator = KinematicIntegrator(IntegratorConfig(drag_gain=4.0))
    state = airborne_state.evolve(longitudinal_velocity=8.0)
    state = integrator.integrate(state, 0.025)
    # alpha = 4 * 0.025 = 0.1
    assert state.velocity[2] == pytest.approx(0.8)


def test_input_state_not_modified(airborne_state):
    state = airborne_state.evolve(longitudinal_velocity=8.0)
    before = state.position.copy()
    KinematicIntegrator().integrate(state, 0.02)
    np.testing.assert_array_equal(state.position, before)
    np.testing.assert_array_equal(state.velocity, [0.0, 0.0, 0.0])


def test_ground_invariant_random_inputs():
    """Position never drops below ground clearance, vy >= 0 while landed"""
    rng = np.random.default_rng(42)
    shaper = ControlShaper()
    integrator = KinematicIntegrator()
    state = FlightState.initial()

    for _ in range(3000):
        intent = CommandIntent(*(int(v) for v in rng.integers(-1, 2, size=4)))
        dt = float(rng.uniform(0.0, 0.05))
        state = shaper.shape(state, intent, dt).state
        state = integrator.integrate(state, dt)
        assert state.position[1] >= GROUND_HEIGHT
        if state.on_ground:
            assert state.velocity[1] >= 0.0
            assert state.position[1] == GROUND_HEIGHT
        if state.position[1] == GROUND_HEIGHT:
            assert state.on_ground


def test_takeoff_leaves_ground():
    shaper = ControlShaper()
    integrator = KinematicIntegrator()
    state = FlightState.initial()
    for _ in range(120):
        state = shaper.shape(state, CommandIntent(throttle=1), 1.0 / 60.0).state
        state = integrator.integrate(state, 1.0 / 60.0)
    assert not state.on_ground
    assert state.altitude() > 0.0

    for _ in range(600):
        state = shaper.shape(state, CommandIntent(throttle=-1), 1.0 / 60.0).state
        state = integrator.integrate(state, 1.0 / 60.0)
    assert state.on_ground


def test_attitude_level_at_rest():
    att = KinematicIntegrator().attitude(FlightState.initial())
    assert att.roll == 0.0
    assert att.pitch == 0.0
    np.testing.assert_allclose(att.quaternion, [0.0, 0.0, 0.0, 1.0], atol=1e-12)


def test_attitude_tilt_capped(airborne_state):
    integrator = KinematicIntegrator()
    att = integrator.attitude(airborne_state.evolve(
        lateral_velocity=60.0, longitudinal_velocity=80.0))
    assert att.roll == pytest.approx(-0.2)
    assert att.pitch == pytest.approx(0.2)

    att = integrator.attitude(airborne_state.evolve(lateral_velocity=-3.0))
    assert att.roll == pytest.approx(0.1)


def test_attitude_yaw_quaternion(airborne_state):
    yaw = 0.7
    att = KinematicIntegrator().attitude(airborne_state.evolve(yaw=yaw))
    np.testing.assert_allclose(
        att.quaternion, [0.0, math.sin(yaw / 2), 0.0, math.cos(yaw / 2)], atol=1e-12)


def _rot_x(a):
    c, s = math.cos(a), math.sin(a)
    return np.array([[1, 0, 0], [0, c, -s], [0, s, c]])


def _rot_y(a):
    c, s = math.cos(a), math.sin(a)
    return np.array([[c, 0, s], [0, 1, 0], [-s, 0, c]])


def _rot_z(a):
    c, s = math.cos(a), math.sin(a)
    return np.array([[c, -s, 0], [s, c, 0], [0, 0, 1]])


def test_attitude_rotation_order(airborne_state):
    """Yaw about up, then pitch about local right, then roll about local forward"""
    state = airborne_state.evolve(yaw=0.9, lateral_velocity=-3.0, longitudinal_velocity=6.0)
    att = KinematicIntegrator().attitude(state)
    assert att.roll == pytest.approx(0.1)
    assert att.pitch == pytest.approx(0.15)

    expected = _rot_y(0.9) @ _rot_x(att.pitch) @ _rot_z(att.roll)
    np.testing.assert_allclose(Rotation.from_quat(att.quaternion).as_matrix(), expected, atol=1e-12)
