#!/usr/bin/env python3
"""
Motor Mixer Test
モーターミキサーのテスト

Verifies geometry-aware mixing for every preset layout, clamping, inverse
mixing and the power percentage readout.
全プリセットでの幾何ミキシング、クランプ、逆ミキシング、出力割合を検証。
"""

import math

import numpy as np
import pytest

from rotorsim.control.motor_mixer import (
    MotorMixer,
    MixerConfig,
    mixing_matrix,
    mix_motors,
    power_percentages,
)
from rotorsim.core.layout import PRESETS, RotorLayout, layout_for
from rotorsim.core.state import FlightState


def hover_state(layout_name="quad-x", **changes):
    state = FlightState(
        position=[0.0, 1.0, 0.0],
        throttle_lever=0.5,
        on_ground=False,
        layout=layout_for(layout_name),
    )
    return state.evolve(**changes)


@pytest.mark.parametrize("name", list(PRESETS.keys()))
def test_output_length_and_range(name):
    rng = np.random.default_rng(0)
    mixer = MotorMixer()
    for _ in range(50):
        state = hover_state(
            name,
            throttle_lever=float(rng.uniform(0, 1)),
            lateral_velocity=float(rng.uniform(-10, 10)),
            longitudinal_velocity=float(rng.uniform(-10, 10)),
            yaw_rate=float(rng.uniform(-5, 5)),
        )
        powers = mixer.mix(state)
        assert powers.shape == (layout_for(name).rotor_count,)
        assert np.all(powers >= 0.0)
        assert np.all(powers <= 1.0)


@pytest.mark.parametrize("name", list(PRESETS.keys()))
def test_hover_is_uniform(name):
    powers = mix_motors(hover_state(name))
    np.testing.assert_allclose(powers, 0.5)


def test_quad_plus_hover():
    np.testing.assert_allclose(mix_motors(hover_state("quad-plus")), [0.5, 0.5, 0.5, 0.5])


def test_quad_x_full_yaw():
    """Full yaw command: CCW rotors up, CW rotors down"""
    powers = mix_motors(hover_state("quad-x", yaw_rate=math.pi))
    np.testing.assert_allclose(powers, [0.75, 0.25, 0.25, 0.75])


def test_quad_x_strafe_left_raises_right_side():
    """lateral > 0 commands roll: rotors with x > 0 gain, x < 0 lose"""
    powers = mix_motors(hover_state("quad-x", lateral_velocity=6.0))
    offset = 0.5 * 55.0 / (55.0 * math.sqrt(2.0))
    np.testing.assert_allclose(powers, [0.5 - offset, 0.5 + offset, 0.5 - offset, 0.5 + offset])


def test_quad_plus_forward_uses_front_and_rear():
    powers = mix_motors(hover_state("quad-plus", longitudinal_velocity=8.0))
    # y_norm: front -1, right 0, rear +1, left 0
    np.testing.assert_allclose(powers, [0.0, 0.5, 1.0, 0.5])


def test_commands_are_clamped():
    mixer = MotorMixer()
    roll, pitch, yaw = mixer.commands(hover_state(
        lateral_velocity=60.0, longitudinal_velocity=-80.0, yaw_rate=10.0))
    assert (roll, pitch, yaw) == (1.0, -1.0, 1.0)


def test_outputs_are_clamped():
    powers = mix_motors(hover_state("quad-x", throttle_lever=1.0, yaw_rate=math.pi))
    np.testing.assert_allclose(powers, [1.0, 0.75, 0.75, 1.0])


def test_idempotent():
    mixer = MotorMixer()
    state = hover_state("hex-x", lateral_velocity=2.0, yaw_rate=-1.0)
    first = mixer.mix(state)
    second = mixer.mix(state)
    np.testing.assert_array_equal(first, second)


def test_layout_argument_overrides_state_layout():
    powers = MotorMixer().mix(hover_state("quad-x"), layout_for("hex-plus"))
    assert powers.shape == (6,)


def test_empty_layout():
    empty = RotorLayout("empty", ())
    powers = MotorMixer().mix(hover_state(), empty)
    assert powers.shape == (0,)


def test_mixing_matrix_read_only():
    matrix = mixing_matrix(layout_for("quad-x"))
    assert matrix.shape == (4, 3)
    with pytest.raises(ValueError):
        matrix[0, 0] = 1.0


def test_custom_gains():
    mixer = MotorMixer(MixerConfig(yaw_gain=0.1))
    powers = mixer.mix_normalized(0.5, 0.0, 0.0, 1.0, layout_for("quad-plus"))
    np.testing.assert_allclose(powers, [0.6, 0.4, 0.6, 0.4])


@pytest.mark.parametrize("name", list(PRESETS.keys()))
def test_inverse_mix_recovers_commands(name):
    mixer = MotorMixer()
    layout = layout_for(name)
    commands = (0.5, 0.2, -0.3, 0.4)
    powers = mixer.mix_normalized(*commands, layout)
    recovered = mixer.inverse_mix(powers, layout)
    np.testing.assert_allclose(recovered, commands, atol=1e-9)


def test_inverse_mix_empty():
    assert MotorMixer().inverse_mix([], RotorLayout("empty", ())) == (0.0, 0.0, 0.0, 0.0)


def test_power_percentages():
    assert power_percentages([0.0, 0.125, 0.375, 1.0]) == [0, 13, 38, 100]
