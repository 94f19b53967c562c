#!/usr/bin/env python3
"""
Flight State Test
飛行状態のテスト
"""

import numpy as np
import pytest

from rotorsim.core.layout import layout_for
from rotorsim.core.state import FlightState, GROUND_HEIGHT


def test_initial_state():
    state = FlightState.initial()
    np.testing.assert_array_equal(state.position, [0.0, GROUND_HEIGHT, 0.0])
    np.testing.assert_array_equal(state.velocity, [0.0, 0.0, 0.0])
    assert state.throttle_lever == 0.0
    assert state.on_ground
    assert state.layout.name == "quad-x"
    assert state.altitude() == 0.0


def test_evolve_copies_arrays():
    state = FlightState.initial()
    moved = state.evolve(position=[1.0, 2.0, 3.0])
    assert moved is not state
    np.testing.assert_array_equal(state.position, [0.0, GROUND_HEIGHT, 0.0])
    np.testing.assert_array_equal(moved.position, [1.0, 2.0, 3.0])
    assert moved.position is not state.position


def test_with_layout_keeps_motion():
    state = FlightState(position=[0.0, 3.0, 1.0], throttle_lever=0.7, on_ground=False)
    swapped = state.with_layout(layout_for("hex-plus"))
    assert swapped.layout.name == "hex-plus"
    np.testing.assert_array_equal(swapped.position, state.position)
    assert swapped.throttle_lever == 0.7


def test_to_dict():
    state = FlightState(position=[1.0, 2.0, 3.0], yaw=0.5, on_ground=False,
                        layout=layout_for("hex-x"))
    data = state.to_dict()
    assert (data["x"], data["y"], data["z"]) == (1.0, 2.0, 3.0)
    assert data["yaw"] == 0.5
    assert data["layout"] == "hex-x"
    assert data["on_ground"] is False
    assert "hex-x" in repr(state)


def test_arrays_are_read_only():
    state = FlightState.initial()
    with pytest.raises(ValueError):
        state.position[0] = 1.0
    with pytest.raises(ValueError):
        state.velocity[1] = -1.0


def test_evolve_from_read_only_arrays():
    state = FlightState.initial()
    moved = state.evolve(yaw=1.0)
    assert not moved.position.flags.writeable
    np.testing.assert_array_equal(moved.position, state.position)
