"""Shared pytest fixtures / 共通フィクスチャ"""

import matplotlib

matplotlib.use("Agg")

import pytest

from rotorsim.core.layout import layout_for
from rotorsim.core.state import FlightState
from rotorsim.utils import console


@pytest.fixture
def airborne_state():
    """Quad-X state hovering 2 m up, lever at hover"""
    return FlightState(
        position=[0.0, 2.06, 0.0],
        throttle_lever=0.5,
        on_ground=False,
        layout=layout_for("quad-x"),
    )


@pytest.fixture(autouse=True)
def quiet_console():
    console.set_color(False)
    console.set_verbose(False)
    yield
    console.set_verbose(False)
