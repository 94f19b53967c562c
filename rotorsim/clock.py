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
Simulation Clock
シミュレーションクロック

Drives one physics tick per rendered frame:
レンダリング1フレームにつき1回の物理ティックを駆動する:

    input snapshot -> ControlShaper -> KinematicIntegrator -> MotorMixer
                   -> FrameOutput pushed to listeners

- Frame delta is clamped to IntegratorConfig.max_dt, no sub-stepping
- Pause skips the three update stages but still emits a frame
- Reset and layout swaps replace the state reference in one assignment,
  so a reader never sees a half-updated state
- Single-threaded: tick()/step() must not run concurrently. Only the
  InputState buffer may be written from other threads.
"""

import time
from typing import Callable, Dict, List, Optional

import numpy as np

from .config import SimConfig
from .control.motor_mixer import MotorMixer
from .control.shaper import ControlShaper
from .core.integrator import KinematicIntegrator, clamp_dt
from .core.layout import PRESETS, RotorLayout, resolve_layout_name
from .core.state import FlightState
from .interfaces.input_state import InputState, PAUSE_TOGGLE, RESET
from .interfaces.messages import FrameOutput, GroundContactRejected, LayoutChanged
from .utils import console


class SimulationClock:
    """
    Frame-driven simulation loop.
    フレーム駆動のシミュレーションループ

    Usage:
        clock = SimulationClock()
        clock.subscribe(FrameOutput, renderer.draw)
        clock.subscribe(LayoutChanged, panel.rebuild)
        clock.inputs.press("increase-throttle")

        while running:
            clock.tick()        # wall-clock delta
            # or clock.step(dt) for a fixed time step
    """

    EVENT_TYPES = (FrameOutput, LayoutChanged, GroundContactRejected)

    def __init__(
        self,
        config: SimConfig = None,
        inputs: InputState = None,
        time_source: Callable[[], float] = time.perf_counter,
    ):
        """
        Initialize simulation clock.
        シミュレーションクロックを初期化

        Args:
            config: Simulator configuration (uses defaults if None)
            inputs: Input buffer shared with the input collaborator
            time_source: Wall clock in seconds
        """
        self.config = config or SimConfig()
        cfg = self.config

        self.shaper = ControlShaper(cfg.shaper, cfg.limits)
        self.integrator = KinematicIntegrator(cfg.integrator, cfg.limits)
        self.mixer = MotorMixer(cfg.mixer, cfg.limits)
        self.inputs = inputs or InputState()

        self._time_source = time_source
        self._last_time: Optional[float] = None
        self._paused = False
        self._sim_time = 0.0
        self._ticks = 0

        key, matched = resolve_layout_name(cfg.layout)
        if not matched:
            console.debug(f"Unknown layout '{cfg.layout}', using '{key}'")
        self._state = FlightState.initial(PRESETS[key], cfg.integrator.ground_height)
        self._powers = np.zeros(self._state.layout.rotor_count)
        self._last_frame: Optional[FrameOutput] = None

        self._listeners: Dict[type, List[Callable]] = {t: [] for t in self.EVENT_TYPES}

    # =========================================================================
    # Listeners
    # リスナー
    # =========================================================================

    def subscribe(self, event_type: type, callback: Callable) -> Callable:
        """
        Register a listener for FrameOutput, LayoutChanged or
        GroundContactRejected.
        イベントリスナーを登録

        Returns:
            The callback, so this can be used as a decorator
        """
        if event_type not in self._listeners:
            raise TypeError(f"Unsupported event type: {event_type!r}")
        self._listeners[event_type].append(callback)
        return callback

    def unsubscribe(self, event_type: type, callback: Callable):
        listeners = self._listeners.get(event_type, [])
        if callback in listeners:
            listeners.remove(callback)

    def _emit(self, event):
        for callback in list(self._listeners[type(event)]):
            callback(event)

    # =========================================================================
    # Control surface
    # 操作インターフェース
    # =========================================================================

    @property
    def state(self) -> FlightState:
        return self._state

    @property
    def layout(self) -> RotorLayout:
        return self._state.layout

    @property
    def paused(self) -> bool:
        return self._paused

    @property
    def sim_time(self) -> float:
        return self._sim_time

    @property
    def ticks(self) -> int:
        return self._ticks

    @property
    def last_frame(self) -> Optional[FrameOutput]:
        return self._last_frame

    def pause(self):
        self._paused = True

    def resume(self):
        self._paused = False

    def toggle_pause(self) -> bool:
        """Toggle pause / 一時停止を切替"""
        self._paused = not self._paused
        return self._paused

    def reset(self):
        """
        Restore the default flight state, keeping the active layout.
        アクティブレイアウトを保持したまま初期状態に戻す
        """
        layout = self._state.layout
        self._state = FlightState.initial(layout, self.config.integrator.ground_height)
        self._powers = np.zeros(layout.rotor_count)

    def select_layout(self, name: str):
        """
        Request a layout swap; applied at the start of the next tick.
        レイアウト切替を要求（次ティックの先頭で適用）
        """
        self.inputs.request_layout(name)

    def _swap_layout(self, name: str):
        key, matched = resolve_layout_name(name)
        if not matched:
            console.debug(f"Unknown layout '{name}', using '{key}'")

        previous = self._state.layout
        current = PRESETS[key]
        if current == previous:
            return

        self._state = self._state.with_layout(current)
        self._powers = np.zeros(current.rotor_count)
        self._emit(LayoutChanged(previous, current, requested=str(name), fallback=not matched))

    # =========================================================================
    # Tick
    # ティック
    # =========================================================================

    def tick(self, now: float = None) -> FrameOutput:
        """
        Run one frame using the wall-clock delta since the previous tick.
        前回ティックからの実時間差で1フレーム実行

        The first tick has a zero delta.
        """
        now = self._time_source() if now is None else now
        raw_dt = 0.0 if self._last_time is None else now - self._last_time
        self._last_time = now
        return self.step(raw_dt)

    def step(self, dt: float) -> FrameOutput:
        """
        Run one frame with an explicit time step.
        指定した時間ステップで1フレーム実行

        Args:
            dt: Time step (s), clamped to [0, max_dt]

        Returns:
            FrameOutput, also pushed to FrameOutput listeners
        """
        dt = clamp_dt(dt, self.config.integrator.max_dt)
        snapshot = self.inputs.snapshot()

        for action in snapshot.actions:
            if action == PAUSE_TOGGLE:
                self.toggle_pause()
            elif action == RESET:
                self.reset()

        if snapshot.layout_request is not None:
            self._swap_layout(snapshot.layout_request)

        rejected = False
        if not self._paused:
            state, rejected = self.shaper.shape(self._state, snapshot.intent, dt)
            state = self.integrator.integrate(state, dt)
            self._powers = self.mixer.mix(state)
            self._state = state
            self._sim_time += dt

        self._ticks += 1
        state = self._state
        frame = FrameOutput(
            state=state,
            powers=self._powers.copy(),
            layout=state.layout,
            attitude=self.integrator.attitude(state),
            sim_time=self._sim_time,
            dt=dt,
            paused=self._paused,
            ground_rejected=rejected,
            ground_height=self.config.integrator.ground_height,
        )
        self._last_frame = frame

        if rejected:
            self._emit(GroundContactRejected(sim_time=self._sim_time))
        self._emit(frame)
        return frame
