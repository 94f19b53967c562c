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
Pilot Input Buffer
操縦入力バッファ

Holds the intents currently pressed by the operator. The input collaborator
(keyboard, joystick, scripted sequence) writes into it from any thread; the
simulation clock reads one snapshot per tick.
操作者が現在押している意図を保持する。入力側は任意のスレッドから書き込み、
シミュレーションクロックはティックごとに1回スナップショットを読む。

- Held intents are levels (held / not held), last writer wins
- Actions ("pause-toggle", "reset") are one-shot and consumed by the next tick
- Layout requests keep only the most recent name
"""

import threading
from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, Optional, Tuple

from ..control.shaper import CommandIntent


# =============================================================================
# Intent names
# 意図名
# =============================================================================

INCREASE_THROTTLE = "increase-throttle"
DECREASE_THROTTLE = "decrease-throttle"
YAW_LEFT = "yaw-left"
YAW_RIGHT = "yaw-right"
STRAFE_LEFT = "strafe-left"
STRAFE_RIGHT = "strafe-right"
FORWARD = "forward"
BACKWARD = "backward"

PAUSE_TOGGLE = "pause-toggle"
RESET = "reset"

HELD_INTENTS = frozenset({
    INCREASE_THROTTLE, DECREASE_THROTTLE,
    YAW_LEFT, YAW_RIGHT,
    STRAFE_LEFT, STRAFE_RIGHT,
    FORWARD, BACKWARD,
})

ACTION_INTENTS = frozenset({PAUSE_TOGGLE, RESET})

# Browser-style key codes to intents
DEFAULT_KEY_BINDINGS: Dict[str, str] = {
    "KeyW": INCREASE_THROTTLE,
    "KeyS": DECREASE_THROTTLE,
    "KeyA": YAW_LEFT,
    "KeyD": YAW_RIGHT,
    "ArrowLeft": STRAFE_LEFT,
    "ArrowRight": STRAFE_RIGHT,
    "ArrowUp": FORWARD,
    "ArrowDown": BACKWARD,
    "Space": PAUSE_TOGGLE,
    "Backspace": RESET,
}


def _axis(held: FrozenSet[str], positive: str, negative: str) -> int:
    return (1 if positive in held else 0) - (1 if negative in held else 0)


def intent_from_held(held: Iterable[str]) -> CommandIntent:
    """
    Convert a set of held intent names to a CommandIntent.
    押下中の意図名集合を CommandIntent に変換

    Opposite intents held together cancel out.
    """
    held = frozenset(held)
    return CommandIntent(
        throttle=_axis(held, INCREASE_THROTTLE, DECREASE_THROTTLE),
        yaw=_axis(held, YAW_LEFT, YAW_RIGHT),
        lateral=_axis(held, STRAFE_LEFT, STRAFE_RIGHT),
        longitudinal=_axis(held, FORWARD, BACKWARD),
    )


def held_from_intent(intent: CommandIntent) -> FrozenSet[str]:
    """Inverse of intent_from_held / intent_from_held の逆変換"""
    pairs = (
        (intent.throttle, INCREASE_THROTTLE, DECREASE_THROTTLE),
        (intent.yaw, YAW_LEFT, YAW_RIGHT),
        (intent.lateral, STRAFE_LEFT, STRAFE_RIGHT),
        (intent.longitudinal, FORWARD, BACKWARD),
    )
    held = set()
    for value, positive, negative in pairs:
        if value > 0:
            held.add(positive)
        elif value < 0:
            held.add(negative)
    return frozenset(held)


@dataclass(frozen=True)
class InputSnapshot:
    """
    Inputs read by one tick.
    1ティックで読み取る入力

    Attributes:
        intent: Command intent from held keys
        actions: One-shot actions in arrival order
        layout_request: Most recent requested layout name, if any
    """
    intent: CommandIntent
    actions: Tuple[str, ...] = ()
    layout_request: Optional[str] = None


class InputState:
    """
    Thread-safe buffer of operator intents.
    スレッドセーフな操作意図バッファ

    Usage:
        inputs = InputState()
        inputs.press("increase-throttle")
        inputs.key_down("Space")            # via key bindings
        snapshot = inputs.snapshot()        # called by the clock
    """

    def __init__(self, key_bindings: Dict[str, str] = None):
        self.key_bindings = dict(key_bindings or DEFAULT_KEY_BINDINGS)
        self._lock = threading.Lock()
        self._held = set()
        self._actions = []
        self._layout_request: Optional[str] = None

    def press(self, name: str) -> bool:
        """
        Press an intent. Unknown names are ignored.
        意図を押下（未知の名前は無視）

        Returns:
            True if the name was recognized
        """
        with self._lock:
            if name in HELD_INTENTS:
                self._held.add(name)
                return True
            if name in ACTION_INTENTS:
                self._actions.append(name)
                return True
        return False

    def release(self, name: str):
        """Release a held intent / 押下中の意図を解除"""
        with self._lock:
            self._held.discard(name)

    def key_down(self, code: str) -> bool:
        name = self.key_bindings.get(code)
        if name is None:
            return False
        return self.press(name)

    def key_up(self, code: str):
        name = self.key_bindings.get(code)
        if name is not None:
            self.release(name)

    def set_held(self, names: Iterable[str]):
        """Replace the whole held set (scripted input) / 押下集合を置換"""
        with self._lock:
            self._held = {n for n in names if n in HELD_INTENTS}

    def request_layout(self, name: str):
        """Request a layout swap before the next tick / 次ティック前のレイアウト切替を要求"""
        with self._lock:
            self._layout_request = name

    def clear(self):
        with self._lock:
            self._held.clear()
            self._actions.clear()
            self._layout_request = None

    @property
    def held(self) -> FrozenSet[str]:
        with self._lock:
            return frozenset(self._held)

    def snapshot(self) -> InputSnapshot:
        """
        Read held intents and consume pending actions and layout request.
        押下中の意図を読み、保留中のアクションとレイアウト要求を消費
        """
        with self._lock:
            held = frozenset(self._held)
            actions = tuple(self._actions)
            layout_request = self._layout_request
            self._actions.clear()
            self._layout_request = None
        return InputSnapshot(
            intent=intent_from_held(held),
            actions=actions,
            layout_request=layout_request,
        )
