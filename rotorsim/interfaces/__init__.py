# Interface modules
# インターフェースモジュール
"""
External interfaces: pilot input buffer and renderer/UI output messages.
外部インターフェース：操縦入力バッファとレンダラ/UI向け出力メッセージ

Modules:
- input_state: Held intents, one-shot actions, key bindings
- messages: FrameOutput, LayoutChanged, GroundContactRejected
"""

from .input_state import (
    InputState,
    InputSnapshot,
    DEFAULT_KEY_BINDINGS,
    HELD_INTENTS,
    ACTION_INTENTS,
    intent_from_held,
    held_from_intent,
)

from .messages import (
    FrameOutput,
    LayoutChanged,
    GroundContactRejected,
    GROUND_NOTICE_DURATION_S,
    format_readout,
)

__all__ = [
    # Input
    'InputState',
    'InputSnapshot',
    'DEFAULT_KEY_BINDINGS',
    'HELD_INTENTS',
    'ACTION_INTENTS',
    'intent_from_held',
    'held_from_intent',
    # Messages
    'FrameOutput',
    'LayoutChanged',
    'GroundContactRejected',
    'GROUND_NOTICE_DURATION_S',
    'format_readout',
]
