"""
input_sequence.py - Test Input Sequence Generator
テスト入力シーケンス生成

Generates deterministic pilot-intent sequences for scripted runs.
スクリプト実行用の決定的な操縦意図シーケンスを生成
"""

from typing import Callable, Dict, List

from .sim_io import IntentSample, DEFAULT_DT


def _sequence(duration: float, dt: float, schedule: Callable[[float], dict]) -> List[IntentSample]:
    inputs = []
    n = int(round(duration / dt))
    for i in range(n):
        t = i * dt
        inputs.append(IntentSample(time=t, **schedule(t)))
    return inputs


def generate_takeoff_sequence(duration: float = 10.0, dt: float = DEFAULT_DT) -> List[IntentSample]:
    """
    Take off, manoeuvre and land.
    離陸・機動・着陸

    Sequence:
    - 0.0-1.5s: Lever up (0 -> 0.9, climb)
    - 1.5-2.2s: Lever down (0.9 -> ~0.5, near hover)
    - 2.5-3.5s: Strafe left
    - 4.0-5.0s: Forward
    - 5.5-6.5s: Yaw left
    - 7.0-10s:  Lever down (descend and land)
    """
    def schedule(t):
        s = {}
        if t < 1.5:
            s['throttle'] = 1
        elif t < 2.2:
            s['throttle'] = -1
        elif 2.5 <= t < 3.5:
            s['lateral'] = 1
        elif 4.0 <= t < 5.0:
            s['longitudinal'] = 1
        elif 5.5 <= t < 6.5:
            s['yaw'] = 1
        elif t >= 7.0:
            s['throttle'] = -1
        return s

    return _sequence(duration, dt, schedule)


def generate_step_sequence(duration: float = 10.0, dt: float = DEFAULT_DT) -> List[IntentSample]:
    """
    Generate step input sequence for testing.
    ステップ入力シーケンスを生成

    Sequence:
    - 0-1s: Lever up (climb out)
    - 1-2s: Strafe step (+1)
    - 3-4s: Forward step (+1)
    - 5-6s: Yaw step (+1)
    - 7-8s: Lever down
    - otherwise: hold
    """
    def schedule(t):
        if t < 1.0:
            return {'throttle': 1}
        if 1.0 <= t < 2.0:
            return {'lateral': 1}
        if 3.0 <= t < 4.0:
            return {'longitudinal': 1}
        if 5.0 <= t < 6.0:
            return {'yaw': 1}
        if 7.0 <= t < 8.0:
            return {'throttle': -1}
        return {}

    return _sequence(duration, dt, schedule)


def generate_doublet_sequence(duration: float = 10.0, dt: float = DEFAULT_DT,
                              pulse_duration: float = 0.5) -> List[IntentSample]:
    """
    Generate doublet input sequence (system identification pattern).
    ダブレット入力シーケンスを生成（システム同定用パターン）

    Doublet: +1 for pulse_duration, then -1 for pulse_duration, on each axis
    after a one-second climb.
    """
    p = pulse_duration

    def doublet(t, start):
        if start <= t < start + p:
            return 1
        if start + p <= t < start + 2 * p:
            return -1
        return 0

    def schedule(t):
        if t < 1.0:
            return {'throttle': 1}
        return {
            'lateral': doublet(t, 2.0),
            'longitudinal': doublet(t, 4.0),
            'yaw': doublet(t, 6.0),
        }

    return _sequence(duration, dt, schedule)


# Sequence registry
SEQUENCES: Dict[str, Callable[..., List[IntentSample]]] = {
    'takeoff': generate_takeoff_sequence,
    'step': generate_step_sequence,
    'doublet': generate_doublet_sequence,
}
