"""
sim_io.py - Simulator Input/Output Format
シミュレータ入出力フォーマット

CSV formats for scripted runs.
スクリプト実行用のCSVフォーマット

Input CSV format (intents in {-1, 0, +1}):
  time,throttle,yaw,lateral,longitudinal
  0.000,1,0,0,0
  0.016667,1,0,0,0
  ...

Output CSV format (one column per rotor, layout order):
  # layout: quad-x
  time,x,y,z,yaw,roll,pitch,lever,on_ground,m1,m2,m3,m4
  0.016667,0.000000,0.060000,0.000000,0.000000,...
  ...
"""

import csv
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple, Union

from ..control.shaper import CommandIntent


PathLike = Union[str, Path]

# Default fixed time step for scripted runs [s] (60 FPS)
DEFAULT_DT = 1.0 / 60.0


# =============================================================================
# Input Format
# =============================================================================

@dataclass
class IntentSample:
    """Pilot intents at a given time / 指定時刻の操縦意図"""
    time: float          # Time [s]
    throttle: int = 0    # Lever up (+1) / down (-1)
    yaw: int = 0         # Yaw left (+1) / right (-1)
    lateral: int = 0     # Strafe left (+1) / right (-1)
    longitudinal: int = 0  # Forward (+1) / backward (-1)

    def to_intent(self) -> CommandIntent:
        return CommandIntent(
            throttle=self.throttle,
            yaw=self.yaw,
            lateral=self.lateral,
            longitudinal=self.longitudinal,
        )


INPUT_COLUMNS = ['time', 'throttle', 'yaw', 'lateral', 'longitudinal']


def load_input_csv(filepath: PathLike) -> List[IntentSample]:
    """Load input sequence from CSV / CSVから入力シーケンスを読み込み"""
    inputs = []
    with open(filepath, 'r', newline='') as f:
        reader = csv.DictReader(line for line in f if not line.startswith('#'))
        missing = set(INPUT_COLUMNS) - set(reader.fieldnames or [])
        if missing:
            raise ValueError(f"Input CSV {filepath} is missing columns: {sorted(missing)}")
        for row in reader:
            inputs.append(IntentSample(
                time=float(row['time']),
                throttle=_level(row['throttle']),
                yaw=_level(row['yaw']),
                lateral=_level(row['lateral']),
                longitudinal=_level(row['longitudinal']),
            ))
    return inputs


def _level(text: str) -> int:
    value = float(text)
    return (value > 0) - (value < 0)


def save_input_csv(filepath: PathLike, inputs: List[IntentSample]):
    """Save input sequence to CSV / 入力シーケンスをCSVに保存"""
    with open(filepath, 'w', newline='') as f:
        writer = csv.writer(f)
        writer.writerow(INPUT_COLUMNS)
        for inp in inputs:
            writer.writerow([f"{inp.time:.6f}", inp.throttle, inp.yaw,
                             inp.lateral, inp.longitudinal])


def get_input_at_time(inputs: List[IntentSample], t: float) -> IntentSample:
    """
    Get the sample in effect at time t (last sample with time <= t).
    時刻 t で有効なサンプルを取得
    """
    if not inputs:
        return IntentSample(time=t)

    lo, hi = 0, len(inputs) - 1
    if t < inputs[0].time:
        return inputs[0]
    while lo < hi:
        mid = (lo + hi + 1) // 2
        if inputs[mid].time <= t:
            lo = mid
        else:
            hi = mid - 1
    return inputs[lo]


# =============================================================================
# Output Format
# =============================================================================

@dataclass
class FrameLog:
    """Frame log entry / フレームログエントリ"""
    time: float      # Simulation time [s]
    x: float         # Position X [m]
    y: float         # Position Y (height) [m]
    z: float         # Position Z [m]
    yaw: float       # Heading [rad]
    roll: float      # Display roll [rad]
    pitch: float     # Display pitch [rad]
    lever: float     # Throttle lever [0, 1]
    on_ground: bool  # Ground contact
    powers: List[float] = field(default_factory=list)  # Rotor powers, layout order

    @classmethod
    def from_frame(cls, frame) -> "FrameLog":
        s = frame.state
        return cls(
            time=frame.sim_time,
            x=float(s.position[0]), y=float(s.position[1]), z=float(s.position[2]),
            yaw=s.yaw,
            roll=frame.attitude.roll,
            pitch=frame.attitude.pitch,
            lever=s.throttle_lever,
            on_ground=s.on_ground,
            powers=[float(p) for p in frame.powers],
        )


STATE_COLUMNS = ['time', 'x', 'y', 'z', 'yaw', 'roll', 'pitch', 'lever', 'on_ground']


def save_output_csv(filepath: PathLike, logs: List[FrameLog], metadata: Optional[dict] = None):
    """
    Save frame logs to CSV.
    フレームログをCSVに保存

    Args:
        filepath: Output file path
        logs: List of frame logs
        metadata: Optional metadata (written as comments)
    """
    rotor_count = max((len(log.powers) for log in logs), default=0)

    with open(filepath, 'w', newline='') as f:
        if metadata:
            for key, value in metadata.items():
                f.write(f"# {key}: {value}\n")

        writer = csv.writer(f)
        writer.writerow(STATE_COLUMNS + [f"m{i + 1}" for i in range(rotor_count)])
        for log in logs:
            writer.writerow([
                f"{log.time:.6f}",
                f"{log.x:.6f}", f"{log.y:.6f}", f"{log.z:.6f}",
                f"{log.yaw:.6f}", f"{log.roll:.6f}", f"{log.pitch:.6f}",
                f"{log.lever:.6f}", int(log.on_ground),
            ] + [f"{p:.6f}" for p in log.powers])


def load_output_csv(filepath: PathLike) -> Tuple[List[FrameLog], dict]:
    """
    Load frame logs from CSV.
    CSVからフレームログを読み込み

    Returns:
        (logs, metadata)
    """
    logs = []
    metadata = {}

    with open(filepath, 'r', newline='') as f:
        lines = f.readlines()

    for line in lines:
        if not line.startswith('#'):
            break
        parts = line[1:].strip().split(': ', 1)
        if len(parts) == 2:
            metadata[parts[0].strip()] = parts[1].strip()

    reader = csv.DictReader(line for line in lines if not line.startswith('#'))
    motor_cols = [c for c in (reader.fieldnames or []) if c.startswith('m') and c[1:].isdigit()]
    for row in reader:
        logs.append(FrameLog(
            time=float(row['time']),
            x=float(row['x']), y=float(row['y']), z=float(row['z']),
            yaw=float(row['yaw']), roll=float(row['roll']), pitch=float(row['pitch']),
            lever=float(row['lever']),
            on_ground=bool(int(row['on_ground'])),
            powers=[float(row[c]) for c in motor_cols if row[c] not in (None, '')],
        ))

    return logs, metadata
