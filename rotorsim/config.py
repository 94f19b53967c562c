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
Simulator Configuration
シミュレータ設定

Aggregates the per-component dataclass configurations. Defaults reproduce the
tuned response character; a JSON file may override any subset.
各コンポーネントのデータクラス設定を集約する。デフォルト値は調整済みの応答特性を
再現し、JSONファイルで任意の一部を上書きできる。

JSON format:
    {
        "layout": "hex-x",
        "limits":     {"max_lateral": 6.0, ...},
        "shaper":     {"throttle_rate": 0.6, ...},
        "integrator": {"drag_gain": 4.0, ...},
        "mixer":      {"yaw_gain": 0.25, ...}
    }
"""

import json
from dataclasses import dataclass, field, fields, replace, asdict
from pathlib import Path
from typing import Any, Dict, Union

from .control.motor_mixer import MixerConfig
from .control.shaper import ShaperConfig
from .core.integrator import IntegratorConfig
from .core.layout import DEFAULT_LAYOUT_NAME
from .core.state import FlightLimits


@dataclass
class SimConfig:
    """
    Complete simulator configuration.
    シミュレータ全体設定
    """
    layout: str = DEFAULT_LAYOUT_NAME
    limits: FlightLimits = field(default_factory=FlightLimits)
    shaper: ShaperConfig = field(default_factory=ShaperConfig)
    integrator: IntegratorConfig = field(default_factory=IntegratorConfig)
    mixer: MixerConfig = field(default_factory=MixerConfig)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SimConfig":
        """
        Build a configuration from a (partial) dictionary.
        （部分的な）辞書から設定を生成

        Raises:
            ValueError: Unknown section or key, or a non-numeric value
        """
        config = cls()
        sections = {f.name for f in fields(cls)} - {"layout"}

        for key, value in data.items():
            if key == "layout":
                config.layout = str(value)
                continue
            if key not in sections:
                raise ValueError(f"Unknown config section: '{key}'")
            if not isinstance(value, dict):
                raise ValueError(f"Config section '{key}' must be an object")
            setattr(config, key, _override(getattr(config, key), value, key))

        return config

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _override(section, values: Dict[str, Any], section_name: str):
    known = {f.name for f in fields(section)}
    changes = {}
    for key, value in values.items():
        if key not in known:
            raise ValueError(f"Unknown key '{key}' in config section '{section_name}'")
        try:
            changes[key] = float(value)
        except (TypeError, ValueError):
            raise ValueError(
                f"Config value {section_name}.{key} must be a number, got {value!r}"
            ) from None
    return replace(section, **changes)


def load_config(path: Union[str, Path]) -> SimConfig:
    """
    Load configuration from a JSON file.
    JSONファイルから設定を読み込み

    Raises:
        FileNotFoundError: File does not exist
        ValueError: Invalid JSON or unknown keys
    """
    path = Path(path)
    with open(path, "r") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Config root in {path} must be an object")
    return SimConfig.from_dict(data)
