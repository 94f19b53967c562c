"""
Offline tools: headless runs, CSV input/output, input sequences, plotting.
オフラインツール：ヘッドレス実行、CSV入出力、入力シーケンス、プロット

Plotting lives in rotorsim.tools.visualize and is imported on demand.
"""

from .sim_io import (
    IntentSample,
    FrameLog,
    DEFAULT_DT,
    load_input_csv,
    save_input_csv,
    load_output_csv,
    save_output_csv,
    get_input_at_time,
)
from .input_sequence import SEQUENCES
from .headless import run_headless

__all__ = [
    'IntentSample',
    'FrameLog',
    'DEFAULT_DT',
    'load_input_csv',
    'save_input_csv',
    'load_output_csv',
    'save_output_csv',
    'get_input_at_time',
    'SEQUENCES',
    'run_headless',
]
