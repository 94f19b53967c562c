"""
visualize.py - Flight Log Visualization
フライトログ可視化ツール

Plots a headless run: ground track, altitude, heading, lever and rotor power.
ヘッドレス実行結果をプロット：地上軌跡、高度、方位、レバー、ロータ出力

Usage:
  rsim plot output.csv
  rsim plot output.csv --save flight.png
"""

from typing import List, Optional

import numpy as np
import matplotlib.pyplot as plt

from ..core.state import GROUND_HEIGHT
from .sim_io import FrameLog


def extract_arrays(logs: List[FrameLog]) -> dict:
    """
    Extract numpy arrays from frame logs.
    フレームログからnumpy配列を抽出
    """
    n = len(logs)
    rotor_count = max((len(log.powers) for log in logs), default=0)
    data = {
        'time': np.zeros(n),
        'x': np.zeros(n),
        'y': np.zeros(n),
        'z': np.zeros(n),
        'yaw': np.zeros(n),
        'roll': np.zeros(n),
        'pitch': np.zeros(n),
        'lever': np.zeros(n),
        'on_ground': np.zeros(n, dtype=bool),
        'powers': np.zeros((n, rotor_count)),
    }

    for i, log in enumerate(logs):
        data['time'][i] = log.time
        data['x'][i] = log.x
        data['y'][i] = log.y
        data['z'][i] = log.z
        data['yaw'][i] = log.yaw
        data['roll'][i] = log.roll
        data['pitch'][i] = log.pitch
        data['lever'][i] = log.lever
        data['on_ground'][i] = log.on_ground
        data['powers'][i, :len(log.powers)] = log.powers

    return data


def plot_run(logs: List[FrameLog], title: str = "Flight Log",
             rotor_ids: Optional[List[str]] = None, save_path: Optional[str] = None,
             ground_height: float = GROUND_HEIGHT):
    """
    Plot a flight log.
    フライトログをプロット

    Returns:
        matplotlib Figure
    """
    data = extract_arrays(logs)
    t = data['time']
    rad2deg = 180.0 / np.pi

    fig = plt.figure(figsize=(14, 8))
    fig.suptitle(title, fontsize=14, fontweight='bold')

    # Ground track (x, z)
    ax1 = fig.add_subplot(2, 3, 1)
    ax1.plot(data['x'], data['z'], 'b-', linewidth=1.5)
    ax1.set_xlabel('X [m]')
    ax1.set_ylabel('Z [m]')
    ax1.set_title('Ground Track')
    ax1.axis('equal')
    ax1.grid(True, alpha=0.3)

    ax2 = fig.add_subplot(2, 3, 2)
    ax2.plot(t, data['y'] - ground_height, 'b-', linewidth=1.5)
    ax2.fill_between(t, 0, 1, where=data['on_ground'], color='gray', alpha=0.2,
                     transform=ax2.get_xaxis_transform(), label='On ground')
    ax2.set_ylabel('Altitude [m]')
    ax2.set_title('Altitude')
    ax2.legend(loc='upper right')
    ax2.grid(True, alpha=0.3)

    ax3 = fig.add_subplot(2, 3, 3)
    ax3.plot(t, data['yaw'] * rad2deg, 'b-', linewidth=1.5)
    ax3.set_ylabel('Yaw [deg]')
    ax3.set_title('Heading')
    ax3.grid(True, alpha=0.3)

    ax4 = fig.add_subplot(2, 3, 4)
    ax4.plot(t, data['lever'] * 100, 'g-', linewidth=1.5)
    ax4.axhline(50, color='k', linestyle=':', linewidth=1, label='Hover')
    ax4.set_xlabel('Time [s]')
    ax4.set_ylabel('Lever [%]')
    ax4.set_ylim(-5, 105)
    ax4.set_title('Throttle Lever')
    ax4.legend(loc='upper right')
    ax4.grid(True, alpha=0.3)

    ax5 = fig.add_subplot(2, 3, 5)
    ax5.plot(t, data['roll'] * rad2deg, 'b-', label='Roll', linewidth=1.5)
    ax5.plot(t, data['pitch'] * rad2deg, 'r--', label='Pitch', linewidth=1.5)
    ax5.set_xlabel('Time [s]')
    ax5.set_ylabel('Angle [deg]')
    ax5.set_title('Display Tilt')
    ax5.legend(loc='upper right')
    ax5.grid(True, alpha=0.3)

    ax6 = fig.add_subplot(2, 3, 6)
    powers = data['powers']
    for i in range(powers.shape[1]):
        label = rotor_ids[i] if rotor_ids and i < len(rotor_ids) else f"M{i + 1}"
        ax6.plot(t, powers[:, i] * 100, linewidth=1.2, label=label)
    ax6.set_xlabel('Time [s]')
    ax6.set_ylabel('Power [%]')
    ax6.set_ylim(-5, 105)
    ax6.set_title('Rotor Power')
    if powers.shape[1]:
        ax6.legend(loc='upper right', ncol=2, fontsize=8)
    ax6.grid(True, alpha=0.3)

    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=150, bbox_inches='tight')

    return fig
