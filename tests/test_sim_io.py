#!/usr/bin/env python3
"""
CSV Input/Output and Input Sequence Test
CSV入出力と入力シーケンスのテスト
"""

import pytest

from rotorsim.tools.input_sequence import SEQUENCES, generate_doublet_sequence
from rotorsim.tools.sim_io import (
    FrameLog,
    IntentSample,
    get_input_at_time,
    load_input_csv,
    load_output_csv,
    save_input_csv,
    save_output_csv,
)


def test_input_csv(tmp_path):
    path = tmp_path / "inputs.csv"
    samples = [
        IntentSample(0.0, throttle=1),
        IntentSample(0.5, yaw=-1, lateral=1),
        IntentSample(1.0, longitudinal=-1),
    ]
    save_input_csv(path, samples)
    loaded = load_input_csv(path)
    assert loaded == samples


def test_input_csv_skips_comments_and_reduces_values(tmp_path):
    path = tmp_path / "inputs.csv"
    path.write_text(
        "# hand written\n"
        "time,throttle,yaw,lateral,longitudinal\n"
        "0.0,0.7,0,-3,0\n"
    )
    (sample,) = load_input_csv(path)
    assert (sample.throttle, sample.lateral) == (1, -1)


def test_input_csv_missing_columns(tmp_path):
    path = tmp_path / "inputs.csv"
    path.write_text("time,throttle\n0.0,1\n")
    with pytest.raises(ValueError):
        load_input_csv(path)


def test_output_csv(tmp_path):
    path = tmp_path / "output.csv"
    logs = [
        FrameLog(0.1, 0.0, 0.06, 0.0, 0.0, 0.0, 0.0, 0.1, True, [0.1, 0.1, 0.1, 0.1]),
        FrameLog(0.2, 0.5, 1.25, -0.5, 0.3, -0.05, 0.1, 0.6, False, [0.5, 0.6, 0.7, 0.8]),
    ]
    save_output_csv(path, logs, {"layout": "quad-x", "rotors": "R1 R2 R3 R4"})

    loaded, metadata = load_output_csv(path)
    assert metadata == {"layout": "quad-x", "rotors": "R1 R2 R3 R4"}
    assert len(loaded) == 2
    assert loaded[1].y == pytest.approx(1.25)
    assert loaded[1].powers == pytest.approx([0.5, 0.6, 0.7, 0.8])
    assert loaded[0].on_ground
    assert not loaded[1].on_ground


def test_output_csv_header(tmp_path):
    path = tmp_path / "output.csv"
    save_output_csv(path, [FrameLog(0.0, 0, 0, 0, 0, 0, 0, 0, True, [0.0] * 6)])
    header = path.read_text().splitlines()[0]
    assert header == "time,x,y,z,yaw,roll,pitch,lever,on_ground,m1,m2,m3,m4,m5,m6"


def test_get_input_at_time():
    samples = [IntentSample(0.0, throttle=1), IntentSample(1.0, yaw=1), IntentSample(2.0)]
    assert get_input_at_time(samples, 0.5).throttle == 1
    assert get_input_at_time(samples, 1.0).yaw == 1
    assert get_input_at_time(samples, 1.99).yaw == 1
    assert get_input_at_time(samples, 5.0) is samples[-1]
    assert get_input_at_time(samples, -1.0) is samples[0]
    assert get_input_at_time([], 3.0).to_intent().is_idle


@pytest.mark.parametrize("name", list(SEQUENCES.keys()))
def test_sequences(name):
    samples = SEQUENCES[name](duration=10.0, dt=0.01)
    assert len(samples) == 1000
    for s in samples:
        for value in (s.throttle, s.yaw, s.lateral, s.longitudinal):
            assert value in (-1, 0, 1)
    assert samples[0].throttle == 1


def test_doublet_shape():
    samples = generate_doublet_sequence(duration=5.0, dt=0.1, pulse_duration=0.5)
    assert get_input_at_time(samples, 2.2).lateral == 1
    assert get_input_at_time(samples, 2.7).lateral == -1
    assert get_input_at_time(samples, 3.2).lateral == 0
