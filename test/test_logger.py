import io
import re

import numpy as np

from appio.logger import ReadingLogger, log_to_file
from core.types import RobotPose
from sim.sensors import get_sensor_readings


def test_log_to_file_writes_timestamped_line(capsys):
    buf = io.StringIO()
    log_to_file(buf, "robot moved", "WORLD")
    line = buf.getvalue()
    assert re.match(r"^\[\d{2}:\d{2}:\d{2}\.\d{3}\] \[WORLD\] robot moved\n$", line)
    assert "robot moved" in capsys.readouterr().out


def test_reading_logger_records_and_saves(tmp_path):
    pose = RobotPose(6.0, 6.0, 0.0)
    offsets = [0.0, 0.5, 0.0, -0.5]
    rec = ReadingLogger()
    rec.log_readings(pose, offsets, get_sensor_readings(pose, offsets, []))
    rec.log_readings(pose, offsets, get_sensor_readings(pose, offsets, []))
    assert len(rec) == 2
    arr = rec.as_array()
    assert arr.shape == (2, 4)
    assert np.allclose(arr, 5.55)

    path = tmp_path / "readings.npz"
    rec.save(str(path))
    data = np.load(path)
    assert data["distances"].shape == (2, 4)
    assert data["offsets"][0].tolist() == offsets
    assert data["poses"][0, 1:].tolist() == [6.0, 6.0, 0.0]


def test_empty_reading_logger():
    assert ReadingLogger().as_array().shape == (0, 4)
