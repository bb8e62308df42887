# ================================
# file: appio/logger.py
# ================================
from __future__ import annotations
from typing import Sequence
from datetime import datetime
import time
import numpy as np

from core.types import RobotPose, SensorReading


def log_to_file(log_file, message, module="MAIN"):
    """Write message to log file with timestamp and module"""
    timestamp = datetime.now().strftime("%H:%M:%S.%f")[:-3]
    log_entry = f"[{timestamp}] [{module}] {message}\n"
    log_file.write(log_entry)
    log_file.flush()  # Ensure immediate write
    print(log_entry.strip())  # Also print to console


class ReadingLogger:
    """Simple NPZ logger for robot poses, sensor offsets and sensor distances."""
    def __init__(self) -> None:
        self.t0 = time.time()
        self.poses = []
        self.offsets = []
        self.distances = []

    def log_readings(self, pose: RobotPose, offsets: Sequence[float],
                     readings: Sequence[SensorReading]) -> None:
        t = time.time() - self.t0
        self.poses.append((t, pose.x, pose.y, pose.heading))
        self.offsets.append(tuple(float(v) for v in offsets))
        self.distances.append(tuple(r.distance for r in readings))

    def __len__(self) -> int:
        return len(self.distances)

    def as_array(self) -> np.ndarray:
        """(N, 4) distances, one row per logged query."""
        return np.asarray(self.distances, dtype=float).reshape(-1, 4)

    def save(self, path: str) -> None:
        np.savez_compressed(path,
                            poses=np.asarray(self.poses, dtype=float).reshape(-1, 4),
                            offsets=np.asarray(self.offsets, dtype=float).reshape(-1, 4),
                            distances=self.as_array())
