# ================================
# file: sim/sensors.py
# ================================
"""Four sliding rangefinders on the square robot body.

Sensor order is fixed: 0=front, 1=right, 2=back, 3=left. Each sensor sits on
the midpoint of its face at offset 0 and slides along the face by
``offset * SENSOR_RANGE``:

    sensor   anchor    slide     fire
    front    +front    +right    +front
    right    +right    -front    +right
    back     -front    -right    -front
    left     -right    +front    -right

with front = (cos h, sin h) and right = (sin h, -cos h).
"""
from __future__ import annotations
from typing import Iterable, List, Optional, Sequence
import math
import numpy as np

from core.config import (
    ROBOT_HALF, SENSOR_RANGE, SENSOR_COUNT, SENSOR_NAMES,
    SENSOR_OFFSET_MIN, SENSOR_OFFSET_MAX,
    DISPLAY_DECIMALS, EXPORT_DECIMALS, SWEEP_SAMPLES, FIELD_UNITS,
)
from core.geometry import heading_vectors
from core.types import RobotPose, SensorPlacement, SensorReading, FieldObject
from sim.raycast import cast_ray

# (anchor, slide, fire) as signed picks of (front, right): (axis, sign)
_FACES = (
    (("f", +1), ("r", +1), ("f", +1)),
    (("r", +1), ("f", -1), ("r", +1)),
    (("f", -1), ("r", -1), ("f", -1)),
    (("r", -1), ("f", +1), ("r", -1)),
)


def sensor_index(sensor) -> int:
    """Accept an index 0..3 or a name from SENSOR_NAMES."""
    if isinstance(sensor, str):
        try:
            return SENSOR_NAMES.index(sensor.lower())
        except ValueError:
            raise ValueError(f"unknown sensor {sensor!r}, expected one of {SENSOR_NAMES}") from None
    idx = int(sensor)
    if not 0 <= idx < SENSOR_COUNT:
        raise ValueError(f"sensor index {idx} out of range 0..{SENSOR_COUNT - 1}")
    return idx


def sensor_placements(pose: RobotPose, offsets: Sequence[float],
                      half: float = ROBOT_HALF,
                      slide_range: float = SENSOR_RANGE) -> List[SensorPlacement]:
    """Position and firing direction of every sensor for the given pose."""
    front, right = heading_vectors(pose.heading)
    axes = {"f": front, "r": right}

    out = []
    for i, (anchor, slide, fire) in enumerate(_FACES):
        ax, asg = axes[anchor[0]], anchor[1]
        sx, ssg = axes[slide[0]], slide[1]
        fx, fsg = axes[fire[0]], fire[1]
        k = offsets[i] * slide_range
        px = pose.x + asg * half * ax[0] + ssg * k * sx[0]
        py = pose.y + asg * half * ax[1] + ssg * k * sx[1]
        out.append(SensorPlacement(i, (px, py), (fsg * fx[0], fsg * fx[1])))
    return out


def get_sensor_readings(pose: RobotPose, offsets: Sequence[float],
                        objects: Iterable[FieldObject] = (),
                        field_units: float = FIELD_UNITS) -> List[SensorReading]:
    """Cast all four sensors against the walls and obstacles.

    Stateless: the result depends only on the arguments. Distances are
    full precision; round with rounded_distances()/format_readings().
    """
    if len(offsets) != SENSOR_COUNT:
        raise ValueError(f"expected {SENSOR_COUNT} sensor offsets, got {len(offsets)}")
    if not pose.is_finite():
        raise ValueError(f"pose must be finite, got {pose!r}")

    objects = list(objects)
    readings = []
    for pl in sensor_placements(pose, offsets):
        dx, dy = pl.direction
        if math.hypot(dx, dy) < 1e-12:
            raise ValueError(f"sensor {SENSOR_NAMES[pl.index]} has no firing direction")
        d = cast_ray(pl.position[0], pl.position[1], dx, dy, objects, field_units)
        readings.append(SensorReading(pl.position, pl.direction, d))
    return readings


def rounded_distances(readings: Sequence[SensorReading],
                      decimals: int = EXPORT_DECIMALS) -> List[float]:
    """Distances as handed to algorithm code (distance1..distance4)."""
    return [round(r.distance, decimals) for r in readings]


def format_readings(readings: Sequence[SensorReading],
                    decimals: int = DISPLAY_DECIMALS) -> str:
    """One line readout, e.g. ``front=5.55 right=5.55 back=5.55 left=5.55``."""
    return " ".join(f"{name}={r.distance:.{decimals}f}"
                    for name, r in zip(SENSOR_NAMES, readings))


def sweep_offset(pose: RobotPose, offsets: Sequence[float], sensor,
                 objects: Iterable[FieldObject] = (),
                 samples: int = SWEEP_SAMPLES,
                 lo: float = SENSOR_OFFSET_MIN, hi: float = SENSOR_OFFSET_MAX,
                 values: Optional[np.ndarray] = None) -> np.ndarray:
    """Slide one sensor across its range with everything else fixed.

    Returns an (N, 2) array of (offset, distance) rows.
    """
    idx = sensor_index(sensor)
    objects = list(objects)
    if values is None:
        values = np.linspace(lo, hi, int(samples))
    offs = list(offsets)
    rows = np.empty((len(values), 2), dtype=float)
    for k, v in enumerate(values):
        offs[idx] = float(v)
        rows[k, 0] = v
        rows[k, 1] = get_sensor_readings(pose, offs, objects)[idx].distance
    return rows
