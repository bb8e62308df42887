# ================================
# file: sim/__init__.py
# ================================
"""Simulation world: owned field state, sensor placement and ray casting.
All queries are pure functions of the state passed in; FieldWorld is the
single owner of mutable state.
"""
from .raycast import cast_ray, ray_walls, ray_obstacle
from .sensors import (
    sensor_placements, get_sensor_readings, rounded_distances,
    format_readings, sweep_offset, sensor_index,
)
from .field_world import FieldWorld, HitKind, HitResult, DragMode, ROBOT_ID


__all__ = [
    "cast_ray", "ray_walls", "ray_obstacle",
    "sensor_placements", "get_sensor_readings", "rounded_distances",
    "format_readings", "sweep_offset", "sensor_index",
    "FieldWorld", "HitKind", "HitResult", "DragMode", "ROBOT_ID",
]
