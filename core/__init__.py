# ================================
# file: core/__init__.py
# ================================
"""
Core Package

Exports fundamental types, configurations, and geometry helpers.
"""
from core.types import RobotPose, Landmark, Obstacle, FieldObject, SensorPlacement, SensorReading
from core.geometry import ray_aabb, rotate, wrap_degrees, clamp, heading_vectors
from core.coords import FieldView, ray_to_local, world_to_local, local_to_world, obstacle_corners
from core.config import (
    # Field configuration
    FIELD_UNITS,

    # Robot configuration
    ROBOT_HALF, ROBOT_START_X, ROBOT_START_Y, ROBOT_START_HEADING,

    # Sensor configuration
    SENSOR_RANGE, SENSOR_COUNT, SENSOR_NAMES,

    # Ray casting
    HIT_EPSILON,

    # Editor limits
    OBSTACLE_MIN_SIZE, OBSTACLE_MAX_SIZE,

    # Display
    DISPLAY_DECIMALS, EXPORT_DECIMALS,
)

__all__ = [
    # Types
    'RobotPose', 'Landmark', 'Obstacle', 'FieldObject', 'SensorPlacement', 'SensorReading',

    # Geometry & coordinates
    'ray_aabb', 'rotate', 'wrap_degrees', 'clamp', 'heading_vectors',
    'FieldView', 'ray_to_local', 'world_to_local', 'local_to_world', 'obstacle_corners',

    # Configuration
    'FIELD_UNITS',
    'ROBOT_HALF', 'ROBOT_START_X', 'ROBOT_START_Y', 'ROBOT_START_HEADING',
    'SENSOR_RANGE', 'SENSOR_COUNT', 'SENSOR_NAMES',
    'HIT_EPSILON',
    'OBSTACLE_MIN_SIZE', 'OBSTACLE_MAX_SIZE',
    'DISPLAY_DECIMALS', 'EXPORT_DECIMALS',
]
