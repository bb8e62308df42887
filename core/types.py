# ================================
# file: core/types.py
# ================================
"""Shared data structures: robot pose, field objects and sensor readings.
Use minimal typing: Tuple/Optional/Union only.
"""
from __future__ import annotations
from typing import Tuple, Union
import math

from core.config import (
    ROBOT_START_X, ROBOT_START_Y, ROBOT_START_HEADING,
    OBSTACLE_DEFAULT_WIDTH, OBSTACLE_DEFAULT_HEIGHT,
)


class RobotPose:
    """Pose of the robot on the field.


    Attributes
    -----------
    x, y : field units
    heading : degrees, CCW from +X, kept in [0, 360) by the editor
    """
    __slots__ = ("x", "y", "heading")


    def __init__(self, x: float = ROBOT_START_X, y: float = ROBOT_START_Y,
                 heading: float = ROBOT_START_HEADING) -> None:
        self.x = float(x)
        self.y = float(y)
        self.heading = float(heading)


    def copy(self) -> "RobotPose":
        return RobotPose(self.x, self.y, self.heading)


    def is_finite(self) -> bool:
        return all(math.isfinite(v) for v in (self.x, self.y, self.heading))


    def __repr__(self) -> str:
        return f"RobotPose(x={self.x:.3f}, y={self.y:.3f}, heading={self.heading:.1f})"




class Landmark:
    """Point marker. Display only, never blocks a sensor ray."""
    __slots__ = ("id", "x", "y", "label")
    kind = "landmark"


    def __init__(self, id: int, x: float, y: float, label: str = "") -> None:
        self.id = int(id)
        self.x = float(x)
        self.y = float(y)
        self.label = label


    def __repr__(self) -> str:
        return f"Landmark(id={self.id}, x={self.x:.2f}, y={self.y:.2f}, label={self.label!r})"




class Obstacle:
    """Rectangle centered at (x, y), rotated CCW by ``angle`` degrees.

    Parameters
    ----------
    width, height : float
        Extent along the obstacle's local X and Y axes.
    angle : float
        Rotation in degrees, positive = counter-clockwise in field coordinates.
    """
    __slots__ = ("id", "x", "y", "width", "height", "angle", "label")
    kind = "obstacle"


    def __init__(self, id: int, x: float, y: float,
                 width: float = OBSTACLE_DEFAULT_WIDTH,
                 height: float = OBSTACLE_DEFAULT_HEIGHT,
                 angle: float = 0.0, label: str = "") -> None:
        self.id = int(id)
        self.x = float(x)
        self.y = float(y)
        self.width = float(width)
        self.height = float(height)
        self.angle = float(angle)
        self.label = label


    def copy(self) -> "Obstacle":
        return Obstacle(self.id, self.x, self.y, self.width, self.height, self.angle, self.label)


    def __repr__(self) -> str:
        return (f"Obstacle(id={self.id}, x={self.x:.2f}, y={self.y:.2f}, "
                f"w={self.width:.2f}, h={self.height:.2f}, angle={self.angle:.0f})")


FieldObject = Union[Landmark, Obstacle]




class SensorPlacement:
    """World position and unit firing direction of one sensor."""
    __slots__ = ("index", "position", "direction")

    def __init__(self, index: int, position: Tuple[float, float],
                 direction: Tuple[float, float]) -> None:
        self.index = index
        self.position = position
        self.direction = direction




class SensorReading:
    """One sensor measurement.


    Attributes
    -----------
    position : (x, y) of the sensor on the robot face
    direction : unit firing direction (x, y)
    distance : full-precision distance to the first surface along the ray
    """
    __slots__ = ("position", "direction", "distance")


    def __init__(self, position: Tuple[float, float], direction: Tuple[float, float],
                 distance: float) -> None:
        self.position = position
        self.direction = direction
        self.distance = float(distance)


    def hit_point(self) -> Tuple[float, float]:
        px, py = self.position
        dx, dy = self.direction
        return (px + dx * self.distance, py + dy * self.distance)


    def __repr__(self) -> str:
        return (f"SensorReading(pos=({self.position[0]:.3f}, {self.position[1]:.3f}), "
                f"dir=({self.direction[0]:.3f}, {self.direction[1]:.3f}), d={self.distance:.4f})")
