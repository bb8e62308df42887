# ================================
# file: sim/field_world.py
# ================================
"""Owned simulation state for the localization field.

FieldWorld holds the robot pose, the four sensor offsets and the placed
objects, and is the only thing that mutates them. Setters clamp and wrap
their inputs, so the geometry code downstream only ever sees valid values.
Coordinates passed to hit_test()/begin_drag()/drag_to() are field units;
the GUI converts pointer pixels with core.coords.FieldView first.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional, Tuple, Union
import math
import random

import numpy as np

from core.config import (
    FIELD_UNITS, ROBOT_HALF, SENSOR_COUNT, SENSOR_OFFSET_MIN, SENSOR_OFFSET_MAX,
    ROBOT_HEADING_STEP, OBSTACLE_MIN_SIZE, OBSTACLE_MAX_SIZE,
    OBSTACLE_HANDLE_GAP, ROBOT_HANDLE_FACTOR, SPAWN_JITTER_MIN, SPAWN_JITTER_SPAN,
    HIT_RADIUS_UNITS, HANDLE_RADIUS_UNITS, EXPORT_DECIMALS, SWEEP_SAMPLES,
)
from core.geometry import clamp, wrap_degrees, angle_to_deg
from core.types import RobotPose, Landmark, Obstacle, FieldObject, SensorReading
from sim.sensors import get_sensor_readings, rounded_distances, sensor_index, sweep_offset

ROBOT_ID = "robot"
Selection = Union[None, str, int]


class HitKind(Enum):
    ROBOT_ROTATE = auto()
    OBSTACLE_ROTATE = auto()
    ROBOT = auto()
    OBJECT = auto()


@dataclass
class HitResult:
    kind: HitKind
    object_id: Optional[int] = None


class DragMode(Enum):
    MOVE = auto()
    ROTATE_ROBOT = auto()
    ROTATE_OBSTACLE = auto()


@dataclass
class DragState:
    mode: DragMode
    target: Selection
    off_x: float = 0.0
    off_y: float = 0.0


def _round_heading(angle_deg: float) -> float:
    steps = round(wrap_degrees(angle_deg) / ROBOT_HEADING_STEP)
    return wrap_degrees(round(steps * ROBOT_HEADING_STEP, 6))


def _round_obstacle_angle(angle_deg: float) -> float:
    return wrap_degrees(float(round(wrap_degrees(angle_deg))))


class FieldWorld:
    """Robot pose + sensor offsets + placed objects, with editing operations."""

    def __init__(self, field_units: float = FIELD_UNITS, rng: Optional[random.Random] = None,
                 logger_func=None, log_file=None) -> None:
        self.field_units = float(field_units)
        self.rng = rng if rng is not None else random.Random()
        self.logger_func = logger_func
        self.log_file = log_file
        self.reset()

    def _log(self, message: str) -> None:
        if self.logger_func and self.log_file:
            self.logger_func(self.log_file, message, "WORLD")

    # ---- lifecycle ----
    def reset(self) -> None:
        """Default pose, centered sensors, no objects, id counter restarted."""
        self.robot = RobotPose()
        self.sensor_offsets: List[float] = [0.0] * SENSOR_COUNT
        self.objects: List[FieldObject] = []
        self.selected: Selection = None
        self.dragging: Optional[DragState] = None
        self._id_counter = 0

    def clear_all(self) -> None:
        n = len(self.objects)
        self.reset()
        self._log(f"cleared {n} objects, robot reset to {self.robot!r}")

    # ---- objects ----
    def _jitter(self) -> float:
        return round(self.rng.random() * SPAWN_JITTER_SPAN + SPAWN_JITTER_MIN, 2)

    def add_object(self, kind: str, x: Optional[float] = None, y: Optional[float] = None,
                   width: Optional[float] = None, height: Optional[float] = None,
                   angle: float = 0.0) -> FieldObject:
        """Place a landmark or obstacle. Missing coordinates are jittered into [2, 10)."""
        if kind not in ("landmark", "obstacle"):
            raise ValueError(f"unknown object kind {kind!r}, expected 'landmark' or 'obstacle'")
        self._id_counter += 1
        oid = self._id_counter
        same = sum(1 for o in self.objects if o.kind == kind)
        label = f"{'L' if kind == 'landmark' else 'O'}{same + 1}"
        fx = self._jitter() if x is None else clamp(x, 0.0, self.field_units)
        fy = self._jitter() if y is None else clamp(y, 0.0, self.field_units)

        if kind == "landmark":
            obj: FieldObject = Landmark(oid, fx, fy, label)
        else:
            obj = Obstacle(oid, fx, fy, label=label)
            if width is not None:
                obj.width = clamp(width, OBSTACLE_MIN_SIZE, OBSTACLE_MAX_SIZE)
            if height is not None:
                obj.height = clamp(height, OBSTACLE_MIN_SIZE, OBSTACLE_MAX_SIZE)
            obj.angle = _round_obstacle_angle(angle)
        self.objects.append(obj)
        self._log(f"added {obj!r}")
        return obj

    def remove_object(self, object_id: int) -> bool:
        before = len(self.objects)
        self.objects = [o for o in self.objects if o.id != object_id]
        if self.selected == object_id:
            self.selected = None
        removed = len(self.objects) != before
        if removed:
            self._log(f"removed object {object_id}")
        return removed

    def find(self, object_id: int) -> Optional[FieldObject]:
        for o in self.objects:
            if o.id == object_id:
                return o
        return None

    def _obstacle(self, object_id: int) -> Obstacle:
        o = self.find(object_id)
        if not isinstance(o, Obstacle):
            raise ValueError(f"no obstacle with id {object_id}")
        return o

    def obstacles(self) -> List[Obstacle]:
        return [o for o in self.objects if isinstance(o, Obstacle)]

    def landmarks(self) -> List[Landmark]:
        return [o for o in self.objects if isinstance(o, Landmark)]

    def select(self, target: Selection) -> None:
        if target not in (None, ROBOT_ID) and self.find(target) is None:
            raise ValueError(f"no object with id {target}")
        self.selected = target

    # ---- setters ----
    def set_robot_position(self, x: float, y: float) -> None:
        self.robot.x = clamp(x, 0.0, self.field_units)
        self.robot.y = clamp(y, 0.0, self.field_units)

    def set_robot_angle(self, angle_deg: float) -> None:
        self.robot.heading = _round_heading(angle_deg)

    def set_object_position(self, object_id: int, x: float, y: float) -> None:
        o = self.find(object_id)
        if o is None:
            raise ValueError(f"no object with id {object_id}")
        o.x = clamp(x, 0.0, self.field_units)
        o.y = clamp(y, 0.0, self.field_units)

    def set_obstacle_prop(self, object_id: int, prop: str, value: float) -> None:
        if prop not in ("width", "height"):
            raise ValueError(f"obstacle property must be 'width' or 'height', got {prop!r}")
        setattr(self._obstacle(object_id), prop, clamp(value, OBSTACLE_MIN_SIZE, OBSTACLE_MAX_SIZE))

    def set_obstacle_angle(self, object_id: int, angle_deg: float) -> None:
        self._obstacle(object_id).angle = _round_obstacle_angle(angle_deg)

    def set_sensor_offset(self, sensor, value: float) -> None:
        self.sensor_offsets[sensor_index(sensor)] = clamp(value, SENSOR_OFFSET_MIN, SENSOR_OFFSET_MAX)

    # ---- rotation handles ----
    def robot_rot_handle(self) -> Tuple[float, float]:
        th = math.radians(self.robot.heading)
        dist = ROBOT_HALF * ROBOT_HANDLE_FACTOR
        return (self.robot.x + dist * math.cos(th), self.robot.y + dist * math.sin(th))

    @staticmethod
    def obstacle_rot_handle(o: Obstacle) -> Tuple[float, float]:
        # along the obstacle's local +Y axis
        th = math.radians(o.angle)
        dist = 0.5 * o.height + OBSTACLE_HANDLE_GAP
        return (o.x - dist * math.sin(th), o.y + dist * math.cos(th))

    # ---- hit testing & dragging ----
    def hit_test(self, fx: float, fy: float, hit_radius: float = HIT_RADIUS_UNITS,
                 handle_radius: float = HANDLE_RADIUS_UNITS) -> Optional[HitResult]:
        """Pick at a field point: handles first, then robot, then objects newest-first."""
        if self.selected == ROBOT_ID:
            hx, hy = self.robot_rot_handle()
            if math.hypot(fx - hx, fy - hy) < handle_radius:
                return HitResult(HitKind.ROBOT_ROTATE)

        if self.selected not in (None, ROBOT_ID):
            so = self.find(self.selected)
            if isinstance(so, Obstacle):
                hx, hy = self.obstacle_rot_handle(so)
                if math.hypot(fx - hx, fy - hy) < handle_radius:
                    return HitResult(HitKind.OBSTACLE_ROTATE, so.id)

        if math.hypot(fx - self.robot.x, fy - self.robot.y) < hit_radius:
            return HitResult(HitKind.ROBOT)

        for o in reversed(self.objects):
            if math.hypot(fx - o.x, fy - o.y) < hit_radius:
                return HitResult(HitKind.OBJECT, o.id)
        return None

    def begin_drag(self, fx: float, fy: float, hit_radius: float = HIT_RADIUS_UNITS,
                   handle_radius: float = HANDLE_RADIUS_UNITS) -> Optional[HitResult]:
        hit = self.hit_test(fx, fy, hit_radius, handle_radius)
        if hit is None:
            self.selected = None
            self.dragging = None
            return None

        if hit.kind is HitKind.ROBOT_ROTATE:
            self.selected = ROBOT_ID
            self.dragging = DragState(DragMode.ROTATE_ROBOT, ROBOT_ID)
        elif hit.kind is HitKind.OBSTACLE_ROTATE:
            self.selected = hit.object_id
            self.dragging = DragState(DragMode.ROTATE_OBSTACLE, hit.object_id)
        elif hit.kind is HitKind.ROBOT:
            self.selected = ROBOT_ID
            self.dragging = DragState(DragMode.MOVE, ROBOT_ID,
                                      fx - self.robot.x, fy - self.robot.y)
        else:
            o = self.find(hit.object_id)
            self.selected = hit.object_id
            self.dragging = DragState(DragMode.MOVE, hit.object_id, fx - o.x, fy - o.y)
        return hit

    def drag_to(self, fx: float, fy: float) -> bool:
        """Apply the active drag at a new pointer position. False when idle."""
        d = self.dragging
        if d is None:
            return False

        if d.mode is DragMode.ROTATE_ROBOT:
            self.set_robot_angle(angle_to_deg(self.robot.x, self.robot.y, fx, fy))
        elif d.mode is DragMode.ROTATE_OBSTACLE:
            o = self._obstacle(d.target)
            # handle is on local +Y, so the obstacle angle is 90 deg behind the pointer
            o.angle = _round_obstacle_angle(angle_to_deg(o.x, o.y, fx, fy) - 90.0)
        elif d.target == ROBOT_ID:
            self.set_robot_position(fx - d.off_x, fy - d.off_y)
        else:
            self.set_object_position(d.target, fx - d.off_x, fy - d.off_y)
        return True

    def end_drag(self) -> None:
        self.dragging = None

    # ---- sensor queries ----
    def readings(self) -> List[SensorReading]:
        return get_sensor_readings(self.robot, self.sensor_offsets, self.objects, self.field_units)

    def distances(self, decimals: int = EXPORT_DECIMALS) -> List[float]:
        """distance1..distance4 as read by localization code."""
        return rounded_distances(self.readings(), decimals)

    def sweep_offset(self, sensor, samples: int = SWEEP_SAMPLES) -> np.ndarray:
        return sweep_offset(self.robot, self.sensor_offsets, sensor, self.objects, samples)
