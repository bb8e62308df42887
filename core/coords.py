# ================================
# file: core/coords.py
# ================================
from __future__ import annotations
from typing import Tuple
import math

from core.config import FIELD_UNITS, CANVAS_PAD_RATIO, CANVAS_DEFAULT_PX
from core.geometry import rotate


# Obstacle local frame <-> field frame
def world_to_local(x: float, y: float, cx: float, cy: float, angle_deg: float) -> Tuple[float, float]:
    """Field point -> obstacle frame (origin at center, obstacle rotation undone)."""
    return rotate(x - cx, y - cy, -math.radians(angle_deg))


def local_to_world(lx: float, ly: float, cx: float, cy: float, angle_deg: float) -> Tuple[float, float]:
    """Obstacle frame point -> field point. Inverse of world_to_local."""
    rx, ry = rotate(lx, ly, math.radians(angle_deg))
    return (cx + rx, cy + ry)


def ray_to_local(ox: float, oy: float, dx: float, dy: float,
                 cx: float, cy: float, angle_deg: float) -> Tuple[float, float, float, float]:
    """Express a field ray in an obstacle's unrotated local frame.

    The origin is translated by -center, then origin and direction are both
    rotated by -angle_deg. Returns (lox, loy, ldx, ldy).
    """
    lox, loy = world_to_local(ox, oy, cx, cy, angle_deg)
    ldx, ldy = rotate(dx, dy, -math.radians(angle_deg))
    return lox, loy, ldx, ldy


def obstacle_corners(cx: float, cy: float, width: float, height: float,
                     angle_deg: float) -> Tuple[Tuple[float, float], ...]:
    """Corners of a rotated rectangle in field coordinates, CCW from lower-left."""
    hw, hh = 0.5 * width, 0.5 * height
    return tuple(local_to_world(lx, ly, cx, cy, angle_deg)
                 for lx, ly in ((-hw, -hh), (hw, -hh), (hw, hh), (-hw, hh)))


class FieldView:
    """Field <-> screen transform for a square canvas.

    The field occupies the canvas minus a padding band on each side; screen Y
    grows downward so field Y is flipped. Display only: sensor math never
    goes through this class.
    """

    def __init__(self, size_px: float = CANVAS_DEFAULT_PX, field_units: float = FIELD_UNITS,
                 logger_func=None, log_file=None) -> None:
        self.size_px = float(size_px)
        self.field_units = float(field_units)
        self.logger_func = logger_func
        self.log_file = log_file

    def resize(self, size_px: float) -> None:
        self.size_px = float(size_px)
        if self.logger_func and self.log_file:
            self.logger_func(self.log_file, f"canvas resized to {self.size_px:.0f}px", "COORDS")

    def pad(self) -> float:
        return self.size_px * CANVAS_PAD_RATIO

    def inner(self) -> float:
        return self.size_px - 2.0 * self.pad()

    def unit_px(self) -> float:
        """Pixels per field unit."""
        return self.inner() / self.field_units

    def canvas_to_field(self, cx: float, cy: float) -> Tuple[float, float]:
        """Screen pixel -> field point, rounded to 3 decimals like the cursor readout."""
        p, i = self.pad(), self.inner()
        return (round((cx - p) / i * self.field_units, 3),
                round((1.0 - (cy - p) / i) * self.field_units, 3))

    def inside_field(self, cx: float, cy: float) -> bool:
        p, i = self.pad(), self.inner()
        return p <= cx <= p + i and p <= cy <= p + i

    def px_to_units(self, px: float) -> float:
        return px / self.unit_px()
