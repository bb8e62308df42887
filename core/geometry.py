# ================================
# file: core/geometry.py
# ================================
"""2D geometry primitives used by the ray caster.
All functions are pure. Angles are radians unless the name says degrees.
"""
from __future__ import annotations
from typing import Tuple
import math

from core.config import AXIS_PARALLEL_EPS

INF = float("inf")


def ray_aabb(ox: float, oy: float, dx: float, dy: float,
             min_x: float, max_x: float, min_y: float, max_y: float) -> float:
    """Slab test of a ray against an axis-aligned box.

    Returns the entry distance along the ray (0 when the origin is inside the
    box), or +inf when the ray misses the box or the box lies behind it.
    An axis with |d| <= AXIS_PARALLEL_EPS is treated as exactly parallel:
    the ray misses unless the origin lies within that slab.
    """
    tmin = 0.0
    tmax = INF

    if abs(dx) > AXIS_PARALLEL_EPS:
        tx1 = (min_x - ox) / dx
        tx2 = (max_x - ox) / dx
        tmin = max(tmin, min(tx1, tx2))
        tmax = min(tmax, max(tx1, tx2))
    elif ox < min_x or ox > max_x:
        return INF

    if abs(dy) > AXIS_PARALLEL_EPS:
        ty1 = (min_y - oy) / dy
        ty2 = (max_y - oy) / dy
        tmin = max(tmin, min(ty1, ty2))
        tmax = min(tmax, max(ty1, ty2))
    elif oy < min_y or oy > max_y:
        return INF

    return INF if tmax < tmin else tmin


def rotate(x: float, y: float, angle: float) -> Tuple[float, float]:
    """Rotate (x, y) CCW by ``angle`` radians."""
    c = math.cos(angle)
    s = math.sin(angle)
    return (x * c - y * s, x * s + y * c)


def wrap_degrees(angle_deg: float) -> float:
    """Wrap any angle to [0, 360)."""
    a = math.fmod(float(angle_deg), 360.0)
    if a < 0.0:
        a += 360.0
    # fmod(-1e-17, 360) + 360 rounds to 360.0
    return 0.0 if a >= 360.0 else a


def clamp(v: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, float(v)))


def heading_vectors(heading_deg: float) -> Tuple[Tuple[float, float], Tuple[float, float]]:
    """(front, right) unit vectors for a heading in degrees.

    right is front rotated 90 deg clockwise: (sin, -cos).
    """
    th = math.radians(heading_deg)
    c, s = math.cos(th), math.sin(th)
    return (c, s), (s, -c)


def angle_to_deg(from_x: float, from_y: float, to_x: float, to_y: float) -> float:
    """Field angle (degrees, [0, 360)) of the vector from -> to."""
    return wrap_degrees(math.degrees(math.atan2(to_y - from_y, to_x - from_x)))
