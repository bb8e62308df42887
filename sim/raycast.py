# ================================
# file: sim/raycast.py
# ================================
from __future__ import annotations
from typing import Iterable

from core.config import FIELD_UNITS, WALL_DIR_EPS, HIT_EPSILON
from core.coords import ray_to_local
from core.geometry import ray_aabb, INF
from core.types import Obstacle, FieldObject


def ray_walls(ox: float, oy: float, dx: float, dy: float,
              field_units: float = FIELD_UNITS) -> float:
    """Distance along the ray to the first field wall it reaches.

    The far wall is used for a positive direction component, the near wall
    (0) for a negative one. Origins outside the field give a negative
    distance toward a wall that lies behind them; the field is a box the
    ray is assumed to start in or on.
    """
    t = INF
    if dx > WALL_DIR_EPS:
        t = min(t, (field_units - ox) / dx)
    elif dx < -WALL_DIR_EPS:
        t = min(t, (0.0 - ox) / dx)
    if dy > WALL_DIR_EPS:
        t = min(t, (field_units - oy) / dy)
    elif dy < -WALL_DIR_EPS:
        t = min(t, (0.0 - oy) / dy)
    return t


def ray_obstacle(ox: float, oy: float, dx: float, dy: float, obstacle: Obstacle) -> float:
    """Entry distance of the ray into a rotated obstacle, +inf on a miss."""
    lox, loy, ldx, ldy = ray_to_local(ox, oy, dx, dy, obstacle.x, obstacle.y, obstacle.angle)
    hw = 0.5 * obstacle.width
    hh = 0.5 * obstacle.height
    return ray_aabb(lox, loy, ldx, ldy, -hw, hw, -hh, hh)


def cast_ray(ox: float, oy: float, dx: float, dy: float,
             objects: Iterable[FieldObject] = (),
             field_units: float = FIELD_UNITS) -> float:
    """Distance to the nearest wall or obstacle along the ray.

    Landmarks are skipped. Obstacle hits at or below HIT_EPSILON (touching
    or containing the origin) are discarded so the ray continues to the
    next surface. An origin already past the wall it faces reads 0.
    """
    best = max(0.0, ray_walls(ox, oy, dx, dy, field_units))
    for obj in objects:
        if not isinstance(obj, Obstacle):
            continue
        d = ray_obstacle(ox, oy, dx, dy, obj)
        if HIT_EPSILON < d < best:
            best = d
    return best
