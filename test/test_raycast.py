import math

import pytest

from core.types import Obstacle, Landmark
from sim.raycast import ray_walls, ray_obstacle, cast_ray


def test_ray_walls_axis_aligned():
    assert ray_walls(6.0, 6.0, 1.0, 0.0) == pytest.approx(6.0)
    assert ray_walls(2.0, 6.0, -1.0, 0.0) == pytest.approx(2.0)
    assert ray_walls(6.0, 3.0, 0.0, 1.0) == pytest.approx(9.0)


def test_ray_walls_diagonal_takes_nearest_wall():
    s = math.sqrt(0.5)
    assert ray_walls(6.0, 6.0, s, s) == pytest.approx(6.0 * math.sqrt(2.0))
    assert ray_walls(10.0, 6.0, s, s) == pytest.approx(2.0 * math.sqrt(2.0))


def test_ray_walls_zero_direction_never_hits():
    assert ray_walls(6.0, 6.0, 0.0, 0.0) == float("inf")


def test_cast_ray_empty_field():
    assert cast_ray(6.0, 6.0, 1.0, 0.0) == pytest.approx(6.0)


def test_cast_ray_from_outside_field():
    # sensor pushed past the wall it faces
    assert ray_walls(12.45, 6.0, 1.0, 0.0) == pytest.approx(-0.45)
    assert cast_ray(12.45, 6.0, 1.0, 0.0) == 0.0
    # facing back into the field
    assert cast_ray(12.45, 6.0, -1.0, 0.0) == pytest.approx(12.45)


def test_cast_ray_obstacle_closer_than_wall():
    obs = Obstacle(1, 9.0, 6.0, 2.0, 2.0, 0.0)
    assert cast_ray(6.0, 6.0, 1.0, 0.0, [obs]) == pytest.approx(2.0)


def test_cast_ray_nearest_obstacle_wins():
    far = Obstacle(1, 10.0, 6.0, 1.0, 1.0, 0.0)
    near = Obstacle(2, 8.0, 6.0, 1.0, 1.0, 0.0)
    assert cast_ray(6.0, 6.0, 1.0, 0.0, [far, near]) == pytest.approx(1.5)
    assert cast_ray(6.0, 6.0, 1.0, 0.0, [near, far]) == pytest.approx(1.5)


def test_cast_ray_identical_obstacles_tie():
    a = Obstacle(1, 9.0, 6.0, 2.0, 2.0, 0.0)
    b = Obstacle(2, 9.0, 6.0, 2.0, 2.0, 0.0)
    assert cast_ray(6.0, 6.0, 1.0, 0.0, [a, b]) == pytest.approx(2.0)


def test_landmarks_never_block():
    lm = Landmark(1, 8.0, 6.0, "L1")
    assert cast_ray(6.0, 6.0, 1.0, 0.0, [lm]) == pytest.approx(6.0)


def test_obstacle_behind_does_not_reduce_distance():
    behind = Obstacle(1, 3.0, 6.0, 2.0, 2.0, 0.0)
    assert ray_obstacle(6.0, 6.0, 1.0, 0.0, behind) == float("inf")
    assert cast_ray(6.0, 6.0, 1.0, 0.0, [behind]) == pytest.approx(6.0)


def test_touching_obstacle_is_skipped():
    touching = Obstacle(1, 6.5, 6.0, 1.0, 1.0, 0.0)
    assert cast_ray(6.0, 6.0, 1.0, 0.0, [touching]) == pytest.approx(6.0)

    further = Obstacle(2, 9.0, 6.0, 2.0, 2.0, 0.0)
    assert cast_ray(6.0, 6.0, 1.0, 0.0, [touching, further]) == pytest.approx(2.0)


def test_origin_inside_obstacle_sees_past_it():
    around = Obstacle(1, 6.0, 6.0, 2.0, 2.0, 0.0)
    assert cast_ray(6.0, 6.0, 1.0, 0.0, [around]) == pytest.approx(6.0)


def test_rotated_obstacle_corner_hit():
    diamond = Obstacle(1, 9.0, 6.0, 2.0, 2.0, 45.0)
    assert cast_ray(6.0, 6.0, 1.0, 0.0, [diamond]) == pytest.approx(3.0 - math.sqrt(2.0))


def test_quarter_turn_swaps_extent():
    bar = Obstacle(1, 9.0, 6.0, 4.0, 1.0, 90.0)
    assert cast_ray(6.0, 6.0, 1.0, 0.0, [bar]) == pytest.approx(2.5)


def test_full_turn_reproduces_distance():
    s = math.sqrt(0.5)
    a = Obstacle(1, 8.0, 7.5, 1.5, 0.7, 30.0)
    b = Obstacle(1, 8.0, 7.5, 1.5, 0.7, 390.0)
    d0 = cast_ray(6.0, 6.0, s, s, [a])
    d1 = cast_ray(6.0, 6.0, s, s, [b])
    assert d0 < 6.0 * math.sqrt(2.0)
    assert d1 == pytest.approx(d0, rel=1e-9)
