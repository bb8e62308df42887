import math

import numpy as np
import pytest

from core.types import RobotPose, Obstacle, Landmark, SensorPlacement
import sim.sensors as sensors
from sim.sensors import (
    sensor_placements, get_sensor_readings, rounded_distances,
    format_readings, sweep_offset, sensor_index,
)

ZERO = [0.0, 0.0, 0.0, 0.0]


def test_centered_robot_sees_walls_symmetrically():
    readings = get_sensor_readings(RobotPose(6.0, 6.0, 0.0), ZERO, [])
    assert len(readings) == 4
    for r in readings:
        assert r.distance == pytest.approx(5.55)


def test_placements_at_zero_offset():
    pls = sensor_placements(RobotPose(6.0, 6.0, 0.0), ZERO)
    positions = [(6.45, 6.0), (6.0, 5.55), (5.55, 6.0), (6.0, 6.45)]
    directions = [(1.0, 0.0), (0.0, -1.0), (-1.0, 0.0), (0.0, 1.0)]
    for pl, pos, dirn in zip(pls, positions, directions):
        assert pl.position == pytest.approx(pos)
        assert pl.direction == pytest.approx(dirn, abs=1e-12)


def test_slide_directions_follow_face_table():
    pls = sensor_placements(RobotPose(6.0, 6.0, 0.0), [1.0, 1.0, 1.0, 1.0])
    # front slides +right, right slides -front, back slides -right, left slides +front
    assert pls[0].position == pytest.approx((6.45, 5.68))
    assert pls[1].position == pytest.approx((5.68, 5.55))
    assert pls[2].position == pytest.approx((5.55, 6.32))
    assert pls[3].position == pytest.approx((6.32, 6.45))


def test_heading_rotates_sensors():
    pls = sensor_placements(RobotPose(6.0, 6.0, 90.0), ZERO)
    assert pls[0].position == pytest.approx((6.0, 6.45))
    assert pls[0].direction == pytest.approx((0.0, 1.0), abs=1e-12)
    assert pls[1].direction == pytest.approx((1.0, 0.0), abs=1e-12)


def test_directions_are_unit_vectors():
    for pl in sensor_placements(RobotPose(3.0, 8.0, 213.7), [0.3, -0.6, 1.0, -1.0]):
        assert math.hypot(*pl.direction) == pytest.approx(1.0)


def test_obstacle_in_front_of_front_sensor():
    obs = Obstacle(1, 7.45, 6.0, 1.0, 1.0, 0.0)
    readings = get_sensor_readings(RobotPose(6.0, 6.0, 0.0), ZERO, [obs])
    assert readings[0].distance == pytest.approx(6.95 - 6.45)
    assert readings[2].distance == pytest.approx(5.55)


@pytest.mark.parametrize("heading", [30.0, 137.5, 250.0])
def test_opposite_sensors_match_at_field_center(heading):
    readings = get_sensor_readings(RobotPose(6.0, 6.0, heading), ZERO, [])
    assert readings[0].distance == pytest.approx(readings[2].distance)
    assert readings[1].distance == pytest.approx(readings[3].distance)


def test_landmarks_do_not_change_readings():
    pose = RobotPose(6.0, 6.0, 0.0)
    plain = get_sensor_readings(pose, ZERO, [])
    marked = get_sensor_readings(pose, ZERO, [Landmark(1, 8.0, 6.0), Landmark(2, 6.0, 2.0)])
    assert [r.distance for r in marked] == [r.distance for r in plain]


def test_hit_point_lies_on_wall():
    r = get_sensor_readings(RobotPose(6.0, 6.0, 0.0), ZERO, [])[0]
    assert r.hit_point() == pytest.approx((12.0, 6.0))


def test_wrong_offset_count_rejected():
    with pytest.raises(ValueError):
        get_sensor_readings(RobotPose(), [0.0, 0.0, 0.0], [])


def test_non_finite_pose_rejected():
    with pytest.raises(ValueError):
        get_sensor_readings(RobotPose(float("nan"), 6.0, 0.0), ZERO, [])


def test_rounding_is_presentation_only():
    obs = Obstacle(1, 9.0, 6.0, 2.0, 2.0, 45.0)
    readings = get_sensor_readings(RobotPose(6.0, 6.0, 0.0), ZERO, [obs])
    exact = 9.0 - math.sqrt(2.0) - 6.45
    assert readings[0].distance == pytest.approx(exact, abs=1e-9)
    assert rounded_distances(readings)[0] == round(exact, 4)


def test_format_readings():
    readings = get_sensor_readings(RobotPose(6.0, 6.0, 0.0), ZERO, [])
    assert format_readings(readings) == "front=5.55 right=5.55 back=5.55 left=5.55"


def test_sensor_index():
    assert sensor_index("Back") == 2
    assert sensor_index(3) == 3
    with pytest.raises(ValueError):
        sensor_index(4)
    with pytest.raises(ValueError):
        sensor_index("top")


def test_sweep_jumps_once_at_obstacle_edge():
    # obstacle covers y in [5, 6]; front sensor y = 6 - 0.32 * offset
    obs = Obstacle(1, 8.0, 5.5, 1.0, 1.0, 0.0)
    offsets = [0.0, 0.2, -0.4, 0.0]
    rows = sweep_offset(RobotPose(6.0, 6.0, 0.0), offsets, "front", [obs], samples=21)
    assert rows.shape == (21, 2)
    assert np.all(np.diff(rows[:, 0]) > 0)
    assert rows[0, 1] == pytest.approx(5.55)
    assert rows[-1, 1] == pytest.approx(7.5 - 6.45)
    jumps = np.abs(np.diff(rows[:, 1])) > 1e-9
    assert int(jumps.sum()) == 1
    assert offsets == [0.0, 0.2, -0.4, 0.0]


def test_sweep_without_obstacles_is_flat():
    rows = sweep_offset(RobotPose(6.0, 6.0, 0.0), ZERO, 1, [], samples=5)
    assert np.allclose(rows[:, 1], 5.55)


def test_zero_firing_direction_rejected(monkeypatch):
    def degenerate(pose, offsets):
        return [SensorPlacement(i, (pose.x, pose.y), (0.0, 0.0)) for i in range(4)]

    monkeypatch.setattr(sensors, "sensor_placements", degenerate)
    with pytest.raises(ValueError, match="no firing direction"):
        sensors.get_sensor_readings(RobotPose(6.0, 6.0, 0.0), ZERO)
