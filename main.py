# ================================
# file: main.py
# ================================
from __future__ import annotations
"""Project entrypoint: builds a field from the command line, prints the four
sensor distances and optionally opens the interactive field editor.

Usage:
    python main.py --pose 6 6 0 --obstacle 7.45 6 1 1 0
    python main.py --pose 3 4 30 --offsets 0.5 0 0 -1 --sweep front
    python main.py --gui --landmark 2 2 --obstacle 9 9 2 1 45
"""
import argparse
import os
import traceback
from typing import Optional, Sequence
from datetime import datetime

from core.config import LOG_DIR, SENSOR_NAMES, DISPLAY_DECIMALS, SWEEP_SAMPLES
from sim import FieldWorld, format_readings
from appio import ReadingLogger, log_to_file


def build_world(pose: Optional[Sequence[float]] = None,
                offsets: Optional[Sequence[float]] = None,
                obstacles: Sequence[Sequence[float]] = (),
                landmarks: Sequence[Sequence[float]] = (),
                logger_func=None, log_file=None) -> FieldWorld:
    """Create a FieldWorld from plain numbers, routing everything through the editor setters."""
    world = FieldWorld(logger_func=logger_func, log_file=log_file)
    if pose is not None:
        world.set_robot_position(pose[0], pose[1])
        world.set_robot_angle(pose[2])
    for i, v in enumerate(offsets or ()):
        world.set_sensor_offset(i, v)
    for x, y in landmarks:
        world.add_object("landmark", x, y)
    for x, y, w, h, a in obstacles:
        world.add_object("obstacle", x, y, width=w, height=h, angle=a)
    return world


def run(pose=None, offsets=None, obstacles=(), landmarks=(), sweep: Optional[str] = None,
        samples: int = SWEEP_SAMPLES, gui: bool = False, snapshot: Optional[str] = None,
        record: Optional[str] = None, log_dir: str = LOG_DIR) -> list:
    """Wire modules, report readings and (optionally) start the editor.
    Returns the four readings for the initial field.
    """
    os.makedirs(log_dir, exist_ok=True)
    log_filename = f"field_log_{datetime.now().strftime('%Y%m%d_%H%M%S')}.txt"
    log_file = open(os.path.join(log_dir, log_filename), 'w', encoding='utf-8')

    try:
        log_to_file(log_file, "=" * 60)
        log_to_file(log_file, "Localization field simulator")
        log_to_file(log_file, f"Start: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
        log_to_file(log_file, "=" * 60)

        world = build_world(pose, offsets, obstacles, landmarks,
                            logger_func=log_to_file, log_file=log_file)
        recorder = ReadingLogger() if record else None

        readings = world.readings()
        if recorder is not None:
            recorder.log_readings(world.robot, world.sensor_offsets, readings)
        log_to_file(log_file, f"robot {world.robot!r} offsets {world.sensor_offsets}")
        log_to_file(log_file, format_readings(readings), "SENSORS")

        if sweep is not None:
            rows = world.sweep_offset(sweep, samples)
            log_to_file(log_file, f"offset sweep of {sweep} sensor ({len(rows)} samples)", "SWEEP")
            for off, dist in rows:
                print(f"  offset {off:+.3f}  distance {dist:.{DISPLAY_DECIMALS + 2}f}")

        if gui or snapshot:
            from gui.visualizer import FieldVisualizer
            viz = FieldVisualizer(world, interactive=gui, recorder=recorder,
                                  logger_func=log_to_file, log_file=log_file)
            if snapshot:
                viz.save(snapshot)
            viz.show()
            viz.close()

        if recorder is not None:
            recorder.save(record)
            log_to_file(log_file, f"recorded {len(recorder)} readings to {record}")
        return readings

    except Exception as e:
        log_to_file(log_file, f"run failed: {e}", "ERROR")
        log_to_file(log_file, traceback.format_exc(), "ERROR")
        raise
    finally:
        # Ensure log file is closed
        log_file.close()


def _parse_args(argv=None):
    ap = argparse.ArgumentParser(description="Robot localization field: four sliding rangefinders")
    ap.add_argument("--pose", type=float, nargs=3, metavar=("X", "Y", "HEADING"),
                    default=None, help="robot pose, heading in degrees")
    ap.add_argument("--offsets", type=float, nargs=4, metavar=("F", "R", "B", "L"),
                    default=None, help="sensor slide offsets in [-1, 1]")
    ap.add_argument("--obstacle", type=float, nargs=5, action="append", default=[],
                    metavar=("X", "Y", "W", "H", "ANGLE"), help="add an obstacle (repeatable)")
    ap.add_argument("--landmark", type=float, nargs=2, action="append", default=[],
                    metavar=("X", "Y"), help="add a landmark (repeatable)")
    ap.add_argument("--sweep", type=str, default=None, choices=SENSOR_NAMES,
                    help="print distances while sliding this sensor from -1 to 1")
    ap.add_argument("--samples", type=int, default=SWEEP_SAMPLES, help="offsets in a sweep")
    ap.add_argument("--gui", action="store_true", help="open the interactive field editor")
    ap.add_argument("--snapshot", type=str, default=None, help="save a PNG of the field")
    ap.add_argument("--record", type=str, default=None, help="save readings to this .npz")
    ap.add_argument("--log-dir", type=str, default=LOG_DIR, help="directory for run logs")
    return ap.parse_args(argv)


def main(argv=None):
    args = _parse_args(argv)
    run(pose=args.pose, offsets=args.offsets, obstacles=args.obstacle, landmarks=args.landmark,
        sweep=args.sweep, samples=args.samples, gui=args.gui, snapshot=args.snapshot,
        record=args.record, log_dir=args.log_dir)


if __name__ == "__main__":
    main()
