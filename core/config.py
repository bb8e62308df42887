# ================================
# file: core/config.py
# ================================
"""
Global configuration for the localization field simulator.
All lengths are field units (the field spans 0..12 on both axes),
all user-facing angles are degrees.

Organization:
1. Field Geometry
2. Robot Physical Parameters
3. Sensor Configuration
4. Ray Casting
5. Object Editor Limits
6. GUI & Logging
"""
from __future__ import annotations

# ================================
# 1. FIELD GEOMETRY
# ================================
FIELD_UNITS: float = 12.0       # Field side length; walls at 0 and FIELD_UNITS on both axes

# ================================
# 2. ROBOT PHYSICAL PARAMETERS
# ================================
ROBOT_HALF: float = 0.45        # Half side of the square robot body
ROBOT_START_X: float = 6.0      # Default pose after reset
ROBOT_START_Y: float = 6.0
ROBOT_START_HEADING: float = 0.0  # degrees, CCW from +X
ROBOT_HEADING_STEP: float = 0.1   # Robot heading is kept at 0.1 deg resolution

# ================================
# 3. SENSOR CONFIGURATION
# ================================
SENSOR_RANGE: float = 0.32      # Max slide distance along the mounting face
SENSOR_COUNT: int = 4
SENSOR_NAMES: tuple = ("front", "right", "back", "left")
SENSOR_COLORS: tuple = ("#facc15", "#4ade80", "#38bdf8", "#fb923c")
SENSOR_OFFSET_MIN: float = -1.0
SENSOR_OFFSET_MAX: float = 1.0

# ================================
# 4. RAY CASTING
# ================================
AXIS_PARALLEL_EPS: float = 1e-10  # |d| below this is treated as axis parallel in the slab test
WALL_DIR_EPS: float = 1e-9        # |d| below this never reaches a wall on that axis
HIT_EPSILON: float = 1e-4         # Obstacle hits at or below this distance are discarded

# ================================
# 5. OBJECT EDITOR LIMITS
# ================================
OBSTACLE_MIN_SIZE: float = 0.2
OBSTACLE_MAX_SIZE: float = 6.0
OBSTACLE_DEFAULT_WIDTH: float = 1.0
OBSTACLE_DEFAULT_HEIGHT: float = 1.0
OBSTACLE_HANDLE_GAP: float = 0.7      # Obstacle rotation handle sits h/2 + gap above center
ROBOT_HANDLE_FACTOR: float = 3.0      # Robot rotation handle at ROBOT_HALF * factor ahead
SPAWN_JITTER_MIN: float = 2.0         # New objects land in [min, min + span)
SPAWN_JITTER_SPAN: float = 8.0
HIT_RADIUS_UNITS: float = 0.35        # Pick radius for robot/objects (field units)
HANDLE_RADIUS_UNITS: float = 0.25     # Pick radius for rotation handles (field units)

# ================================
# 6. GUI & LOGGING
# ================================
DISPLAY_DECIMALS: int = 2       # Readout precision
EXPORT_DECIMALS: int = 4        # Precision of the distances handed to algorithm code
CANVAS_PAD_RATIO: float = 0.08  # Padding around the field in the screen transform
CANVAS_DEFAULT_PX: int = 600
GUI_FIGSIZE: tuple = (8, 8)
LOG_DIR: str = "logs"
SWEEP_SAMPLES: int = 21         # Default number of offsets in an offset sweep
