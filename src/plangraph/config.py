"""Global parameters for plan graph processing.

Values mirror the editor defaults. Every engine function that uses one of
these accepts a keyword override, and plan documents may carry their own
scale, grid and default wall thickness.
"""

# --------------------------------------------------------------------------- #
# Plan defaults
# --------------------------------------------------------------------------- #
DEFAULT_SCALE = 50.0  # pixels per meter
DEFAULT_GRID = 0.5  # meters
DEFAULT_WALL_THICKNESS = 0.2  # meters

# --------------------------------------------------------------------------- #
# Room inference
# --------------------------------------------------------------------------- #
MAX_TRACE_STEPS = 500  # Faces longer than this are dropped
MIN_FACE_AREA = 1e-4  # Square pixels; smaller traces are degenerate

# Neighbours are sorted by ascending atan2 angle. When a trace arrives at a
# node, the next edge is the neighbour at index (i + TURN_DIRECTION) of the
# node it came from: -1 takes the predecessor, +1 the successor.
TURN_CLOCKWISE = -1
TURN_COUNTERCLOCKWISE = 1
TURN_DIRECTION = TURN_CLOCKWISE

DEFAULT_ROOM_NAME = "Room {id}"
DEFAULT_WALL_NAME = "Wall {id}"

# --------------------------------------------------------------------------- #
# Offsetting
# --------------------------------------------------------------------------- #
PARALLEL_EPSILON = 1e-6  # Cross product below this means parallel edges
