"""Plan Graph - room inference and wall-thickness metrics for floor plan graphs."""

__version__ = "0.1.0"

from .core.model import Node, Plan, Point, Room, Wall
from .core.rooms import build_rooms
from .geom.metrics import compute_plan_metrics

__all__ = ["Node", "Plan", "Point", "Room", "Wall", "build_rooms", "compute_plan_metrics"]
