"""Core data models and graph analysis for floor plans."""

from .model import Node, Plan, Point, Room, Wall
from .rooms import build_rooms, find_room_at_point, room_key
from .topology import build_adjacency, build_rotation_system, connected_components

__all__ = [
    "Node",
    "Plan",
    "Point",
    "Room",
    "Wall",
    "build_adjacency",
    "build_rooms",
    "build_rotation_system",
    "connected_components",
    "find_room_at_point",
    "room_key",
]
