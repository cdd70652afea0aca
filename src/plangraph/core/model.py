"""Core data models for plan graphs.

This module defines the immutable structures passed into the engine: nodes
placed by the user, walls joining two nodes, and the rooms derived from them.
Every engine call takes a snapshot of these values and never mutates it.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .. import config


@dataclass(frozen=True)
class Point:
    """Represents a 2D point in plan (pixel) coordinates.

    Attributes:
        x: The x-coordinate of the point.
        y: The y-coordinate of the point.
    """

    x: float
    y: float


@dataclass(frozen=True)
class Node:
    """Represents a node of the plan graph.

    Attributes:
        id: Unique integer identifier.
        x: The x-coordinate in pixels.
        y: The y-coordinate in pixels.
    """

    id: int
    x: float
    y: float

    @property
    def point(self) -> Point:
        return Point(self.x, self.y)


@dataclass(frozen=True)
class Wall:
    """Represents a wall between two nodes.

    Attributes:
        id: Unique integer identifier.
        a: ID of the first endpoint node.
        b: ID of the second endpoint node.
        thickness: Wall thickness in meters.
        name: Human-readable label.
    """

    id: int
    a: int
    b: int
    thickness: float = config.DEFAULT_WALL_THICKNESS
    name: str = ""

    def other(self, node_id: int) -> int:
        """Return the endpoint opposite to ``node_id``."""
        return self.b if node_id == self.a else self.a


@dataclass(frozen=True)
class Room:
    """Represents a room inferred from the wall graph.

    Attributes:
        id: Sequential identifier in discovery order.
        name: Display name.
        node_ids: Ordered cycle of node IDs along the room boundary.
        points: Coordinates matching ``node_ids`` index for index.
    """

    id: int
    name: str
    node_ids: tuple[int, ...]
    points: tuple[Point, ...]


@dataclass(frozen=True)
class Plan:
    """An immutable snapshot of a floor plan.

    Attributes:
        nodes: Nodes of the plan graph.
        walls: Walls of the plan graph.
        scale: Pixels per meter.
        grid: Grid step in meters.
        wall_thickness: Default wall thickness in meters.
    """

    nodes: tuple[Node, ...] = field(default_factory=tuple)
    walls: tuple[Wall, ...] = field(default_factory=tuple)
    scale: float = config.DEFAULT_SCALE
    grid: float = config.DEFAULT_GRID
    wall_thickness: float = config.DEFAULT_WALL_THICKNESS

    def node_map(self) -> dict[int, Node]:
        return {node.id: node for node in self.nodes}
