"""Wall-thickness corrected room metrics.

Rooms are traced along wall centre lines. The usable (inner) room is found by
moving every boundary edge inward by half the thickness of its wall; lengths
and areas measured on that inner polygon are what the editor reports when
inner measurements are enabled. Whenever the inner polygon cannot be built
the outer polygon is used instead.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from shapely.geometry import Polygon

from .. import config
from ..core.model import Node, Plan, Point, Room, Wall
from ..core.rooms import build_plan_rooms
from ..core.topology import EdgeKey, build_wall_edge_map, wall_between
from .polygon import distance, offset_polygon, polygon_area, room_area

WallEdgeMap = Mapping[EdgeKey, List[Wall]]


def room_offsets(
    room: Room,
    wall_edge_map: WallEdgeMap,
    default_thickness: float = config.DEFAULT_WALL_THICKNESS,
    scale: float = config.DEFAULT_SCALE,
) -> List[float]:
    """Inward offset in pixels for every edge of ``room``.

    Edge ``i`` joins ``node_ids[i]`` and ``node_ids[i + 1]``; its offset is
    half the thickness of the lowest-id wall between them, or of
    ``default_thickness`` when there is none.
    """
    offsets = []
    count = len(room.node_ids)
    for index, node_id in enumerate(room.node_ids):
        wall = wall_between(wall_edge_map, node_id, room.node_ids[(index + 1) % count])
        thickness = wall.thickness if wall is not None else default_thickness
        offsets.append(thickness * scale / 2)
    return offsets


def room_inner_polygon(
    room: Room,
    wall_edge_map: WallEdgeMap,
    default_thickness: float = config.DEFAULT_WALL_THICKNESS,
    scale: float = config.DEFAULT_SCALE,
) -> Optional[List[Point]]:
    """Inner polygon of a room, or None when offsetting fails."""
    offsets = room_offsets(room, wall_edge_map, default_thickness, scale)
    inner = offset_polygon(room.points, offsets)
    if inner is None or len(inner) != len(room.points):
        return None
    return inner


def room_inner_area(
    room: Room,
    wall_edge_map: WallEdgeMap,
    default_thickness: float = config.DEFAULT_WALL_THICKNESS,
    scale: float = config.DEFAULT_SCALE,
) -> float:
    """Inner room area in square meters, outer area on failure."""
    inner = room_inner_polygon(room, wall_edge_map, default_thickness, scale)
    if inner is None:
        return room_area(room, scale)
    return polygon_area(inner) / (scale * scale)


def room_perimeter(
    room: Room,
    wall_edge_map: WallEdgeMap,
    default_thickness: float = config.DEFAULT_WALL_THICKNESS,
    scale: float = config.DEFAULT_SCALE,
    use_inner: bool = True,
) -> float:
    """Room perimeter in meters.

    Args:
        room: Room to measure.
        wall_edge_map: Walls grouped by node pair.
        default_thickness: Thickness for edges without a wall, in meters.
        scale: Pixels per meter.
        use_inner: Measure the inner polygon (falling back to the outer one)
            instead of the outer polygon.

    Returns:
        Perimeter in meters, 0.0 for a room without points.
    """
    points = room.points
    if use_inner:
        points = room_inner_polygon(room, wall_edge_map, default_thickness, scale) or room.points
    if not points:
        return 0.0

    total = sum(distance(points[i], points[(i + 1) % len(points)]) for i in range(len(points)))
    return total / scale


def inner_length_by_wall_id(
    rooms: Iterable[Room],
    wall_edge_map: WallEdgeMap,
    default_thickness: float = config.DEFAULT_WALL_THICKNESS,
    scale: float = config.DEFAULT_SCALE,
) -> Dict[int, float]:
    """Inner length in meters of every wall bordering at least one room.

    A wall shared by several rooms reports the smallest of its inner
    lengths. Walls next to rooms whose offset failed are left out.
    """
    lengths: Dict[int, float] = {}

    for room in rooms:
        inner = room_inner_polygon(room, wall_edge_map, default_thickness, scale)
        if inner is None:
            continue

        count = len(inner)
        for index in range(count):
            next_index = (index + 1) % count
            wall = wall_between(wall_edge_map, room.node_ids[index], room.node_ids[next_index])
            if wall is None:
                continue
            length = distance(inner[index], inner[next_index]) / scale
            existing = lengths.get(wall.id)
            lengths[wall.id] = length if existing is None else min(existing, length)

    return lengths


def inner_area_by_room_id(
    rooms: Iterable[Room],
    wall_edge_map: WallEdgeMap,
    default_thickness: float = config.DEFAULT_WALL_THICKNESS,
    scale: float = config.DEFAULT_SCALE,
) -> Dict[int, float]:
    """Inner area in square meters keyed by room ID."""
    return {
        room.id: room_inner_area(room, wall_edge_map, default_thickness, scale)
        for room in rooms
    }


def wall_length(
    nodes_by_id: Mapping[int, Node],
    wall: Wall,
    scale: float = config.DEFAULT_SCALE,
    inner_lengths: Optional[Mapping[int, float]] = None,
) -> float:
    """Wall length in meters.

    The inner length is returned when ``inner_lengths`` has one for the
    wall; otherwise the centre line length. Walls with an unknown endpoint
    measure 0.
    """
    if inner_lengths is not None and wall.id in inner_lengths:
        return inner_lengths[wall.id]

    node_a = nodes_by_id.get(wall.a)
    node_b = nodes_by_id.get(wall.b)
    if node_a is None or node_b is None:
        return 0.0
    return distance(node_a, node_b) / scale


def total_area(
    rooms: Iterable[Room],
    scale: float = config.DEFAULT_SCALE,
    inner_areas: Optional[Mapping[int, float]] = None,
) -> float:
    """Sum of room areas in square meters.

    Rooms found in ``inner_areas`` contribute their inner area, all others
    their outer area. Pass no mapping to sum outer areas only.
    """
    inner_areas = inner_areas or {}
    return sum(
        inner_areas[room.id] if room.id in inner_areas else room_area(room, scale)
        for room in rooms
    )


def room_outline(room: Room) -> Optional[Polygon]:
    """Outer room polygon as a Shapely polygon."""
    if len(room.points) < 3:
        return None
    return Polygon([(p.x, p.y) for p in room.points])


def room_inner_outline(
    room: Room,
    wall_edge_map: WallEdgeMap,
    default_thickness: float = config.DEFAULT_WALL_THICKNESS,
    scale: float = config.DEFAULT_SCALE,
) -> Optional[Polygon]:
    """Inner room polygon as a Shapely polygon, outer polygon on failure."""
    inner = room_inner_polygon(room, wall_edge_map, default_thickness, scale)
    if inner is None:
        return room_outline(room)
    return Polygon([(p.x, p.y) for p in inner])


@dataclass(frozen=True)
class PlanMetrics:
    """Every derived measurement of a plan snapshot.

    Attributes:
        rooms: Inferred rooms in discovery order.
        inner_areas: Room ID -> inner area in square meters.
        perimeters: Room ID -> inner perimeter in meters.
        inner_lengths: Wall ID -> inner length in meters.
        outer_lengths: Wall ID -> centre line length in meters.
    """

    rooms: Sequence[Room]
    inner_areas: Mapping[int, float] = field(default_factory=dict)
    perimeters: Mapping[int, float] = field(default_factory=dict)
    inner_lengths: Mapping[int, float] = field(default_factory=dict)
    outer_lengths: Mapping[int, float] = field(default_factory=dict)
    scale: float = config.DEFAULT_SCALE

    def total_area(self, use_inner: bool = True) -> float:
        return total_area(self.rooms, self.scale, self.inner_areas if use_inner else None)

    def wall_length(self, wall_id: int, use_inner: bool = True) -> float:
        if use_inner and wall_id in self.inner_lengths:
            return self.inner_lengths[wall_id]
        return self.outer_lengths.get(wall_id, 0.0)


def compute_plan_metrics(
    plan: Plan,
    rooms: Optional[Sequence[Room]] = None,
    turn: int = config.TURN_DIRECTION,
) -> PlanMetrics:
    """Infer rooms (unless given) and measure them in one pass."""
    if rooms is None:
        rooms = build_plan_rooms(plan, turn=turn)

    edge_map = build_wall_edge_map(plan.walls)
    nodes_by_id = plan.node_map()
    thickness = plan.wall_thickness
    scale = plan.scale

    return PlanMetrics(
        rooms=tuple(rooms),
        inner_areas=inner_area_by_room_id(rooms, edge_map, thickness, scale),
        perimeters={
            room.id: room_perimeter(room, edge_map, thickness, scale) for room in rooms
        },
        inner_lengths=inner_length_by_wall_id(rooms, edge_map, thickness, scale),
        outer_lengths={wall.id: wall_length(nodes_by_id, wall, scale) for wall in plan.walls},
        scale=scale,
    )
