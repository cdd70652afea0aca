"""Room inference from the wall graph.

Rooms are the faces of the plan graph, found by walking directed wall edges
around the rotation system built in :mod:`plangraph.core.topology`. Every
directed edge lies on exactly one face boundary, so walking all of them
enumerates the enclosed regions together with the outer boundary of each
connected component. The outer (and any mirrored) boundaries wind the other
way round and are removed per component by :func:`select_winding_group`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from .. import config
from ..geom.polygon import point_in_polygon, polygon_area_signed
from .model import Node, Plan, Point, Room, Wall
from .topology import (
    build_adjacency,
    build_rotation_system,
    connected_components,
    next_neighbour,
)

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Face:
    """A closed boundary cycle found by face tracing.

    Attributes:
        node_ids: Node IDs along the boundary, starting node not repeated.
        points: Coordinates of ``node_ids``.
        area: Signed area in square pixels; the sign gives the winding.
    """

    node_ids: Tuple[int, ...]
    points: Tuple[Point, ...]
    area: float


def trace_face(
    rotation: Mapping[int, List[int]],
    start: Tuple[int, int],
    turn: int = config.TURN_DIRECTION,
    max_steps: int = config.MAX_TRACE_STEPS,
) -> Tuple[Optional[List[int]], List[Tuple[int, int]]]:
    """Walk the face to the side of the directed edge ``start``.

    Args:
        rotation: Angular neighbour order from :func:`build_rotation_system`.
        start: Directed edge ``(u, v)`` to begin with.
        turn: Rotation direction used to pick the next neighbour.
        max_steps: Step bound after which the walk is abandoned.

    Returns:
        Tuple of (cycle of node IDs or None if the walk did not close,
        directed edges traversed).
    """
    u, v = start
    path = [u]
    traversed = []

    for _ in range(max_steps):
        traversed.append((u, v))
        path.append(v)
        following = next_neighbour(rotation, v, u, turn)
        if following is None:
            return None, traversed
        u, v = v, following
        if (u, v) == start:
            return path[:-1], traversed

    LOGGER.debug("Face trace from %s->%s exceeded %d steps, dropped", start[0], start[1], max_steps)
    return None, traversed


def trace_faces(
    nodes_by_id: Mapping[int, Node],
    walls: Sequence[Wall],
    turn: int = config.TURN_DIRECTION,
    max_steps: int = config.MAX_TRACE_STEPS,
    min_area: float = config.MIN_FACE_AREA,
) -> List[Face]:
    """Trace every face of the plan graph.

    Walls are visited in order, each in direction a->b then b->a. Open
    walks (dead ends, step bound), cycles shorter than three nodes, cycles
    passing a node twice and cycles with near-zero area are discarded.
    """
    rotation = build_rotation_system(nodes_by_id, build_adjacency(walls))
    visited = set()
    faces = []

    for wall in walls:
        if wall.a == wall.b:
            continue
        for start in ((wall.a, wall.b), (wall.b, wall.a)):
            if start in visited:
                continue

            cycle, traversed = trace_face(rotation, start, turn, max_steps)
            visited.update(traversed)
            if cycle is None or len(cycle) < 3:
                continue
            if len(set(cycle)) != len(cycle):
                continue

            points = tuple(nodes_by_id[node_id].point for node_id in cycle)
            area = polygon_area_signed(points)
            if abs(area) > min_area:
                faces.append(Face(tuple(cycle), points, area))

    return faces


def select_winding_group(faces: Sequence[Face]) -> List[Face]:
    """Keep one winding direction among the faces of a connected component.

    When both windings are present, the group with more faces wins; on a
    tie, the group with the smaller total unsigned area wins. This is a
    heuristic: it removes the outer boundary and mirrored traversals while
    keeping adjacent rooms, but is not a topological guarantee for
    components with several conflicting faces.
    """
    if len(faces) <= 1:
        return list(faces)

    positive = [face for face in faces if face.area > 0]
    negative = [face for face in faces if face.area < 0]
    if not positive or not negative:
        return list(faces)

    if len(negative) > len(positive):
        return negative
    if len(negative) == len(positive):
        positive_total = sum(abs(face.area) for face in positive)
        negative_total = sum(abs(face.area) for face in negative)
        if negative_total < positive_total:
            return negative
    return positive


def build_rooms(
    nodes: Iterable[Node],
    walls: Iterable[Wall],
    turn: int = config.TURN_DIRECTION,
    max_steps: int = config.MAX_TRACE_STEPS,
    min_area: float = config.MIN_FACE_AREA,
) -> List[Room]:
    """Infer rooms from nodes and walls.

    Args:
        nodes: Nodes of the plan.
        walls: Walls of the plan.
        turn: Rotation direction used during face tracing.
        max_steps: Step bound for a single face trace.
        min_area: Minimum unsigned area, in square pixels, of a room.

    Returns:
        Rooms in discovery order with sequential IDs starting at 1.
    """
    nodes_by_id = {node.id: node for node in nodes}
    walls = tuple(walls)

    faces = trace_faces(nodes_by_id, walls, turn, max_steps, min_area)
    if not faces:
        return []

    component_by_node = connected_components(walls)
    faces_by_component: Dict[int, List[Face]] = {}
    for face in faces:
        component = component_by_node.get(face.node_ids[0], -1)
        faces_by_component.setdefault(component, []).append(face)

    kept = []
    for group in faces_by_component.values():
        kept.extend(select_winding_group(group))

    LOGGER.debug("Traced %d faces, kept %d rooms", len(faces), len(kept))

    return [
        Room(
            id=index,
            name=config.DEFAULT_ROOM_NAME.format(id=index),
            node_ids=face.node_ids,
            points=face.points,
        )
        for index, face in enumerate(kept, start=1)
    ]


def build_plan_rooms(plan: Plan, turn: int = config.TURN_DIRECTION) -> List[Room]:
    """Infer rooms of a plan snapshot."""
    return build_rooms(plan.nodes, plan.walls, turn=turn)


def room_key(node_ids: Sequence[int]) -> str:
    """Stable key of a room cycle, independent of rotation and direction.

    The cycle is rotated to start at its smallest ID and read both ways;
    the lexicographically smaller ``-``-joined string is the key.
    """
    if not node_ids:
        return ""

    cycle = list(node_ids)
    index = cycle.index(min(cycle))
    forward = cycle[index:] + cycle[:index]
    reverse = list(reversed(cycle))
    back_index = len(cycle) - 1 - index
    backward = reverse[back_index:] + reverse[:back_index]

    forward_key = "-".join(str(n) for n in forward)
    backward_key = "-".join(str(n) for n in backward)
    return min(forward_key, backward_key)


def apply_room_names(rooms: Iterable[Room], names: Mapping[str, str]) -> List[Room]:
    """Attach user names to rooms by their :func:`room_key`."""
    named = []
    for room in rooms:
        name = (names.get(room_key(room.node_ids)) or "").strip()
        if name:
            room = Room(id=room.id, name=name, node_ids=room.node_ids, points=room.points)
        named.append(room)
    return named


def find_room_at_point(rooms: Sequence[Room], point) -> Optional[Room]:
    """Return the last room whose polygon contains ``point``."""
    for room in reversed(rooms):
        if point_in_polygon(point, room.points):
            return room
    return None
