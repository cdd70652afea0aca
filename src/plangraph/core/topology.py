"""Topology analysis for plan graphs.

This module provides the graph views the room engine works on: adjacency
lists built from walls, the angular neighbour order around each node
(rotation system), connected components and the wall lookup by node pair.
"""

from __future__ import annotations

import math
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

import networkx as nx

from .. import config
from .model import Node, Wall

EdgeKey = Tuple[int, int]


def edge_key(a: int, b: int) -> EdgeKey:
    """Key of the undirected node pair ``a``-``b``."""
    return (a, b) if a <= b else (b, a)


def build_adjacency(walls: Iterable[Wall]) -> Dict[int, List[int]]:
    """Build undirected adjacency lists from walls.

    Neighbours are listed in wall order; parallel walls list the same
    neighbour more than once. Walls joining a node to itself are skipped.

    Args:
        walls: Walls of the plan.

    Returns:
        Dictionary mapping node_id to list of neighbour node_ids.
    """
    adjacency: Dict[int, List[int]] = {}

    for wall in walls:
        if wall.a == wall.b:
            continue
        adjacency.setdefault(wall.a, []).append(wall.b)
        adjacency.setdefault(wall.b, []).append(wall.a)

    return adjacency


def build_wall_graph(walls: Iterable[Wall]) -> nx.Graph:
    """Build a NetworkX graph where nodes are plan nodes and edges are walls.

    Parallel walls collapse into one edge; the lowest wall id is kept as
    the ``wall_id`` edge attribute.
    """
    G = nx.Graph()

    for wall in walls:
        if wall.a == wall.b:
            continue
        if G.has_edge(wall.a, wall.b):
            if wall.id < G.edges[wall.a, wall.b]["wall_id"]:
                G.edges[wall.a, wall.b]["wall_id"] = wall.id
            continue
        G.add_edge(wall.a, wall.b, wall_id=wall.id)

    return G


def connected_components(walls: Iterable[Wall]) -> Dict[int, int]:
    """Label every wall endpoint with the index of its connected component.

    Components are numbered in the order their first node appears in the
    wall list.
    """
    G = build_wall_graph(walls)
    component_by_node: Dict[int, int] = {}
    for index, component in enumerate(nx.connected_components(G)):
        for node_id in component:
            component_by_node[node_id] = index
    return component_by_node


def build_rotation_system(
    nodes_by_id: Mapping[int, Node],
    adjacency: Mapping[int, List[int]],
) -> Dict[int, List[int]]:
    """Sort the neighbours of every node by angle.

    Neighbours are ordered by ascending ``atan2`` of the vector from the
    node to the neighbour. Duplicate neighbours (parallel walls) appear once
    and nodes missing from ``nodes_by_id`` are left out entirely.

    Args:
        nodes_by_id: Mapping of node ID to Node.
        adjacency: Adjacency lists from :func:`build_adjacency`.

    Returns:
        Dictionary mapping node_id to its angularly sorted neighbours.
    """
    rotation: Dict[int, List[int]] = {}

    for node_id, neighbours in adjacency.items():
        node = nodes_by_id.get(node_id)
        if node is None:
            continue

        # dict.fromkeys keeps first-seen order
        unique = [n for n in dict.fromkeys(neighbours) if n in nodes_by_id]
        unique.sort(
            key=lambda n: math.atan2(
                nodes_by_id[n].y - node.y, nodes_by_id[n].x - node.x
            )
        )
        rotation[node_id] = unique

    return rotation


def next_neighbour(
    rotation: Mapping[int, List[int]],
    node_id: int,
    from_id: int,
    turn: int = config.TURN_DIRECTION,
) -> Optional[int]:
    """Pick the boundary continuation at ``node_id`` after arriving from ``from_id``.

    Returns None at dead ends (fewer than two neighbours) or when
    ``from_id`` is not a neighbour of ``node_id``.
    """
    neighbours = rotation.get(node_id)
    if not neighbours or len(neighbours) < 2:
        return None
    try:
        index = neighbours.index(from_id)
    except ValueError:
        return None
    return neighbours[(index + turn) % len(neighbours)]


def build_wall_edge_map(walls: Iterable[Wall]) -> Dict[EdgeKey, List[Wall]]:
    """Group walls by their unordered node pair, lowest wall id first."""
    edge_map: Dict[EdgeKey, List[Wall]] = {}
    for wall in walls:
        edge_map.setdefault(edge_key(wall.a, wall.b), []).append(wall)
    return {key: sorted(group, key=lambda w: w.id) for key, group in edge_map.items()}


def wall_between(edge_map: Mapping[EdgeKey, List[Wall]], a: int, b: int) -> Optional[Wall]:
    """Return the lowest-id wall joining ``a`` and ``b``, if any."""
    group = edge_map.get(edge_key(a, b))
    return group[0] if group else None


def angle_between_walls(
    nodes_by_id: Mapping[int, Node], wall_a: Wall, wall_b: Wall
) -> Optional[float]:
    """Angle in degrees between two walls that share a node.

    Returns None when the walls share no node, an endpoint is unknown or
    either wall has zero length.
    """
    shared = next((n for n in (wall_a.a, wall_a.b) if n in (wall_b.a, wall_b.b)), None)
    if shared is None:
        return None

    node_shared = nodes_by_id.get(shared)
    node_a = nodes_by_id.get(wall_a.other(shared))
    node_b = nodes_by_id.get(wall_b.other(shared))
    if node_shared is None or node_a is None or node_b is None:
        return None

    v1 = (node_a.x - node_shared.x, node_a.y - node_shared.y)
    v2 = (node_b.x - node_shared.x, node_b.y - node_shared.y)
    mag1 = math.hypot(*v1)
    mag2 = math.hypot(*v2)
    if not mag1 or not mag2:
        return None

    cos = (v1[0] * v2[0] + v1[1] * v2[1]) / (mag1 * mag2)
    return math.degrees(math.acos(min(1.0, max(-1.0, cos))))
