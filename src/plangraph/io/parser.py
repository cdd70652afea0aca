"""Parser for plan JSON files.

This module is the boundary between loosely shaped documents (editor
exports, hand-written files, room polygon dumps) and the strictly typed
:class:`~plangraph.core.model.Plan` the engine works on. Normalisation is
lenient: unusable entries are dropped and reported, and an error is raised
only when nothing usable remains.
"""

from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Any, Dict, List, Optional

from typing_extensions import TypedDict

from .. import config
from ..core.model import Node, Plan, Wall


class NodeData(TypedDict):
    id: int
    x: float
    y: float


class WallData(TypedDict):
    id: int
    name: str
    a: int
    b: int
    thickness: float


class PlanData(TypedDict):
    scale: float
    grid: float
    wallThickness: float
    nodes: List[NodeData]
    walls: List[WallData]


class PlanValidationError(ValueError):
    """Raised when a plan document holds no usable nodes and walls.

    Attributes:
        issues: Human-readable descriptions of every rejected entry.
    """

    def __init__(self, message: str, issues: Optional[List[str]] = None):
        self.issues = list(issues or [])
        if self.issues:
            message = f"{message}: " + "; ".join(self.issues)
        super().__init__(message)


def _as_finite_number(value: Any) -> Optional[float]:
    """Convert numbers and numeric strings to float, None otherwise."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        try:
            parsed = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        try:
            parsed = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return parsed if math.isfinite(parsed) else None


def _as_id(value: Any) -> Optional[int]:
    parsed = _as_finite_number(value)
    if parsed is None:
        return None
    return max(1, int(parsed))


def _positive_or(value: Any, fallback: float) -> float:
    parsed = _as_finite_number(value)
    return parsed if parsed is not None and parsed > 0 else fallback


def _normalize_node(raw: Any, fallback_id: int, issues: List[str]) -> Optional[Node]:
    if not isinstance(raw, dict):
        issues.append(f"node #{fallback_id} is not an object")
        return None

    x = _as_finite_number(raw.get("x"))
    y = _as_finite_number(raw.get("y"))
    if x is None or y is None:
        issues.append(f"node #{fallback_id} has no finite coordinates")
        return None

    node_id = _as_id(raw.get("id"))
    return Node(id=node_id if node_id is not None else fallback_id, x=x, y=y)


def _normalize_wall(
    raw: Any,
    fallback_id: int,
    fallback_thickness: float,
    node_ids: set,
    issues: List[str],
) -> Optional[Wall]:
    if not isinstance(raw, dict):
        issues.append(f"wall #{fallback_id} is not an object")
        return None

    a = _as_id(raw.get("a"))
    b = _as_id(raw.get("b"))
    if a is None or b is None:
        issues.append(f"wall #{fallback_id} has no endpoints")
        return None
    if a == b:
        issues.append(f"wall #{fallback_id} joins node {a} to itself")
        return None
    if a not in node_ids or b not in node_ids:
        issues.append(f"wall #{fallback_id} references an unknown node ({a}, {b})")
        return None

    name = raw.get("name")
    if not isinstance(name, str) or not name.strip():
        name = config.DEFAULT_WALL_NAME.format(id=fallback_id)

    wall_id = _as_id(raw.get("id"))
    return Wall(
        id=wall_id if wall_id is not None else fallback_id,
        a=a,
        b=b,
        thickness=_positive_or(raw.get("thickness"), fallback_thickness),
        name=name.strip(),
    )


def _nodes_walls_from_lists(data: Dict, fallback_thickness: float, issues: List[str]):
    if not isinstance(data.get("nodes"), list) or not isinstance(data.get("walls"), list):
        return None

    nodes = []
    for index, raw in enumerate(data["nodes"], start=1):
        node = _normalize_node(raw, index, issues)
        if node is not None:
            nodes.append(node)
    if not nodes:
        return None

    node_ids = {node.id for node in nodes}
    walls = []
    for index, raw in enumerate(data["walls"], start=1):
        wall = _normalize_wall(raw, index, fallback_thickness, node_ids, issues)
        if wall is not None:
            walls.append(wall)

    return nodes, walls


def _nodes_walls_from_rooms(rooms: Any, fallback_thickness: float, issues: List[str]):
    """Expand room polygons into nodes and closing walls with fresh IDs."""
    if not isinstance(rooms, list):
        return None

    next_id = 1
    nodes = []
    walls = []

    for room_index, room in enumerate(rooms, start=1):
        if not isinstance(room, dict) or not isinstance(room.get("points"), list):
            issues.append(f"room #{room_index} has no point list")
            continue

        points = []
        for raw in room["points"]:
            if not isinstance(raw, dict):
                continue
            x = _as_finite_number(raw.get("x"))
            y = _as_finite_number(raw.get("y"))
            if x is not None and y is not None:
                points.append((x, y))
        if len(points) < 3:
            issues.append(f"room #{room_index} has fewer than 3 valid points")
            continue

        room_node_ids = []
        for x, y in points:
            nodes.append(Node(id=next_id, x=x, y=y))
            room_node_ids.append(next_id)
            next_id += 1

        for index, node_id in enumerate(room_node_ids):
            walls.append(
                Wall(
                    id=next_id,
                    a=node_id,
                    b=room_node_ids[(index + 1) % len(room_node_ids)],
                    thickness=fallback_thickness,
                )
            )
            next_id += 1

    if not nodes:
        return None
    return nodes, walls


def normalize_plan_data(data: Any) -> Plan:
    """Validate and normalise a plan document.

    Args:
        data: Parsed JSON document, either ``{nodes, walls}`` lists or a
            ``rooms`` list of ``{points: [{x, y}, ...]}`` polygons, with
            optional ``scale``, ``grid`` and ``wallThickness``.

    Returns:
        The normalised Plan.

    Raises:
        PlanValidationError: If the document is not an object or contains
            no usable nodes.
    """
    if not isinstance(data, dict):
        raise PlanValidationError(f"Plan must be an object, got {type(data).__name__}")

    issues: List[str] = []
    fallback_thickness = _positive_or(data.get("wallThickness"), config.DEFAULT_WALL_THICKNESS)

    result = _nodes_walls_from_lists(data, fallback_thickness, issues)
    if result is None:
        result = _nodes_walls_from_rooms(data.get("rooms"), fallback_thickness, issues)
    if result is None:
        raise PlanValidationError("Plan contains no usable nodes", issues)

    nodes, walls = result
    return Plan(
        nodes=tuple(nodes),
        walls=tuple(walls),
        scale=_positive_or(data.get("scale"), config.DEFAULT_SCALE),
        grid=_positive_or(data.get("grid"), config.DEFAULT_GRID),
        wall_thickness=fallback_thickness,
    )


def load_plan(path: str) -> Plan:
    """Load a plan from a JSON file.

    Args:
        path: Path to the JSON file containing plan data.

    Returns:
        Plan object representing the floor plan.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        PlanValidationError: If the document holds no usable plan.
    """
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    with open(file_path, encoding="utf-8") as f:
        try:
            data = json.load(f)
        except ValueError as e:
            raise PlanValidationError(f"Invalid JSON in {path}: {e}") from e

    return normalize_plan_data(data)


def plan_to_dict(plan: Plan) -> PlanData:
    """Convert a plan to its export shape."""
    return {
        "scale": plan.scale,
        "grid": plan.grid,
        "wallThickness": plan.wall_thickness,
        "nodes": [{"id": node.id, "x": node.x, "y": node.y} for node in plan.nodes],
        "walls": [
            {
                "id": wall.id,
                "name": wall.name,
                "a": wall.a,
                "b": wall.b,
                "thickness": wall.thickness,
            }
            for wall in plan.walls
        ],
    }


def save_plan(plan: Plan, output_path: str) -> None:
    """Save a plan to a JSON file, creating parent directories."""
    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(plan_to_dict(plan), f, indent=2)
