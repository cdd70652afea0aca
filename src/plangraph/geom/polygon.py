"""Polygon geometry primitives.

Pure functions over points in plan coordinates. Any object exposing ``x`` and
``y`` attributes is accepted as a point (``Point`` and ``Node`` both are);
results are always ``Point`` values.
"""

from __future__ import annotations

import math
from typing import List, Optional, Sequence, Tuple

from .. import config
from ..core.model import Point


def distance(a, b) -> float:
    """Calculate Euclidean distance between two points."""
    return math.hypot(a.x - b.x, a.y - b.y)


def angle_between(a, b) -> float:
    """Angle in radians of the vector from ``a`` to ``b``."""
    return math.atan2(b.y - a.y, b.x - a.x)


def polygon_area_signed(points: Sequence) -> float:
    """Shoelace area of an ordered polygon.

    The sign follows the vertex order; polygons with fewer than three
    points have zero area.
    """
    if len(points) < 3:
        return 0.0

    total = 0.0
    for i, a in enumerate(points):
        b = points[(i + 1) % len(points)]
        total += a.x * b.y - b.x * a.y
    return total / 2


def polygon_area(points: Sequence) -> float:
    """Unsigned polygon area."""
    return abs(polygon_area_signed(points))


def polygon_centroid(points: Sequence) -> Point:
    """Mean of the polygon vertices, used for label placement."""
    if not points:
        return Point(0.0, 0.0)
    x = sum(p.x for p in points)
    y = sum(p.y for p in points)
    return Point(x / len(points), y / len(points))


def point_in_polygon(point, polygon: Sequence) -> bool:
    """Even-odd ray casting test. Points on the boundary may go either way."""
    inside = False
    j = len(polygon) - 1
    for i in range(len(polygon)):
        xi, yi = polygon[i].x, polygon[i].y
        xj, yj = polygon[j].x, polygon[j].y
        if (yi > point.y) != (yj > point.y):
            x_cross = (xj - xi) * (point.y - yi) / (yj - yi) + xi
            if point.x < x_cross:
                inside = not inside
        j = i
    return inside


def closest_point_on_segment(point, a, b) -> Tuple[Point, float]:
    """Project ``point`` onto segment ``[a, b]``.

    Returns:
        Tuple of (projected point, clamp parameter t in [0, 1]).
    """
    abx = b.x - a.x
    aby = b.y - a.y
    length_sq = abx * abx + aby * aby
    if length_sq == 0:
        return Point(a.x, a.y), 0.0

    t = ((point.x - a.x) * abx + (point.y - a.y) * aby) / length_sq
    t = max(0.0, min(1.0, t))
    return Point(a.x + abx * t, a.y + aby * t), t


def _line_intersection(p1: Point, d1: Point, p2: Point, d2: Point) -> Optional[Point]:
    cross = d1.x * d2.y - d1.y * d2.x
    if abs(cross) < config.PARALLEL_EPSILON:
        return None
    t = ((p2.x - p1.x) * d2.y - (p2.y - p1.y) * d2.x) / cross
    return Point(p1.x + d1.x * t, p1.y + d1.y * t)


def _offset_edge(points: Sequence, index: int, offset: float, sign: int):
    a = points[index]
    b = points[(index + 1) % len(points)]
    dx = b.x - a.x
    dy = b.y - a.y
    length = math.hypot(dx, dy) or 1.0
    nx = sign * -dy / length
    ny = sign * dx / length
    start = Point(a.x + nx * offset, a.y + ny * offset)
    end = Point(b.x + nx * offset, b.y + ny * offset)
    return start, end, Point(dx, dy)


def offset_polygon(points: Sequence, offsets: Sequence[float]) -> Optional[List[Point]]:
    """Move every polygon edge inward by its own distance and re-miter corners.

    Edge ``i`` runs from ``points[i]`` to ``points[i + 1]`` and is shifted by
    ``offsets[i]``. Each output vertex is the intersection of the two shifted
    edges meeting there; when they are parallel, the midpoint of their
    endpoints at that vertex is used instead.

    Args:
        points: Simple polygon, either orientation.
        offsets: One distance per edge, positive meaning inward.

    Returns:
        A polygon with exactly ``len(points)`` vertices, or None when fewer
        than three points are given or the offset count does not match.
    """
    count = len(points)
    if count < 3 or len(offsets) != count:
        return None

    sign = 1 if polygon_area_signed(points) >= 0 else -1
    edges = [_offset_edge(points, i, offsets[i], sign) for i in range(count)]

    result = []
    for i in range(count):
        prev_start, prev_end, prev_dir = edges[i - 1]
        next_start, _, next_dir = edges[i]
        corner = _line_intersection(prev_start, prev_dir, next_start, next_dir)
        if corner is None:
            corner = Point(
                (prev_end.x + next_start.x) / 2,
                (prev_end.y + next_start.y) / 2,
            )
        result.append(corner)

    return result


def room_area(room, scale: float) -> float:
    """Outer room area in square meters."""
    if room is None or not room.points:
        return 0.0
    return polygon_area(room.points) / (scale * scale)
