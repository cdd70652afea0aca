"""Geometry utilities for floor plans.

This module provides the polygon primitives used by room inference. Inner
(wall-thickness corrected) measurements live in :mod:`plangraph.geom.metrics`.
"""

from .polygon import (
    angle_between,
    closest_point_on_segment,
    distance,
    offset_polygon,
    point_in_polygon,
    polygon_area,
    polygon_area_signed,
    polygon_centroid,
    room_area,
)

__all__ = [
    "angle_between",
    "closest_point_on_segment",
    "distance",
    "offset_polygon",
    "point_in_polygon",
    "polygon_area",
    "polygon_area_signed",
    "polygon_centroid",
    "room_area",
]
