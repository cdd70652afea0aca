import math
import unittest

from plangraph.core.model import Point, Room
from plangraph.geom.polygon import (
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

SQUARE = [Point(0, 0), Point(10, 0), Point(10, 10), Point(0, 10)]


class PrimitiveTests(unittest.TestCase):
    def test_distance_and_angle(self):
        self.assertAlmostEqual(distance(Point(0, 0), Point(3, 4)), 5.0)
        self.assertAlmostEqual(angle_between(Point(0, 0), Point(0, 1)), math.pi / 2)
        self.assertAlmostEqual(angle_between(Point(1, 1), Point(0, 1)), math.pi)

    def test_signed_area_follows_orientation(self):
        self.assertAlmostEqual(polygon_area_signed(SQUARE), 100.0)
        self.assertAlmostEqual(polygon_area_signed(list(reversed(SQUARE))), -100.0)
        self.assertAlmostEqual(polygon_area(list(reversed(SQUARE))), 100.0)

    def test_area_of_short_inputs_is_zero(self):
        self.assertEqual(polygon_area_signed([]), 0.0)
        self.assertEqual(polygon_area_signed([Point(1, 1)]), 0.0)
        self.assertEqual(polygon_area([Point(0, 0), Point(5, 5)]), 0.0)

    def test_centroid_is_vertex_mean(self):
        self.assertEqual(polygon_centroid(SQUARE), Point(5, 5))
        # Vertex mean, not area centroid
        c = polygon_centroid([Point(0, 0), Point(10, 0), Point(10, 10), Point(0, 10), Point(0, 5)])
        self.assertAlmostEqual(c.x, 4.0)
        self.assertAlmostEqual(c.y, 5.0)
        self.assertEqual(polygon_centroid([]), Point(0, 0))

    def test_point_in_polygon(self):
        self.assertTrue(point_in_polygon(Point(5, 5), SQUARE))
        self.assertFalse(point_in_polygon(Point(15, 5), SQUARE))
        self.assertFalse(point_in_polygon(Point(5, -1), SQUARE))
        concave = [Point(0, 0), Point(10, 0), Point(10, 10), Point(5, 5), Point(0, 10)]
        self.assertFalse(point_in_polygon(Point(5, 8), concave))
        self.assertTrue(point_in_polygon(Point(2, 4), concave))

    def test_closest_point_on_segment(self):
        point, t = closest_point_on_segment(Point(5, 5), Point(0, 0), Point(10, 0))
        self.assertEqual(point, Point(5, 0))
        self.assertAlmostEqual(t, 0.5)

        point, t = closest_point_on_segment(Point(-5, 3), Point(0, 0), Point(10, 0))
        self.assertEqual(point, Point(0, 0))
        self.assertEqual(t, 0.0)

        point, t = closest_point_on_segment(Point(20, -3), Point(0, 0), Point(10, 0))
        self.assertEqual(point, Point(10, 0))
        self.assertEqual(t, 1.0)

    def test_closest_point_on_degenerate_segment(self):
        point, t = closest_point_on_segment(Point(4, 4), Point(1, 2), Point(1, 2))
        self.assertEqual(point, Point(1, 2))
        self.assertEqual(t, 0.0)

    def test_room_area_uses_scale(self):
        room = Room(
            id=1,
            name="Room 1",
            node_ids=(1, 2, 3, 4),
            points=(Point(0, 0), Point(100, 0), Point(100, 100), Point(0, 100)),
        )
        self.assertAlmostEqual(room_area(room, 10.0), 100.0)
        self.assertEqual(room_area(None, 10.0), 0.0)


class OffsetPolygonTests(unittest.TestCase):
    def assertPointsAlmostEqual(self, actual, expected):
        self.assertEqual(len(actual), len(expected))
        for a, e in zip(actual, expected):
            self.assertAlmostEqual(a.x, e.x, places=9)
            self.assertAlmostEqual(a.y, e.y, places=9)

    def test_zero_offsets_return_input(self):
        self.assertPointsAlmostEqual(offset_polygon(SQUARE, [0, 0, 0, 0]), SQUARE)

    def test_zero_offsets_keep_collinear_vertex(self):
        points = [Point(0, 0), Point(5, 0), Point(10, 0), Point(10, 10), Point(0, 10)]
        self.assertPointsAlmostEqual(offset_polygon(points, [0] * 5), points)

    def test_uniform_offset_moves_inward_in_both_orientations(self):
        expected = [Point(1, 1), Point(9, 1), Point(9, 9), Point(1, 9)]
        self.assertPointsAlmostEqual(offset_polygon(SQUARE, [1, 1, 1, 1]), expected)

        reversed_square = list(reversed(SQUARE))
        self.assertPointsAlmostEqual(
            offset_polygon(reversed_square, [1, 1, 1, 1]), list(reversed(expected))
        )

    def test_offsets_apply_per_edge(self):
        # Edge 0 is the bottom side, edge 1 the right side
        result = offset_polygon(SQUARE, [1, 2, 0, 0])
        self.assertPointsAlmostEqual(
            result, [Point(0, 1), Point(8, 1), Point(8, 10), Point(0, 10)]
        )

    def test_parallel_corner_uses_midpoint(self):
        points = [Point(0, 0), Point(5, 0), Point(10, 0), Point(10, 10), Point(0, 10)]
        result = offset_polygon(points, [1, 3, 1, 1, 1])
        # Vertex 1 joins two collinear edges offset by 1 and 3
        self.assertAlmostEqual(result[1].x, 5.0)
        self.assertAlmostEqual(result[1].y, 2.0)
        self.assertEqual(len(result), len(points))

    def test_invalid_input_returns_none(self):
        self.assertIsNone(offset_polygon(SQUARE, [1, 1, 1]))
        self.assertIsNone(offset_polygon(SQUARE[:2], [1, 1]))
        self.assertIsNone(offset_polygon([], []))

    def test_offset_shrinks_area(self):
        inner = offset_polygon(SQUARE, [0.5] * 4)
        self.assertLess(polygon_area(inner), polygon_area(SQUARE))
        self.assertAlmostEqual(polygon_area(inner), 81.0)


if __name__ == "__main__":
    unittest.main()
