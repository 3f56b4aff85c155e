import math

import pytest

from spatialview.primitives import Envelope, Point
from spatialview.shapes import ShapeContainer, ShapeType, distance_to_segment, shape_description


SQUARE = [Point(0, 0), Point(10, 0), Point(10, 10), Point(0, 10)]


def test_square_polygon_contains_center():
    shape = ShapeContainer.from_points(ShapeType.POLYGON, SQUARE)
    assert shape.within(Point(5, 5))
    assert not shape.within(Point(15, 15))


def test_convex_polygon_inside_and_outside_box():
    hexagon = [Point(math.cos(a) * 10, math.sin(a) * 10)
               for a in (i * math.pi / 3 for i in range(6))]
    shape = ShapeContainer.from_points(ShapeType.POLYGON, hexagon)
    for p in (Point(0, 0), Point(3, 2), Point(-4, -4), Point(7, 1)):
        assert shape.within(p)
    for p in (Point(11, 0), Point(0, 9.5), Point(-20, 3), Point(4, -12)):
        assert not shape.within(p)


def test_polygon_box_fast_path_rejects():
    shape = ShapeContainer(ShapeType.POLYGON, list(SQUARE), Envelope.from_minmax(20, 20, 30, 30))
    assert not shape.within(Point(5, 5))


def test_polygon_ignores_box_in_other_space():
    # box already converted to pixels while the points are not: box is not trusted
    stale = Envelope.from_minmax(20, 20, 30, 30)
    stale = stale.with_corners(stale.top_left, stale.bottom_right, True)
    shape = ShapeContainer(ShapeType.POLYGON, list(SQUARE), stale)
    assert shape.within(Point(5, 5))


def test_polygon_box_in_pixel_orientation():
    # pixel boxes have top_left.y < bottom_right.y
    box = Envelope.from_bounds(0, 0, 10, 10).with_corners(Point(0, 0), Point(10, 10), True)
    shape = ShapeContainer(ShapeType.POLYGON, list(SQUARE), box, projected=True)
    assert shape.within(Point(5, 5))
    assert not shape.within(Point(5, 12))


def test_distance_to_degenerate_segment():
    s = Point(2, 3)
    for p in (Point(2, 3), Point(5, 7), Point(-1, -1)):
        assert distance_to_segment(s, s, p) == pytest.approx(math.hypot(p.x - s.x, p.y - s.y))


def test_distance_to_segment_clamps():
    start, end = Point(0, 0), Point(10, 0)
    assert distance_to_segment(start, end, Point(5, 3)) == pytest.approx(3.0)
    assert distance_to_segment(start, end, Point(13, 4)) == pytest.approx(5.0)
    assert distance_to_segment(start, end, Point(-3, -4)) == pytest.approx(5.0)


def test_line_string_tolerance():
    line = ShapeContainer.from_points(ShapeType.LINE_STRING, [Point(0, 0), Point(10, 0)])
    assert line.within(Point(5, 1.0))
    assert not line.within(Point(5, 1.5))


def test_linear_ring_closes_itself():
    pts = [Point(0, 0), Point(10, 0), Point(10, 10)]
    ring = ShapeContainer.from_points(ShapeType.LINEAR_RING, pts)
    line = ShapeContainer.from_points(ShapeType.LINE_STRING, pts)
    assert ring.within(Point(5, 5))
    assert not line.within(Point(5, 5))
    # testing does not mutate the ring
    assert len(ring.points) == 3


def test_point_tolerance_is_strict():
    point = ShapeContainer.from_points(ShapeType.POINT, [Point(3, 3)])
    assert point.within(Point(5, 5))
    assert not point.within(Point(7, 3))
    assert not point.within(Point(6, 6))


@pytest.mark.parametrize('shape_type', list(ShapeType))
def test_empty_shapes_never_contain(shape_type):
    assert not ShapeContainer(shape_type).within(Point(0, 0))


def test_unknown_type_never_contains():
    shape = ShapeContainer.from_points(ShapeType.UNKNOWN, SQUARE)
    assert not shape.within(Point(5, 5))


def test_shape_description():
    assert shape_description(ShapeType.POLYGON) == 'Polygon'
    assert shape_description(ShapeType.LINEAR_RING) == 'LinearRing'
    assert shape_description(ShapeType.UNKNOWN) == 'Unknown shape type'
