import logging

import pytest

from spatialview.cancel import CancellationToken
from spatialview.primitives import Point
from spatialview.rendering import PillowSurface, paint_shapes
from spatialview.shapes import ShapeContainer, ShapeType
from spatialview.tests.fixtures.geometry_fixture import RecordingSurface


def pixel_shape(shape_type, points):
    return ShapeContainer.from_points(shape_type, points, projected=True)


SQUARE = [Point(10, 10), Point(30, 10), Point(30, 30), Point(10, 30)]


def test_point_marker_ignores_zoom():
    surface = RecordingSurface()
    paint_shapes(surface, [pixel_shape(ShapeType.POINT, [Point(40, 50)])], scale=2.0)
    assert surface.calls == [
        ('save', ()),
        ('translate', (40, 50)),
        ('scale', (0.5, 0.5)),
        ('new_path', ()),
        ('rectangle', (-2.5, -2.5, 5.0, 5.0)),
        ('fill', ()),
        ('restore', ()),
    ]


def test_polygon_fill_is_optional():
    shape = pixel_shape(ShapeType.POLYGON, SQUARE)
    outline = RecordingSurface()
    paint_shapes(outline, [shape], 1.0)
    assert outline.names()[-2:] == ['close_path', 'stroke']
    filled = RecordingSurface()
    paint_shapes(filled, [shape], 1.0, fill_polygons=True)
    assert filled.names()[-3:] == ['close_path', 'fill_preserve', 'stroke']


def test_linear_ring_is_closed_but_not_filled():
    surface = RecordingSurface()
    paint_shapes(surface, [pixel_shape(ShapeType.LINEAR_RING, SQUARE)], 1.0, fill_polygons=True)
    assert 'fill_preserve' not in surface.names()
    assert surface.names()[-2:] == ['close_path', 'stroke']


def test_empty_shape_is_logged_and_skipped(caplog):
    surface = RecordingSurface()
    with caplog.at_level(logging.ERROR):
        paint_shapes(surface, [ShapeContainer(ShapeType.POLYGON)], 1.0)
    assert surface.calls == []
    assert 'Polygon is empty' in caplog.text


def test_shapes_outside_clip_are_skipped():
    surface = RecordingSurface()
    paint_shapes(surface, [pixel_shape(ShapeType.POLYGON, SQUARE)], 1.0, clip_area=(100, 100, 50, 50))
    assert surface.calls == []
    paint_shapes(surface, [pixel_shape(ShapeType.POLYGON, SQUARE)], 1.0, clip_area=(0, 0, 20, 20))
    assert surface.calls


def test_cancelled_paint_draws_nothing():
    token = CancellationToken()
    token.cancel()
    surface = RecordingSurface()
    paint_shapes(surface, [pixel_shape(ShapeType.POLYGON, SQUARE)], 1.0, token=token)
    assert surface.calls == []


def test_scale_must_be_positive():
    with pytest.raises(ValueError):
        paint_shapes(RecordingSurface(), [], 0.0)


def test_pillow_surface_fills_and_strokes():
    surface = PillowSurface(64, 64)
    surface.set_source_rgba(1.0, 0.0, 0.0)
    paint_shapes(surface, [pixel_shape(ShapeType.POLYGON, SQUARE)], 1.0, fill_polygons=True)
    surface.set_source_rgba(0.0, 0.0, 1.0)
    paint_shapes(surface, [pixel_shape(ShapeType.LINE_STRING, [Point(40, 5), Point(60, 5)])], 1.0)
    surface.set_source_rgba(0.0, 0.0, 0.0)
    paint_shapes(surface, [pixel_shape(ShapeType.POINT, [Point(50, 50)])], 1.0)

    image = surface.image
    assert image.size == (64, 64)
    assert image.getpixel((20, 20)) == (255, 0, 0, 255)
    assert image.getpixel((50, 5)) == (0, 0, 255, 255)
    assert image.getpixel((50, 50)) == (0, 0, 0, 255)
    assert image.getpixel((2, 60)) == (255, 255, 255, 255)


def test_pillow_surface_save_restore():
    surface = PillowSurface(8, 8)
    surface.set_source_rgba(1.0, 0.0, 0.0)
    surface.save()
    surface.translate(0, 2)
    surface.set_source_rgba(0.0, 0.0, 1.0)
    surface.restore()
    surface.move_to(0, 4)
    surface.line_to(7, 4)
    surface.stroke()
    assert surface.image.getpixel((3, 4)) == (255, 0, 0, 255)
    assert surface.image.getpixel((3, 6)) == (255, 255, 255, 255)
