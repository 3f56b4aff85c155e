import pytest

from spatialview.cancel import CancellationToken
from spatialview.converter import Converter
from spatialview.feature import Feature
from spatialview.primitives import Envelope, Point, ProjectionView
from spatialview.projection import ProjectionKind
from spatialview.shapes import ShapeType
from spatialview.tests.fixtures.geometry_fixture import RecordingSurface, make_payload, square_with_hole


@pytest.fixture
def plate():
    view = ProjectionView(-180, 180, -90, 90, 360, 180)
    return Converter(view, ProjectionKind.GEODETIC, ProjectionKind.GEODETIC)


def test_render_produces_pixel_shapes(plate):
    feature = Feature(7, make_payload(square_with_hole()))
    assert feature.shapes == ()
    assert feature.render(plate)
    assert [s.type for s in feature.shapes] == [ShapeType.POLYGON, ShapeType.LINEAR_RING]
    assert all(s.projected for s in feature.shapes)


def test_within_uses_screen_space(plate):
    feature = Feature(7, make_payload(square_with_hole()))
    feature.render(plate)
    # geodetic (2, 2) sits at pixel (182, 88)
    assert feature.within(Point(182, 88))
    assert not feature.within(Point(300, 100))
    assert not feature.within(Point(2, 2))


def test_envelope_stays_geodetic(plate):
    feature = Feature(7, make_payload(square_with_hole()))
    feature.render(plate)
    assert feature.get_envelope() == Envelope.from_minmax(0, 0, 10, 10)


def test_cancelled_render_keeps_previous_shapes(plate):
    feature = Feature(7, make_payload(square_with_hole()))
    feature.render(plate)
    before = feature.shapes
    token = CancellationToken()
    token.cancel()
    assert feature.render(plate, token) is False
    assert feature.shapes is before


def test_interrupt_blocks_later_renders(plate):
    feature = Feature(3, 'LINESTRING (0 0, 5 5)', is_text=True)
    feature.interrupt()
    assert feature.render(plate) is False
    assert feature.shapes == ()


def test_interrupt_applies_with_caller_token(plate):
    feature = Feature(3, 'LINESTRING (0 0, 5 5)', is_text=True)
    feature.interrupt()
    assert feature.render(plate, CancellationToken()) is False
    assert feature.shapes == ()


def test_converter_interrupt_keeps_previous_shapes(plate):
    feature = Feature(3, 'LINESTRING (0.5 0.5, 5.5 5.5)', is_text=True)
    feature.render(plate)
    before = feature.shapes
    plate.interrupt()
    assert feature.render(plate, CancellationToken()) is False
    assert feature.shapes is before


def test_undecodable_payload_becomes_empty_feature():
    feature = Feature(4, b'\xff\xfe POINT (1 2)', is_text=True)
    assert feature.importer.geometry is None
    assert feature.as_wkt() == ''


def test_within_stops_on_cancelled_token(plate):
    feature = Feature(3, 'POINT (0.5 0.5)', is_text=True)
    feature.render(plate)
    token = CancellationToken()
    assert feature.within(Point(180, 89), token)
    token.cancel()
    assert not feature.within(Point(180, 89), token)


def test_malformed_geometry_degrades(plate):
    feature = Feature(9, 'NOT A GEOMETRY', is_text=True)
    assert feature.render(plate)
    assert feature.shapes == ()
    assert not feature.within(Point(0, 0))
    assert not feature.get_envelope().is_init()
    assert feature.as_wkt() == ''


def test_repaint_draws_rendered_shapes(plate):
    feature = Feature(3, 'LINESTRING (0.5 0.5, 5.5 5.5)', is_text=True)
    feature.render(plate)
    surface = RecordingSurface()
    feature.repaint(surface, 1.0)
    assert surface.names() == ['new_path', 'move_to', 'line_to', 'stroke']
    assert surface.calls[1] == ('move_to', (180, 89))


def test_exports_pass_through():
    feature = Feature(3, 'POINT (1 2)', is_text=True)
    assert feature.as_wkt() == 'POINT (1 2)'
    assert '<coordinates>1,2</coordinates>' in feature.as_kml()
    assert '"Point"' in feature.as_json()
    assert feature.as_gml().startswith('<gml:Point>')
