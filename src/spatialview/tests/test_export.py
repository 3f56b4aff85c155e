import pytest
from shapely import from_wkt
from shapely.geometry import Point

from spatialview.export import to_gml, to_kml


def test_point_kml():
    assert to_kml(Point(1, 2)) == '<Point><coordinates>1,2</coordinates></Point>'


def test_point_gml():
    assert to_gml(Point(1.5, -2)) == '<gml:Point><gml:coordinates>1.5,-2</gml:coordinates></gml:Point>'


def test_multi_geometry_kml():
    kml = to_kml(from_wkt('MULTIPOINT ((1 1), (2 2))'))
    assert kml.startswith('<MultiGeometry>')
    assert kml.count('<Point>') == 2


def test_multi_line_gml_members():
    gml = to_gml(from_wkt('MULTILINESTRING ((0 0, 1 1), (2 2, 3 3))'))
    assert gml.count('<gml:lineStringMember>') == 2
    assert '<gml:coordinates>0,0 1,1</gml:coordinates>' in gml


def test_polygon_gml_boundaries():
    gml = to_gml(from_wkt('POLYGON ((0 0, 4 0, 4 4, 0 0), (1 1, 2 1, 2 2, 1 1))'))
    assert '<gml:outerBoundaryIs><gml:LinearRing>' in gml
    assert '<gml:innerBoundaryIs>' in gml


def test_three_dimensional_coordinates_kept():
    assert '1,2,3' in to_kml(Point(1, 2, 3))


def test_unsupported_geometry_raises():
    class Odd:
        geom_type = 'CircularString'

    with pytest.raises(ValueError):
        to_kml(Odd())
    with pytest.raises(ValueError):
        to_gml(Odd())
