"""KML and GML fragments for shapely geometries.

Shapely writes WKT and GeoJSON itself but has no KML or GML writer, so the
geometry-only fragments are built here with `xml.etree.ElementTree`.
Coordinates are written longitude first, ``%.15g`` precision.
"""

import xml.etree.ElementTree as ET

from shapely.geometry.base import BaseGeometry


def _fmt(value: float) -> str:
    return format(float(value), '.15g')


def _coord_text(coords, sep: str = ' ') -> str:
    return sep.join(','.join(_fmt(v) for v in c) for c in coords)


# ── KML ───────────────────────────────────────────────────────────────────────

def _kml_coords(parent: ET.Element, coords) -> None:
    ET.SubElement(parent, 'coordinates').text = _coord_text(coords)


def _kml_element(geom: BaseGeometry) -> ET.Element:
    kind = geom.geom_type
    if kind in ('Point', 'LineString', 'LinearRing'):
        elem = ET.Element(kind)
        _kml_coords(elem, geom.coords)
        return elem
    if kind == 'Polygon':
        elem = ET.Element('Polygon')
        outer = ET.SubElement(ET.SubElement(elem, 'outerBoundaryIs'), 'LinearRing')
        _kml_coords(outer, geom.exterior.coords)
        for ring in geom.interiors:
            inner = ET.SubElement(ET.SubElement(elem, 'innerBoundaryIs'), 'LinearRing')
            _kml_coords(inner, ring.coords)
        return elem
    if kind in ('MultiPoint', 'MultiLineString', 'MultiPolygon', 'GeometryCollection'):
        elem = ET.Element('MultiGeometry')
        for member in geom.geoms:
            elem.append(_kml_element(member))
        return elem
    raise ValueError(f'cannot write {kind} as KML')


def to_kml(geom: BaseGeometry) -> str:
    return ET.tostring(_kml_element(geom), encoding='unicode')


# ── GML (2.1.2 geometry elements) ────────────────────────────────────────────

_GML_MEMBER = {
    'MultiPoint': 'gml:pointMember',
    'MultiLineString': 'gml:lineStringMember',
    'MultiPolygon': 'gml:polygonMember',
    'GeometryCollection': 'gml:geometryMember',
}


def _gml_coords(parent: ET.Element, coords) -> None:
    ET.SubElement(parent, 'gml:coordinates').text = _coord_text(coords)


def _gml_element(geom: BaseGeometry) -> ET.Element:
    kind = geom.geom_type
    if kind in ('Point', 'LineString', 'LinearRing'):
        elem = ET.Element(f'gml:{kind}')
        _gml_coords(elem, geom.coords)
        return elem
    if kind == 'Polygon':
        elem = ET.Element('gml:Polygon')
        outer = ET.SubElement(ET.SubElement(elem, 'gml:outerBoundaryIs'), 'gml:LinearRing')
        _gml_coords(outer, geom.exterior.coords)
        for ring in geom.interiors:
            inner = ET.SubElement(ET.SubElement(elem, 'gml:innerBoundaryIs'), 'gml:LinearRing')
            _gml_coords(inner, ring.coords)
        return elem
    if kind in _GML_MEMBER:
        elem = ET.Element(f'gml:{kind}')
        for member in geom.geoms:
            ET.SubElement(elem, _GML_MEMBER[kind]).append(_gml_element(member))
        return elem
    raise ValueError(f'cannot write {kind} as GML')


def to_gml(geom: BaseGeometry) -> str:
    return ET.tostring(_gml_element(geom), encoding='unicode')
