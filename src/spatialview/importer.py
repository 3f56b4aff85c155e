"""
importer.py

Adapter over the external geometry engine (shapely). Parses raw payloads
into a shapely geometry and flattens it into `ShapeContainer` objects.

Binary payloads carry a 4-byte SRID prefix ahead of the WKB body, the layout
database servers use for stored geometry columns. Engine failures are logged
and surface as ``None`` geometries or empty strings, never as exceptions.
"""
from typing import List, Optional, Tuple, Union
import logging

import shapely
from shapely.errors import ShapelyError
from shapely.geometry.base import BaseGeometry

from spatialview.cancel import CancellationToken, LinkedToken
from spatialview.config import IMPORT
from spatialview.export import to_gml, to_kml
from spatialview.primitives import Envelope, Point
from spatialview.shapes import ShapeContainer, ShapeType
from spatialview.utils import safe_log_exception

logger = logging.getLogger(__name__)

_ENGINE_ERRORS = (ShapelyError, ValueError, TypeError)  # ValueError covers UnicodeError
_COLLECTIONS = ('MultiPoint', 'MultiLineString', 'MultiPolygon', 'GeometryCollection')


def _engine_envelope(geom: BaseGeometry) -> Envelope:
    if geom.is_empty:
        return Envelope()
    minx, miny, maxx, maxy = geom.bounds
    return Envelope.from_minmax(minx, miny, maxx, maxy)


class Importer:
    """Owns one parsed geometry and decomposes it on request."""

    def __init__(self, token: Optional[CancellationToken] = None):
        self._geometry: Optional[BaseGeometry] = None
        self._token = token if token is not None else CancellationToken()
        self.srid: Optional[int] = None

    @property
    def token(self) -> CancellationToken:
        return self._token

    @property
    def geometry(self) -> Optional[BaseGeometry]:
        return self._geometry

    # ── import ────────────────────────────────────────────────────────────────

    def import_data(self, data: Union[bytes, str], is_text: bool = False) -> Tuple[Optional[BaseGeometry], bool]:
        ok = self.import_from_wkt(data) if is_text else self.import_from_wkb(data)
        return self._geometry, ok

    def import_from_wkb(self, data: Union[bytes, bytearray, memoryview, str]) -> bool:
        try:
            raw = data.encode('latin-1') if isinstance(data, str) else bytes(data)
        except _ENGINE_ERRORS as exc:
            safe_log_exception('unable to read binary geometry payload', exc)
            self._geometry = None
            return False
        prefix = IMPORT['wkb_prefix_bytes']
        if len(raw) <= prefix:
            logger.error('geometry payload too short (%d bytes)', len(raw))
            self._geometry = None
            return False
        self.srid = int.from_bytes(raw[:prefix], IMPORT['srid_byteorder'])
        try:
            self._geometry = shapely.from_wkb(raw[prefix:])
        except _ENGINE_ERRORS as exc:
            safe_log_exception('shapely error: unable to parse WKB', exc, srid=self.srid)
            self._geometry = None
            return False
        return self._geometry is not None

    def import_from_wkt(self, data: Union[str, bytes]) -> bool:
        try:
            if isinstance(data, (bytes, bytearray)):
                data = bytes(data).decode('utf-8')
            self._geometry = shapely.from_wkt(data)
        except _ENGINE_ERRORS as exc:
            safe_log_exception('shapely error: unable to parse WKT', exc)
            self._geometry = None
            return False
        return self._geometry is not None

    # ── export ────────────────────────────────────────────────────────────────

    def _export(self, fmt: str, writer) -> str:
        if self._geometry is None:
            return ''
        try:
            return writer(self._geometry)
        except _ENGINE_ERRORS as exc:
            logger.error('Error exporting data to %s: %s', fmt, exc)
            return ''

    def as_wkt(self) -> str:
        return self._export('WKT', shapely.to_wkt)

    def as_kml(self) -> str:
        return self._export('KML', to_kml)

    def as_json(self) -> str:
        return self._export('JSON', shapely.to_geojson)

    def as_gml(self) -> str:
        return self._export('GML', to_gml)

    # ── decomposition ─────────────────────────────────────────────────────────

    def get_envelope(self) -> Envelope:
        if self._geometry is None:
            return Envelope()
        return _engine_envelope(self._geometry)

    def get_points(self, token: Optional[CancellationToken] = None) -> List[ShapeContainer]:
        """Flatten the geometry into shapes in geodetic coordinates.

        The walk stops when either the passed token or the importer's own one
        (see `interrupt`) is cancelled; the returned list is then partial and
        must be discarded.
        """
        shapes: List[ShapeContainer] = []
        if self._geometry is not None:
            self._extract(self._geometry, shapes, LinkedToken(self._token, token))
        return shapes

    def _ring_points(self, geom: BaseGeometry, token: CancellationToken) -> List[Point]:
        coords = list(geom.coords)
        points = []
        for c in reversed(coords):
            if token.cancelled:
                break
            points.append(Point(c[0], c[1]))
        return points

    def _extract(self, geom: BaseGeometry, shapes: List[ShapeContainer], token: CancellationToken) -> None:
        kind = geom.geom_type
        if kind == 'Point':
            if geom.is_empty:
                return
            p = Point(geom.x, geom.y)
            shapes.append(ShapeContainer(ShapeType.POINT, [p], Envelope(p, p)))
        elif kind in ('LineString', 'LinearRing'):
            shape_type = ShapeType.LINE_STRING if kind == 'LineString' else ShapeType.LINEAR_RING
            shapes.append(ShapeContainer(shape_type, self._ring_points(geom, token), _engine_envelope(geom)))
        elif kind == 'Polygon':
            if geom.is_empty:
                return
            exterior = geom.exterior
            shapes.append(ShapeContainer(ShapeType.POLYGON, self._ring_points(exterior, token),
                                         _engine_envelope(exterior)))
            for ring in geom.interiors:
                if token.cancelled:
                    break
                self._extract(ring, shapes, token)
        elif kind in _COLLECTIONS:
            for member in geom.geoms:
                if token.cancelled:
                    break
                self._extract(member, shapes, token)

    # ── ownership / cancellation ─────────────────────────────────────────────

    def steal_data(self) -> Optional[BaseGeometry]:
        geom, self._geometry = self._geometry, None
        return geom

    def interrupt(self) -> None:
        self._token.cancel()
