"""One geometry record of a layer and its screen-space shapes."""
from typing import Optional, Tuple, Union
import logging

from spatialview.cancel import CancellationToken, LinkedToken
from spatialview.converter import Converter
from spatialview.importer import Importer
from spatialview.primitives import Envelope, Point
from spatialview.rendering import ClipRect, DrawingSurface, paint_shapes
from spatialview.shapes import ShapeContainer

logger = logging.getLogger(__name__)


class Feature:
    """Parsed geometry plus the pixel-space shapes of its last complete render.

    `render` builds the new shape sequence off to the side and publishes it
    with a single assignment, so readers see either the previous sequence or
    the new one, never a half-written mix.
    """

    def __init__(self, row_id: int, data: Union[bytes, str], is_text: bool = False,
                 token: Optional[CancellationToken] = None):
        self.row_id = row_id
        self._importer = Importer(token)
        _geometry, ok = self._importer.import_data(data, is_text)
        if not ok:
            logger.warning('row %s: geometry could not be parsed', row_id)
        self._shapes: Tuple[ShapeContainer, ...] = ()

    @property
    def importer(self) -> Importer:
        return self._importer

    @property
    def shapes(self) -> Tuple[ShapeContainer, ...]:
        return self._shapes

    def get_envelope(self) -> Envelope:
        """Geodetic envelope of the source geometry."""
        return self._importer.get_envelope()

    def render(self, converter: Converter, token: Optional[CancellationToken] = None) -> bool:
        """Rebuild the pixel-space shapes; False (shapes untouched) if cancelled.

        The caller's token, this feature's `interrupt` and the converter's
        `interrupt` all cancel the render.
        """
        watch = LinkedToken(token, self._importer.token, converter.token)
        shapes = self._importer.get_points(watch)
        if watch.cancelled:
            return False
        converted = converter.transform_points(shapes, watch)
        if watch.cancelled:
            return False
        self._shapes = tuple(converted)
        return True

    def within(self, p: Point, token: Optional[CancellationToken] = None) -> bool:
        for shape in self._shapes:
            if token is not None and token.cancelled:
                break
            if shape.within(p):
                return True
        return False

    def repaint(self, surface: DrawingSurface, scale: float, clip_area: Optional[ClipRect] = None,
                fill_polygons: bool = False, token: Optional[CancellationToken] = None) -> None:
        paint_shapes(surface, self._shapes, scale, clip_area, fill_polygons, token)

    def interrupt(self) -> None:
        self._importer.interrupt()

    def as_wkt(self) -> str:
        return self._importer.as_wkt()

    def as_kml(self) -> str:
        return self._importer.as_kml()

    def as_json(self) -> str:
        return self._importer.as_json()

    def as_gml(self) -> str:
        return self._importer.as_gml()

    def __repr__(self):
        return f'Feature(row_id={self.row_id!r}, shapes={len(self._shapes)})'
