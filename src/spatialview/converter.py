"""
converter.py

Conversion between geodetic degrees, a projected CRS and integer pixels.

A `Converter` holds a configured snapshot: the viewport, the source and
target CRS, a pyproj transformer pair and the 6-parameter affine between
projected coordinates and pixels (plus its inverse). The snapshot is replaced
only by `change_projection`; every read of it, and every use of the
transformers, happens under one re-entrant lock.

Affine layout (GDAL geotransform order ``c0..c5``)::

    X = c0 + px * c1 + py * c2
    Y = c3 + px * c4 + py * c5

Public helpers:
- `Converter`
- `AxisType`, `dec_to_dms(angle, axis, precision)`

"""
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple, Union
import logging
import threading

from affine import Affine, TransformNotInvertibleError
from pyproj import CRS, Transformer
from pyproj.exceptions import CRSError, ProjError

from spatialview.cancel import CancellationToken, LinkedToken
from spatialview.errors import ConverterStateError, TransformationError
from spatialview.primitives import Envelope, Point, ProjectionView
from spatialview.projection import ProjectionKind, ProjectionRegistry, default_registry
from spatialview.shapes import ShapeContainer
from spatialview.utils import finite_pair

logger = logging.getLogger(__name__)

CRSLike = Union[CRS, ProjectionKind, str]


class AxisType(Enum):
    LAT = 'Lat'
    LON = 'Long'


def dec_to_dms(angle: float, axis: AxisType, precision: int = 2) -> str:
    """Format decimal degrees as ``DDDdMM'SS.ss"H`` (GDAL layout)."""
    if not isinstance(axis, AxisType):
        raise ValueError(f'Unknown axis type: {axis!r}')
    if finite_pair(angle, 0.0) is None:
        return 'Invalid angle'

    epsilon = (0.5 / 3600.0) * (0.1 ** precision)
    abs_angle = abs(angle) + epsilon
    if abs_angle > 361:
        return 'Invalid angle'

    degrees = int(abs_angle)
    minutes = int((abs_angle - degrees) * 60)
    seconds = abs_angle * 3600 - degrees * 3600 - minutes * 60
    if seconds > epsilon * 3600.0:
        seconds -= epsilon * 3600.0

    if axis is AxisType.LON:
        hemisphere = 'W' if angle < 0.0 else 'E'
    else:
        hemisphere = 'S' if angle < 0.0 else 'N'
    return f'{degrees:3d}d{minutes:2d}\'{seconds:{precision + 3}.{precision}f}"{hemisphere}'


def _apply(transformer: Transformer, x: float, y: float) -> Optional[Tuple[float, float]]:
    """Transform one coordinate; ``None`` when PROJ cannot."""
    try:
        out = transformer.transform(x, y)
    except ProjError:
        return None
    return finite_pair(*out)


@dataclass(frozen=True)
class _ConverterState:
    view: ProjectionView
    source: CRS
    target: CRS
    geo_to_proj: Transformer
    proj_to_geo: Transformer
    forward: Affine
    inverse: Affine
    version: int


class Converter:
    """Maps coordinates between geodetic, projected and pixel space."""

    def __init__(self, view: Optional[ProjectionView] = None, source: Optional[CRSLike] = None,
                 target: Optional[CRSLike] = None, registry: Optional[ProjectionRegistry] = None):
        self._lock = threading.RLock()
        self._registry = registry if registry is not None else default_registry()
        self._state: Optional[_ConverterState] = None
        self._version = 0
        self._token = CancellationToken()
        if view is not None and source is not None and target is not None:
            self.change_projection(view, source, target)

    # ── configuration ────────────────────────────────────────────────────────

    def _resolve(self, crs: Optional[CRSLike]) -> Optional[CRS]:
        if crs is None or isinstance(crs, CRS):
            return crs
        return self._registry.get_projection(crs)

    @staticmethod
    def _build_transformers(source: CRS, target: CRS) -> Tuple[Transformer, Transformer]:
        try:
            geo_to_proj = Transformer.from_crs(source, target, always_xy=True)
            proj_to_geo = Transformer.from_crs(target, source, always_xy=True)
        except (CRSError, ProjError) as exc:
            raise TransformationError(f'Unable to perform specified transformation: {exc}') from exc
        return geo_to_proj, proj_to_geo

    @staticmethod
    def _corner(geo_to_proj: Transformer, target: CRS, x: float, y: float) -> Tuple[float, float]:
        projected = _apply(geo_to_proj, x, y)
        if projected is None:
            logger.error('Unable to perform requested reprojection of (%s, %s) to %s',
                         x, y, target.to_proj4())
            return x, y
        return projected

    def _viewport_affine(self, view: ProjectionView, geo_to_proj: Transformer, target: CRS) -> Affine:
        left, top = self._corner(geo_to_proj, target, view.min_lat, view.max_lon)
        right, bottom = self._corner(geo_to_proj, target, view.max_lat, view.min_lon)
        return Affine.from_gdal(
            left, (right - left) / view.width, 0.0,
            top, 0.0, -(top - bottom) / view.height,
        )

    def change_projection(self, view: Optional[ProjectionView] = None, source: Optional[CRSLike] = None,
                          target: Optional[CRSLike] = None) -> bool:
        """Reconfigure for a new viewport and/or CRS pair.

        Omitted arguments keep their current value. Returns True when the
        affine was recomputed and False when nothing changed.

        Raises `TransformationError` if the transform pair cannot be built or
        the resulting affine is degenerate.
        """
        source_crs = self._resolve(source)
        target_crs = self._resolve(target)
        with self._lock:
            state = self._state
            if state is not None:
                view = view if view is not None else state.view
                source_crs = source_crs if source_crs is not None else state.source
                target_crs = target_crs if target_crs is not None else state.target
            if view is None or source_crs is None or target_crs is None:
                raise ConverterStateError('view, source and target projection are required')

            rebuild = state is None or source_crs is not state.source or target_crs is not state.target
            if not rebuild and view == state.view:
                return False

            if rebuild:
                geo_to_proj, proj_to_geo = self._build_transformers(source_crs, target_crs)
            else:
                geo_to_proj, proj_to_geo = state.geo_to_proj, state.proj_to_geo

            forward = self._viewport_affine(view, geo_to_proj, target_crs)
            try:
                inverse = ~forward
            except TransformNotInvertibleError as exc:
                raise TransformationError(f'viewport affine is not invertible for {view}') from exc

            self._version += 1
            self._state = _ConverterState(view, source_crs, target_crs, geo_to_proj, proj_to_geo,
                                          forward, inverse, self._version)
            return True

    def _require_state(self) -> _ConverterState:
        state = self._state
        if state is None:
            raise ConverterStateError('converter has no projection configured')
        return state

    @property
    def is_configured(self) -> bool:
        with self._lock:
            return self._state is not None

    @property
    def version(self) -> int:
        with self._lock:
            return self._version

    @property
    def view(self) -> ProjectionView:
        with self._lock:
            return self._require_state().view

    @property
    def source(self) -> CRS:
        with self._lock:
            return self._require_state().source

    @property
    def target(self) -> CRS:
        with self._lock:
            return self._require_state().target

    @property
    def geotransform(self) -> Tuple[float, float, float, float, float, float]:
        with self._lock:
            return self._require_state().forward.to_gdal()

    # ── point conversions ────────────────────────────────────────────────────

    def to_projected(self, x: float, y: float) -> Tuple[float, float]:
        with self._lock:
            return self._require_state().forward * (x, y)

    @staticmethod
    def _pixel(state: _ConverterState, px: float, py: float) -> Tuple[int, int]:
        x, y = state.inverse * (px, py)
        return int(x), int(y)

    def from_projected(self, px: float, py: float) -> Tuple[int, int]:
        with self._lock:
            return self._pixel(self._require_state(), px, py)

    def to_latlon(self, x: float, y: float) -> Tuple[Tuple[float, float], bool]:
        with self._lock:
            state = self._require_state()
            px, py = state.forward * (x, y)
            geo = _apply(state.proj_to_geo, px, py)
            if geo is None:
                return (py, px), False
            lon, lat = geo
            return (lat, lon), True

    def from_latlon(self, lat: float, lon: float) -> Tuple[Tuple[int, int], bool]:
        with self._lock:
            state = self._require_state()
            projected = _apply(state.geo_to_proj, lon, lat)
            ok = projected is not None
            px, py = projected if ok else (lon, lat)
            return self._pixel(state, px, py), ok

    # ── shape conversion ─────────────────────────────────────────────────────

    def _convert_box(self, state: _ConverterState, box: Envelope, token: CancellationToken) -> Envelope:
        corners = []
        for corner in (box.bottom_right, box.top_left):
            if token.cancelled:
                return box
            projected = _apply(state.geo_to_proj, corner.x, corner.y)
            if projected is None:
                return box
            corners.append(Point(*self._pixel(state, *projected)))
        bottom_right, top_left = corners
        return box.with_corners(top_left, bottom_right, True)

    def transform_points(self, shapes: Sequence[ShapeContainer],
                         token: Optional[CancellationToken] = None) -> List[ShapeContainer]:
        """Project geodetic shapes into pixel space.

        Points that fail to project are dropped. A bounding box is converted
        only when both corners project, otherwise it is left as it was. The
        loop stops once the passed token or the converter's own (`interrupt`)
        is cancelled, and the returned list is then partial.
        """
        token = LinkedToken(self._token, token)
        converted: List[ShapeContainer] = []
        with self._lock:
            state = self._require_state()
            for shape in shapes:
                if token.cancelled:
                    break
                points = []
                skipped = 0
                for p in shape.points:
                    if token.cancelled:
                        break
                    projected = _apply(state.geo_to_proj, p.x, p.y)
                    if projected is None:
                        skipped += 1
                        continue
                    points.append(Point(*self._pixel(state, *projected)))
                if skipped:
                    logger.debug('%i points that could not be converted were skipped', skipped)
                box = self._convert_box(state, shape.bounding_box, token)
                converted.append(ShapeContainer(shape.type, points, box, projected=True))
        return converted

    @property
    def token(self) -> CancellationToken:
        return self._token

    def interrupt(self) -> None:
        self._token.cancel()
