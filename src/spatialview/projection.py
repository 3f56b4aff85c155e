"""
projection.py

Registry of the coordinate reference systems the map view can display.

The registry is an explicitly constructed, immutable object handed to each
`Converter`. `default_registry()` offers a lazily built shared instance for
callers that do not manage their own; its construction is guarded so that
concurrent first calls still build exactly one.
"""
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Tuple, Union
import logging
import threading

from pyproj import CRS
from pyproj.exceptions import CRSError

from spatialview.config import PROJECTION_WKT
from spatialview.errors import UnsupportedProjectionError

logger = logging.getLogger(__name__)


class ProjectionKind(Enum):
    GEODETIC = 'GEODETIC'
    MERCATOR = 'MERCATOR'
    EQUIRECTANGULAR = 'EQUIRECTANGULAR'
    ROBINSON = 'ROBINSON'
    BONNE = 'BONNE'


def _coerce_kind(kind: Union['ProjectionKind', str]) -> ProjectionKind:
    if isinstance(kind, ProjectionKind):
        return kind
    if isinstance(kind, str):
        try:
            return ProjectionKind(kind.upper())
        except ValueError:
            pass
    raise UnsupportedProjectionError(f'Specified projection type is unsupported: {kind!r}')


class ProjectionRegistry:
    """Five fixed CRS definitions built from well-known text."""

    def __init__(self, definitions: Optional[Mapping[str, str]] = None):
        definitions = definitions if definitions is not None else PROJECTION_WKT
        crs = {}
        for kind in ProjectionKind:
            wkt = definitions[kind.name]
            try:
                crs[kind] = CRS.from_wkt(wkt)
            except CRSError as exc:
                logger.error('pyproj error: cannot build %s from WKT: %s', kind.name, exc)
                raise
        self._crs = MappingProxyType(crs)

    def get_projection(self, kind: Union[ProjectionKind, str]) -> CRS:
        kind = _coerce_kind(kind)
        try:
            return self._crs[kind]
        except KeyError:
            raise UnsupportedProjectionError(f'Specified projection type is unsupported: {kind!r}') from None

    def kinds(self) -> Tuple[ProjectionKind, ...]:
        return tuple(self._crs)

    def __contains__(self, kind) -> bool:
        try:
            return _coerce_kind(kind) in self._crs
        except UnsupportedProjectionError:
            return False


_default: Optional[ProjectionRegistry] = None
_default_lock = threading.Lock()


def default_registry() -> ProjectionRegistry:
    global _default
    registry = _default
    if registry is None:
        with _default_lock:
            if _default is None:
                _default = ProjectionRegistry()
            registry = _default
    return registry
