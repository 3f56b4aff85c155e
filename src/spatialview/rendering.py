"""
rendering.py

Boundary with the 2-D drawing surface.

`paint_shapes` decides which pixel-space shapes are drawn and how (closed and
optionally filled polygons, stroked lines and rings, constant-size point
markers). The surface itself only has to offer the small subset of the
pycairo `Context` API described by `DrawingSurface`, so a cairo context can
be passed straight in. `PillowSurface` implements the same subset over a
Pillow image for headless rendering and previews.
"""
from typing import List, Optional, Protocol, Sequence, Tuple
import logging

from affine import Affine
from PIL import Image, ImageDraw

from spatialview.cancel import CancellationToken
from spatialview.config import RENDERING
from spatialview.primitives import Envelope
from spatialview.shapes import ShapeContainer, ShapeType, shape_description

logger = logging.getLogger(__name__)

ClipRect = Tuple[float, float, float, float]


class DrawingSurface(Protocol):
    def save(self) -> None: ...
    def restore(self) -> None: ...
    def set_line_width(self, width: float) -> None: ...
    def set_source_rgba(self, red: float, green: float, blue: float, alpha: float = 1.0) -> None: ...
    def new_path(self) -> None: ...
    def move_to(self, x: float, y: float) -> None: ...
    def line_to(self, x: float, y: float) -> None: ...
    def close_path(self) -> None: ...
    def rectangle(self, x: float, y: float, width: float, height: float) -> None: ...
    def translate(self, tx: float, ty: float) -> None: ...
    def scale(self, sx: float, sy: float) -> None: ...
    def fill(self) -> None: ...
    def fill_preserve(self) -> None: ...
    def stroke(self) -> None: ...


def _outside(box: Envelope, clip_area: ClipRect) -> bool:
    if not box.converted:
        return False
    cx, cy, cw, ch = clip_area
    low_y = min(box.top_left.y, box.bottom_right.y)
    high_y = max(box.top_left.y, box.bottom_right.y)
    return box.bottom_right.x < cx or box.top_left.x > cx + cw or high_y < cy or low_y > cy + ch


def _trace(surface: DrawingSurface, shape: ShapeContainer) -> None:
    first = shape.points[0]
    surface.new_path()
    surface.move_to(first.x, first.y)
    for p in shape.points[1:]:
        surface.line_to(p.x, p.y)


def paint_shapes(surface: DrawingSurface, shapes: Sequence[ShapeContainer], scale: float,
                 clip_area: Optional[ClipRect] = None, fill_polygons: bool = False,
                 token: Optional[CancellationToken] = None) -> None:
    if scale <= 0:
        raise ValueError(f'scale must be positive, got {scale}')
    marker = RENDERING['marker_size']
    for shape in shapes:
        if token is not None and token.cancelled:
            break
        if not shape.points:
            logger.error('%s is empty', shape_description(shape.type))
            continue
        if clip_area is not None and _outside(shape.bounding_box, clip_area):
            continue

        if shape.type is ShapeType.POLYGON:
            _trace(surface, shape)
            surface.close_path()
            if fill_polygons:
                surface.fill_preserve()
            surface.stroke()
        elif shape.type is ShapeType.LINE_STRING:
            _trace(surface, shape)
            surface.stroke()
        elif shape.type is ShapeType.LINEAR_RING:
            _trace(surface, shape)
            surface.close_path()
            surface.stroke()
        elif shape.type is ShapeType.POINT:
            # marker stays the same on-screen size whatever the zoom
            p = shape.points[0]
            surface.save()
            surface.translate(p.x, p.y)
            surface.scale(1.0 / scale, 1.0 / scale)
            surface.new_path()
            surface.rectangle(-marker / 2.0, -marker / 2.0, marker, marker)
            surface.fill()
            surface.restore()
        else:
            logger.debug('Unknown type %s', shape.type)


def _rgba255(color: Sequence[float]) -> Tuple[int, int, int, int]:
    r, g, b = color[:3]
    a = color[3] if len(color) > 3 else 1.0
    return tuple(int(round(max(0.0, min(1.0, c)) * 255)) for c in (r, g, b, a))


class PillowSurface:
    """Raster `DrawingSurface` backed by a Pillow RGBA image.

    Paths are kept in device coordinates; the current transform is an
    `affine.Affine` applied as points are added.
    """

    def __init__(self, width: int, height: int, background: Sequence[float] = (1.0, 1.0, 1.0, 1.0)):
        self._image = Image.new('RGBA', (int(width), int(height)), _rgba255(background))
        self._draw = ImageDraw.Draw(self._image)
        self._ctm = Affine.identity()
        self._color = _rgba255(RENDERING['default_color'])
        self._line_width = 1.0
        self._stack: List[Tuple[Affine, Tuple[int, int, int, int], float]] = []
        self._subpaths: List[List] = []

    @property
    def image(self) -> Image.Image:
        return self._image

    def save(self) -> None:
        self._stack.append((self._ctm, self._color, self._line_width))

    def restore(self) -> None:
        self._ctm, self._color, self._line_width = self._stack.pop()

    def set_line_width(self, width: float) -> None:
        self._line_width = float(width)

    def set_source_rgba(self, red: float, green: float, blue: float, alpha: float = 1.0) -> None:
        self._color = _rgba255((red, green, blue, alpha))

    def translate(self, tx: float, ty: float) -> None:
        self._ctm = self._ctm * Affine.translation(tx, ty)

    def scale(self, sx: float, sy: float) -> None:
        self._ctm = self._ctm * Affine.scale(sx, sy)

    def new_path(self) -> None:
        self._subpaths = []

    def move_to(self, x: float, y: float) -> None:
        self._subpaths.append([[self._ctm * (x, y)], False])

    def line_to(self, x: float, y: float) -> None:
        if not self._subpaths:
            self.move_to(x, y)
            return
        self._subpaths[-1][0].append(self._ctm * (x, y))

    def close_path(self) -> None:
        if self._subpaths:
            self._subpaths[-1][1] = True

    def rectangle(self, x: float, y: float, width: float, height: float) -> None:
        corners = [(x, y), (x + width, y), (x + width, y + height), (x, y + height)]
        self._subpaths.append([[self._ctm * c for c in corners], True])

    def fill_preserve(self) -> None:
        for points, _closed in self._subpaths:
            if len(points) >= 3:
                self._draw.polygon(points, fill=self._color)

    def fill(self) -> None:
        self.fill_preserve()
        self.new_path()

    def stroke(self) -> None:
        width = max(1, int(round(self._line_width * abs(self._ctm.determinant) ** 0.5)))
        for points, closed in self._subpaths:
            if closed and len(points) > 1:
                points = points + [points[0]]
            if len(points) >= 2:
                self._draw.line(points, fill=self._color, width=width)
            elif points:
                self._draw.point(points, fill=self._color)
        self.new_path()
