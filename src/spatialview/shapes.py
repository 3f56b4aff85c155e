"""
shapes.py

Decomposed simple shapes and their hit tests.

Public API:
- `ShapeType` enum and `shape_description(shape_type)`
- `distance_to_segment(start, end, p)`
- `ShapeContainer` with `within(p)`

"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Sequence
import math

from spatialview.config import HIT_TEST
from spatialview.primitives import Envelope, Point


class ShapeType(Enum):
    POINT = 'Point'
    LINE_STRING = 'LineString'
    LINEAR_RING = 'LinearRing'
    POLYGON = 'Polygon'
    UNKNOWN = 'Unknown'


def shape_description(shape_type: ShapeType) -> str:
    if shape_type is ShapeType.UNKNOWN or not isinstance(shape_type, ShapeType):
        return 'Unknown shape type'
    return shape_type.value


def distance_to_segment(start: Point, end: Point, p: Point) -> float:
    """Euclidean distance from `p` to the closed segment ``start -> end``.

    A zero-length segment degenerates to the point-to-point distance.
    """
    dx = end.x - start.x
    dy = end.y - start.y
    if dx == 0 and dy == 0:
        return math.hypot(p.x - start.x, p.y - start.y)

    t = ((p.x - start.x) * dx + (p.y - start.y) * dy) / (dx * dx + dy * dy)
    if t > 1:
        cx, cy = end.x, end.y
    elif t < 0:
        cx, cy = start.x, start.y
    else:
        cx, cy = start.x + t * dx, start.y + t * dy
    return math.hypot(p.x - cx, p.y - cy)


def _within_line(points: Sequence[Point], p: Point) -> bool:
    tolerance = HIT_TEST['line_tolerance']
    for i in range(1, len(points)):
        if distance_to_segment(points[i - 1], points[i], p) <= tolerance:
            return True
    return False


@dataclass
class ShapeContainer:
    """One simple shape extracted from a (possibly compound) geometry.

    `projected` marks points already expressed in pixel space; the bounding
    box is only trusted for containment when it lives in the same space.
    """

    type: ShapeType
    points: List[Point] = field(default_factory=list)
    bounding_box: Envelope = field(default_factory=Envelope)
    projected: bool = False

    @classmethod
    def from_points(cls, shape_type: ShapeType, points: Sequence[Point], projected: bool = False) -> 'ShapeContainer':
        pts = list(points)
        if not pts:
            return cls(shape_type, pts, Envelope(), projected)
        xs = [pt.x for pt in pts]
        ys = [pt.y for pt in pts]
        box = Envelope.from_minmax(min(xs), min(ys), max(xs), max(ys))
        if projected:
            box = box.with_corners(box.top_left, box.bottom_right, True)
        return cls(shape_type, pts, box, projected)

    def within(self, p: Point) -> bool:
        if not self.points:
            return False
        if self.type is ShapeType.POINT:
            return self._within_point(p)
        if self.type is ShapeType.LINE_STRING:
            return _within_line(self.points, p)
        if self.type is ShapeType.LINEAR_RING:
            return _within_line(self.points + [self.points[0]], p)
        if self.type is ShapeType.POLYGON:
            return self._within_polygon(p)
        return False

    def _within_point(self, p: Point) -> bool:
        first = self.points[0]
        return math.hypot(p.x - first.x, p.y - first.y) < HIT_TEST['point_tolerance']

    def _box_rejects(self, p: Point) -> bool:
        box = self.bounding_box
        if not box.is_init() or box.converted != self.projected:
            return False
        low_y = min(box.top_left.y, box.bottom_right.y)
        high_y = max(box.top_left.y, box.bottom_right.y)
        return not (box.top_left.x <= p.x <= box.bottom_right.x and low_y <= p.y <= high_y)

    def _within_polygon(self, p: Point) -> bool:
        if self._box_rejects(p):
            return False

        # even-odd crossing test; yi != yj whenever the division runs
        inside = False
        pts = self.points
        j = len(pts) - 1
        for i in range(len(pts)):
            xi, yi = pts[i].x, pts[i].y
            xj, yj = pts[j].x, pts[j].y
            if (yi > p.y) != (yj > p.y) and p.x < (xj - xi) * (p.y - yi) / (yj - yi) + xi:
                inside = not inside
            j = i
        return inside
