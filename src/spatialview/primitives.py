"""
primitives.py

Value types shared by every stage of the pipeline: a 2-D `Point`, the
axis-aligned `Envelope` and the `ProjectionView` describing which extent is
mapped onto the pixel viewport.

Envelopes follow the map convention: `top_left.y` holds the *greater* y
(northern edge) while the box is in geodetic or projected space. Once a box is
converted to pixels (`converted=True`) the y axis points down and the
relation flips.
"""
from dataclasses import dataclass, field, replace

from spatialview.config import ENVELOPE_SENTINEL


@dataclass(frozen=True)
class Point:
    x: float
    y: float


def _sentinel_top_left() -> Point:
    return Point(ENVELOPE_SENTINEL['left'], ENVELOPE_SENTINEL['top'])


def _sentinel_bottom_right() -> Point:
    return Point(ENVELOPE_SENTINEL['right'], ENVELOPE_SENTINEL['bottom'])


@dataclass(frozen=True, eq=False)
class Envelope:
    """Bounding box with an "uninitialized" sentinel default.

    Equality compares the corners only; `converted` is metadata.
    """

    top_left: Point = field(default_factory=_sentinel_top_left)
    bottom_right: Point = field(default_factory=_sentinel_bottom_right)
    converted: bool = False

    @classmethod
    def from_bounds(cls, left: float, top: float, right: float, bottom: float) -> 'Envelope':
        return cls(Point(left, top), Point(right, bottom))

    @classmethod
    def from_minmax(cls, min_x: float, min_y: float, max_x: float, max_y: float) -> 'Envelope':
        """Remap an engine box (``minx, miny, maxx, maxy``) into corner form."""
        return cls(Point(min_x, max_y), Point(max_x, min_y))

    def is_init(self) -> bool:
        """True once no coordinate still holds its sentinel value."""
        return (self.top_left.x != ENVELOPE_SENTINEL['left']
                and self.top_left.y != ENVELOPE_SENTINEL['top']
                and self.bottom_right.x != ENVELOPE_SENTINEL['right']
                and self.bottom_right.y != ENVELOPE_SENTINEL['bottom'])

    def union(self, other: 'Envelope') -> 'Envelope':
        return extend_envelope(self, other)

    def with_corners(self, top_left: Point, bottom_right: Point, converted: bool) -> 'Envelope':
        return replace(self, top_left=top_left, bottom_right=bottom_right, converted=converted)

    def __eq__(self, other):
        if not isinstance(other, Envelope):
            return NotImplemented
        return self.top_left == other.top_left and self.bottom_right == other.bottom_right

    def __hash__(self):
        return hash((self.top_left, self.bottom_right))


def extend_envelope(env: Envelope, other: Envelope) -> Envelope:
    """Union of two geodetic envelopes; y grows toward `top_left`."""
    return Envelope(
        Point(min(env.top_left.x, other.top_left.x), max(env.top_left.y, other.top_left.y)),
        Point(max(env.bottom_right.x, other.bottom_right.x), min(env.bottom_right.y, other.bottom_right.y)),
        env.converted,
    )


@dataclass(frozen=True)
class ProjectionView:
    """Extent mapped onto a ``width x height`` pixel viewport.

    The ``*_lat`` bounds run along the first (horizontal) transform axis and
    the ``*_lon`` bounds along the second (vertical) one, which is the order
    the coordinate transforms consume them in.
    """

    min_lat: float
    max_lat: float
    min_lon: float
    max_lon: float
    width: int
    height: int

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f'viewport must be non-empty, got {self.width}x{self.height}')
