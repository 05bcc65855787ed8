import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

import numpy as np

from spline_sim.domain.errors import InvalidPathError


# Core geometry types used by mechanics
@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def __iter__(self):
        yield self.x
        yield self.y

    def __getitem__(self, i: int) -> float:
        return (self.x, self.y)[i]

    def dist(self, other: "Point") -> float:
        return math.hypot(other.x - self.x, other.y - self.y)


Pt = Point | tuple[float, float]


def to_point(p: Pt) -> Point:
    return p if isinstance(p, Point) else Point(float(p[0]), float(p[1]))


@dataclass(frozen=True)
class Bounds:
    x_min: float
    x_max: float
    y_min: float
    y_max: float

    @property
    def width(self) -> float:
        return self.x_max - self.x_min

    @property
    def height(self) -> float:
        return self.y_max - self.y_min

    def contains(self, p: Pt) -> bool:
        x, y = p[0], p[1]
        return self.x_min <= x <= self.x_max and self.y_min <= y <= self.y_max


@dataclass(frozen=True)
class TangentPair:
    control_in: Point
    control_out: Point


@dataclass(frozen=True)
class Path:
    """Ordered anchors plus loop flag; replaced wholesale, never edited."""

    anchors: tuple[Point, ...]
    loop: bool = False

    def __post_init__(self):
        anchors = tuple(to_point(a) for a in self.anchors)
        if len(set(anchors)) != len(anchors):
            raise InvalidPathError("anchors must have distinct coordinates")
        object.__setattr__(self, "anchors", anchors)

    @classmethod
    def of(cls, anchors: Iterable[Pt], loop: bool = False) -> "Path":
        return cls(tuple(to_point(a) for a in anchors), loop)

    def __len__(self) -> int:
        return len(self.anchors)

    def with_loop(self, loop: bool) -> "Path":
        return Path(self.anchors, loop)


class Polyline:
    """
    Dense sampled curve. Points are held in a read-only (M, 2) float array;
    when `loop` is set the traversal wraps from the last sample to the first.
    """

    __slots__ = ("points", "loop")

    def __init__(self, points: np.ndarray | Sequence[Pt], loop: bool = False):
        arr = np.array(points, dtype=float).reshape(-1, 2)
        arr.setflags(write=False)
        self.points = arr
        self.loop = bool(loop)

    def __len__(self) -> int:
        return self.points.shape[0]

    def __eq__(self, other) -> bool:
        if not isinstance(other, Polyline):
            return NotImplemented
        return self.loop == other.loop and np.array_equal(self.points, other.points)

    def __repr__(self) -> str:
        return f"Polyline(n={len(self)}, loop={self.loop})"

    def point(self, i: int) -> Point:
        x, y = self.points[i]
        return Point(float(x), float(y))

    @property
    def first(self) -> Point:
        return self.point(0)

    @property
    def last(self) -> Point:
        return self.point(-1)

    def segment_lengths(self) -> np.ndarray:
        pts = self.points
        if self.loop and len(pts) > 1:
            pts = np.vstack([pts, pts[:1]])
        return np.hypot(*np.diff(pts, axis=0).T)

    @property
    def length(self) -> float:
        return float(self.segment_lengths().sum())
