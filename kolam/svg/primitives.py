"""Geometric primitives: points, line/Bézier segments and continuous paths.

Segments carry explicit endpoints, there is no implicit "current point".
All types are immutable; editing operations return new objects.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Callable, Iterable, Union

import numpy as np
import svgpathtools
from numpy.typing import NDArray

from kolam.errors import AlreadyClosed, DiscontinuityError, EmptyPath, OutOfRange

# Endpoints closer than this are the same point. Rotating grid points by
# multiples of 45 degrees leaves ~1e-13 of float noise.
CONTINUITY_TOL = 1e-9


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def __add__(self, other: Point) -> Point:
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Point) -> Point:
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, k: float) -> Point:
        return Point(self.x * k, self.y * k)

    __rmul__ = __mul__

    def distance_to(self, other: Point) -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def is_close(self, other: Point, tol: float = CONTINUITY_TOL) -> bool:
        return self.distance_to(other) <= tol

    def as_complex(self) -> complex:
        return complex(self.x, self.y)

    @classmethod
    def from_complex(cls, z: complex) -> Point:
        return cls(float(z.real), float(z.imag))


@dataclass(frozen=True)
class Line:
    start: Point
    end: Point

    kind = "line"

    @property
    def points(self) -> tuple[Point, ...]:
        return (self.start, self.end)

    def reversed(self) -> Line:
        return Line(self.end, self.start)

    def transformed(self, fn: Callable[[Point], Point]) -> Line:
        return Line(fn(self.start), fn(self.end))


@dataclass(frozen=True)
class QuadraticBezier:
    start: Point
    control: Point
    end: Point

    kind = "quadratic"

    @property
    def points(self) -> tuple[Point, ...]:
        return (self.start, self.control, self.end)

    def reversed(self) -> QuadraticBezier:
        return QuadraticBezier(self.end, self.control, self.start)

    def transformed(self, fn: Callable[[Point], Point]) -> QuadraticBezier:
        return QuadraticBezier(fn(self.start), fn(self.control), fn(self.end))


@dataclass(frozen=True)
class CubicBezier:
    start: Point
    c1: Point
    c2: Point
    end: Point

    kind = "cubic"

    @property
    def points(self) -> tuple[Point, ...]:
        return (self.start, self.c1, self.c2, self.end)

    def reversed(self) -> CubicBezier:
        return CubicBezier(self.end, self.c2, self.c1, self.start)

    def transformed(self, fn: Callable[[Point], Point]) -> CubicBezier:
        return CubicBezier(fn(self.start), fn(self.c1), fn(self.c2), fn(self.end))


Segment = Union[Line, QuadraticBezier, CubicBezier]

SEGMENT_TYPES: dict[str, type] = {
    "line": Line,
    "quadratic": QuadraticBezier,
    "cubic": CubicBezier,
}


def make_segment(kind: str, points: Iterable[Point]) -> Segment:
    """Build a segment from its kind name and control points."""
    cls = SEGMENT_TYPES.get(kind)
    if cls is None:
        raise ValueError(f"Unknown segment kind: {kind!r}")
    pts = tuple(points)
    expected = {"line": 2, "quadratic": 3, "cubic": 4}[kind]
    if len(pts) != expected:
        raise ValueError(f"{kind} segment needs {expected} points, got {len(pts)}")
    return cls(*pts)


@dataclass(frozen=True)
class Path:
    segments: tuple[Segment, ...] = ()
    closed: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.segments

    @property
    def start(self) -> Point:
        if not self.segments:
            raise EmptyPath("Path has no segments")
        return self.segments[0].start

    @property
    def end(self) -> Point:
        if not self.segments:
            raise EmptyPath("Path has no segments")
        return self.segments[-1].end

    def __len__(self) -> int:
        return len(self.segments)

    def transformed(self, fn: Callable[[Point], Point]) -> Path:
        return Path(tuple(seg.transformed(fn) for seg in self.segments), self.closed)


def append_segment(path: Path, segment: Segment) -> Path:
    """Return a new path with ``segment`` appended.

    The segment must start where the path currently ends.
    """
    if path.closed:
        raise AlreadyClosed("Cannot extend a closed path")
    if path.segments and not segment.start.is_close(path.end):
        raise DiscontinuityError(
            f"Segment starts at ({segment.start.x}, {segment.start.y}) "
            f"but path ends at ({path.end.x}, {path.end.y})"
        )
    return replace(path, segments=path.segments + (segment,))


def close_path(path: Path) -> Path:
    """Mark a path closed, adding a closing line if its ends differ."""
    if path.is_empty:
        raise EmptyPath("Cannot close an empty path")
    if path.closed:
        raise AlreadyClosed("Path is already closed")
    if not path.end.is_close(path.start):
        path = append_segment(path, Line(path.end, path.start))
    return replace(path, closed=True)


def build_path(segments: Iterable[Segment], closed: bool = False) -> Path:
    """Assemble a path segment by segment, enforcing continuity."""
    path = Path()
    for seg in segments:
        path = append_segment(path, seg)
    if closed:
        path = close_path(path)
    return path


def _bernstein(degree: int, t: NDArray[np.float64]) -> NDArray[np.float64]:
    """Bernstein basis matrix, shape (len(t), degree + 1)."""
    return np.stack(
        [math.comb(degree, i) * t**i * (1 - t) ** (degree - i) for i in range(degree + 1)],
        axis=1,
    )


def control_array(segment: Segment) -> NDArray[np.float64]:
    return np.array([(p.x, p.y) for p in segment.points], dtype=np.float64)


def sample(segment: Segment, t: float) -> Point:
    """Evaluate the segment's parametric curve at ``t`` in [0, 1]."""
    if not 0.0 <= t <= 1.0:
        raise OutOfRange(f"Curve parameter {t} outside [0, 1]")
    if t == 0.0:
        return segment.start
    if t == 1.0:
        return segment.end
    xy = _bernstein(len(segment.points) - 1, np.array([t])) @ control_array(segment)
    return Point(float(xy[0, 0]), float(xy[0, 1]))


def sample_many(segment: Segment, n: int) -> NDArray[np.float64]:
    """``n`` uniform parameter samples (endpoints included) as an Nx2 array."""
    if n < 2:
        raise OutOfRange(f"Need at least 2 samples, got {n}")
    t = np.linspace(0.0, 1.0, n)
    return _bernstein(len(segment.points) - 1, t) @ control_array(segment)


def control_polygon_length(segment: Segment) -> float:
    """Upper bound on arc length (length of the control polygon)."""
    pts = segment.points
    return sum(a.distance_to(b) for a, b in zip(pts, pts[1:]))


def to_svgpathtools(segment: Segment):
    """Convert to the equivalent svgpathtools segment."""
    pts = [p.as_complex() for p in segment.points]
    if isinstance(segment, Line):
        return svgpathtools.Line(*pts)
    if isinstance(segment, QuadraticBezier):
        return svgpathtools.QuadraticBezier(*pts)
    return svgpathtools.CubicBezier(*pts)


def bounding_box(path: Path) -> tuple[Point, Point]:
    """Exact (min, max) corners of the path, curve extrema included."""
    if path.is_empty:
        raise EmptyPath("Bounding box of an empty path")
    xmin, xmax, ymin, ymax = svgpathtools.Path(*(to_svgpathtools(s) for s in path.segments)).bbox()
    return Point(float(xmin), float(ymin)), Point(float(xmax), float(ymax))
