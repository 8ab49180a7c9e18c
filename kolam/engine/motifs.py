"""Curve templates shared by the style generators.

Templates are built around the origin and placed with ``placed``.
"""

from __future__ import annotations

import math
from typing import Callable

from kolam.svg.primitives import CubicBezier, Line, Path, Point, QuadraticBezier, build_path

# Cubic handle length that approximates a quarter circle.
KAPPA = 0.5522847498

LOOP_VARIANTS = ("diamond", "loop", "circle", "star")


def _lerp(a: Point, b: Point, t: float) -> Point:
    return Point(a.x + (b.x - a.x) * t, a.y + (b.y - a.y) * t)


def loop_around(center: Point, radius: float, variant: str) -> Path:
    """Closed loop through the four points ``radius`` away from ``center``
    along the axes (east, south, west, north). Every variant has the full
    symmetry of the square about ``center``."""
    east = Point(center.x + radius, center.y)
    south = Point(center.x, center.y + radius)
    west = Point(center.x - radius, center.y)
    north = Point(center.x, center.y - radius)
    ring = [east, south, west, north, east]

    segments = []
    for a, b in zip(ring, ring[1:]):
        # Outer corner between two consecutive axis points
        corner = a + b - center
        if variant == "diamond":
            segments.append(Line(a, b))
        elif variant == "loop":
            segments.append(QuadraticBezier(a, corner, b))
        elif variant == "circle":
            segments.append(CubicBezier(a, _lerp(a, corner, KAPPA), _lerp(b, corner, KAPPA), b))
        elif variant == "star":
            segments.append(CubicBezier(a, _lerp(a, center, 0.55), _lerp(b, center, 0.55), b))
        else:
            raise ValueError(f"Unknown loop variant: {variant!r}")
    return build_path(segments, closed=True)


def leaf(size: float) -> Path:
    """Open leaf-with-stem stroke along +x, spanning [-size, size]."""
    stem_start = Point(-size, 0.0)
    base = Point(-size / 2, 0.0)
    tip = Point(size, 0.0)
    return build_path([
        Line(stem_start, base),
        CubicBezier(base, Point(-size / 4, -size * 0.7), Point(size / 2, -size * 0.6), tip),
        CubicBezier(tip, Point(size / 3, size * 0.25), Point(-size / 4, size * 0.35), base),
    ])


def _clean(value: float) -> float:
    # cos(90°) is 6e-17 in floats; snap such noise to exact values
    return round(value, 15) + 0.0


def placement(angle_deg: float, offset: Point) -> Callable[[Point], Point]:
    """Point map: rotate about the origin by ``angle_deg``, then move to ``offset``."""
    theta = math.radians(angle_deg)
    c, s = _clean(math.cos(theta)), _clean(math.sin(theta))

    def fn(p: Point) -> Point:
        return Point(offset.x + c * p.x - s * p.y, offset.y + s * p.x + c * p.y)

    return fn


def placed(path: Path, angle_deg: float, offset: Point) -> Path:
    return path.transformed(placement(angle_deg, offset))
