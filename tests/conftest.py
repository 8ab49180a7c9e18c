"""Shared test fixtures."""

from __future__ import annotations

import pytest

from kolam.engine.grid import make_grid
from kolam.engine.motifs import leaf, loop_around, placed
from kolam.engine.pattern import PatternStyle, make_pattern
from kolam.svg.primitives import CubicBezier, Point, build_path


# External SVGs (no Kolam metadata)

CIRCLE_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" width="24" height="24" viewBox="0 0 24 24" fill="none" stroke="currentColor" stroke-width="2">
  <circle cx="12" cy="12" r="10"/>
</svg>'''

MIXED_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 100 100">
  <polygon points="10,10 90,10 90,90 10,90"/>
  <polyline points="20 50, 50 20, 80 50"/>
  <line x1="50" y1="60" x2="50" y2="80"/>
  <path d='M 10 0 A 10 10 0 0 1 -10 0'/>
</svg>'''

BROKEN_SHAPE_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 100 100">
  <line x1="oops" y1="0" x2="10" y2="10"/>
  <line x1="0" y1="0" x2="10" y2="10"/>
</svg>'''


def _petals():
    """Four mirror-symmetric petals, a quarter turn apart around (50, 50)."""
    base, tip = Point(5.0, 0.0), Point(25.0, 0.0)
    petal = build_path([
        CubicBezier(base, Point(10.0, -8.0), Point(20.0, -6.0), tip),
        CubicBezier(tip, Point(20.0, 6.0), Point(10.0, 8.0), base),
    ], closed=True)
    paths = [placed(petal, k * 90, Point(50.0, 50.0)) for k in range(4)]
    return make_pattern(make_grid(3, 3, 50.0), paths, PatternStyle.KAMBI)


def _pinwheel():
    """Four copies of one chiral leaf, a quarter turn apart around (50, 50)."""
    blade = placed(leaf(20.0), 0, Point(25.0, 0.0))
    paths = [placed(blade, k * 90, Point(50.0, 50.0)) for k in range(4)]
    return make_pattern(make_grid(3, 3, 50.0), paths, PatternStyle.KAMBI)


def _asymmetric():
    paths = [
        placed(leaf(20.0), 0, Point(20.0, 20.0)),
        placed(leaf(30.0), 60, Point(70.0, 60.0)),
    ]
    return make_pattern(make_grid(3, 3, 50.0), paths, PatternStyle.KAMBI)


def _row_of_loops():
    """Identical circles on every dot of a 1x4 grid."""
    grid = make_grid(1, 4, 20.0)
    paths = [loop_around(dot, 10.0, "circle") for _, _, dot in grid.dots()]
    return make_pattern(grid, paths, PatternStyle.PULLI)


@pytest.fixture
def petals_pattern():
    return _petals()


@pytest.fixture
def pinwheel_pattern():
    return _pinwheel()


@pytest.fixture
def asymmetric_pattern():
    return _asymmetric()


@pytest.fixture
def row_of_loops_pattern():
    return _row_of_loops()


@pytest.fixture
def circle_svg() -> str:
    return CIRCLE_SVG


@pytest.fixture
def mixed_svg() -> str:
    return MIXED_SVG
