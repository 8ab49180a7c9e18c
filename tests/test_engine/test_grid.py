"""Tests for the dot grid."""

import math

import pytest

from kolam.engine.grid import dot_at, make_grid
from kolam.errors import InvalidDimension, OutOfRange
from kolam.svg.primitives import Point


def test_grid_extent():
    grid = make_grid(3, 4, 10)
    assert grid.width == 30.0
    assert grid.height == 20.0
    assert grid.center == Point(15.0, 10.0)
    assert grid.dot_count == 12


def test_bounds_pad_half_spacing():
    lo, hi = make_grid(2, 2, 10.0).bounds
    assert lo == Point(-5.0, -5.0)
    assert hi == Point(15.0, 15.0)


def test_dots_row_major():
    dots = list(make_grid(2, 3, 5.0).dots())
    assert len(dots) == 6
    assert dots[0] == (0, 0, Point(0.0, 0.0))
    assert dots[2] == (0, 2, Point(10.0, 0.0))
    assert dots[3] == (1, 0, Point(0.0, 5.0))


def test_dot_at():
    grid = make_grid(3, 4, 10.0)
    assert dot_at(grid, 2, 3) == Point(30.0, 20.0)
    assert dot_at(grid, 0, 0) == Point(0.0, 0.0)


@pytest.mark.parametrize("r, c", [(3, 0), (0, 4), (-1, 0), (0, -1)])
def test_dot_at_out_of_range(r, c):
    with pytest.raises(OutOfRange):
        dot_at(make_grid(3, 4, 10.0), r, c)


def test_single_cell():
    grid = make_grid(1, 1, 8.0)
    assert not grid.is_multi_cell
    assert grid.width == 0.0
    assert make_grid(1, 2, 8.0).is_multi_cell


@pytest.mark.parametrize(
    "rows, cols, spacing",
    [
        (0, 3, 10.0),
        (3, 0, 10.0),
        (-2, 3, 10.0),
        (3, 3, 0.0),
        (3, 3, -1.0),
        (3, 3, math.nan),
        (3, 3, math.inf),
        (2.5, 3, 10.0),
        (True, 3, 10.0),
        (3, 3, "wide"),
    ],
)
def test_invalid_dimensions(rows, cols, spacing):
    with pytest.raises(InvalidDimension):
        make_grid(rows, cols, spacing)
