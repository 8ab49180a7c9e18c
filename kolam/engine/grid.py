"""Dot lattice that patterns are built on or analyzed against."""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass

from kolam.errors import InvalidDimension, OutOfRange
from kolam.svg.primitives import Point


@dataclass(frozen=True)
class GridSpec:
    rows: int
    cols: int
    spacing: float

    @property
    def width(self) -> float:
        """Horizontal extent of the dots."""
        return (self.cols - 1) * self.spacing

    @property
    def height(self) -> float:
        return (self.rows - 1) * self.spacing

    @property
    def center(self) -> Point:
        return Point(self.width / 2, self.height / 2)

    @property
    def bounds(self) -> tuple[Point, Point]:
        """Area a pattern may occupy: the dot extent padded by half a spacing."""
        pad = self.spacing / 2
        return Point(-pad, -pad), Point(self.width + pad, self.height + pad)

    @property
    def is_multi_cell(self) -> bool:
        return self.rows > 1 or self.cols > 1

    @property
    def dot_count(self) -> int:
        return self.rows * self.cols

    def dots(self) -> Iterator[tuple[int, int, Point]]:
        """Yield (row, col, point) in row-major order."""
        for r in range(self.rows):
            for c in range(self.cols):
                yield r, c, Point(c * self.spacing, r * self.spacing)


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def make_grid(rows: int, cols: int, spacing: float) -> GridSpec:
    """Validated GridSpec constructor."""
    if not _is_int(rows) or not _is_int(cols):
        raise InvalidDimension(f"rows and cols must be integers, got {rows!r} x {cols!r}")
    if rows < 1 or cols < 1:
        raise InvalidDimension(f"Grid must be at least 1x1, got {rows}x{cols}")
    try:
        spacing = float(spacing)
    except (TypeError, ValueError) as e:
        raise InvalidDimension(f"spacing must be a number, got {spacing!r}") from e
    if not math.isfinite(spacing) or spacing <= 0:
        raise InvalidDimension(f"spacing must be positive, got {spacing}")
    return GridSpec(rows=rows, cols=cols, spacing=spacing)


def dot_at(grid: GridSpec, r: int, c: int) -> Point:
    """Coordinates of the dot at row ``r``, column ``c``."""
    if not 0 <= r < grid.rows or not 0 <= c < grid.cols:
        raise OutOfRange(f"Dot ({r}, {c}) outside {grid.rows}x{grid.cols} grid")
    return Point(c * grid.spacing, r * grid.spacing)
