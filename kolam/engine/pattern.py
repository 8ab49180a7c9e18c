"""Pattern entities and the derived artifacts computed from them.

A Pattern owns its grid and paths and is immutable. Symmetry reports,
decompositions and step sequences are pure functions of a Pattern and are
recomputed on demand, never stored as authoritative state.
"""

from __future__ import annotations

import enum
import hashlib
from dataclasses import dataclass, field, replace
from typing import NamedTuple

import numpy as np
from numpy.typing import NDArray

from kolam.errors import OutOfRange
from kolam.engine.grid import GridSpec
from kolam.svg.primitives import Path, Point, Segment
from kolam.utils.geometry import reflect_points, rotate_points, scale_points, translate_points


class PatternStyle(str, enum.Enum):
    SIKKU = "sikku"  # continuous line
    PULLI = "pulli"  # dot grid
    KAMBI = "kambi"  # freehand motif
    PADI = "padi"  # concentric layers


class SegmentRef(NamedTuple):
    path: int
    index: int


@dataclass(frozen=True)
class Pattern:
    id: str
    grid: GridSpec
    paths: tuple[Path, ...]
    style: PatternStyle

    def segment_refs(self) -> list[SegmentRef]:
        return [SegmentRef(p, i) for p, path in enumerate(self.paths) for i in range(len(path.segments))]

    def segment(self, ref: SegmentRef) -> Segment:
        try:
            return self.paths[ref.path].segments[ref.index]
        except IndexError as e:
            raise OutOfRange(f"No segment {tuple(ref)} in pattern {self.id}") from e

    @property
    def segment_count(self) -> int:
        return sum(len(p.segments) for p in self.paths)


def content_id(style: PatternStyle, grid: GridSpec, paths: tuple[Path, ...]) -> str:
    """Stable identifier derived from a pattern's geometry."""
    digest = hashlib.sha1(repr((style.value, grid, paths)).encode()).hexdigest()
    return f"{style.value}-{digest[:12]}"


def make_pattern(
    grid: GridSpec,
    paths: tuple[Path, ...] | list[Path],
    style: PatternStyle,
    pattern_id: str | None = None,
) -> Pattern:
    paths = tuple(paths)
    return Pattern(
        id=pattern_id or content_id(style, grid, paths),
        grid=grid,
        paths=paths,
        style=PatternStyle(style),
    )


@dataclass(frozen=True)
class Translation:
    dx: float
    dy: float


@dataclass(frozen=True)
class SymmetryReport:
    rotational_order: int
    reflection_axes: tuple[float, ...]
    translational: Translation | None = None

    @property
    def symmetry_group(self) -> str:
        """Point group name: C_n (rotations only) or D_n (with mirrors)."""
        if self.reflection_axes:
            return f"D{self.rotational_order}"
        return f"C{self.rotational_order}"


class TransformKind(str, enum.Enum):
    # Declaration order is the tie-break preference.
    ROTATION = "rotation"
    REFLECTION = "reflection"
    TRANSLATION = "translation"
    SCALE = "scale"

    @property
    def preference(self) -> int:
        return list(TransformKind).index(self)


@dataclass(frozen=True)
class Transform:
    kind: TransformKind
    center: Point = Point(0.0, 0.0)
    angle: float = 0.0  # rotation, degrees
    axis: float = 0.0  # reflection axis, degrees in [0, 180)
    dx: float = 0.0
    dy: float = 0.0
    factor: float = 1.0  # scale

    def apply_array(self, points: NDArray[np.float64]) -> NDArray[np.float64]:
        c = (self.center.x, self.center.y)
        if self.kind is TransformKind.ROTATION:
            return rotate_points(points, self.angle, c)
        if self.kind is TransformKind.REFLECTION:
            return reflect_points(points, self.axis, c)
        if self.kind is TransformKind.TRANSLATION:
            return translate_points(points, self.dx, self.dy)
        return scale_points(points, self.factor, c)

    def inverse(self) -> Transform:
        if self.kind is TransformKind.ROTATION:
            return replace(self, angle=-self.angle)
        if self.kind is TransformKind.TRANSLATION:
            return replace(self, dx=-self.dx, dy=-self.dy)
        if self.kind is TransformKind.SCALE:
            return replace(self, factor=1.0 / self.factor)
        return self

    def describe(self) -> str:
        cx, cy = round(self.center.x, 3), round(self.center.y, 3)
        if self.kind is TransformKind.ROTATION:
            return f"rotation {self.angle:g}° about ({cx:g}, {cy:g})"
        if self.kind is TransformKind.REFLECTION:
            return f"reflection across {self.axis:g}° axis through ({cx:g}, {cy:g})"
        if self.kind is TransformKind.TRANSLATION:
            return f"translation by ({self.dx:g}, {self.dy:g})"
        return f"scale ×{self.factor:g} about ({cx:g}, {cy:g})"


@dataclass(frozen=True)
class Placement:
    """Segment ``target`` is ``transforms[transform]`` applied to ``source``
    (or its inverse when ``inverse`` is set)."""

    target: SegmentRef
    source: SegmentRef
    transform: int
    inverse: bool = False


@dataclass(frozen=True)
class Decomposition:
    motif: tuple[SegmentRef, ...]
    transforms: tuple[Transform, ...]
    placements: tuple[Placement, ...] = ()


@dataclass(frozen=True)
class Analysis:
    symmetry: SymmetryReport
    decomposition: Decomposition
    centroid: Point
    math_concepts: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ConstructionStep:
    index: int
    segment_refs: frozenset[SegmentRef]
    description: str
