"""Symmetry analysis over pattern geometry.

Every segment is sampled, the arc-length centroid of the samples becomes
the centre for rotation and reflection tests, and each candidate symmetry is accepted
when the transformed sample set coincides with the original under a
nearest-point (not index) test. Candidates are independent; they may be
evaluated in a thread pool and are merged in candidate order, so the
report does not depend on execution order.
"""

from __future__ import annotations

import logging
import math
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Sequence, TypeVar

import numpy as np
from numpy.typing import NDArray
from scipy.spatial import cKDTree

from kolam.engine.config import EngineConfig
from kolam.errors import AnalysisInconclusive
from kolam.engine.pattern import (
    Analysis,
    Pattern,
    PatternStyle,
    SegmentRef,
    SymmetryReport,
    TransformKind,
    Translation,
)
from kolam.svg.primitives import Point, control_polygon_length, sample_many
from kolam.utils.geometry import (
    arc_length_centroid,
    bbox_diagonal,
    pca_orientation,
    reflect_points,
    rotate_points,
    sets_coincide,
)
from kolam.utils.math_helpers import snap_angle, unique_axes

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Farthest-point ring: at most this many axis candidates from it.
_MAX_RING_AXES = 64


@dataclass
class SampledPattern:
    """Sample points of a pattern plus the derived tolerance and centre."""

    refs: list[SegmentRef]
    # Per-segment samples at the adaptive resolution
    segment_samples: list[NDArray[np.float64]]
    # All samples stacked: Nx2
    points: NDArray[np.float64]
    tolerance: float
    center: tuple[float, float]
    tree: cKDTree

    @property
    def num_points(self) -> int:
        return len(self.points)


def sample_pattern(pattern: Pattern, config: EngineConfig) -> SampledPattern:
    """Sample every segment; fail when there is nothing measurable."""
    refs = pattern.segment_refs()
    if not refs:
        raise AnalysisInconclusive(f"Pattern {pattern.id} has no segments to analyze")

    segments = [pattern.segment(ref) for ref in refs]
    base = [sample_many(seg, config.samples_per_segment) for seg in segments]
    base_points = np.vstack(base)
    if not np.all(np.isfinite(base_points)):
        raise AnalysisInconclusive("Pattern geometry contains non-finite coordinates")

    diagonal = bbox_diagonal(base_points)
    if diagonal <= config.min_tolerance:
        raise AnalysisInconclusive("Pattern geometry has zero extent")
    tol = max(config.symmetry_tolerance * diagonal, config.min_tolerance)

    samples = base
    if config.adaptive_sampling:
        # Keep consecutive samples within a quarter tolerance of each other
        max_gap = tol / 4
        samples = []
        for seg, pts in zip(segments, base):
            n = math.ceil(control_polygon_length(seg) / max_gap) + 1
            n = min(max(n, config.samples_per_segment), config.max_samples_per_segment)
            samples.append(pts if n == config.samples_per_segment else sample_many(seg, n))

    points = np.vstack(samples)
    center = arc_length_centroid(samples)
    return SampledPattern(
        refs=refs,
        segment_samples=samples,
        points=points,
        tolerance=tol,
        center=center,
        tree=cKDTree(points),
    )


def _evaluate(candidates: Sequence[T], test: Callable[[T], bool], config: EngineConfig) -> list[bool]:
    if config.parallel_candidates and len(candidates) > 1:
        with ThreadPoolExecutor(max_workers=config.max_workers) as pool:
            return list(pool.map(test, candidates))
    return [test(c) for c in candidates]


def rotational_orders(sp: SampledPattern, config: EngineConfig) -> list[int]:
    """All candidate orders under which the sample set maps onto itself."""
    orders = list(config.rotation_orders)

    def test(k: int) -> bool:
        rotated = rotate_points(sp.points, 360.0 / k, sp.center)
        return sets_coincide(rotated, sp.points, sp.tolerance, tree_b=sp.tree)

    return [k for k, ok in zip(orders, _evaluate(orders, test, config)) if ok]


def _ring_axes(sp: SampledPattern) -> list[float]:
    """Axes a mirror of the outermost points must follow: through the
    farthest point, or bisecting it and another point at the same radius."""
    offsets = sp.points - np.asarray(sp.center)
    radii = np.hypot(offsets[:, 0], offsets[:, 1])
    r_max = float(np.max(radii))
    if r_max <= sp.tolerance:
        return []
    far = int(np.argmax(radii))
    angle0 = math.degrees(math.atan2(offsets[far, 1], offsets[far, 0]))

    ring = offsets[radii >= r_max - sp.tolerance]
    ring_angles = np.degrees(np.arctan2(ring[:, 1], ring[:, 0]))
    # Thin out dense rings (e.g. circles): one exact sample angle per half-degree bucket
    buckets: dict[float, float] = {}
    for a in ring_angles.tolist():
        buckets.setdefault(round(a * 2) / 2, a)
    axes = [angle0]
    for key in sorted(buckets)[:_MAX_RING_AXES]:
        axes.append((angle0 + buckets[key]) / 2)
    return axes


def _axis_resolution(sp: SampledPattern) -> float:
    """Smallest axis separation, in degrees, that moves the outermost
    samples by more than the tolerance."""
    offsets = sp.points - np.asarray(sp.center)
    r_max = float(np.max(np.hypot(offsets[:, 0], offsets[:, 1])))
    if r_max <= sp.tolerance:
        return 1e-4
    return max(math.degrees(sp.tolerance / r_max), 1e-4)


def reflection_candidates(sp: SampledPattern, orders: list[int], config: EngineConfig) -> list[float]:
    candidates = list(config.base_reflection_axes)
    for k in orders:
        step = 90.0 / k
        candidates.extend(j * step for j in range(2 * k))
    principal = pca_orientation(sp.points)
    candidates.extend([snap_angle(principal), snap_angle((principal + 90.0) % 180.0)])
    candidates.extend(_ring_axes(sp))
    return unique_axes(candidates)


def reflection_axes(sp: SampledPattern, orders: list[int], config: EngineConfig) -> list[float]:
    candidates = reflection_candidates(sp, orders, config)

    def test(axis: float) -> bool:
        mirrored = reflect_points(sp.points, axis, sp.center)
        return sets_coincide(mirrored, sp.points, sp.tolerance, tree_b=sp.tree)

    accepted = [a for a, ok in zip(candidates, _evaluate(candidates, test, config)) if ok]
    # Near-equal axes all pass within tolerance; keep the earliest candidate
    return sorted(unique_axes(accepted, merge_tol=_axis_resolution(sp)))


def lattice_vectors(pattern: Pattern, config: EngineConfig) -> list[tuple[float, float]]:
    """Grid lattice vectors ordered by length, horizontal before vertical."""
    grid = pattern.grid
    steps = []
    for i in range(grid.cols):
        for j in range(-(grid.rows - 1), grid.rows):
            if i == 0 and j <= 0:
                continue
            steps.append((i, j))
    steps.sort(key=lambda ij: (math.hypot(*ij), ij[1] != 0, abs(ij[1]), ij[1]))
    s = grid.spacing
    return [(i * s, j * s) for i, j in steps[: config.max_translation_candidates]]


def _translation_matches(sp: SampledPattern, dx: float, dy: float, config: EngineConfig) -> bool:
    """Shifted set and original agree wherever they overlap."""
    tol = sp.tolerance
    shifted = sp.points + np.array([dx, dy])
    lo = np.maximum(sp.points.min(axis=0), shifted.min(axis=0)) + tol
    hi = np.minimum(sp.points.max(axis=0), shifted.max(axis=0)) - tol
    if np.any(hi <= lo):
        return False

    def inside(pts: NDArray[np.float64]) -> NDArray[np.float64]:
        mask = np.all((pts >= lo) & (pts <= hi), axis=1)
        return pts[mask]

    shifted_in = inside(shifted)
    original_in = inside(sp.points)
    needed = config.min_translation_overlap * sp.num_points
    if len(shifted_in) < needed or len(original_in) < needed:
        return False

    d_shift, _ = sp.tree.query(shifted_in, distance_upper_bound=2 * tol)
    if float(np.max(d_shift)) > tol:
        return False
    d_orig, _ = cKDTree(shifted).query(original_in, distance_upper_bound=2 * tol)
    return float(np.max(d_orig)) <= tol


def translational_repeat(pattern: Pattern, sp: SampledPattern, config: EngineConfig) -> Translation | None:
    """Shortest lattice vector that maps the pattern onto its own interior."""
    if not pattern.grid.is_multi_cell:
        return None
    for dx, dy in lattice_vectors(pattern, config):
        if _translation_matches(sp, dx, dy, config):
            return Translation(dx=dx, dy=dy)
    return None


def detect_symmetry(pattern: Pattern, sp: SampledPattern, config: EngineConfig) -> tuple[SymmetryReport, list[int]]:
    """Symmetry report plus every passing rotation order (for decomposition)."""
    orders = rotational_orders(sp, config)
    axes = reflection_axes(sp, orders, config)
    translation = translational_repeat(pattern, sp, config)
    report = SymmetryReport(
        rotational_order=max(orders, default=1),
        reflection_axes=tuple(axes),
        translational=translation,
    )
    return report, orders


def math_concepts(pattern: Pattern, report: SymmetryReport, analysis_kinds: set[TransformKind]) -> tuple[str, ...]:
    """Mathematical ideas the pattern illustrates."""
    kinds = {pattern.segment(ref).kind for ref in pattern.segment_refs()}
    concepts = ["parametric curves"]
    if "line" in kinds:
        concepts.append("line segments")
    if "quadratic" in kinds:
        concepts.append("quadratic Bézier curves")
    if "cubic" in kinds:
        concepts.append("cubic Bézier curves")
    if report.rotational_order > 1:
        concepts.append(f"rotational symmetry of order {report.rotational_order}")
        concepts.append("polar coordinates")
    if report.reflection_axes:
        concepts.append(f"reflective symmetry across {len(report.reflection_axes)} axes")
    if report.rotational_order > 1 or report.reflection_axes:
        kind = "dihedral" if report.reflection_axes else "cyclic"
        concepts.append(f"{kind} group {report.symmetry_group}")
    if report.translational is not None:
        concepts.append("translational symmetry (tiling)")
    if pattern.style is PatternStyle.SIKKU and len(pattern.paths) == 1:
        concepts.append("Eulerian circuit" if pattern.paths[0].closed else "Eulerian path")
    if TransformKind.SCALE in analysis_kinds:
        concepts.append("geometric progression")
    return tuple(concepts)


def analyze(pattern: Pattern, config: EngineConfig | None = None) -> Analysis:
    """Symmetry report and transform decomposition of a pattern."""
    from kolam.engine.decomposition import decompose

    config = config or EngineConfig()
    start = time.perf_counter()

    sp = sample_pattern(pattern, config)
    report, orders = detect_symmetry(pattern, sp, config)
    decomposition = decompose(pattern, sp, report, orders, config)

    kinds = {t.kind for t in decomposition.transforms}
    result = Analysis(
        symmetry=report,
        decomposition=decomposition,
        centroid=Point(*sp.center),
        math_concepts=math_concepts(pattern, report, kinds),
    )
    logger.info(
        "Analyzed %s: %s, axes=%s, repeat=%s, motif %d/%d segments, %d transforms in %.1fms",
        pattern.id,
        report.symmetry_group,
        list(report.reflection_axes),
        report.translational,
        len(decomposition.motif),
        len(sp.refs),
        len(decomposition.transforms),
        (time.perf_counter() - start) * 1000,
    )
    return result
