"""Transform decomposition: a base motif plus the transforms that rebuild
the rest of the pattern from it.

Segments are the units. Each candidate transform is mapped
segment-to-segment; a greedy pass then adds the candidate that shrinks the
motif the most, preferring rotation, then reflection, translation and
scale on ties. The result is replayed geometrically; a placement that
drifts beyond tolerance loses its match and selection runs again.
"""

from __future__ import annotations

import logging
import math
from collections import deque
from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray
from scipy.spatial import cKDTree

from kolam.engine.analyzer import SampledPattern
from kolam.engine.config import EngineConfig
from kolam.errors import AnalysisInconclusive
from kolam.engine.pattern import (
    Decomposition,
    Pattern,
    Placement,
    SymmetryReport,
    Transform,
    TransformKind,
)
from kolam.svg.primitives import Point, sample_many
from kolam.utils.geometry import rms_radius
from kolam.utils.math_helpers import relative_close

logger = logging.getLogger(__name__)

# Samples per segment used to match one segment against another. Affine
# maps commute with Bézier evaluation, so transformed copies agree sample
# for sample (possibly in reverse order).
_SIGNATURE_SAMPLES = 9


@dataclass
class Candidate:
    transform: Transform
    # (source, target) unit index pairs with transform(source) == target
    edges: list[tuple[int, int]] = field(default_factory=list)


class _UnionFind:
    def __init__(self, n: int) -> None:
        self.parent = list(range(n))
        self.components = n

    def copy(self) -> _UnionFind:
        other = _UnionFind(0)
        other.parent = list(self.parent)
        other.components = self.components
        return other

    def find(self, i: int) -> int:
        while self.parent[i] != i:
            self.parent[i] = self.parent[self.parent[i]]
            i = self.parent[i]
        return i

    def union(self, a: int, b: int) -> None:
        ra, rb = self.find(a), self.find(b)
        if ra != rb:
            # Smaller index stays root so motif representatives are stable
            if rb < ra:
                ra, rb = rb, ra
            self.parent[rb] = ra
            self.components -= 1


def _signatures(pattern: Pattern, sp: SampledPattern) -> list[NDArray[np.float64]]:
    return [sample_many(pattern.segment(ref), _SIGNATURE_SAMPLES) for ref in sp.refs]


def _same_curve(a: NDArray[np.float64], b: NDArray[np.float64], tol: float) -> bool:
    forward = np.max(np.hypot(*(a - b).T))
    if forward <= tol:
        return True
    backward = np.max(np.hypot(*(a - b[::-1]).T))
    return bool(backward <= tol)


def _map_units(
    transform: Transform,
    signatures: list[NDArray[np.float64]],
    mid_tree: cKDTree,
    tol: float,
) -> list[tuple[int, int]]:
    mid = _SIGNATURE_SAMPLES // 2
    edges = []
    for i, sig in enumerate(signatures):
        moved = transform.apply_array(sig)
        for j in sorted(mid_tree.query_ball_point(moved[mid], tol)):
            if j != i and _same_curve(moved, signatures[j], tol):
                edges.append((i, j))
                break
    return edges


def _translation_candidates(
    pattern: Pattern,
    sp: SampledPattern,
    report: SymmetryReport,
    signatures: list[NDArray[np.float64]],
    config: EngineConfig,
) -> list[tuple[float, float]]:
    vectors: list[tuple[float, float]] = []
    if report.translational is not None:
        vectors.append((report.translational.dx, report.translational.dy))
    if pattern.grid.is_multi_cell:
        s = pattern.grid.spacing
        vectors.extend([(s, 0.0), (0.0, s), (s, s), (s, -s)])

    # Offsets between path centres
    path_centers: dict[int, list[NDArray[np.float64]]] = {}
    for ref, sig in zip(sp.refs, signatures):
        path_centers.setdefault(ref.path, []).append(sig)
    centers = [np.vstack(sigs).mean(axis=0) for _, sigs in sorted(path_centers.items())]
    for a in range(len(centers)):
        for b in range(a + 1, len(centers)):
            dx, dy = (centers[b] - centers[a]).tolist()
            if dx < 0 or (dx == 0 and dy < 0):
                dx, dy = -dx, -dy
            vectors.append((dx, dy))

    unique: list[tuple[float, float]] = []
    for dx, dy in vectors:
        if math.hypot(dx, dy) <= sp.tolerance:
            continue
        if all(math.hypot(dx - ux, dy - uy) > sp.tolerance for ux, uy in unique):
            unique.append((dx, dy))
        if len(unique) >= config.max_translation_candidates:
            break
    return unique


def _scale_candidates(sp: SampledPattern, signatures: list[NDArray[np.float64]], config: EngineConfig) -> list[float]:
    by_path: dict[int, list[NDArray[np.float64]]] = {}
    for ref, sig in zip(sp.refs, signatures):
        by_path.setdefault(ref.path, []).append(sig)
    radii = sorted(rms_radius(np.vstack(sigs), sp.center) for sigs in by_path.values())

    distinct: list[float] = []
    for r in radii:
        if r > sp.tolerance and (not distinct or not relative_close(r, distinct[-1])):
            distinct.append(r)

    factors: list[float] = []
    for small, large in zip(distinct, distinct[1:]):
        f = large / small
        if not any(relative_close(f, g) for g in factors):
            factors.append(f)
    return factors[: config.max_scale_candidates]


def build_candidates(
    pattern: Pattern,
    sp: SampledPattern,
    report: SymmetryReport,
    orders: list[int],
    signatures: list[NDArray[np.float64]],
    config: EngineConfig,
) -> list[Candidate]:
    """Candidate transforms in tie-break order."""
    center = Point(*sp.center)
    transforms = [
        Transform(TransformKind.ROTATION, center=center, angle=360.0 / k)
        for k in sorted(orders, reverse=True)
    ]
    transforms += [
        Transform(TransformKind.REFLECTION, center=center, axis=axis)
        for axis in report.reflection_axes
    ]
    transforms += [
        Transform(TransformKind.TRANSLATION, dx=dx, dy=dy)
        for dx, dy in _translation_candidates(pattern, sp, report, signatures, config)
    ]
    transforms += [
        Transform(TransformKind.SCALE, center=center, factor=f)
        for f in _scale_candidates(sp, signatures, config)
    ]

    mids = np.array([sig[_SIGNATURE_SAMPLES // 2] for sig in signatures])
    mid_tree = cKDTree(mids)
    candidates = []
    for t in transforms:
        edges = _map_units(t, signatures, mid_tree, sp.tolerance)
        if edges:
            candidates.append(Candidate(transform=t, edges=edges))
    return candidates


def _select(candidates: list[Candidate], n: int) -> tuple[list[Candidate], _UnionFind]:
    """Greedy: repeatedly add the candidate that merges the most units."""
    uf = _UnionFind(n)
    chosen: list[Candidate] = []
    remaining = list(candidates)
    while remaining and uf.components > 1:
        best_idx, best_uf = -1, None
        for idx, cand in enumerate(remaining):
            trial = uf.copy()
            for a, b in cand.edges:
                trial.union(a, b)
            # Strictly fewer only: earlier (preferred) candidates win ties
            if trial.components < (best_uf.components if best_uf else uf.components):
                best_idx, best_uf = idx, trial
        if best_uf is None:
            break
        chosen.append(remaining.pop(best_idx))
        uf = best_uf
    return chosen, uf


def _place(chosen: list[Candidate], uf: _UnionFind, n: int) -> tuple[list[int], list[tuple[int, int, int, bool]]]:
    """Motif units and a BFS placement order (target, source, transform, inverse)."""
    adjacency: dict[int, list[tuple[int, int, bool]]] = {i: [] for i in range(n)}
    for t_idx, cand in enumerate(chosen):
        for a, b in cand.edges:
            adjacency[a].append((b, t_idx, False))
            adjacency[b].append((a, t_idx, True))

    motif = sorted({uf.find(i) for i in range(n)})
    placed = set(motif)
    order: list[tuple[int, int, int, bool]] = []
    queue = deque(motif)
    while queue:
        src = queue.popleft()
        for dst, t_idx, inverse in sorted(adjacency[src], key=lambda e: (e[1], e[2], e[0])):
            if dst in placed:
                continue
            placed.add(dst)
            order.append((dst, src, t_idx, inverse))
            queue.append(dst)
    return motif, order


def _replay(
    order: list[tuple[int, int, int, bool]],
    motif: list[int],
    transforms: list[Transform],
    signatures: list[NDArray[np.float64]],
    tol: float,
) -> int | None:
    """Rebuild every unit from the motif by composing transforms.

    Returns the position in ``order`` of the first placement that drifts
    beyond ``tol``, or None when every unit is reproduced.
    """
    rebuilt = {i: signatures[i] for i in motif}
    for pos, (dst, src, t_idx, inverse) in enumerate(order):
        t = transforms[t_idx].inverse() if inverse else transforms[t_idx]
        rebuilt[dst] = t.apply_array(rebuilt[src])
        if not _same_curve(rebuilt[dst], signatures[dst], tol):
            logger.debug("Replaying %s drifts beyond tolerance %.4g at segment %d", t.describe(), tol, dst)
            return pos
    if len(rebuilt) != len(signatures):
        raise AnalysisInconclusive(
            f"Decomposition reconstructs {len(rebuilt)} of {len(signatures)} segments"
        )
    return None


def decompose(
    pattern: Pattern,
    sp: SampledPattern,
    report: SymmetryReport,
    orders: list[int],
    config: EngineConfig,
) -> Decomposition:
    signatures = _signatures(pattern, sp)
    candidates = build_candidates(pattern, sp, report, orders, signatures, config)
    n_candidates = len(candidates)

    # Matches chained over several placements can drift past the tolerance.
    # Drop the edge that drifted and select again; with no edges left the
    # whole pattern is its own motif, which always replays.
    while True:
        chosen, uf = _select(candidates, len(signatures))
        # Report transforms in preference order; placements index into it
        chosen.sort(key=lambda c: c.transform.kind.preference)
        transforms = [c.transform for c in chosen]
        motif, order = _place(chosen, uf, len(signatures))
        drift = _replay(order, motif, transforms, signatures, sp.tolerance)
        if drift is None:
            break
        dst, src, t_idx, inverse = order[drift]
        chosen[t_idx].edges.remove((dst, src) if inverse else (src, dst))
        candidates = [c for c in candidates if c.edges]

    logger.debug(
        "Decomposition: %d candidates, %d chosen, motif %d of %d segments",
        n_candidates,
        len(chosen),
        len(motif),
        len(signatures),
    )
    refs = sp.refs
    return Decomposition(
        motif=tuple(refs[i] for i in motif),
        transforms=tuple(transforms),
        placements=tuple(
            Placement(target=refs[dst], source=refs[src], transform=t_idx, inverse=inverse)
            for dst, src, t_idx, inverse in order
        ),
    )
