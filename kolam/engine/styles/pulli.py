"""Pulli — nested closed loops around every dot of the grid.

Loop vertices sit at the midpoints toward the orthogonal neighbours, so
the outermost loops of adjacent dots touch. The seed picks a loop variant
for one quadrant of the grid; the choice is mirrored across both grid
axes (and the diagonal on square grids).
"""

from __future__ import annotations

import random

from kolam.engine.config import EngineConfig
from kolam.engine.generator import GenerateParams
from kolam.engine.motifs import LOOP_VARIANTS, loop_around
from kolam.engine.pattern import PatternStyle
from kolam.engine.registry import style
from kolam.svg.primitives import Path


def _mirror_key(r: int, c: int, rows: int, cols: int) -> tuple[int, int]:
    key = (min(r, rows - 1 - r), min(c, cols - 1 - c))
    if rows == cols:
        key = tuple(sorted(key))
    return key


@style(PatternStyle.PULLI, description="Nested loops linking the midpoints around each dot")
def pulli(params: GenerateParams, rng: random.Random, config: EngineConfig) -> list[Path]:
    grid = params.grid
    half = grid.spacing / 2

    variants: dict[tuple[int, int], str] = {}
    paths: list[Path] = []
    for r, c, dot in grid.dots():
        key = _mirror_key(r, c, grid.rows, grid.cols)
        if key not in variants:
            variants[key] = rng.choice(LOOP_VARIANTS)
        for j in range(params.iterations):
            radius = half * (params.iterations - j) / params.iterations
            paths.append(loop_around(dot, radius, variants[key]))
    return paths
