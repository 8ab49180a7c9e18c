"""Kambi — a fixed leaf stroke placed at seeded dots in seeded orientations."""

from __future__ import annotations

import random

from kolam.engine.config import EngineConfig
from kolam.engine.generator import GenerateParams
from kolam.engine.motifs import leaf, placed
from kolam.engine.pattern import PatternStyle
from kolam.engine.registry import style
from kolam.svg.primitives import Path

# Leaf half-length as a share of the dot spacing
_LEAF_SCALE = 0.4


@style(PatternStyle.KAMBI, description="Leaf motif scattered over seeded dots")
def kambi(params: GenerateParams, rng: random.Random, config: EngineConfig) -> list[Path]:
    grid = params.grid
    dots = [dot for _, _, dot in grid.dots()]
    if params.iterations <= len(dots):
        chosen = rng.sample(range(len(dots)), params.iterations)
    else:
        chosen = [rng.randrange(len(dots)) for _ in range(params.iterations)]

    template = leaf(grid.spacing * _LEAF_SCALE)
    paths = []
    for idx in chosen:
        angle = rng.randrange(8) * 45
        paths.append(placed(template, angle, dots[idx]))
    return paths
