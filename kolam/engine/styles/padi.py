"""Padi — concentric layers of a base motif scaled by a fixed ratio."""

from __future__ import annotations

import logging
import random

from shapely.geometry import box

from kolam.engine.config import EngineConfig
from kolam.errors import LayerOverflow
from kolam.engine.generator import GenerateParams
from kolam.engine.motifs import LOOP_VARIANTS, loop_around
from kolam.engine.pattern import PatternStyle
from kolam.engine.registry import style
from kolam.svg.primitives import Path, bounding_box

logger = logging.getLogger(__name__)

# Absorbs float noise when a layer exactly touches the grid bounds
_BOUNDS_SLACK = 1e-9


@style(PatternStyle.PADI, description="Nested layers of one motif around the grid centre")
def padi(params: GenerateParams, rng: random.Random, config: EngineConfig) -> list[Path]:
    grid = params.grid
    lo, hi = grid.bounds
    allowed = box(lo.x, lo.y, hi.x, hi.y).buffer(_BOUNDS_SLACK, join_style=2)

    variant = rng.choice(LOOP_VARIANTS)
    base_radius = grid.spacing / 2

    paths: list[Path] = []
    for layer in range(params.iterations):
        radius = base_radius * config.padi_scale_factor**layer
        path = loop_around(grid.center, radius, variant)
        pmin, pmax = bounding_box(path)
        if not allowed.covers(box(pmin.x, pmin.y, pmax.x, pmax.y)):
            raise LayerOverflow(
                f"Layer {layer + 1} (radius {radius:.3f}) leaves the "
                f"{grid.rows}x{grid.cols} grid bounds"
            )
        paths.append(path)

    logger.debug("Padi: %d %s layers, outer radius %.3f", len(paths), variant, radius)
    return paths
