"""Pattern generator — builds an immutable Pattern from style parameters."""

from __future__ import annotations

import importlib
import logging
import pkgutil
import random
import time
from dataclasses import dataclass

from kolam.engine.config import EngineConfig
from kolam.errors import GenerationError, InvalidDimension
from kolam.engine.grid import GridSpec, make_grid
from kolam.engine.pattern import Pattern, PatternStyle, make_pattern
from kolam.engine.registry import get_registry

logger = logging.getLogger(__name__)

_STYLES_PACKAGE = "kolam.engine.styles"
_styles_loaded = False


@dataclass(frozen=True)
class GenerateParams:
    style: PatternStyle
    grid: GridSpec
    iterations: int = 1
    seed: int = 0


def make_params(
    style: PatternStyle | str,
    grid: GridSpec,
    iterations: int = 1,
    seed: int = 0,
) -> GenerateParams:
    """Validated GenerateParams constructor."""
    try:
        pattern_style = PatternStyle(style)
    except ValueError as e:
        raise GenerationError(f"Unknown pattern style: {style!r}") from e
    # Re-validate so hand-built GridSpecs cannot bypass the checks
    grid = make_grid(grid.rows, grid.cols, grid.spacing)
    if isinstance(iterations, bool) or not isinstance(iterations, int) or iterations < 1:
        raise InvalidDimension(f"iterations must be an integer >= 1, got {iterations!r}")
    if isinstance(seed, bool) or not isinstance(seed, int):
        raise InvalidDimension(f"seed must be an integer, got {seed!r}")
    return GenerateParams(style=pattern_style, grid=grid, iterations=iterations, seed=seed)


def register_styles() -> None:
    """Import all style modules so @style decorators fire."""
    global _styles_loaded
    if _styles_loaded:
        return
    package = importlib.import_module(_STYLES_PACKAGE)
    for _, module_name, _ in pkgutil.iter_modules(package.__path__):
        importlib.import_module(f"{_STYLES_PACKAGE}.{module_name}")
    _styles_loaded = True


def generate(params: GenerateParams, config: EngineConfig | None = None) -> Pattern:
    """Build a Pattern. Identical params always give an identical Pattern."""
    config = config or EngineConfig()
    params = make_params(params.style, params.grid, params.iterations, params.seed)
    register_styles()

    spec = get_registry().get(params.style)
    start = time.perf_counter()
    rng = random.Random(params.seed)
    paths = spec.fn(params, rng, config)
    pattern = make_pattern(params.grid, tuple(paths), params.style)

    logger.info(
        "Generated %s pattern %s: %d paths, %d segments in %.1fms",
        params.style.value,
        pattern.id,
        len(pattern.paths),
        pattern.segment_count,
        (time.perf_counter() - start) * 1000,
    )
    return pattern
