"""POST /api/generate — build a pattern from style parameters."""

from __future__ import annotations

import asyncio
import time

from fastapi import APIRouter, Depends

from kolam.dependencies import get_engine_config
from kolam.engine.config import EngineConfig
from kolam.engine.generator import generate as generate_pattern
from kolam.engine.generator import make_params
from kolam.models.pattern import PatternModel
from kolam.models.requests import GenerateRequest
from kolam.models.responses import PatternResponse
from kolam.svg.serializer import export_svg

router = APIRouter()


@router.post("/generate", response_model=PatternResponse)
async def generate(
    req: GenerateRequest,
    config: EngineConfig = Depends(get_engine_config),
) -> PatternResponse:
    start = time.perf_counter()
    params = make_params(req.style, req.grid.to_grid(), req.iterations, req.seed)

    def _run():
        pattern = generate_pattern(params, config)
        svg = export_svg(pattern) if req.include_svg else None
        return pattern, svg

    pattern, svg = await asyncio.get_running_loop().run_in_executor(None, _run)
    elapsed = (time.perf_counter() - start) * 1000

    return PatternResponse(
        pattern=PatternModel.from_pattern(pattern),
        svg=svg,
        processing_time_ms=round(elapsed, 1),
    )
