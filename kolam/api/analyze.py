"""POST /api/analyze — symmetry report and transform decomposition."""

from __future__ import annotations

import asyncio
import time

from fastapi import APIRouter, Depends

from kolam.dependencies import get_engine_config
from kolam.engine.analyzer import analyze as analyze_pattern
from kolam.engine.config import EngineConfig
from kolam.models.requests import AnalyzeRequest
from kolam.models.responses import AnalyzeResponse
from kolam.svg.parser import parse_svg

router = APIRouter()


@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze(
    req: AnalyzeRequest,
    config: EngineConfig = Depends(get_engine_config),
) -> AnalyzeResponse:
    start = time.perf_counter()

    if req.pattern is not None:
        pattern = req.pattern.to_pattern()
    else:
        grid = req.grid.to_grid() if req.grid else None
        pattern = parse_svg(req.svg, grid=grid, style=req.style)

    # Sampling and candidate tests are CPU-bound
    analysis = await asyncio.get_running_loop().run_in_executor(None, analyze_pattern, pattern, config)
    elapsed = (time.perf_counter() - start) * 1000

    return AnalyzeResponse.from_analysis(pattern.id, analysis, elapsed)
