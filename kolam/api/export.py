"""POST /api/export — SVG document for a pattern or a step prefix of it."""

from __future__ import annotations

import asyncio

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from kolam.dependencies import get_engine_config
from kolam.engine.config import EngineConfig
from kolam.engine.sequencer import sequence
from kolam.models.requests import ExportRequest
from kolam.svg.serializer import PALETTES, export_svg

router = APIRouter()


@router.post("/export")
async def export(
    req: ExportRequest,
    config: EngineConfig = Depends(get_engine_config),
) -> Response:
    if req.options.palette not in PALETTES:
        raise HTTPException(status_code=422, detail=f"Unknown palette: {req.options.palette!r}")

    pattern = req.pattern.to_pattern()
    options = req.options.to_options()

    def _run() -> str:
        steps = sequence(pattern, config) if req.step_prefix is not None else None
        return export_svg(pattern, step_prefix=req.step_prefix, steps=steps, options=options)

    svg = await asyncio.get_running_loop().run_in_executor(None, _run)
    filename = f"{pattern.id}.svg"
    return Response(
        content=svg,
        media_type="image/svg+xml",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
