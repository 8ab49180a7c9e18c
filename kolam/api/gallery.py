"""Gallery endpoints — presets rendered on demand."""

from __future__ import annotations

import asyncio

from fastapi import APIRouter, Depends, HTTPException

from kolam.dependencies import get_engine_config
from kolam.engine.config import EngineConfig
from kolam.engine.gallery import Preset, get_preset, list_presets, render_preset
from kolam.engine.pattern import PatternStyle
from kolam.models.pattern import GridModel, PatternModel
from kolam.models.responses import GalleryItem, GalleryPatternResponse, GalleryResponse
from kolam.svg.serializer import ExportOptions, export_svg

router = APIRouter()


def _item(preset: Preset) -> GalleryItem:
    p = preset.params
    return GalleryItem(
        id=preset.id,
        name=preset.name,
        description=preset.description,
        style=p.style,
        grid=GridModel.from_grid(p.grid),
        iterations=p.iterations,
        seed=p.seed,
    )


@router.get("/gallery", response_model=GalleryResponse)
async def gallery(style: PatternStyle | None = None) -> GalleryResponse:
    return GalleryResponse(items=[_item(p) for p in list_presets(style)])


@router.get("/gallery/{preset_id}", response_model=GalleryPatternResponse)
async def gallery_item(
    preset_id: str,
    config: EngineConfig = Depends(get_engine_config),
) -> GalleryPatternResponse:
    try:
        preset = get_preset(preset_id)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=f"Unknown gallery preset: {preset_id}") from e

    def _run():
        pattern = render_preset(preset.id, config)
        return pattern, export_svg(pattern, options=ExportOptions(show_dots=True, title=preset.name))

    pattern, svg = await asyncio.get_running_loop().run_in_executor(None, _run)
    return GalleryPatternResponse(item=_item(preset), pattern=PatternModel.from_pattern(pattern), svg=svg)
