"""Health check + meta endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from kolam.engine.generator import register_styles
from kolam.engine.registry import get_registry
from kolam.models.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    register_styles()
    return HealthResponse(
        status="ok",
        version="0.1.0",
        styles=[spec.style.value for spec in get_registry().all()],
    )
