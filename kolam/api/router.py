"""Master API router — mounts all endpoint routers."""

from __future__ import annotations

from fastapi import APIRouter

from kolam.api import analyze, export, gallery, generate, health, sequence

api_router = APIRouter(prefix="/api")

api_router.include_router(health.router)
api_router.include_router(generate.router)
api_router.include_router(analyze.router)
api_router.include_router(sequence.router)
api_router.include_router(export.router)
api_router.include_router(gallery.router)
