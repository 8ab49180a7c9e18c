"""FastAPI dependency injection."""

from __future__ import annotations

from fastapi import Depends

from kolam.config import Settings, settings
from kolam.engine.config import EngineConfig


def get_settings():
    return settings


def get_engine_config(settings: Settings = Depends(get_settings)) -> EngineConfig:
    return EngineConfig(
        symmetry_tolerance=settings.kolam_symmetry_tolerance,
        samples_per_segment=settings.kolam_samples_per_segment,
        parallel_candidates=settings.kolam_parallel_candidates,
    )
