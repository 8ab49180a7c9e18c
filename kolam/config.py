"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    kolam_env: str = "development"
    kolam_log_level: str = "debug"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Engine defaults
    kolam_symmetry_tolerance: float = 0.01
    kolam_samples_per_segment: int = 32
    kolam_parallel_candidates: bool = False

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
