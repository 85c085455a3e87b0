"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    graphseg_env: str = "development"
    graphseg_log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Segmentation defaults
    default_granularity: float = 300.0
    default_metric: str = "rgb"
    recolor_workers: int = 4
    palette_seed: int = 0

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
