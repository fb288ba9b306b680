"""Application configuration loaded from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "celestial-hexagon"
    app_version: str = "1.5.0"
    debug: bool = False
    log_level: str = "INFO"

    # Pattern search
    target_distances: list[float] = [1211, 856, 694, 517]
    tolerance_days: float = 1.0
    max_window_days: float = 2922  # ~8 years
    score_smoothing: float = 0.1

    # Chunked driver
    chunk_size: int = 100

    # Sessions
    session_ttl_minutes: int = 120
    default_catalog_path: str | None = None

    model_config = {"env_prefix": "HEXAGON_"}


settings = Settings()
