from __future__ import annotations

from functools import lru_cache
from typing import List, Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PLAYDECK_",
        extra="allow",
    )

    # app
    app_name: str = "PlayDeck"
    log_level: str = "INFO"
    app_env: str = "dev"

    # state backend: "memory" keeps everything in-process, "redis" uses redis_url
    state_backend: Literal["memory", "redis"] = "memory"
    redis_url: str = "redis://localhost:6379/0"

    # player
    tick_interval_s: float = 1.0

    # http
    cors_origins: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
    ]

    # first boot
    seed_demo_data: bool = True


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
