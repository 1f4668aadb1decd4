"""Configuration management using Pydantic settings."""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Launcher and tuning settings loaded from ARENA_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="ARENA_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Loop
    target_fps: int = Field(60, gt=0)

    # Gameplay tuning
    shoot_cooldown: float = Field(0.2, ge=0)     # seconds between enemy shots
    spawn_interval: float = Field(10.0, ge=0)    # seconds between waves
    spawn_count: int = Field(10, ge=0)           # enemies per wave
    seed: Optional[int] = None                   # fixed RNG seed for replays

    # Logging (loguru); no file means no logging, stderr belongs to the terminal
    log_file: Optional[Path] = None
    log_level: str = "INFO"

    # Terminal
    min_width: int = 80
    min_height: int = 24


@lru_cache
def get_settings() -> Settings:
    return Settings()
