"""Application configuration management."""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import AliasChoices, Field, PositiveInt
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_PORT = 5520
DEFAULT_SHUTDOWN_GRACE_PERIOD = 10


class Settings(BaseSettings):
    """Resolved application settings used by the app factory and dependencies."""

    model_config = SettingsConfigDict(
        env_prefix="MOCK_SERVER_",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    host: str = Field(
        "0.0.0.0",
        description="Application bind address",
        validation_alias=AliasChoices("MOCK_SERVER_HOST", "HOST"),
    )
    port: int = Field(
        DEFAULT_PORT,
        description="Application bind port",
        validation_alias=AliasChoices("MOCK_SERVER_PORT", "PORT"),
    )
    log_level: str = Field("INFO", description="Root logging level")
    environment: Literal["production", "development"] = Field(
        "production",
        description="Runtime mode; development exposes internal error details",
    )

    server_name: str = Field("Hytale Server (Mock)", description="Advertised server name")
    server_version: str = Field("0.2.0", description="Advertised server version")
    world_name: str = Field("Zone 1", description="Name of the simulated world")
    max_players: PositiveInt = Field(10, description="Maximum concurrent players")

    tick_interval: float = Field(1.0, gt=0, description="Seconds between uptime ticks")
    shutdown_grace_period: int = Field(
        DEFAULT_SHUTDOWN_GRACE_PERIOD,
        ge=0,
        description="Seconds to wait for open connections before forcing shutdown",
    )
    static_dir: Optional[Path] = Field(
        Path("public"),
        description="Directory served under /static when present",
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        description="Origins allowed by the CORS middleware",
    )
    public_url: Optional[str] = Field(
        default=None,
        description="Externally reachable URL announced in the startup log",
    )

    @property
    def is_development(self) -> bool:
        return self.environment == "development"


@lru_cache(maxsize=None)
def get_settings() -> Settings:
    """Return a cached Settings instance built from the environment."""

    return Settings()
