"""Vexora — Centralized typed configuration.

All values can be overridden via environment variables with the VEXORA_ prefix.

Usage:
    from vexora.config import get_settings
    settings = get_settings()
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Typed, validated application settings."""

    model_config = {"env_prefix": "VEXORA_", "env_file": ".env", "extra": "ignore"}

    # --- Core ---
    env: str = Field("development", description="Runtime environment")
    version: str = Field("1.0.0", description="Application version")
    debug: bool = Field(False, description="Debug mode flag")
    log_level: str = Field("INFO", description="Log level")
    log_json: bool = Field(True, description="Emit JSON-structured logs")

    # --- Server ---
    cors_origins: str = Field("*", description="Comma-separated CORS origins")
    max_upload_size: int = Field(524_288_000, description="Max upload size in bytes (500MB)")

    # --- URL reachability probe ---
    probe_enabled: bool = Field(True, description="Send a HEAD request to unknown hosts")
    probe_timeout: float = Field(5.0, description="Reachability probe timeout in seconds")

    # --- Detection policy ---
    policy_path: str | None = Field(None, description="JSON file replacing the bundled detection policy")

    # --- Derived helpers ---
    @property
    def is_production(self) -> bool:
        return self.env.lower() == "production"

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached singleton of the application settings."""
    return Settings()
