from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


PROJECT_ROOT = Path(__file__).resolve().parent.parent
DEFAULT_PORT = 3000


class Settings(BaseModel):
    """Runtime configuration resolved from environment variables."""

    google_api_key: Optional[str] = Field(
        default=None, alias="GOOGLE_API_KEY", description="Google Gemini API key"
    )
    host: str = Field(
        default="0.0.0.0",
        alias="HOST",
        description="Interface the HTTP server binds to.",
    )
    port: int = Field(
        default=DEFAULT_PORT,
        alias="PORT",
        description="Port the HTTP server listens on.",
    )
    public_dir: Path = Field(
        default=PROJECT_ROOT / "public",
        alias="PUBLIC_DIR",
        description="Directory whose files are served verbatim as static assets.",
    )
    cors_allow_origins: str = Field(
        default="*",
        alias="CORS_ALLOW_ORIGINS",
        description="Comma-separated list of origins allowed by CORS.",
    )
    log_level: str = Field(
        default="INFO",
        alias="LOG_LEVEL",
        description="Root logging level.",
    )

    model_config = {"populate_by_name": True, "frozen": True}

    @field_validator("google_api_key", mode="before")
    @classmethod
    def _blank_key_is_missing(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("port", mode="before")
    @classmethod
    def _blank_port_is_default(cls, value: object) -> object:
        if value is None or (isinstance(value, str) and not value.strip()):
            return DEFAULT_PORT
        return value

    @property
    def allowed_origins(self) -> List[str]:
        origins = [item.strip() for item in self.cors_allow_origins.split(",")]
        return [origin for origin in origins if origin] or ["*"]

    @classmethod
    def from_env(cls) -> "Settings":
        return cls.model_validate(os.environ)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance built from environment variables."""
    return Settings.from_env()
