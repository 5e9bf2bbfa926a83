from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env from repo root if present
ENV_PATH = Path(__file__).resolve().parents[3] / ".env"
if ENV_PATH.exists():
    load_dotenv(dotenv_path=ENV_PATH)

THEME_MODES = ("light", "dark")


class Settings(BaseSettings):
    """Order dashboard settings (loaded from env).

    Upstream:
      - "orders_api_url" is the REST endpoint the dashboard reads once per mount.
      - "orders_timeout_seconds" left unset means the fetch waits indefinitely.

    Presentation:
      - "default_theme" is the mode a fresh page starts in (light|dark).
    """

    # --- service ---
    service_name: str = Field(default="order-dashboard", description="Service name")
    version: str = Field(default="0.1.0", description="Service version")
    environment: str = Field(default="dev", description="Environment name (dev/staging/prod)")
    host: str = Field(default="0.0.0.0", description="Dashboard bind host")
    port: int = Field(default=8000, description="Dashboard bind port")

    # Logging
    log_level: str = Field(default="INFO", description="Root log level")
    log_format: str = Field(default="text", description="text|json")

    # --- Upstream orders API ---
    orders_api_url: str = Field(
        default="http://localhost:3001/api/orders/",
        description="Endpoint returning a JSON array of orders or {'results': [...]}",
    )
    orders_timeout_seconds: Optional[float] = Field(
        default=None,
        gt=0,
        description="Optional fetch timeout in seconds (unset = no timeout)",
    )

    # --- Presentation ---
    default_theme: str = Field(default="light", description="Initial theme mode (light|dark)")

    # --- CORS ---
    cors_allow_origins: List[str] = Field(default_factory=lambda: ["*"])
    cors_allow_methods: List[str] = Field(default_factory=lambda: ["GET"])
    cors_allow_headers: List[str] = Field(default_factory=lambda: ["*"])

    # pydantic-settings v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("default_theme")
    @classmethod
    def _check_theme(cls, v: str) -> str:
        mode = (v or "").strip().lower()
        if mode not in THEME_MODES:
            raise ValueError(f"default_theme must be one of {THEME_MODES}, got {v!r}")
        return mode


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
