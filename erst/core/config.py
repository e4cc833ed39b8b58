"""Core configuration for erst."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="ERST_",
        case_sensitive=False,
        extra="ignore",
    )

    # ── App ──────────────────────────────────────────────────────────────
    app_name: str = "erst"
    app_env: Literal["development", "staging", "production"] = "development"
    log_level: str = "WARNING"

    # ── Network / RPC ────────────────────────────────────────────────────
    network: str = "testnet"
    rpc_url: str = ""  # overrides the network registry URL when set
    rpc_api_key: str = ""
    request_timeout_seconds: float = 30.0
    max_retries: int = 3

    # ── Output ───────────────────────────────────────────────────────────
    default_format: Literal["table", "json"] = "table"
    default_top: int = 0  # 0 = show every contract


@lru_cache
def get_settings() -> Settings:
    """Return cached settings singleton."""
    return Settings()
