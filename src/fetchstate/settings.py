"""
fetchstate.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for the engine, transport and web layers.
- Offer a cached settings instance for callers that do not pass one explicitly.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="FETCHSTATE_", case_sensitive=False)

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "fetchstate"
    log_level: str = "INFO"

    # Queries
    cache_enabled: bool = True
    # 0 means unbounded; otherwise least-recently-used entries are evicted.
    cache_max_entries: int = Field(default=0, ge=0)

    # Ambient HTTP transport handed to query functions
    http_base_url: str = ""
    http_timeout_seconds: float = Field(default=10.0, gt=0)

    # Web integration
    session_header: str = "x-session-id"
    max_sessions: int = Field(default=1024, ge=1)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Library code takes `settings=` explicitly; `get_settings()` is only the fallback default.
