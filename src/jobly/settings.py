"""
jobly.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Hide secrets from repr/logging (token signing secret).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="JOBLY_", case_sensitive=False)

    # Environment controls toggle behavior like auto-init DB tables.
    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "jobly-api"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 3001

    # Auth
    secret_key: str = Field(default="secret-dev", repr=False)
    jwt_alg: str = "HS256"
    # None issues tokens without an `exp` claim.
    token_ttl_minutes: int | None = Field(default=None, ge=1)
    bcrypt_work_factor: int = Field(default=12, ge=4, le=31)

    # Persistence
    database_url: str = "sqlite+aiosqlite:///./jobly.db"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Tests construct `Settings(...)` directly and pass it to `create_app`, so no
# code path should reach for `get_settings()` once the app is built.
