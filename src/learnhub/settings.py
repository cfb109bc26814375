"""
learnhub.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all services.
- Hide secrets from repr/logging (JWT signing key).
- Freeze the settings object so it cannot change after startup.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ServiceName = Literal["identity", "courses", "enrollments", "all"]


class Settings(BaseSettings):
    """
    Process-wide configuration:
    - Loaded once at startup and passed explicitly into `create_app`
    - Frozen; request handlers read it from `app.state`
    - Every service replica must share `jwt_secret`, `jwt_alg` and `jwt_issuer`
    """

    model_config = SettingsConfigDict(env_prefix="LEARNHUB_", case_sensitive=False, frozen=True)

    env: Literal["dev", "test", "prod"] = "dev"
    # Which routers this process mounts; "all" runs every service in one process.
    service: ServiceName = "all"
    service_name: str = "learnhub"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Auth
    jwt_alg: str = "HS256"
    jwt_issuer: str = "learnhub-identity"
    jwt_secret: str = Field(default="dev-secret-change-me-0123456789abcdef", repr=False)
    token_ttl_minutes: int = Field(default=60, ge=1, le=24 * 60)
    clock_skew_seconds: int = Field(default=10, ge=0, le=30)

    # Persistence
    database_url: str = "sqlite+aiosqlite:///./learnhub.db"
    db_retry_attempts: int = Field(default=3, ge=1, le=10)
    db_retry_backoff_seconds: float = Field(default=0.2, ge=0.0, le=5.0)

    @field_validator("jwt_secret")
    @classmethod
    def _secret_length(cls, value: str) -> str:
        # HS256 keys shorter than the digest size are brute-forceable.
        if len(value) < 32:
            raise ValueError("jwt_secret must be at least 32 characters")
        return value

    @property
    def service_title(self) -> str:
        return f"{self.service_name}-{self.service}"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Used only by process entrypoints; request paths read settings from app.state.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Role staleness in issued tokens is bounded by `token_ttl_minutes`; keep it short
# in environments where role changes must propagate quickly.
