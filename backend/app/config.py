"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process
    - List settings are comma-separated strings in the environment

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - database_url is optional: without it the content endpoints answer
      "Database is not configured" while the games endpoint keeps working
"""

from typing import Annotated

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str | None = None

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str | None) -> str | None:
        """Hosting providers hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v or None

    database_pool_size: int = 5
    database_max_overflow: int = 0

    # CORS / admin allow-lists
    cors_allow_origins: Annotated[list[str], NoDecode] = []
    admin_allowlist: Annotated[list[str], NoDecode] = []

    @field_validator("cors_allow_origins", "admin_allowlist", mode="before")
    @classmethod
    def split_csv(cls, v: object) -> object:
        if isinstance(v, str):
            return [item.strip() for item in v.split(",") if item.strip()]
        return v

    # Admin session
    admin_user: str = ""
    admin_pass_hash: str = ""
    admin_jwt_secret: str = ""
    admin_session_ttl_seconds: int = 3600
    session_cookie_name: str = "yd_admin"
    csrf_cookie_name: str = "yd_csrf"
    cookie_secure: bool = True

    # Upstream game APIs
    upstream_timeout_seconds: float = 8.0
    upstream_user_agent: str = "YoussefDesign-Portfolio/1.0"

    # Rate limiting (games endpoint)
    rate_limit_requests: int = 30
    rate_limit_window_seconds: float = 60.0

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
