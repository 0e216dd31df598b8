from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App
    app_env: str = "dev"
    log_level: str = "INFO"

    # Infra
    database_url: str = "postgresql://app:app@db:5432/app"
    redis_url: str = "redis://redis:6379/0"
    verification_backend: Literal["redis", "postgres"] = "redis"
    # how long an expired record is kept before the store drops it
    verification_retention_seconds: int = 3600

    # Sessions
    session_ttl_seconds: int = 7 * 24 * 3600
    session_cookie_name: str = "session_token"
    session_cookie_secure: bool = True

    # One-time tokens
    ott_expires_in_minutes: float = 3
    ott_disable_client_request: bool = False
    ott_store_token: Literal["plain", "hashed"] = "plain"
    ott_create_session: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
