"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - DATABASE_URL has no default; a missing value fails Settings() validation
    - get_settings() is cached (lru_cache): single instance per process
    - Snowflake worker/process ids are range-checked here, before the generator exists
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from gifapi.core.snowflake import DISCORD_EPOCH_MS, MAX_PROCESS_ID, MAX_WORKER_ID


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Plain postgresql:// URLs are routed to the asyncpg driver."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        if isinstance(v, str) and v.startswith("postgres://"):
            return v.replace("postgres://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = Field(20, ge=1)
    database_max_overflow: int = Field(0, ge=0)
    database_create_schema: bool = False

    # Snowflake ids
    snowflake_epoch_ms: int = Field(DISCORD_EPOCH_MS, ge=0)
    snowflake_worker_id: int = Field(1, ge=0, le=MAX_WORKER_ID)
    snowflake_process_id: int = Field(1, ge=0, le=MAX_PROCESS_ID)

    # Server
    host: str = "127.0.0.1"
    port: int = 3030

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
