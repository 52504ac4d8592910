"""API service configuration.

All configuration for the tennis player API lives here. Values are read from
environment variables (or a local `.env` file) through `pydantic-settings`, so a
missing or malformed value fails fast at startup instead of deep inside a
request.

Typical overrides:
- DATABASE_URL for the target database (Postgres in deployed environments)
- LOG_LEVEL / LOG_FORMAT for observability
- API_PREFIX when the service is mounted behind a versioned gateway path
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings for the API service.

    Every field maps to an upper-case environment variable of the same name
    (e.g. `database_url` <- `DATABASE_URL`).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Tennis Player API"
    app_version: str = "0.1.0"

    database_url: str = Field(
        default="sqlite:///./tennis_players.db",
        description="SQLAlchemy database URL. postgres:// URLs use psycopg2.",
    )
    database_echo: bool = False
    database_pool_size: int = Field(default=5, ge=1, le=50)
    create_schema: bool = Field(
        default=True,
        description="Create missing tables when the application starts.",
    )

    api_prefix: str = ""

    log_level: str = "INFO"
    log_format: str = Field(default="text", description="text or json")

    cors_allow_origins: list[str] = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings, parsed once."""
    return Settings()
