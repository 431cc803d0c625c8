# app/core/config.py
from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Sync job / endpoint env vars (.env, .env.local):
      - GOOGLE_SHEET_ID
      - GOOGLE_CREDENTIALS_JSON (base64 service account JSON) or
        GOOGLE_CREDENTIALS_PATH (path to the JSON file)
      - SUPABASE_URL (NEXT_PUBLIC_SUPABASE_URL is accepted too)
      - SUPABASE_SERVICE_ROLE_KEY
      - SYNC_SECRET_KEY (bearer token for POST /sync)

    Catalog API:
      - DATABASE_URL (Supabase Postgres connection string)

    Everything is optional at load time so the job and the API can each
    report exactly what they are missing.
    """

    PROJECT_NAME: str = "Maison Catalog API"
    API_V1_STR: str = "/api/v1"
    LOG_LEVEL: str = "INFO"

    # Google Sheets source
    GOOGLE_SHEET_ID: str | None = None
    GOOGLE_CREDENTIALS_JSON: str | None = None
    GOOGLE_CREDENTIALS_PATH: str | None = None

    # Supabase / DB config
    SUPABASE_URL: str | None = Field(
        default=None,
        validation_alias=AliasChoices("SUPABASE_URL", "NEXT_PUBLIC_SUPABASE_URL"),
    )
    # Service role key bypasses RLS (backend only)
    SUPABASE_SERVICE_ROLE_KEY: str | None = None
    DATABASE_URL: str | None = None

    # Shared secret for the sync endpoint
    SYNC_SECRET_KEY: str | None = None

    # .env.local wins over .env
    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local"),
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
