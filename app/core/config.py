# app/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Required env vars (.env):
      - SUPABASE_URL
      - DATABASE_URL (Postgres connection string)
      - SUPABASE_JWT_SECRET (JWT signing secret from Supabase project settings)

    Optional:
      - SUPABASE_SERVICE_ROLE_KEY (needed for photo uploads to Storage)
    """

    PROJECT_NAME: str = "Lokolo Directory API"
    API_PREFIX: str = "/api"

    # Supabase / DB config
    SUPABASE_URL: str
    DATABASE_URL: str

    # JWT verification (backend-side)
    SUPABASE_JWT_SECRET: str
    SUPABASE_JWT_ALG: str = "HS256"

    # Service role key bypasses RLS (backend only)
    SUPABASE_SERVICE_ROLE_KEY: str | None = None

    # Photo storage
    STORAGE_BUCKET: str = "business-photos"
    MAX_UPLOAD_BYTES: int = 10 * 1024 * 1024

    # Geo search (radius is always kilometres)
    SEARCH_DEFAULT_RADIUS_KM: float = 50.0
    SEARCH_RESULT_LIMIT: int = 100

    # Degraded modes: serve placeholder data instead of failing
    SEARCH_FALLBACK_ENABLED: bool = True
    USER_SYNC_FALLBACK_ENABLED: bool = True

    # When on, identity-bound routes require a bearer token whose `sub`
    # matches the external id in the request.
    ENFORCE_IDENTITY: bool = False

    # Comma separated
    CORS_ORIGINS: str = "http://localhost:3000,http://127.0.0.1:3000"

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
