from functools import lru_cache
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    APP_ENV: Literal["dev", "prod", "test"] = "dev"

    # FastAPI
    APP_NAME: str = "Community Hub"
    DEBUG: bool = False

    # CORS
    CORS_ALLOW_ORIGINS: list[str] = ["*"]

    # DB
    DATABASE_URL: str
    DB_ECHO: bool = False

    # Uvicorn/HTTP
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    WORKERS: int = 1

    # Moderation workflow
    PREVIEW_QUERY_TIMEOUT_SECONDS: float = 5.0
    MAX_INLINE_DOCUMENT_PREVIEW: int = 2_000_000
    SUBMIT_CREATES_MISSING: bool = True
    LIST_LIMIT: int = 1000

    # seeded on startup when all three are set
    SUPER_ADMIN_EMAIL: Optional[str] = None
    SUPER_ADMIN_NAME: Optional[str] = None
    SUPER_ADMIN_PASSWORD: Optional[str] = None

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


def normalize_database_url(raw: str) -> str:
    """Managed Postgres hands out postgres:// URLs; the engine needs the asyncpg driver."""
    if raw.startswith("postgres://"):
        return raw.replace("postgres://", "postgresql+asyncpg://", 1)
    if raw.startswith("postgresql://"):
        return raw.replace("postgresql://", "postgresql+asyncpg://", 1)
    return raw


@lru_cache
def get_settings() -> Settings:
    s = Settings()  # reads the environment and .env
    s.DATABASE_URL = normalize_database_url(s.DATABASE_URL)
    if s.APP_ENV == "dev":
        s.DEBUG = True
        s.WORKERS = 1
    elif s.APP_ENV == "prod":
        s.DEBUG = False
    return s
