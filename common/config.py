from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from common.exceptions import ConfigError

MEGAROULETTE_URL = "https://api.casinoscores.com/svc-evolution-game-events/api/megaroulette"


class Settings(BaseSettings):
    # Database (required, checked by require_database_url)
    DATABASE_URL: Optional[str] = None
    # Applied as libpq sslmode for PostgreSQL URLs; empty string disables it
    DATABASE_SSLMODE: str = "require"

    # Upstream API
    ROULETTE_API_URL: str = MEGAROULETTE_URL
    HTTP_TIMEOUT_SECONDS: float = 30.0

    # Pipeline
    MAX_WORKERS: int = 8
    STRICT_VALIDATION: bool = True

    # Retention / error log
    RETENTION_MONTHS: int = 3
    ERROR_SUPPRESSION_HOURS: int = 24

    # Prefect schedules
    INGEST_INTERVAL_SECONDS: int = 300
    CLEANUP_CRON: str = "0 3 * * *"

    # Telegram (notifications are skipped when either is unset)
    TELEGRAM_BOT_TOKEN: Optional[str] = None
    TELEGRAM_CHAT_ID: Optional[str] = None

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache()
def get_settings() -> Settings:
    return Settings()


def require_database_url(settings: Optional[Settings] = None) -> str:
    """Return the configured database URL or raise ConfigError."""
    settings = settings or get_settings()
    if not settings.DATABASE_URL:
        raise ConfigError("DATABASE_URL environment variable is not set", key="DATABASE_URL")
    return settings.DATABASE_URL
