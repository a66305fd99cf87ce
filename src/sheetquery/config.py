"""Client configuration using pydantic-settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

GVIZ_BASE_URL = "https://docs.google.com/spreadsheets/d"


class Settings(BaseSettings):
    """Settings loaded from ``SHEETQUERY_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SHEETQUERY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    base_url: str = GVIZ_BASE_URL

    # None keeps httpx's default transport timeout
    timeout: float | None = None

    # Logging (CLI only)
    log_level: str = "WARNING"
    json_logs: bool = False


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
