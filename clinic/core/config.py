"""Application configuration via Pydantic settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration object loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = "Clinic Calendar API"
    debug: bool = False
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    database_url: str = Field("sqlite+aiosqlite:///./clinic_calendar.db", alias="DATABASE_URL")
    default_timezone: str = Field("UTC", alias="DEFAULT_TIMEZONE")

    calendar_start_hour: int = Field(8, ge=0, le=23, alias="CALENDAR_START_HOUR")
    calendar_end_hour: int = Field(19, ge=0, le=23, alias="CALENDAR_END_HOUR")
    calendar_slot_minutes: int = Field(30, gt=0, le=60, alias="CALENDAR_SLOT_MINUTES")
    day_view_max_visible: int = Field(4, gt=0, alias="DAY_VIEW_MAX_VISIBLE")


@lru_cache(1)
def get_settings() -> Settings:
    """Return a cached settings instance."""
    return Settings()


settings = get_settings()
