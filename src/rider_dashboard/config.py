"""Configuration settings for the Rider Dashboard."""

from pathlib import Path
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


# __file__ = src/rider_dashboard/config.py
PACKAGE_ROOT = Path(__file__).parent
PROJECT_ROOT = PACKAGE_ROOT.parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=str(PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # API settings
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    debug: bool = False
    log_level: str = "INFO"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:8081"]

    # World schedule
    schedule_url: str = "https://zwiftinsider.com/schedule/"
    schedule_ttl_seconds: int = 6 * 60 * 60
    default_timezone: str = "UTC"
    baseline_world: str = "Watopia"

    # Outbound HTTP
    http_timeout_seconds: float = 30.0

    # Wearable metrics API (Garmin). Paths may be absolute URLs.
    garmin_api_base_url: str = ""
    garmin_body_battery_path: Optional[str] = None
    garmin_sleep_score_path: Optional[str] = None
    garmin_hrv_status_path: Optional[str] = None
    garmin_training_load_path: Optional[str] = None
    garmin_recovery_time_path: Optional[str] = None

    # Dot paths into each metric payload
    garmin_body_battery_value_field: Optional[str] = None
    garmin_sleep_score_value_field: Optional[str] = None
    garmin_hrv_status_value_field: Optional[str] = None
    garmin_training_load_value_field: Optional[str] = None
    garmin_recovery_time_value_field: Optional[str] = None


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
