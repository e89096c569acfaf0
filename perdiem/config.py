"""Typed settings configuration - single source of truth."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", env_prefix="PERDIEM_", extra="ignore"
    )

    # Time zones
    default_home_tz: str = "America/New_York"

    # Hotel defaults (local hours in destination time)
    hotel_check_in_hour: float = 14.0
    hotel_check_out_hour: float = 11.0

    # Transport legs (minutes)
    transport_default_duration_min: int = 30

    # Timeline windows (hours)
    render_slack_hours: float = 24.0
    dest_midnight_lower_bound_hours: float = -12.0

    # Offset memoization
    offset_cache_size: int = 4096

    # Per-diem rate tables
    us_per_diem_csv: str | None = None
    foreign_per_diem_csv: str | None = None

    # Currency
    reporting_currency: str = "USD"
    mileage_rate: float = 0.70
    fx_rates_path: str | None = None

    # Server
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # Logging
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
