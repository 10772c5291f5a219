"""Application configuration using pydantic-settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Header discovery
    header_scan_rows: int = 10
    min_weekday_tokens: int = 5

    # Date range detection
    date_range_scan_rows: int = 5

    # Programming week (0=Sunday ... 3=Wednesday, the Luxembourg convention)
    default_week_start_day: int = 3
    default_timezone: str = "Europe/Luxembourg"

    # Keywords stripped from titles when no reference format/technology matches
    format_keywords: list[str] = ["3D", "IMAX", "4DX", "ATMOS", "Dolby", "D-BOX", "ScreenX"]
    technology_keywords: list[str] = ["Laser", "IMAX", "Dolby Cinema", "Dolby Atmos", "4DX"]

    # API settings
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # Logging
    log_level: str = "INFO"


# Global settings instance
settings = Settings()
