"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", env_prefix="SCHEDULE_", extra="ignore"
    )

    # Service
    service_name: str = "schedule-engine"
    log_level: str = "INFO"

    # Schedule rules
    amount_tolerance_cents: int = 1  # validator tolerance, 0.01 in currency
    currency_code: str = "PHP"


settings = Settings()
