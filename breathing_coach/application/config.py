"""Application configuration using Pydantic Settings."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application settings
    app_name: str = "breathing-coach"
    app_version: str = "0.1.0"
    debug: bool = False

    # API settings
    api_host: str = "127.0.0.1"
    api_port: int = 8000

    # Logging
    log_level: str = "INFO"

    # Session settings
    session_duration_seconds: int = Field(default=180, ge=1)
    daily_goal: int = Field(default=5, ge=1)
    tick_interval_seconds: float = Field(default=1.0, gt=0)
    view_push_interval_seconds: float = Field(default=1.0, gt=0)

    # Quota persistence
    storage_backend: Literal["local", "file", "dynamodb"] = "file"
    storage_file_path: str = "breathing_quota.json"
    quota_date_key: str = "meditationDate"
    quota_count_key: str = "meditationCount"

    # AWS settings for the DynamoDB backend
    aws_region: str = "us-west-2"
    quota_table_name: str = "BreathingQuota"


# Create a singleton instance
settings = Settings()
