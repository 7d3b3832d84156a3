from __future__ import annotations

from functools import lru_cache
from typing import List

from pydantic import AnyHttpUrl, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses Pydantic BaseSettings to load configuration with validation and defaults where appropriate.
    """

    # App
    APP_NAME: str = Field(default="Jira Issue Composer", description="Application display name")
    APP_ENV: str = Field(default="development", description="Application environment")
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    ALLOW_ORIGINS: List[str] = Field(
        default=["*"], description="CORS allowed origins list"
    )

    # JIRA
    JIRA_BASE_URL: AnyHttpUrl = Field(
        ..., description="Base URL for JIRA instance, e.g., https://your-domain.atlassian.net"
    )
    JIRA_EMAIL: str = Field(..., min_length=1, description="JIRA account email for API auth")
    JIRA_API_TOKEN: str = Field(..., min_length=1, description="JIRA API token for API auth")

    # HTTP
    REQUEST_TIMEOUT_SECONDS: float = Field(
        default=30.0, gt=0, description="Default request timeout in seconds for outbound HTTP"
    )

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore")

    @field_validator("LOG_LEVEL")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = (value or "").upper().strip()
        if level not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError(f"LOG_LEVEL must be a standard logging level, got {value!r}")
        return level


# PUBLIC_INTERFACE
@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached application settings instance."""
    return Settings()
