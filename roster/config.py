"""Configuration loading for the Roster student data layer.

This module provides centralized configuration management:
- Load settings from environment variables and .env files
- Validate configuration using pydantic
- Provide typed access to all settings
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment.

    Uses pydantic-settings for environment variable handling with
    .env file support via python-dotenv.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Search configuration
    search_debounce_ms: int = Field(
        default=300,
        description="Quiet period in milliseconds before a search term applies",
    )

    # Simulated course catalog
    catalog_delay_ms: int = Field(
        default=600,
        description="Simulated latency of a course catalog fetch",
    )
    catalog_failure_rate: float = Field(
        default=0.1,
        description="Probability that a course catalog fetch fails",
    )

    # Simulated remote validation
    remote_validation_delay_ms: int = Field(
        default=300,
        description="Simulated latency of the remote uniqueness check",
    )
    taken_emails: list[str] = Field(
        default_factory=lambda: ["test@example.com", "admin@test.com"],
        description="Emails the simulated backend reports as already in use",
    )

    # Logging configuration
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Log level",
    )
    log_format: Literal["json", "text"] = Field(
        default="text",
        description="Log format",
    )

    # Development
    debug: bool = Field(
        default=False,
        description="Enable debug mode with verbose output",
    )

    @field_validator("search_debounce_ms", "catalog_delay_ms", "remote_validation_delay_ms")
    @classmethod
    def validate_delay(cls, v: int) -> int:
        """Ensure delays are non-negative."""
        if v < 0:
            raise ValueError("delays must be non-negative")
        return v

    @field_validator("catalog_failure_rate")
    @classmethod
    def validate_failure_rate(cls, v: float) -> float:
        """Ensure the failure rate is a probability."""
        if not 0.0 <= v <= 1.0:
            raise ValueError("catalog_failure_rate must be between 0 and 1")
        return v


def load_settings(env_file: str | None = None) -> Settings:
    """Load application settings from environment.

    Args:
        env_file: Optional path to .env file. If not provided,
                 uses the default .env in the current directory.

    Returns:
        Validated Settings instance.

    Raises:
        ValidationError: If settings validation fails.
    """
    if env_file:
        return Settings(_env_file=env_file)  # type: ignore[call-arg]
    return Settings()


__all__ = ["Settings", "load_settings"]
