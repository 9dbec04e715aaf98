"""Configuration management using Pydantic Settings.

This module provides centralized configuration for the stats tracker,
supporting environment variables and .env file loading.

Example:
    >>> from hoopstats.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.period_minutes)
    12
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables.

    All settings can be overridden via environment variables or .env file.
    Environment variables take precedence over .env file values.

    Attributes:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_dir: Directory for log files.
        log_rotation: Loguru rotation rule for the log file.
        log_retention: Loguru retention rule for rotated log files.
        log_serialize: Whether the log file is written as JSON lines.
        high_rating_threshold: Metric value at or above which a rating is high.
        medium_rating_threshold: Metric value at or above which a rating is medium.
        regulation_periods: Number of regulation periods in a game.
        period_minutes: Length of a regulation period in minutes.
        overtime_minutes: Length of an overtime period in minutes.
        foul_out_limit: Personal fouls after which a player is disqualified.
        display_decimals: Decimal places used for rendered numbers.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        alias="LOG_LEVEL",
        description="Logging level",
    )
    log_dir: str = Field(
        default="logs",
        alias="LOG_DIR",
        description="Directory for log files",
    )
    log_rotation: str = Field(
        default="1 day",
        alias="LOG_ROTATION",
        description="When to rotate the log file",
    )
    log_retention: str = Field(
        default="30 days",
        alias="LOG_RETENTION",
        description="How long rotated log files are kept",
    )
    log_serialize: bool = Field(
        default=True,
        alias="LOG_SERIALIZE",
        description="Write the log file as JSON lines",
    )

    # Rating badges
    high_rating_threshold: float = Field(
        default=15.0,
        alias="HIGH_RATING_THRESHOLD",
        description="EFF/GmSc/IoS value at or above which a rating is high",
    )
    medium_rating_threshold: float = Field(
        default=10.0,
        alias="MEDIUM_RATING_THRESHOLD",
        description="EFF/GmSc/IoS value at or above which a rating is medium",
    )

    # Game clock
    regulation_periods: int = Field(
        default=4,
        alias="REGULATION_PERIODS",
        ge=1,
        description="Number of regulation periods",
    )
    period_minutes: int = Field(
        default=12,
        alias="PERIOD_MINUTES",
        ge=1,
        le=60,
        description="Regulation period length in minutes",
    )
    overtime_minutes: int = Field(
        default=5,
        alias="OVERTIME_MINUTES",
        ge=1,
        le=60,
        description="Overtime period length in minutes",
    )
    foul_out_limit: int = Field(
        default=5,
        alias="FOUL_OUT_LIMIT",
        ge=1,
        description="Personal fouls allowed before disqualification",
    )

    # Display
    display_decimals: int = Field(
        default=1,
        alias="DISPLAY_DECIMALS",
        ge=0,
        le=4,
        description="Decimal places for rendered numbers",
    )

    @field_validator("log_dir")
    @classmethod
    def validate_path(cls, v: str) -> str:
        """Ensure path strings are valid."""
        if not v or v.isspace():
            raise ValueError("Path cannot be empty or whitespace")
        return v

    @model_validator(mode="after")
    def validate_rating_thresholds(self) -> Settings:
        """Ensure the medium badge threshold does not exceed the high one."""
        if self.medium_rating_threshold > self.high_rating_threshold:
            raise ValueError(
                "medium_rating_threshold cannot exceed high_rating_threshold"
            )
        return self

    @property
    def log_dir_obj(self) -> Path:
        """Return log directory as Path object."""
        return Path(self.log_dir)

    def period_length_seconds(self, period: int) -> int:
        """Return the clock length of a period in seconds.

        Args:
            period: 1-based period number; periods past regulation are overtime.

        Returns:
            Period length in seconds.
        """
        if period <= self.regulation_periods:
            return self.period_minutes * 60
        return self.overtime_minutes * 60

    def ensure_directories(self) -> None:
        """Create required directories if they don't exist."""
        self.log_dir_obj.mkdir(parents=True, exist_ok=True)


# Singleton pattern for settings
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        Settings instance loaded from environment.

    Example:
        >>> settings = get_settings()
        >>> print(settings.high_rating_threshold)
        15.0
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset the settings singleton (useful for testing)."""
    global _settings
    _settings = None
