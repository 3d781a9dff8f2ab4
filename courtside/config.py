"""Configuration management using Pydantic Settings.

This module provides centralized configuration for the Courtside tracker,
supporting environment variables and .env file loading.

Example:
    >>> from courtside.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.quarter_seconds)
    720
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables.

    All settings can be overridden via environment variables or .env file.
    Environment variables take precedence over .env file values.

    Attributes:
        quarter_seconds: Length of one quarter in seconds.
        quarters: Number of regulation quarters per game.
        tick_interval: Seconds between clock ticks.
        scoring_mode: Which team a scoring event credits ("home" or "team").
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_dir: Directory for log files.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Game clock
    quarter_seconds: int = Field(
        default=720,
        alias="COURTSIDE_QUARTER_SECONDS",
        gt=0,
        description="Length of one quarter in seconds",
    )
    quarters: int = Field(
        default=4,
        alias="COURTSIDE_QUARTERS",
        ge=1,
        description="Number of regulation quarters",
    )
    tick_interval: float = Field(
        default=1.0,
        alias="COURTSIDE_TICK_INTERVAL",
        gt=0.0,
        description="Seconds between clock ticks",
    )

    # Scoring
    scoring_mode: Literal["home", "team"] = Field(
        default="home",
        alias="COURTSIDE_SCORING_MODE",
        description="Credit every score to the home team, or to the player's team",
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

    @field_validator("log_dir")
    @classmethod
    def validate_path(cls, v: str) -> str:
        """Ensure path strings are valid."""
        if not v or v.isspace():
            raise ValueError("Path cannot be empty or whitespace")
        return v

    @property
    def log_dir_obj(self) -> Path:
        """Return log directory as Path object."""
        return Path(self.log_dir)


# Singleton pattern for settings
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        Settings instance loaded from environment.

    Example:
        >>> settings = get_settings()
        >>> print(settings.scoring_mode)
        home
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset the settings singleton (useful for testing)."""
    global _settings
    _settings = None
