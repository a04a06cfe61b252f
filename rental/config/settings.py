"""
Application settings and configuration.

This module provides a centralized configuration management system using Pydantic.
It loads settings from environment variables, .env files, or falls back to defaults.
"""

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, validator
from dotenv import load_dotenv

# Load environment variables from .env file if present
load_dotenv()

# Base directories
ROOT_DIR = Path(__file__).parent.parent.parent
LOG_DIR = ROOT_DIR / "logs"


class RentalPolicySettings(BaseModel):
    """Rental-term policy configuration."""

    rental_term_days: int = Field(
        default=14,
        description="Number of days between renting an item and its due date"
    )

    @validator("rental_term_days")
    def rental_term_must_be_positive(cls, v):
        """Validate that the rental term is at least one day."""
        if v < 1:
            raise ValueError("Rental term must be at least 1 day")
        return v


class LoggingSettings(BaseModel):
    """Logging configuration settings."""

    level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log message format"
    )

    file_enabled: bool = Field(
        default=False,
        description="Whether to write logs to a file"
    )

    console_enabled: bool = Field(
        default=True,
        description="Whether to write logs to console"
    )

    @validator("level")
    def validate_log_level(cls, v):
        """Validate that log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v.upper()


class Settings(BaseModel):
    """Main application settings."""

    app_name: str = Field(
        default="Rental Card Service",
        description="Application name"
    )

    app_version: str = Field(
        default="0.1.0",
        description="Application version"
    )

    policy: RentalPolicySettings = Field(default_factory=lambda: RentalPolicySettings(
        rental_term_days=int(os.environ.get("RENTAL_TERM_DAYS", "14"))
    ))

    logging: LoggingSettings = Field(default_factory=lambda: LoggingSettings(
        level=os.environ.get("LOG_LEVEL", "INFO"),
        format=os.environ.get("LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
        file_enabled=_parse_bool(os.environ.get("LOG_FILE_ENABLED", "False")),
        console_enabled=_parse_bool(os.environ.get("LOG_CONSOLE_ENABLED", "True"))
    ))

    logs_dir: Path = LOG_DIR

    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )

    def __init__(self, **data: Any):
        """Initialize settings, applying the debug-mode override from the environment."""
        super().__init__(**data)

        self.debug_mode = _parse_bool(os.environ.get("DEBUG_MODE", str(self.debug_mode)))

    def effective_log_level(self) -> str:
        """Logging level to use, forced to DEBUG in debug mode."""
        return "DEBUG" if self.debug_mode else self.logging.level


def _parse_bool(value: str) -> bool:
    """Parse string to boolean."""
    return value.lower() in ("true", "1", "t", "yes", "y")
