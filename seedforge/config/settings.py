"""
Library settings and logging configuration.
"""

import logging
import sys
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """seedforge settings with environment variable support."""

    # Logging
    log_level: str = Field(default="WARNING", description="Log level for seedforge")
    track_operations: bool = Field(
        default=True,
        description="Emit operation_started/completed/failed events for factories",
    )

    # Attributes
    path_separator: str = Field(
        default=".", description="Separator used in dotted attribute names"
    )

    # Compatibility
    deprecation_warnings: bool = Field(
        default=True, description="Warn when legacy before()/after() hooks are used"
    )

    class Config:
        env_prefix = "SEEDFORGE_"
        env_file = ".env"
        extra = "ignore"

    @field_validator("path_separator")
    @classmethod
    def _separator_not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("path_separator must not be empty")
        return value

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure logging with development-friendly structured output.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Defaults to the configured ``log_level`` setting.
    """
    from ..utils.logging.structured import create_development_formatter

    log_level = getattr(logging, (level or get_settings().log_level).upper())

    # Configure only the library logger (seedforge.*)
    app_logger = logging.getLogger("seedforge")
    app_logger.setLevel(log_level)

    for handler in app_logger.handlers[:]:
        app_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(create_development_formatter())
    app_logger.addHandler(console_handler)

    # Prevent propagation to root logger to avoid duplication
    app_logger.propagate = False


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next get_settings() re-reads the environment."""
    global _settings
    _settings = None
