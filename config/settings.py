"""
Application settings for Confecção OP.

Loads settings from environment variables or uses defaults.
Provides centralized configuration management.
"""

import os
from typing import Optional
from dataclasses import dataclass

from .constants import (
    APP_VERSION,
    DATE_FORMAT,
    DEFAULT_SORT_KEY,
    DEFAULT_SORT_DIRECTION,
    SORT_DIRECTIONS,
)


@dataclass
class Settings:
    """
    Application settings.

    Can be loaded from environment variables or initialized with defaults.
    """

    # Application info
    app_version: str = APP_VERSION

    # Table defaults
    default_sort_key: str = DEFAULT_SORT_KEY
    default_sort_direction: str = DEFAULT_SORT_DIRECTION

    # Dates are stored as dd-MM-yyyy strings
    date_format: str = DATE_FORMAT

    # Debug settings
    debug_mode: bool = False
    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR

    def __post_init__(self):
        """Validate settings after initialization."""
        if self.default_sort_direction not in SORT_DIRECTIONS:
            raise ValueError(
                f"default_sort_direction must be one of {SORT_DIRECTIONS}"
            )
        self.log_level = self.log_level.upper()

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Load settings from environment variables.

        Environment variables:
        - CONFECCAO_DEFAULT_SORT_KEY: Initial sort column for order tables
        - CONFECCAO_DEFAULT_SORT_DIRECTION: Initial direction (asc/desc)
        - CONFECCAO_DATE_FORMAT: strftime format for stored dates
        - CONFECCAO_DEBUG: Enable debug mode (true/false)
        - CONFECCAO_LOG_LEVEL: Logging level (DEBUG/INFO/WARNING/ERROR)

        Returns:
            Settings instance with values from environment or defaults
        """
        return cls(
            default_sort_key=os.getenv("CONFECCAO_DEFAULT_SORT_KEY", DEFAULT_SORT_KEY),
            default_sort_direction=os.getenv(
                "CONFECCAO_DEFAULT_SORT_DIRECTION", DEFAULT_SORT_DIRECTION
            ).lower(),
            date_format=os.getenv("CONFECCAO_DATE_FORMAT", DATE_FORMAT),
            debug_mode=os.getenv("CONFECCAO_DEBUG", "false").lower() == "true",
            log_level=os.getenv("CONFECCAO_LOG_LEVEL", "INFO"),
        )

    def to_dict(self) -> dict:
        """Convert settings to dictionary for serialization."""
        return {
            "app_version": self.app_version,
            "default_sort_key": self.default_sort_key,
            "default_sort_direction": self.default_sort_direction,
            "date_format": self.date_format,
            "debug_mode": self.debug_mode,
            "log_level": self.log_level,
        }


# Global settings instance (lazy-loaded)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get global settings instance.

    Lazy-loaded on first call. Loads from environment variables.

    Returns:
        Settings instance

    Example:
        >>> from config.settings import get_settings
        >>> settings = get_settings()
        >>> print(settings.default_sort_key)
    """
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def reset_settings():
    """
    Reset global settings instance.

    Useful for testing - forces reload from environment on next get_settings() call.
    """
    global _settings
    _settings = None
