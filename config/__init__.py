"""
Configuration package for Confecção OP.

Exports:
- Settings: Application settings
- Constants: Application constants
"""

from .settings import Settings, get_settings, reset_settings
from .constants import (
    APP_NAME,
    APP_VERSION,
    APP_ORGANIZATION,
    SIZE_SEPARATOR,
    SIZE_MARKER,
    LETTER_SIZE_WEIGHTS,
    ORDER_STATUSES,
    RECONCILIATION_STATUSES,
    ERROR_MESSAGES,
)

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    "reset_settings",
    # Constants
    "APP_NAME",
    "APP_VERSION",
    "APP_ORGANIZATION",
    "SIZE_SEPARATOR",
    "SIZE_MARKER",
    "LETTER_SIZE_WEIGHTS",
    "ORDER_STATUSES",
    "RECONCILIATION_STATUSES",
    "ERROR_MESSAGES",
]
