"""Core module - configuration, errors, and dependencies"""

from .config import Settings, get_settings
from .errors import AppError, ErrorCode

__all__ = [
    "AppError",
    "ErrorCode",
    "Settings",
    "get_settings",
]
