"""Configuration management for neo-authz."""

from .settings import AuthorizationSettings, get_settings, DEFAULT_LOG_FORMAT
from .logging_config import setup_logging

__all__ = [
    "AuthorizationSettings",
    "get_settings",
    "DEFAULT_LOG_FORMAT",
    "setup_logging",
]
