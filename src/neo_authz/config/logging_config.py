"""Loguru configuration for services embedding the authorization engine."""

import sys
from typing import Optional

from loguru import logger

from .settings import AuthorizationSettings, get_settings


def setup_logging(settings: Optional[AuthorizationSettings] = None) -> None:
    """Replace loguru's default sink with one driven by settings."""
    settings = settings or get_settings()
    
    logger.remove()
    logger.add(
        sys.stderr,
        level=settings.log_level,
        format=settings.log_format,
        backtrace=False,
        diagnose=False,
    )
    logger.debug(f"Logging configured at level {settings.log_level}")
