"""
Logging utilities for the FireSync backend.

Provides standardized logger configuration following privacy rules.

PRIVACY RULES:
- NEVER log a user's full viewing history or profile summaries
- NEVER log raw free-text search queries beyond a short preview
- NEVER log API keys or secrets

Acceptable logging:
- High-level events (e.g., "Surprise recommendations requested")
- Non-sensitive metadata (e.g., "content_type=MOVIES", "items=6")
- Fallback decisions (e.g., "Null output, returning empty list")
- Error classes and sanitized error messages
"""

import logging
from typing import Optional

from firesync.config import settings


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Get a configured logger for the specified module.

    Args:
        name: Module name (typically __name__)
        level: Optional logging level (defaults to settings.LOG_LEVEL)

    Returns:
        Configured logger instance

    Usage:
        >>> from firesync.utils.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("High-level event occurred")
    """
    logger = logging.getLogger(name)

    if level is None:
        level = logging.getLevelName(settings.LOG_LEVEL.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger.setLevel(level)

    # Add handler if not already configured (avoid duplicate handlers)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def preview(text: str, limit: int = 50) -> str:
    """Return a short preview of free text for log lines."""
    if len(text) <= limit:
        return text
    return text[:limit] + "..."
