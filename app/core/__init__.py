"""Core: config, rate limiting, and application bootstrap.

Single place for settings and request throttling.
"""

from app.core.config import get_settings

__all__ = ["get_settings"]
