"""Configuration management for sqlaspect.

Usage:
    >>> from sqlaspect.config import get_settings
    >>> get_settings().default_dialect
    'postgres'
"""

from sqlaspect.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
