"""
Configuration module for nestmap.

Uses pydantic-settings for environment variable loading.
"""

from nestmap.config.settings import Settings, get_settings, reset_settings

__all__ = ["Settings", "get_settings", "reset_settings"]
