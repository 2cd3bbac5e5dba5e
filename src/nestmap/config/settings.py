"""
Settings configuration using pydantic-settings.

Loads configuration from:
1. Constructor arguments (highest precedence)
2. Environment variables with NESTMAP_ prefix
3. Field defaults

Example:
  NESTMAP_WARN_ON_MISS=false
  NESTMAP_MISS_LOG_LEVEL=debug
  NESTMAP_JSON_INDENT=2
"""

import logging as _logging
import typing as _typing

import pydantic as _pydantic
import pydantic_settings as _pydantic_settings

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings(_pydantic_settings.BaseSettings):
    """
    nestmap settings.

    All settings can be overridden via environment variables with the
    NESTMAP_ prefix, e.g. NESTMAP_JSON_SORT_KEYS=true.
    """

    model_config = _pydantic_settings.SettingsConfigDict(
        env_prefix="NESTMAP_",
        extra="ignore",
    )

    warn_on_miss: bool = _pydantic.Field(
        default=True,
        description="Log a diagnostic when a dotted lookup misses mid-path",
    )
    miss_log_level: str = _pydantic.Field(
        default="WARNING",
        description="Logging level used for lookup-miss diagnostics",
    )
    json_indent: int | None = _pydantic.Field(
        default=None,
        ge=0,
        description="Indentation for to_json() output (None = compact)",
    )
    json_sort_keys: bool = _pydantic.Field(
        default=False,
        description="Sort keys in to_json() output",
    )
    yaml_sort_keys: bool = _pydantic.Field(
        default=False,
        description="Sort keys in to_yaml() output",
    )

    @_pydantic.field_validator("miss_log_level")
    @classmethod
    def _validate_miss_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(
                f"miss_log_level must be one of {', '.join(_LOG_LEVELS)}, got {value!r}"
            )
        return level

    @property
    def miss_log_levelno(self) -> int:
        """Numeric logging level for lookup-miss diagnostics."""
        return _typing.cast(int, _logging.getLevelName(self.miss_log_level))


_settings: Settings | None = None


def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first use."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Forget the cached settings so the next get_settings() reloads them."""
    global _settings
    _settings = None
