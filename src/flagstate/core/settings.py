"""Environment-driven settings for flagstate.

``FlagStateSettings`` reads ``FLAGSTATE_*`` environment variables (and a
``.env`` file when present) through pydantic-settings. The register itself
takes no configuration; settings cover logging and the default bit width used
by ``validate_mask``.

Examples:
    >>> import os
    >>> os.environ["FLAGSTATE_FLAG_WIDTH"] = "16"
    >>> reset_settings()
    >>> get_settings().flag_width
    16

Tags:
    settings, configuration, pydantic, environment, flagstate
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from flagstate.core.errors import ConfigError

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class FlagStateSettings(BaseSettings):
    """Process-wide flagstate settings.

    Fields
    ──────
    log_level    : structlog filtering level
    log_json     : JSON output; None auto-detects (JSON when stdout is not a tty)
    service_name : ``service.name`` attached to every log record
    flag_width   : default bit width enforced by ``validate_mask``
    """

    model_config = SettingsConfigDict(
        env_prefix="FLAGSTATE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Observability ────────────────────────────────────────────
    log_level: str = "INFO"
    log_json: bool | None = None
    service_name: str = "flagstate"

    # ── Flags ────────────────────────────────────────────────────
    flag_width: int = Field(default=32, ge=1, le=64, description="Bit width of a register")

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level


@lru_cache(maxsize=1)
def get_settings() -> FlagStateSettings:
    """Return the cached settings, loading them on first use.

    Raises:
        ConfigError: If an environment value fails validation
    """
    try:
        return FlagStateSettings()
    except ValidationError as exc:
        raise ConfigError(f"Invalid flagstate settings: {exc}", cause=exc) from exc


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    get_settings.cache_clear()


__all__ = ["FlagStateSettings", "get_settings", "reset_settings"]
