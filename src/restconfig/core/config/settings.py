"""
Process settings for restconfig itself.

These are not REST client properties. They control how the builder
behaves (collision policy, default ordinal for ad-hoc sources) and how it
logs. Values come from ``RESTCONFIG_*`` environment variables or a
``.env`` file.

Tags:
    restconfig, configuration, settings, pydantic, caching

Doc-Types:
    api-reference
"""

from __future__ import annotations

from enum import Enum

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from restconfig.core.config.sources import DEFAULT_ORDINAL


class CollisionPolicy(str, Enum):
    """What the alias builder does when two clients claim the same alias."""

    ERROR = "error"
    LAST_WINS = "last-wins"


class RestConfigSettings(BaseSettings):
    """Restconfig settings.

    All fields can be set via ``RESTCONFIG_*`` environment variables (e.g.
    ``RESTCONFIG_ALIAS_COLLISION_POLICY=last-wins``).
    """

    model_config = SettingsConfigDict(
        env_prefix="RESTCONFIG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Aliases ──────────────────────────────────────────────────
    alias_collision_policy: CollisionPolicy = Field(default=CollisionPolicy.ERROR)

    # ── Sources ──────────────────────────────────────────────────
    default_ordinal: int = Field(
        default=DEFAULT_ORDINAL,
        description="Ordinal given to sources that do not declare one",
    )

    # ── Logging ──────────────────────────────────────────────────
    log_level: str = Field(default="WARNING")
    log_format: str = Field(default="console")

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        level = value.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {value}")
        return level

    @property
    def json_logs(self) -> bool:
        return self.log_format == "json"


_settings_cache: dict[str, RestConfigSettings] = {}


def get_settings(*, _force_reload: bool = False) -> RestConfigSettings:
    """Load, validate, and cache a :class:`RestConfigSettings` instance."""
    if not _force_reload and "default" in _settings_cache:
        return _settings_cache["default"]

    settings = RestConfigSettings()
    _settings_cache["default"] = settings
    return settings


def clear_settings_cache() -> None:
    """Clear the settings cache (primarily for testing)."""
    _settings_cache.clear()
