"""Configuration management for the special action engine.

Settings are loaded with pydantic-settings from environment variables
and an optional ``.env`` file.

Example:
    >>> from special_actions.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.engine.advantage_rule
    'cancel'

Environment Variables:
    SPECIAL_ACTIONS_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    SPECIAL_ACTIONS_JSON_LOGS: Emit JSON log lines instead of console output
    SPECIAL_ACTIONS_LOG_FILE: Optional file for standard library log records
    SPECIAL_ACTIONS_ENGINE_ADVANTAGE_RULE: 'cancel' or 'sequential'
    SPECIAL_ACTIONS_ENGINE_DICE_SEED: Seed for the default combat state's dice
    SPECIAL_ACTIONS_LIBRARY_EXPORT_VERSION: Version string written to template exports
    SPECIAL_ACTIONS_LIBRARY_LOAD_DEFAULT_TEMPLATES: Preload the built-in templates
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from special_actions.core.exceptions import ConfigurationError


class EngineSettings(BaseSettings):
    """Configuration for rules resolution.

    Attributes:
        advantage_rule: How a save rolled with both advantage and
            disadvantage is resolved. ``cancel`` rolls a single d20;
            ``sequential`` applies advantage then disadvantage against a
            third die.
        dice_seed: Optional seed for the default combat state's dice.
    """

    model_config = SettingsConfigDict(
        env_prefix="SPECIAL_ACTIONS_ENGINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    advantage_rule: Literal["cancel", "sequential"] = Field(
        default="cancel",
        description="Resolution of simultaneous advantage and disadvantage",
    )
    dice_seed: int | None = Field(
        default=None,
        description="Seed for reproducible fallback dice",
    )


class LibrarySettings(BaseSettings):
    """Configuration for the template library.

    Attributes:
        export_version: Version string stamped on template exports.
        load_default_templates: Whether new libraries preload built-ins.
    """

    model_config = SettingsConfigDict(
        env_prefix="SPECIAL_ACTIONS_LIBRARY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    export_version: str = Field(
        default="1.0.0",
        description="Version written to template exports",
    )
    load_default_templates: bool = Field(
        default=True,
        description="Preload the built-in creature templates",
    )

    @field_validator("export_version", mode="after")
    @classmethod
    def validate_export_version(cls, value: str) -> str:
        """Reject blank export versions.

        Raises:
            ConfigurationError: If the version is empty.
        """
        if not value.strip():
            raise ConfigurationError(
                "export_version must not be empty",
                config_key="export_version",
            )
        return value


class Settings(BaseSettings):
    """Main application settings aggregating all configuration domains.

    Attributes:
        app_name: Application name.
        debug: Enable debug mode.
        log_level: Application logging level.
        json_logs: Render logs as JSON.
        log_file: Optional file for standard library log records.
        engine: Rules engine settings.
        library: Template library settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="SPECIAL_ACTIONS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(
        default="Special Actions Engine",
        description="Application name",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    json_logs: bool = Field(
        default=False,
        description="Render logs as JSON",
    )
    log_file: str | None = Field(
        default=None,
        description="Also write standard library log records to this file",
    )

    engine: EngineSettings = Field(default_factory=EngineSettings)
    library: LibrarySettings = Field(default_factory=LibrarySettings)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The application Settings instance.

    Raises:
        ConfigurationError: If configuration is invalid.
    """
    try:
        return Settings()
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access."""
    get_settings.cache_clear()


__all__ = [
    "EngineSettings",
    "LibrarySettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
