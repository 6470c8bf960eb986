"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        SpecialActionsError: Base exception for all engine errors.
        GameEngineError and its action/effect/dice subclasses.
        TemplateError and its lookup/import subclasses.

    Configuration:
        Settings: Main application settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        get_logger: Get a configured logger instance.
        bind_context: Add context to log entries.
        clear_context: Clear logging context.
"""

from __future__ import annotations

from special_actions.core.config import (
    EngineSettings,
    LibrarySettings,
    Settings,
    clear_settings_cache,
    get_settings,
)
from special_actions.core.exceptions import (
    ActionNotFoundError,
    ActionUnavailableError,
    ConfigurationError,
    DiceRollError,
    EffectApplicationError,
    GameEngineError,
    ListenerError,
    SpecialActionsError,
    TemplateError,
    TemplateImportError,
    TemplateNotFoundError,
    ValidationError,
)
from special_actions.core.logging import (
    bind_context,
    clear_context,
    configure_logging,
    configure_logging_from_settings,
    get_logger,
)


__all__ = [
    # Base exception
    "SpecialActionsError",
    # Engine exceptions
    "GameEngineError",
    "ActionNotFoundError",
    "ActionUnavailableError",
    "EffectApplicationError",
    "DiceRollError",
    "ListenerError",
    # Template exceptions
    "TemplateError",
    "TemplateNotFoundError",
    "TemplateImportError",
    # Configuration exceptions
    "ConfigurationError",
    "ValidationError",
    # Configuration
    "Settings",
    "EngineSettings",
    "LibrarySettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "configure_logging_from_settings",
    "get_logger",
    "bind_context",
    "clear_context",
]
