"""Structured logging configuration for the special action engine.

This module configures logging with structlog so engine diagnostics
(unavailable actions, failed effects, bad dice notation, listener
errors) come out as key/value events, human-readable in development and
JSON in production.

Example:
    >>> from special_actions.core.logging import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("Action used", creature="Adult Red Dragon", action="tail_attack")
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog
from structlog.types import Processor

from special_actions.core.exceptions import ConfigurationError


if TYPE_CHECKING:
    from structlog.types import EventDict, WrappedLogger


APP_NAME = "special_actions"

_STDLIB_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def add_app_context(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Tag every event with the engine's name."""
    event_dict["app"] = APP_NAME
    return event_dict


def _resolve_level(level: str) -> int:
    """Map a level name to its stdlib number.

    Raises:
        ConfigurationError: If the name is not a logging level.
    """
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ConfigurationError(f"Unknown log level: {level}", config_key="log_level")
    return resolved


def _renderer(json_format: bool) -> list[Processor]:
    if json_format:
        return [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    return [
        structlog.dev.ConsoleRenderer(
            colors=True,
            exception_formatter=structlog.dev.plain_traceback,
        ),
    ]


def configure_logging(
    *,
    level: str = "INFO",
    json_format: bool = False,
    log_file: str | None = None,
) -> None:
    """Configure engine-wide logging.

    Structlog events are printed to stdout. Standard library records
    (from the host application or libraries) go to stdout too, and also
    to ``log_file`` when one is given.

    Args:
        level: The logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_format: If True, render one JSON object per line.
        log_file: Optional path that also receives standard library records.

    Raises:
        ConfigurationError: If ``level`` is not a logging level.

    Example:
        >>> configure_logging(level="DEBUG", json_format=False)
    """
    numeric_level = _resolve_level(level)

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        add_app_context,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        *_renderer(json_format),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format=_STDLIB_FORMAT,
        level=numeric_level,
        stream=sys.stdout,
        force=True,
    )

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(logging.Formatter(_STDLIB_FORMAT))
        logging.getLogger().addHandler(file_handler)


def configure_logging_from_settings() -> None:
    """Configure logging from the cached application settings.

    Reads ``log_level``, ``json_logs`` and ``log_file`` from ``get_settings()``.
    """
    from special_actions.core.config import get_settings

    settings = get_settings()
    configure_logging(
        level=settings.log_level,
        json_format=settings.json_logs,
        log_file=settings.log_file,
    )


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a logger, typically with ``__name__``."""
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Bind context variables that will be included in all subsequent logs.

    Useful for tagging every engine event of one encounter.

    Args:
        **kwargs: Key-value pairs to bind to the logging context.

    Example:
        >>> bind_context(encounter_id="dragon-lair", round=3)
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Clear all bound context variables."""
    structlog.contextvars.clear_contextvars()


__all__ = [
    "APP_NAME",
    "add_app_context",
    "configure_logging",
    "configure_logging_from_settings",
    "get_logger",
    "bind_context",
    "clear_context",
]
