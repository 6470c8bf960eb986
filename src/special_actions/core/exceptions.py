"""Custom exception hierarchy for the special action engine.

All exceptions inherit from SpecialActionsError so callers can handle
every engine failure at a single boundary while still receiving
domain-specific context in ``details``.

The engine's public operations do not let these escape: action lookup
and availability failures become ``None`` returns, effect failures become
failed sub-results and listener failures are logged. They are raised
inside the engine and by data-loading entry points such as
``Creature.from_dict``.

Example:
    >>> from special_actions.core.exceptions import ActionNotFoundError
    >>> raise ActionNotFoundError("Unknown action", action_id="tail_attack")
"""

from __future__ import annotations

from typing import Any


class SpecialActionsError(Exception):
    """Base exception for all special action engine errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        """Return a detailed string representation of the exception.

        Returns:
            String representation suitable for debugging.
        """
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Game Engine Domain Exceptions
# =============================================================================


class GameEngineError(SpecialActionsError):
    """Base exception for all rules engine errors."""


class ActionNotFoundError(GameEngineError):
    """Raised when an action id is not part of a creature's catalog."""

    def __init__(
        self,
        message: str,
        *,
        action_id: str | None = None,
        creature_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with action lookup context.

        Args:
            message: Human-readable error description.
            action_id: The action id that was requested.
            creature_id: The creature whose catalog was searched.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if action_id:
            combined_details["action_id"] = action_id
        if creature_id:
            combined_details["creature_id"] = creature_id
        super().__init__(message, details=combined_details)


class ActionUnavailableError(GameEngineError):
    """Raised when an action exists but its resource economy forbids it.

    Typical causes are an exhausted legendary pool, an inactive mythic
    phase, an uncharged recharge ability or a reaction whose trigger does
    not match the current event.
    """

    def __init__(
        self,
        message: str,
        *,
        action_id: str | None = None,
        action_type: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with availability context.

        Args:
            message: Human-readable error description.
            action_id: The action that failed the availability check.
            action_type: The action's type tag.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if action_id:
            combined_details["action_id"] = action_id
        if action_type:
            combined_details["action_type"] = action_type
        super().__init__(message, details=combined_details)


class EffectApplicationError(GameEngineError):
    """Raised while applying a single effect of an action.

    The interpreter catches this per effect, records the effect as failed
    and keeps resolving the remaining effects.
    """

    def __init__(
        self,
        message: str,
        *,
        effect_type: str | None = None,
        target_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with effect context.

        Args:
            message: Human-readable error description.
            effect_type: Type tag of the effect being applied.
            target_id: Combatant the effect was being applied to, if any.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if effect_type:
            combined_details["effect_type"] = effect_type
        if target_id:
            combined_details["target_id"] = target_id
        super().__init__(message, details=combined_details)


class DiceRollError(GameEngineError):
    """Raised when dice notation cannot be parsed or rolled."""

    def __init__(
        self,
        message: str,
        *,
        expression: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize dice roll error with expression context.

        Args:
            message: Human-readable error description.
            expression: The dice expression that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if expression:
            combined_details["expression"] = expression
        super().__init__(message, details=combined_details)


class ListenerError(SpecialActionsError):
    """Wraps an exception raised by an event listener.

    Only ever logged by the notifier, never raised to the caller of the
    operation that emitted the event.
    """

    def __init__(
        self,
        message: str,
        *,
        event: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize listener error with event context.

        Args:
            message: Human-readable error description.
            event: The event being delivered when the listener failed.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if event:
            combined_details["event"] = event
        super().__init__(message, details=combined_details)


# =============================================================================
# Template Library Exceptions
# =============================================================================


class TemplateError(SpecialActionsError):
    """Base exception for template library errors."""


class TemplateNotFoundError(TemplateError):
    """Raised when a template id is not in the library."""

    def __init__(
        self,
        message: str,
        *,
        template_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with template lookup context.

        Args:
            message: Human-readable error description.
            template_id: The template id that was requested.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if template_id:
            combined_details["template_id"] = template_id
        super().__init__(message, details=combined_details)


class TemplateImportError(TemplateError):
    """Raised when a template export document cannot be read."""


# =============================================================================
# Configuration & Validation Exceptions
# =============================================================================


class ConfigurationError(SpecialActionsError):
    """Raised when application configuration is invalid."""

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with config key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


class ValidationError(SpecialActionsError):
    """Raised when creature, action or template data fails validation."""

    def __init__(
        self,
        message: str,
        *,
        field_name: str | None = None,
        invalid_value: Any | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize validation error with field context.

        Args:
            message: Human-readable error description.
            field_name: Name of the field that failed validation.
            invalid_value: The value that failed validation.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if field_name:
            combined_details["field_name"] = field_name
        if invalid_value is not None:
            combined_details["invalid_value"] = invalid_value
        super().__init__(message, details=combined_details)


__all__ = [
    # Base exception
    "SpecialActionsError",
    # Game engine exceptions
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
]
