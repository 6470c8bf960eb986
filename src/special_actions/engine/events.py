"""Synchronous event notification for creature lifecycle changes."""

from __future__ import annotations

from collections.abc import Callable
from enum import StrEnum
from typing import Any

from special_actions.core.exceptions import ListenerError
from special_actions.core.logging import get_logger


logger = get_logger(__name__)


class CreatureEvent(StrEnum):
    """Events emitted by a creature."""

    ACTION_ADDED = "action_added"
    ACTION_REMOVED = "action_removed"
    ACTION_USED = "action_used"
    LEGENDARY_ACTIONS_RESET = "legendary_actions_reset"
    MYTHIC_ACTIONS_RESET = "mythic_actions_reset"
    VILLAIN_ACTIONS_RESET = "villain_actions_reset"
    MYTHIC_PHASE_ACTIVATED = "mythic_phase_activated"
    MYTHIC_PHASE_DEACTIVATED = "mythic_phase_deactivated"
    PARAGON_PHASE_ADVANCED = "paragon_phase_advanced"
    ABILITY_RECHARGED = "ability_recharged"


Listener = Callable[[CreatureEvent, dict[str, Any]], None]


class EventNotifier:
    """Listener registry that delivers events in registration order.

    A listener that raises is logged and skipped; the remaining listeners
    still run and the operation that emitted the event is unaffected.

    Example:
        >>> notifier = EventNotifier()
        >>> remove = notifier.add_listener(lambda event, data: print(event))
        >>> notifier.notify(CreatureEvent.ACTION_USED, {"action_id": "bite"})
        >>> remove()
    """

    def __init__(self) -> None:
        """Initialize with no listeners."""
        self._listeners: list[Listener] = []

    def add_listener(self, listener: Listener) -> Callable[[], None]:
        """Register a listener.

        Args:
            listener: Called as ``listener(event, data)``.

        Returns:
            A function that unregisters the listener. Calling it more than
            once is harmless.
        """
        if not callable(listener):
            logger.error("Listener is not callable", listener=repr(listener))
            return lambda: None

        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    def notify(self, event: CreatureEvent, data: dict[str, Any] | None = None) -> None:
        """Deliver an event to every listener.

        Args:
            event: The event being emitted.
            data: Event payload.
        """
        payload = data or {}
        for listener in list(self._listeners):
            try:
                listener(event, payload)
            except Exception as exc:
                error = ListenerError(f"Listener raised: {exc}", event=event.value)
                logger.exception(
                    "Event handler error",
                    creature_event=event.value,
                    error=error.message,
                )

    def __len__(self) -> int:
        return len(self._listeners)


__all__ = [
    "CreatureEvent",
    "Listener",
    "EventNotifier",
]
