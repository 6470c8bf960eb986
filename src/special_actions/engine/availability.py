"""Action availability.

Each action type draws on its own economy. These functions only read the
creature and the combat state; nothing here mutates either.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from special_actions.core.logging import get_logger
from special_actions.engine.combat_state import CombatStateInterface
from special_actions.models.actions import Action, Trigger, TriggerEvent
from special_actions.models.enums import ActionType, TriggerType


if TYPE_CHECKING:
    from special_actions.models.creature import Creature

logger = get_logger(__name__)


def matches_trigger(trigger: Trigger, event: TriggerEvent | None) -> bool:
    """Check whether an incoming event satisfies a reaction trigger.

    Args:
        trigger: The reaction's declared trigger.
        event: The event currently offering reactions.

    Returns:
        True if the types agree and the type's comparator passes. Unknown
        trigger types never match.
    """
    if event is None or trigger.type != event.type:
        return False

    if trigger.type == TriggerType.ATTACKED:
        return trigger.range is None or (event.range is not None and event.range <= trigger.range)
    elif trigger.type == TriggerType.DAMAGED:
        return trigger.damage_type is None or event.damage_type == trigger.damage_type
    elif trigger.type == TriggerType.SPELL_CAST:
        return trigger.min_level is None or (
            event.spell_level is not None and event.spell_level >= trigger.min_level
        )
    elif trigger.type == TriggerType.MOVEMENT:
        return trigger.min_distance is None or (
            event.distance is not None and event.distance >= trigger.min_distance
        )

    logger.debug("Unknown trigger type", trigger_type=str(trigger.type))
    return False


def is_action_available(creature: Creature, action: Action, state: CombatStateInterface) -> bool:
    """Check whether a creature can use an action right now.

    Args:
        creature: The creature owning the action.
        action: The action to check.
        state: Current combat state.

    Returns:
        True if the action's economy allows it.
    """
    if action.type == ActionType.LEGENDARY:
        return creature.remaining_legendary_actions >= action.cost
    elif action.type == ActionType.MYTHIC:
        return creature.mythic_phase_active and creature.remaining_mythic_actions >= action.cost
    elif action.type == ActionType.VILLAIN_ACTION:
        return creature.used_villain_actions_this_round < creature.villain_actions_per_round
    elif action.type == ActionType.PARAGON_ACTION:
        if creature.current_paragon_phase <= 0:
            return False
        return action.phase is None or creature.current_paragon_phase >= action.phase
    elif action.type == ActionType.RECHARGE:
        ability = creature.get_recharge_ability(action.id)
        return ability is not None and ability.charged
    elif action.type == ActionType.REACTION:
        if state.used_reaction:
            return False
        if action.trigger is None:
            return True
        return matches_trigger(action.trigger, state.trigger)
    elif action.type == ActionType.BONUS_ACTION:
        return state.is_creature_turn and not state.used_bonus_action

    return True


def get_available_actions(creature: Creature, state: CombatStateInterface) -> list[Action]:
    """Filter a creature's actions to those usable right now.

    Returns:
        Available actions in catalog order.
    """
    return [action for action in creature.actions if is_action_available(creature, action, state)]


__all__ = [
    "matches_trigger",
    "is_action_available",
    "get_available_actions",
]
