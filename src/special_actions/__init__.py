"""Special Actions Engine.

Resolves legendary, mythic, lair, villain, paragon, recharge, reaction
and bonus actions for tabletop RPG combat: which actions a creature may
take right now, what their effect trees do to the encounter, and how
the creature's resource pools change afterwards.

Example:
    >>> from special_actions import DefaultCombatState, TemplateLibrary
    >>> dragon = TemplateLibrary().create_creature_from_template("adult_red_dragon")
    >>> state = DefaultCombatState(party)
    >>> dragon.use_action("tail_attack", state)
"""

from __future__ import annotations

from special_actions.core import (
    SpecialActionsError,
    configure_logging,
    get_logger,
    get_settings,
)
from special_actions.engine import (
    ActionOptions,
    ActionResult,
    CombatStateInterface,
    CreatureEvent,
    DefaultCombatState,
    apply_action,
    get_available_actions,
)
from special_actions.library import TemplateLibrary
from special_actions.models import (
    Action,
    ActionType,
    Combatant,
    CombatantType,
    EffectType,
    TargetType,
    TriggerEvent,
    TriggerType,
)
from special_actions.models.creature import Creature


__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Core
    "SpecialActionsError",
    "configure_logging",
    "get_logger",
    "get_settings",
    # Models
    "Action",
    "ActionType",
    "Combatant",
    "CombatantType",
    "Creature",
    "EffectType",
    "TargetType",
    "TriggerEvent",
    "TriggerType",
    # Engine
    "ActionOptions",
    "ActionResult",
    "CombatStateInterface",
    "CreatureEvent",
    "DefaultCombatState",
    "apply_action",
    "get_available_actions",
    # Library
    "TemplateLibrary",
]
