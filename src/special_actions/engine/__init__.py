"""Rules engine for special actions.

This package provides:
- Dice rolling backed by the d20 library
- The combat state interface and its default adapter
- Target resolution and saving throws
- The effect interpreter and its result tree
- Action availability per resource economy
- Creature event notification
"""

from __future__ import annotations

from special_actions.engine.availability import (
    get_available_actions,
    is_action_available,
    matches_trigger,
)
from special_actions.engine.combat_state import (
    CombatStateInterface,
    ConditionOutcome,
    DamageOutcome,
    DefaultCombatState,
    HealingOutcome,
    MoveOutcome,
    SummonOutcome,
)
from special_actions.engine.dice import DiceExpression, DiceRoller, RollType
from special_actions.engine.effects import EFFECT_HANDLERS, apply_action, apply_effect
from special_actions.engine.events import CreatureEvent, EventNotifier, Listener
from special_actions.engine.results import (
    ActionResult,
    AoeResult,
    ConditionResult,
    ConditionTarget,
    CustomResult,
    DamageResult,
    DamageTarget,
    EffectResult,
    HealingResult,
    HealingTarget,
    MovementResult,
    MovementTarget,
    SaveResult,
    SaveTarget,
    SummonResult,
)
from special_actions.engine.saves import (
    SavingThrowRoll,
    check_save,
    roll_saving_throw,
    saving_throw_bonus,
)
from special_actions.engine.targeting import ActionOptions, resolve_targets


__all__ = [
    # Dice
    "RollType",
    "DiceExpression",
    "DiceRoller",
    # Combat state
    "CombatStateInterface",
    "DefaultCombatState",
    "DamageOutcome",
    "HealingOutcome",
    "ConditionOutcome",
    "MoveOutcome",
    "SummonOutcome",
    # Targeting
    "ActionOptions",
    "resolve_targets",
    # Saves
    "SavingThrowRoll",
    "saving_throw_bonus",
    "roll_saving_throw",
    "check_save",
    # Effects
    "EFFECT_HANDLERS",
    "apply_effect",
    "apply_action",
    # Results
    "EffectResult",
    "DamageTarget",
    "HealingTarget",
    "ConditionTarget",
    "MovementTarget",
    "SaveTarget",
    "DamageResult",
    "HealingResult",
    "ConditionResult",
    "MovementResult",
    "SummonResult",
    "AoeResult",
    "SaveResult",
    "CustomResult",
    "ActionResult",
    # Availability
    "matches_trigger",
    "is_action_available",
    "get_available_actions",
    # Events
    "CreatureEvent",
    "EventNotifier",
    "Listener",
]
