"""Pydantic V2 data models for the special action engine.

This package contains the enums, combatant view, effect tree and action
schemas. The ``Creature`` aggregate lives in
``special_actions.models.creature`` and is imported from there, since it
depends on the engine.
"""

from __future__ import annotations

from special_actions.models.actions import (
    Action,
    ActionHistoryEntry,
    RechargeAbility,
    Trigger,
    TriggerEvent,
)
from special_actions.models.base import EngineModel
from special_actions.models.combat import AppliedCondition, Combatant
from special_actions.models.effects import (
    AoeEffect,
    AreaSpec,
    ConditionEffect,
    CustomEffect,
    DamageEffect,
    Effect,
    HealingEffect,
    MovementEffect,
    SaveEffect,
    SaveSpec,
    SummonEffect,
    TargetSpec,
    specific_targets,
)
from special_actions.models.enums import (
    Ability,
    ActionType,
    CombatantType,
    EffectType,
    TargetType,
    TriggerType,
)


__all__ = [
    # Base
    "EngineModel",
    # Enums
    "Ability",
    "ActionType",
    "CombatantType",
    "EffectType",
    "TargetType",
    "TriggerType",
    # Combat
    "AppliedCondition",
    "Combatant",
    # Effects
    "AreaSpec",
    "TargetSpec",
    "specific_targets",
    "SaveSpec",
    "DamageEffect",
    "HealingEffect",
    "ConditionEffect",
    "MovementEffect",
    "SummonEffect",
    "AoeEffect",
    "SaveEffect",
    "CustomEffect",
    "Effect",
    # Actions
    "Action",
    "ActionHistoryEntry",
    "RechargeAbility",
    "Trigger",
    "TriggerEvent",
]
