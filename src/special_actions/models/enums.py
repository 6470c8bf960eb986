"""Enumeration types for the special action engine.

Every string tag that drives dispatch (action types, effect types,
target selectors, reaction triggers) is a StrEnum so the values stay
JSON-compatible while the engine can check them exhaustively.
"""

from __future__ import annotations

from enum import StrEnum


class ActionType(StrEnum):
    """Economy an action draws on.

    Each type is governed by its own availability rule; see
    ``special_actions.engine.availability``.
    """

    LEGENDARY = "legendary"
    MYTHIC = "mythic"
    LAIR = "lair"
    REACTION = "reaction"
    BONUS_ACTION = "bonus_action"
    VILLAIN_ACTION = "villain_action"
    PARAGON_ACTION = "paragon_action"
    RECHARGE = "recharge"

    @property
    def display_name(self) -> str:
        """Get human-readable action type name.

        Returns:
            Formatted name (e.g., 'Villain Action').
        """
        return self.value.replace("_", " ").title()

    @property
    def uses_shared_pool(self) -> bool:
        """Whether ``Action.cost`` is deducted from a per-round pool."""
        return self in (ActionType.LEGENDARY, ActionType.MYTHIC)


class EffectType(StrEnum):
    """Variants of the effect tree."""

    DAMAGE = "damage"
    HEALING = "healing"
    CONDITION = "condition"
    MOVEMENT = "movement"
    SUMMON = "summon"
    AOE = "aoe"
    SAVE = "save"
    CUSTOM = "custom"


class TargetType(StrEnum):
    """Selectors for a target specification."""

    ALL = "all"
    PLAYERS = "players"
    MONSTERS = "monsters"
    ALLIES = "allies"
    ENEMIES = "enemies"
    SELF = "self"
    RANDOM = "random"
    AREA = "area"
    SPECIFIC = "specific"
    SELECTED = "selected"


class TriggerType(StrEnum):
    """Events a reaction can respond to."""

    ATTACKED = "attacked"
    DAMAGED = "damaged"
    SPELL_CAST = "spell_cast"
    MOVEMENT = "movement"


class CombatantType(StrEnum):
    """Side a combatant fights on."""

    PLAYER = "player"
    MONSTER = "monster"
    NEUTRAL = "neutral"


class Ability(StrEnum):
    """The six D&D ability scores."""

    STR = "strength"
    DEX = "dexterity"
    CON = "constitution"
    INT = "intelligence"
    WIS = "wisdom"
    CHA = "charisma"

    @property
    def abbreviation(self) -> str:
        """Get the lowercase three-letter abbreviation (e.g., 'dex')."""
        return self.name.lower()

    @classmethod
    def parse(cls, value: str | Ability) -> Ability:
        """Parse a full ability name or its three-letter abbreviation.

        Args:
            value: 'dexterity', 'dex', 'DEX' or an Ability.

        Returns:
            The matching Ability.

        Raises:
            ValueError: If the value names no ability.
        """
        if isinstance(value, Ability):
            return value
        normalized = value.strip().lower()
        for ability in cls:
            if normalized in (ability.value, ability.abbreviation):
                return ability
        raise ValueError(f"Unknown ability: {value!r}")


__all__ = [
    "ActionType",
    "EffectType",
    "TargetType",
    "TriggerType",
    "CombatantType",
    "Ability",
]
