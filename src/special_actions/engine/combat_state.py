"""The combat state collaborator.

The engine never owns the encounter. Everything it knows about
combatants, the current round and the reaction/bonus-action economy, and
every change it makes to the world, goes through a
``CombatStateInterface``.

``DefaultCombatState`` is the one adapter holding the local behavior for
callers without a richer world model: hit points are clamped in place,
conditions are appended to the target, forced movement, summons and
area queries are unsupported, and dice are rolled with the d20 library.
Callers subclass it and override what their world supports.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from special_actions.core.config import get_settings
from special_actions.core.constants import D6_SIDES, D20_SIDES
from special_actions.core.logging import get_logger
from special_actions.engine.dice import DiceRoller
from special_actions.models.actions import TriggerEvent
from special_actions.models.combat import AppliedCondition, Combatant
from special_actions.models.effects import AreaSpec


logger = get_logger(__name__)


# =============================================================================
# Outcomes reported back by the collaborator
# =============================================================================


@dataclass
class DamageOutcome:
    """Damage actually dealt, after the target's defenses."""

    damage: int
    resistance_applied: bool = False
    immunity_applied: bool = False
    vulnerability_applied: bool = False


@dataclass
class HealingOutcome:
    """Hit points actually restored."""

    healing: int


@dataclass
class ConditionOutcome:
    """Whether a condition was applied."""

    success: bool


@dataclass
class MoveOutcome:
    """Whether a forced movement happened, and where the target ended up."""

    success: bool
    new_position: Any | None = None


@dataclass
class SummonOutcome:
    """Whether a summon succeeded, and the creature it produced."""

    success: bool
    creature: Any | None = None


# =============================================================================
# Interface
# =============================================================================


class CombatStateInterface(ABC):
    """Everything the engine reads from or changes in an encounter.

    The state is passed by reference on every call and never copied or
    locked; callers must resolve one action fully before starting the next.
    """

    @property
    @abstractmethod
    def combatants(self) -> list[Combatant]:
        """Every combatant in the encounter, in turn order."""

    @property
    @abstractmethod
    def round(self) -> int:
        """The current combat round."""

    @property
    @abstractmethod
    def used_reaction(self) -> bool:
        """Whether the acting creature has spent its reaction."""

    @property
    @abstractmethod
    def used_bonus_action(self) -> bool:
        """Whether the acting creature has spent its bonus action."""

    @property
    @abstractmethod
    def is_creature_turn(self) -> bool:
        """Whether it is currently the acting creature's turn."""

    @property
    @abstractmethod
    def trigger(self) -> TriggerEvent | None:
        """The event currently offering reactions, if any."""

    @abstractmethod
    def set_reaction_used(self, used: bool) -> None:
        """Mark the acting creature's reaction as spent or restored."""

    @abstractmethod
    def set_bonus_action_used(self, used: bool) -> None:
        """Mark the acting creature's bonus action as spent or restored."""

    @abstractmethod
    def apply_damage(self, target: Combatant, amount: int, damage_type: str | None) -> DamageOutcome:
        """Deal damage to a target, applying its defenses."""

    @abstractmethod
    def apply_healing(self, target: Combatant, amount: int) -> HealingOutcome:
        """Restore hit points to a target."""

    @abstractmethod
    def apply_condition(
        self, target: Combatant, condition: str, duration: int | None
    ) -> ConditionOutcome:
        """Apply a condition to a target."""

    @abstractmethod
    def move_target(self, target: Combatant, distance: int, direction: str | None) -> MoveOutcome:
        """Force a target to move."""

    @abstractmethod
    def summon_creature(self, creature: Any, position: Any | None) -> SummonOutcome:
        """Bring a new creature into the encounter."""

    @abstractmethod
    def get_combatants_in_area(self, area: AreaSpec | None) -> list[Combatant] | None:
        """Find combatants inside a region.

        Returns:
            The combatants in the area, or None when the state has no
            spatial model.
        """

    @abstractmethod
    def roll_dice(self, expression: str) -> int:
        """Roll a dice expression; invalid notation yields 0."""

    @abstractmethod
    def roll_d20(self) -> int:
        """Roll a single d20."""

    @abstractmethod
    def roll_d6(self) -> int:
        """Roll a single d6."""


# =============================================================================
# Default adapter
# =============================================================================


class DefaultCombatState(CombatStateInterface):
    """In-memory combat state with the engine's local fallbacks.

    Example:
        >>> state = DefaultCombatState([fighter, wizard], round=2)
        >>> creature.use_action("tail_attack", state)
    """

    def __init__(
        self,
        combatants: Iterable[Combatant] = (),
        *,
        round: int = 1,
        is_creature_turn: bool = False,
        trigger: TriggerEvent | None = None,
        used_reaction: bool = False,
        used_bonus_action: bool = False,
        roller: DiceRoller | None = None,
    ) -> None:
        """Initialize the combat state.

        Args:
            combatants: Combatants in the encounter.
            round: Current combat round.
            is_creature_turn: Whether the acting creature's turn is active.
            trigger: Event currently offering reactions.
            used_reaction: Whether the reaction is already spent.
            used_bonus_action: Whether the bonus action is already spent.
            roller: Dice roller; seeded from ``engine.dice_seed`` if omitted.
        """
        self._combatants = list(combatants)
        self._round = round
        self._is_creature_turn = is_creature_turn
        self._trigger = trigger
        self._used_reaction = used_reaction
        self._used_bonus_action = used_bonus_action
        self._roller = roller or DiceRoller(seed=get_settings().engine.dice_seed)

    # -------------------------------------------------------------------------
    # Encounter state
    # -------------------------------------------------------------------------

    @property
    def combatants(self) -> list[Combatant]:
        return self._combatants

    @property
    def round(self) -> int:
        return self._round

    @round.setter
    def round(self, value: int) -> None:
        self._round = value

    @property
    def used_reaction(self) -> bool:
        return self._used_reaction

    @property
    def used_bonus_action(self) -> bool:
        return self._used_bonus_action

    @property
    def is_creature_turn(self) -> bool:
        return self._is_creature_turn

    @is_creature_turn.setter
    def is_creature_turn(self, value: bool) -> None:
        self._is_creature_turn = value

    @property
    def trigger(self) -> TriggerEvent | None:
        return self._trigger

    @trigger.setter
    def trigger(self, value: TriggerEvent | None) -> None:
        self._trigger = value

    def set_reaction_used(self, used: bool) -> None:
        self._used_reaction = used

    def set_bonus_action_used(self, used: bool) -> None:
        self._used_bonus_action = used

    def get_combatant(self, combatant_id: str) -> Combatant | None:
        """Find a combatant by id."""
        for combatant in self._combatants:
            if combatant.id == combatant_id:
                return combatant
        return None

    # -------------------------------------------------------------------------
    # World mutation
    # -------------------------------------------------------------------------

    def apply_damage(self, target: Combatant, amount: int, damage_type: str | None) -> DamageOutcome:
        """Subtract hit points, clamped to ``[0, max_hp]``."""
        amount = max(0, amount)
        target.hp = max(0, min(target.max_hp, target.hp - amount))
        logger.debug("Damage applied", target=target.id, amount=amount, damage_type=damage_type)
        return DamageOutcome(damage=amount)

    def apply_healing(self, target: Combatant, amount: int) -> HealingOutcome:
        """Add hit points, clamped to ``[0, max_hp]``."""
        amount = max(0, amount)
        target.hp = max(0, min(target.max_hp, target.hp + amount))
        logger.debug("Healing applied", target=target.id, amount=amount)
        return HealingOutcome(healing=amount)

    def apply_condition(
        self, target: Combatant, condition: str, duration: int | None
    ) -> ConditionOutcome:
        """Append the condition to the target's condition list."""
        target.conditions.append(AppliedCondition(name=condition, duration=duration))
        logger.debug("Condition applied", target=target.id, condition=condition, duration=duration)
        return ConditionOutcome(success=True)

    def move_target(self, target: Combatant, distance: int, direction: str | None) -> MoveOutcome:
        """Unsupported without a map; always fails."""
        logger.warning("Forced movement is not supported", target=target.id, distance=distance)
        return MoveOutcome(success=False)

    def summon_creature(self, creature: Any, position: Any | None) -> SummonOutcome:
        """Unsupported without an encounter roster; always fails."""
        logger.warning("Summoning is not supported", creature=str(creature))
        return SummonOutcome(success=False)

    def get_combatants_in_area(self, area: AreaSpec | None) -> list[Combatant] | None:
        """No spatial model; always None."""
        return None

    # -------------------------------------------------------------------------
    # Dice
    # -------------------------------------------------------------------------

    def roll_dice(self, expression: str) -> int:
        return self._roller.roll_total(expression)

    def roll_d20(self) -> int:
        return self._roller.roll_die(D20_SIDES)

    def roll_d6(self) -> int:
        return self._roller.roll_die(D6_SIDES)


__all__ = [
    "DamageOutcome",
    "HealingOutcome",
    "ConditionOutcome",
    "MoveOutcome",
    "SummonOutcome",
    "CombatStateInterface",
    "DefaultCombatState",
]
