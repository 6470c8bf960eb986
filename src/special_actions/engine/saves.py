"""Saving throw evaluation.

Bonuses come from a combatant's explicit saving throw bonus, or from the
ability modifier ``floor((score - 10) / 2)`` with a default score of 10.
Natural 20 always succeeds and natural 1 always fails, whatever the bonus
and DC.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from special_actions.core.config import get_settings
from special_actions.core.constants import DEFAULT_ABILITY_SCORE, NATURAL_ONE, NATURAL_TWENTY
from special_actions.core.logging import get_logger
from special_actions.engine.combat_state import CombatStateInterface
from special_actions.engine.dice import RollType
from special_actions.models.combat import Combatant
from special_actions.models.effects import SaveSpec
from special_actions.models.enums import Ability


logger = get_logger(__name__)

AdvantageRule = Literal["cancel", "sequential"]


@dataclass(frozen=True)
class SavingThrowRoll:
    """A rolled saving throw.

    Attributes:
        ability: Ability the save was rolled with.
        dc: Difficulty class.
        rolls: Every d20 rolled, in order.
        natural: The d20 that counted.
        bonus: Saving throw bonus added to the natural roll.
        roll_type: Whether advantage or disadvantage applied.
        saved: Whether the save succeeded.
    """

    ability: Ability
    dc: int
    rolls: tuple[int, ...]
    natural: int
    bonus: int
    roll_type: RollType
    saved: bool

    @property
    def total(self) -> int:
        """Natural roll plus bonus."""
        return self.natural + self.bonus


def saving_throw_bonus(target: Combatant, ability: Ability) -> int:
    """Get a combatant's saving throw bonus for an ability.

    Args:
        target: The combatant rolling the save.
        ability: The ability being saved with.

    Returns:
        The explicit save bonus if declared, else the ability modifier.
    """
    if ability in target.saving_throws:
        return target.saving_throws[ability]
    score = target.abilities.get(ability, DEFAULT_ABILITY_SCORE)
    return (score - DEFAULT_ABILITY_SCORE) // 2


def _roll_d20s(
    save: SaveSpec,
    state: CombatStateInterface,
    advantage_rule: AdvantageRule,
) -> tuple[int, tuple[int, ...], RollType]:
    """Roll the d20s for a save and pick the one that counts."""
    first = state.roll_d20()

    if save.advantage and save.disadvantage:
        if advantage_rule == "cancel":
            return first, (first,), RollType.NORMAL
        second = state.roll_d20()
        third = state.roll_d20()
        natural = min(max(first, second), third)
        return natural, (first, second, third), RollType.DISADVANTAGE

    if save.advantage:
        second = state.roll_d20()
        return max(first, second), (first, second), RollType.ADVANTAGE
    if save.disadvantage:
        second = state.roll_d20()
        return min(first, second), (first, second), RollType.DISADVANTAGE
    return first, (first,), RollType.NORMAL


def roll_saving_throw(
    target: Combatant,
    save: SaveSpec,
    state: CombatStateInterface,
    *,
    advantage_rule: AdvantageRule | None = None,
) -> SavingThrowRoll | None:
    """Roll a saving throw for one target.

    Args:
        target: The combatant rolling the save.
        save: Ability, DC and advantage flags.
        state: Combat state providing the d20.
        advantage_rule: How to combine advantage and disadvantage; defaults
            to ``engine.advantage_rule``.

    Returns:
        The detailed roll, or None if the save declares no ability or DC.
    """
    if save.ability is None or save.dc is None:
        logger.debug("Save missing ability or DC", target=target.id)
        return None

    rule = advantage_rule or get_settings().engine.advantage_rule
    natural, rolls, roll_type = _roll_d20s(save, state, rule)
    bonus = saving_throw_bonus(target, save.ability)

    if natural == NATURAL_TWENTY:
        saved = True
    elif natural == NATURAL_ONE:
        saved = False
    else:
        saved = natural + bonus >= save.dc

    logger.debug(
        "Saving throw rolled",
        target=target.id,
        ability=save.ability.value,
        dc=save.dc,
        natural=natural,
        bonus=bonus,
        saved=saved,
    )

    return SavingThrowRoll(
        ability=save.ability,
        dc=save.dc,
        rolls=rolls,
        natural=natural,
        bonus=bonus,
        roll_type=roll_type,
        saved=saved,
    )


def check_save(target: Combatant, save: SaveSpec, state: CombatStateInterface) -> bool:
    """Check whether a target succeeds on a saving throw.

    Returns:
        True if the save succeeded; False if it failed or the save
        declares no ability or DC.
    """
    roll = roll_saving_throw(target, save, state)
    return roll is not None and roll.saved


__all__ = [
    "SavingThrowRoll",
    "saving_throw_bonus",
    "roll_saving_throw",
    "check_save",
]
