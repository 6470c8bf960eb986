"""Pytest configuration and shared fixtures.

This module provides common fixtures for the special action engine test
suite: settings isolation, a combat state with scripted dice, sample
combatants and sample creatures.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Any

import pytest

from special_actions.engine.combat_state import (
    DamageOutcome,
    DefaultCombatState,
    MoveOutcome,
    SummonOutcome,
)
from special_actions.engine.dice import DiceRoller
from special_actions.models.combat import Combatant


if TYPE_CHECKING:
    from collections.abc import Generator

    from special_actions.models.creature import Creature
    from special_actions.models.effects import AreaSpec


# =============================================================================
# Test Doubles
# =============================================================================


class ScriptedCombatState(DefaultCombatState):
    """Default combat state with scripted dice and optional world support.

    Attributes:
        d20_rolls: d20 results handed out in order.
        d6_rolls: d6 results handed out in order.
        dice_totals: Fixed totals for specific dice expressions.
        area_ids: Combatant ids inside any area; None means no area support.
        resistant_ids: Combatants that halve incoming damage.
        supports_movement: Whether forced movement succeeds.
        supports_summons: Whether summons succeed.
    """

    def __init__(
        self,
        combatants: Iterable[Combatant] = (),
        *,
        d20_rolls: Iterable[int] = (),
        d6_rolls: Iterable[int] = (),
        dice_totals: dict[str, int] | None = None,
        area_ids: list[str] | None = None,
        resistant_ids: Iterable[str] = (),
        supports_movement: bool = False,
        supports_summons: bool = False,
        **kwargs: Any,
    ) -> None:
        super().__init__(combatants, roller=DiceRoller(seed=1234), **kwargs)
        self.d20_rolls = list(d20_rolls)
        self.d6_rolls = list(d6_rolls)
        self.dice_totals = dice_totals or {}
        self.area_ids = area_ids
        self.resistant_ids = set(resistant_ids)
        self.supports_movement = supports_movement
        self.supports_summons = supports_summons
        self.dice_expressions: list[str] = []
        self.moves: list[tuple[str, int, str | None]] = []
        self.summons: list[Any] = []

    def roll_d20(self) -> int:
        return self.d20_rolls.pop(0) if self.d20_rolls else 10

    def roll_d6(self) -> int:
        return self.d6_rolls.pop(0) if self.d6_rolls else 1

    def roll_dice(self, expression: str) -> int:
        self.dice_expressions.append(expression)
        if expression in self.dice_totals:
            return self.dice_totals[expression]
        return super().roll_dice(expression)

    def apply_damage(self, target: Combatant, amount: int, damage_type: str | None) -> DamageOutcome:
        if target.id in self.resistant_ids:
            outcome = super().apply_damage(target, amount // 2, damage_type)
            outcome.resistance_applied = True
            return outcome
        return super().apply_damage(target, amount, damage_type)

    def move_target(self, target: Combatant, distance: int, direction: str | None) -> MoveOutcome:
        if not self.supports_movement:
            return super().move_target(target, distance, direction)
        self.moves.append((target.id, distance, direction))
        return MoveOutcome(success=True, new_position=(distance, 0))

    def summon_creature(self, creature: Any, position: Any | None) -> SummonOutcome:
        if not self.supports_summons:
            return super().summon_creature(creature, position)
        summoned = {"creature": creature, "index": len(self.summons)}
        self.summons.append(summoned)
        return SummonOutcome(success=True, creature=summoned)

    def get_combatants_in_area(self, area: AreaSpec | None) -> list[Combatant] | None:
        if self.area_ids is None:
            return None
        return [c for c in self.combatants if c.id in self.area_ids]


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from special_actions.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def mock_env_vars(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set up mock environment variables for testing.

    Returns:
        Dictionary of environment variables that were set.
    """
    env_vars = {
        "SPECIAL_ACTIONS_DEBUG": "true",
        "SPECIAL_ACTIONS_LOG_LEVEL": "DEBUG",
        "SPECIAL_ACTIONS_ENGINE_ADVANTAGE_RULE": "sequential",
        "SPECIAL_ACTIONS_LIBRARY_EXPORT_VERSION": "9.9.9",
    }
    from special_actions.core.config import clear_settings_cache

    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    clear_settings_cache()
    return env_vars


# =============================================================================
# Combat Fixtures
# =============================================================================


@pytest.fixture
def fighter() -> Combatant:
    """A sturdy player character with a strong Strength save."""
    return Combatant(
        id="fighter",
        name="Fighter",
        type="player",
        hp=40,
        max_hp=40,
        abilities={"str": 18, "dex": 12, "con": 16},
        saving_throws={"str": 7, "con": 6},
    )


@pytest.fixture
def wizard() -> Combatant:
    """A fragile player character with a weak Dexterity save."""
    return Combatant(
        id="wizard",
        name="Wizard",
        type="player",
        hp=22,
        max_hp=22,
        abilities={"dex": 8, "int": 18, "wis": 14},
    )


@pytest.fixture
def dragon_combatant() -> Combatant:
    """The dragon's own roster entry."""
    return Combatant(id="dragon", name="Adult Red Dragon", type="monster", hp=256, max_hp=256)


@pytest.fixture
def kobold() -> Combatant:
    """A monster ally of the dragon."""
    return Combatant(id="kobold", name="Kobold", type="monster", hp=5, max_hp=5)


@pytest.fixture
def roster(
    fighter: Combatant,
    wizard: Combatant,
    dragon_combatant: Combatant,
    kobold: Combatant,
) -> list[Combatant]:
    """Every combatant in the sample encounter."""
    return [fighter, wizard, dragon_combatant, kobold]


@pytest.fixture
def make_state(roster: list[Combatant]) -> Callable[..., ScriptedCombatState]:
    """Provide a factory for scripted combat states over the sample roster.

    Returns:
        Callable accepting ScriptedCombatState keyword arguments.
    """

    def factory(**kwargs: Any) -> ScriptedCombatState:
        combatants = kwargs.pop("combatants", roster)
        return ScriptedCombatState(combatants, **kwargs)

    return factory


@pytest.fixture
def state(make_state: Callable[..., ScriptedCombatState]) -> ScriptedCombatState:
    """A scripted combat state with no scripted rolls."""
    return make_state()


@pytest.fixture
def dice_roller() -> DiceRoller:
    """Provide a seeded dice roller.

    Returns:
        DiceRoller instance.
    """
    return DiceRoller(seed=42)


# =============================================================================
# Creature Fixtures
# =============================================================================


@pytest.fixture
def sample_creature_data() -> dict[str, Any]:
    """Provide a legendary creature in its JSON form.

    Returns:
        Dictionary of creature data with camelCase keys.
    """
    return {
        "id": "dragon",
        "name": "Adult Red Dragon",
        "type": "monster",
        "maxLegendaryActions": 3,
        "maxMythicActions": 2,
        "paragonPhases": 2,
        "villainActionsPerRound": 1,
        "resistances": ["cold"],
        "immunities": ["fire"],
        "actions": [
            {
                "id": "tail_attack",
                "name": "Tail Attack",
                "type": "legendary",
                "cost": 1,
                "effects": [
                    {
                        "type": "damage",
                        "damage": 10,
                        "damageType": "bludgeoning",
                        "targets": {"type": "selected"},
                    }
                ],
            },
            {
                "id": "wing_attack",
                "name": "Wing Attack",
                "type": "legendary",
                "cost": 2,
                "effects": [
                    {
                        "type": "damage",
                        "damage": 5,
                        "damageType": "bludgeoning",
                        "targets": {"type": "enemies"},
                    }
                ],
            },
            {
                "id": "searing_flare",
                "name": "Searing Flare",
                "type": "mythic",
                "cost": 1,
                "effects": [],
            },
            {
                "id": "terrifying_roar",
                "name": "Terrifying Roar",
                "type": "villain_action",
                "effects": [
                    {
                        "type": "condition",
                        "condition": "frightened",
                        "duration": 1,
                        "targets": {"type": "players"},
                    }
                ],
            },
            {
                "id": "molten_form",
                "name": "Molten Form",
                "type": "paragon_action",
                "effects": [],
            },
            {
                "id": "fire_breath",
                "name": "Fire Breath",
                "type": "recharge",
                "recharge": 5,
                "effects": [
                    {
                        "type": "damage",
                        "damage": "12d6",
                        "damageType": "fire",
                        "targets": {"type": "players"},
                    }
                ],
            },
            {
                "id": "tail_swipe",
                "name": "Tail Swipe",
                "type": "reaction",
                "trigger": {"type": "attacked", "range": 10},
                "effects": [],
            },
            {
                "id": "quick_step",
                "name": "Quick Step",
                "type": "bonus_action",
                "effects": [],
            },
            {
                "id": "magma_burst",
                "name": "Magma Burst",
                "type": "lair",
                "effects": [],
            },
        ],
    }


@pytest.fixture
def sample_creature(sample_creature_data: dict[str, Any]) -> Creature:
    """Provide a Creature with one action of every type.

    Args:
        sample_creature_data: Creature data in JSON form.

    Returns:
        Creature instance.
    """
    from special_actions.models.creature import Creature

    return Creature.from_dict(sample_creature_data)
