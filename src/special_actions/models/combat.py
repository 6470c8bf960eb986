"""Pydantic V2 schema for combatants seen by the engine.

Combatants are owned by the caller's combat state. The engine reads
their side, hit points, abilities and saving throws, and the default
combat state adapter mutates hit points and conditions when the caller
provides nothing better.
"""

from __future__ import annotations

from typing import Annotated, Any
from uuid import uuid4

from pydantic import ConfigDict, Field, computed_field, field_validator

from special_actions.core.constants import DEFAULT_ABILITY_SCORE
from special_actions.models.base import EngineModel
from special_actions.models.enums import Ability, CombatantType


class AppliedCondition(EngineModel):
    """A condition currently affecting a combatant.

    Attributes:
        name: Condition name (e.g., 'prone', 'frightened').
        duration: Remaining rounds, or None for indefinite.
        source: Id of the creature or action that applied it.
    """

    name: str = Field(min_length=1, description="Condition name")
    duration: int | None = Field(default=None, description="Remaining rounds")
    source: str | None = Field(default=None, description="Applying creature or action")


class Combatant(EngineModel):
    """Entity participating in combat.

    Attributes:
        id: Unique combatant identifier.
        name: Display name in combat.
        type: Side the combatant fights on.
        hp: Current hit points.
        max_hp: Maximum hit points.
        conditions: Active conditions on this combatant.
        abilities: Ability scores keyed by ability.
        saving_throws: Explicit saving throw bonuses keyed by ability.
        position: Opaque position understood by the caller's map.
    """

    model_config = ConfigDict(
        extra="allow",
        validate_assignment=True,
    )

    id: str = Field(default_factory=lambda: str(uuid4()), description="Unique combatant ID")
    name: str = Field(min_length=1, max_length=100, description="Display name")
    type: CombatantType = Field(default=CombatantType.MONSTER, description="Combatant side")
    hp: int = Field(default=1, description="Current HP")
    max_hp: Annotated[int, Field(ge=0, description="Maximum HP")] = 1
    conditions: list[AppliedCondition] = Field(default_factory=list, description="Active conditions")
    abilities: dict[Ability, int] = Field(default_factory=dict, description="Ability scores")
    saving_throws: dict[Ability, int] = Field(default_factory=dict, description="Save bonuses")
    position: Any | None = Field(default=None, description="Map position")

    @field_validator("abilities", "saving_throws", mode="before")
    @classmethod
    def parse_ability_keys(cls, value: Any) -> Any:
        """Accept 'dex' as well as 'dexterity' for ability keys."""
        if isinstance(value, dict):
            return {Ability.parse(key): score for key, score in value.items()}
        return value

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_conscious(self) -> bool:
        """Check if combatant has hit points left."""
        return self.hp > 0

    def ability_score(self, ability: Ability) -> int:
        """Get an ability score, defaulting to 10 when undeclared."""
        return self.abilities.get(ability, DEFAULT_ABILITY_SCORE)

    def has_condition(self, name: str) -> bool:
        """Check whether a condition with the given name is active."""
        return any(condition.name == name for condition in self.conditions)


__all__ = [
    "AppliedCondition",
    "Combatant",
]
