"""Pydantic V2 schema for the declarative effect tree.

An action's ``effects`` list is parsed once, when the action is loaded,
into a recursive discriminated union on the ``type`` tag. ``aoe`` and
``save`` effects nest further effects, so the union refers to itself.

Example:
    >>> from pydantic import TypeAdapter
    >>> effect = TypeAdapter(Effect).validate_python(
    ...     {"type": "damage", "damage": "2d6", "damageType": "fire", "targets": {"type": "all"}}
    ... )
    >>> effect.damage_type
    'fire'
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import ConfigDict, Field, field_validator

from special_actions.models.base import EngineModel
from special_actions.models.enums import Ability, TargetType


# =============================================================================
# Targeting
# =============================================================================


class AreaSpec(EngineModel):
    """Spatial region handed to the combat state's area query.

    Only the collaborator interprets the region, so unknown keys are
    kept as-is.

    Attributes:
        shape: Region shape (e.g., 'sphere', 'cone', 'line').
        size: Radius or length in feet.
        origin: Opaque origin understood by the caller's map.
    """

    model_config = ConfigDict(extra="allow")

    shape: str | None = Field(default=None, description="Region shape")
    size: int | None = Field(default=None, ge=0, description="Radius or length in feet")
    origin: Any | None = Field(default=None, description="Region origin")


class TargetSpec(EngineModel):
    """Declarative description of who an effect applies to.

    Attributes:
        type: Target selector.
        count: How many combatants a ``random`` selector picks.
        ids: Combatant ids for a ``specific`` selector.
        area: Region for an ``area`` selector.
    """

    type: TargetType = Field(description="Target selector")
    count: int = Field(default=1, ge=0, description="Random target count")
    ids: list[str] = Field(default_factory=list, description="Specific combatant ids")
    area: AreaSpec | None = Field(default=None, description="Area for area selection")


def specific_targets(ids: list[str]) -> TargetSpec:
    """Build a ``specific`` target spec for already-resolved combatants."""
    return TargetSpec(type=TargetType.SPECIFIC, ids=list(ids))


# =============================================================================
# Saving Throws
# =============================================================================


class SaveSpec(EngineModel):
    """Saving throw parameters and the consequences of a success.

    Attributes:
        ability: Ability the save is rolled with.
        dc: Difficulty class to meet or beat.
        advantage: Roll two d20 and keep the higher.
        disadvantage: Roll two d20 and keep the lower.
        half_on_success: Halve damage on a successful save.
        negate_on_success: Ignore the effect entirely on a successful save.
        half_duration_on_success: Halve condition duration (rounded up).
        half_distance_on_success: Halve forced movement (rounded down).
    """

    ability: Ability | None = Field(default=None, description="Save ability")
    dc: int | None = Field(default=None, description="Difficulty class")
    advantage: bool = False
    disadvantage: bool = False
    half_on_success: bool = False
    negate_on_success: bool = False
    half_duration_on_success: bool = False
    half_distance_on_success: bool = False

    @field_validator("ability", mode="before")
    @classmethod
    def parse_ability(cls, value: Any) -> Any:
        """Accept three-letter abbreviations as well as full names."""
        if isinstance(value, str):
            return Ability.parse(value)
        return value


# =============================================================================
# Effect Variants
# =============================================================================


class _TargetedEffect(EngineModel):
    """Fields shared by every effect variant."""

    targets: TargetSpec | None = Field(
        default=None,
        description="Who the effect applies to; falls back to the selected targets",
    )


class DamageEffect(_TargetedEffect):
    """Deal damage, optionally reduced by a saving throw.

    Attributes:
        damage: Flat amount or dice expression (e.g., '4d6+2').
        damage_type: Damage type tag passed to the combat state.
        save: Optional save rolled per target before damage is dealt.
    """

    type: Literal["damage"] = "damage"
    damage: int | str = Field(default=0, description="Amount or dice expression")
    damage_type: str | None = Field(default=None, description="Damage type tag")
    save: SaveSpec | None = Field(default=None, alias="savingThrow")


class HealingEffect(_TargetedEffect):
    """Restore hit points."""

    type: Literal["healing"] = "healing"
    healing: int | str = Field(default=0, description="Amount or dice expression")


class ConditionEffect(_TargetedEffect):
    """Apply a named condition for a number of rounds.

    Attributes:
        condition: Condition name.
        duration: Rounds the condition lasts, or None for indefinite.
        save: Optional save rolled per target before applying.
    """

    type: Literal["condition"] = "condition"
    condition: str = Field(min_length=1, description="Condition name")
    duration: int | None = Field(default=None, ge=0, description="Duration in rounds")
    save: SaveSpec | None = Field(default=None, alias="savingThrow")


class MovementEffect(_TargetedEffect):
    """Force targets to move (push, pull, knock back)."""

    type: Literal["movement"] = "movement"
    distance: int = Field(default=0, ge=0, description="Distance in feet")
    direction: str | None = Field(default=None, description="Direction of movement")
    save: SaveSpec | None = Field(default=None, alias="savingThrow")


class SummonEffect(_TargetedEffect):
    """Bring new creatures into the encounter.

    ``creature`` is optional at load time so templates can be edited
    incrementally; applying a summon without one fails.
    """

    type: Literal["summon"] = "summon"
    creature: Any | None = Field(default=None, description="Creature to summon")
    count: int = Field(default=1, ge=0, description="Number of creatures")
    position: Any | None = Field(default=None, description="Where the summons appear")


class AoeEffect(_TargetedEffect):
    """Apply nested effects to every combatant in an area."""

    type: Literal["aoe"] = "aoe"
    area: AreaSpec | None = Field(default=None, description="Affected region")
    effects: list[Effect] = Field(default_factory=list, description="Effects applied in the area")


class SaveEffect(SaveSpec, _TargetedEffect):
    """Roll a save per target and branch on the outcome.

    Attributes:
        on_success: Effects applied to a target that saved.
        on_failure: Effects applied to a target that failed.
    """

    type: Literal["save"] = "save"
    on_success: list[Effect] = Field(default_factory=list, description="Effects on a success")
    on_failure: list[Effect] = Field(default_factory=list, description="Effects on a failure")

    @field_validator("on_success", "on_failure", mode="before")
    @classmethod
    def wrap_single_effect(cls, value: Any) -> Any:
        """Normalize a single effect object to a one-element list."""
        if value is None:
            return []
        if isinstance(value, (dict, EngineModel)):
            return [value]
        return value


class CustomEffect(_TargetedEffect):
    """Opaque effect interpreted by the caller, never by the engine."""

    model_config = ConfigDict(extra="allow")

    type: Literal["custom"] = "custom"
    payload: dict[str, Any] = Field(default_factory=dict, description="Caller-defined data")


Effect = Annotated[
    Union[
        DamageEffect,
        HealingEffect,
        ConditionEffect,
        MovementEffect,
        SummonEffect,
        AoeEffect,
        SaveEffect,
        CustomEffect,
    ],
    Field(discriminator="type"),
]

AoeEffect.model_rebuild()
SaveEffect.model_rebuild()


__all__ = [
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
]
