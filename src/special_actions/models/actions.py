"""Pydantic V2 schemas for actions, reaction triggers and action history."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated
from uuid import uuid4

from pydantic import ConfigDict, Field

from special_actions.core.constants import (
    DEFAULT_ACTION_COST,
    DEFAULT_RECHARGE_THRESHOLD,
    MAX_RECHARGE_THRESHOLD,
    MIN_RECHARGE_THRESHOLD,
)
from special_actions.models.base import EngineModel
from special_actions.models.effects import Effect
from special_actions.models.enums import ActionType, TriggerType


RechargeThreshold = Annotated[
    int,
    Field(ge=MIN_RECHARGE_THRESHOLD, le=MAX_RECHARGE_THRESHOLD),
]


class Trigger(EngineModel):
    """What a reaction responds to.

    Only the comparator matching ``type`` is consulted; an unset
    comparator matches any incoming event of that type.

    Attributes:
        type: Trigger type. Unknown strings are kept and never match.
        range: Maximum attack range (``attacked``).
        damage_type: Required damage type (``damaged``).
        min_level: Minimum spell level (``spell_cast``).
        min_distance: Minimum distance moved (``movement``).
    """

    model_config = ConfigDict(extra="allow")

    type: TriggerType | str = Field(union_mode="left_to_right", description="Trigger type")
    range: int | None = Field(default=None, ge=0, description="Maximum attack range")
    damage_type: str | None = Field(default=None, description="Required damage type")
    min_level: int | None = Field(default=None, ge=0, description="Minimum spell level")
    min_distance: int | None = Field(default=None, ge=0, description="Minimum distance moved")


class TriggerEvent(EngineModel):
    """The event currently offering reactions, as reported by the combat state.

    Attributes:
        type: What happened.
        range: Range of the incoming attack.
        damage_type: Type of the damage dealt.
        spell_level: Level of the spell being cast.
        distance: Distance the triggering combatant moved.
        source_id: Combatant that caused the event.
    """

    model_config = ConfigDict(extra="allow")

    type: TriggerType | str = Field(union_mode="left_to_right", description="Event type")
    range: int | None = None
    damage_type: str | None = None
    spell_level: int | None = None
    distance: int | None = None
    source_id: str | None = None


class Action(EngineModel):
    """A special action in a creature's catalog.

    Attributes:
        id: Action identifier, unique within its creature.
        name: Display name.
        description: Rules text shown to the game master.
        type: Economy the action draws on.
        cost: Pool cost for legendary and mythic actions.
        trigger: Reaction trigger, if the action is a reaction.
        recharge: Recharge threshold; registering the action creates its
            recharge binding.
        phase: Minimum paragon phase for a paragon action.
        effects: Effect tree resolved when the action is used.
    """

    id: str = Field(default_factory=lambda: str(uuid4()), min_length=1, description="Action ID")
    name: str = Field(min_length=1, max_length=200, description="Action name")
    description: str = Field(default="", description="Rules text")
    type: ActionType = Field(description="Action economy")
    cost: int = Field(default=DEFAULT_ACTION_COST, ge=0, description="Pool cost")
    trigger: Trigger | None = Field(default=None, description="Reaction trigger")
    recharge: RechargeThreshold | None = Field(default=None, description="Recharge threshold")
    phase: int | None = Field(default=None, ge=1, description="Minimum paragon phase")
    effects: list[Effect] = Field(default_factory=list, description="Effects in order")


class RechargeAbility(EngineModel):
    """Binds an action to its recharge roll.

    ``charged`` only becomes True through a successful recharge roll and
    only becomes False when the bound action is used.
    """

    action_id: str = Field(min_length=1, description="Bound action ID")
    threshold: RechargeThreshold = Field(
        default=DEFAULT_RECHARGE_THRESHOLD,
        description="Minimum d6 roll to recharge",
    )
    charged: bool = Field(default=True, description="Whether the action can be used")


class ActionHistoryEntry(EngineModel):
    """One executed action in a creature's history log."""

    action_id: str
    action_name: str
    action_type: ActionType
    cost: int = 0
    round: int = 0
    success: bool = True
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))


__all__ = [
    "Trigger",
    "TriggerEvent",
    "Action",
    "RechargeAbility",
    "ActionHistoryEntry",
]
