"""The Creature aggregate.

A creature owns its action catalog and every resource pool those actions
draw on. ``use_action`` is the single entry point for taking an action:
it checks availability, resolves the effects through the interpreter,
deducts resources, appends to the history and notifies listeners.

Example:
    >>> dragon = Creature(name="Adult Red Dragon", max_legendary_actions=3, actions=[...])
    >>> result = dragon.use_action("tail_attack", state)
    >>> dragon.remaining_legendary_actions
    2
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace
from typing import Any
from uuid import uuid4

import pydantic
from pydantic import Field, PrivateAttr, model_validator

from special_actions.core.exceptions import (
    ActionNotFoundError,
    ActionUnavailableError,
    ValidationError,
)
from special_actions.core.logging import get_logger
from special_actions.engine.availability import get_available_actions, is_action_available
from special_actions.engine.combat_state import CombatStateInterface
from special_actions.engine.effects import apply_action
from special_actions.engine.events import CreatureEvent, EventNotifier, Listener
from special_actions.engine.results import ActionResult
from special_actions.engine.targeting import ActionOptions
from special_actions.models.actions import Action, ActionHistoryEntry, RechargeAbility
from special_actions.models.base import EngineModel
from special_actions.models.enums import ActionType, CombatantType


logger = get_logger(__name__)


class Creature(EngineModel):
    """A creature with special actions and the resources to pay for them.

    Attributes:
        id: Unique creature identifier.
        name: Display name.
        type: Side the creature fights on.
        description: Free-form notes.
        actions: Action catalog in display order.
        max_legendary_actions: Legendary actions per round.
        remaining_legendary_actions: Legendary actions left this round.
        max_mythic_actions: Mythic actions per round while mythic.
        remaining_mythic_actions: Mythic actions left this round.
        mythic_phase_active: Whether the mythic phase has started.
        paragon_phases: Number of paragon phases.
        current_paragon_phase: Current paragon phase; 0 before the first.
        villain_actions_per_round: Villain actions allowed per round.
        used_villain_actions_this_round: Villain actions used this round.
        recharge_abilities: Recharge bindings, one per action id.
        resistances: Damage types the creature resists.
        immunities: Damage types the creature is immune to.
        vulnerabilities: Damage types the creature is vulnerable to.
        action_history: Every action taken, oldest first.
    """

    id: str = Field(default_factory=lambda: str(uuid4()), min_length=1)
    name: str = Field(min_length=1, max_length=200)
    type: CombatantType = CombatantType.MONSTER
    description: str = ""
    actions: list[Action] = Field(default_factory=list)

    max_legendary_actions: int = Field(default=0, ge=0)
    remaining_legendary_actions: int | None = None
    max_mythic_actions: int = Field(default=0, ge=0)
    remaining_mythic_actions: int | None = None
    mythic_phase_active: bool = False
    paragon_phases: int = Field(default=0, ge=0)
    current_paragon_phase: int = Field(default=0, ge=0)
    villain_actions_per_round: int = Field(default=0, ge=0)
    used_villain_actions_this_round: int = Field(default=0, ge=0)
    recharge_abilities: list[RechargeAbility] = Field(default_factory=list)

    resistances: set[str] = Field(default_factory=set)
    immunities: set[str] = Field(default_factory=set)
    vulnerabilities: set[str] = Field(default_factory=set)

    action_history: list[ActionHistoryEntry] = Field(default_factory=list)

    _events: EventNotifier = PrivateAttr(default_factory=EventNotifier)

    @model_validator(mode="after")
    def normalize_resources(self) -> Creature:
        """Default missing pools and clamp every counter to its bounds."""
        if self.remaining_legendary_actions is None:
            self.remaining_legendary_actions = self.max_legendary_actions
        self.remaining_legendary_actions = _clamp(
            self.remaining_legendary_actions, self.max_legendary_actions
        )

        if self.remaining_mythic_actions is None:
            self.remaining_mythic_actions = (
                self.max_mythic_actions if self.mythic_phase_active else 0
            )
        self.remaining_mythic_actions = _clamp(self.remaining_mythic_actions, self.max_mythic_actions)

        self.current_paragon_phase = min(self.current_paragon_phase, self.paragon_phases)
        self.used_villain_actions_this_round = min(
            self.used_villain_actions_this_round, self.villain_actions_per_round
        )

        seen: set[str] = set()
        for ability in self.recharge_abilities:
            if ability.action_id in seen:
                raise ValueError(f"Duplicate recharge ability for action {ability.action_id!r}")
            seen.add(ability.action_id)

        for action in self.actions:
            if action.recharge is not None and action.id not in seen:
                self.recharge_abilities.append(
                    RechargeAbility(action_id=action.id, threshold=action.recharge)
                )
                seen.add(action.id)
        return self

    # =========================================================================
    # Listeners
    # =========================================================================

    def add_listener(self, listener: Listener) -> Callable[[], None]:
        """Register a listener for this creature's events.

        Returns:
            A function that unregisters the listener.
        """
        return self._events.add_listener(listener)

    def _notify(self, event: CreatureEvent, **data: Any) -> None:
        self._events.notify(event, {"creature_id": self.id, **data})

    # =========================================================================
    # Catalog
    # =========================================================================

    def get_action(self, action_id: str) -> Action | None:
        """Find an action by id."""
        for action in self.actions:
            if action.id == action_id:
                return action
        return None

    def get_actions_by_type(self, action_type: ActionType | str) -> list[Action]:
        """Get every action of one type, in catalog order."""
        return [action for action in self.actions if action.type == action_type]

    def get_recharge_ability(self, action_id: str) -> RechargeAbility | None:
        """Find the recharge binding for an action."""
        for ability in self.recharge_abilities:
            if ability.action_id == action_id:
                return ability
        return None

    def get_available_actions(self, state: CombatStateInterface) -> list[Action]:
        """Get the actions usable right now."""
        return get_available_actions(self, state)

    def add_action(self, action: Action | dict[str, Any]) -> Action:
        """Add an action to the catalog.

        An action with a ``recharge`` threshold also gets a charged
        recharge binding. An action whose id is already in the catalog
        replaces the existing one in place.

        Args:
            action: The action, or its JSON form.

        Returns:
            The added action.

        Raises:
            ValidationError: If a dict does not describe a valid action.
        """
        if not isinstance(action, Action):
            try:
                action = Action.model_validate(action)
            except pydantic.ValidationError as exc:
                raise ValidationError(
                    f"Invalid action: {exc}",
                    field_name="action",
                    details={"errors": exc.errors(include_url=False)},
                ) from exc

        for index, existing in enumerate(self.actions):
            if existing.id == action.id:
                logger.warning("Replacing action", creature=self.name, action=action.id)
                self.actions[index] = action
                break
        else:
            self.actions.append(action)

        if action.recharge is not None:
            ability = self.get_recharge_ability(action.id)
            if ability is None:
                self.recharge_abilities.append(
                    RechargeAbility(action_id=action.id, threshold=action.recharge)
                )
            else:
                ability.threshold = action.recharge

        self._notify(CreatureEvent.ACTION_ADDED, action_id=action.id, action=action)
        return action

    def remove_action(self, action_id: str) -> bool:
        """Remove an action and its recharge binding.

        Returns:
            True if the action was in the catalog.
        """
        action = self.get_action(action_id)
        if action is None:
            logger.warning("Cannot remove unknown action", creature=self.name, action=action_id)
            return False

        self.actions.remove(action)
        self.recharge_abilities = [
            ability for ability in self.recharge_abilities if ability.action_id != action_id
        ]
        self._notify(CreatureEvent.ACTION_REMOVED, action_id=action_id, action=action)
        return True

    # =========================================================================
    # Using actions
    # =========================================================================

    def _resolve_usable_action(self, action_id: str, state: CombatStateInterface) -> Action:
        """Find an action and check it can be used now.

        Raises:
            ActionNotFoundError: If the action is not in the catalog.
            ActionUnavailableError: If the action's economy forbids it.
        """
        action = self.get_action(action_id)
        if action is None:
            raise ActionNotFoundError(
                "Action not found",
                action_id=action_id,
                creature_id=self.id,
            )
        if not is_action_available(self, action, state):
            raise ActionUnavailableError(
                "Action is not available",
                action_id=action_id,
                action_type=action.type.value,
            )
        return action

    def use_action(
        self,
        action_id: str,
        state: CombatStateInterface,
        options: ActionOptions | None = None,
    ) -> ActionResult | None:
        """Take an action.

        Resources are deducted whenever the effects were attempted, even
        if some of them failed.

        Args:
            action_id: The action to take.
            state: Current combat state.
            options: Acting combatant, selected targets and random source.
                The acting combatant defaults to the roster entry with this
                creature's id.

        Returns:
            The effects' results, or None if the action is unknown or
            unavailable. In that case nothing is changed.
        """
        try:
            action = self._resolve_usable_action(action_id, state)
        except (ActionNotFoundError, ActionUnavailableError) as exc:
            logger.warning(
                exc.message,
                creature=self.name,
                action=action_id,
                **{k: v for k, v in exc.details.items() if k != "action_id"},
            )
            return None

        options = self._options_for(state, options)
        result = apply_action(action, state, options)

        self._deduct_resources(action, state)
        self.action_history.append(
            ActionHistoryEntry(
                action_id=action.id,
                action_name=action.name,
                action_type=action.type,
                cost=action.cost,
                round=state.round,
                success=result.success,
            )
        )

        logger.info(
            "Action used",
            creature=self.name,
            action=action.id,
            action_type=action.type.value,
            success=result.success,
        )
        self._notify(CreatureEvent.ACTION_USED, action_id=action.id, action=action, result=result)
        return result

    def _options_for(
        self, state: CombatStateInterface, options: ActionOptions | None
    ) -> ActionOptions:
        """Fill in the acting combatant for target resolution."""
        options = options or ActionOptions()
        source = options.source
        if source is None:
            source = next((c for c in state.combatants if c.id == self.id), None)
        return replace(options, source=source, source_type=options.source_type or self.type)

    def _deduct_resources(self, action: Action, state: CombatStateInterface) -> None:
        if action.type == ActionType.LEGENDARY:
            self.remaining_legendary_actions = max(
                0, self.remaining_legendary_actions - action.cost
            )
        elif action.type == ActionType.MYTHIC:
            self.remaining_mythic_actions = max(0, self.remaining_mythic_actions - action.cost)
        elif action.type == ActionType.VILLAIN_ACTION:
            self.used_villain_actions_this_round = min(
                self.villain_actions_per_round, self.used_villain_actions_this_round + 1
            )
        elif action.type == ActionType.RECHARGE:
            ability = self.get_recharge_ability(action.id)
            if ability is not None:
                ability.charged = False
        elif action.type == ActionType.REACTION:
            state.set_reaction_used(True)
        elif action.type == ActionType.BONUS_ACTION:
            state.set_bonus_action_used(True)

    # =========================================================================
    # Resource lifecycle
    # =========================================================================

    def reset_legendary_actions(self) -> None:
        """Restore the legendary pool; call at the start of the creature's turn."""
        self.remaining_legendary_actions = self.max_legendary_actions
        self._notify(
            CreatureEvent.LEGENDARY_ACTIONS_RESET,
            remaining=self.remaining_legendary_actions,
        )

    def reset_mythic_actions(self) -> None:
        """Restore the mythic pool."""
        self.remaining_mythic_actions = self.max_mythic_actions
        self._notify(CreatureEvent.MYTHIC_ACTIONS_RESET, remaining=self.remaining_mythic_actions)

    def reset_villain_actions(self) -> None:
        """Clear the villain action counter; call at the start of each round."""
        self.used_villain_actions_this_round = 0
        self._notify(CreatureEvent.VILLAIN_ACTIONS_RESET)

    def activate_mythic_phase(self) -> None:
        """Enter the mythic phase with a full mythic pool."""
        self.mythic_phase_active = True
        self.reset_mythic_actions()
        logger.info("Mythic phase activated", creature=self.name)
        self._notify(CreatureEvent.MYTHIC_PHASE_ACTIVATED)

    def deactivate_mythic_phase(self) -> None:
        """Leave the mythic phase; the mythic pool is emptied, not restored."""
        self.mythic_phase_active = False
        self.remaining_mythic_actions = 0
        logger.info("Mythic phase deactivated", creature=self.name)
        self._notify(CreatureEvent.MYTHIC_PHASE_DEACTIVATED)

    def advance_paragon_phase(self) -> bool:
        """Move to the next paragon phase.

        Returns:
            True if the phase advanced; False at the last phase.
        """
        if self.current_paragon_phase >= self.paragon_phases:
            return False
        self.current_paragon_phase += 1
        logger.info("Paragon phase advanced", creature=self.name, phase=self.current_paragon_phase)
        self._notify(CreatureEvent.PARAGON_PHASE_ADVANCED, phase=self.current_paragon_phase)
        return True

    def attempt_recharge(self, state: CombatStateInterface) -> list[str]:
        """Roll a d6 for every uncharged recharge ability.

        Charged abilities are left alone.

        Returns:
            Ids of the actions that recharged.
        """
        recharged: list[str] = []
        for ability in self.recharge_abilities:
            if ability.charged:
                continue
            roll = state.roll_d6()
            if roll >= ability.threshold:
                ability.charged = True
                recharged.append(ability.action_id)
                self._notify(CreatureEvent.ABILITY_RECHARGED, action_id=ability.action_id, roll=roll)
            logger.debug(
                "Recharge rolled",
                creature=self.name,
                action=ability.action_id,
                roll=roll,
                threshold=ability.threshold,
                charged=ability.charged,
            )
        return recharged

    def start_new_round(self, state: CombatStateInterface) -> list[str]:
        """Reset per-round pools and roll recharges.

        Returns:
            Ids of the actions that recharged.
        """
        self.reset_legendary_actions()
        self.reset_villain_actions()
        return self.attempt_recharge(state)

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-ready dict with camelCase keys.

        Listeners are not serialized; the action history is.
        """
        data = self.model_dump(mode="json", by_alias=True)
        for key in ("resistances", "immunities", "vulnerabilities"):
            data[key] = sorted(data[key])
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Creature:
        """Rebuild a creature from ``to_dict`` output or hand-written JSON.

        Raises:
            ValidationError: If the data does not describe a valid creature.
        """
        try:
            return cls.model_validate(data)
        except pydantic.ValidationError as exc:
            raise ValidationError(
                f"Invalid creature data: {exc.error_count()} error(s)",
                field_name="creature",
                details={"errors": exc.errors(include_url=False)},
            ) from exc


def _clamp(value: int, maximum: int) -> int:
    return max(0, min(value, maximum))


__all__ = ["Creature"]
