"""Effect interpreter.

``apply_action`` walks an action's effect tree in order and delegates
every change to the world to the combat state. Each effect is guarded on
its own: an effect that raises is recorded as a failed result and the
remaining effects still run.

Area and save effects never deal damage themselves. They re-target their
nested effects (to the combatants in the area, or to the single target
that rolled the save) and apply them through the same handlers.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from special_actions.core.exceptions import EffectApplicationError
from special_actions.core.logging import get_logger
from special_actions.engine.combat_state import CombatStateInterface
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
from special_actions.engine.saves import check_save, roll_saving_throw
from special_actions.engine.targeting import ActionOptions, resolve_targets
from special_actions.models.actions import Action
from special_actions.models.effects import (
    AoeEffect,
    ConditionEffect,
    CustomEffect,
    DamageEffect,
    Effect,
    HealingEffect,
    MovementEffect,
    SaveEffect,
    SummonEffect,
    specific_targets,
)
from special_actions.models.enums import EffectType


logger = get_logger(__name__)

EffectHandler = Callable[[Any, CombatStateInterface, ActionOptions, bool], EffectResult]


def _roll_amount(value: int | str, state: CombatStateInterface) -> int:
    """Turn a literal amount or an expression rolled by the state into an amount."""
    if isinstance(value, int):
        return value
    return state.roll_dice(value)


def _retarget(effect: Effect, target_ids: list[str]) -> Effect:
    """Copy an effect with its targets replaced by concrete ids."""
    return effect.model_copy(update={"targets": specific_targets(target_ids)})


# =============================================================================
# Handlers
# =============================================================================


def _apply_damage(
    effect: DamageEffect,
    state: CombatStateInterface,
    options: ActionOptions,
    half_damage: bool,
) -> DamageResult:
    targets = resolve_targets(effect.targets, state, options)
    amount = _roll_amount(effect.damage, state)

    entries: list[DamageTarget] = []
    for target in targets:
        halve = half_damage
        negated = False
        saved: bool | None = None
        if effect.save is not None:
            saved = check_save(target, effect.save, state)
            negated = saved and effect.save.negate_on_success
            halve = halve or (saved and effect.save.half_on_success)

        # Damage is halved at most once, however many saves succeeded.
        if negated:
            dealt = 0
        elif halve:
            dealt = amount // 2
        else:
            dealt = amount

        outcome = state.apply_damage(target, dealt, effect.damage_type)
        entries.append(
            DamageTarget(
                target_id=target.id,
                damage=outcome.damage,
                resistance_applied=outcome.resistance_applied,
                immunity_applied=outcome.immunity_applied,
                vulnerability_applied=outcome.vulnerability_applied,
                saved=saved,
            )
        )

    return DamageResult(damage_type=effect.damage_type, targets=entries)


def _apply_healing(
    effect: HealingEffect,
    state: CombatStateInterface,
    options: ActionOptions,
    half_damage: bool,
) -> HealingResult:
    targets = resolve_targets(effect.targets, state, options)
    amount = _roll_amount(effect.healing, state)

    entries = []
    for target in targets:
        outcome = state.apply_healing(target, amount)
        entries.append(HealingTarget(target_id=target.id, healing=outcome.healing))

    return HealingResult(targets=entries)


def _apply_condition(
    effect: ConditionEffect,
    state: CombatStateInterface,
    options: ActionOptions,
    half_damage: bool,
) -> ConditionResult:
    targets = resolve_targets(effect.targets, state, options)

    entries: list[ConditionTarget] = []
    for target in targets:
        duration = effect.duration
        saved: bool | None = None
        if effect.save is not None:
            saved = check_save(target, effect.save, state)
            if saved and effect.save.negate_on_success:
                entries.append(ConditionTarget(target_id=target.id, applied=False, saved=True))
                continue
            if saved and effect.save.half_duration_on_success and duration is not None:
                duration = -(-duration // 2)

        outcome = state.apply_condition(target, effect.condition, duration)
        entries.append(
            ConditionTarget(
                target_id=target.id,
                applied=outcome.success,
                duration=duration,
                saved=saved,
            )
        )

    refused = [entry for entry in entries if not entry.applied and not entry.saved]
    return ConditionResult(
        condition=effect.condition,
        targets=entries,
        success=not refused,
    )


def _apply_movement(
    effect: MovementEffect,
    state: CombatStateInterface,
    options: ActionOptions,
    half_damage: bool,
) -> MovementResult:
    targets = resolve_targets(effect.targets, state, options)

    entries: list[MovementTarget] = []
    for target in targets:
        distance = effect.distance
        saved: bool | None = None
        if effect.save is not None:
            saved = check_save(target, effect.save, state)
            if saved and effect.save.negate_on_success:
                entries.append(
                    MovementTarget(target_id=target.id, success=True, distance=0, saved=True)
                )
                continue
            if saved and effect.save.half_distance_on_success:
                distance //= 2

        outcome = state.move_target(target, distance, effect.direction)
        entries.append(
            MovementTarget(
                target_id=target.id,
                success=outcome.success,
                distance=distance,
                new_position=outcome.new_position,
                saved=saved,
            )
        )

    failed = [entry.target_id for entry in entries if not entry.success]
    return MovementResult(
        targets=entries,
        success=not failed,
        error=f"Movement failed for: {', '.join(failed)}" if failed else None,
    )


def _apply_summon(
    effect: SummonEffect,
    state: CombatStateInterface,
    options: ActionOptions,
    half_damage: bool,
) -> SummonResult:
    if effect.creature is None:
        raise EffectApplicationError(
            "Summon effect has no creature to summon",
            effect_type=EffectType.SUMMON,
        )

    summoned = []
    for _ in range(effect.count):
        outcome = state.summon_creature(effect.creature, effect.position)
        if outcome.success:
            summoned.append(outcome.creature)

    return SummonResult(
        requested=effect.count,
        summoned=summoned,
        success=bool(summoned) or effect.count == 0,
    )


def _apply_aoe(
    effect: AoeEffect,
    state: CombatStateInterface,
    options: ActionOptions,
    half_damage: bool,
) -> AoeResult:
    in_area = state.get_combatants_in_area(effect.area)
    if in_area is None:
        in_area = list(state.combatants)
    target_ids = [combatant.id for combatant in in_area]

    nested = [
        apply_effect(_retarget(sub_effect, target_ids), state, options, half_damage=half_damage)
        for sub_effect in effect.effects
    ]

    return AoeResult(
        target_ids=target_ids,
        effects=nested,
        success=all(result.success for result in nested),
    )


def _reduced_failure_branch(effect: SaveEffect) -> list[Effect]:
    """The failure branch as felt by a target that saved, when no success branch exists.

    Damage is kept under ``halfOnSuccess`` and halved by the caller.
    Conditions are kept with half their duration (rounded up) under
    ``halfDurationOnSuccess``, and movement with half its distance (rounded
    down) under ``halfDistanceOnSuccess``. Everything else is dropped, and
    ``negateOnSuccess`` drops the whole branch.
    """
    if effect.negate_on_success:
        return []

    reduced: list[Effect] = []
    for sub_effect in effect.on_failure:
        if isinstance(sub_effect, DamageEffect):
            if effect.half_on_success:
                reduced.append(sub_effect)
        elif isinstance(sub_effect, ConditionEffect):
            if effect.half_duration_on_success:
                duration = sub_effect.duration
                if duration is not None:
                    duration = -(-duration // 2)
                reduced.append(sub_effect.model_copy(update={"duration": duration}))
        elif isinstance(sub_effect, MovementEffect):
            if effect.half_distance_on_success:
                reduced.append(
                    sub_effect.model_copy(update={"distance": sub_effect.distance // 2})
                )
    return reduced


def _apply_save(
    effect: SaveEffect,
    state: CombatStateInterface,
    options: ActionOptions,
    half_damage: bool,
) -> SaveResult:
    targets = resolve_targets(effect.targets, state, options)

    entries: list[SaveTarget] = []
    for target in targets:
        roll = roll_saving_throw(target, effect, state)
        saved = roll is not None and roll.saved

        branch_half = half_damage
        if not saved:
            branch = effect.on_failure
        elif effect.on_success:
            branch = effect.on_success
        else:
            branch = _reduced_failure_branch(effect)
            branch_half = True

        sub_results = [
            apply_effect(_retarget(sub_effect, [target.id]), state, options, half_damage=branch_half)
            for sub_effect in branch
        ]
        entries.append(SaveTarget(target_id=target.id, saved=saved, roll=roll, effects=sub_results))

    success = all(result.success for entry in entries for result in entry.effects)
    return SaveResult(targets=entries, success=success)


def _apply_custom(
    effect: CustomEffect,
    state: CombatStateInterface,
    options: ActionOptions,
    half_damage: bool,
) -> CustomResult:
    return CustomResult(payload=effect.model_dump(mode="json", by_alias=True))


EFFECT_HANDLERS: dict[EffectType, EffectHandler] = {
    EffectType.DAMAGE: _apply_damage,
    EffectType.HEALING: _apply_healing,
    EffectType.CONDITION: _apply_condition,
    EffectType.MOVEMENT: _apply_movement,
    EffectType.SUMMON: _apply_summon,
    EffectType.AOE: _apply_aoe,
    EffectType.SAVE: _apply_save,
    EffectType.CUSTOM: _apply_custom,
}


# =============================================================================
# Entry points
# =============================================================================


def apply_effect(
    effect: Effect,
    state: CombatStateInterface,
    options: ActionOptions,
    *,
    half_damage: bool = False,
) -> EffectResult:
    """Apply one effect, recording any error as a failed result.

    Args:
        effect: The effect to apply.
        state: Combat state receiving the changes.
        options: Acting creature, selection and random source.
        half_damage: Halve damage rolled by this effect and its children.

    Returns:
        The effect's result. Never raises.
    """
    effect_type = EffectType(effect.type)
    handler = EFFECT_HANDLERS[effect_type]
    try:
        return handler(effect, state, options, half_damage)
    except EffectApplicationError as exc:
        logger.warning("Effect failed", effect_type=effect_type.value, error=exc.message)
        return EffectResult(type=effect_type, success=False, error=exc.message)
    except Exception as exc:
        logger.exception("Effect raised", effect_type=effect_type.value)
        return EffectResult(type=effect_type, success=False, error=str(exc))


def apply_action(
    action: Action,
    state: CombatStateInterface,
    options: ActionOptions | None = None,
) -> ActionResult:
    """Apply every effect of an action in order.

    Args:
        action: The action being resolved.
        state: Combat state receiving the changes.
        options: Acting creature, selection and random source.

    Returns:
        ActionResult whose ``success`` is False if any effect failed.
    """
    options = options or ActionOptions()

    results = [apply_effect(effect, state, options) for effect in action.effects]
    success = all(result.success for result in results)

    logger.info(
        "Action applied",
        action=action.id,
        action_type=action.type.value,
        effects=len(results),
        success=success,
    )
    return ActionResult(action_id=action.id, success=success, effects=results)


__all__ = [
    "ActionOptions",
    "EffectHandler",
    "EFFECT_HANDLERS",
    "apply_effect",
    "apply_action",
]
