"""Result tree returned by the effect interpreter.

Every applied effect yields one ``EffectResult``. Failure is reported
through ``success``/``error`` rather than raised, so a caller can show
partial outcomes of an action whose later effects went wrong.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from special_actions.models.enums import EffectType


if TYPE_CHECKING:
    from special_actions.engine.saves import SavingThrowRoll


@dataclass(kw_only=True)
class EffectResult:
    """Outcome of a single effect.

    Attributes:
        type: Effect type that produced this result.
        success: False if the effect raised or the combat state refused it.
        error: Error message when the effect raised.
    """

    type: EffectType
    success: bool = True
    error: str | None = None


# =============================================================================
# Per-target entries
# =============================================================================


@dataclass(kw_only=True)
class DamageTarget:
    """Damage dealt to one combatant."""

    target_id: str
    damage: int
    resistance_applied: bool = False
    immunity_applied: bool = False
    vulnerability_applied: bool = False
    saved: bool | None = None


@dataclass(kw_only=True)
class HealingTarget:
    """Healing received by one combatant."""

    target_id: str
    healing: int


@dataclass(kw_only=True)
class ConditionTarget:
    """Condition outcome for one combatant.

    ``applied`` is False when the target saved against a negating save
    or the combat state refused the condition.
    """

    target_id: str
    applied: bool
    duration: int | None = None
    saved: bool | None = None


@dataclass(kw_only=True)
class MovementTarget:
    """Forced movement outcome for one combatant."""

    target_id: str
    success: bool
    distance: int = 0
    new_position: Any | None = None
    saved: bool | None = None


@dataclass(kw_only=True)
class SaveTarget:
    """One combatant's save and the branch applied because of it."""

    target_id: str
    saved: bool
    roll: SavingThrowRoll | None = None
    effects: list[EffectResult] = field(default_factory=list)


# =============================================================================
# Effect results
# =============================================================================


@dataclass(kw_only=True)
class DamageResult(EffectResult):
    type: EffectType = EffectType.DAMAGE
    damage_type: str | None = None
    targets: list[DamageTarget] = field(default_factory=list)

    @property
    def total_damage(self) -> int:
        """Sum of damage dealt to every target."""
        return sum(entry.damage for entry in self.targets)


@dataclass(kw_only=True)
class HealingResult(EffectResult):
    type: EffectType = EffectType.HEALING
    targets: list[HealingTarget] = field(default_factory=list)

    @property
    def total_healing(self) -> int:
        """Sum of healing received by every target."""
        return sum(entry.healing for entry in self.targets)


@dataclass(kw_only=True)
class ConditionResult(EffectResult):
    type: EffectType = EffectType.CONDITION
    condition: str = ""
    targets: list[ConditionTarget] = field(default_factory=list)


@dataclass(kw_only=True)
class MovementResult(EffectResult):
    type: EffectType = EffectType.MOVEMENT
    targets: list[MovementTarget] = field(default_factory=list)


@dataclass(kw_only=True)
class SummonResult(EffectResult):
    """Summons that succeeded; failed attempts are dropped."""

    type: EffectType = EffectType.SUMMON
    requested: int = 0
    summoned: list[Any] = field(default_factory=list)


@dataclass(kw_only=True)
class AoeResult(EffectResult):
    """Nested results of an area effect.

    Attributes:
        target_ids: Combatants found in the area.
        effects: One result per nested effect, each targeting ``target_ids``.
    """

    type: EffectType = EffectType.AOE
    target_ids: list[str] = field(default_factory=list)
    effects: list[EffectResult] = field(default_factory=list)

    @property
    def total_damage(self) -> int:
        """Damage dealt by every nested effect, including nested areas."""
        return sum(
            effect.total_damage
            for effect in self.effects
            if isinstance(effect, (DamageResult, AoeResult))
        )


@dataclass(kw_only=True)
class SaveResult(EffectResult):
    type: EffectType = EffectType.SAVE
    targets: list[SaveTarget] = field(default_factory=list)


@dataclass(kw_only=True)
class CustomResult(EffectResult):
    """A custom effect's payload, untouched."""

    type: EffectType = EffectType.CUSTOM
    payload: dict[str, Any] = field(default_factory=dict)


@dataclass(kw_only=True)
class ActionResult:
    """Outcome of every effect of one action.

    ``success`` is False as soon as any effect failed; the other effects
    still ran.
    """

    action_id: str | None = None
    success: bool = True
    effects: list[EffectResult] = field(default_factory=list)


__all__ = [
    "EffectResult",
    "DamageTarget",
    "HealingTarget",
    "ConditionTarget",
    "MovementTarget",
    "SaveTarget",
    "DamageResult",
    "HealingResult",
    "ConditionResult",
    "MovementResult",
    "SummonResult",
    "AoeResult",
    "SaveResult",
    "CustomResult",
    "ActionResult",
]
