"""Target resolution.

Turns a declarative ``TargetSpec`` into the concrete combatants an effect
applies to, using the combat state's roster and the caller's options.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field

from special_actions.core.logging import get_logger
from special_actions.engine.combat_state import CombatStateInterface
from special_actions.models.combat import Combatant
from special_actions.models.effects import TargetSpec
from special_actions.models.enums import CombatantType, TargetType


logger = get_logger(__name__)


@dataclass
class ActionOptions:
    """Caller context for resolving one action.

    Attributes:
        source: The acting combatant, used by ``self``, ``allies`` and
            ``enemies`` selectors.
        source_type: Side to compare against when ``source`` is not on
            the roster.
        targets: Combatants picked in the UI, used by ``selected`` and by
            effects with no target spec.
        rng: Random source for ``random`` selectors.
    """

    source: Combatant | None = None
    source_type: CombatantType | None = None
    targets: list[Combatant] = field(default_factory=list)
    rng: random.Random = field(default_factory=random.Random)

    @property
    def acting_type(self) -> CombatantType | None:
        """Side of the acting creature, if known."""
        if self.source is not None:
            return self.source.type
        return self.source_type


def resolve_targets(
    spec: TargetSpec | None,
    state: CombatStateInterface,
    options: ActionOptions,
) -> list[Combatant]:
    """Resolve a target spec to combatants.

    Args:
        spec: Target spec; None falls back to the selected targets.
        state: Combat state providing the roster.
        options: Acting creature, selection and random source.

    Returns:
        Resolved combatants. Never raises; an unresolvable selector
        yields an empty list.
    """
    if spec is None:
        return list(options.targets)

    combatants = list(state.combatants)
    acting_type = options.acting_type

    if spec.type == TargetType.ALL:
        return combatants
    elif spec.type == TargetType.PLAYERS:
        return [c for c in combatants if c.type == CombatantType.PLAYER]
    elif spec.type == TargetType.MONSTERS:
        return [c for c in combatants if c.type == CombatantType.MONSTER]
    elif spec.type == TargetType.ALLIES:
        if acting_type is None:
            return []
        return [c for c in combatants if c.type == acting_type]
    elif spec.type == TargetType.ENEMIES:
        if acting_type is None:
            return []
        return [c for c in combatants if c.type != acting_type]
    elif spec.type == TargetType.SELF:
        return [options.source] if options.source is not None else []
    elif spec.type == TargetType.SPECIFIC:
        wanted = set(spec.ids)
        return [c for c in combatants if c.id in wanted]
    elif spec.type == TargetType.SELECTED:
        return list(options.targets)
    elif spec.type == TargetType.AREA:
        in_area = state.get_combatants_in_area(spec.area)
        return list(in_area) if in_area is not None else []
    elif spec.type == TargetType.RANDOM:
        count = min(spec.count, len(combatants))
        return options.rng.sample(combatants, count)

    logger.warning("Unknown target type", target_type=str(spec.type))
    return []


__all__ = [
    "ActionOptions",
    "resolve_targets",
]
