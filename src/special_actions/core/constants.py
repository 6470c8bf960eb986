"""Rules constants for the special action engine."""

from __future__ import annotations

# =============================================================================
# Dice
# =============================================================================

D20_SIDES = 20
"""Sides on the die rolled for saving throws."""

NATURAL_TWENTY = 20
"""A natural 20 on a saving throw always succeeds."""

NATURAL_ONE = 1
"""A natural 1 on a saving throw always fails."""

D6_SIDES = 6
"""Sides on the die rolled for recharge abilities."""

# =============================================================================
# Ability Scores
# =============================================================================

DEFAULT_ABILITY_SCORE = 10
"""Ability score assumed when a combatant does not declare one."""

# =============================================================================
# Resource Defaults
# =============================================================================

DEFAULT_ACTION_COST = 1
"""Cost of an action when none is declared."""

DEFAULT_LEGENDARY_ACTIONS = 3
"""Legendary actions per round for a typical legendary creature."""

MIN_RECHARGE_THRESHOLD = 1
"""Lowest d6 face a recharge threshold may name."""

MAX_RECHARGE_THRESHOLD = 6
"""Highest d6 face a recharge threshold may name."""

DEFAULT_RECHARGE_THRESHOLD = 5
"""Threshold for the common 'Recharge 5-6' abilities."""


__all__ = [
    "D20_SIDES",
    "NATURAL_TWENTY",
    "NATURAL_ONE",
    "D6_SIDES",
    "DEFAULT_ABILITY_SCORE",
    "DEFAULT_ACTION_COST",
    "DEFAULT_LEGENDARY_ACTIONS",
    "MIN_RECHARGE_THRESHOLD",
    "MAX_RECHARGE_THRESHOLD",
    "DEFAULT_RECHARGE_THRESHOLD",
]
