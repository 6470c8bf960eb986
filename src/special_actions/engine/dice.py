"""Dice rolling for effect amounts, saving throws and recharge rolls.

This module wraps the d20 library. ``DiceRoller.roll`` raises on bad
notation; ``DiceRoller.roll_total`` is the forgiving variant used while
resolving effects, where a bad expression is logged and counts as 0.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

import d20

from special_actions.core.exceptions import DiceRollError
from special_actions.core.logging import get_logger


logger = get_logger(__name__)


class RollType(StrEnum):
    """Types of d20 rolls."""

    NORMAL = "normal"
    ADVANTAGE = "advantage"
    DISADVANTAGE = "disadvantage"


@dataclass(frozen=True)
class DiceExpression:
    """A rolled dice expression.

    Attributes:
        expression: The original dice expression string.
        total: The total result of the roll.
        dice: Individual kept dice results.
        modifier: Static modifier applied.
    """

    expression: str
    total: int
    dice: list[int]
    modifier: int


class DiceRoller:
    """Dice rolling backed by the d20 library.

    Example:
        >>> roller = DiceRoller(seed=7)
        >>> result = roller.roll("2d6+3")
        >>> print(f"Total: {result.total}")
    """

    def __init__(self, *, seed: int | None = None) -> None:
        """Initialize the dice roller.

        Args:
            seed: Optional random seed for reproducible rolls.
        """
        self._seed = seed
        if seed is not None:
            random.seed(seed)
        logger.debug("DiceRoller initialized", seed=seed)

    def roll(self, expression: str) -> DiceExpression:
        """Roll dice according to the given expression.

        Args:
            expression: Dice expression (e.g., '1d20+5', '2d6+3').

        Returns:
            DiceExpression containing roll results.

        Raises:
            DiceRollError: If the expression is invalid.
        """
        if not expression or not expression.strip():
            raise DiceRollError("Empty dice expression", expression=expression)

        try:
            result: d20.RollResult = d20.roll(expression)
        except d20.RollError as exc:
            raise DiceRollError(
                f"Invalid dice expression: {exc}",
                expression=expression,
            ) from exc

        dice_values = self._extract_dice_values(result.expr)
        modifier = result.total - sum(dice_values)

        logger.debug("Dice rolled", expression=expression, total=result.total)

        return DiceExpression(
            expression=expression,
            total=result.total,
            dice=dice_values,
            modifier=modifier,
        )

    def roll_total(self, expression: str | int) -> int:
        """Roll an effect amount, never raising.

        Plain integers and numeric strings are returned unchanged.

        Args:
            expression: Dice expression, numeric string or integer.

        Returns:
            The rolled total, or 0 if the notation is invalid.
        """
        if isinstance(expression, int):
            return expression
        text = expression.strip()
        if text.lstrip("+-").isdigit():
            return int(text)
        try:
            return self.roll(text).total
        except DiceRollError as exc:
            logger.warning("Invalid dice notation", expression=expression, error=exc.message)
            return 0

    def roll_die(self, sides: int) -> int:
        """Roll a single die with the given number of sides."""
        return self.roll(f"1d{sides}").total

    def _extract_dice_values(self, expr: Any) -> list[int]:
        """Extract individual dice values from a d20 expression.

        Args:
            expr: The d20 expression tree.

        Returns:
            List of individual dice values.
        """
        values: list[int] = []

        def traverse(node: Any) -> None:
            if isinstance(node, d20.Dice):
                for die in node.values:
                    if die.kept:
                        values.append(die.number)
            elif hasattr(node, "children"):
                for child in node.children:
                    traverse(child)

        traverse(expr)
        return values


__all__ = [
    "RollType",
    "DiceExpression",
    "DiceRoller",
]
