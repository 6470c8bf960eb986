"""Tests for target resolution."""

from __future__ import annotations

import random
from collections.abc import Callable
from typing import Any

from special_actions.engine.targeting import ActionOptions, resolve_targets
from special_actions.models.combat import Combatant
from special_actions.models.effects import TargetSpec
from special_actions.models.enums import CombatantType, TargetType


def ids(combatants: list[Combatant]) -> list[str]:
    return [c.id for c in combatants]


class TestResolveTargets:
    """Tests for each target selector."""

    def test_no_spec_uses_selected_targets(self, state: Any, wizard: Combatant) -> None:
        """Test a missing spec falls back to the UI selection."""
        options = ActionOptions(targets=[wizard])

        assert ids(resolve_targets(None, state, options)) == ["wizard"]

    def test_no_spec_and_no_selection(self, state: Any) -> None:
        """Test a missing spec with nothing selected resolves to nobody."""
        assert resolve_targets(None, state, ActionOptions()) == []

    def test_all(self, state: Any) -> None:
        """Test all combatants are selected."""
        spec = TargetSpec(type=TargetType.ALL)

        assert ids(resolve_targets(spec, state, ActionOptions())) == [
            "fighter",
            "wizard",
            "dragon",
            "kobold",
        ]

    def test_players_and_monsters(self, state: Any) -> None:
        """Test type filters."""
        players = resolve_targets(TargetSpec(type="players"), state, ActionOptions())
        monsters = resolve_targets(TargetSpec(type="monsters"), state, ActionOptions())

        assert ids(players) == ["fighter", "wizard"]
        assert ids(monsters) == ["dragon", "kobold"]

    def test_allies_and_enemies(self, state: Any, dragon_combatant: Combatant) -> None:
        """Test allies share the acting combatant's type; enemies do not."""
        options = ActionOptions(source=dragon_combatant)

        allies = resolve_targets(TargetSpec(type="allies"), state, options)
        enemies = resolve_targets(TargetSpec(type="enemies"), state, options)

        assert ids(allies) == ["dragon", "kobold"]
        assert ids(enemies) == ["fighter", "wizard"]

    def test_allies_fall_back_to_source_type(self, state: Any) -> None:
        """Test the side can be given without a roster entry."""
        options = ActionOptions(source_type=CombatantType.PLAYER)

        assert ids(resolve_targets(TargetSpec(type="allies"), state, options)) == [
            "fighter",
            "wizard",
        ]

    def test_allies_without_acting_side(self, state: Any) -> None:
        """Test allies and enemies resolve to nobody when the side is unknown."""
        assert resolve_targets(TargetSpec(type="allies"), state, ActionOptions()) == []
        assert resolve_targets(TargetSpec(type="enemies"), state, ActionOptions()) == []

    def test_self(self, state: Any, dragon_combatant: Combatant) -> None:
        """Test self resolves to the acting combatant only."""
        options = ActionOptions(source=dragon_combatant)

        assert ids(resolve_targets(TargetSpec(type="self"), state, options)) == ["dragon"]
        assert resolve_targets(TargetSpec(type="self"), state, ActionOptions()) == []

    def test_specific(self, state: Any) -> None:
        """Test specific ids are filtered from the roster."""
        spec = TargetSpec(type="specific", ids=["kobold", "wizard", "ghost"])

        assert ids(resolve_targets(spec, state, ActionOptions())) == ["wizard", "kobold"]

    def test_selected(self, state: Any, fighter: Combatant) -> None:
        """Test selected uses the UI selection even with a spec."""
        options = ActionOptions(targets=[fighter])

        assert ids(resolve_targets(TargetSpec(type="selected"), state, options)) == ["fighter"]

    def test_area_without_spatial_support(self, state: Any) -> None:
        """Test area selection is empty when the state has no spatial model."""
        spec = TargetSpec(type="area", area={"shape": "sphere", "size": 20})

        assert resolve_targets(spec, state, ActionOptions()) == []

    def test_area_with_spatial_support(self, make_state: Callable[..., Any]) -> None:
        """Test area selection delegates to the combat state."""
        state = make_state(area_ids=["wizard", "kobold"])
        spec = TargetSpec(type="area", area={"shape": "cone", "size": 15})

        assert ids(resolve_targets(spec, state, ActionOptions())) == ["wizard", "kobold"]


class TestRandomTargets:
    """Tests for random target selection."""

    def test_count(self, state: Any) -> None:
        """Test the requested number of distinct targets is picked."""
        spec = TargetSpec(type="random", count=2)

        picked = resolve_targets(spec, state, ActionOptions(rng=random.Random(3)))

        assert len(picked) == 2
        assert len(set(ids(picked))) == 2

    def test_count_larger_than_roster(self, state: Any) -> None:
        """Test the pick is capped at the roster size."""
        spec = TargetSpec(type="random", count=10)

        assert len(resolve_targets(spec, state, ActionOptions())) == 4

    def test_seeded_rng_is_reproducible(self, state: Any) -> None:
        """Test the random source controls the pick."""
        spec = TargetSpec(type="random", count=2)

        first = resolve_targets(spec, state, ActionOptions(rng=random.Random(11)))
        second = resolve_targets(spec, state, ActionOptions(rng=random.Random(11)))

        assert ids(first) == ids(second)

    def test_uniform_distribution(self, state: Any) -> None:
        """Test every combatant is picked first about equally often."""
        spec = TargetSpec(type="random", count=1)
        rng = random.Random(2024)
        counts = {"fighter": 0, "wizard": 0, "dragon": 0, "kobold": 0}

        for _ in range(4000):
            counts[resolve_targets(spec, state, ActionOptions(rng=rng))[0].id] += 1

        for count in counts.values():
            assert 850 <= count <= 1150
